#!/usr/bin/env python3
"""
Live-tunable simulation parameters.

Every parameter is a flat named field with an explicit closed range. Values coming
from the control surface are clamped into range, never rejected; the only inputs
refused are ones that are not numbers at all.
"""
import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, NamedTuple, Union

from .utils import try_float
from .vector_utils import clamp

logger = logging.getLogger(__name__)

Number = Union[int, float]


class ParameterRange(NamedTuple):
    label: str
    low: float
    high: float
    integer: bool = False


PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "time_speed": ParameterRange("Time Speed", 0.1, 10.0),
    "particle_count": ParameterRange("Particles", 10, 1000, integer=True),
    "velocity_multiplier": ParameterRange("Velocity", 0.1, 5.0),
    "base_mass": ParameterRange("Mass", 0.1, 100.0),
    "softening": ParameterRange("Softening", 0.1, 10.0),
    "time_step": ParameterRange("Time Step", 0.001, 0.1),
    "central_mass": ParameterRange("Central Mass", 100.0, 5000.0),
}

# camelCase spellings used by UI/event code
_ALIASES = {
    "timeSpeed": "time_speed",
    "particleCount": "particle_count",
    "velocityMultiplier": "velocity_multiplier",
    "baseMass": "base_mass",
    "timeStep": "time_step",
    "centralMass": "central_mass",
}


def canonical_name(name: str) -> str:
    """Map a parameter name (snake_case or camelCase) to its field name."""
    key = _ALIASES.get(name, name)
    if key not in PARAMETER_RANGES:
        raise KeyError(f"Unknown simulation parameter: {name!r}")
    return key


def clamp_parameter(name: str, value: Any) -> Number:
    """
    Coerce and clamp a raw value for the named parameter.

    Raises ValueError if value cannot be read as a finite number; out-of-range
    numbers are clamped silently.
    """
    key = canonical_name(name)
    bounds = PARAMETER_RANGES[key]
    val = try_float(value)
    if val is None or math.isnan(val):
        raise ValueError(f"Non-numeric value for {key}: {value!r}")
    clamped = clamp(val, bounds.low, bounds.high)
    if clamped != val:
        logger.debug("Clamped %s from %r to %r", key, val, clamped)
    if bounds.integer:
        return int(clamp(round(clamped), bounds.low, bounds.high))
    return float(clamped)


@dataclass(frozen=True)
class SimulationParameters:
    """
    Immutable parameter set. Construction clamps every field, so an instance is
    always in range; use with_value() to derive a modified copy.
    """
    time_speed: float = 1.0
    particle_count: int = 100
    velocity_multiplier: float = 1.0
    base_mass: float = 3.0
    softening: float = 1.0
    time_step: float = 0.01
    central_mass: float = 1000.0

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, clamp_parameter(f.name, getattr(self, f.name)))

    @property
    def dt(self) -> float:
        """Simulation time advanced per tick."""
        return self.time_step * self.time_speed

    def with_value(self, name: str, value: Any) -> "SimulationParameters":
        key = canonical_name(name)
        data = asdict(self)
        data[key] = clamp_parameter(key, value)
        return SimulationParameters(**data)

    def as_dict(self) -> Dict[str, Number]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: "SimulationParameters" = None) -> "SimulationParameters":
        """
        Build parameters from a mapping (e.g. a JSON preset), starting from base.

        Unknown keys and non-numeric values are skipped with a warning.
        """
        params = base if base is not None else cls()
        for name, value in data.items():
            try:
                params = params.with_value(name, value)
            except KeyError:
                logger.warning("Ignoring unknown parameter %r", name)
            except ValueError as e:
                logger.warning("Ignoring parameter %r: %s", name, e)
        return params


DEFAULT_PARAMETERS = SimulationParameters()
