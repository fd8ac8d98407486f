"""
Engine for the Solar System Formation Simulator: softened N-body gravity around a
fixed central mass, symplectic integration, and a lock-guarded simulation state
machine driven through ControlSurface.
"""
from .control import ControlSurface
from .data_models import Body, BodySnapshot, CentralMass
from .parameters import DEFAULT_PARAMETERS, PARAMETER_RANGES, SimulationParameters
from .simulation import InitialConditionSnapshot, Simulation

__all__ = [
    "Body",
    "BodySnapshot",
    "CentralMass",
    "ControlSurface",
    "DEFAULT_PARAMETERS",
    "InitialConditionSnapshot",
    "PARAMETER_RANGES",
    "Simulation",
    "SimulationParameters",
]

__version__ = "0.1.0"
