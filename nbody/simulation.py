#!/usr/bin/env python3
"""
Simulation state machine.

Simulation owns the body list, the central mass, the parameter set, the
Running/Paused flag, and the single initial-condition snapshot. It is shared
between the viewport thread (which ticks it once per frame) and the control panel
(which issues commands), so every public method takes the same re-entrant lock:
commands land between ticks, never inside one.

States
- Running: tick() advances every body by time_step * time_speed.
- Paused: tick() is a no-op; commands still apply.
"""
import logging
import random
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .constants import HEAVY_BODY_FACTOR
from .data_models import Body, BodySnapshot, CentralMass
from .initial_conditions import generate_disc, orbital_velocity_at
from .integrators import DEFAULT_INTEGRATOR, get_integrator
from .parameters import DEFAULT_PARAMETERS, SimulationParameters, canonical_name
from .physics import NBodyPhysics, total_energy
from .vector_utils import vec_scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitialConditionSnapshot:
    """Bodies and parameters captured at start-up or the last reinitialize()."""
    bodies: Tuple[BodySnapshot, ...]
    parameters: SimulationParameters


class Simulation:
    """
    Shared simulation state with lock-guarded commands.

    Args:
        parameters: starting parameters (defaults if omitted).
        bodies: explicit starting bodies; a disc is generated from parameters if omitted.
        seed: seed for disc generation, for reproducible runs.
        start_paused: begin in the Paused state.
        integrator: name of a scheme in integrators.INTEGRATORS.
    """

    def __init__(self, parameters: Optional[SimulationParameters] = None,
                 bodies: Optional[Sequence[Body]] = None, seed: Optional[int] = None,
                 start_paused: bool = False, integrator: str = DEFAULT_INTEGRATOR):
        self.lock = threading.RLock()
        self._rng = random.Random(seed)
        self._params = parameters if parameters is not None else DEFAULT_PARAMETERS
        self.central = CentralMass(self._params.central_mass)
        self.physics = NBodyPhysics(self._params.softening)
        self._step = get_integrator(integrator)
        self._integrator_name = integrator
        self._paused = bool(start_paused)

        if bodies is None:
            self._bodies: List[Body] = generate_disc(self._params, self.central, self._rng)
        else:
            self._bodies = [b.copy() for b in bodies]

        self.sim_time = 0.0
        self.step_count = 0
        self.last_frame_duration: Optional[float] = None
        self._snapshot = self._capture()
        logger.info("Simulation initialized with %d bodies (%s)", len(self._bodies), integrator)

    # -----------------------
    # Read-only state
    # -----------------------

    @property
    def parameters(self) -> SimulationParameters:
        with self.lock:
            return self._params

    @property
    def paused(self) -> bool:
        with self.lock:
            return self._paused

    @property
    def bodies(self) -> List[Body]:
        """Copies of the current bodies; mutating them does not affect the simulation."""
        with self.lock:
            return [b.copy() for b in self._bodies]

    @property
    def body_count(self) -> int:
        with self.lock:
            return len(self._bodies)

    @property
    def snapshot(self) -> InitialConditionSnapshot:
        with self.lock:
            return self._snapshot

    @property
    def integrator(self) -> str:
        with self.lock:
            return self._integrator_name

    def body_snapshots(self) -> Tuple[BodySnapshot, ...]:
        with self.lock:
            return tuple(b.snapshot() for b in self._bodies)

    def energy(self) -> float:
        with self.lock:
            return total_energy(self._bodies, self.central, self._params.softening)

    # -----------------------
    # State transitions
    # -----------------------

    def pause(self) -> None:
        with self.lock:
            if not self._paused:
                logger.debug("Paused at t=%.3f", self.sim_time)
            self._paused = True

    def resume(self) -> None:
        with self.lock:
            if self._paused:
                logger.debug("Resumed at t=%.3f", self.sim_time)
            self._paused = False

    def toggle_pause(self) -> bool:
        """Flip Running/Paused; returns the new paused flag."""
        with self.lock:
            if self._paused:
                self.resume()
            else:
                self.pause()
            return self._paused

    def reset(self) -> None:
        """Restore bodies and parameters from the snapshot. The pause flag is left alone."""
        with self.lock:
            self._bodies = [Body.from_snapshot(s) for s in self._snapshot.bodies]
            self._apply_parameters(self._snapshot.parameters)
            self.sim_time = 0.0
            self.step_count = 0
            logger.info("Reset to initial conditions (%d bodies)", len(self._bodies))

    def reinitialize(self) -> None:
        """Generate a fresh disc from the current parameters and make it the new snapshot."""
        with self.lock:
            self._regenerate()
            self.sim_time = 0.0
            self.step_count = 0
            self._snapshot = self._capture()
            logger.info("Reinitialized with %d bodies", len(self._bodies))

    def tick(self, frame_duration: Optional[float] = None) -> float:
        """
        Advance one step of time_step * time_speed if Running.

        frame_duration is the caller's wall-clock frame time; it is recorded for the
        HUD but does not scale the step. Returns the simulation time advanced.
        """
        with self.lock:
            self.last_frame_duration = frame_duration
            if self._paused or not self._bodies:
                return 0.0
            dt = self._params.dt
            self._step(self._bodies, self.physics, self.central, dt)
            self.sim_time += dt
            self.step_count += 1
            return dt

    def add_body(self, position, velocity_hint=None, mass: Optional[float] = None) -> int:
        """
        Append a body at position and return its index.

        Mass defaults to base_mass. The velocity is velocity_hint scaled by
        velocity_multiplier or, without a hint, a circular orbit around the central
        mass scaled the same way. The snapshot is not touched, so reset() drops it.
        """
        with self.lock:
            params = self._params
            if mass is None or not mass > 0:
                if mass is not None:
                    logger.warning("Non-positive mass %r replaced with base mass", mass)
                mass = params.base_mass
            position = (float(position[0]), float(position[1]))
            if velocity_hint is None:
                velocity = orbital_velocity_at(position, self.central, params)
            else:
                velocity = vec_scale((float(velocity_hint[0]), float(velocity_hint[1])),
                                     params.velocity_multiplier)
            self._bodies.append(Body(position, velocity, float(mass)))
            logger.debug("Added body at (%.1f, %.1f) mass=%.2f", position[0], position[1], mass)
            return len(self._bodies) - 1

    def add_heavy_body(self, position) -> int:
        """Drop a heavy body (base_mass * HEAVY_BODY_FACTOR) at rest."""
        with self.lock:
            return self.add_body(position, velocity_hint=(0.0, 0.0),
                                 mass=self._params.base_mass * HEAVY_BODY_FACTOR)

    def set_parameter(self, name: str, value):
        """
        Clamp and store a parameter; returns the value actually stored.

        Unknown names raise KeyError. Values that are not numbers are ignored.
        A changed particle_count regenerates the body list without touching the
        snapshot.
        """
        with self.lock:
            key = canonical_name(name)
            old = self._params
            try:
                new = old.with_value(key, value)
            except ValueError as e:
                logger.warning("Ignoring %s: %s", key, e)
                return getattr(old, key)
            self._apply_parameters(new)
            if key == "particle_count" and new.particle_count != old.particle_count:
                self._regenerate()
                logger.info("Regenerated %d bodies", len(self._bodies))
            return getattr(new, key)

    def set_parameters(self, params: SimulationParameters, reinitialize: bool = False) -> None:
        """
        Replace the whole parameter set (e.g. from a preset).

        With reinitialize, one fresh disc is generated and becomes the new snapshot;
        otherwise the bodies are regenerated only when particle_count changed.
        """
        with self.lock:
            old = self._params
            self._apply_parameters(params)
            if reinitialize:
                self.reinitialize()
            elif params.particle_count != old.particle_count:
                self._regenerate()

    def set_integrator(self, name: str) -> None:
        with self.lock:
            self._step = get_integrator(name)
            self._integrator_name = name
            logger.debug("Integrator set to %s", name)

    # -----------------------
    # Internals (call with lock held)
    # -----------------------

    def _apply_parameters(self, params: SimulationParameters) -> None:
        self._params = params
        self.central.mass = params.central_mass
        self.physics.set_softening(params.softening)

    def _regenerate(self) -> None:
        self._bodies = generate_disc(self._params, self.central, self._rng)

    def _capture(self) -> InitialConditionSnapshot:
        return InitialConditionSnapshot(tuple(b.snapshot() for b in self._bodies), self._params)
