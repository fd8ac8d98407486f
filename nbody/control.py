#!/usr/bin/env python3
"""
Control surface: the whole boundary between the engine and its UI/rendering
collaborators.

Reads return copies (frozen BodySnapshot tuples, immutable parameters), so a frame
can be drawn from a consistent state while the next tick mutates the real bodies.
Commands are forwarded to the Simulation, whose lock makes each one atomic with
respect to a tick.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from .data_models import BodySnapshot, CentralMass
from .parameters import SimulationParameters
from .presets import load_preset
from .simulation import Simulation

logger = logging.getLogger(__name__)


class ControlSurface:
    """Narrow command/query interface around one Simulation instance."""

    def __init__(self, simulation: Optional[Simulation] = None):
        self.simulation = simulation if simulation is not None else Simulation()

    # Queries

    def get_bodies(self) -> Tuple[BodySnapshot, ...]:
        return self.simulation.body_snapshots()

    def get_parameters(self) -> SimulationParameters:
        return self.simulation.parameters

    def is_paused(self) -> bool:
        return self.simulation.paused

    def get_central_mass(self) -> CentralMass:
        with self.simulation.lock:
            c = self.simulation.central
            return CentralMass(c.mass, c.position, c.color)

    def get_status(self, include_energy: bool = False) -> Dict[str, Any]:
        sim = self.simulation
        with sim.lock:
            status = {
                "paused": sim.paused,
                "bodies": sim.body_count,
                "sim_time": sim.sim_time,
                "steps": sim.step_count,
                "integrator": sim.integrator,
                "frame_duration": sim.last_frame_duration,
            }
            if include_energy:
                status["energy"] = sim.energy()
        return status

    # Commands

    def tick(self, frame_duration: Optional[float] = None) -> float:
        return self.simulation.tick(frame_duration)

    def pause(self) -> None:
        self.simulation.pause()

    def resume(self) -> None:
        self.simulation.resume()

    def toggle_pause(self) -> bool:
        return self.simulation.toggle_pause()

    def reset(self) -> None:
        self.simulation.reset()

    def reinitialize(self) -> None:
        self.simulation.reinitialize()

    def add_body(self, position, velocity_hint=None, mass: Optional[float] = None) -> int:
        return self.simulation.add_body(position, velocity_hint, mass)

    def add_heavy_body(self, position) -> int:
        return self.simulation.add_heavy_body(position)

    def set_parameter(self, name: str, value):
        return self.simulation.set_parameter(name, value)

    def set_integrator(self, name: str) -> None:
        self.simulation.set_integrator(name)

    def apply_preset(self, name_or_path: str, reinitialize: bool = True) -> str:
        """
        Load a preset on top of the current parameters. With reinitialize, a new disc
        is generated and becomes the reset target. Returns the preset's display name.
        """
        params, display = load_preset(name_or_path, base=self.simulation.parameters)
        logger.debug("Applying preset %s (reinitialize=%s)", display, reinitialize)
        self.simulation.set_parameters(params, reinitialize=reinitialize)
        return display
