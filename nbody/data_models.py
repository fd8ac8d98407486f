#!/usr/bin/env python3
"""
Data models for the Solar System Formation Simulator.

This module defines the Body dataclass mutated by the integrator, the fixed
CentralMass every body orbits, and the frozen BodySnapshot handed to the
rendering side.

Units and usage
- position is in world units (pixels at zoom 1.0), velocity in world units per
  simulation time unit, mass is dimensionless.
- Bodies have no identity beyond their index in the simulation's body list.
- Access to Body instances is coordinated by Simulation using a lock; readers
  outside the engine only ever see BodySnapshot copies.
"""
from dataclasses import dataclass
from typing import Tuple

from .constants import BODY_COLOR, CENTER, CENTRAL_COLOR, MIN_BODY_RADIUS


def radius_for_mass(mass: float) -> float:
    """Visual radius grows slowly with mass and never drops below MIN_BODY_RADIUS."""
    return max(mass ** 0.3, MIN_BODY_RADIUS) if mass > 0 else MIN_BODY_RADIUS


@dataclass
class Body:
    """
    One orbiting particle.

    Fields:
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy)
    - mass: positive mass
    - color: RGB tuple used for rendering
    """
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    mass: float
    color: Tuple[int, int, int] = BODY_COLOR

    @property
    def radius(self) -> float:
        return radius_for_mass(self.mass)

    def copy(self) -> "Body":
        return Body(self.position, self.velocity, self.mass, self.color)

    def snapshot(self) -> "BodySnapshot":
        return BodySnapshot(self.position, self.velocity, self.mass, self.radius, self.color)

    @classmethod
    def from_snapshot(cls, snap: "BodySnapshot") -> "Body":
        return cls(snap.position, snap.velocity, snap.mass, snap.color)


@dataclass
class CentralMass:
    """The fixed attractor at the middle of the system. Never integrated."""
    mass: float
    position: Tuple[float, float] = CENTER
    color: Tuple[int, int, int] = CENTRAL_COLOR

    @property
    def radius(self) -> float:
        return radius_for_mass(self.mass)


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only copy of a body's state at the time it was read."""
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    mass: float
    radius: float
    color: Tuple[int, int, int] = BODY_COLOR
