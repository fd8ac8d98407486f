#!/usr/bin/env python3
"""
Time integrators.

Both schemes are symplectic, so total energy oscillates around its initial value
instead of drifting away over long runs. Each one computes every body's
acceleration from a single snapshot of positions before any body is written.

- Semi-implicit Euler: v += a*dt, then p += v*dt using the new velocity.
- Leapfrog (kick-drift-kick): half kick, full drift, recompute, half kick. Second
  order, at the cost of a second force pass per step.
"""
from typing import Callable, Dict, List

from .data_models import Body, CentralMass
from .physics import NBodyPhysics

StepFunction = Callable[[List[Body], NBodyPhysics, CentralMass, float], None]


def semi_implicit_euler_step(bodies: List[Body], physics: NBodyPhysics,
                             central: CentralMass, dt: float) -> None:
    """Advance bodies in place by dt."""
    if not bodies:
        return
    accelerations = physics.accelerations_for(bodies, central)
    for body, (ax, ay) in zip(bodies, accelerations):
        vx = body.velocity[0] + ax * dt
        vy = body.velocity[1] + ay * dt
        body.velocity = (vx, vy)
        body.position = (body.position[0] + vx * dt, body.position[1] + vy * dt)


def leapfrog_step(bodies: List[Body], physics: NBodyPhysics,
                  central: CentralMass, dt: float) -> None:
    """Kick-drift-kick leapfrog; advances bodies in place by dt."""
    if not bodies:
        return
    half = dt * 0.5
    accelerations = physics.accelerations_for(bodies, central)
    for body, (ax, ay) in zip(bodies, accelerations):
        vx = body.velocity[0] + ax * half
        vy = body.velocity[1] + ay * half
        body.velocity = (vx, vy)
        body.position = (body.position[0] + vx * dt, body.position[1] + vy * dt)

    accelerations = physics.accelerations_for(bodies, central)
    for body, (ax, ay) in zip(bodies, accelerations):
        body.velocity = (body.velocity[0] + ax * half, body.velocity[1] + ay * half)


INTEGRATORS: Dict[str, StepFunction] = {
    "Semi-implicit Euler": semi_implicit_euler_step,
    "Leapfrog": leapfrog_step,
}
DEFAULT_INTEGRATOR = "Semi-implicit Euler"


def get_integrator(name: str) -> StepFunction:
    try:
        return INTEGRATORS[name]
    except KeyError:
        raise ValueError("Unknown integrator: " + name) from None
