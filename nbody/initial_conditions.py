#!/usr/bin/env python3
"""
Initial conditions: a disc of bodies on near-circular orbits around the central mass.

Bodies are placed at a uniformly random angle and a radius in
[SPAWN_RADIUS_MIN, SPAWN_RADIUS_MAX), with masses drawn around base_mass and
tangential speed equal to the circular-orbit speed scaled by velocity_multiplier.
"""
import math
import random
from typing import List, Optional

from .constants import MASS_SPREAD, SPAWN_RADIUS_MAX, SPAWN_RADIUS_MIN
from .data_models import Body, CentralMass
from .parameters import SimulationParameters
from .physics import circular_orbit_velocity
from .vector_utils import vec_add, vec_norm, vec_perp, vec_scale, vec_dist, vec_sub


def orbital_velocity_at(position, central: CentralMass, params: SimulationParameters):
    """Counter-clockwise circular-orbit velocity at position, scaled by velocity_multiplier."""
    r = vec_dist(central.position, position)
    if r == 0:
        return (0.0, 0.0)
    speed = circular_orbit_velocity(central.mass, r, params.softening) * params.velocity_multiplier
    tangent = vec_perp(vec_norm(vec_sub(position, central.position)))
    return vec_scale(tangent, speed)


def generate_disc(params: SimulationParameters, central: CentralMass,
                  rng: Optional[random.Random] = None) -> List[Body]:
    """Synthesize params.particle_count bodies orbiting central."""
    rng = rng or random.Random()
    lo, hi = MASS_SPREAD
    bodies: List[Body] = []
    for _ in range(params.particle_count):
        distance = rng.uniform(SPAWN_RADIUS_MIN, SPAWN_RADIUS_MAX)
        angle = rng.uniform(0.0, 2.0 * math.pi)
        position = vec_add(central.position, (distance * math.cos(angle), distance * math.sin(angle)))
        mass = params.base_mass * rng.uniform(lo, hi)
        bodies.append(Body(position, orbital_velocity_at(position, central, params), mass))
    return bodies
