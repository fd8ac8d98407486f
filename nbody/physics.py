#!/usr/bin/env python3
"""
Core Physics Engine for the Solar System Formation Simulator

Responsibilities
- Compute pairwise gravitational accelerations with Plummer softening.
- Add the attraction of the fixed central mass.
- Provide energy diagnostics and small helpers for orbital set-up.

Units and conventions
- World positions are in pixels at zoom 1.0; time is in simulation time units.
- G is a tuning constant (see constants.py), not the SI value.

Numerical notes
- Softening: adds eps^2 to r^2 before raising to the 3/2 power, so the acceleration
  stays finite even at zero separation. The matching potential is the Plummer
  potential -G m1 m2 / sqrt(r^2 + eps^2), which is what the energy helpers use.
- Complexity: acceleration computation is O(N^2) per step (direct summation). This
  bounds interactive particle counts at about a thousand.

Threading
- This module is pure compute and holds no state besides the softening parameter.
  Simulation guards the body list with a lock and hands in position snapshots.
"""

import math
from typing import List, Sequence, Tuple

from .constants import G
from .data_models import Body, CentralMass

Vec2 = Tuple[float, float]


def pairwise_acceleration(p_self: Vec2, p_other: Vec2, m_other: float, softening: float) -> Vec2:
    """
    Acceleration on a body at p_self caused by a mass m_other at p_other:

        a = G * m_other * d / (|d|^2 + eps^2)^(3/2),   d = p_other - p_self
    """
    dx = p_other[0] - p_self[0]
    dy = p_other[1] - p_self[1]
    r_squared_soft = dx * dx + dy * dy + softening * softening
    if r_squared_soft == 0.0:
        return (0.0, 0.0)
    inv_r_cubed = 1.0 / (r_squared_soft * math.sqrt(r_squared_soft))
    k = G * m_other * inv_r_cubed
    return (dx * k, dy * k)


def central_acceleration(position: Vec2, central: CentralMass, softening: float) -> Vec2:
    """Acceleration toward the fixed central mass, same softened law."""
    return pairwise_acceleration(position, central.position, central.mass, softening)


class NBodyPhysics:
    """
    Direct-summation gravity with softening and a fixed central attractor.

    The acceleration on body i is

        a_i = sum_j G * m_j * r_ij / (|r_ij|^2 + eps^2)^(3/2)  +  central term

    where r_ij = (x_j - x_i, y_j - y_i). Self-interaction is skipped.
    """

    def __init__(self, softening: float = 1.0):
        self.softening = max(0.0, float(softening))

    def set_softening(self, softening: float) -> None:
        self.softening = max(0.0, float(softening))

    def compute_accelerations(self, positions: Sequence[Vec2], masses: Sequence[float],
                              central: CentralMass = None) -> List[Vec2]:
        """
        Compute accelerations for every body from one consistent set of positions.

        Only the given positions are read and a fresh list is returned, so callers can
        take a snapshot, compute, and only then write back.

        Args:
            positions: (x, y) for each body.
            masses: mass for each body, same order.
            central: optional fixed attractor.

        Returns:
            List of (ax, ay), same order as inputs.
        """
        n = len(positions)
        eps_squared = self.softening * self.softening
        accelerations: List[Vec2] = []

        if central is not None:
            cx, cy = central.position
            gm_central = G * central.mass

        for i in range(n):
            ax_total, ay_total = 0.0, 0.0
            xi, yi = positions[i]

            for j in range(n):
                if i == j:
                    continue
                xj, yj = positions[j]
                dx = xj - xi
                dy = yj - yi
                r_squared_soft = dx * dx + dy * dy + eps_squared
                if r_squared_soft == 0.0:
                    continue  # coincident bodies with zero softening
                inv_r_cubed = 1.0 / (r_squared_soft * math.sqrt(r_squared_soft))
                k = G * masses[j] * inv_r_cubed
                ax_total += dx * k
                ay_total += dy * k

            if central is not None:
                dx = cx - xi
                dy = cy - yi
                r_squared_soft = dx * dx + dy * dy + eps_squared
                if r_squared_soft > 0.0:
                    k = gm_central / (r_squared_soft * math.sqrt(r_squared_soft))
                    ax_total += dx * k
                    ay_total += dy * k

            accelerations.append((ax_total, ay_total))

        return accelerations

    def accelerations_for(self, bodies: Sequence[Body], central: CentralMass = None) -> List[Vec2]:
        return self.compute_accelerations([b.position for b in bodies], [b.mass for b in bodies], central)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * b.mass * (b.velocity[0] ** 2 + b.velocity[1] ** 2) for b in bodies)


def potential_energy(bodies: Sequence[Body], central: CentralMass, softening: float) -> float:
    """Softened potential energy of all pairs plus every body in the central field."""
    eps_squared = softening * softening
    total = 0.0
    n = len(bodies)
    for i in range(n):
        xi, yi = bodies[i].position
        mi = bodies[i].mass
        for j in range(i + 1, n):
            xj, yj = bodies[j].position
            r_soft = math.sqrt((xj - xi) ** 2 + (yj - yi) ** 2 + eps_squared)
            if r_soft > 0.0:
                total -= G * mi * bodies[j].mass / r_soft
        if central is not None:
            cx, cy = central.position
            r_soft = math.sqrt((cx - xi) ** 2 + (cy - yi) ** 2 + eps_squared)
            if r_soft > 0.0:
                total -= G * mi * central.mass / r_soft
    return total


def total_energy(bodies: Sequence[Body], central: CentralMass, softening: float) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, central, softening)


def circular_orbit_velocity(central_mass: float, orbital_radius: float, softening: float = 0.0) -> float:
    """
    Speed of a circular orbit around a point mass in the softened potential.

    The softened force G*M*r / (r^2 + eps^2)^(3/2) must equal v^2 / r, so

        v = r * sqrt(G * M / (r^2 + eps^2)^(3/2))

    which reduces to sqrt(G * M / r) for eps = 0.
    """
    if orbital_radius <= 0 or central_mass <= 0:
        return 0.0
    r_squared_soft = orbital_radius * orbital_radius + softening * softening
    return orbital_radius * math.sqrt(G * central_mass / (r_squared_soft * math.sqrt(r_squared_soft)))


def orbital_period(central_mass: float, orbital_radius: float, softening: float = 0.0) -> float:
    """Time for one circular orbit at the given radius (inf if there is no orbit)."""
    v = circular_orbit_velocity(central_mass, orbital_radius, softening)
    if v <= 0:
        return math.inf
    return 2.0 * math.pi * orbital_radius / v
