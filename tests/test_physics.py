import math

import pytest

from nbody.constants import G
from nbody.data_models import Body, CentralMass
from nbody.physics import (
    NBodyPhysics,
    central_acceleration,
    circular_orbit_velocity,
    kinetic_energy,
    orbital_period,
    pairwise_acceleration,
    potential_energy,
    total_energy,
)


def _peak_acceleration(mass, softening):
    # max over r of r / (r^2 + eps^2)^(3/2) is 2 / (3 * sqrt(3) * eps^2)
    return G * mass * 2.0 / (3.0 * math.sqrt(3.0) * softening ** 2)


@pytest.mark.parametrize("softening", [0.1, 1.0, 10.0])
@pytest.mark.parametrize("separation", [0.0, 1e-12, 1e-3, 0.1, 1.0, 50.0])
def test_acceleration_is_finite_and_bounded(softening, separation):
    mass = 100.0
    ax, ay = pairwise_acceleration((0.0, 0.0), (separation, 0.0), mass, softening)
    magnitude = math.hypot(ax, ay)
    assert math.isfinite(magnitude)
    assert magnitude <= _peak_acceleration(mass, softening) * (1 + 1e-9)


def test_acceleration_points_toward_other_body():
    ax, ay = pairwise_acceleration((0.0, 0.0), (0.0, 10.0), 5.0, 1.0)
    assert ax == 0.0
    assert ay > 0.0
    expected = G * 5.0 * 10.0 / (100.0 + 1.0) ** 1.5
    assert ay == pytest.approx(expected)


def test_central_acceleration_uses_same_law():
    central = CentralMass(1000.0)
    assert central_acceleration((30.0, 40.0), central, 2.0) == \
        pairwise_acceleration((30.0, 40.0), (0.0, 0.0), 1000.0, 2.0)


def test_coincident_bodies_do_not_blow_up():
    physics = NBodyPhysics(softening=0.1)
    acc = physics.compute_accelerations([(5.0, 5.0), (5.0, 5.0)], [10.0, 10.0])
    assert acc == [(0.0, 0.0), (0.0, 0.0)]


def test_pair_forces_are_equal_and_opposite():
    physics = NBodyPhysics(softening=1.0)
    masses = [2.0, 7.0]
    (a1x, a1y), (a2x, a2y) = physics.compute_accelerations([(0.0, 0.0), (3.0, 4.0)], masses)
    assert masses[0] * a1x == pytest.approx(-masses[1] * a2x)
    assert masses[0] * a1y == pytest.approx(-masses[1] * a2y)


def test_total_acceleration_is_sum_of_pairs_and_central():
    physics = NBodyPhysics(softening=1.0)
    central = CentralMass(500.0)
    positions = [(100.0, 0.0), (0.0, 120.0), (-80.0, -30.0)]
    masses = [3.0, 4.0, 5.0]
    acc = physics.compute_accelerations(positions, masses, central)
    for i, p in enumerate(positions):
        ex, ey = central_acceleration(p, central, 1.0)
        for j, q in enumerate(positions):
            if i != j:
                dx, dy = pairwise_acceleration(p, q, masses[j], 1.0)
                ex += dx
                ey += dy
        assert acc[i][0] == pytest.approx(ex)
        assert acc[i][1] == pytest.approx(ey)


def test_accelerations_for_reads_bodies():
    physics = NBodyPhysics(1.0)
    bodies = [Body((10.0, 0.0), (0.0, 0.0), 1.0), Body((-10.0, 0.0), (0.0, 0.0), 1.0)]
    assert physics.accelerations_for(bodies) == physics.compute_accelerations(
        [(10.0, 0.0), (-10.0, 0.0)], [1.0, 1.0])


def test_set_softening_never_negative():
    physics = NBodyPhysics()
    physics.set_softening(-3)
    assert physics.softening == 0.0


def test_circular_velocity_balances_softened_force():
    central = CentralMass(1000.0)
    r, eps = 150.0, 2.0
    v = circular_orbit_velocity(central.mass, r, eps)
    ax, _ = central_acceleration((r, 0.0), central, eps)
    assert v * v / r == pytest.approx(-ax)
    assert circular_orbit_velocity(1000.0, 100.0) == pytest.approx(math.sqrt(G * 1000.0 / 100.0))
    assert circular_orbit_velocity(1000.0, 0.0) == 0.0


def test_orbital_period():
    v = circular_orbit_velocity(1000.0, 100.0)
    assert orbital_period(1000.0, 100.0) == pytest.approx(2 * math.pi * 100.0 / v)
    assert orbital_period(0.0, 100.0) == math.inf


def test_energy_components():
    central = CentralMass(1000.0)
    bodies = [Body((100.0, 0.0), (0.0, 2.0), 3.0), Body((0.0, 100.0), (1.0, 0.0), 2.0)]
    assert kinetic_energy(bodies) == pytest.approx(0.5 * 3.0 * 4.0 + 0.5 * 2.0 * 1.0)
    pe = potential_energy(bodies, central, 1.0)
    expected = (-G * 3.0 * 2.0 / math.sqrt(100.0 ** 2 * 2 + 1.0)
                - G * 3.0 * 1000.0 / math.sqrt(100.0 ** 2 + 1.0)
                - G * 2.0 * 1000.0 / math.sqrt(100.0 ** 2 + 1.0))
    assert pe == pytest.approx(expected)
    assert total_energy(bodies, central, 1.0) == pytest.approx(kinetic_energy(bodies) + pe)
