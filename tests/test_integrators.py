import math

import pytest

from nbody.data_models import Body, CentralMass
from nbody.integrators import (
    INTEGRATORS,
    get_integrator,
    leapfrog_step,
    semi_implicit_euler_step,
)
from nbody.physics import NBodyPhysics, circular_orbit_velocity, orbital_period, total_energy


def _mirror_pair():
    return [Body((10.0, 3.0), (0.5, -1.0), 4.0), Body((-10.0, -3.0), (-0.5, 1.0), 4.0)]


@pytest.mark.parametrize("step", [semi_implicit_euler_step, leapfrog_step])
def test_updates_read_a_consistent_snapshot(step):
    # Point-symmetric pair: if the second body saw the first one's updated position
    # the symmetry would break.
    bodies = _mirror_pair()
    physics = NBodyPhysics(1.0)
    for _ in range(25):
        step(bodies, physics, None, 0.01)
    a, b = bodies
    assert a.position == (-b.position[0], -b.position[1])
    assert a.velocity == (-b.velocity[0], -b.velocity[1])


def test_semi_implicit_euler_ordering():
    # velocity first, then position with the new velocity
    body = Body((100.0, 0.0), (0.0, 0.0), 1.0)
    central = CentralMass(1000.0)
    physics = NBodyPhysics(1.0)
    (ax, ay), = physics.accelerations_for([body], central)
    semi_implicit_euler_step([body], physics, central, 0.1)
    assert body.velocity == pytest.approx((ax * 0.1, ay * 0.1))
    assert body.position == pytest.approx((100.0 + ax * 0.01, ay * 0.01))


@pytest.mark.parametrize("step", [semi_implicit_euler_step, leapfrog_step])
def test_empty_body_list_is_a_no_op(step):
    bodies = []
    step(bodies, NBodyPhysics(1.0), CentralMass(1000.0), 0.01)
    assert bodies == []


@pytest.mark.parametrize("name", list(INTEGRATORS))
def test_circular_orbit_keeps_its_radius(name):
    step = get_integrator(name)
    central = CentralMass(1000.0)
    softening, r, dt = 1.0, 100.0, 0.001
    v = circular_orbit_velocity(central.mass, r, softening)
    body = Body((r, 0.0), (0.0, v), 1.0)
    physics = NBodyPhysics(softening)
    steps = int(round(orbital_period(central.mass, r, softening) / dt))
    radii = []
    for _ in range(steps):
        step([body], physics, central, dt)
        radii.append(math.hypot(*body.position))
    assert max(abs(x - r) for x in radii) < 0.01 * r
    # back near the starting point after one period
    assert math.hypot(body.position[0] - r, body.position[1]) < 0.05 * r


def test_single_orbit_energy_does_not_drift():
    central = CentralMass(1000.0)
    v = circular_orbit_velocity(central.mass, 150.0, 1.0)
    bodies = [Body((150.0, 0.0), (0.0, v), 2.0)]
    physics = NBodyPhysics(1.0)
    e0 = total_energy(bodies, central, 1.0)
    for _ in range(2000):
        semi_implicit_euler_step(bodies, physics, central, 0.01)
    assert abs(total_energy(bodies, central, 1.0) - e0) < 1e-3 * abs(e0)


def test_unknown_integrator():
    with pytest.raises(ValueError):
        get_integrator("RK4")
