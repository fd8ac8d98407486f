import pytest

from nbody.control import ControlSurface
from nbody.parameters import SimulationParameters
from nbody.simulation import Simulation


@pytest.fixture
def small_params():
    return SimulationParameters(particle_count=10)


@pytest.fixture
def small_sim(small_params):
    return Simulation(small_params, seed=42)


@pytest.fixture
def control(small_sim):
    return ControlSurface(small_sim)
