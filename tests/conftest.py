import numpy as np
import pytest

from config import SimulationConfig


@pytest.fixture
def config64():
    return SimulationConfig(precision=64)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
