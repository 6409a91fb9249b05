import numpy as np
import pytest

from body import Body
from config import SimulationConfig
from diagnostics import (center_of_mass, kinetic_energy, nonfinite_count, potential_energy,
                         summarize, total_momentum)
from world import World


@pytest.fixture
def pair():
    return [Body((-1.0, 0.0), (0.0, 1.0), 1.0, 0.01, dtype=np.float64),
            Body((1.0, 0.0), (0.0, -0.5), 2.0, 0.01, dtype=np.float64)]


def test_total_momentum(pair):
    np.testing.assert_allclose(total_momentum(pair), [0.0, 0.0])


def test_center_of_mass(pair):
    np.testing.assert_allclose(center_of_mass(pair), [1.0 / 3.0, 0.0])
    np.testing.assert_array_equal(center_of_mass([]), [0.0, 0.0])


def test_kinetic_energy(pair):
    assert kinetic_energy(pair) == pytest.approx(0.5 * 1.0 * 1.0 + 0.5 * 2.0 * 0.25)


def test_potential_energy_skips_softened_pairs(pair):
    assert potential_energy(pair, 1.0, 1e-4) == pytest.approx(-1.0 * 2.0 / 2.0)
    close = [Body((0.0, 0.0), (0, 0), 1.0, 0.01), Body((0.001, 0.0), (0, 0), 1.0, 0.01)]
    assert potential_energy(close, 1.0, 1e-4) == 0.0


def test_nonfinite_count(pair):
    assert nonfinite_count(pair) == 0
    pair[0].position[0] = np.nan
    pair[1].velocity[1] = np.inf
    assert nonfinite_count(pair) == 2


def test_summarize_reports_energy_and_frame(pair):
    world = World(SimulationConfig(g=1.0, precision=64), pair)
    world.tick(0.001)
    stats = summarize(world)
    assert stats["frame"] == 1
    assert stats["energy"] == pytest.approx(stats["kinetic"] + stats["potential"])
    assert stats["momentum"] < 1e-12
    assert stats["nonfinite"] == 0
