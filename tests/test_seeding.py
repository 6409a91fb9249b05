import numpy as np
import pytest

from config import SimulationConfig
from seeding import generate_bodies, make_rng


def test_generates_configured_count_at_rest():
    bodies = generate_bodies(make_rng(0), SimulationConfig(n_bodies=200))
    assert len(bodies) == 200
    for body in bodies:
        np.testing.assert_array_equal(body.velocity, [0.0, 0.0])


def test_masses_are_log_uniform_between_1_and_100():
    config = SimulationConfig(n_bodies=2000)
    masses = np.array([b.mass for b in generate_bodies(make_rng(7), config)])
    assert np.all(masses >= 1.0)
    assert np.all(masses <= 100.0)
    # log10(mass) is uniform on [0, 2], so about half the masses lie below 10
    assert np.mean(masses < 10.0) == pytest.approx(0.5, abs=0.05)


def test_radii_follow_cube_root_of_mass():
    config = SimulationConfig(n_bodies=100)
    for body in generate_bodies(make_rng(3), config):
        assert body.radius > 0
        assert body.radius == pytest.approx(body.mass ** (1.0 / 3.0) / config.radius_scale)


def test_positions_fall_in_configured_square():
    config = SimulationConfig(n_bodies=500)
    positions = np.array([b.position for b in generate_bodies(make_rng(11), config)])
    assert positions.dtype == np.float32
    assert np.all(positions >= np.float32(-0.8)) and np.all(positions <= np.float32(0.8))


def test_same_seed_gives_same_bodies():
    config = SimulationConfig(n_bodies=20)
    first = generate_bodies(make_rng(42), config)
    second = generate_bodies(make_rng(42), config)
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a.position, b.position)
        assert a.mass == b.mass


def test_zero_bodies():
    assert generate_bodies(make_rng(0), SimulationConfig(n_bodies=0)) == []
