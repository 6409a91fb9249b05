import numpy as np
import pytest

from body import Body, radius_for_mass


def test_body_stores_vectors_with_dtype():
    body = Body((0.5, -0.25), (1.0, 2.0), 4.0, 0.01)
    assert body.position.dtype == np.float32
    assert body.velocity.dtype == np.float32
    np.testing.assert_allclose(body.position, [0.5, -0.25])
    assert body.mass == 4.0

    body64 = Body((0.5, -0.25), (1.0, 2.0), 4.0, 0.01, dtype=np.float64)
    assert body64.position.dtype == np.float64


@pytest.mark.parametrize("mass, radius", [(0.0, 0.1), (-1.0, 0.1), (1.0, 0.0), (1.0, -0.5)])
def test_body_rejects_non_positive_mass_or_radius(mass, radius):
    with pytest.raises(ValueError):
        Body((0, 0), (0, 0), mass, radius)


def test_body_rejects_non_2d_vectors():
    with pytest.raises(ValueError):
        Body((0, 0, 0), (0, 0), 1.0, 0.1)


def test_radius_for_mass_is_cube_root_over_scale():
    assert radius_for_mass(8.0, 200.0) == pytest.approx(2.0 / 200.0)
    np.testing.assert_allclose(radius_for_mass(np.array([1.0, 27.0]), 10.0), [0.1, 0.3])


def test_from_mass_derives_radius_and_zero_velocity():
    body = Body.from_mass((0.1, 0.2), 64.0, 200.0)
    assert body.radius == pytest.approx(4.0 / 200.0)
    np.testing.assert_array_equal(body.velocity, [0.0, 0.0])


def test_kick_and_drift_update_in_place():
    body = Body((0.0, 0.0), (1.0, 0.0), 1.0, 0.1, dtype=np.float64)
    position = body.position
    body.kick(np.array([0.0, 2.0]), 0.5)
    np.testing.assert_allclose(body.velocity, [1.0, 1.0])
    body.drift(0.5)
    np.testing.assert_allclose(body.position, [0.5, 0.5])
    assert body.position is position


def test_repr_mentions_state():
    text = repr(Body((1.0, 2.0), (0.0, 0.0), 3.0, 0.5))
    assert "mass=3.0" in text
    assert "radius=0.5" in text
