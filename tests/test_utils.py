import math

import pytest

from vibenator.utils import ZERO, Vec2, circle_collide, clamp, direction, distance, normalize, rotate


def test_direction_is_unit_vector():
    d = direction(Vec2(0.0, 0.0), Vec2(3.0, 4.0))
    assert d.x == pytest.approx(0.6)
    assert d.y == pytest.approx(0.8)


def test_direction_between_same_points_is_zero():
    assert direction(Vec2(5.0, 5.0), Vec2(5.0, 5.0)) == ZERO


def test_normalize_zero_vector():
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_distance():
    assert distance(Vec2(1.0, 1.0), Vec2(4.0, 5.0)) == pytest.approx(5.0)


@pytest.mark.parametrize("value, expected", [(-3, 0), (5, 5), (12, 10)])
def test_clamp(value, expected):
    assert clamp(value, 0, 10) == expected


def test_rotate_quarter_turn():
    x, y = rotate(1.0, 0.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_circle_collide_requires_strict_overlap():
    assert circle_collide(0, 0, 5, 9, 0, 5)
    # touching edges do not count
    assert not circle_collide(0, 0, 5, 10, 0, 5)
