import math

import pytest

from vibenator.config import DEFAULT_BALANCE, WeaponKind
from vibenator.entities import Player
from vibenator.utils import Vec2
from vibenator.weapons import (
    fire, fire_auto_aim, fire_directional, fire_radial, nearest_enemy, ready,
)

from .conftest import make_enemy

CFG = DEFAULT_BALANCE


def test_ready_needs_more_than_cadence_frames():
    assert not ready(8, 0, 8)
    assert ready(9, 0, 8)


def test_directional_defaults_to_up_when_player_never_moved():
    player = Player(x=500.0, y=500.0)
    (shot,) = fire(WeaponKind.DIRECTIONAL, player, [], CFG.directional)
    assert (shot.vx, shot.vy) == (0.0, -CFG.directional.bullet_speed)
    assert shot.radius == CFG.directional.bullet_radius
    assert shot.origin == "player"
    assert (shot.x, shot.y) == (500.0, 500.0)


def test_directional_follows_last_heading():
    (shot,) = fire_directional(Vec2(10.0, 10.0), Vec2(1.0, 0.0), CFG.directional)
    assert (shot.vx, shot.vy) == pytest.approx((CFG.directional.bullet_speed, 0.0))


def test_radial_emits_even_ring():
    shots = fire_radial(Vec2(300.0, 300.0), CFG.radial)
    assert len(shots) == 8
    speed = CFG.radial.bullet_speed
    for i, shot in enumerate(shots):
        assert math.hypot(shot.vx, shot.vy) == pytest.approx(speed)
        angle = math.atan2(shot.vy, shot.vx) % math.tau
        expected = 2 * math.pi * i / 8
        assert math.isclose(angle, expected, abs_tol=1e-9) or math.isclose(angle, expected + math.tau, abs_tol=1e-9)


def test_auto_aim_without_enemies_falls_back_to_up():
    (shot,) = fire_auto_aim(Vec2(500.0, 500.0), [], CFG.auto_aim)
    assert (shot.vx, shot.vy) == (0.0, -CFG.auto_aim.bullet_speed)


def test_auto_aim_targets_nearest_enemy():
    far = make_enemy(x=600, y=500)
    near = make_enemy(x=500, y=550)
    (shot,) = fire_auto_aim(Vec2(500.0, 500.0), [far, near], CFG.auto_aim)
    assert (shot.vx, shot.vy) == pytest.approx((0.0, CFG.auto_aim.bullet_speed))


def test_auto_aim_enemy_on_player_still_fires():
    (shot,) = fire_auto_aim(Vec2(500.0, 500.0), [make_enemy(x=500, y=500)], CFG.auto_aim)
    assert (shot.vx, shot.vy) == (0.0, -CFG.auto_aim.bullet_speed)


def test_nearest_enemy_empty_is_none():
    assert nearest_enemy(Vec2(0.0, 0.0), []) is None


def test_nearest_enemy_tie_goes_to_first():
    a = make_enemy(x=10, y=0)
    b = make_enemy(x=-10, y=0)
    assert nearest_enemy(Vec2(0.0, 0.0), [a, b]) is a


def test_fire_accepts_string_kind():
    shots = fire("radial", Player(x=1.0, y=1.0), [], CFG.radial)
    assert len(shots) == CFG.radial.num_projectiles


def test_fire_rejects_unknown_kind():
    with pytest.raises(ValueError):
        fire("laser", Player(x=1.0, y=1.0), [], CFG.directional)
