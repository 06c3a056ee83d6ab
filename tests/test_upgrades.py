import random

from vibenator.config import DEFAULT_BALANCE
from vibenator.entities import Player
from vibenator.upgrades import (
    DOUBLE_SCORE, EXTRA_LIFE, ONE_SHOT, RAPID_FIRE, RECOMPUTED, SPEED_UP, UPGRADES,
    apply_one_shot, derive_stats, offer_upgrades,
)

CFG = DEFAULT_BALANCE


def test_upgrade_classes_partition_the_set():
    assert RECOMPUTED.isdisjoint(ONE_SHOT)
    assert RECOMPUTED | ONE_SHOT == set(UPGRADES)


def test_derive_stats_without_history_gives_defaults():
    stats = derive_stats([], 80, CFG)
    assert stats.cadence == 80
    assert stats.player_speed == CFG.player_speed


def test_rapid_fire_stops_at_floor():
    stats = derive_stats([RAPID_FIRE] * 3, 8, CFG)
    assert stats.cadence == CFG.min_cadence


def test_speed_up_stacks():
    stats = derive_stats([SPEED_UP, SPEED_UP], 8, CFG)
    assert stats.player_speed == CFG.player_speed + 2 * CFG.speed_up_bonus


def test_derive_stats_ignores_one_shot_and_unknown_names():
    stats = derive_stats([EXTRA_LIFE, DOUBLE_SCORE, "Laser"], 20, CFG)
    assert (stats.cadence, stats.player_speed) == (20, CFG.player_speed)


def test_extra_life_adds_hp():
    player = Player(x=0.0, y=0.0, hp=2)
    score = apply_one_shot(EXTRA_LIFE, player, 40, CFG)
    assert player.hp == 3
    assert score == 40


def test_double_score():
    player = Player(x=0.0, y=0.0, hp=2)
    assert apply_one_shot(DOUBLE_SCORE, player, 150, CFG) == 300
    assert player.hp == 2


def test_offer_upgrades_gives_distinct_choices():
    rng = random.Random(8)
    for _ in range(50):
        offer = offer_upgrades(rng)
        assert len(offer) == 2
        assert len(set(offer)) == 2
        assert set(offer) <= set(UPGRADES)
