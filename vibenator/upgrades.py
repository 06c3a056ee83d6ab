"""
Upgrades chosen between waves
-----------------------------
Two classes of upgrade are kept apart:

- RECOMPUTED upgrades (Rapid Fire, Speed Up) are re-derived from the full
  history at the start of every wave, starting from the default stats.
- ONE_SHOT upgrades (Extra Life, Double Score) change the player or score once,
  when they are chosen, and are never replayed.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List

from .config import BalanceConfig
from .entities import Player

RAPID_FIRE = "Rapid Fire"
SPEED_UP = "Speed Up"
EXTRA_LIFE = "Extra Life"
DOUBLE_SCORE = "Double Score"

UPGRADES = (RAPID_FIRE, SPEED_UP, EXTRA_LIFE, DOUBLE_SCORE)

RECOMPUTED = frozenset({RAPID_FIRE, SPEED_UP})
ONE_SHOT = frozenset({EXTRA_LIFE, DOUBLE_SCORE})


@dataclass(frozen=True)
class DerivedStats:
    """Stats rebuilt from the upgrade history at each wave start"""
    cadence: int
    player_speed: float


def is_upgrade(name: str) -> bool:
    return name in UPGRADES


def derive_stats(history: Iterable[str], base_cadence: int, cfg: BalanceConfig) -> DerivedStats:
    """Replay the history over the default cadence and speed"""
    cadence = base_cadence
    speed = cfg.player_speed
    for name in history:
        if name == RAPID_FIRE:
            cadence = max(cfg.min_cadence, cadence - cfg.rapid_fire_step)
        elif name == SPEED_UP:
            speed += cfg.speed_up_bonus
    return DerivedStats(cadence=cadence, player_speed=speed)


def apply_one_shot(name: str, player: Player, score: int, cfg: BalanceConfig) -> int:
    """Apply a one-shot upgrade and return the (possibly changed) score"""
    if name == EXTRA_LIFE:
        player.hp += cfg.extra_life_bonus
    elif name == DOUBLE_SCORE:
        score *= 2
    return score


def offer_upgrades(rng: random.Random, k: int = 2) -> List[str]:
    """Pick k distinct upgrades to offer after a wave clear"""
    return rng.sample(UPGRADES, k)
