"""Shared fixtures and helpers for the arena tests."""

from __future__ import annotations

import pytest

from vibenator.behaviors import Delayed, Straight
from vibenator.config import DEFAULT_BALANCE
from vibenator.entities import Enemy
from vibenator.session import WaveSession

NEVER = 10 ** 9


def make_enemy(x=100.0, y=100.0, hp=1, speed=2.0, pattern=None, radius=18.0) -> Enemy:
    return Enemy(x=x, y=y, hp=hp, speed=speed, pattern=pattern or Straight(), radius=radius)


def freeze_enemies(session: WaveSession, y: float = 100.0):
    """Park every live enemy in a row near the top edge and stop it moving."""
    for i, e in enumerate(session._enemies):
        e.pattern = Delayed(delay=NEVER)
        e.x = 60.0 + 40.0 * i
        e.y = y
    return session._enemies


@pytest.fixture
def cfg():
    return DEFAULT_BALANCE


@pytest.fixture
def session():
    s = WaveSession(seed=1234)
    s.start_run("directional")
    return s
