"""
Read-only views handed to the host after every frame
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .utils import Vec2


@dataclass(frozen=True)
class EnemySnapshot:
    x: float
    y: float
    radius: float
    hp: int
    tag: str
    flashing: bool


@dataclass(frozen=True)
class ProjectileSnapshot:
    x: float
    y: float
    radius: float
    origin: str


@dataclass(frozen=True)
class WaveCleared:
    """Every enemy of the wave is dead and the clear delay has elapsed"""
    wave: int
    score: int


@dataclass(frozen=True)
class GameOver:
    """Player hit points reached zero; the run is over"""
    wave: int
    score: int


TerminalEvent = Union[WaveCleared, GameOver]


@dataclass(frozen=True)
class FrameResult:
    """State of the arena after one advance_frame call"""
    wave: int
    phase: str
    score: int
    player_hp: int
    player_pos: Vec2
    player_radius: float
    live_enemy_count: int
    enemies: Tuple[EnemySnapshot, ...] = ()
    projectiles: Tuple[ProjectileSnapshot, ...] = ()
    event: Optional[TerminalEvent] = None
