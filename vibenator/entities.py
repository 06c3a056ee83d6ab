"""
Arena entity dataclasses
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .utils import Vec2

if TYPE_CHECKING:
    from .behaviors import Pattern


@dataclass
class Player:
    """Player agent entity"""
    x: float
    y: float
    radius: float = 18.0
    hp: int = 3
    # last nonzero movement direction; (0, 0) until the player first moves
    dir_x: float = 0.0
    dir_y: float = 0.0

    @property
    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def heading(self) -> Vec2:
        return Vec2(self.dir_x, self.dir_y)


@dataclass
class Enemy:
    """Enemy entity driven by its movement pattern"""
    x: float
    y: float
    hp: int
    speed: float  # px/frame
    pattern: "Pattern"
    radius: float = 18.0
    flash: int = 0  # frames left to render as damaged
    spawn_frame: int = 0

    @property
    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def tag(self) -> str:
        return self.pattern.tag


@dataclass
class Projectile:
    """Projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 4.0
    origin: str = "player"  # "player" | "enemy"

    @property
    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)
