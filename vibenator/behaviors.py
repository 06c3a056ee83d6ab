"""
Enemy movement patterns
-----------------------
Every enemy carries one pattern variant chosen at spawn. The variant holds the
parameters drawn for that enemy (frequencies, rates, delays) and whatever
scratch state the pattern accumulates (spiral angle, flank progress, orbit
angle). Patterns re-target the player every frame; ``step`` returns the
displacement for one frame and ``advance_enemy`` applies it and clamps the
enemy back into the arena.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import ClassVar, Sequence, Tuple

from .config import BalanceConfig
from .entities import Enemy
from .utils import Vec2, clamp, direction, distance, rotate

TAGS = ("straight", "zigzag", "spiral", "delayed", "flankLeft", "flankRight", "surround")


class Pattern:
    """Base class for movement patterns"""

    tag: ClassVar[str] = ""

    def step(self, enemy: Enemy, target: Vec2, elapsed: int, cfg: BalanceConfig) -> Tuple[float, float]:
        raise NotImplementedError


@dataclass
class Straight(Pattern):
    tag: ClassVar[str] = "straight"

    def step(self, enemy, target, elapsed, cfg):
        d = direction(enemy.pos, target)
        return d.x * enemy.speed, d.y * enemy.speed


@dataclass
class Zigzag(Pattern):
    """Chase plus a sinusoidal sway along the perpendicular of the chase"""
    tag: ClassVar[str] = "zigzag"

    freq: float
    amp: float

    def step(self, enemy, target, elapsed, cfg):
        d = direction(enemy.pos, target)
        sway = math.sin(elapsed * self.freq) * (self.amp / 60.0)
        # perpendicular of (x, y) is (-y, x)
        return d.x * enemy.speed - d.y * sway, d.y * enemy.speed + d.x * sway


@dataclass
class Spiral(Pattern):
    """Slow approach blended with a rotating offset of oscillating radius"""
    tag: ClassVar[str] = "spiral"

    angle: float
    rate: float

    def step(self, enemy, target, elapsed, cfg):
        self.angle += self.rate
        radius = cfg.spiral_radius + cfg.spiral_wobble * math.sin(elapsed * cfg.spiral_wobble_freq)
        d = direction(enemy.pos, target)
        approach = enemy.speed * cfg.spiral_approach
        return (
            d.x * approach + math.cos(self.angle) * (radius / 60.0),
            d.y * approach + math.sin(self.angle) * (radius / 60.0),
        )


@dataclass
class Delayed(Pattern):
    """Hold position for ``delay`` frames after spawn, then rush"""
    tag: ClassVar[str] = "delayed"

    delay: int

    def step(self, enemy, target, elapsed, cfg):
        if elapsed < self.delay:
            return 0.0, 0.0
        d = direction(enemy.pos, target)
        rush = enemy.speed * cfg.rush_multiplier
        return d.x * rush, d.y * rush


@dataclass
class Flank(Pattern):
    """Chase along a rotated heading that straightens as the enemy closes in.

    ``angle`` is positive for left flankers and negative for right flankers.
    """
    side: str
    angle: float
    progress: float = 0.0

    @property
    def tag(self) -> str:  # type: ignore[override]
        return self.side

    def step(self, enemy, target, elapsed, cfg):
        self.progress = 1.0 - min(distance(enemy.pos, target) / cfg.flank_range, 1.0)
        d = direction(enemy.pos, target)
        dx, dy = rotate(d.x, d.y, self.angle * (1.0 - self.progress))
        return dx * enemy.speed, dy * enemy.speed


@dataclass
class Surround(Pattern):
    """Chase a point orbiting the player at an oscillating radius"""
    tag: ClassVar[str] = "surround"

    angle: float
    rate: float

    def step(self, enemy, target, elapsed, cfg):
        orbit = cfg.orbit_radius + cfg.orbit_wobble * math.sin(elapsed * cfg.orbit_wobble_freq)
        self.angle += self.rate
        goal = Vec2(
            target.x + math.cos(self.angle) * orbit,
            target.y + math.sin(self.angle) * orbit,
        )
        d = direction(enemy.pos, goal)
        return d.x * enemy.speed, d.y * enemy.speed


# ----------------------------
# Spawning helpers
# ----------------------------

def random_tag(rng: random.Random, weights: Sequence[Tuple[str, int]]) -> str:
    """Draw a behavior tag from a (tag, weight) table"""
    tags = [t for t, _ in weights]
    return rng.choices(tags, weights=[w for _, w in weights], k=1)[0]


def make_pattern(tag: str, rng: random.Random, cfg: BalanceConfig) -> Pattern:
    """Build the pattern variant for a tag, drawing its per-enemy parameters"""
    if tag == "straight":
        return Straight()
    if tag == "zigzag":
        return Zigzag(freq=rng.uniform(*cfg.zigzag_freq), amp=rng.uniform(*cfg.zigzag_amp))
    if tag == "spiral":
        return Spiral(angle=rng.uniform(0.0, math.tau), rate=rng.uniform(*cfg.spiral_rate))
    if tag == "delayed":
        lo, hi = cfg.delay_frames
        return Delayed(delay=rng.randrange(lo, hi))
    if tag == "flankLeft":
        return Flank(side=tag, angle=rng.uniform(*cfg.flank_angle))
    if tag == "flankRight":
        return Flank(side=tag, angle=-rng.uniform(*cfg.flank_angle))
    if tag == "surround":
        return Surround(angle=rng.uniform(0.0, math.tau), rate=rng.uniform(*cfg.orbit_rate))
    raise ValueError(f"Unknown behavior tag: {tag}")


# ----------------------------
# Per-frame update
# ----------------------------

def advance_enemy(enemy: Enemy, target: Vec2, frame: int, cfg: BalanceConfig) -> None:
    """Move one enemy by its pattern and clamp it into the arena"""
    dx, dy = enemy.pattern.step(enemy, target, frame - enemy.spawn_frame, cfg)
    r = enemy.radius
    enemy.x = clamp(enemy.x + dx, r, cfg.width - r)
    enemy.y = clamp(enemy.y + dy, r, cfg.height - r)

