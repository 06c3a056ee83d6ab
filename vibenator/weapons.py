"""
Weapon firing rules
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from .config import WeaponKind, WeaponSpec
from .entities import Enemy, Player, Projectile
from .utils import UP, Vec2, direction, distance, vec_len

__all__ = [
    "WeaponKind",
    "ready",
    "nearest_enemy",
    "fire_directional",
    "fire_radial",
    "fire_auto_aim",
    "fire",
]


def ready(frame: int, last_fire: int, cadence: int) -> bool:
    """True when more than ``cadence`` frames have passed since the last shot"""
    return frame - last_fire > cadence


def nearest_enemy(pos: Vec2, enemies: Iterable[Enemy]) -> Optional[Enemy]:
    """Closest enemy to pos, or None when there are none.

    Equal distances resolve to whichever enemy comes first in iteration order.
    """
    best = None
    best_dist = math.inf
    for e in enemies:
        d = distance(pos, e.pos)
        if d < best_dist:
            best_dist = d
            best = e
    return best


def _shot(origin: Vec2, heading: Vec2, spec: WeaponSpec) -> Projectile:
    return Projectile(
        x=origin.x,
        y=origin.y,
        vx=heading.x * spec.bullet_speed,
        vy=heading.y * spec.bullet_speed,
        radius=spec.bullet_radius,
        origin="player",
    )


def fire_directional(origin: Vec2, heading: Vec2, spec: WeaponSpec) -> List[Projectile]:
    """One shot along the last movement heading; straight up if there is none"""
    if vec_len(*heading) <= 0.01:
        heading = UP
    return [_shot(origin, heading, spec)]


def fire_radial(origin: Vec2, spec: WeaponSpec) -> List[Projectile]:
    """``num_projectiles`` shots evenly spaced around the full circle, starting at angle 0"""
    n = spec.num_projectiles
    shots = []
    for i in range(n):
        ang = math.tau * i / n
        shots.append(_shot(origin, Vec2(math.cos(ang), math.sin(ang)), spec))
    return shots


def fire_auto_aim(origin: Vec2, enemies: Iterable[Enemy], spec: WeaponSpec) -> List[Projectile]:
    """One shot at the nearest enemy; straight up when no enemy is alive"""
    target = nearest_enemy(origin, enemies)
    heading = direction(origin, target.pos) if target is not None else UP
    if heading == (0.0, 0.0):
        # enemy sitting exactly on the player
        heading = UP
    return [_shot(origin, heading, spec)]


def fire(kind, player: Player, enemies: Iterable[Enemy], spec: WeaponSpec) -> List[Projectile]:
    """Emit the projectiles of one volley for the given weapon kind"""
    kind = WeaponKind(kind)
    if kind is WeaponKind.DIRECTIONAL:
        return fire_directional(player.pos, player.heading, spec)
    if kind is WeaponKind.RADIAL:
        return fire_radial(player.pos, spec)
    return fire_auto_aim(player.pos, enemies, spec)
