"""
Collision detection and resolution, run once per frame after movement.

Order: enemy-enemy separation, projectile hits, dead-enemy removal,
enemy-player contact.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .config import BalanceConfig
from .entities import Enemy, Player, Projectile
from .utils import clamp, circle_collide


@dataclass
class CollisionReport:
    """Counts of what happened during one resolution pass"""
    hits: int = 0
    kills: int = 0
    contacts: int = 0  # enemies consumed by touching the player


def _clamp_enemy(e: Enemy, cfg: BalanceConfig) -> None:
    e.x = clamp(e.x, e.radius, cfg.width - e.radius)
    e.y = clamp(e.y, e.radius, cfg.height - e.radius)


def separate_enemies(enemies: Sequence[Enemy], cfg: BalanceConfig) -> None:
    """Push overlapping enemy pairs apart along their connecting normal.

    Single pass, not iterated to convergence, so dense clusters can stay
    slightly overlapping. Exactly coincident pairs have no normal and are
    left alone.
    """
    n = len(enemies)
    for i in range(n):
        a = enemies[i]
        for j in range(i + 1, n):
            b = enemies[j]
            dx = b.x - a.x
            dy = b.y - a.y
            dist = math.hypot(dx, dy)
            min_dist = a.radius + b.radius
            if 0.0 < dist < min_dist:
                overlap = (min_dist - dist) / 2.0
                nx = dx / dist
                ny = dy / dist
                a.x -= nx * overlap
                a.y -= ny * overlap
                b.x += nx * overlap
                b.y += ny * overlap
                _clamp_enemy(a, cfg)
                _clamp_enemy(b, cfg)


def resolve_projectile_hits(
    projectiles: Sequence[Projectile],
    enemies: Sequence[Enemy],
    flash_frames: int,
) -> Tuple[List[Projectile], int]:
    """Apply player projectile hits and return (surviving projectiles, hit count).

    A projectile is spent on its first hit and cannot damage a second enemy
    in the same frame.
    """
    remaining = []
    hits = 0
    for p in projectiles:
        if p.origin != "player":
            remaining.append(p)
            continue
        for e in enemies:
            if e.hp <= 0:
                continue
            if circle_collide(p.x, p.y, p.radius, e.x, e.y, e.radius):
                e.hp -= 1
                e.flash = flash_frames
                hits += 1
                break
        else:
            remaining.append(p)
    return remaining, hits


def remove_dead(enemies: Sequence[Enemy]) -> Tuple[List[Enemy], int]:
    """Drop enemies with hp <= 0; returns (alive, number removed)"""
    alive = [e for e in enemies if e.hp > 0]
    return alive, len(enemies) - len(alive)


def resolve_player_contacts(player: Player, enemies: Sequence[Enemy]) -> Tuple[List[Enemy], int]:
    """Each touching enemy costs the player 1 hp and is consumed"""
    remaining = []
    contacts = 0
    for e in enemies:
        if circle_collide(e.x, e.y, e.radius, player.x, player.y, player.radius):
            player.hp -= 1
            contacts += 1
        else:
            remaining.append(e)
    return remaining, contacts


def resolve_collisions(
    player: Player,
    enemies: List[Enemy],
    projectiles: List[Projectile],
    cfg: BalanceConfig,
) -> Tuple[List[Enemy], List[Projectile], CollisionReport]:
    """Run the full per-frame resolution pass in its fixed order"""
    report = CollisionReport()

    separate_enemies(enemies, cfg)
    projectiles, report.hits = resolve_projectile_hits(projectiles, enemies, cfg.hit_flash_frames)
    enemies, report.kills = remove_dead(enemies)
    enemies, report.contacts = resolve_player_contacts(player, enemies)

    return enemies, projectiles, report
