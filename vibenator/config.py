"""
Game balance configuration for the wave survival arena
-------------------------------------------------------
All tuning lives in one frozen ``BalanceConfig`` that is handed to a
``WaveSession`` at construction. Distances are pixels, speeds are pixels per
frame and every cadence or delay is a frame count (60 frames = 1 second).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class WeaponKind(str, Enum):
    """Selectable weapon behaviors"""
    DIRECTIONAL = "directional"
    RADIAL = "radial"
    AUTO_AIM = "auto_aim"


@dataclass(frozen=True)
class WeaponSpec:
    """Firing parameters of one weapon kind"""
    cadence: int            # frames between shots/volleys (higher = slower)
    bullet_speed: float
    bullet_radius: float
    num_projectiles: int = 1


@dataclass(frozen=True)
class BalanceConfig:
    """Immutable balance table; one instance per session"""

    # Arena
    width: int = 1200
    height: int = 900

    # Player
    player_speed: float = 5.0
    player_radius: float = 18.0
    player_hp: int = 3
    player_spawn_offset: float = 60.0  # spawn point sits this far above the bottom edge

    # Weapons
    directional: WeaponSpec = WeaponSpec(cadence=8, bullet_speed=8.0, bullet_radius=7.0)
    radial: WeaponSpec = WeaponSpec(cadence=80, bullet_speed=3.0, bullet_radius=6.0, num_projectiles=8)
    auto_aim: WeaponSpec = WeaponSpec(cadence=20, bullet_speed=4.0, bullet_radius=3.0)
    projectile_margin: float = 20.0  # projectiles are culled this far outside the arena

    # Upgrades
    rapid_fire_step: int = 4
    min_cadence: int = 4
    speed_up_bonus: float = 2.0
    extra_life_bonus: int = 1

    # Enemies
    enemy_radius: float = 18.0
    enemy_base_hp: int = 1
    enemy_hp_per_2_waves: int = 1
    enemy_base_speed: float = 1.0
    enemy_speed_per_wave: float = 0.2
    enemy_speed_jitter: float = 1.0  # uniform [0, jitter) added at spawn
    enemies_base: int = 4
    enemies_per_wave: int = 2
    spawn_margin: float = 60.0
    spawn_band: float = 200.0  # depth of the upper band enemies spawn in
    hit_flash_frames: int = 8
    tag_weights: Tuple[Tuple[str, int], ...] = (
        ("straight", 2),
        ("zigzag", 2),
        ("spiral", 1),
        ("delayed", 1),
        ("flankLeft", 1),
        ("flankRight", 1),
        ("surround", 1),
    )

    # Movement patterns ([lo, hi) ranges are drawn once per enemy)
    zigzag_freq: Tuple[float, float] = (0.08, 0.10)
    zigzag_amp: Tuple[float, float] = (32.0, 48.0)
    spiral_approach: float = 0.7
    spiral_rate: Tuple[float, float] = (0.13, 0.18)
    spiral_radius: float = 60.0
    spiral_wobble: float = 30.0
    spiral_wobble_freq: float = 0.03
    delay_frames: Tuple[int, int] = (40, 70)
    rush_multiplier: float = 1.7
    flank_angle: Tuple[float, float] = (math.pi / 6, math.pi / 6 + math.pi / 18)
    flank_range: float = 400.0
    orbit_radius: float = 120.0
    orbit_wobble: float = 40.0
    orbit_wobble_freq: float = 0.01
    orbit_rate: Tuple[float, float] = (0.025, 0.035)

    # Scoring / lifecycle
    score_per_frame: int = 1
    wave_bonus: int = 100  # multiplied by the wave number
    wave_clear_delay_frames: int = 48  # ~800 ms at 60 FPS

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena must be positive, got {self.width}x{self.height}")
        for kind in WeaponKind:
            spec = self.weapon(kind)
            if spec.cadence < 0 or spec.num_projectiles < 1:
                raise ValueError(f"Invalid weapon spec for {kind.value}: {spec}")
        if not self.tag_weights or sum(w for _, w in self.tag_weights) <= 0:
            raise ValueError("tag_weights must contain at least one positive weight")
        if self.wave_clear_delay_frames < 0:
            raise ValueError("wave_clear_delay_frames must be >= 0")

    def weapon(self, kind) -> WeaponSpec:
        """Return the WeaponSpec for a weapon kind (enum or its string value)"""
        kind = WeaponKind(kind)
        if kind is WeaponKind.DIRECTIONAL:
            return self.directional
        if kind is WeaponKind.RADIAL:
            return self.radial
        return self.auto_aim

    @property
    def player_spawn(self) -> Tuple[float, float]:
        return self.width * 0.5, self.height - self.player_spawn_offset


DEFAULT_BALANCE = BalanceConfig()


# Keyword arguments for SurvivorEnv
ENV_CONFIG = {
    # "render_mode": None,
    "weapon": "directional",
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "damage_penalty": 50.0,
}
