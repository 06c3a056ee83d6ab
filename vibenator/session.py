"""
WaveSession - frame-stepped wave survival simulation
----------------------------------------------------
- One player that auto-fires one of three weapon kinds
- Waves of 4 + 2*wave enemies, each following a movement pattern
- Score trickles up every frame; clearing a wave pays 100 * wave
- Upgrades picked between waves (fire rate, speed, extra life, double score)

State machine per wave:

    SPAWNING -> ACTIVE -> WAVE_CLEARING -> IDLE (host picks upgrade, starts next wave)
                      `-> GAME_OVER (terminal)

The host calls ``advance_frame(intent)`` once per display refresh and gets an
immutable ``FrameResult`` back. Nothing here draws, reads devices or keeps
timers; the wave-clear delay is counted in frames.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .behaviors import advance_enemy, make_pattern, random_tag
from .collisions import resolve_collisions
from .config import DEFAULT_BALANCE, BalanceConfig, WeaponKind
from .entities import Enemy, Player, Projectile
from .snapshots import EnemySnapshot, FrameResult, GameOver, ProjectileSnapshot, WaveCleared
from .upgrades import ONE_SHOT, apply_one_shot, derive_stats, is_upgrade
from .utils import clamp, normalize
from .weapons import fire, ready

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"  # no wave in progress
    SPAWNING = "spawning"
    ACTIVE = "active"
    WAVE_CLEARING = "wave_clearing"
    GAME_OVER = "game_over"


class WaveSession:
    """Owns every entity of one run and advances them one frame at a time"""

    def __init__(self, config: BalanceConfig = DEFAULT_BALANCE, seed: Optional[int] = None):
        self.config = config
        self.rng = random.Random(seed)

        self._weapon: Optional[WeaponKind] = None
        self._phase = Phase.IDLE

        # World state
        self._player: Player = None  # type: ignore
        self._enemies: List[Enemy] = []
        self._projectiles: List[Projectile] = []

        # Run state
        self._wave = 0
        self._score = 0
        self._upgrades: List[str] = []

        # Wave state
        self._frame = 0
        self._last_fire = 0
        self._wave_cleared = False
        self._running = False
        self._clear_timer = 0

        # Derived from the upgrade history at each wave start
        self._cadence = 0
        self._player_speed = config.player_speed

    # ----------------------------
    # Read-only state
    # ----------------------------

    @property
    def weapon(self) -> Optional[WeaponKind]:
        return self._weapon

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def wave(self) -> int:
        return self._wave

    @property
    def score(self) -> int:
        return self._score

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def running(self) -> bool:
        return self._running

    @property
    def wave_cleared(self) -> bool:
        return self._wave_cleared

    @property
    def cadence(self) -> int:
        return self._cadence

    @property
    def player_speed(self) -> float:
        return self._player_speed

    @property
    def upgrades(self) -> Tuple[str, ...]:
        return tuple(self._upgrades)

    # ----------------------------
    # Host API
    # ----------------------------

    def start_run(self, weapon) -> FrameResult:
        """Begin a fresh run with the chosen weapon kind at wave 1"""
        self._weapon = WeaponKind(weapon)
        self._phase = Phase.IDLE
        self._upgrades = []
        logger.info("Starting run with %s weapon", self._weapon.value)
        return self.start_wave(1, [])

    def start_wave(self, wave: int, upgrades: Iterable[str] = ()) -> FrameResult:
        """Spawn wave ``wave`` with the accumulated upgrade list.

        Wave 1 with no upgrades is a fresh run: player, hp and score reset.
        Any other wave only moves the player back to the spawn point. Entries
        of ``upgrades`` beyond the recorded history are taken as newly chosen.
        """
        if self._weapon is None:
            raise RuntimeError("start_run() must be called before start_wave()")
        if self._phase is Phase.GAME_OVER:
            raise RuntimeError("Run is over; call start_run() to play again")
        if wave < 1:
            raise ValueError(f"Wave number must be >= 1, got {wave}")

        cfg = self.config
        upgrades = list(upgrades)

        if wave == 1 and not upgrades:
            self._player = Player(x=0.0, y=0.0, radius=cfg.player_radius, hp=cfg.player_hp)
            self._score = 0
            self._upgrades = []
        else:
            self._record_upgrades(upgrades)
        self._phase = Phase.SPAWNING
        sx, sy = cfg.player_spawn
        r = self._player.radius
        self._player.x = clamp(sx, r, cfg.width - r)
        self._player.y = clamp(sy, r, cfg.height - r)

        stats = derive_stats(self._upgrades, cfg.weapon(self._weapon).cadence, cfg)
        self._cadence = stats.cadence
        self._player_speed = stats.player_speed

        self._wave = wave
        self._frame = 0
        self._last_fire = 0
        self._wave_cleared = False
        self._running = True
        self._clear_timer = 0

        self._projectiles = []
        count = cfg.enemies_base + cfg.enemies_per_wave * wave
        self._enemies = [self._spawn_enemy(wave) for _ in range(count)]

        logger.info("Wave %d: spawned %d enemies (cadence=%d, speed=%.1f)",
                    wave, count, self._cadence, self._player_speed)
        self._phase = Phase.ACTIVE
        return self.snapshot()

    def next_wave(self) -> FrameResult:
        """Start the wave after the current one, keeping the upgrade history"""
        return self.start_wave(self._wave + 1, self._upgrades)

    def select_upgrade(self, name: str) -> bool:
        """Record an upgrade picked by the player.

        One-shot upgrades take effect immediately; recomputed ones apply from
        the next wave start. Unknown names are ignored and return False.
        """
        if self._weapon is None:
            raise RuntimeError("start_run() must be called before select_upgrade()")
        if self._phase is Phase.GAME_OVER:
            raise RuntimeError("Run is over; upgrades can no longer be chosen")
        if not is_upgrade(name):
            logger.warning("Ignoring unknown upgrade %r", name)
            return False
        self._take_upgrade(name)
        return True

    def advance_frame(self, intent: Sequence[float] = (0.0, 0.0)) -> FrameResult:
        """Advance the simulation by one frame.

        ``intent`` is the movement direction (dx, dy) from the input side,
        normalized or zero. Outside of an active or clearing wave this is a
        no-op that returns the current snapshot.
        """
        if self._weapon is None:
            raise RuntimeError("start_run() must be called before advance_frame()")
        if self._phase is Phase.ACTIVE:
            return self._step_active(intent)
        if self._phase is Phase.WAVE_CLEARING:
            return self._step_clearing()
        return self.snapshot()

    def snapshot(self, event=None) -> FrameResult:
        """Immutable view of the current arena state"""
        if self._player is None:
            raise RuntimeError("No run in progress")
        p = self._player
        return FrameResult(
            wave=self._wave,
            phase=self._phase.value,
            score=self._score,
            player_hp=p.hp,
            player_pos=p.pos,
            player_radius=p.radius,
            live_enemy_count=len(self._enemies),
            enemies=tuple(
                EnemySnapshot(x=e.x, y=e.y, radius=e.radius, hp=e.hp, tag=e.tag, flashing=e.flash > 0)
                for e in self._enemies
            ),
            projectiles=tuple(
                ProjectileSnapshot(x=b.x, y=b.y, radius=b.radius, origin=b.origin)
                for b in self._projectiles
            ),
            event=event,
        )

    # ----------------------------
    # Frame phases
    # ----------------------------

    def _step_active(self, intent) -> FrameResult:
        cfg = self.config

        self._apply_move(intent)
        self._apply_fire()
        self._update_projectiles()
        self._update_enemies()

        self._enemies, self._projectiles, report = resolve_collisions(
            self._player, self._enemies, self._projectiles, cfg
        )
        if report.contacts:
            logger.debug("Player hit %d time(s), hp=%d", report.contacts, self._player.hp)

        event = None
        if self._player.hp <= 0:
            self._running = False
            self._phase = Phase.GAME_OVER
            event = GameOver(wave=self._wave, score=self._score)
            logger.info("Game over on wave %d with score %d", self._wave, self._score)
        elif not self._enemies and not self._wave_cleared:
            bonus = cfg.wave_bonus * self._wave
            self._score += bonus
            self._wave_cleared = True
            self._phase = Phase.WAVE_CLEARING
            self._clear_timer = cfg.wave_clear_delay_frames
            logger.info("Wave %d cleared: +%d bonus, score %d", self._wave, bonus, self._score)
            if self._clear_timer <= 0:
                event = self._finish_clear()
        else:
            self._score += cfg.score_per_frame

        self._frame += 1
        return self.snapshot(event)

    def _step_clearing(self) -> FrameResult:
        self._clear_timer -= 1
        event = None
        if self._clear_timer <= 0:
            event = self._finish_clear()
        return self.snapshot(event)

    def _finish_clear(self) -> WaveCleared:
        self._running = False
        self._phase = Phase.IDLE
        return WaveCleared(wave=self._wave, score=self._score)

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _apply_move(self, intent):
        dx, dy = normalize(float(intent[0]), float(intent[1]))
        if dx == 0.0 and dy == 0.0:
            return
        p = self._player
        r = p.radius
        p.x = clamp(p.x + dx * self._player_speed, r, self.config.width - r)
        p.y = clamp(p.y + dy * self._player_speed, r, self.config.height - r)
        p.dir_x, p.dir_y = dx, dy

    def _apply_fire(self):
        if not ready(self._frame, self._last_fire, self._cadence):
            return
        spec = self.config.weapon(self._weapon)
        self._projectiles.extend(fire(self._weapon, self._player, self._enemies, spec))
        self._last_fire = self._frame

    def _update_projectiles(self):
        m = self.config.projectile_margin
        w, h = self.config.width, self.config.height
        for b in self._projectiles:
            b.x += b.vx
            b.y += b.vy
        # Out of bounds (with margin) -> drop
        self._projectiles = [
            b for b in self._projectiles if -m < b.x < w + m and -m < b.y < h + m
        ]

    def _update_enemies(self):
        target = self._player.pos
        for e in self._enemies:
            if e.flash > 0:
                e.flash -= 1
            advance_enemy(e, target, self._frame, self.config)

    def _spawn_enemy(self, wave: int) -> Enemy:
        cfg = self.config
        rng = self.rng
        r = cfg.enemy_radius
        m = cfg.spawn_margin

        # Upper band of the arena, away from the player's spawn edge
        x = clamp(m + rng.random() * (cfg.width - 2 * m), r, cfg.width - r)
        y = clamp(m + rng.random() * cfg.spawn_band, r, cfg.height - r)

        tag = random_tag(rng, cfg.tag_weights)
        return Enemy(
            x=x,
            y=y,
            hp=cfg.enemy_base_hp + (wave // 2) * cfg.enemy_hp_per_2_waves,
            speed=cfg.enemy_base_speed + wave * cfg.enemy_speed_per_wave + rng.random() * cfg.enemy_speed_jitter,
            pattern=make_pattern(tag, rng, cfg),
            radius=r,
            spawn_frame=self._frame,
        )

    # ----------------------------
    # Upgrade bookkeeping
    # ----------------------------

    def _record_upgrades(self, upgrades: List[str]):
        """Take the entries of ``upgrades`` that extend the recorded history"""
        known = []
        for name in upgrades:
            if is_upgrade(name):
                known.append(name)
            else:
                logger.warning("Ignoring unknown upgrade %r", name)
        n = len(self._upgrades)
        if known[:n] != self._upgrades:
            raise ValueError(
                f"Upgrade list {known} does not extend the recorded history {self._upgrades}"
            )
        for name in known[n:]:
            self._take_upgrade(name)

    def _take_upgrade(self, name: str):
        self._upgrades.append(name)
        if name in ONE_SHOT:
            self._score = apply_one_shot(name, self._player, self._score, self.config)
        logger.info("Upgrade chosen: %s (history: %s)", name, ", ".join(self._upgrades))
