"""
Arcade window for the wave survival arena.

Draws FrameResult snapshots and turns held arrow/WASD keys into a movement
intent. When given a session it also drives it: one advance_frame per
on_update, and after a wave clear it offers two upgrades on keys 1 and 2.
Arena y grows downward, Arcade's grows upward, so y is flipped when drawing.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import arcade

from .session import WaveSession
from .snapshots import FrameResult, GameOver, WaveCleared
from .upgrades import offer_upgrades
from .utils import normalize

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
UP_KEYS = (arcade.key.UP, arcade.key.W)
DOWN_KEYS = (arcade.key.DOWN, arcade.key.S)
CHOICE_KEYS = (arcade.key.KEY_1, arcade.key.KEY_2)


class SurvivorWindow(arcade.Window):
    """Arcade window rendering arena snapshots"""

    def __init__(self, width: int, height: int, session: Optional[WaveSession] = None):
        super().__init__(width, height, "Vibenator")
        self.session = session
        self.frame: Optional[FrameResult] = None
        self.final_score: Optional[int] = None
        self._held = set()
        self._offer: List[str] = []

        # Colors
        self.background_color = (36, 17, 64)
        self.PLAYER_C = (0, 255, 234)
        self.ENEMY_C = (255, 110, 199)
        self.FLASH_C = (255, 34, 34)
        self.BULLET_C = (255, 225, 86)
        self.HUD_C = (255, 225, 86)

    def show(self, frame: FrameResult):
        self.frame = frame

    # ----------------------------
    # Input
    # ----------------------------

    def movement_intent(self) -> Tuple[float, float]:
        """Normalized (dx, dy) in arena coordinates from the held keys"""
        dx = float(any(k in self._held for k in RIGHT_KEYS)) - float(any(k in self._held for k in LEFT_KEYS))
        dy = float(any(k in self._held for k in DOWN_KEYS)) - float(any(k in self._held for k in UP_KEYS))
        return normalize(dx, dy)

    def on_key_press(self, key, modifiers):
        if key == arcade.key.ESCAPE:
            self.close()
            return
        self._held.add(key)
        if self._offer and key in CHOICE_KEYS:
            choice = self._offer[CHOICE_KEYS.index(key)]
            self._offer = []
            self.session.select_upgrade(choice)
            self.frame = self.session.next_wave()

    def on_key_release(self, key, modifiers):
        self._held.discard(key)

    # ----------------------------
    # Simulation
    # ----------------------------

    def on_update(self, delta_time):
        if self.session is None or self._offer or self.final_score is not None:
            return
        result = self.session.advance_frame(self.movement_intent())
        self.frame = result
        if isinstance(result.event, WaveCleared):
            self._offer = offer_upgrades(self.session.rng)
        elif isinstance(result.event, GameOver):
            self.final_score = result.event.score
            print(f"Game over on wave {result.event.wave}. Final score: {result.event.score}")

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        frame = self.frame
        if frame is None:
            return
        h = self.height

        for e in frame.enemies:
            color = self.FLASH_C if e.flashing else self.ENEMY_C
            arcade.draw_circle_filled(e.x, h - e.y, e.radius, color)

        for b in frame.projectiles:
            arcade.draw_circle_filled(b.x, h - b.y, b.radius, self.BULLET_C)

        px, py = frame.player_pos
        arcade.draw_circle_filled(px, h - py, frame.player_radius, self.PLAYER_C)

        # Text HUD
        arcade.draw_text(f"Wave: {frame.wave}", 20, h - 40, self.HUD_C, 22)
        arcade.draw_text(f"HP: {frame.player_hp}", 20, h - 72, self.HUD_C, 22)
        arcade.draw_text(f"Score: {frame.score}", 20, h - 104, self.HUD_C, 22)

        if self._offer:
            txt = "  ".join(f"[{i + 1}] {name}" for i, name in enumerate(self._offer))
            arcade.draw_text("Choose a Vibe-Up", self.width / 2, h / 2 + 30, self.HUD_C, 28,
                             anchor_x="center")
            arcade.draw_text(txt, self.width / 2, h / 2 - 20, self.HUD_C, 20, anchor_x="center")
        elif self.final_score is not None:
            arcade.draw_text(f"Game Over - Score: {self.final_score}", self.width / 2, h / 2,
                             self.FLASH_C, 32, anchor_x="center")
