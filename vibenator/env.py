"""
SurvivorEnv - Gymnasium wrapper around a WaveSession
----------------------------------------------------
- The agent only steers; the chosen weapon fires on its own cadence
- Discrete action space: stay + 8 headings
- Vector observation: player state + top-K nearest enemies
- Reward: score gained this step minus a penalty per hit point lost
- On a wave clear the env picks one of the offered upgrades at random and
  starts the next wave, so an episode runs until game over or max_steps

Quick test:
    python -m vibenator.env
"""

from __future__ import annotations

import math
import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import DEFAULT_BALANCE, ENV_CONFIG, BalanceConfig
from .session import Phase, WaveSession
from .snapshots import FrameResult, WaveCleared
from .upgrades import offer_upgrades
from .utils import clamp


class SurvivorEnv(gym.Env):
    """Wave survival arena as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        weapon: str = "directional",
        config: BalanceConfig = DEFAULT_BALANCE,
        max_steps: int = 3600,
        k_enemies: int = 5,
        damage_penalty: float = 50.0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.weapon = weapon
        self.config = config
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.damage_penalty = damage_penalty

        # 0 stay, 1..8 headings at 45 degree steps starting from +x
        self.action_space = spaces.Discrete(9)

        # Player: pos(2) hp(1) remaining-enemy fraction(1)
        # Each enemy: rel pos(2)
        obs_dim = 2 + 1 + 1 + (self.k_enemies * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._move_dirs = [(0.0, 0.0)]
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._move_dirs.append((math.cos(ang), math.sin(ang)))

        self._window = None

        self.session: WaveSession = None  # type: ignore
        self._last: FrameResult = None  # type: ignore
        self._upgrade_rng = random.Random()
        self._step_count = 0
        self._damage_taken = 0
        self._waves_cleared = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = WaveSession(self.config, seed=session_seed)
        self._upgrade_rng = random.Random(session_seed)

        self._step_count = 0
        self._damage_taken = 0
        self._waves_cleared = 0
        self._last = self.session.start_run(self.weapon)

        return self._get_obs(), self._get_info()

    def step(self, action):
        prev = self._last
        result = self.session.advance_frame(self._move_dirs[int(action)])

        if isinstance(result.event, WaveCleared):
            self._waves_cleared += 1
            choice = self._upgrade_rng.choice(offer_upgrades(self._upgrade_rng))
            self.session.select_upgrade(choice)
            result = self.session.next_wave()
        self._last = result

        damage = max(0, prev.player_hp - result.player_hp)
        self._damage_taken += damage
        reward = float(result.score - prev.score) - self.damage_penalty * damage

        terminated = self.session.phase is Phase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        frame = self._last
        px, py = frame.player_pos

        spawned = cfg.enemies_base + cfg.enemies_per_wave * frame.wave
        obs_parts = [
            px / cfg.width * 2 - 1,
            py / cfg.height * 2 - 1,
            clamp(frame.player_hp / max(1, cfg.player_hp), 0, 1) * 2 - 1,
            clamp(frame.live_enemy_count / max(1, spawned), 0, 1) * 2 - 1,
        ]

        enemies_sorted = sorted(
            frame.enemies, key=lambda e: (e.x - px) ** 2 + (e.y - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - px) / cfg.width, -1, 1),
                    clamp((e.y - py) / cfg.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "wave": self._last.wave,
            "score": self._last.score,
            "health": self._last.player_hp,
            "num_enemies": self._last.live_enemy_count,
            "num_bullets": len(self._last.projectiles),
            "waves_cleared": self._waves_cleared,
            "damage_taken": self._damage_taken,
            "upgrades": self.session.upgrades,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import SurvivorWindow
            self._window = SurvivorWindow(self.config.width, self.config.height)

        self._window.show(self._last)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42, weapon: str = "directional"):
    """Run a random-policy episode and print its return"""
    kwargs = dict(ENV_CONFIG, weapon=weapon)
    env = SurvivorEnv(render_mode="human" if render else None, **kwargs)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print(f"Running episode with {weapon} weapon...")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.1f}")
    print(f"Reached wave {info['wave']} with score {info['score']} "
          f"(upgrades: {', '.join(info['upgrades']) or 'none'})")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=False)
