import numpy as np

from vibenator.config import ENV_CONFIG, BalanceConfig
from vibenator.env import SurvivorEnv


def test_spaces_and_reset():
    env = SurvivorEnv(k_enemies=5)
    obs, info = env.reset(seed=0)
    assert obs.shape == (14,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert env.action_space.n == 9
    assert info["wave"] == 1
    assert info["num_enemies"] == 6
    assert info["health"] == 3


def test_step_returns_gym_tuple():
    env = SurvivorEnv()
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(0)
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert reward == 1.0  # one frame of score trickle
    assert terminated is False and truncated is False
    assert info["step"] == 1


def test_same_seed_is_deterministic():
    a = SurvivorEnv()
    b = SurvivorEnv()
    a.reset(seed=7)
    b.reset(seed=7)
    for action in [1, 1, 3, 5, 0, 7, 2] * 20:
        oa, ra, *_ = a.step(action)
        ob, rb, *_ = b.step(action)
        assert np.array_equal(oa, ob)
        assert ra == rb


def test_truncates_at_max_steps():
    env = SurvivorEnv(max_steps=5)
    env.reset(seed=2)
    for _ in range(4):
        *_, truncated, _ = env.step(0)
        assert not truncated
    *_, truncated, _ = env.step(0)
    assert truncated


def test_wave_clear_picks_upgrade_and_starts_next_wave():
    env = SurvivorEnv(config=BalanceConfig(wave_clear_delay_frames=0))
    env.reset(seed=3)
    env.session._enemies.clear()
    obs, reward, terminated, truncated, info = env.step(0)
    assert info["wave"] == 2
    assert info["waves_cleared"] == 1
    assert len(info["upgrades"]) == 1
    assert info["num_enemies"] == 8
    assert reward >= 100.0
    assert not terminated


def test_game_over_terminates():
    env = SurvivorEnv()
    env.reset(seed=4)
    session = env.session
    enemy = session._enemies[0]
    session._enemies = [enemy]
    session._player.hp = 1
    enemy.x, enemy.y = session._player.x, session._player.y
    obs, reward, terminated, truncated, info = env.step(0)
    assert terminated
    assert info["health"] == 0
    assert reward < 0

    # further steps are no-ops
    obs, reward, terminated, truncated, info = env.step(1)
    assert terminated
    assert reward == 0.0


def test_default_env_config_builds_env():
    env = SurvivorEnv(**ENV_CONFIG)
    assert env.max_steps == ENV_CONFIG["max_steps"]
    assert env.k_enemies == ENV_CONFIG["k_enemies"]
    obs, _ = env.reset(seed=5)
    assert env.observation_space.contains(obs)
