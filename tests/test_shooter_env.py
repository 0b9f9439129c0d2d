import numpy as np
import pytest

from rocket_shooter.entities import Phase
from rocket_shooter.shooter_env import DEFAULT_REWARD, ShooterEnv, run_random_episode

from .conftest import make_obstacle, make_pickup, on_player

STAY = np.array([0, 0, 0])


@pytest.fixture
def env():
    e = ShooterEnv(max_steps=200)
    yield e
    e.close()


def test_reset_observation(env):
    obs, info = env.reset(seed=0)
    assert obs.shape == (31,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["phase"] == "active"
    assert info["step"] == 0
    assert info["ammo"] == 20


def test_empty_slots_are_zero(env):
    obs, _ = env.reset(seed=0)
    # no hazards or pickups on the field yet
    assert np.all(obs[5:] == 0.0)


def test_step_survival_reward(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(STAY)
    assert obs.shape == (31,)
    assert reward == pytest.approx(2 * DEFAULT_REWARD["R_SURVIVE"])
    assert not terminated
    assert not truncated
    assert info["step"] == 1
    assert info["ticks"] == 2


def test_move_and_fire_actions(env):
    env.reset(seed=0)
    _, reward, _, _, info = env.step(np.array([1, 1, 1]))
    assert env.world.player.y < 300
    assert info["ammo"] == 20 - 3 - 1
    assert reward == pytest.approx(2 * DEFAULT_REWARD["R_SURVIVE"] - 2 * DEFAULT_REWARD["R_SHOT"])


def test_nearby_obstacle_is_observed(env):
    env.reset(seed=0)
    env.world.obstacles.append(make_obstacle(400, 280))
    obs, *_ = env.step(STAY)
    assert obs[5] > 0
    assert np.all(obs[7:] == 0.0)


def test_pickup_reward(env):
    env.reset(seed=0)
    env.world.pickups.append(make_pickup(*on_player(env.world)))
    _, reward, _, _, info = env.step(STAY)
    assert info["pickups_collected"] == 1
    assert reward == pytest.approx(2 * DEFAULT_REWARD["R_SURVIVE"] + DEFAULT_REWARD["R_PICKUP"])


def test_death_terminates_with_penalty(env):
    env.reset(seed=0)
    env.world.obstacles.append(make_obstacle(*on_player(env.world)))
    _, reward, terminated, truncated, info = env.step(STAY)
    assert terminated
    assert not truncated
    assert info["phase"] == Phase.GAME_OVER.value
    assert reward == pytest.approx(-DEFAULT_REWARD["R_DEATH"])


def test_truncates_at_max_steps():
    env = ShooterEnv(max_steps=5)
    env.reset(seed=1)
    for _ in range(4):
        assert not env.step(STAY)[3]
    assert env.step(STAY)[3]
    env.close()


def test_reset_after_game_over(env):
    env.reset(seed=0)
    env.world.obstacles.append(make_obstacle(*on_player(env.world)))
    env.step(STAY)
    obs, info = env.reset()
    assert info["phase"] == "active"
    assert info["score"] == 0
    assert env.observation_space.contains(obs)


def test_same_seed_same_episode():
    def rollout(seed):
        env = ShooterEnv(max_steps=120)
        env.reset(seed=seed)
        rewards = [env.step(np.array([i % 3, i % 2, 0]))[1] for i in range(120)]
        info = env.world.info()
        env.close()
        return rewards, info

    assert rollout(3) == rollout(3)


def test_reward_config_overrides_known_keys_only():
    env = ShooterEnv(reward_config={"R_DEATH": 10.0, "name": "custom"})
    assert env.reward_config["R_DEATH"] == 10.0
    assert "name" not in env.reward_config
    env.close()


def test_random_episode_returns_summary():
    info = run_random_episode(seed=0)
    assert "return" in info
    assert info["step"] > 0


def test_game_config_reaches_the_world():
    env = ShooterEnv(game_config={"initial_ammo": 40, "max_health": 150})
    _, info = env.reset(seed=0)
    assert info["ammo"] == 40
    assert info["health"] == 150
    env.close()
