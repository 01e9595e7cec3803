"""
Tests for Gymnasium environment API.
"""

import dataclasses

import pytest
import numpy as np

from asteroid_field.asteroids_core.asteroid_catalog import AsteroidSize
from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.entities import Asteroid, Bullet
from asteroid_field.asteroids_core.env_gym import AsteroidsEnv, action_to_keys
from asteroid_field.asteroids_core.vector import Vec2

IDLE = np.zeros(4, dtype=np.int8)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = AsteroidsEnv()
    yield env
    env.close()


def still_rock(size, x, y):
    return Asteroid(
        position=Vec2(x, y),
        velocity=Vec2(0.0, 0.0),
        size=size,
        angle=0.0,
        rotation_speed=0.0,
        vertices=(Vec2(1.0, 0.0), Vec2(0.0, 1.0), Vec2(-1.0, 0.0))
    )


class TestAsteroidsEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)

    def test_reset_starts_playing(self, env):
        """Reset confirms straight into a fresh round."""
        obs, info = env.reset(seed=42)

        assert int(obs["state"]) == 1
        assert info["state"] == "playing"
        assert info["lives"] == 3
        assert info["level"] == 1
        assert info["delta_score"] == 0
        assert obs["asteroid_mask"].sum() == 4

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        assert set(obs) == set(env.observation_space.spaces)

        max_ast = env.config.observation.max_asteroids
        max_bul = env.config.bullets.max_live
        assert obs["asteroid_x"].shape == (max_ast,)
        assert obs["asteroid_mask"].shape == (max_ast,)
        assert obs["bullet_x"].shape == (max_bul,)
        assert obs["particle_mask"].shape == (env.config.observation.max_particles,)

    def test_observation_in_space(self, env):
        """Observations should be members of the declared space."""
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        obs, *_ = env.step(np.array([0, 0, 1, 1], dtype=np.int8))
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(IDLE)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert isinstance(info, dict)

    def test_reward_is_score_delta(self, env):
        """Destroying a small asteroid pays its points as reward."""
        env.reset(seed=42)
        model = env.game.model
        model.asteroids = [
            still_rock(AsteroidSize.SMALL, 100.0, 100.0),
            still_rock(AsteroidSize.LARGE, 700.0, 500.0)
        ]
        model.bullets = [Bullet(position=Vec2(100.0, 100.0), velocity=Vec2(0.0, 0.0), life=5)]

        _, reward, _, _, info = env.step(IDLE)

        assert reward == 100.0
        assert info["delta_score"] == 100

    def test_terminates_on_game_over(self, env):
        env.reset(seed=42)
        model = env.game.model
        model.lives = 1
        model.ship.invincibility = 0
        model.asteroids = [still_rock(AsteroidSize.LARGE, 400.0, 300.0)]

        _, _, terminated, truncated, info = env.step(IDLE)

        assert terminated
        assert not truncated
        assert info["life_lost"]
        assert info["state"] == "gameover"

    def test_truncates_at_frame_cap(self, config):
        capped = dataclasses.replace(config, caps=dataclasses.replace(config.caps, max_frames=3))
        env = AsteroidsEnv(config=capped)
        env.reset(seed=1)

        flags = [env.step(IDLE)[3] for _ in range(3)]
        assert flags == [False, False, True]
        env.close()

    def test_deterministic_with_seed(self):
        """Same seed and actions should give the same observations."""
        actions = [np.array([i % 2, 0, 1, i % 3 == 0], dtype=np.int8) for i in range(60)]

        def rollout():
            env = AsteroidsEnv()
            obs, _ = env.reset(seed=123)
            trace = [obs]
            for action in actions:
                trace.append(env.step(action)[0])
            env.close()
            return trace

        for a, b in zip(rollout(), rollout()):
            for key in a:
                np.testing.assert_array_equal(a[key], b[key])

    def test_action_space(self, env):
        assert env.action_space.shape == (4,)
        sample = env.action_space.sample()
        assert action_to_keys(sample) is not None


class TestActionToKeys:

    def test_flags(self):
        keys = action_to_keys([1, 0, 1, 0])
        assert keys.left and keys.up
        assert not keys.right and not keys.space

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            action_to_keys([1, 0, 1])
