"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the asteroid game.
One environment step is one simulation tick.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from asteroid_field.asteroids_core.config_loader import GameConfig, load_config
from asteroid_field.asteroids_core.entities import GameState, Keys
from asteroid_field.asteroids_core.game import CoreGame
from asteroid_field.asteroids_core.scene import SIZE_IDS, SceneFrame


def action_to_keys(action: Union[Sequence[int], np.ndarray]) -> Keys:
    """Convert a [left, right, thrust, fire] action to held keys."""
    flags = np.asarray(action, dtype=np.int8).reshape(-1)
    if flags.shape != (4,):
        raise ValueError(f"Action must have 4 flags [left, right, thrust, fire], got shape {flags.shape}")
    return Keys(
        left=bool(flags[0]),
        right=bool(flags[1]),
        up=bool(flags[2]),
        space=bool(flags[3])
    )


class AsteroidsEnv(gym.Env):
    """
    Asteroid shooter as a Gymnasium environment.

    Action Space:
        MultiBinary(4): held flags [left, right, thrust, fire].

    Observation Space:
        Dict of fixed-size arrays packed from the scene frame.

    Reward:
        Points scored this tick.

    Episode:
        reset() confirms straight into play. Terminates on game over,
        truncates after caps.max_frames ticks.
    """

    metadata = {
        "render_modes": [],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[GameConfig] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            config: Already loaded config; takes precedence over config_path.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)
        self._debug = debug
        self._max_asteroids = self._config.observation.max_asteroids
        self._max_bullets = self._config.bullets.max_live
        self._max_particles = self._config.observation.max_particles
        self._max_frames = self._config.caps.max_frames
        self._episode_frames = 0

        self._game = CoreGame(config=self._config, debug=debug)

        self.action_space = spaces.MultiBinary(4)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] AsteroidsEnv initialized")
            print(f"[DEBUG]   Arena: {self._config.arena.width}x{self._config.arena.height}")
            print(f"[DEBUG]   Max asteroids observed: {self._max_asteroids}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_ast = self._max_asteroids
        max_bul = self._max_bullets
        max_par = self._max_particles
        arena = self._config.arena

        return spaces.Dict({
            # Core state
            "state": spaces.Discrete(3),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "lives": spaces.Box(low=0, high=self._config.lives.initial, shape=(), dtype=np.int32),
            "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "frame": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),

            # Ship
            "ship_position": spaces.Box(
                low=-arena.wrap_margin,
                high=max(arena.width, arena.height) + arena.wrap_margin,
                shape=(2,),
                dtype=np.float32
            ),
            "ship_velocity": spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float32),
            "ship_angle": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "ship_thrusting": spaces.Discrete(2),
            "ship_invincibility": spaces.Box(
                low=0, high=self._config.ship.invincibility_frames, shape=(), dtype=np.int32
            ),

            # Asteroids
            "asteroid_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_ast,), dtype=np.float32),
            "asteroid_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_ast,), dtype=np.float32),
            "asteroid_angle": spaces.Box(low=-np.inf, high=np.inf, shape=(max_ast,), dtype=np.float32),
            "asteroid_size": spaces.Box(low=-1, high=len(SIZE_IDS) - 1, shape=(max_ast,), dtype=np.int16),
            "asteroid_mask": spaces.MultiBinary(max_ast),

            # Bullets
            "bullet_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_bul,), dtype=np.float32),
            "bullet_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_bul,), dtype=np.float32),
            "bullet_life": spaces.Box(low=0, high=self._config.bullets.life, shape=(max_bul,), dtype=np.int32),
            "bullet_mask": spaces.MultiBinary(max_bul),

            # Particles
            "particle_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_par,), dtype=np.float32),
            "particle_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_par,), dtype=np.float32),
            "particle_fade": spaces.Box(low=0.0, high=1.0, shape=(max_par,), dtype=np.float32),
            "particle_mask": spaces.MultiBinary(max_par),
            "particle_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and start a round.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)
        result = self._game.step(Keys(), confirm=True)
        self._episode_frames = 0

        obs = self._scene_to_obs(result.scene)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[Sequence[int], np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: Held flags [left, right, thrust, fire].

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        keys = action_to_keys(action)
        result = self._game.step(keys)
        self._episode_frames += 1

        obs = self._scene_to_obs(result.scene)
        reward = float(result.delta_score)
        terminated = result.state == GameState.GAME_OVER
        truncated = not terminated and self._episode_frames >= self._max_frames

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["life_lost"] = result.life_lost
        info["level_up"] = result.level_up

        if self._debug and (result.delta_score or result.life_lost or terminated):
            print(f"[DEBUG] Step {self._episode_frames}: delta_score={result.delta_score}, "
                  f"lives={info['lives']}, asteroids={info['asteroid_count']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: game over at level {info['level']}")

        return obs, reward, terminated, truncated, info

    def _scene_to_obs(self, scene: SceneFrame) -> Dict[str, np.ndarray]:
        """Convert scene frame to observation dict."""
        return scene.to_obs_dict(
            max_asteroids=self._max_asteroids,
            max_bullets=self._max_bullets,
            max_particles=self._max_particles
        )

    def render(self) -> None:
        """Drawing belongs to the host; scene frames are available via ``game``."""
        return None

    def close(self) -> None:
        """Clean up resources."""
        self._game.input.clear()

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
