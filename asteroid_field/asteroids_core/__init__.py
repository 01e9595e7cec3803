"""
Asteroids Core - The heart of the game.

This module provides the core game simulation, the Gymnasium environment
wrapper, and all supporting systems (movement, collisions, particles,
scoring, RNG).

Main exports:
- CoreGame: Tick-driven game simulation
- SceneFrame: Transport-neutral frame emitted every tick
- AsteroidsEnv: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
- ReplayRecorder: Record and verify deterministic sessions
"""

from asteroid_field.asteroids_core.config_loader import GameConfig, load_config
from asteroid_field.asteroids_core.asteroid_catalog import AsteroidSize, AsteroidCatalog
from asteroid_field.asteroids_core.entities import GameState, Keys
from asteroid_field.asteroids_core.game import CoreGame, GameModel, TickResult
from asteroid_field.asteroids_core.scene import SceneFrame
from asteroid_field.asteroids_core.env_gym import AsteroidsEnv
from asteroid_field.asteroids_core.replay_recorder import (
    ReplayRecorder,
    verify_replay,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "AsteroidSize",
    "AsteroidCatalog",
    "GameState",
    "Keys",
    "CoreGame",
    "GameModel",
    "TickResult",
    "SceneFrame",
    "AsteroidsEnv",
    "ReplayRecorder",
    "verify_replay",
    "generate_replay_filename",
]
