"""
Game Rules
==========

Handles wave sizing, firing permission and life loss.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from asteroid_field.asteroids_core.config_loader import GameConfig, get_config


@dataclass
class LifeResult:
    """Result of losing a life."""
    lives: int
    game_over: bool

    @staticmethod
    def respawn(lives: int) -> "LifeResult":
        return LifeResult(lives, False)

    @staticmethod
    def final(lives: int) -> "LifeResult":
        return LifeResult(lives, True)


class WaveRules:
    """
    Number of asteroids per wave.

    The opening wave has a fixed size; clearing the field at level N starts
    level N + 1 with ``base_count + N`` large asteroids.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._initial_count = config.waves.initial_count
        self._base_count = config.waves.base_count

    @property
    def initial_count(self) -> int:
        return self._initial_count

    def wave_size(self, cleared_level: int) -> int:
        """Asteroids spawned after clearing ``cleared_level``."""
        return self._base_count + cleared_level


class FireRules:
    """Bullet cap and shot cooldown."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._max_live = config.bullets.max_live
        self._cooldown = config.bullets.cooldown

    @property
    def max_live(self) -> int:
        return self._max_live

    @property
    def cooldown(self) -> int:
        return self._cooldown

    def can_fire(self, fire_held: bool, cooldown: int, live_bullets: int) -> bool:
        """True if a shot leaves the ship this tick."""
        return fire_held and cooldown == 0 and live_bullets < self._max_live


class LifeRules:
    """Lives and the game-over condition."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._initial = config.lives.initial

    @property
    def initial(self) -> int:
        return self._initial

    def lose_life(self, lives: int) -> LifeResult:
        """
        Apply a ship hit.

        Args:
            lives: Lives before the hit.

        Returns:
            LifeResult with the remaining lives; game_over once none are left.
        """
        remaining = lives - 1
        if remaining <= 0:
            return LifeResult.final(remaining)
        return LifeResult.respawn(remaining)


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.waves = WaveRules(config)
        self.fire = FireRules(config)
        self.lives = LifeRules(config)
