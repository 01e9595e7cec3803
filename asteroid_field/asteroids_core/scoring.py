"""
Scoring System
==============

Applies destruction scores based on asteroid size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from asteroid_field.asteroids_core.asteroid_catalog import (
    AsteroidCatalog,
    AsteroidSize,
    get_catalog
)
from asteroid_field.asteroids_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    size: AsteroidSize

    def __repr__(self) -> str:
        return f"ScoreEvent({self.size.tag}={self.points})"


class ScoreTracker:
    """
    Tracks game score. Scoring is per hit: every destroyed asteroid pays its
    size's value regardless of how it came to exist.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[AsteroidCatalog] = None
    ):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
            catalog: Size catalog. Built from config if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = catalog if catalog is not None else get_catalog(config)
        self._score: int = 0
        self._kills: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def kills(self) -> int:
        """Asteroids destroyed since the last reset."""
        return self._kills

    def get_points(self, size: AsteroidSize) -> int:
        """Points for destroying an asteroid of a given size."""
        return self._catalog.points(size)

    def apply_hit(self, size: AsteroidSize) -> ScoreEvent:
        """
        Apply score for a destroyed asteroid and return the event.

        Args:
            size: Size of the asteroid that was hit.

        Returns:
            ScoreEvent describing the points awarded.
        """
        points = self.get_points(size)
        self._score += points
        self._kills += 1
        return ScoreEvent(points=points, size=size)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._kills = 0
