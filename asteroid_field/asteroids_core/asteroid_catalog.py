"""
Asteroid Catalog
================

Provides convenient access to asteroid size definitions loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from asteroid_field.asteroids_core.config_loader import (
    AsteroidSizeConfig,
    GameConfig,
    get_config
)


class AsteroidSize(Enum):
    """Size category. The value is the tag used in config and scene frames."""
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"

    @property
    def tag(self) -> str:
        return self.value


# Split order, largest first
SIZE_LADDER: Tuple[AsteroidSize, ...] = (
    AsteroidSize.LARGE,
    AsteroidSize.MEDIUM,
    AsteroidSize.SMALL,
)


@dataclass
class AsteroidType:
    """
    Runtime representation of an asteroid size.

    Wraps AsteroidSizeConfig with the size it describes.
    """
    size: AsteroidSize
    config: AsteroidSizeConfig

    @property
    def radius(self) -> float:
        return self.config.radius

    @property
    def points(self) -> int:
        return self.config.points

    @property
    def color(self) -> str:
        return self.config.color

    def __repr__(self) -> str:
        return f"AsteroidType({self.size.tag}: r={self.radius}, {self.points}pts)"


class AsteroidCatalog:
    """
    The size ladder: radius, points and color per size, plus split order.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.

        Raises:
            ValueError: If a size of the ladder is missing from config.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._types: Dict[AsteroidSize, AsteroidType] = {
            size: AsteroidType(size, config.get_size(size.tag))
            for size in SIZE_LADDER
        }

    def __getitem__(self, size: AsteroidSize) -> AsteroidType:
        return self._types[size]

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self):
        return (self._types[size] for size in SIZE_LADDER)

    def radius(self, size: AsteroidSize) -> float:
        """Collision and outline radius of a size."""
        return self._types[size].radius

    def points(self, size: AsteroidSize) -> int:
        """Points awarded for destroying an asteroid of this size."""
        return self._types[size].points

    def color(self, size: AsteroidSize) -> str:
        return self._types[size].color

    def get_child_size(self, size: AsteroidSize) -> Optional[AsteroidSize]:
        """
        Get the size produced by splitting an asteroid.

        Returns:
            Next smaller size, or None if this size just shatters.
        """
        index = SIZE_LADDER.index(size)
        if index + 1 >= len(SIZE_LADDER):
            return None
        return SIZE_LADDER[index + 1]

    def get_by_tag(self, tag: str) -> AsteroidType:
        """Get asteroid type by tag (case-insensitive)."""
        return self._types[AsteroidSize(tag.lower())]


# Module-level singleton
_cached_catalog: Optional[AsteroidCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> AsteroidCatalog:
    """
    Get the asteroid catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        AsteroidCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = AsteroidCatalog(config)
    return _cached_catalog
