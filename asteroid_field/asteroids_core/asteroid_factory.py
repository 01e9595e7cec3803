"""
Asteroid Factory
================

Spawns waves of large asteroids at the field edges and splits destroyed
asteroids into smaller fragments.

Draw order per asteroid is fixed (placement, speed, direction, rotation
speed, heading, then one jitter per vertex) so a seed always yields the same
field.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from asteroid_field.asteroids_core.asteroid_catalog import (
    AsteroidCatalog,
    AsteroidSize,
    get_catalog
)
from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import Asteroid
from asteroid_field.asteroids_core.rng import GameRng, Uniform, UniformInt
from asteroid_field.asteroids_core.vector import Vec2

# Edge indices for wave placement
EDGE_TOP = 0
EDGE_RIGHT = 1
EDGE_BOTTOM = 2
EDGE_LEFT = 3

FULL_CIRCLE = Uniform(0.0, 2 * math.pi)


class AsteroidFactory:
    """Creates asteroids for new waves and for splits."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[AsteroidCatalog] = None
    ):
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = catalog if catalog is not None else get_catalog(config)
        self._arena = config.arena
        self._settings = config.asteroids

    @property
    def catalog(self) -> AsteroidCatalog:
        return self._catalog

    def generate_outline(self, rng: GameRng) -> Tuple[Vec2, ...]:
        """
        Build an irregular outline around the unit circle.

        Vertices are evenly spaced in angle; each radius is jittered
        independently.
        """
        count = self._settings.vertex_count
        jitter = Uniform(*self._settings.vertex_jitter)
        vertices = []
        for i in range(count):
            theta = 2 * math.pi * i / count
            vertices.append(Vec2.from_angle(theta, rng.step(jitter)))
        return tuple(vertices)

    def _edge_position(self, rng: GameRng) -> Vec2:
        """Pick a point just outside one of the four edges."""
        width = self._arena.width
        height = self._arena.height
        offset = self._settings.spawn_offset

        edge = rng.step(UniformInt(0, 3))
        if edge == EDGE_TOP:
            return Vec2(rng.uniform(0, width), -offset)
        if edge == EDGE_RIGHT:
            return Vec2(width + offset, rng.uniform(0, height))
        if edge == EDGE_BOTTOM:
            return Vec2(rng.uniform(0, width), height + offset)
        return Vec2(-offset, rng.uniform(0, height))

    def spawn_one(self, rng: GameRng) -> Asteroid:
        """Spawn a single large asteroid at a random edge."""
        position = self._edge_position(rng)
        speed = rng.step(Uniform(*self._settings.spawn_speed))
        direction = rng.step(FULL_CIRCLE)
        rotation_speed = rng.step(Uniform(*self._settings.spawn_rotation_speed))
        angle = rng.uniform(0.0, 360.0)
        return Asteroid(
            position=position,
            velocity=Vec2.from_angle(direction, speed),
            size=AsteroidSize.LARGE,
            angle=angle,
            rotation_speed=rotation_speed,
            vertices=self.generate_outline(rng)
        )

    def spawn_wave(self, count: int, rng: GameRng) -> List[Asteroid]:
        """
        Spawn a wave of large asteroids.

        Args:
            count: Number of asteroids.
            rng: Draw stream; advanced by every asteroid created.

        Returns:
            New asteroids in creation order.
        """
        return [self.spawn_one(rng) for _ in range(max(0, count))]

    def split(self, asteroid: Asteroid, rng: GameRng) -> List[Asteroid]:
        """
        Break a destroyed asteroid into its children.

        Children sit at the parent's position with the parent's angle, but
        draw their own direction, speed, spin and outline.

        Returns:
            Children of the next smaller size, or [] for the smallest size.
        """
        child_size = self._catalog.get_child_size(asteroid.size)
        if child_size is None:
            return []

        speed_range = Uniform(*self._settings.split_speed)
        spin_range = Uniform(*self._settings.split_rotation_speed)

        children = []
        for _ in range(self._settings.children_per_split):
            direction = rng.step(FULL_CIRCLE)
            speed = rng.step(speed_range)
            rotation_speed = rng.step(spin_range)
            children.append(Asteroid(
                position=asteroid.position,
                velocity=Vec2.from_angle(direction, speed),
                size=child_size,
                angle=asteroid.angle,
                rotation_speed=rotation_speed,
                vertices=self.generate_outline(rng)
            ))
        return children


def spawn_wave(count: int, rng: GameRng, config: Optional[GameConfig] = None) -> List[Asteroid]:
    """Convenience wrapper around AsteroidFactory.spawn_wave."""
    return AsteroidFactory(config).spawn_wave(count, rng)


def split(asteroid: Asteroid, rng: GameRng, config: Optional[GameConfig] = None) -> List[Asteroid]:
    """Convenience wrapper around AsteroidFactory.split."""
    return AsteroidFactory(config).split(asteroid, rng)
