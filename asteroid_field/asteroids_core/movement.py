"""
Movement
========

Fixed-step integration for every entity on the toroidal field. One call per
entity list per tick; the simulation is frame-count based, not wall-clock.
"""

from __future__ import annotations

from typing import List, Optional

from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import (
    Asteroid,
    Bullet,
    Keys,
    Particle,
    Ship
)
from asteroid_field.asteroids_core.vector import Vec2


class Movement:
    """
    Integrates positions and applies ship handling.

    Ship, bullets and asteroids wrap around the field; particles do not and
    simply expire wherever they drift.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize movement rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._width = config.arena.width
        self._height = config.arena.height
        self._margin = config.arena.wrap_margin
        self._ship = config.ship

    def wrap(self, position: Vec2) -> Vec2:
        """Wrap a position onto the field."""
        return position.wrapped(self._width, self._height, self._margin)

    def update_ship(self, ship: Ship, keys: Keys) -> None:
        """
        Turn, thrust, apply friction, then integrate and wrap.

        Friction applies every tick whether or not the engine is on.
        """
        if keys.left:
            ship.angle -= self._ship.rotation_speed
        if keys.right:
            ship.angle += self._ship.rotation_speed

        velocity = ship.velocity
        if keys.up:
            velocity = velocity + ship.heading.scale(self._ship.thrust)
        velocity = velocity.scale(self._ship.friction)

        ship.velocity = velocity
        ship.position = self.wrap(ship.position + velocity)
        ship.thrusting = keys.up

    def update_bullets(self, bullets: List[Bullet]) -> List[Bullet]:
        """Move bullets and return the ones still alive."""
        alive = []
        for bullet in bullets:
            bullet.position = self.wrap(bullet.position + bullet.velocity)
            bullet.life -= 1
            if not bullet.expired:
                alive.append(bullet)
        return alive

    def update_asteroids(self, asteroids: List[Asteroid]) -> None:
        """Drift and spin asteroids. Spin is display-only."""
        for asteroid in asteroids:
            asteroid.position = self.wrap(asteroid.position + asteroid.velocity)
            asteroid.angle += asteroid.rotation_speed

    def update_particles(self, particles: List[Particle]) -> List[Particle]:
        """Move particles (no wrap) and return the ones still alive."""
        alive = []
        for particle in particles:
            particle.position = particle.position + particle.velocity
            particle.life -= 1
            if not particle.expired:
                alive.append(particle)
        return alive
