"""
Particle Bursts
===============

Explosion debris and engine trail. Particles are purely cosmetic: they never
collide and are not wrapped.
"""

from __future__ import annotations

import math
from typing import List, Optional

from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import Particle, Ship
from asteroid_field.asteroids_core.rng import GameRng, Uniform, UniformInt
from asteroid_field.asteroids_core.vector import Vec2


class ParticleEmitter:
    """Creates particle bursts from config-driven ranges."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._explosion = config.particles.explosion
        self._thrust = config.particles.thrust
        self._ship_radius = config.ship.radius

    def explosion(
        self,
        position: Vec2,
        color: str,
        count: int,
        rng: GameRng
    ) -> List[Particle]:
        """
        Radial burst of debris.

        Each particle gets a uniform direction, a speed and a life; the life
        also becomes ``max_life`` so the renderer can fade it.
        """
        speed_range = Uniform(*self._explosion.speed)
        life_range = UniformInt(*self._explosion.life)

        particles = []
        for _ in range(count):
            direction = rng.step(Uniform(0.0, 2 * math.pi))
            speed = rng.step(speed_range)
            life = rng.step(life_range)
            particles.append(Particle(
                position=position,
                velocity=Vec2.from_angle(direction, speed),
                life=life,
                max_life=life,
                color=color
            ))
        return particles

    def asteroid_explosion(self, position: Vec2, color: str, rng: GameRng) -> List[Particle]:
        return self.explosion(position, color, self._explosion.asteroid_count, rng)

    def ship_explosion(self, position: Vec2, rng: GameRng) -> List[Particle]:
        return self.explosion(
            position, self._explosion.ship_color, self._explosion.ship_count, rng
        )

    def thrust_trail(self, ship: Ship, rng: GameRng) -> List[Particle]:
        """
        Exhaust particles behind a thrusting ship.

        Emitted from the point one ship radius behind the hull, pointing
        backwards with some spread and carrying part of the ship's velocity.
        """
        settings = self._thrust
        reverse = math.radians(ship.angle) + math.pi
        origin = ship.position + Vec2.from_angle(reverse, self._ship_radius)
        inherited = ship.velocity.scale(settings.inherit_velocity)

        particles = []
        for _ in range(settings.per_tick):
            spread = rng.step(Uniform(-settings.spread, settings.spread))
            speed = rng.step(Uniform(*settings.speed))
            life = rng.step(UniformInt(*settings.life))
            particles.append(Particle(
                position=origin,
                velocity=Vec2.from_angle(reverse + spread, speed) + inherited,
                life=life,
                max_life=life,
                color=settings.color
            ))
        return particles
