"""
Collision System
================

Circle-approximate hit tests for bullets against asteroids and the ship
against asteroids, with splitting, debris and score accrual.

Scans are linear and first-match-wins in list order, so results depend only
on the order of the lists and the draw stream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, TYPE_CHECKING

from asteroid_field.asteroids_core.asteroid_catalog import (
    AsteroidCatalog,
    AsteroidSize,
    get_catalog
)
from asteroid_field.asteroids_core.asteroid_factory import AsteroidFactory
from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import Asteroid, Bullet, Particle, Ship
from asteroid_field.asteroids_core.particles import ParticleEmitter
from asteroid_field.asteroids_core.rng import GameRng
from asteroid_field.asteroids_core.scoring import ScoreEvent, ScoreTracker
from asteroid_field.asteroids_core.vector import Vec2

if TYPE_CHECKING:
    from asteroid_field.asteroids_core.game import GameModel


@dataclass
class BulletHit:
    """Result of a single bullet destroying an asteroid."""
    position: Vec2
    size: AsteroidSize
    children: int
    score_event: ScoreEvent


@dataclass
class CollisionReport:
    """Everything that collided during one tick."""
    hits: List[BulletHit] = field(default_factory=list)
    ship_hit: bool = False

    @property
    def points(self) -> int:
        return sum(hit.score_event.points for hit in self.hits)


class CollisionSystem:
    """
    Resolves bullet/asteroid and ship/asteroid contacts.

    Bullets are processed in list order and each scans asteroids in list
    order. Children of a split are appended to the end of the asteroid list,
    so a later bullet in the same tick may still hit them.
    """

    def __init__(
        self,
        scorer: ScoreTracker,
        config: Optional[GameConfig] = None,
        catalog: Optional[AsteroidCatalog] = None
    ):
        """
        Initialize collision system.

        Args:
            scorer: Score tracker credited for every hit.
            config: Game configuration. Uses default if None.
            catalog: Size catalog. Built from config if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scorer = scorer
        self._catalog = catalog if catalog is not None else get_catalog(config)
        self._factory = AsteroidFactory(config, self._catalog)
        self._emitter = ParticleEmitter(config)
        self._hit_padding = config.bullets.hit_padding
        self._ship_radius = config.ship.radius
        self._ship_inset = config.ship.collision_inset

    def bullet_hits(self, bullet: Bullet, asteroid: Asteroid) -> bool:
        """True if the bullet is inside the asteroid's padded circle."""
        reach = self._catalog.radius(asteroid.size) + self._hit_padding
        return bullet.position.distance_to(asteroid.position) < reach

    def ship_hits(self, ship: Ship, asteroid: Asteroid) -> bool:
        """True if the ship overlaps the asteroid (slightly forgiving)."""
        reach = self._catalog.radius(asteroid.size) + self._ship_radius - self._ship_inset
        return ship.position.distance_to(asteroid.position) < reach

    def resolve_bullets(
        self,
        bullets: List[Bullet],
        asteroids: List[Asteroid],
        rng: GameRng
    ) -> Tuple[List[Bullet], List[Asteroid], List[Particle], List[BulletHit]]:
        """
        Resolve every bullet against the asteroid field.

        Args:
            bullets: Live bullets.
            asteroids: Active asteroids.
            rng: Draw stream for splits and debris.

        Returns:
            Tuple of (surviving_bullets, asteroids, new_particles, hits).
        """
        remaining = list(asteroids)
        surviving: List[Bullet] = []
        particles: List[Particle] = []
        hits: List[BulletHit] = []

        for bullet in bullets:
            target_index = None
            for index, asteroid in enumerate(remaining):
                if self.bullet_hits(bullet, asteroid):
                    target_index = index
                    break

            if target_index is None:
                surviving.append(bullet)
                continue

            target = remaining.pop(target_index)
            children = self._factory.split(target, rng)
            remaining.extend(children)
            particles.extend(self._emitter.asteroid_explosion(
                target.position, self._catalog.color(target.size), rng
            ))
            hits.append(BulletHit(
                position=target.position,
                size=target.size,
                children=len(children),
                score_event=self._scorer.apply_hit(target.size)
            ))

        return surviving, remaining, particles, hits

    def find_ship_collision(self, ship: Ship, asteroids: List[Asteroid]) -> Optional[Asteroid]:
        """
        First asteroid touching the ship, or None.

        Always None while the ship is invincible.
        """
        if ship.is_invincible:
            return None
        for asteroid in asteroids:
            if self.ship_hits(ship, asteroid):
                return asteroid
        return None

    def resolve(self, model: "GameModel") -> CollisionReport:
        """
        Resolve all collisions for one tick, mutating the model.

        Ship collisions only mark the hit and queue debris; asteroids are not
        removed by ramming and lives are handled by the game.
        """
        bullets, asteroids, particles, hits = self.resolve_bullets(
            model.bullets, model.asteroids, model.rng
        )
        model.bullets = bullets
        model.asteroids = asteroids
        model.particles.extend(particles)

        report = CollisionReport(hits=hits)

        if self.find_ship_collision(model.ship, model.asteroids) is not None:
            report.ship_hit = True
            model.particles.extend(
                self._emitter.ship_explosion(model.ship.position, model.rng)
            )

        return report
