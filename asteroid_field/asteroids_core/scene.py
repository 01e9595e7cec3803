"""
Scene Frames
============

Converts the game model into a transport-neutral frame for the renderer, and
packs frames into fixed-size numpy arrays for Gymnasium observations.

A frame is the whole rendering contract: nothing else about the model is
exposed to the drawing side.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING
import numpy as np

from asteroid_field.asteroids_core.asteroid_catalog import (
    SIZE_LADDER,
    AsteroidCatalog,
    AsteroidSize,
    get_catalog
)
from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import GameState

if TYPE_CHECKING:
    from asteroid_field.asteroids_core.game import GameModel

Point = Tuple[float, float]

STATE_IDS = {
    GameState.START.value: 0,
    GameState.PLAYING.value: 1,
    GameState.GAME_OVER.value: 2,
}
SIZE_IDS = {size.tag: index for index, size in enumerate(SIZE_LADDER)}


def _point(p: Point) -> Dict[str, float]:
    return {"x": p[0], "y": p[1]}


@dataclass(frozen=True)
class ShipView:
    position: Point
    velocity: Point
    angle: float
    thrusting: bool
    invincibility: int


@dataclass(frozen=True)
class BulletView:
    position: Point
    life: int


@dataclass(frozen=True)
class AsteroidView:
    position: Point
    size: str
    angle: float
    vertices: Tuple[Point, ...]   # Local offsets in world units, unrotated


@dataclass(frozen=True)
class ParticleView:
    position: Point
    life: int
    max_life: int
    color: str

    @property
    def fade(self) -> float:
        """Remaining life as a ratio in [0, 1]."""
        if self.max_life <= 0:
            return 0.0
        return max(0.0, min(1.0, self.life / self.max_life))


@dataclass(frozen=True)
class SceneFrame:
    """
    Everything the renderer needs for one frame.

    Frames are immutable; ``to_json`` is canonical so two identical sessions
    produce byte-identical output.
    """
    state: str
    ship: ShipView
    bullets: Tuple[BulletView, ...]
    asteroids: Tuple[AsteroidView, ...]
    particles: Tuple[ParticleView, ...]
    score: int
    lives: int
    level: int
    frame: int

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict."""
        return {
            "state": self.state,
            "ship": {
                "position": _point(self.ship.position),
                "velocity": _point(self.ship.velocity),
                "angle": self.ship.angle,
                "thrusting": self.ship.thrusting,
                "invincibility": self.ship.invincibility,
            },
            "bullets": [
                {"position": _point(b.position), "life": b.life}
                for b in self.bullets
            ],
            "asteroids": [
                {
                    "position": _point(a.position),
                    "size": a.size,
                    "angle": a.angle,
                    "vertices": [_point(v) for v in a.vertices],
                }
                for a in self.asteroids
            ],
            "particles": [
                {
                    "position": _point(p.position),
                    "life": p.life,
                    "max_life": p.max_life,
                    "color": p.color,
                }
                for p in self.particles
            ],
            "score": self.score,
            "lives": self.lives,
            "level": self.level,
            "frame": self.frame,
        }

    def to_json(self) -> str:
        """Canonical JSON encoding (sorted keys, compact)."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def digest(self) -> str:
        """Short hash of the canonical encoding, for replay checks."""
        return hashlib.sha256(self.to_json().encode()).hexdigest()[:16]

    def to_obs_dict(
        self,
        max_asteroids: int = 64,
        max_bullets: int = 5,
        max_particles: int = 128
    ) -> Dict[str, np.ndarray]:
        """
        Convert to Gymnasium observation dictionary.

        Variable-length lists are padded to fixed size with a mask; entries
        beyond the cap are dropped.
        """
        asteroid_x = np.zeros(max_asteroids, dtype=np.float32)
        asteroid_y = np.zeros(max_asteroids, dtype=np.float32)
        asteroid_angle = np.zeros(max_asteroids, dtype=np.float32)
        asteroid_size = np.full(max_asteroids, -1, dtype=np.int16)
        asteroid_mask = np.zeros(max_asteroids, dtype=bool)
        for i, asteroid in enumerate(self.asteroids[:max_asteroids]):
            asteroid_x[i], asteroid_y[i] = asteroid.position
            asteroid_angle[i] = asteroid.angle
            asteroid_size[i] = SIZE_IDS[asteroid.size]
            asteroid_mask[i] = True

        bullet_x = np.zeros(max_bullets, dtype=np.float32)
        bullet_y = np.zeros(max_bullets, dtype=np.float32)
        bullet_life = np.zeros(max_bullets, dtype=np.int32)
        bullet_mask = np.zeros(max_bullets, dtype=bool)
        for i, bullet in enumerate(self.bullets[:max_bullets]):
            bullet_x[i], bullet_y[i] = bullet.position
            bullet_life[i] = bullet.life
            bullet_mask[i] = True

        particle_x = np.zeros(max_particles, dtype=np.float32)
        particle_y = np.zeros(max_particles, dtype=np.float32)
        particle_fade = np.zeros(max_particles, dtype=np.float32)
        particle_mask = np.zeros(max_particles, dtype=bool)
        for i, particle in enumerate(self.particles[:max_particles]):
            particle_x[i], particle_y[i] = particle.position
            particle_fade[i] = particle.fade
            particle_mask[i] = True

        return {
            # Core state
            "state": np.array(STATE_IDS[self.state], dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "lives": np.array(self.lives, dtype=np.int32),
            "level": np.array(self.level, dtype=np.int32),
            "frame": np.array(self.frame, dtype=np.int64),

            # Ship
            "ship_position": np.array(self.ship.position, dtype=np.float32),
            "ship_velocity": np.array(self.ship.velocity, dtype=np.float32),
            "ship_angle": np.array(self.ship.angle, dtype=np.float32),
            "ship_thrusting": np.array(int(self.ship.thrusting), dtype=np.int8),
            "ship_invincibility": np.array(self.ship.invincibility, dtype=np.int32),

            # Asteroids
            "asteroid_x": asteroid_x,
            "asteroid_y": asteroid_y,
            "asteroid_angle": asteroid_angle,
            "asteroid_size": asteroid_size,
            "asteroid_mask": asteroid_mask,

            # Bullets
            "bullet_x": bullet_x,
            "bullet_y": bullet_y,
            "bullet_life": bullet_life,
            "bullet_mask": bullet_mask,

            # Particles
            "particle_x": particle_x,
            "particle_y": particle_y,
            "particle_fade": particle_fade,
            "particle_mask": particle_mask,
            "particle_count": np.array(len(self.particles), dtype=np.int32),
        }


class SceneEncoder:
    """Builds scene frames from the live model."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[AsteroidCatalog] = None
    ):
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = catalog if catalog is not None else get_catalog(config)

    def _outline(self, size: AsteroidSize, vertices) -> Tuple[Point, ...]:
        radius = self._catalog.radius(size)
        return tuple((v.x * radius, v.y * radius) for v in vertices)

    def build(self, model: "GameModel") -> SceneFrame:
        """Build a frame from current game state."""
        ship = model.ship
        return SceneFrame(
            state=model.state.value,
            ship=ShipView(
                position=ship.position.as_tuple(),
                velocity=ship.velocity.as_tuple(),
                angle=ship.angle,
                thrusting=ship.thrusting,
                invincibility=ship.invincibility
            ),
            bullets=tuple(
                BulletView(position=b.position.as_tuple(), life=b.life)
                for b in model.bullets
            ),
            asteroids=tuple(
                AsteroidView(
                    position=a.position.as_tuple(),
                    size=a.size.tag,
                    angle=a.angle,
                    vertices=self._outline(a.size, a.vertices)
                )
                for a in model.asteroids
            ),
            particles=tuple(
                ParticleView(
                    position=p.position.as_tuple(),
                    life=p.life,
                    max_life=p.max_life,
                    color=p.color
                )
                for p in model.particles
            ),
            score=model.score,
            lives=model.lives,
            level=model.level,
            frame=model.frame
        )
