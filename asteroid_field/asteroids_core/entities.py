"""
Entities
========

Ship, bullets, asteroids and particles. Plain mutable records owned by the
game model; the simulation updates them in place once per tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from asteroid_field.asteroids_core.asteroid_catalog import AsteroidSize
from asteroid_field.asteroids_core.vector import Vec2


class GameState(Enum):
    """Lifecycle state. The value is the tag emitted in scene frames."""
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameover"


@dataclass(frozen=True)
class Keys:
    """Held-key snapshot read once at the start of a tick."""
    left: bool = False
    right: bool = False
    up: bool = False
    space: bool = False


@dataclass
class Ship:
    position: Vec2
    velocity: Vec2 = field(default_factory=Vec2)
    angle: float = -90.0          # Heading in degrees
    thrusting: bool = False
    invincibility: int = 0        # Frames of collision immunity left

    @property
    def heading(self) -> Vec2:
        """Unit vector along the heading."""
        return Vec2.from_degrees(self.angle)

    @property
    def is_invincible(self) -> bool:
        return self.invincibility > 0


@dataclass
class Bullet:
    position: Vec2
    velocity: Vec2
    life: int

    @property
    def expired(self) -> bool:
        return self.life <= 0


@dataclass
class Asteroid:
    """
    A drifting rock.

    ``vertices`` are unit-circle offsets (already jittered) fixed at creation;
    the outline is scaled by the size's radius when drawn. ``size`` is never
    reassigned: a hit replaces the asteroid with its children.
    """
    position: Vec2
    velocity: Vec2
    size: AsteroidSize
    angle: float
    rotation_speed: float
    vertices: Tuple[Vec2, ...]


@dataclass
class Particle:
    position: Vec2
    velocity: Vec2
    life: int
    max_life: int
    color: str

    @property
    def expired(self) -> bool:
        return self.life <= 0
