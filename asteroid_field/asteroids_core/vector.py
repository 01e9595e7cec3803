"""
Vector Math
===========

Immutable 2D vector used for every position and velocity in the simulation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


def wrap_coordinate(value: float, extent: float, margin: float) -> float:
    """
    Wrap a single coordinate around the toroidal field.

    Anything beyond ``extent + margin`` (or below ``-margin``) is shifted by
    exactly ``extent + 2 * margin`` so motion stays continuous.
    """
    span = extent + 2 * margin
    if value > extent + margin:
        return value - span
    if value < -margin:
        return value + span
    return value


@dataclass(frozen=True)
class Vec2:
    """2D point or vector."""
    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def from_angle(radians: float, length: float = 1.0) -> "Vec2":
        return Vec2(math.cos(radians) * length, math.sin(radians) * length)

    @staticmethod
    def from_degrees(degrees: float, length: float = 1.0) -> "Vec2":
        return Vec2.from_angle(math.radians(degrees), length)

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def wrapped(self, width: float, height: float, margin: float) -> "Vec2":
        """Return this point wrapped onto the field."""
        return Vec2(
            wrap_coordinate(self.x, width, margin),
            wrap_coordinate(self.y, height, margin)
        )

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
