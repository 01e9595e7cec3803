"""
RNG - Seeded Draw Stream
========================

Provides the single deterministic source of randomness for a game session.
Every randomized attribute (asteroid placement, velocity, outline jitter,
particle spread) is drawn from here so a fixed seed reproduces a session.
"""

from __future__ import annotations

import random
from typing import Any, NamedTuple, Optional, Tuple, Union


class Uniform(NamedTuple):
    """Uniform float in [lo, hi]."""
    lo: float
    hi: float


class UniformInt(NamedTuple):
    """Uniform integer in [lo, hi], both ends inclusive."""
    lo: int
    hi: int


Distribution = Union[Uniform, UniformInt]

SEED_BITS = 32


def fresh_seed() -> int:
    """Pick a seed from OS entropy for unseeded sessions."""
    return random.SystemRandom().getrandbits(SEED_BITS)


def _draw(source: random.Random, distribution: Distribution) -> Union[float, int]:
    if isinstance(distribution, UniformInt):
        return source.randint(distribution.lo, distribution.hi)
    if isinstance(distribution, Uniform):
        return source.uniform(distribution.lo, distribution.hi)
    raise ValueError(f"Unknown distribution: {distribution!r}")


def initial_state(seed: Optional[int]) -> Tuple[Any, ...]:
    """Generator state for a seed."""
    return random.Random(seed).getstate()


def step(distribution: Distribution, state: Tuple[Any, ...]) -> Tuple[Union[float, int], Tuple[Any, ...]]:
    """
    Draw one value without touching any shared generator.

    Args:
        distribution: What to draw.
        state: Generator state (from ``initial_state`` or a previous ``step``).

    Returns:
        Tuple of (value, next_state).
    """
    source = random.Random()
    source.setstate(state)
    value = _draw(source, distribution)
    return value, source.getstate()


class GameRng:
    """
    Stateful draw stream owned by the game model.

    Wraps a private ``random.Random``; the module-level ``random`` functions
    are never used so sessions stay reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize generator.

        Args:
            seed: Random seed for reproducibility. A fresh seed is picked
                if None, so every stream can be replayed from ``seed``.
        """
        self._seed = seed if seed is not None else fresh_seed()
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        """Seed the stream was last reset with."""
        return self._seed

    def step(self, distribution: Distribution) -> Union[float, int]:
        """Draw one value from a distribution, advancing the stream."""
        return _draw(self._rng, distribution)

    def uniform(self, lo: float, hi: float) -> float:
        return self._rng.uniform(lo, hi)

    def randint(self, lo: int, hi: int) -> int:
        return self._rng.randint(lo, hi)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the stream.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)

    def get_state(self) -> Tuple[Any, ...]:
        """Get generator state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: Tuple[Any, ...]) -> None:
        """Restore generator state."""
        self._rng.setstate(state)
