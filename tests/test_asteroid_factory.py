"""
Tests for wave spawning and splitting.
"""

import pytest

from asteroid_field.asteroids_core.asteroid_catalog import AsteroidSize
from asteroid_field.asteroids_core.asteroid_factory import AsteroidFactory, spawn_wave, split
from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.rng import GameRng


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def factory(config):
    return AsteroidFactory(config)


def on_spawn_edge(position, offset=30, width=800, height=600):
    x, y = position.x, position.y
    if y == -offset or y == height + offset:
        return 0 <= x <= width
    if x == -offset or x == width + offset:
        return 0 <= y <= height
    return False


class TestSpawnWave:

    def test_wave_is_all_large(self, factory):
        wave = factory.spawn_wave(4, GameRng(1))
        assert len(wave) == 4
        assert all(a.size is AsteroidSize.LARGE for a in wave)

    def test_spawns_just_outside_an_edge(self, factory):
        wave = factory.spawn_wave(40, GameRng(2))
        for asteroid in wave:
            assert on_spawn_edge(asteroid.position), asteroid.position

    def test_velocity_and_spin_within_ranges(self, factory):
        for asteroid in factory.spawn_wave(40, GameRng(3)):
            assert 0.5 <= asteroid.velocity.length() <= 2.0 + 1e-9
            assert -2.0 <= asteroid.rotation_speed <= 2.0
            assert 0.0 <= asteroid.angle <= 360.0

    def test_outline_is_jittered_unit_polygon(self, factory):
        asteroid = factory.spawn_one(GameRng(4))
        assert len(asteroid.vertices) == 10
        for vertex in asteroid.vertices:
            assert 0.7 - 1e-9 <= vertex.length() <= 1.3 + 1e-9

    def test_same_seed_same_wave(self, factory):
        first = factory.spawn_wave(5, GameRng(99))
        second = factory.spawn_wave(5, GameRng(99))
        assert first == second

    def test_empty_wave(self, factory):
        rng = GameRng(5)
        before = rng.get_state()
        assert factory.spawn_wave(0, rng) == []
        assert rng.get_state() == before

    def test_module_wrapper(self, config):
        assert spawn_wave(3, GameRng(6), config) == AsteroidFactory(config).spawn_wave(3, GameRng(6))


class TestSplit:

    def test_large_splits_into_two_medium(self, factory):
        rng = GameRng(7)
        parent = factory.spawn_one(rng)
        children = factory.split(parent, rng)

        assert len(children) == 2
        for child in children:
            assert child.size is AsteroidSize.MEDIUM
            assert child.position == parent.position
            assert child.angle == parent.angle
            assert 1.5 <= child.velocity.length() <= 3.0 + 1e-9
            assert -3.0 <= child.rotation_speed <= 3.0

    def test_medium_splits_into_small(self, factory):
        rng = GameRng(8)
        medium = factory.split(factory.spawn_one(rng), rng)[0]
        children = factory.split(medium, rng)
        assert [c.size for c in children] == [AsteroidSize.SMALL, AsteroidSize.SMALL]

    def test_small_has_no_children(self, factory):
        rng = GameRng(9)
        medium = factory.split(factory.spawn_one(rng), rng)[0]
        small = factory.split(medium, rng)[0]

        before = rng.get_state()
        assert factory.split(small, rng) == []
        assert rng.get_state() == before

    def test_children_get_their_own_outlines(self, factory):
        rng = GameRng(10)
        first, second = factory.split(factory.spawn_one(rng), rng)
        assert first.vertices != second.vertices

    def test_module_wrapper(self, config):
        rng = GameRng(11)
        parent = AsteroidFactory(config).spawn_one(rng)
        assert len(split(parent, rng, config)) == 2
