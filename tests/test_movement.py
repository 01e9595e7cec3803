"""
Tests for integration, wrap-around and ship handling.
"""

import random

import pytest

from asteroid_field.asteroids_core.asteroid_catalog import AsteroidSize
from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.entities import Asteroid, Bullet, Keys, Particle, Ship
from asteroid_field.asteroids_core.movement import Movement
from asteroid_field.asteroids_core.vector import Vec2, wrap_coordinate


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def movement(config):
    return Movement(config)


def make_ship(x=400.0, y=300.0, angle=0.0, velocity=(0.0, 0.0)):
    return Ship(position=Vec2(x, y), velocity=Vec2(*velocity), angle=angle)


class TestWrap:
    """Toroidal wrap."""

    def test_leaving_right_edge_reappears_left(self):
        assert wrap_coordinate(850.0 + 1.0, 800, 50) == pytest.approx(-50.0 + 1.0)

    def test_leaving_left_edge_reappears_right(self):
        assert wrap_coordinate(-50.0 - 2.0, 800, 50) == pytest.approx(850.0 - 2.0)

    def test_boundary_itself_does_not_wrap(self):
        assert wrap_coordinate(850.0, 800, 50) == 850.0
        assert wrap_coordinate(-50.0, 800, 50) == -50.0

    def test_vertical_uses_height(self):
        assert wrap_coordinate(651.0, 600, 50) == pytest.approx(-49.0)

    def test_integrated_positions_stay_in_band(self, movement):
        """Any position in the band plus any bounded velocity stays in the band."""
        rng = random.Random(3)
        for _ in range(500):
            position = Vec2(rng.uniform(-50, 850), rng.uniform(-50, 650))
            velocity = Vec2(rng.uniform(-40, 40), rng.uniform(-40, 40))
            wrapped = movement.wrap(position + velocity)
            assert -50 <= wrapped.x <= 850
            assert -50 <= wrapped.y <= 650


class TestShip:
    """Ship turning, thrust and friction."""

    def test_thrust_one_tick_from_rest(self, movement):
        ship = make_ship(angle=0.0)
        movement.update_ship(ship, Keys(up=True))

        assert ship.velocity.x == pytest.approx(0.12 * 0.99)
        assert ship.velocity.y == pytest.approx(0.0, abs=1e-12)
        assert ship.position.x == pytest.approx(400.0 + 0.12 * 0.99)
        assert ship.position.y == pytest.approx(300.0)
        assert ship.thrusting

    def test_friction_without_thrust(self, movement):
        ship = make_ship(velocity=(1.0, -2.0))
        movement.update_ship(ship, Keys())

        assert ship.velocity.x == pytest.approx(0.99)
        assert ship.velocity.y == pytest.approx(-1.98)
        assert not ship.thrusting

    def test_turning_is_fixed_increment(self, movement, config):
        ship = make_ship(angle=-90.0)
        movement.update_ship(ship, Keys(left=True))
        assert ship.angle == pytest.approx(-90.0 - config.ship.rotation_speed)

        movement.update_ship(ship, Keys(right=True))
        movement.update_ship(ship, Keys(right=True))
        assert ship.angle == pytest.approx(-90.0 + config.ship.rotation_speed)

    def test_both_turn_keys_cancel(self, movement):
        ship = make_ship(angle=10.0)
        movement.update_ship(ship, Keys(left=True, right=True))
        assert ship.angle == pytest.approx(10.0)

    def test_ship_wraps(self, movement):
        ship = make_ship(x=849.0, velocity=(3.0, 0.0))
        movement.update_ship(ship, Keys())
        assert ship.position.x == pytest.approx(849.0 + 3.0 * 0.99 - 900.0)


class TestOtherEntities:
    """Bullets, asteroids and particles."""

    def test_bullet_moves_and_ages(self, movement):
        bullets = [Bullet(position=Vec2(10, 10), velocity=Vec2(7, 0), life=60)]
        alive = movement.update_bullets(bullets)

        assert len(alive) == 1
        assert alive[0].position.x == pytest.approx(17)
        assert alive[0].life == 59

    def test_bullet_expires_at_zero(self, movement):
        bullets = [
            Bullet(position=Vec2(10, 10), velocity=Vec2(1, 0), life=1),
            Bullet(position=Vec2(20, 10), velocity=Vec2(1, 0), life=2),
        ]
        alive = movement.update_bullets(bullets)
        assert [b.position.x for b in alive] == [pytest.approx(21)]

    def test_bullet_wraps(self, movement):
        bullets = [Bullet(position=Vec2(400, -49), velocity=Vec2(0, -7), life=10)]
        alive = movement.update_bullets(bullets)
        assert alive[0].position.y == pytest.approx(-56 + 700)

    def test_asteroid_drifts_and_spins(self, movement):
        asteroid = Asteroid(
            position=Vec2(100, 100),
            velocity=Vec2(1.5, -0.5),
            size=AsteroidSize.LARGE,
            angle=10.0,
            rotation_speed=-2.0,
            vertices=(Vec2(1, 0),) * 10
        )
        movement.update_asteroids([asteroid])

        assert asteroid.position.x == pytest.approx(101.5)
        assert asteroid.position.y == pytest.approx(99.5)
        assert asteroid.angle == pytest.approx(8.0)
        assert asteroid.size is AsteroidSize.LARGE

    def test_particles_do_not_wrap(self, movement):
        particles = [Particle(position=Vec2(-100, 700), velocity=Vec2(-1, 1), life=5, max_life=5, color="#fff")]
        alive = movement.update_particles(particles)

        assert alive[0].position.x == pytest.approx(-101)
        assert alive[0].position.y == pytest.approx(701)
        assert alive[0].life == 4
        assert alive[0].max_life == 5

    def test_particles_expire(self, movement):
        particles = [Particle(position=Vec2(0, 0), velocity=Vec2(0, 0), life=1, max_life=20, color="#fff")]
        assert movement.update_particles(particles) == []
