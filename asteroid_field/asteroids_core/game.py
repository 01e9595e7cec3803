"""
Core Game
=========

Main game orchestrator combining movement, collisions, scoring, rules and the
start / playing / game-over lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from asteroid_field.asteroids_core.asteroid_catalog import AsteroidCatalog, get_catalog
from asteroid_field.asteroids_core.asteroid_factory import AsteroidFactory
from asteroid_field.asteroids_core.collision import CollisionReport, CollisionSystem
from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import (
    Asteroid,
    Bullet,
    GameState,
    Keys,
    Particle,
    Ship
)
from asteroid_field.asteroids_core.input_state import InputState
from asteroid_field.asteroids_core.movement import Movement
from asteroid_field.asteroids_core.particles import ParticleEmitter
from asteroid_field.asteroids_core.rng import GameRng
from asteroid_field.asteroids_core.rules import GameRules
from asteroid_field.asteroids_core.scene import SceneEncoder, SceneFrame
from asteroid_field.asteroids_core.scoring import ScoreTracker
from asteroid_field.asteroids_core.vector import Vec2


@dataclass
class GameModel:
    """
    Root aggregate for one session.

    Owned by a single CoreGame; every entity belongs to exactly one list here.
    """
    state: GameState
    ship: Ship
    rng: GameRng
    scorer: ScoreTracker
    bullets: List[Bullet] = field(default_factory=list)
    asteroids: List[Asteroid] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    lives: int = 3
    level: int = 1
    keys: Keys = field(default_factory=Keys)
    shoot_cooldown: int = 0
    frame: int = 0

    @property
    def score(self) -> int:
        return self.scorer.score


@dataclass
class TickResult:
    """Result of a single tick."""
    scene: SceneFrame
    state: GameState
    delta_score: int
    collisions: Optional[CollisionReport]
    level_up: bool = False
    life_lost: bool = False


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Input snapshot
    - Movement
    - Collision resolution and splitting
    - Scoring
    - Lives, levels and state transitions
    - Scene frames

    One tick = one fixed step of the current state's update.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        debug: bool = False
    ):
        """
        Initialize game in the START state.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            debug: If True, prints lifecycle events.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug

        # Initialize subsystems
        self._catalog: AsteroidCatalog = get_catalog(config)
        self._factory = AsteroidFactory(config, self._catalog)
        self._emitter = ParticleEmitter(config)
        self._movement = Movement(config)
        self._rules = GameRules(config)
        self._encoder = SceneEncoder(config, self._catalog)
        self._input = InputState(config)

        scorer = ScoreTracker(config, self._catalog)
        self._collisions = CollisionSystem(scorer, config, self._catalog)
        self._model = GameModel(
            state=GameState.START,
            ship=self._new_ship(),
            rng=GameRng(seed),
            scorer=scorer,
            lives=self._rules.lives.initial
        )
        self._populate_start_screen()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def model(self) -> GameModel:
        """The live model. Mutate only between ticks (tests, tools)."""
        return self._model

    @property
    def input(self) -> InputState:
        return self._input

    @property
    def catalog(self) -> AsteroidCatalog:
        return self._catalog

    @property
    def state(self) -> GameState:
        return self._model.state

    @property
    def score(self) -> int:
        """Current score."""
        return self._model.score

    @property
    def lives(self) -> int:
        return self._model.lives

    @property
    def level(self) -> int:
        return self._model.level

    @property
    def frame(self) -> int:
        return self._model.frame

    @property
    def seed(self) -> int:
        """Seed of the current session (picked at random if none was given)."""
        return self._model.rng.seed

    @property
    def is_over(self) -> bool:
        """True if the game has ended."""
        return self._model.state == GameState.GAME_OVER

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def key_down(self, key_id: str) -> bool:
        """Forward a key press. Unbound keys are ignored."""
        return self._input.key_down(key_id)

    def key_up(self, key_id: str) -> bool:
        """Forward a key release. Unbound keys are ignored."""
        return self._input.key_up(key_id)

    def set_keys(self, keys: Keys) -> None:
        """Replace held keys for the next tick."""
        self._input.set_keys(keys)

    def confirm(self) -> None:
        """Latch a confirm press for the next tick."""
        self._input.press_confirm()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> SceneFrame:
        """
        Return to the start screen.

        Args:
            seed: New random seed. Uses previous if None.

        Returns:
            Scene of the fresh start screen.
        """
        model = self._model
        model.rng.reset(seed)
        model.scorer.reset()
        model.state = GameState.START
        model.ship = self._new_ship()
        model.bullets = []
        model.particles = []
        model.lives = self._rules.lives.initial
        model.level = 1
        model.keys = Keys()
        model.shoot_cooldown = 0
        model.frame = 0
        self._input.clear()
        self._populate_start_screen()
        return self.build_scene()

    def start_round(self) -> None:
        """
        Begin a new round (START or GAME_OVER -> PLAYING).

        Resets ship, bullets, particles, score, lives and level, and spawns
        the opening wave from the current draw stream.
        """
        model = self._model
        model.state = GameState.PLAYING
        model.ship = self._new_ship()
        model.bullets = []
        model.particles = []
        model.asteroids = self._factory.spawn_wave(
            self._rules.waves.initial_count, model.rng
        )
        model.scorer.reset()
        model.lives = self._rules.lives.initial
        model.level = 1
        model.shoot_cooldown = 0

        if self._debug:
            print(f"[DEBUG] Round started at frame {model.frame}")

    def tick(self, timestamp: Optional[float] = None) -> SceneFrame:
        """
        Advance one fixed step and return the scene to draw.

        Args:
            timestamp: Host frame timestamp. Only triggers the step.
        """
        return self.advance().scene

    def step(self, keys: Keys, confirm: bool = False) -> TickResult:
        """Set held keys (and optionally confirm), then advance one tick."""
        self._input.set_keys(keys)
        if confirm:
            self._input.press_confirm()
        return self.advance()

    def advance(self) -> TickResult:
        """
        Advance one tick according to the current state.

        Returns:
            TickResult with the new scene and what happened.
        """
        model = self._model
        model.keys = self._input.snapshot()
        confirm = self._input.consume_confirm()
        score_before = model.score

        if model.state == GameState.PLAYING:
            return self._update_playing(score_before)

        if confirm:
            self.start_round()
            model.frame += 1
        elif model.state == GameState.START:
            self._update_start()

        return TickResult(
            scene=self.build_scene(),
            state=model.state,
            delta_score=model.score - score_before,
            collisions=None
        )

    def _update_start(self) -> None:
        """Start screen: asteroids drift for ambience, nothing else moves."""
        self._movement.update_asteroids(self._model.asteroids)
        self._model.frame += 1

    def _update_playing(self, score_before: int) -> TickResult:
        """Full simulation step."""
        model = self._model
        keys = model.keys

        self._movement.update_ship(model.ship, keys)
        self._update_fire(keys)
        if model.ship.thrusting:
            model.particles.extend(self._emitter.thrust_trail(model.ship, model.rng))

        model.bullets = self._movement.update_bullets(model.bullets)
        self._movement.update_asteroids(model.asteroids)
        model.particles = self._movement.update_particles(model.particles)

        if model.ship.invincibility > 0:
            model.ship.invincibility -= 1

        report = self._collisions.resolve(model)

        life_lost = False
        if report.ship_hit:
            life_lost = True
            self._handle_ship_hit()

        level_up = False
        if model.state == GameState.PLAYING and not model.asteroids:
            level_up = True
            self._advance_level()

        model.frame += 1

        return TickResult(
            scene=self.build_scene(),
            state=model.state,
            delta_score=model.score - score_before,
            collisions=report,
            level_up=level_up,
            life_lost=life_lost
        )

    def _update_fire(self, keys: Keys) -> None:
        """Fire from the nose if allowed, otherwise cool down."""
        model = self._model
        if self._rules.fire.can_fire(keys.space, model.shoot_cooldown, len(model.bullets)):
            model.bullets.append(self._new_bullet(model.ship))
            model.shoot_cooldown = self._rules.fire.cooldown
        elif model.shoot_cooldown > 0:
            model.shoot_cooldown -= 1

    def _handle_ship_hit(self) -> None:
        """Lose a life; respawn or end the game."""
        model = self._model
        result = self._rules.lives.lose_life(model.lives)
        model.lives = result.lives

        if result.game_over:
            model.state = GameState.GAME_OVER
            if self._debug:
                print(f"[DEBUG] GAME OVER: score={model.score}, level={model.level}, "
                      f"frame={model.frame}")
            return

        model.ship = self._new_ship()
        if self._debug:
            print(f"[DEBUG] Ship hit, {model.lives} lives left")

    def _advance_level(self) -> None:
        """Field cleared: next level with a bigger wave."""
        model = self._model
        count = self._rules.waves.wave_size(model.level)
        model.level += 1
        model.asteroids = self._factory.spawn_wave(count, model.rng)
        if self._debug:
            print(f"[DEBUG] Level {model.level}: {count} asteroids")

    def _populate_start_screen(self) -> None:
        self._model.asteroids = self._factory.spawn_wave(
            self._rules.waves.initial_count, self._model.rng
        )

    def _new_ship(self) -> Ship:
        """Ship at the center, at rest, pointing up, with full invincibility."""
        ship_config = self._config.ship
        cx, cy = self._config.arena.center
        return Ship(
            position=Vec2(cx, cy),
            velocity=Vec2(0.0, 0.0),
            angle=ship_config.start_angle,
            thrusting=False,
            invincibility=ship_config.invincibility_frames
        )

    def _new_bullet(self, ship: Ship) -> Bullet:
        """Bullet leaving the nose along the heading."""
        bullets = self._config.bullets
        heading = ship.heading
        return Bullet(
            position=ship.position + heading.scale(self._config.ship.radius),
            velocity=heading.scale(bullets.speed) + ship.velocity.scale(bullets.inherit_velocity),
            life=bullets.life
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def build_scene(self) -> SceneFrame:
        """Scene for the current model."""
        return self._encoder.build(self._model)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        model = self._model
        return {
            "state": model.state.value,
            "score": model.score,
            "lives": model.lives,
            "level": model.level,
            "frame": model.frame,
            "kills": model.scorer.kills,
            "asteroid_count": len(model.asteroids),
            "bullet_count": len(model.bullets),
            "invincibility": model.ship.invincibility,
        }
