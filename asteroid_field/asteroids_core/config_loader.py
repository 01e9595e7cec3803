"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


@dataclass(frozen=True)
class ArenaConfig:
    """Canvas geometry and wrap margin."""
    width: int          # Logical canvas width
    height: int         # Logical canvas height
    wrap_margin: float  # Distance beyond an edge before an object wraps

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class ShipConfig:
    """Ship handling parameters."""
    radius: float
    rotation_speed: float       # Degrees per tick
    thrust: float
    friction: float
    start_angle: float
    invincibility_frames: int
    collision_inset: float


@dataclass(frozen=True)
class BulletConfig:
    """Bullet parameters."""
    speed: float
    life: int
    max_live: int
    cooldown: int
    hit_padding: float
    inherit_velocity: float


@dataclass(frozen=True)
class AsteroidSizeConfig:
    """Configuration for a single asteroid size."""
    name: str
    radius: float
    points: int
    color: str


@dataclass(frozen=True)
class AsteroidConfig:
    """Asteroid generation parameters."""
    vertex_count: int
    vertex_jitter: Tuple[float, float]
    spawn_offset: float
    spawn_speed: Tuple[float, float]
    spawn_rotation_speed: Tuple[float, float]
    split_speed: Tuple[float, float]
    split_rotation_speed: Tuple[float, float]
    children_per_split: int
    sizes: Tuple[AsteroidSizeConfig, ...]


@dataclass(frozen=True)
class WaveConfig:
    """Wave sizes."""
    initial_count: int
    base_count: int


@dataclass(frozen=True)
class LivesConfig:
    initial: int


@dataclass(frozen=True)
class ExplosionConfig:
    """Explosion burst parameters."""
    speed: Tuple[float, float]
    life: Tuple[int, int]
    asteroid_count: int
    ship_count: int
    ship_color: str


@dataclass(frozen=True)
class ThrustConfig:
    """Engine trail parameters."""
    per_tick: int
    spread: float
    speed: Tuple[float, float]
    inherit_velocity: float
    life: Tuple[int, int]
    color: str


@dataclass(frozen=True)
class ParticleConfig:
    explosion: ExplosionConfig
    thrust: ThrustConfig


@dataclass(frozen=True)
class ControlsConfig:
    """Key identifiers bound to each action."""
    left: Tuple[str, ...]
    right: Tuple[str, ...]
    thrust: Tuple[str, ...]
    fire: Tuple[str, ...]
    confirm: Tuple[str, ...]

    def bindings(self) -> Dict[str, str]:
        """Map every bound key identifier to its action name."""
        table: Dict[str, str] = {}
        for action in ("left", "right", "thrust", "fire", "confirm"):
            for key_id in getattr(self, action):
                table[key_id] = action
        return table


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_frames: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation array sizes."""
    max_asteroids: int
    max_particles: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    arena: ArenaConfig
    ship: ShipConfig
    bullets: BulletConfig
    asteroids: AsteroidConfig
    waves: WaveConfig
    lives: LivesConfig
    particles: ParticleConfig
    controls: ControlsConfig
    caps: CapsConfig
    observation: ObservationConfig

    @property
    def num_sizes(self) -> int:
        """Number of asteroid sizes in the ladder."""
        return len(self.asteroids.sizes)

    def get_size(self, name: str) -> AsteroidSizeConfig:
        """Get size config by name."""
        for size in self.asteroids.sizes:
            if size.name == name:
                return size
        raise ValueError(f"Invalid asteroid size: {name}")


def _parse_range(data: List, cast=float) -> Tuple:
    """Parse a [lo, hi] pair from YAML."""
    if len(data) != 2:
        raise ValueError(f"Range must have 2 values [lo, hi], got {data}")
    return (cast(data[0]), cast(data[1]))


def _parse_keys(data) -> Tuple[str, ...]:
    """Parse a key binding, accepting a single identifier or a list."""
    if isinstance(data, str):
        return (data,)
    return tuple(str(k) for k in data)


def _parse_size(size_data: dict) -> AsteroidSizeConfig:
    """Parse a single asteroid size from YAML."""
    return AsteroidSizeConfig(
        name=str(size_data["name"]),
        radius=float(size_data["radius"]),
        points=int(size_data["points"]),
        color=str(size_data.get("color", "#ffffff"))
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.arena.width <= 0 or config.arena.height <= 0:
        raise ValueError(
            f"Arena must have positive size, got {config.arena.width}x{config.arena.height}"
        )
    if config.arena.wrap_margin < 0:
        raise ValueError(f"wrap_margin must be >= 0, got {config.arena.wrap_margin}")

    # Size ladder must be largest first with unique names
    sizes = config.asteroids.sizes
    if len(sizes) == 0:
        raise ValueError("At least one asteroid size is required")
    names = [s.name for s in sizes]
    if len(set(names)) != len(names):
        raise ValueError(f"Asteroid size names must be unique, got {names}")
    for bigger, smaller in zip(sizes, sizes[1:]):
        if smaller.radius >= bigger.radius:
            raise ValueError(
                f"Asteroid sizes must shrink: {smaller.name} ({smaller.radius}) "
                f"is not smaller than {bigger.name} ({bigger.radius})"
            )

    if config.asteroids.vertex_count < 3:
        raise ValueError(f"vertex_count must be >= 3, got {config.asteroids.vertex_count}")

    # All ranges are [lo, hi]
    ranges = {
        "asteroids.vertex_jitter": config.asteroids.vertex_jitter,
        "asteroids.spawn_speed": config.asteroids.spawn_speed,
        "asteroids.spawn_rotation_speed": config.asteroids.spawn_rotation_speed,
        "asteroids.split_speed": config.asteroids.split_speed,
        "asteroids.split_rotation_speed": config.asteroids.split_rotation_speed,
        "particles.explosion.speed": config.particles.explosion.speed,
        "particles.explosion.life": config.particles.explosion.life,
        "particles.thrust.speed": config.particles.thrust.speed,
        "particles.thrust.life": config.particles.thrust.life,
    }
    for name, (lo, hi) in ranges.items():
        if lo > hi:
            raise ValueError(f"{name} range is inverted: [{lo}, {hi}]")

    if config.bullets.max_live < 1:
        raise ValueError(f"bullets.max_live must be >= 1, got {config.bullets.max_live}")
    if config.lives.initial < 1:
        raise ValueError(f"lives.initial must be >= 1, got {config.lives.initial}")

    # A key may only drive one action
    seen: Dict[str, str] = {}
    for action in ("left", "right", "thrust", "fire", "confirm"):
        if not getattr(config.controls, action):
            raise ValueError(f"controls.{action} needs at least one key")
        for key_id in getattr(config.controls, action):
            if key_id in seen:
                raise ValueError(
                    f"Key '{key_id}' bound to both '{seen[key_id]}' and '{action}'"
                )
            seen[key_id] = action


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    arena_data = raw["arena"]
    arena = ArenaConfig(
        width=int(arena_data["width"]),
        height=int(arena_data["height"]),
        wrap_margin=float(arena_data.get("wrap_margin", 50))
    )

    ship_data = raw["ship"]
    ship = ShipConfig(
        radius=float(ship_data["radius"]),
        rotation_speed=float(ship_data["rotation_speed"]),
        thrust=float(ship_data["thrust"]),
        friction=float(ship_data["friction"]),
        start_angle=float(ship_data.get("start_angle", -90.0)),
        invincibility_frames=int(ship_data["invincibility_frames"]),
        collision_inset=float(ship_data.get("collision_inset", 5))
    )

    bullet_data = raw["bullets"]
    bullets = BulletConfig(
        speed=float(bullet_data["speed"]),
        life=int(bullet_data["life"]),
        max_live=int(bullet_data["max_live"]),
        cooldown=int(bullet_data["cooldown"]),
        hit_padding=float(bullet_data.get("hit_padding", 3)),
        inherit_velocity=float(bullet_data.get("inherit_velocity", 0.5))
    )

    asteroid_data = raw["asteroids"]
    asteroids = AsteroidConfig(
        vertex_count=int(asteroid_data["vertex_count"]),
        vertex_jitter=_parse_range(asteroid_data["vertex_jitter"]),
        spawn_offset=float(asteroid_data.get("spawn_offset", 30)),
        spawn_speed=_parse_range(asteroid_data["spawn_speed"]),
        spawn_rotation_speed=_parse_range(asteroid_data["spawn_rotation_speed"]),
        split_speed=_parse_range(asteroid_data["split_speed"]),
        split_rotation_speed=_parse_range(asteroid_data["split_rotation_speed"]),
        children_per_split=int(asteroid_data.get("children_per_split", 2)),
        sizes=tuple(_parse_size(s) for s in asteroid_data["sizes"])
    )

    wave_data = raw["waves"]
    waves = WaveConfig(
        initial_count=int(wave_data["initial_count"]),
        base_count=int(wave_data["base_count"])
    )

    lives = LivesConfig(initial=int(raw["lives"]["initial"]))

    explosion_data = raw["particles"]["explosion"]
    thrust_data = raw["particles"]["thrust"]
    particles = ParticleConfig(
        explosion=ExplosionConfig(
            speed=_parse_range(explosion_data["speed"]),
            life=_parse_range(explosion_data["life"], int),
            asteroid_count=int(explosion_data["asteroid_count"]),
            ship_count=int(explosion_data["ship_count"]),
            ship_color=str(explosion_data.get("ship_color", "#00ffff"))
        ),
        thrust=ThrustConfig(
            per_tick=int(thrust_data["per_tick"]),
            spread=float(thrust_data["spread"]),
            speed=_parse_range(thrust_data["speed"]),
            inherit_velocity=float(thrust_data.get("inherit_velocity", 0.3)),
            life=_parse_range(thrust_data["life"], int),
            color=str(thrust_data.get("color", "#ffa500"))
        )
    )

    controls_data = raw["controls"]
    controls = ControlsConfig(
        left=_parse_keys(controls_data["left"]),
        right=_parse_keys(controls_data["right"]),
        thrust=_parse_keys(controls_data["thrust"]),
        fire=_parse_keys(controls_data["fire"]),
        confirm=_parse_keys(controls_data["confirm"])
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(max_frames=int(caps_data.get("max_frames", 108000)))

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_asteroids=int(obs_data.get("max_asteroids", 64)),
        max_particles=int(obs_data.get("max_particles", 128))
    )

    config = GameConfig(
        arena=arena,
        ship=ship,
        bullets=bullets,
        asteroids=asteroids,
        waves=waves,
        lives=lives,
        particles=particles,
        controls=controls,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
