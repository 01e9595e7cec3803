"""
Human Play Mode
================

Play the asteroid shooter interactively. This is a thin host around the core:
it forwards key events, ticks the game once per frame and draws the scene
frame it gets back.

Controls:
    - Left/Right (or A/D): Turn
    - Up (or W): Thrust
    - Space: Fire
    - Enter: Start / restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--scale SCALE] [--record PATH]
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from asteroid_field.asteroids_core.config_loader import GameConfig, load_config
from asteroid_field.asteroids_core.game import CoreGame
from asteroid_field.asteroids_core.replay_recorder import ReplayRecorder
from asteroid_field.asteroids_core.scene import SceneFrame

# pygame key names -> identifiers understood by the core
KEY_NAMES = {
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "up": "ArrowUp",
    "a": "a",
    "d": "d",
    "w": "w",
    "space": " ",
    "return": "Enter",
}

SHIP_OUTLINE = ((1.0, 0.0), (-0.7, 0.6), (-0.4, 0.0), (-0.7, -0.6))


class SceneRenderer:
    """Vector-style renderer for scene frames."""

    def __init__(self, config: GameConfig, scale: float = 1.0):
        self._config = config
        self._scale = scale
        self._ship_radius = config.ship.radius

        self._background = (5, 5, 15)
        self._foreground = (230, 230, 230)
        self._bullet_color = (255, 255, 120)
        self._dim = (140, 140, 160)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, int(64 * scale))
        self._font_small = pygame.font.Font(None, int(28 * scale))

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return (int(x * self._scale), int(y * self._scale))

    def render(self, screen: pygame.Surface, scene: SceneFrame) -> None:
        """Render the complete scene."""
        screen.fill(self._background)

        for particle in scene.particles:
            self._draw_particle(screen, particle)
        for asteroid in scene.asteroids:
            self._draw_asteroid(screen, asteroid)
        for bullet in scene.bullets:
            pygame.draw.circle(screen, self._bullet_color, self._to_screen(*bullet.position), 2)

        if scene.state == "playing":
            self._draw_ship(screen, scene)

        self._draw_hud(screen, scene)

        if scene.state == "start":
            self._draw_banner(screen, "ASTEROIDS", "Press Enter to start")
        elif scene.state == "gameover":
            self._draw_banner(screen, "GAME OVER", f"Score {scene.score} - Enter to restart")

    def _draw_asteroid(self, screen: pygame.Surface, asteroid) -> None:
        cos_a = math.cos(math.radians(asteroid.angle))
        sin_a = math.sin(math.radians(asteroid.angle))
        cx, cy = asteroid.position
        points = [
            self._to_screen(cx + vx * cos_a - vy * sin_a, cy + vx * sin_a + vy * cos_a)
            for vx, vy in asteroid.vertices
        ]
        pygame.draw.polygon(screen, self._foreground, points, 2)

    def _draw_ship(self, screen: pygame.Surface, scene: SceneFrame) -> None:
        ship = scene.ship
        # Blink while invincible
        if ship.invincibility > 0 and (ship.invincibility // 6) % 2 == 0:
            return

        cos_a = math.cos(math.radians(ship.angle))
        sin_a = math.sin(math.radians(ship.angle))
        cx, cy = ship.position
        r = self._ship_radius
        points = [
            self._to_screen(cx + (px * cos_a - py * sin_a) * r, cy + (px * sin_a + py * cos_a) * r)
            for px, py in SHIP_OUTLINE
        ]
        pygame.draw.polygon(screen, self._foreground, points, 2)

    def _draw_particle(self, screen: pygame.Surface, particle) -> None:
        fade = particle.fade
        base = pygame.Color(particle.color)
        color = (int(base.r * fade), int(base.g * fade), int(base.b * fade))
        pygame.draw.circle(screen, color, self._to_screen(*particle.position), max(1, int(2 * self._scale)))

    def _draw_hud(self, screen: pygame.Surface, scene: SceneFrame) -> None:
        text = self._font_small.render(
            f"Score {scene.score}   Lives {scene.lives}   Level {scene.level}",
            True,
            self._dim
        )
        screen.blit(text, (10, 10))

    def _draw_banner(self, screen: pygame.Surface, title: str, subtitle: str) -> None:
        width, height = screen.get_size()
        title_surface = self._font_large.render(title, True, self._foreground)
        sub_surface = self._font_small.render(subtitle, True, self._dim)
        screen.blit(title_surface, ((width - title_surface.get_width()) // 2, height // 2 - 60))
        screen.blit(sub_surface, ((width - sub_surface.get_width()) // 2, height // 2 + 10))


def run_game(
    seed: Optional[int] = None,
    scale: float = 1.0,
    record_path: Optional[str] = None,
    fps: int = 60
) -> None:
    """
    Run the interactive game loop.

    Args:
        seed: Random seed (random if None).
        scale: Window scale relative to the logical canvas.
        record_path: If set, save a replay there on exit.
        fps: Ticks per second.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    recorder = ReplayRecorder(game) if record_path else None

    pygame.init()
    window = (int(config.arena.width * scale), int(config.arena.height * scale))
    screen = pygame.display.set_mode(window)
    pygame.display.set_caption("Asteroids")
    clock = pygame.time.Clock()
    renderer = SceneRenderer(config, scale)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.key == pygame.K_ESCAPE:
                    running = False
                    continue
                key_id = KEY_NAMES.get(pygame.key.name(event.key))
                if key_id is None:
                    continue
                if event.type == pygame.KEYDOWN:
                    game.key_down(key_id)
                else:
                    game.key_up(key_id)

        scene = recorder.tick() if recorder else game.tick(pygame.time.get_ticks())
        renderer.render(screen, scene)
        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()

    if recorder is not None:
        path = recorder.save(record_path)
        print(f"Replay saved: {path}")
        print(f"  Seed: {game.seed}")
        print(f"  Ticks: {recorder.ticks}")
        print(f"  Final score: {game.score}")


def main():
    parser = argparse.ArgumentParser(description="Play the asteroid shooter")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale")
    parser.add_argument("--record", type=str, default=None, help="Save a replay to this path")
    parser.add_argument("--fps", type=int, default=60, help="Ticks per second")
    args = parser.parse_args()

    if not PYGAME_AVAILABLE:
        print("Error: pygame is required for human play.")
        print("Install with: pip install pygame")
        sys.exit(1)

    run_game(seed=args.seed, scale=args.scale, record_path=args.record, fps=args.fps)


if __name__ == "__main__":
    main()
