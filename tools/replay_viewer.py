"""
Replay Viewer
=============

Re-simulate a recorded session and watch it.

Usage:
    python -m tools.replay_viewer replay.json [--scale SCALE]

Controls:
    SPACE       Play/Pause
    LEFT/RIGHT  Step backward/forward (while paused)
    HOME/END    Jump to start/end
    +/-         Speed up/slow down
    ESC         Quit
"""

from __future__ import annotations

import argparse
import sys

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.replay_recorder import load_replay, run_replay
from tools.play_human import SceneRenderer


def view_replay(replay_path: str, scale: float = 1.0) -> None:
    """Open a window and play back a replay."""
    config = load_config()
    replay = load_replay(replay_path)
    frames = run_replay(replay, config)

    if not frames:
        print("Error: Replay contains no ticks")
        return

    print(f"Replay: {replay_path}")
    print(f"Seed: {replay['seed']}")
    print(f"Ticks: {len(frames)}")
    print(f"Final score: {replay['final_score']}")
    if frames[-1].digest() != replay["final_digest"]:
        print("Warning: final frame differs from the recorded one")

    pygame.init()
    window = (int(config.arena.width * scale), int(config.arena.height * scale))
    screen = pygame.display.set_mode(window)
    pygame.display.set_caption(f"Replay - {replay_path}")
    clock = pygame.time.Clock()
    renderer = SceneRenderer(config, scale)

    index = 0
    playing = True
    fps = 60
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    playing = not playing
                elif event.key == pygame.K_RIGHT and not playing:
                    index = min(index + 1, len(frames) - 1)
                elif event.key == pygame.K_LEFT and not playing:
                    index = max(index - 1, 0)
                elif event.key == pygame.K_HOME:
                    index = 0
                elif event.key == pygame.K_END:
                    index = len(frames) - 1
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    fps = min(fps * 2, 480)
                elif event.key == pygame.K_MINUS:
                    fps = max(fps // 2, 15)

        renderer.render(screen, frames[index])
        pygame.display.flip()

        if playing and index < len(frames) - 1:
            index += 1
        clock.tick(fps)

    pygame.quit()


def main():
    parser = argparse.ArgumentParser(description="View a recorded asteroid session")
    parser.add_argument("replay", type=str, help="Path to replay JSON")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale")
    args = parser.parse_args()

    if not PYGAME_AVAILABLE:
        print("Error: pygame is required for replay viewer.")
        print("Install with: pip install pygame")
        sys.exit(1)

    view_replay(args.replay, scale=args.scale)


if __name__ == "__main__":
    main()
