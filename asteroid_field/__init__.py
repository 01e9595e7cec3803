"""
Asteroid Field Package
======================

This package contains the core simulation of the asteroid shooter:
movement, collisions, splitting, scoring, lives/levels and the
start / playing / game-over lifecycle.

The core never draws anything. Hosts feed it key events and ticks and
receive scene frames to render. All tunable parameters are in
game_config.yaml.
"""
