"""
Replay Recorder
===============

Records a session as its seed plus the input snapshot of every tick, and
replays it. Because the simulation is deterministic, a replay reproduces the
exact same scene frames; the final frame digest is stored to check that.

Usage:
    from asteroid_field.asteroids_core import CoreGame, ReplayRecorder

    game = CoreGame(seed=42)
    recorder = ReplayRecorder(game)

    while running:
        # host forwards key events to game.key_down / game.key_up
        scene = recorder.tick()

    recorder.save("session.json")

And later:
    assert verify_replay("session.json")
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import Keys
from asteroid_field.asteroids_core.game import CoreGame
from asteroid_field.asteroids_core.scene import SceneFrame

REPLAY_VERSION = 1

# Bit flags for one recorded tick
BIT_LEFT = 1
BIT_RIGHT = 2
BIT_THRUST = 4
BIT_FIRE = 8
BIT_CONFIRM = 16


def encode_input(keys: Keys, confirm: bool) -> int:
    """Pack one tick's input into an int."""
    value = 0
    if keys.left:
        value |= BIT_LEFT
    if keys.right:
        value |= BIT_RIGHT
    if keys.up:
        value |= BIT_THRUST
    if keys.space:
        value |= BIT_FIRE
    if confirm:
        value |= BIT_CONFIRM
    return value


def decode_input(value: int) -> Tuple[Keys, bool]:
    """Unpack a recorded tick into (keys, confirm)."""
    keys = Keys(
        left=bool(value & BIT_LEFT),
        right=bool(value & BIT_RIGHT),
        up=bool(value & BIT_THRUST),
        space=bool(value & BIT_FIRE)
    )
    return keys, bool(value & BIT_CONFIRM)


def generate_replay_filename(
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: replay_{YYYYMMDD_HHMMSS}[_s{seed}].json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"replay_{timestamp}_s{seed}.json"
    else:
        filename = f"replay_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: Optional[GameConfig] = None) -> str:
    """Hash of every config value that affects the simulation."""
    if config is None:
        config = get_config()
    # Controls only map host keys; they never change a recorded tick
    data = asdict(config)
    data.pop("controls", None)
    return hashlib.md5(json.dumps(data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records every tick of a CoreGame.

    Attributes:
        game: The wrapped game.
    """

    def __init__(self, game: CoreGame):
        """
        Initialize the recorder.

        Args:
            game: Game to record. Should have just been created or reset;
                its seed is the one stored in the replay.
        """
        self.game = game
        self._seed = game.seed
        self._inputs: List[int] = []
        self._last_scene: Optional[SceneFrame] = None
        self._config_hash = compute_config_hash(game.config)

    @property
    def ticks(self) -> int:
        return len(self._inputs)

    def reset(self, seed: Optional[int] = None) -> SceneFrame:
        """Reset the game and start a new recording."""
        self._inputs = []
        self._last_scene = self.game.reset(seed=seed)
        self._seed = self.game.seed
        return self._last_scene

    def tick(self, timestamp: Optional[float] = None) -> SceneFrame:
        """Record the pending input, then advance the game one tick."""
        game_input = self.game.input
        self._inputs.append(encode_input(game_input.snapshot(), game_input.confirm_pending))
        self._last_scene = self.game.tick(timestamp)
        return self._last_scene

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.
        """
        scene = self._last_scene if self._last_scene is not None else self.game.build_scene()
        return {
            "version": REPLAY_VERSION,
            "seed": self._seed,
            "config_hash": self._config_hash,
            "inputs": list(self._inputs),
            "total_ticks": len(self._inputs),
            "final_score": scene.score,
            "final_level": scene.level,
            "final_state": scene.state,
            "final_digest": scene.digest(),
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(seed=self._seed, directory=directory)
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.get_replay_data(), f, indent=2)

        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a replay file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a supported replay.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if data.get("version") != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version: {data.get('version')}")
    return data


def run_replay(
    data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> List[SceneFrame]:
    """
    Re-simulate a replay.

    Returns:
        Scene frame of every recorded tick.

    Raises:
        ValueError: If the replay has no seed or was recorded with a
            different config.
    """
    if config is None:
        config = get_config()

    if data.get("seed") is None:
        raise ValueError("Replay has no seed; unseeded sessions cannot be re-simulated")

    config_hash = compute_config_hash(config)
    if data["config_hash"] != config_hash:
        raise ValueError(
            f"Replay config hash {data['config_hash']} does not match current config {config_hash}"
        )

    game = CoreGame(config=config, seed=data["seed"])
    frames = []
    for value in data["inputs"]:
        keys, confirm = decode_input(value)
        frames.append(game.step(keys, confirm=confirm).scene)
    return frames


def verify_replay(
    source: Union[str, Path, Dict[str, Any]],
    config: Optional[GameConfig] = None
) -> bool:
    """True if re-simulating the replay ends on the recorded frame."""
    data = source if isinstance(source, dict) else load_replay(source)
    frames = run_replay(data, config)
    if frames:
        final = frames[-1]
    else:
        final = CoreGame(config=config, seed=data["seed"]).build_scene()
    return final.digest() == data["final_digest"]
