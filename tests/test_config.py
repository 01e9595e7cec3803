"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from asteroid_field.asteroids_core.config_loader import load_config, get_config, reload_config


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    """Default config as a plain dict for editing."""
    import os
    path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "asteroid_field", "game_config.yaml"
    )
    with open(path) as f:
        return yaml.safe_load(f)


def _write(tmp_path, data):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestDefaults:
    """Default values shipped in game_config.yaml."""

    def test_arena(self, config):
        assert config.arena.width == 800
        assert config.arena.height == 600
        assert config.arena.wrap_margin == 50
        assert config.arena.center == (400.0, 300.0)

    def test_ship(self, config):
        assert config.ship.thrust == pytest.approx(0.12)
        assert config.ship.friction == pytest.approx(0.99)
        assert config.ship.start_angle == -90
        assert config.ship.invincibility_frames == 120

    def test_bullets(self, config):
        assert config.bullets.max_live == 5
        assert config.bullets.cooldown == 8
        assert config.bullets.hit_padding == 3

    def test_size_ladder(self, config):
        names = [s.name for s in config.asteroids.sizes]
        assert names == ["large", "medium", "small"]
        assert [s.points for s in config.asteroids.sizes] == [20, 50, 100]
        assert config.get_size("small").radius == 10

    def test_unknown_size_raises(self, config):
        with pytest.raises(ValueError):
            config.get_size("huge")

    def test_bindings_cover_all_actions(self, config):
        actions = set(config.controls.bindings().values())
        assert actions == {"left", "right", "thrust", "fire", "confirm"}

    def test_cached_config(self):
        assert get_config() is get_config()
        fresh = reload_config()
        assert get_config() is fresh


class TestValidation:
    """Invalid files are rejected."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_roundtrip_of_default_is_valid(self, tmp_path, raw_config):
        config = load_config(_write(tmp_path, raw_config))
        assert config.waves.initial_count == 4

    def test_growing_size_ladder_rejected(self, tmp_path, raw_config):
        raw_config["asteroids"]["sizes"][1]["radius"] = 80
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, raw_config))

    def test_inverted_range_rejected(self, tmp_path, raw_config):
        raw_config["asteroids"]["spawn_speed"] = [2.0, 0.5]
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, raw_config))

    def test_duplicate_binding_rejected(self, tmp_path, raw_config):
        raw_config["controls"]["fire"] = ["ArrowLeft"]
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, raw_config))

    def test_non_positive_arena_rejected(self, tmp_path, raw_config):
        raw_config["arena"]["width"] = 0
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, raw_config))

    def test_unbound_action_rejected(self, tmp_path, raw_config):
        raw_config["controls"]["thrust"] = []
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, raw_config))
