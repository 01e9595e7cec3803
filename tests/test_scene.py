"""
Tests for scene frames and their observation packing.
"""

import json

import numpy as np
import pytest

from asteroid_field.asteroids_core.config_loader import load_config
from asteroid_field.asteroids_core.entities import Keys
from asteroid_field.asteroids_core.game import CoreGame


@pytest.fixture
def game():
    game = CoreGame(config=load_config(), seed=11)
    game.step(Keys(), confirm=True)
    for _ in range(5):
        game.step(Keys(up=True, space=True))
    return game


class TestSceneFrame:

    def test_fields_mirror_model(self, game):
        scene = game.build_scene()
        assert scene.state == "playing"
        assert scene.score == game.score
        assert scene.lives == game.lives
        assert scene.level == game.level
        assert scene.frame == game.frame
        assert len(scene.asteroids) == len(game.model.asteroids)
        assert len(scene.bullets) == len(game.model.bullets)
        assert len(scene.particles) == len(game.model.particles)

    def test_asteroid_outline_in_world_units(self, game):
        scene = game.build_scene()
        for view in scene.asteroids:
            assert view.size == "large"
            assert len(view.vertices) == 10
            for vx, vy in view.vertices:
                assert 0.7 * 40 - 1e-6 <= (vx * vx + vy * vy) ** 0.5 <= 1.3 * 40 + 1e-6

    def test_to_dict_layout(self, game):
        data = game.build_scene().to_dict()
        assert set(data) == {
            "state", "ship", "bullets", "asteroids", "particles",
            "score", "lives", "level", "frame"
        }
        assert set(data["ship"]["position"]) == {"x", "y"}
        assert set(data["particles"][0]) == {"position", "life", "max_life", "color"}
        assert set(data["asteroids"][0]) == {"position", "size", "angle", "vertices"}

    def test_json_is_canonical(self, game):
        scene = game.build_scene()
        text = scene.to_json()
        assert json.loads(text) == scene.to_dict()
        assert text == game.build_scene().to_json()
        assert ", " not in text
        assert ": " not in text

    def test_digest(self, game):
        digest = game.build_scene().digest()
        assert len(digest) == 16
        int(digest, 16)

    def test_frames_are_snapshots(self, game):
        scene = game.build_scene()
        before = scene.to_json()
        game.step(Keys(up=True))
        assert scene.to_json() == before


class TestObservation:

    def test_padding_and_mask(self, game):
        obs = game.build_scene().to_obs_dict(max_asteroids=64, max_bullets=5)
        count = len(game.model.asteroids)

        assert obs["asteroid_x"].shape == (64,)
        assert obs["asteroid_x"].dtype == np.float32
        assert obs["asteroid_mask"].sum() == count
        assert np.all(obs["asteroid_size"][:count] == 0)
        assert np.all(obs["asteroid_size"][count:] == -1)
        assert obs["bullet_mask"].sum() == len(game.model.bullets)

    def test_overflow_is_dropped(self, game):
        obs = game.build_scene().to_obs_dict(max_asteroids=2, max_bullets=1)
        assert obs["asteroid_mask"].tolist() == [True, True]
        assert obs["bullet_mask"].tolist() == [True]

    def test_scalars(self, game):
        obs = game.build_scene().to_obs_dict()
        assert int(obs["state"]) == 1
        assert int(obs["lives"]) == 3
        assert obs["ship_position"].shape == (2,)
        assert int(obs["ship_thrusting"]) == 1
        assert int(obs["particle_count"]) == len(game.model.particles)

    def test_particle_arrays(self, game):
        scene = game.build_scene()
        obs = scene.to_obs_dict(max_particles=128)
        count = len(scene.particles)

        assert count > 0
        assert obs["particle_x"].shape == (128,)
        assert obs["particle_mask"].sum() == count
        np.testing.assert_allclose(
            obs["particle_fade"][:count], [p.fade for p in scene.particles], rtol=1e-6
        )
        assert np.all(obs["particle_fade"][count:] == 0.0)

    def test_particle_overflow_is_dropped(self, game):
        obs = game.build_scene().to_obs_dict(max_particles=3)
        assert obs["particle_mask"].tolist() == [True, True, True]
        assert int(obs["particle_count"]) == len(game.model.particles)


class TestParticleView:

    def test_fade_tracks_remaining_life(self, game):
        for view in game.build_scene().particles:
            assert view.fade == pytest.approx(view.life / view.max_life)
            assert 0.0 < view.fade <= 1.0
