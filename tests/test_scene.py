# File: tests/test_scene.py
"""
Tests for scene items, activation and the sub-stepping driver.
"""

import numpy as np
import pytest

from tether_scene.config import SceneConfig, TerrainConfig
from tether_scene.dynamics.body import BodyState
from tether_scene.dynamics.integrator import TetherIntegrator
from tether_scene.geometry.surface import tessellate
from tether_scene.generative.shapes import plane
from tether_scene.scene import Scene, StaticMesh, TetheredBody, build_default_scene


@pytest.fixture
def small_config():
    return SceneConfig(terrain=TerrainConfig(seed=3, tessellation_level=4))


class RecordingIntegrator(TetherIntegrator):
    """Keeps the intervals it was asked to integrate."""

    def __init__(self):
        super().__init__(active=True)
        self.intervals = []

    def step(self, state, t_start, t_end):
        self.intervals.append((t_start, t_end))
        return super().step(state, t_start, t_end)


class TestDefaultScene:

    def test_items(self, small_config):
        scene = build_default_scene(small_config)
        assert len(scene.static_meshes) == 1
        assert len(scene.bodies) == 1
        terrain = scene.static_meshes[0]
        assert terrain.name == "terrain"
        assert terrain.mesh.n_strips == 4
        np.testing.assert_allclose(terrain.translation, (0, -5, 0))
        np.testing.assert_allclose(terrain.scale, (15, 1, 15))

    def test_body_defaults(self, small_config):
        body = build_default_scene(small_config).bodies[0].state
        assert body.mass == 1.0
        np.testing.assert_allclose(body.gravity, (0, -5, 0))
        np.testing.assert_allclose(body.velocity, (1, 0, 0))
        np.testing.assert_allclose(body.translation, (0, 5, 0))
        np.testing.assert_allclose(body.scale, (1, 1.5, 0.5))
        np.testing.assert_allclose(body.anchor, (0, 5, 0))
        np.testing.assert_allclose(body.rotation_axis, (0, 0, 1))
        assert body.natural_length == 3.0
        assert body.stiffness == 1.0
        assert body.linear_drag == 0.3
        assert body.angular_drag == 0.3

    def test_seed_argument_overrides_config(self, small_config):
        a = build_default_scene(small_config, seed=99).static_meshes[0].mesh
        b = build_default_scene(small_config, seed=99).static_meshes[0].mesh
        np.testing.assert_array_equal(a.positions, b.positions)

    def test_config_not_shared_between_scenes(self, small_config):
        s1 = build_default_scene(small_config)
        s2 = build_default_scene(small_config)
        s1.start()
        s1.advance(0.0, 1.0)
        assert not s2.is_active
        np.testing.assert_allclose(s2.bodies[0].state.translation, (0, 5, 0))


class TestActivation:

    def test_nothing_moves_until_started(self, small_config):
        scene = build_default_scene(small_config)
        scene.advance(0.0, 2.0)
        np.testing.assert_allclose(scene.bodies[0].state.translation, (0, 5, 0))
        assert not scene.is_active

        scene.start()
        scene.advance(2.0, 2.5)
        assert scene.is_active
        assert scene.bodies[0].state.translation[0] > 0.0


class TestItems:

    def test_static_mesh_transform_and_noop_step(self):
        mesh = tessellate(plane, 2, 2)
        item = StaticMesh(mesh=mesh, translation=np.array([0.0, -5.0, 0.0]), scale=np.array([15.0, 1.0, 15.0]))
        assert item.step(0.0, 1.0) is None
        pose = item.compute_transform()
        np.testing.assert_allclose(pose.to_world((0.5, 0.0, -0.5)), (7.5, -5.0, -7.5))

    def test_body_transform_tracks_state(self):
        body = TetheredBody(state=BodyState(translation=(1.0, 2.0, 3.0)), integrator=TetherIntegrator())
        np.testing.assert_allclose(body.compute_transform().to_world((0, 0, 0)), (1, 2, 3))
        body.state.translation = np.array([4.0, 5.0, 6.0])
        np.testing.assert_allclose(body.compute_transform().to_world((0, 0, 0)), (4, 5, 6))
        assert body.mesh.n_triangles == 12

    def test_tether_point(self):
        body = TetheredBody(state=BodyState(translation=(0.0, 5.0, 0.0), scale=(1, 1.5, 0.5)),
                            integrator=TetherIntegrator())
        np.testing.assert_allclose(body.tether_point(), (0.0, 4.25, 0.0))


class TestAdvance:

    def _scene(self):
        integrator = RecordingIntegrator()
        body = TetheredBody(state=BodyState(), integrator=integrator)
        return Scene([body], integrator), integrator

    def test_sub_steps_bounded_by_max_dt(self):
        scene, rec = self._scene()
        n = scene.advance(0.0, 0.35, max_dt=0.1)
        assert n == 4
        dts = [b - a for a, b in rec.intervals]
        assert all(dt <= 0.1 + 1e-12 for dt in dts)
        assert dts[-1] == pytest.approx(0.05)

    def test_intervals_are_contiguous(self):
        scene, rec = self._scene()
        scene.advance(1.0, 2.0, max_dt=0.1)
        assert rec.intervals[0][0] == 1.0
        assert rec.intervals[-1][1] == 2.0
        for (a0, b0), (a1, b1) in zip(rec.intervals, rec.intervals[1:]):
            assert b0 == a1

    def test_no_sliver_step_from_round_off(self):
        scene, rec = self._scene()
        assert scene.advance(0.0, 1.0, max_dt=0.1) == 10

    def test_empty_interval(self):
        scene, rec = self._scene()
        assert scene.advance(3.0, 3.0) == 0
        assert rec.intervals == []

    def test_invalid_arguments(self):
        scene, _ = self._scene()
        with pytest.raises(ValueError):
            scene.advance(1.0, 0.0)
        with pytest.raises(ValueError):
            scene.advance(0.0, 1.0, max_dt=0.0)

    def test_sub_stepping_matches_manual_steps(self):
        a = BodyState(mass=1.0, gravity=(0, -5, 0), velocity=(1, 0, 0))
        b = a.copy()
        integrator = TetherIntegrator(active=True)
        Scene([TetheredBody(state=a, integrator=integrator)], integrator).advance(0.0, 0.3, max_dt=0.1)
        for t0, t1 in [(0.0, 0.1), (0.1, 0.2), (0.2, 0.3)]:
            integrator.step(b, t0, t1)
        np.testing.assert_allclose(a.translation, b.translation)
        np.testing.assert_allclose(a.velocity, b.velocity)
