# File: tests/test_terrain.py
"""
Tests for the sum-of-cosines noise terrain.

WHY THESE TESTS?
---------------
1. The amplitude spectrum must be 1/sqrt(i² + j²) with the (0, 0) term off
2. Same seed -> same terrain (reproducibility)
3. Dual-number normals must agree with the analytic derivative of the sum
"""

import math

import numpy as np
import pytest

from tether_scene.generative.terrain import (
    NoiseTerrain, TerrainParams, amplitude_table, generate_terrain,
)
from tether_scene.geometry.surface import evaluate


def analytic_height_gradient(terrain, u, v):
    """Hand-derived dY/du, dY/dv of the cosine sum."""
    x, z = u - 0.5, v - 0.5
    dy_du = dy_dv = 0.0
    for i in range(terrain.order):
        for j in range(terrain.order):
            a = terrain.amplitudes[i, j]
            arg = 2 * math.pi * (i * x + j * z + terrain.phases[i, j])
            dy_du += -a * math.sin(arg) * 2 * math.pi * i
            dy_dv += -a * math.sin(arg) * 2 * math.pi * j
    return dy_du, dy_dv


class TestTables:

    def test_amplitude_table(self):
        A = amplitude_table(3)
        assert A[0, 0] == 0.0
        assert A[1, 0] == pytest.approx(1.0)
        assert A[1, 1] == pytest.approx(1 / math.sqrt(2))
        assert A[2, 1] == pytest.approx(1 / math.sqrt(5))
        np.testing.assert_allclose(A, A.T)

    def test_phases_in_unit_interval(self):
        terrain = NoiseTerrain(order=4, seed=3)
        assert terrain.phases.shape == (4, 4)
        assert terrain.phases[0, 0] == 0.0
        assert np.all(terrain.phases >= 0.0)
        assert np.all(terrain.phases < 1.0)

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            NoiseTerrain(order=0, seed=1)

    def test_from_tables_shape_check(self):
        with pytest.raises(ValueError):
            NoiseTerrain.from_tables(np.zeros((2, 2)), np.zeros((3, 3)))


class TestReproducibility:

    def test_same_seed_same_terrain(self):
        a = NoiseTerrain(seed=42)
        b = NoiseTerrain(seed=42)
        np.testing.assert_array_equal(a.phases, b.phases)
        assert a.height(0.3, 0.6) == b.height(0.3, 0.6)

    def test_different_seed_different_terrain(self):
        a = NoiseTerrain(seed=1)
        b = NoiseTerrain(seed=2)
        assert not np.array_equal(a.phases, b.phases)

    def test_unseeded_terrain_records_its_seed(self):
        a = NoiseTerrain()
        assert isinstance(a.seed, int)
        b = NoiseTerrain(seed=a.seed)
        np.testing.assert_array_equal(a.phases, b.phases)

    def test_generator_as_seed(self):
        a = NoiseTerrain(seed=np.random.default_rng(5))
        b = NoiseTerrain(seed=5)
        np.testing.assert_array_equal(a.phases, b.phases)
        assert a.seed is None


class TestSurface:

    def test_zero_phases_closed_form(self):
        """With all phases 0, Y(0.5, 0.5) = Σ A[i,j] = sum of the table."""
        A = amplitude_table(3)
        terrain = NoiseTerrain.from_tables(A, np.zeros((3, 3)))
        assert terrain.height(0.5, 0.5) == pytest.approx(A.sum())

    def test_xz_are_centred_parameters(self):
        s = evaluate(NoiseTerrain(seed=0), 0.2, 0.9)
        assert s.position[0] == pytest.approx(-0.3)
        assert s.position[2] == pytest.approx(0.4)

    @pytest.mark.parametrize("u, v", [(0.1, 0.2), (0.5, 0.5), (0.77, 0.33), (1.0, 0.0)])
    def test_normal_matches_analytic_gradient(self, u, v):
        terrain = NoiseTerrain(seed=11)
        s = evaluate(terrain, u, v)
        dy_du, dy_dv = analytic_height_gradient(terrain, u, v)
        # (1, dy_du, 0) x (0, dy_dv, 1)
        expected = np.array([dy_du, -1.0, dy_dv])
        np.testing.assert_allclose(s.normal, expected, rtol=1e-10, atol=1e-10)

    def test_generate_terrain(self):
        terrain, mesh = generate_terrain(TerrainParams(order=3, seed=9, n=4, m=5))
        assert mesh.n_strips == 4
        assert mesh.vertices_per_strip == 12
        assert terrain.seed == 9
        # every vertex lies on the surface
        for s in mesh.samples[::5]:
            assert s.position[1] == pytest.approx(terrain.height(*s.texcoord))
