# tether_scene/generative/terrain.py
"""
NOISE TERRAIN: Sum-of-Cosines Heightfield
=========================================

PURPOSE:
--------
Generate a rolling, natural-looking terrain as a parametric surface whose
normals come out exactly through dual-number evaluation.

THE HEIGHTFIELD:
----------------
Over the unit square, centred on the origin:

    X = u - 0.5
    Z = v - 0.5
    Y = Σ_{i,j} A[i,j] · cos(2π · (i·X + j·Z + B[i,j]))      i, j in [0, K)

- A[i,j] = 1 / sqrt(i² + j²): amplitude falls off with spatial frequency,
  a simple pink-noise-like spectrum. A[0,0] is forced to 0 - the (0, 0)
  term would only add a constant offset (and 1/0 is undefined).
- B[i,j] ~ U[0, 1): a random phase per frequency, drawn once.

Only dual-number arithmetic and cos are used, so the evaluator recovers
exact tangents and normals.

REPRODUCIBILITY:
----------------
Phases come from numpy.random.default_rng(seed). Passing a seed gives the
same terrain every run. With seed=None a fresh seed is drawn from OS
entropy (a new terrain per run); the seed actually used is stored on the
terrain and logged so that run can be reproduced later.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from ..kernel.dual import Dnum2, cos, lift_u, lift_v
from ..geometry.surface import TessellatedMesh, tessellate

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.Generator]


def amplitude_table(order: int) -> np.ndarray:
    """A[i,j] = 1/sqrt(i² + j²), with A[0,0] = 0."""
    i, j = np.meshgrid(np.arange(order), np.arange(order), indexing='ij')
    r = np.sqrt(i * i + j * j, dtype=float)
    A = np.zeros((order, order))
    np.divide(1.0, r, out=A, where=r > 0)
    return A


class NoiseTerrain:
    """
    Sum-of-cosines terrain surface.

    Callable as a surface definition: ``terrain(U, V) -> (X, Y, Z)``.

    Parameters:
    -----------
    order : int
        K, the number of frequencies per direction (K×K terms). Default 3.
    seed : None, int or np.random.Generator
        Source of the random phases.

    Attributes:
    -----------
    amplitudes : np.ndarray
        (K, K) amplitude table.
    phases : np.ndarray
        (K, K) phase table in [0, 1); phases[0, 0] = 0.
    seed : Optional[int]
        Integer seed the phases were drawn with, when one is known.
    """

    def __init__(self, order: int = 3, seed: SeedLike = None):
        if order < 1:
            raise ValueError(f"Terrain order must be >= 1, got {order}")

        if isinstance(seed, np.random.Generator):
            rng = seed
            self.seed = None
        else:
            if seed is None:
                seed = int(np.random.SeedSequence().entropy % (2**63))
            rng = np.random.default_rng(seed)
            self.seed = seed

        phases = rng.random((order, order))
        phases[0, 0] = 0.0
        self._set_tables(amplitude_table(order), phases)
        logger.info("Noise terrain: order=%d, seed=%s", order, self.seed)

    @classmethod
    def from_tables(cls, amplitudes, phases) -> 'NoiseTerrain':
        """Build a terrain from explicit amplitude and phase tables."""
        terrain = cls.__new__(cls)
        terrain.seed = None
        terrain._set_tables(np.array(amplitudes, dtype=float), np.array(phases, dtype=float))
        return terrain

    def _set_tables(self, amplitudes: np.ndarray, phases: np.ndarray) -> None:
        if amplitudes.shape != phases.shape or amplitudes.ndim != 2 or amplitudes.shape[0] != amplitudes.shape[1]:
            raise ValueError(
                f"Amplitude and phase tables must be matching square arrays, "
                f"got {amplitudes.shape} and {phases.shape}"
            )
        amplitudes.setflags(write=False)
        phases.setflags(write=False)
        self.amplitudes = amplitudes
        self.phases = phases

    @property
    def order(self) -> int:
        return self.amplitudes.shape[0]

    def __call__(self, U: Dnum2, V: Dnum2) -> Tuple[Dnum2, Dnum2, Dnum2]:
        X = U - 0.5
        Z = V - 0.5
        Y = Dnum2(0.0)
        two_pi = 2.0 * math.pi
        for i in range(self.order):
            for j in range(self.order):
                a = float(self.amplitudes[i, j])
                if a == 0.0:
                    continue
                Y = Y + cos((X * i + Z * j + float(self.phases[i, j])) * two_pi) * a
        return X, Y, Z

    def height(self, u: float, v: float) -> float:
        """Terrain height at (u, v), without derivatives."""
        return self(lift_u(u), lift_v(v))[1].value


@dataclass
class TerrainParams:
    """
    Parameters for generate_terrain.

    order : int
        Frequencies per direction.
    seed : Optional[int]
        Phase seed; None draws a fresh one.
    n, m : int
        Tessellation divisions along v and u.
    """
    order: int = 3
    seed: Optional[int] = None
    n: int = 20
    m: int = 20


def generate_terrain(params: TerrainParams) -> Tuple[NoiseTerrain, TessellatedMesh]:
    """Build a noise terrain and tessellate it."""
    terrain = NoiseTerrain(order=params.order, seed=params.seed)
    mesh = tessellate(terrain, params.n, params.m)
    return terrain, mesh
