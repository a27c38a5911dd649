# tether_scene/geometry/surface.py
"""
PARAMETRIC SURFACES: Vertex Data with Analytic Normals
======================================================

PURPOSE:
--------
Turn a surface definition r(u, v) = (x, y, z) into renderable vertex data:
position, normal and texture coordinate at every point of a uniform
parameter grid.

THE NORMAL TRICK:
-----------------
The surface normal is the cross product of the two tangent vectors:

    n = dr/du × dr/dv

Instead of differentiating by hand (or by finite differences), we evaluate
the surface with dual numbers. u is lifted with derivative (1, 0), v with
derivative (0, 1), so each output coordinate comes back carrying its own
partials:

    X.deriv = (dx/du, dx/dv)
    Y.deriv = (dy/du, dy/dv)
    Z.deriv = (dz/du, dz/dv)

Reading the first components gives dr/du, the second components give dr/dv.
The normal is left unnormalized - the shading stage normalizes it.

TESSELLATION LAYOUT:
--------------------
An N×M grid becomes N triangle strips. Strip i walks u = 0 .. 1 and
alternates between the lower row v = i/N and the upper row v = (i+1)/N:

    v=(i+1)/N   1---3---5---7 ...
                | \\ | \\ | \\ |
    v=i/N       0---2---4---6 ...

so each strip holds 2·(M+1) vertices and draws as a single triangle strip.

KNOWN LIMITATION:
-----------------
Where the parametrization is degenerate (a pole, where one tangent
vanishes) the normal is the zero vector. It is passed through unchanged;
consumers must cope with zero-length normals.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

from ..kernel.dual import Dnum2, DualLike, as_dual, lift_u, lift_v

logger = logging.getLogger(__name__)

SurfaceFn = Callable[[Dnum2, Dnum2], Tuple[DualLike, DualLike, DualLike]]


@dataclass(frozen=True, eq=False)
class SurfaceSample:
    """
    One vertex of a parametric surface.

    Attributes:
    -----------
    position : np.ndarray
        (3,) point on the surface.
    normal : np.ndarray
        (3,) unnormalized normal, dr/du × dr/dv.
    texcoord : np.ndarray
        (2,) the parameters (u, v) in [0, 1]².
    """
    position: np.ndarray
    normal: np.ndarray
    texcoord: np.ndarray


def evaluate(surface_fn: SurfaceFn, u: float, v: float) -> SurfaceSample:
    """
    Evaluate a surface at (u, v) and return position, normal and texcoord.

    Parameters:
    -----------
    surface_fn : callable
        Maps two Dnum2 parameters to three coordinates. Coordinates that do
        not depend on the parameters may be returned as plain numbers.
    u, v : float
        Parameter values, normally in [0, 1].

    Returns:
    --------
    SurfaceSample
    """
    U, V = lift_u(u), lift_v(v)
    X, Y, Z = (as_dual(c) for c in surface_fn(U, V))

    position = np.array([X.value, Y.value, Z.value])
    dr_du = np.array([X.deriv[0], Y.deriv[0], Z.deriv[0]])
    dr_dv = np.array([X.deriv[1], Y.deriv[1], Z.deriv[1]])
    normal = np.cross(dr_du, dr_dv)

    for arr in (position, normal):
        arr.setflags(write=False)
    texcoord = np.array([u, v], dtype=float)
    texcoord.setflags(write=False)

    return SurfaceSample(position=position, normal=normal, texcoord=texcoord)


@dataclass(frozen=True, eq=False)
class TessellatedMesh:
    """
    Vertex data for an N×M parameter grid, laid out as N triangle strips.

    Attributes:
    -----------
    samples : Tuple[SurfaceSample, ...]
        All vertices, strip after strip.
    n_strips : int
        N, the number of strips (rows of the grid).
    vertices_per_strip : int
        2·(M+1).
    """
    samples: Tuple[SurfaceSample, ...]
    n_strips: int
    vertices_per_strip: int

    def __len__(self) -> int:
        return len(self.samples)

    def strip(self, i: int) -> Tuple[SurfaceSample, ...]:
        """Return the vertices of strip i."""
        if not 0 <= i < self.n_strips:
            raise IndexError(f"strip {i} out of range (mesh has {self.n_strips} strips)")
        start = i * self.vertices_per_strip
        return self.samples[start:start + self.vertices_per_strip]

    @property
    def positions(self) -> np.ndarray:
        """(n_vertices, 3) array of positions."""
        return np.array([s.position for s in self.samples])

    @property
    def normals(self) -> np.ndarray:
        """(n_vertices, 3) array of unnormalized normals."""
        return np.array([s.normal for s in self.samples])

    @property
    def texcoords(self) -> np.ndarray:
        """(n_vertices, 2) array of texture coordinates."""
        return np.array([s.texcoord for s in self.samples])

    def triangles(self) -> np.ndarray:
        """
        Unroll the strips into an explicit triangle index list.

        Follows triangle-strip winding: triangle k of a strip uses
        (k, k+1, k+2) for even k and (k+1, k, k+2) for odd k, so every
        triangle keeps the orientation of the first one.

        Returns:
        --------
        np.ndarray
            (n_triangles, 3) integer indices into ``samples``.
        """
        tris = []
        for i in range(self.n_strips):
            base = i * self.vertices_per_strip
            for k in range(self.vertices_per_strip - 2):
                if k % 2 == 0:
                    tris.append((base + k, base + k + 1, base + k + 2))
                else:
                    tris.append((base + k + 1, base + k, base + k + 2))
        return np.array(tris, dtype=int).reshape(-1, 3)


def tessellate(surface_fn: SurfaceFn, n: int, m: int) -> TessellatedMesh:
    """
    Sample a surface over a uniform grid and build triangle strips.

    For strip i in [0, n) and column j in [0, m], emits the sample at
    (u=j/m, v=i/n) followed by (u=j/m, v=(i+1)/n).

    Parameters:
    -----------
    surface_fn : callable
        Surface definition, see ``evaluate``.
    n : int
        Number of strips (divisions along v). Must be >= 1.
    m : int
        Divisions along u. Must be >= 1.

    Returns:
    --------
    TessellatedMesh
        n strips of 2·(m+1) vertices each.
    """
    if n < 1 or m < 1:
        raise ValueError(f"Tessellation needs at least one division per direction, got n={n}, m={m}")

    samples = []
    for i in range(n):
        for j in range(m + 1):
            samples.append(evaluate(surface_fn, j / m, i / n))
            samples.append(evaluate(surface_fn, j / m, (i + 1) / n))

    mesh = TessellatedMesh(samples=tuple(samples), n_strips=n, vertices_per_strip=2 * (m + 1))
    logger.debug("Tessellated %dx%d grid into %d strips (%d vertices)", n, m, n, len(samples))
    return mesh
