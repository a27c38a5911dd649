# tether_scene/geometry/cube.py
"""
Unit cube centered on the origin, as a flat-shaded triangle list.

Each face contributes two triangles and carries its own normal, so the
36 vertices are not shared between faces. Triangles wind counter-clockwise
when seen from outside the cube.
"""

from dataclasses import dataclass

import numpy as np

# (outward normal, tangent a, tangent b) with a × b = normal
_FACES = (
    ((1, 0, 0), (0, 1, 0), (0, 0, 1)),
    ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
    ((0, 1, 0), (0, 0, 1), (1, 0, 0)),
    ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    ((0, 0, -1), (0, 1, 0), (1, 0, 0)),
)


@dataclass(frozen=True, eq=False)
class TriangleMesh:
    """Non-indexed triangle list: every three rows form one triangle."""
    positions: np.ndarray
    normals: np.ndarray

    @property
    def n_triangles(self) -> int:
        return len(self.positions) // 3

    def triangles(self) -> np.ndarray:
        return np.arange(len(self.positions)).reshape(-1, 3)


def unit_cube() -> TriangleMesh:
    """Build the cube spanning [-0.5, 0.5]³."""
    positions, normals = [], []
    for n, a, b in _FACES:
        n, a, b = (np.array(x, dtype=float) for x in (n, a, b))
        c = 0.5 * n
        corners = [c - 0.5 * a - 0.5 * b, c + 0.5 * a - 0.5 * b,
                   c + 0.5 * a + 0.5 * b, c - 0.5 * a + 0.5 * b]
        for idx in (0, 1, 2, 0, 2, 3):
            positions.append(corners[idx])
            normals.append(n)
    return TriangleMesh(positions=np.array(positions), normals=np.array(normals))
