# tether_scene/geometry/transform.py
"""
MODEL TRANSFORMS: Scale, Rotate About an Axis, Translate
========================================================

Every object in the scene is placed by the same composition: scale in the
local frame, rotate about a fixed axis, then translate. With column vectors
(p_world = M @ p_local) this is

    M     = T(t) · R(θ, a) · S(s)
    M_inv = S(1/s) · R(-θ, a) · T(-t)

The rotation is the right-handed rotation by θ about the unit vector a
(Rodrigues' formula). A zero axis is treated as "no rotation".
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


def translate_matrix(t) -> np.ndarray:
    M = np.eye(4)
    M[:3, 3] = np.asarray(t, dtype=float)
    return M


def scale_matrix(s) -> np.ndarray:
    s = np.asarray(s, dtype=float)
    return np.diag([s[0], s[1], s[2], 1.0])


def rotation_matrix(angle: float, axis) -> np.ndarray:
    """
    4×4 right-handed rotation by ``angle`` radians about ``axis``.

    The axis is normalized first; a zero-length axis yields the identity.
    """
    axis = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(axis)
    M = np.eye(4)
    if norm == 0.0:
        return M
    x, y, z = axis / norm
    c, s = np.cos(angle), np.sin(angle)
    C = 1.0 - c
    M[:3, :3] = [
        [c + x * x * C,     x * y * C - z * s, x * z * C + y * s],
        [y * x * C + z * s, c + y * y * C,     y * z * C - x * s],
        [z * x * C - y * s, z * y * C + x * s, c + z * z * C],
    ]
    return M


def model_matrices(
    translation,
    rotation_axis,
    rotation_angle: float,
    scale,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the model matrix and its inverse.

    Parameters:
    -----------
    translation : array-like (3,)
    rotation_axis : array-like (3,)
    rotation_angle : float
        Radians, right-handed about ``rotation_axis``.
    scale : array-like (3,)
        Per-axis scale factors; all must be non-zero for the inverse.

    Returns:
    --------
    (M, M_inv) : Tuple[np.ndarray, np.ndarray]
        4×4 matrices for column vectors.
    """
    scale = np.asarray(scale, dtype=float)
    M = translate_matrix(translation) @ rotation_matrix(rotation_angle, rotation_axis) @ scale_matrix(scale)
    M_inv = (
        scale_matrix(1.0 / scale)
        @ rotation_matrix(-rotation_angle, rotation_axis)
        @ translate_matrix(-np.asarray(translation, dtype=float))
    )
    return M, M_inv


def transform_point(M: np.ndarray, p) -> np.ndarray:
    """Apply a 4×4 transform to a point (w = 1)."""
    return (M @ np.append(np.asarray(p, dtype=float), 1.0))[:3]


def transform_direction(M: np.ndarray, d) -> np.ndarray:
    """Apply a 4×4 transform to a direction (w = 0)."""
    return (M @ np.append(np.asarray(d, dtype=float), 0.0))[:3]


@dataclass(frozen=True, eq=False)
class Pose:
    """
    A placed object's model matrix and its inverse.

    Derived data: rebuild it from the object state whenever the state
    changes, never store it alongside the state.
    """
    model: np.ndarray
    inverse: np.ndarray

    @classmethod
    def from_components(cls, translation, rotation_axis, rotation_angle, scale) -> 'Pose':
        M, M_inv = model_matrices(translation, rotation_axis, rotation_angle, scale)
        return cls(model=M, inverse=M_inv)

    def to_world(self, p) -> np.ndarray:
        return transform_point(self.model, p)

    def to_local(self, p) -> np.ndarray:
        return transform_point(self.inverse, p)

    def normal_to_world(self, n) -> np.ndarray:
        """Transform a normal with the inverse transpose of the model matrix."""
        return transform_direction(self.inverse.T, n)
