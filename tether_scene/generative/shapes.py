# tether_scene/generative/shapes.py
"""
Reference surfaces with closed-form normals.

Useful for checking the evaluator and as simple scene geometry. All of
them map the unit square [0, 1]² onto the surface.
"""

import math

from ..kernel.dual import Dnum2, cos, sin


def plane(U: Dnum2, V: Dnum2):
    """The unit square in the xz-plane, normal pointing down (-y)."""
    return U - 0.5, 0.0, V - 0.5


def paraboloid(U: Dnum2, V: Dnum2):
    """z = u² + v². Normal: (-2u, -2v, 1)."""
    return U, V, U * U + V * V


def sphere(U: Dnum2, V: Dnum2, radius: float = 1.0):
    """
    Sphere by longitude u and colatitude v.

    The parametrization has poles at v = 0 and v = 1 where dr/du vanishes,
    so the normal there is the zero vector.
    """
    phi = U * (2.0 * math.pi)
    theta = V * math.pi
    return (
        cos(phi) * sin(theta) * radius,
        sin(phi) * sin(theta) * radius,
        cos(theta) * radius,
    )
