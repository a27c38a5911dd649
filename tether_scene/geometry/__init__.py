# tether_scene/geometry - Vertex data and placement
"""
GEOMETRY: SURFACES, MESHES AND MODEL TRANSFORMS
===============================================

- surface:   evaluate / tessellate parametric surfaces (normals via dual numbers)
- transform: model matrix T·R·S and its inverse, the Pose of an object
- cube:      unit cube triangle list used to draw the tethered body
"""

from .surface import SurfaceSample, TessellatedMesh, evaluate, tessellate
from .transform import Pose, model_matrices, rotation_matrix, transform_point, transform_direction
from .cube import TriangleMesh, unit_cube

__all__ = [
    'SurfaceSample', 'TessellatedMesh', 'evaluate', 'tessellate',
    'Pose', 'model_matrices', 'rotation_matrix', 'transform_point', 'transform_direction',
    'TriangleMesh', 'unit_cube',
]
