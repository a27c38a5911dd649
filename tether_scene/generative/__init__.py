# tether_scene/generative - Procedural surface definitions
"""
GENERATIVE: Procedural Surfaces
===============================

Surface definitions ready for the evaluator in ``tether_scene.geometry``.

Available Generators:
---------------------
- terrain: sum-of-cosines noise terrain with seeded random phases
- shapes:  plane, paraboloid and sphere reference surfaces

USAGE:
------
    from tether_scene.generative import generate_terrain, TerrainParams

    terrain, mesh = generate_terrain(TerrainParams(order=3, seed=7, n=20, m=20))
"""

from .terrain import NoiseTerrain, TerrainParams, amplitude_table, generate_terrain
from .shapes import plane, paraboloid, sphere

__all__ = [
    'NoiseTerrain', 'TerrainParams', 'amplitude_table', 'generate_terrain',
    'plane', 'paraboloid', 'sphere',
]
