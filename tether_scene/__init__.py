# tether_scene - Noise terrain and a spring-tethered rigid body
"""
TETHER_SCENE: Analytic Surfaces and a Tethered Rigid Body
=========================================================

The numerical core of an animated scene: a procedurally generated terrain
and a box hanging from a spring above it.

ARCHITECTURE:
-------------
    kernel/         Dual numbers: exact derivatives through plain arithmetic
    geometry/       Surface evaluation/tessellation, model transforms, cube mesh
    generative/     Procedural surfaces (noise terrain, reference shapes)
    dynamics/       BodyState and the semi-implicit Euler tether integrator
    scene.py        Scene items, activation and the sub-stepping driver
    trajectory.py   Record a simulated trajectory as a DataFrame
    viz/            Plotly scene viewer, matplotlib trajectory plots
    config.py       Dataclass defaults (CONFIG)
"""

from .kernel import Dnum2, DualDomainError
from .geometry import evaluate, tessellate
from .dynamics import BodyState, TetherIntegrator
from .scene import Scene, StaticMesh, TetheredBody, build_default_scene

__version__ = "0.1.0"

__all__ = [
    'Dnum2', 'DualDomainError', 'evaluate', 'tessellate',
    'BodyState', 'TetherIntegrator',
    'Scene', 'StaticMesh', 'TetheredBody', 'build_default_scene',
]
