# tether_scene/scene.py
"""
SCENE: What Is Drawn, and How It Moves
======================================

A scene is a flat list of items of two kinds:

- StaticMesh:   geometry placed once (the terrain). Stepping does nothing.
- TetheredBody: a box driven by the TetherIntegrator.

Both offer the same two operations, which is all a renderer or driver
needs:

    item.compute_transform() -> Pose      model matrix and inverse
    item.step(t_start, t_end)             advance over one interval

The scene owns the activation flag through its integrator: nothing moves
until ``start()`` is called.

DRIVER:
-------
``advance(t_start, t_end, max_dt)`` covers an arbitrary wall-clock interval
with sub-steps no longer than ``max_dt`` - the last one is shortened to land
exactly on ``t_end``. Keeping single steps short is what keeps the explicit
integrator stable.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from .config import CONFIG, SceneConfig
from .dynamics.body import BodyState
from .dynamics.integrator import StepResult, TetherIntegrator, attachment_point
from .generative.terrain import NoiseTerrain
from .geometry.cube import TriangleMesh, unit_cube
from .geometry.surface import TessellatedMesh, tessellate
from .geometry.transform import Pose

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class StaticMesh:
    """Geometry with a fixed placement."""
    mesh: Union[TessellatedMesh, TriangleMesh]
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    rotation_axis: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    rotation_angle: float = 0.0
    name: str = "mesh"

    def compute_transform(self) -> Pose:
        return Pose.from_components(self.translation, self.rotation_axis, self.rotation_angle, self.scale)

    def step(self, t_start: float, t_end: float) -> None:
        return None


@dataclass(eq=False)
class TetheredBody:
    """A box hanging from a spring, stepped by the shared integrator."""
    state: BodyState
    integrator: TetherIntegrator
    mesh: TriangleMesh = field(default_factory=unit_cube)
    name: str = "body"

    def compute_transform(self) -> Pose:
        return self.state.pose()

    def step(self, t_start: float, t_end: float) -> Optional[StepResult]:
        return self.integrator.step(self.state, t_start, t_end)

    def tether_point(self) -> np.ndarray:
        """World-space attachment point for the current pose."""
        return attachment_point(self.state)


SceneItem = Union[StaticMesh, TetheredBody]


class Scene:
    """
    Items plus the integrator that gates their motion.

    Parameters:
    -----------
    items : List[SceneItem]
    integrator : TetherIntegrator
        Shared by every TetheredBody in ``items``.
    """

    def __init__(self, items: List[SceneItem], integrator: TetherIntegrator):
        self.items = list(items)
        self.integrator = integrator

    @property
    def is_active(self) -> bool:
        return self.integrator.is_active

    def start(self) -> None:
        self.integrator.start()

    @property
    def bodies(self) -> List[TetheredBody]:
        return [item for item in self.items if isinstance(item, TetheredBody)]

    @property
    def static_meshes(self) -> List[StaticMesh]:
        return [item for item in self.items if isinstance(item, StaticMesh)]

    def step(self, t_start: float, t_end: float) -> None:
        """Advance every item over one interval."""
        for item in self.items:
            item.step(t_start, t_end)

    def advance(self, t_start: float, t_end: float, max_dt: Optional[float] = None) -> int:
        """
        Cover [t_start, t_end] with sub-steps of at most ``max_dt``.

        Returns:
        --------
        int
            Number of sub-steps taken.
        """
        if max_dt is None:
            max_dt = CONFIG.driver.max_dt
        if max_dt <= 0.0:
            raise ValueError(f"max_dt must be positive, got {max_dt}")
        if t_end < t_start:
            raise ValueError(f"Cannot advance backwards from {t_start} to {t_end}")

        n_steps = 0
        t = t_start
        while t < t_end:
            t_next = min(t + max_dt, t_end)
            # snap round-off remainders onto t_end instead of taking a sliver step
            if t_end - t_next < 1e-9 * max_dt:
                t_next = t_end
            self.step(t, t_next)
            t = t_next
            n_steps += 1

        logger.debug("Advanced [%.3f, %.3f] in %d sub-steps", t_start, t_end, n_steps)
        return n_steps


def build_default_scene(config: SceneConfig = CONFIG, seed: Optional[int] = None) -> Scene:
    """
    Noise terrain below a box hanging from a spring.

    Parameters:
    -----------
    config : SceneConfig
        Body, terrain and driver settings.
    seed : Optional[int]
        Terrain phase seed; overrides ``config.terrain.seed`` when given.
    """
    tc = config.terrain
    terrain = NoiseTerrain(order=tc.order, seed=tc.seed if seed is None else seed)
    ground = StaticMesh(
        mesh=tessellate(terrain, tc.tessellation_level, tc.tessellation_level),
        translation=np.array(tc.translation, dtype=float),
        scale=np.array(tc.scale, dtype=float),
        rotation_axis=np.array(tc.rotation_axis, dtype=float),
        rotation_angle=tc.rotation_angle,
        name="terrain",
    )

    integrator = TetherIntegrator()
    body = TetheredBody(state=BodyState.from_config(config.body), integrator=integrator)

    logger.info("Built scene: terrain seed=%s, body mass=%.3g", terrain.seed, body.state.mass)
    return Scene([ground, body], integrator)
