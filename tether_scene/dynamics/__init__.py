# tether_scene/dynamics - Rigid-body state and time stepping
"""
DYNAMICS: A SPRING-TETHERED RIGID BODY
======================================

- body:       BodyState, the single mutable state of a tethered box
- integrator: TetherIntegrator (activation flag + semi-implicit Euler step),
              spring force and box inertia helpers

USAGE:
------
    from tether_scene.dynamics import BodyState, TetherIntegrator

    state = BodyState(mass=1.0, gravity=(0, -5, 0))
    integrator = TetherIntegrator()
    integrator.start()
    integrator.step(state, 0.0, 0.1)
"""

from .body import BodyState, InvalidBodyError
from .integrator import (
    IntegrationError,
    StepResult,
    TetherIntegrator,
    attachment_point,
    box_inertia,
    spring_force,
)

__all__ = [
    'BodyState', 'InvalidBodyError',
    'IntegrationError', 'StepResult', 'TetherIntegrator',
    'attachment_point', 'box_inertia', 'spring_force',
]
