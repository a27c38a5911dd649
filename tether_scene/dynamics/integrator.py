# tether_scene/dynamics/integrator.py
"""
TETHER INTEGRATOR: Semi-Implicit Euler for a Spring-Hung Box
============================================================

PURPOSE:
--------
Advance a BodyState over one time interval [t_start, t_end] under gravity,
a one-sided spring (a tether) and linear/angular drag.

ONE STEP, IN ORDER:
-------------------
    dt = t_end - t_start
    l  = M_prev · attachment                    tether point, PREVIOUS pose
    x  = x + v·dt                               position uses the old velocity
    K  = D·(s - l)·(|s - l| - l0)  if |s - l| > l0, else 0
    F  = m·g + K - ρ·v
    v  = (m·v + F·dt) / m
    I  = m·(sx² + sy²) / 12                     box cross-section
    τ  = (l - x) × K - κ·ω                      x already advanced
    ω  = (I·ω + τ·dt) / I
    θ  = θ - (a · ω)·dt                         1-DOF rotation about fixed axis a

Position is advanced with the velocity from BEFORE this step's force update
(semi-implicit / symplectic Euler). The spring is "nonlinear": its force
grows with both the direction to the anchor and the overstretch, and it
never pushes.

STABILITY:
----------
Explicit integration is only conditionally stable. Callers must keep dt
small (the scene driver sub-steps at 0.1 s by default) rather than pass one
long interval with a stiff spring.

ACTIVATION:
-----------
The integrator starts inactive. Until ``start()`` is called, ``step`` is a
pure no-op and returns None.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..geometry.transform import transform_point
from .body import BodyState, InvalidBodyError

logger = logging.getLogger(__name__)


class IntegrationError(RuntimeError):
    """Raised when a step produces a non-finite body state."""
    pass


@dataclass(frozen=True, eq=False)
class StepResult:
    """Diagnostics of one integration step."""
    dt: float
    attachment_point: np.ndarray
    spring_force: np.ndarray
    net_force: np.ndarray
    torque: np.ndarray
    inertia: float


def attachment_point(state: BodyState) -> np.ndarray:
    """World-space position of the tether attachment for the current pose."""
    return transform_point(state.pose().model, state.attachment)


def spring_force(anchor, point, natural_length: float, stiffness: float) -> np.ndarray:
    """
    Tether force on ``point``, pulling it toward ``anchor``.

    Zero while |anchor - point| <= natural_length (the boundary included);
    beyond that, stiffness · (anchor - point) · (|anchor - point| - natural_length).
    """
    delta = np.asarray(anchor, dtype=float) - np.asarray(point, dtype=float)
    distance = np.linalg.norm(delta)
    if distance > natural_length:
        return stiffness * delta * (distance - natural_length)
    return np.zeros(3)


def box_inertia(mass: float, scale) -> float:
    """Moment of inertia of a box about the axis normal to its x-y face."""
    return mass * (scale[0] ** 2 + scale[1] ** 2) / 12.0


class TetherIntegrator:
    """
    Steps tethered bodies once the simulation has been started.

    Parameters:
    -----------
    active : bool
        Initial value of the activation flag. Default False.
    """

    def __init__(self, active: bool = False):
        self._active = bool(active)

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Begin simulating. Calling it again has no further effect."""
        if not self._active:
            self._active = True
            logger.info("Simulation started")

    def step(self, state: BodyState, t_start: float, t_end: float) -> Optional[StepResult]:
        """
        Advance ``state`` in place from t_start to t_end.

        Returns:
        --------
        StepResult or None
            None when the simulation has not been started.

        Raises:
        -------
        ValueError
            If t_end < t_start.
        InvalidBodyError
            If the mass or the moment of inertia is not positive.
        IntegrationError
            If the new state would contain NaN or Inf; ``state`` is left
            as it was before the call.
        """
        if not self._active:
            return None

        dt = float(t_end) - float(t_start)
        if dt < 0.0:
            raise ValueError(f"Integration interval runs backwards: [{t_start}, {t_end}]")

        m = state.mass
        if not m > 0.0:
            raise InvalidBodyError(f"Body mass must be positive, got {m}")
        inertia = box_inertia(m, state.scale)
        if not inertia > 0.0:
            raise InvalidBodyError(f"Moment of inertia must be positive, got {inertia}")

        # Tether point from the pose before this step
        l = attachment_point(state)

        x = state.translation + state.velocity * dt

        K = spring_force(state.anchor, l, state.natural_length, state.stiffness)
        F = m * state.gravity + K - state.linear_drag * state.velocity
        p = m * state.velocity + F * dt
        v = p / m

        torque = np.cross(l - x, K) - state.angular_drag * state.angular_velocity
        L = inertia * state.angular_velocity + torque * dt
        w = L / inertia

        angle = state.rotation_angle - float(np.dot(state.rotation_axis, w)) * dt

        # the body keeps its last good state when the step blows up
        _check_finite(translation=x, velocity=v, angular_velocity=w, rotation_angle=angle)
        state.translation = x
        state.velocity = v
        state.angular_velocity = w
        state.rotation_angle = angle
        return StepResult(dt=dt, attachment_point=l, spring_force=K, net_force=F, torque=torque, inertia=inertia)


def _check_finite(**values) -> None:
    for name, value in values.items():
        if not np.all(np.isfinite(value)):
            raise IntegrationError(
                f"Body {name} would become non-finite ({value}). "
                f"Reduce the step size or the spring stiffness."
            )
