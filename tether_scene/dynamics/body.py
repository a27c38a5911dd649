# tether_scene/dynamics/body.py
"""
BODY STATE: Everything the Integrator Reads and Writes
======================================================

A tethered rigid body is a box hanging from a fixed anchor point by a
spring attached to a point on the body. BodyState bundles its constants
(mass, shape, spring, drag, gravity) and its dynamic state (velocities,
translation, rotation angle).

Ownership: the integrator is the only writer. Readers (rendering, trajectory
recording) look at the state between steps only.

Rotation is restricted to one fixed axis: ``rotation_axis`` never changes,
only ``rotation_angle`` does.
"""

from dataclasses import dataclass, field, replace

import numpy as np

from ..config import BodyConfig
from ..geometry.transform import Pose


class InvalidBodyError(ValueError):
    """Raised when a body's mass, scale or inertia is not strictly positive."""
    pass


def _vec3(x) -> np.ndarray:
    return np.array(x, dtype=float).reshape(3)


@dataclass(eq=False)
class BodyState:
    """
    Mutable state of a spring-tethered rigid body.

    Attributes:
    -----------
    mass : float
        Must be > 0.
    velocity, angular_velocity : np.ndarray
        Linear (m/s) and angular (rad/s) velocity.
    translation : np.ndarray
        Position of the body origin in the world.
    rotation_axis : np.ndarray
        Fixed rotation axis.
    rotation_angle : float
        Radians about ``rotation_axis``.
    scale : np.ndarray
        Box dimensions; every component must be > 0.
    anchor : np.ndarray
        World-space point the spring hangs from.
    attachment : np.ndarray
        Spring attachment point in the body's local (unscaled) frame.
    natural_length : float
        Spring rest length; the spring only pulls beyond it.
    stiffness : float
        Spring constant.
    linear_drag, angular_drag : float
        Drag coefficients (force ∝ velocity, torque ∝ angular velocity).
    gravity : np.ndarray
        Gravitational acceleration.
    """
    mass: float = 1.0
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation_axis: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    rotation_angle: float = 0.0
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    anchor: np.ndarray = field(default_factory=lambda: np.zeros(3))
    attachment: np.ndarray = field(default_factory=lambda: np.array([0.0, -0.5, 0.0]))
    natural_length: float = 0.0
    stiffness: float = 0.0
    linear_drag: float = 0.0
    angular_drag: float = 0.0
    gravity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        for name in ('velocity', 'angular_velocity', 'translation', 'rotation_axis',
                     'scale', 'anchor', 'attachment', 'gravity'):
            setattr(self, name, _vec3(getattr(self, name)))
        self.mass = float(self.mass)
        self.rotation_angle = float(self.rotation_angle)

        if not self.mass > 0.0:
            raise InvalidBodyError(f"Body mass must be positive, got {self.mass}")
        if not np.all(self.scale > 0.0):
            raise InvalidBodyError(f"Body scale must be positive in every axis, got {self.scale}")

    @classmethod
    def from_config(cls, config: BodyConfig) -> 'BodyState':
        return cls(
            mass=config.mass,
            velocity=config.velocity,
            angular_velocity=config.angular_velocity,
            translation=config.translation,
            rotation_axis=config.rotation_axis,
            rotation_angle=config.rotation_angle,
            scale=config.scale,
            anchor=config.anchor,
            attachment=config.attachment,
            natural_length=config.natural_length,
            stiffness=config.stiffness,
            linear_drag=config.linear_drag,
            angular_drag=config.angular_drag,
            gravity=config.gravity,
        )

    def pose(self) -> Pose:
        """Model transform T·R·S built from the current state."""
        return Pose.from_components(self.translation, self.rotation_axis, self.rotation_angle, self.scale)

    def copy(self) -> 'BodyState':
        """Independent copy (vector fields are re-created by __post_init__)."""
        return replace(self)
