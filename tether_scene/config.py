"""
Scene configuration and defaults.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]


@dataclass
class BodyConfig:
    """Initial state and physical constants of the tethered box."""

    mass: float = 1.0
    gravity: Vec3 = (0.0, -5.0, 0.0)
    velocity: Vec3 = (1.0, 0.0, 0.0)
    angular_velocity: Vec3 = (0.0, 0.0, 0.0)
    translation: Vec3 = (0.0, 5.0, 0.0)
    scale: Vec3 = (1.0, 1.5, 0.5)
    rotation_axis: Vec3 = (0.0, 0.0, 1.0)
    rotation_angle: float = 0.0

    # Tether
    anchor: Vec3 = (0.0, 5.0, 0.0)
    attachment: Vec3 = (0.0, -0.5, 0.0)  # local frame, bottom face center
    natural_length: float = 3.0
    stiffness: float = 1.0

    # Drag
    linear_drag: float = 0.3
    angular_drag: float = 0.3


@dataclass
class TerrainConfig:
    """Noise terrain and how it is placed in the world."""

    order: int = 3
    seed: Optional[int] = None
    tessellation_level: int = 20

    translation: Vec3 = (0.0, -5.0, 0.0)
    scale: Vec3 = (15.0, 1.0, 15.0)
    rotation_axis: Vec3 = (0.0, 1.0, 0.0)
    rotation_angle: float = 0.0


@dataclass
class DriverConfig:
    """Time stepping of the animation loop."""

    max_dt: float = 0.1  # largest single integration step (s)
    sample_dt: float = 0.1  # trajectory recording interval (s)


@dataclass
class SceneConfig:
    """Everything needed to build the default scene."""

    body: BodyConfig = field(default_factory=BodyConfig)
    terrain: TerrainConfig = field(default_factory=TerrainConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)


# Global config instance
CONFIG = SceneConfig()
