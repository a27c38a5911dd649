# tether_scene/trajectory.py
"""
TRAJECTORY RECORDING
====================

Run the scene driver over a time span and tabulate the tethered body's
state at a fixed sampling interval. The result is a pandas DataFrame, one
row per sample (including t = 0), ready for plotting or CSV export.

Columns:
    t                  time (s)
    x, y, z            translation
    vx, vy, vz         linear velocity
    wx, wy, wz         angular velocity
    angle              rotation angle about the fixed axis (rad)
    stretch            |anchor - tether point| - natural length (negative = slack)
    spring_force       magnitude of the tether force at the sample
"""

import logging
from typing import Optional, Union

import numpy as np
import pandas as pd

from .config import CONFIG
from .dynamics.integrator import attachment_point, spring_force
from .scene import Scene, TetheredBody

logger = logging.getLogger(__name__)

COLUMNS = ['t', 'x', 'y', 'z', 'vx', 'vy', 'vz', 'wx', 'wy', 'wz', 'angle', 'stretch', 'spring_force']


def _sample(t: float, body: TetheredBody) -> dict:
    s = body.state
    l = attachment_point(s)
    distance = float(np.linalg.norm(s.anchor - l))
    K = spring_force(s.anchor, l, s.natural_length, s.stiffness)
    return {
        't': t,
        'x': s.translation[0], 'y': s.translation[1], 'z': s.translation[2],
        'vx': s.velocity[0], 'vy': s.velocity[1], 'vz': s.velocity[2],
        'wx': s.angular_velocity[0], 'wy': s.angular_velocity[1], 'wz': s.angular_velocity[2],
        'angle': s.rotation_angle,
        'stretch': distance - s.natural_length,
        'spring_force': float(np.linalg.norm(K)),
    }


def record_trajectory(
    scene: Scene,
    duration: float,
    sample_dt: Optional[float] = None,
    max_dt: Optional[float] = None,
    body: Union[int, TetheredBody] = 0,
    t_start: float = 0.0,
) -> pd.DataFrame:
    """
    Simulate ``duration`` seconds and record one body's state.

    The scene is started if it is not already active.

    Parameters:
    -----------
    scene : Scene
    duration : float
        Seconds to simulate. Must be >= 0.
    sample_dt : Optional[float]
        Recording interval; defaults to CONFIG.driver.sample_dt.
    max_dt : Optional[float]
        Largest integration sub-step; defaults to CONFIG.driver.max_dt.
    body : int or TetheredBody
        Which body to record (index into ``scene.bodies`` or the body itself).
    t_start : float
        Simulation time of the first sample.

    Returns:
    --------
    pd.DataFrame
        Columns as listed in the module docstring.
    """
    if duration < 0.0:
        raise ValueError(f"duration must be >= 0, got {duration}")
    if sample_dt is None:
        sample_dt = CONFIG.driver.sample_dt
    if sample_dt <= 0.0:
        raise ValueError(f"sample_dt must be positive, got {sample_dt}")

    if isinstance(body, int):
        bodies = scene.bodies
        if not bodies:
            raise ValueError("Scene has no tethered body to record")
        body = bodies[body]

    scene.start()

    n_samples = int(np.ceil(duration / sample_dt - 1e-9))
    rows = [_sample(t_start, body)]
    t = t_start
    for k in range(1, n_samples + 1):
        t_next = min(t_start + k * sample_dt, t_start + duration)
        scene.advance(t, t_next, max_dt)
        t = t_next
        rows.append(_sample(t, body))

    logger.debug("Recorded %d samples over %.3f s", len(rows), duration)
    return pd.DataFrame(rows, columns=COLUMNS)
