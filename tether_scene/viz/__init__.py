# tether_scene/viz - Visualization Tools
"""
VIZ: Offline Views of the Scene
===============================

- viz3d: interactive 3D scene snapshot (Plotly)
- viz2d: trajectory plots (matplotlib)
"""

from .viz3d import create_scene_figure, plot_scene_3d
from .viz2d import plot_trajectory

__all__ = ['create_scene_figure', 'plot_scene_3d', 'plot_trajectory']
