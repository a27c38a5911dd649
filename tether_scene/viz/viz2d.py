# tether_scene/viz/viz2d.py
"""
Trajectory plots (matplotlib).

Two stacked panels sharing the time axis: the body's height with the
tether stretch, and its rotation angle.
"""

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd

COLORS = {
    'height': '#2C3E50',
    'stretch': '#E74C3C',
    'angle': '#3498DB',
}


def plot_trajectory(df: pd.DataFrame, outpath: Optional[str] = None, title: str = "Tethered body"):
    """
    Plot a recorded trajectory.

    Parameters:
    -----------
    df : pd.DataFrame
        Output of record_trajectory().
    outpath : Optional[str]
        If given, save the figure there (format from the extension).

    Returns:
    --------
    matplotlib.figure.Figure
    """
    fig, (ax_h, ax_a) = plt.subplots(2, 1, sharex=True, figsize=(8, 6))

    ax_h.plot(df['t'], df['y'], color=COLORS['height'], label='height y')
    ax_h.plot(df['t'], df['stretch'], color=COLORS['stretch'], linestyle='--', label='tether stretch')
    ax_h.axhline(0.0, color='gray', linewidth=0.5)
    ax_h.set_ylabel('m')
    ax_h.legend(loc='best')
    ax_h.set_title(title)

    ax_a.plot(df['t'], df['angle'], color=COLORS['angle'])
    ax_a.set_ylabel('angle (rad)')
    ax_a.set_xlabel('t (s)')

    fig.tight_layout()
    if outpath:
        fig.savefig(outpath, dpi=120)
    return fig
