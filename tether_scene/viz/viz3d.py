# tether_scene/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Scene Viewer
==========================================

PURPOSE:
--------
Render a scene snapshot with Plotly: the terrain as a height-shaded
surface, the tethered body as a box, and the tether as a line from the
anchor to the attachment point. The viewer only uses what any renderer
gets from the core - mesh vertex data and each item's model transform.

AXES:
-----
The scene is y-up. Plotly's 3D camera is z-up, so world (x, y, z) is drawn
as plot (x, z, y): height stays vertical on screen.
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go

from ..geometry.transform import Pose
from ..scene import Scene, StaticMesh, TetheredBody


# grass green in the valleys, earth brown on the ridges
TERRAIN_COLORSCALE = [[0.0, 'rgb(34, 179, 24)'], [1.0, 'rgb(140, 85, 28)']]


def _to_world(pose: Pose, local: np.ndarray) -> np.ndarray:
    homo = np.hstack([local, np.ones((len(local), 1))])
    return (pose.model @ homo.T).T[:, :3]


def _mesh_trace(world: np.ndarray, tris: np.ndarray, name: str, **kwargs) -> go.Mesh3d:
    return go.Mesh3d(
        x=world[:, 0], y=world[:, 2], z=world[:, 1],
        i=tris[:, 0], j=tris[:, 1], k=tris[:, 2],
        name=name,
        **kwargs,
    )


def create_scene_figure(
    scene: Scene,
    title: str = "Tethered Body over Noise Terrain",
    show_tether: bool = True,
    colorscale=TERRAIN_COLORSCALE,
) -> go.Figure:
    """
    Create a Plotly figure for the current state of a scene.

    Parameters:
    -----------
    scene : Scene
        Scene to draw; read only.
    title : str
        Plot title.
    show_tether : bool
        Draw the spring as a line from anchor to attachment point.
    colorscale : str or list
        Plotly colorscale for the terrain height shading.

    Returns:
    --------
    go.Figure
    """
    fig = go.Figure()

    for item in scene.items:
        pose = item.compute_transform()
        if isinstance(item, StaticMesh):
            local = item.mesh.positions
            world = _to_world(pose, local)
            fig.add_trace(_mesh_trace(
                world, item.mesh.triangles(), item.name,
                intensity=local[:, 1],
                colorscale=colorscale,
                showscale=False,
                flatshading=False,
                hoverinfo='skip',
            ))
        elif isinstance(item, TetheredBody):
            world = _to_world(pose, item.mesh.positions)
            fig.add_trace(_mesh_trace(
                world, item.mesh.triangles(), item.name,
                color='lightsteelblue',
                opacity=1.0,
                flatshading=True,
            ))
            if show_tether:
                anchor = item.state.anchor
                tip = item.tether_point()
                fig.add_trace(go.Scatter3d(
                    x=[anchor[0], tip[0]], y=[anchor[2], tip[2]], z=[anchor[1], tip[1]],
                    mode='lines+markers',
                    line=dict(color='firebrick', width=4),
                    marker=dict(size=[6, 3], color='firebrick'),
                    name=f'{item.name} tether',
                ))

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X'),
            yaxis=dict(title='Z'),
            zaxis=dict(title='Y (up)'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=0.8)),
        ),
        showlegend=True,
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def plot_scene_3d(
    scene: Scene,
    outpath: Optional[str] = None,
    show: bool = False,
    **kwargs,
) -> go.Figure:
    """
    Create and optionally save/display the scene figure.

    Parameters:
    -----------
    scene : Scene
    outpath : Optional[str]
        If provided, write the figure as standalone HTML.
    show : bool
        Open the figure in a browser / notebook.
    **kwargs
        Passed to create_scene_figure().
    """
    fig = create_scene_figure(scene, **kwargs)
    if outpath:
        fig.write_html(outpath)
    if show:
        fig.show()
    return fig
