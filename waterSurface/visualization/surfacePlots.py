# -- Water Surface Visualizations -- #

'''
Plotly-based interactive plots of a water surface's current state.
'''

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from waterSurface.surface import WaterSurface
from waterSurface.visualization import theme


def _gridPoints(surface: WaterSurface, extent: float, resolution: int):
    origin = surface.config.origin
    xValues = origin[0] + np.linspace(-extent / 2.0, extent / 2.0, resolution)
    zValues = origin[1] + np.linspace(-extent / 2.0, extent / 2.0, resolution)
    xx, zz = np.meshgrid(xValues, zValues, indexing='xy')
    points = np.column_stack([xx.ravel(), np.zeros(xx.size), zz.ravel()])
    return xValues, zValues, points


def plotHeightField(
    surface: WaterSurface,
    extent: float = 40.0,
    resolution: int = 80,
) -> go.Figure:
    '''
    3D surface plot of the height field around the surface origin.

    Parameters:
    -----------
    surface : WaterSurface
        Surface to sample at its current time
    extent : float
        Side length of the sampled square [m]
    resolution : int
        Samples per side

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    xValues, zValues, points = _gridPoints(surface, extent, resolution)
    heights = np.asarray(surface.getHeightAtPosition(points)).reshape(len(zValues), len(xValues))

    fig = go.Figure()

    fig.add_trace(go.Surface(
        x=xValues, y=zValues, z=heights,
        colorscale=theme.WATER_COLORSCALE,
        colorbar=dict(title=dict(text='Height (m)')),
        name='Surface',
    ))

    amplitude = max(surface.waveField.getTotalWaveHeight() * surface.config.waveStrength, 0.1)

    fig.update_layout(
        title=f'Water Surface "{surface.config.name}" '
              f'(t={surface.time:.2f}s, {surface.waveField.nLayers} layers)',
        template=theme.TEMPLATE,
        height=600,
        scene=dict(
            xaxis_title='x (m)',
            yaxis_title='z (m)',
            zaxis_title='Height (m)',
            zaxis=dict(range=[
                surface.baseElevation - 3.0 * amplitude,
                surface.baseElevation + 3.0 * amplitude,
            ]),
            aspectratio=dict(x=1.0, y=1.0, z=0.3),
        ),
    )

    return fig


def plotHeightProfile(
    surface: WaterSurface,
    length: float = 40.0,
    nSamples: int = 400,
) -> go.Figure:
    '''
    Height and normal tilt along the dominant wave direction.

    Parameters:
    -----------
    surface : WaterSurface
        Surface to sample at its current time
    length : float
        Profile length, centered on the origin [m]
    nSamples : int
        Number of samples along the profile

    Returns:
    --------
    go.Figure : Plotly figure with 2 stacked subplots
    '''
    direction = surface.waveField.getDominantDirection()
    norm = np.linalg.norm(direction)
    direction = direction / norm if norm > 0.0 else np.array([1.0, 0.0])

    s = np.linspace(-length / 2.0, length / 2.0, nSamples)
    origin = surface.config.origin
    points = np.column_stack([
        origin[0] + s * direction[0],
        np.zeros_like(s),
        origin[1] + s * direction[1],
    ])

    heights = np.asarray(surface.getHeightAtPosition(points))
    normals = np.asarray(surface.getNormalAtPosition(points)).reshape(-1, 3)
    tiltDeg = np.degrees(np.arccos(np.clip(normals[:, 1], -1.0, 1.0)))

    fig = make_subplots(
        rows=2, cols=1, shared_xaxes=True,
        subplot_titles=('Surface Height', 'Normal Tilt from Vertical'),
    )

    fig.add_trace(
        go.Scatter(x=s, y=heights, mode='lines', name='Height',
                   line=dict(color=theme.BLUE, width=2)),
        row=1, col=1,
    )
    fig.add_hline(
        y=surface.baseElevation,
        line=dict(color=theme.REFERENCE_LINE, dash='dash', width=1),
        row=1, col=1,
    )
    fig.add_trace(
        go.Scatter(x=s, y=tiltDeg, mode='lines', name='Tilt',
                   line=dict(color=theme.ORANGE, width=2)),
        row=2, col=1,
    )

    fig.update_xaxes(title_text='Distance along dominant direction (m)', row=2, col=1)
    fig.update_yaxes(title_text='Height (m)', row=1, col=1)
    fig.update_yaxes(title_text='Tilt (deg)', row=2, col=1)

    fig.update_layout(
        title=f'Height Profile (t={surface.time:.2f}s, '
              f'dir=({direction[0]:+.2f}, {direction[1]:+.2f}))',
        template=theme.TEMPLATE,
        height=600,
        showlegend=False,
    )

    return fig


def plotFoamSnapshot(surface: WaterSurface, extent: float = 40.0) -> go.Figure:
    '''
    Top-down view of foam particles and active interaction rings.

    Parameters:
    -----------
    surface : WaterSurface
        Surface whose interaction state is drawn
    extent : float
        Side length of the plotted square [m]

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    foam = surface.interactions.foamPool
    positions = foam.positions

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=positions[:, 0], y=positions[:, 2], mode='markers', name='Foam',
        marker=dict(
            color=theme.WHITE,
            size=np.clip(foam.sizes * 20.0, 2.0, 8.0),
            opacity=0.8,
        ),
        customdata=foam.alphas,
        hovertemplate='x=%{x:.2f} z=%{y:.2f} alpha=%{customdata:.2f}<extra></extra>',
    ))

    for interaction in surface.interactions.interactionPool.interactions:
        x, _, z = interaction.position
        r = interaction.currentRadius
        fig.add_shape(
            type='circle', xref='x', yref='y',
            x0=x - r, y0=z - r, x1=x + r, y1=z + r,
            line=dict(color=theme.INTERACTION_COLORS[int(interaction.interactionType)], width=1),
        )

    origin = surface.config.origin
    half = extent / 2.0

    fig.update_layout(
        title=f'Foam & Interactions ({foam.count} particles, '
              f'{surface.interactions.activeInteractionCount} rings)',
        xaxis=dict(title='x (m)', range=[origin[0] - half, origin[0] + half]),
        yaxis=dict(title='z (m)', range=[origin[1] - half, origin[1] + half],
                   scaleanchor='x', scaleratio=1),
        template=theme.TEMPLATE,
        height=600,
    )

    return fig
