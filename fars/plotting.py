import pandas as pd
import plotly.graph_objects as go

from .config import LATITUDE_COL, LONGITUDE_COL
from .mapping import StateMap


# ============================================================
# Configuration / constants
# ============================================================

POINT_COLOR = "#d62728"
POINT_SIZE = 3

# Degrees added around the viewport so edge points are not clipped
VIEWPORT_PADDING = 0.5

HOVER_TEMPLATE = "Longitude: %{lon:.4f}<br>Latitude: %{lat:.4f}<extra></extra>"


# ============================================================
# Helper functions
# ============================================================


def _padded_range(low: float, high: float) -> list[float]:
    return [low - VIEWPORT_PADDING, high + VIEWPORT_PADDING]


# ============================================================
# Main plotting function
# ============================================================


def create_state_map(state_map: StateMap, *, title: str | None = None) -> go.Figure:
    """
    Plot one state's accident locations as small markers on a base map.

    Parameters
    ----------
    state_map : StateMap
        Output of ``fars.mapping.map_state``.
    title : str | None, default None
        Figure title; defaults to "Fatal accidents, state <n>, <year>".

    Returns
    -------
    go.Figure
        A Plotly figure with one Scattergeo trace.  Records with an unknown
        coordinate are not drawn.
    """
    points = points_frame(state_map)

    fig = go.Figure(
        go.Scattergeo(
            lon=points[LONGITUDE_COL],
            lat=points[LATITUDE_COL],
            mode="markers",
            marker=dict(size=POINT_SIZE, color=POINT_COLOR),
            hovertemplate=HOVER_TEMPLATE,
            showlegend=False,
        )
    )

    geo = dict(
        scope="north america",
        projection=dict(type="equirectangular"),
        showsubunits=True,
        subunitcolor="#9a9a9a",
        showland=True,
        landcolor="#f5f7fb",
        resolution=50,
    )
    viewport = state_map.viewport
    if viewport is not None:
        geo["lonaxis"] = dict(range=_padded_range(viewport.lon_min, viewport.lon_max))
        geo["lataxis"] = dict(range=_padded_range(viewport.lat_min, viewport.lat_max))

    fig.update_layout(
        title=title or f"Fatal accidents, state {state_map.state}, {state_map.year}",
        geo=geo,
        margin=dict(t=60, l=20, r=20, b=20),
    )
    return fig


def points_frame(state_map: StateMap) -> pd.DataFrame:
    """Known coordinates only, as plotted."""
    return state_map.to_frame().dropna(subset=[LONGITUDE_COL, LATITUDE_COL])
