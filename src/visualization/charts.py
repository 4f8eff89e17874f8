"""
Bar chart of the yearly first-quarter vehicle theft series
"""
import json
from typing import Any, Dict, List

import pandas as pd
import plotly.graph_objects as go
import plotly.io as pio

from config import (
    BAR_COLOR,
    BAR_HEIGHT,
    BAR_MARGIN,
    BAR_PADDING,
    BAR_STAGGER_MS,
    BAR_TICK_ANGLE,
    BAR_TRANSITION_MS,
    BAR_WIDTH,
    BAR_Y_MAX,
)

# Each frame reveals one more bar; frames advance every BAR_STAGGER_MS so the
# k-th bar starts growing at k * BAR_STAGGER_MS.
ANIMATION_OPTS: Dict[str, Any] = {
    "frame": {"duration": BAR_STAGGER_MS, "redraw": False},
    "transition": {"duration": BAR_TRANSITION_MS, "easing": "cubic-in-out"},
    "mode": "afterall",
}


def _reveal_frames(values: List[float]) -> List[go.Frame]:
    """Frame 0 has every bar at zero, frame k raises the first k bars."""
    frames = []
    for k in range(len(values) + 1):
        heights = [value if i < k else 0 for i, value in enumerate(values)]
        frames.append(go.Frame(data=[go.Bar(y=heights)], name=str(k)))
    return frames


def band_axis_range(count: int, padding: float = BAR_PADDING) -> List[float]:
    """
    Category axis range giving the outer edges the same padding as the gaps.

    Plotly's ``bargap`` only spaces bars from each other; widening the range by
    half of ``padding`` on each side leaves ``padding`` of a slot before the
    first bar and after the last one.
    """
    half_slot = 0.5 + padding / 2
    return [-half_slot, count - 1 + half_slot]


def create_vehicle_theft_chart(series: pd.DataFrame) -> go.Figure:
    """
    Create the animated bar chart for the vehicle theft series.

    Args:
        series: DataFrame with ``label`` and ``value`` columns, one row per bar,
            as returned by :func:`analytics.incidents.build_yearly_series`.

    Returns:
        Plotly Figure whose bars start at zero height and rise one after another.
    """
    if series is None or series.empty:
        fig = go.Figure()
        fig.update_layout(title="No hay datos de sustracciones de vehículos", height=400)
        return fig

    labels = series["label"].astype(str).tolist()
    values = pd.to_numeric(series["value"], errors="coerce").astype("float64").tolist()
    formatted = [f"{int(v):,}" if pd.notna(v) else "—" for v in values]

    fig = go.Figure(
        data=[
            go.Bar(
                x=labels,
                y=[0] * len(labels),
                marker_color=BAR_COLOR,
                customdata=formatted,
                hovertemplate="%{x}<br>Sustracciones: %{customdata}<extra></extra>",
            )
        ],
        frames=_reveal_frames(values),
    )

    fig.update_layout(
        width=BAR_WIDTH,
        height=BAR_HEIGHT,
        margin=BAR_MARGIN,
        bargap=BAR_PADDING,
        showlegend=False,
        plot_bgcolor="#ffffff",
        updatemenus=[
            {
                "type": "buttons",
                "showactive": False,
                "x": 1.0,
                "y": 1.0,
                "xanchor": "right",
                "yanchor": "top",
                "buttons": [
                    {
                        "label": "▶",
                        "method": "animate",
                        "args": [None, dict(ANIMATION_OPTS, fromcurrent=False)],
                    }
                ],
            }
        ],
    )
    fig.update_xaxes(
        type="category",
        range=band_axis_range(len(labels)),
        tickangle=BAR_TICK_ANGLE,
        showline=True,
        linecolor="#000000",
    )
    fig.update_yaxes(
        range=[0, BAR_Y_MAX],
        autorange=False,
        showline=True,
        linecolor="#000000",
        tickformat=",d",
    )
    return fig


def chart_to_html(fig: go.Figure, *, full_html: bool = False) -> str:
    """
    Render the figure as HTML that starts the reveal once, right after loading.

    The initial data already has every bar at zero, so playback skips frame 0
    and the first bar starts growing immediately.
    """
    post_script = None
    if fig.frames:
        names = [frame.name for frame in fig.frames][1:]
        post_script = "Plotly.animate('{plot_id}', %s, %s);" % (
            json.dumps(names),
            json.dumps(ANIMATION_OPTS),
        )
    return pio.to_html(
        fig,
        include_plotlyjs="cdn",
        full_html=full_html,
        auto_play=False,
        post_script=post_script,
    )
