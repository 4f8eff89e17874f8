"""Unit tests for the animated vehicle theft bar chart."""

from __future__ import annotations

import pandas as pd
import pytest

from config import BAR_PADDING, BAR_STAGGER_MS, BAR_TICK_ANGLE, BAR_TRANSITION_MS, BAR_Y_MAX
from visualization.charts import (
    ANIMATION_OPTS,
    band_axis_range,
    chart_to_html,
    create_vehicle_theft_chart,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def series() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "label": ["1er T - 2019", "1er T - 2020", "1er T - 2021"],
            "value": [9850, 5000, 7320],
            "year": [2019, 2020, 2021],
        }
    )


def test_bars_start_at_zero(series: pd.DataFrame) -> None:
    fig = create_vehicle_theft_chart(series)

    bar = fig.data[0]
    assert list(bar.x) == series["label"].tolist()
    assert list(bar.y) == [0, 0, 0]


def test_axes_are_fixed(series: pd.DataFrame) -> None:
    fig = create_vehicle_theft_chart(series)

    assert tuple(fig.layout.yaxis.range) == (0, BAR_Y_MAX)
    assert fig.layout.yaxis.autorange is False
    assert fig.layout.xaxis.type == "category"
    assert fig.layout.xaxis.tickangle == BAR_TICK_ANGLE


def test_frames_reveal_one_bar_at_a_time(series: pd.DataFrame) -> None:
    fig = create_vehicle_theft_chart(series)

    heights = [list(frame.data[0].y) for frame in fig.frames]
    assert heights == [
        [0, 0, 0],
        [9850, 0, 0],
        [9850, 5000, 0],
        [9850, 5000, 7320],
    ]
    assert [frame.name for frame in fig.frames] == ["0", "1", "2", "3"]


def test_animation_timing() -> None:
    assert ANIMATION_OPTS["frame"]["duration"] == BAR_STAGGER_MS
    assert ANIMATION_OPTS["transition"]["duration"] == BAR_TRANSITION_MS


def test_final_bar_height_is_proportional_to_value() -> None:
    fig = create_vehicle_theft_chart(pd.DataFrame({"label": ["1er T - 2020"], "value": [5000]}))

    final_height = fig.frames[-1].data[0].y[0]
    assert final_height / fig.layout.yaxis.range[1] == pytest.approx(5000 / 13000)


def test_hover_shows_formatted_value(series: pd.DataFrame) -> None:
    fig = create_vehicle_theft_chart(series)

    assert list(fig.data[0].customdata) == ["9,850", "5,000", "7,320"]


def test_empty_series_gives_placeholder_figure() -> None:
    fig = create_vehicle_theft_chart(pd.DataFrame(columns=["label", "value"]))

    assert len(fig.data) == 0
    assert not fig.frames
    assert "No hay datos" in fig.layout.title.text


def test_html_plays_reveal_on_load(series: pd.DataFrame) -> None:
    html = chart_to_html(create_vehicle_theft_chart(series))

    assert "Plotly.animate(" in html
    assert '["1", "2", "3"]' in html
    assert "{plot_id}" not in html


def test_html_without_frames_has_no_animation() -> None:
    html = chart_to_html(create_vehicle_theft_chart(pd.DataFrame()))

    assert "Plotly.animate(" not in html


def test_outer_padding_matches_gap_between_bars(series: pd.DataFrame) -> None:
    fig = create_vehicle_theft_chart(series)

    start, end = fig.layout.xaxis.range
    bar_half_width = (1 - BAR_PADDING) / 2
    # Slots are one unit wide and centred on 0..n-1
    assert -bar_half_width - start == pytest.approx(BAR_PADDING)
    assert end - (len(series) - 1 + bar_half_width) == pytest.approx(BAR_PADDING)
    assert fig.layout.bargap == BAR_PADDING


def test_band_axis_range_for_single_bar() -> None:
    assert band_axis_range(1, padding=0.2) == pytest.approx([-0.6, 0.6])
