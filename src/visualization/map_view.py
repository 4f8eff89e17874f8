"""
Choropleth map of vehicle thefts per autonomous community
"""
import html
import logging
from typing import Any, Dict, List, NamedTuple, Optional

import folium
import numpy as np
from branca.colormap import LinearColormap
from branca.element import MacroElement, Template

from config import (
    COLOR_DOMAIN,
    COLOR_RANGE,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_ZOOM,
    LEGEND_CAPTION,
    LEGEND_CELLS,
    LEGEND_HEIGHT,
    LEGEND_SHAPE_PADDING,
    LEGEND_SHAPE_WIDTH,
    LEGEND_WIDTH,
    MAP_FADE_DURATION_MS,
    MAP_FADE_EASING,
    MAP_FILL_OPACITY,
    MAP_HEIGHT,
    MAP_HOVER_OPACITY,
    MAP_NO_DATA_COLOR,
    MAP_STROKE_COLOR,
    MAP_STROKE_WEIGHT,
    MAP_WIDTH,
    TOOLTIP_OFFSET,
)
from geo.regions import MISSING_LABEL, compute_bounds

logger = logging.getLogger(__name__)

FADE_IN_CLASS = "vt-fade-in"
LEGEND_CLASS = "vt-legend"

TOOLTIP_STYLE = (
    "background-color: #ffffff; border: 1px solid #444444; border-radius: 4px;"
    " padding: 6px 10px; font-size: 13px; box-shadow: 0 2px 6px rgba(0,0,0,0.2);"
)


class LegendCell(NamedTuple):
    value: float
    color: str
    label: str


def create_color_scale() -> LinearColormap:
    """Two-stop gradient over the fixed, historically observed count range."""
    vmin, vmax = COLOR_DOMAIN
    return LinearColormap(
        colors=list(COLOR_RANGE),
        vmin=vmin,
        vmax=vmax,
        caption=LEGEND_CAPTION,
    )


def format_count(value: float) -> str:
    """Thousands-separated integer, e.g. 108560 -> '108,560'."""
    return f"{int(round(float(value))):,}"


def region_fill_color(color_scale: LinearColormap, incident_count: Optional[int]) -> str:
    """Fill color for a region; counts outside the domain clamp to the endpoints."""
    if incident_count is None:
        return MAP_NO_DATA_COLOR
    return color_scale(incident_count)


def build_legend_cells(
    color_scale: LinearColormap,
    cells: int = LEGEND_CELLS,
) -> List[LegendCell]:
    """Evenly spaced legend cells from the low to the high end of the scale."""
    if cells < 2:
        raise ValueError("A legend needs at least two cells")
    values = np.linspace(color_scale.vmin, color_scale.vmax, cells)
    return [
        LegendCell(float(value), color_scale(float(value)), format_count(value))
        for value in values
    ]


def build_tooltip_html(name: str, count_label: str) -> str:
    """Tooltip body shown while the pointer moves over a region."""
    return f"""
        <div style="min-width:180px;">
            <div style="font-weight:600;margin-bottom:4px;">
                Comunidad Autónoma: {html.escape(name or MISSING_LABEL)}
            </div>
            <div><b>Número de infracciones:</b> {html.escape(count_label)}</div>
        </div>
    """


def _fade_in_css(selector: str) -> str:
    """Keyframes and rule for the one-shot entrance fade of ``selector``."""
    return f"""
        @keyframes vt-fade {{
            from {{ opacity: 0; }}
            to {{ opacity: 1; }}
        }}
        {selector} {{
            opacity: 0;
            animation: vt-fade {MAP_FADE_DURATION_MS}ms {MAP_FADE_EASING} forwards;
        }}
    """


def build_gradient_legend_html(
    color_scale: LinearColormap,
    cells: int = LEGEND_CELLS,
) -> str:
    """
    Horizontal discretized legend sharing the map's color scale.

    Rendered as its own surface below the map so it never covers a region.
    It carries the same entrance fade as the map.
    """
    cell_rows = []
    for cell in build_legend_cells(color_scale, cells):
        cell_rows.append(
            f"""
            <div style="display:flex;flex-direction:column;align-items:center;
                        width:{LEGEND_SHAPE_WIDTH}px;">
                <div style="width:{LEGEND_SHAPE_WIDTH}px;height:15px;background:{cell.color};"></div>
                <span style="font-size:0.8em;color:#222222;margin-top:4px;">{cell.label}</span>
            </div>
            """
        )

    return f"""
        <style>{_fade_in_css("." + FADE_IN_CLASS)}</style>
        <div class="{LEGEND_CLASS} {FADE_IN_CLASS}" style="
            width: {LEGEND_WIDTH}px;
            min-height: {LEGEND_HEIGHT}px;
            padding: 10px 20px;
            box-sizing: border-box;
            font-family: 'Arial', sans-serif;
        ">
            <div style="font-weight: 600; margin-bottom: 8px; font-size: 13px;">
                {html.escape(LEGEND_CAPTION)}
            </div>
            <div style="display:flex;gap:{LEGEND_SHAPE_PADDING}px;">
                {''.join(cell_rows)}
            </div>
        </div>
    """


def build_fade_in() -> MacroElement:
    """One-shot opacity transition for the map surface."""
    template = Template(
        f"""
        {{% macro html(this, kwargs) %}}
        <style>
            {_fade_in_css(".leaflet-container")}
            .leaflet-container {{
                background: #ffffff;
            }}
        </style>
        {{% endmacro %}}
        """
    )
    macro = MacroElement()
    macro._template = template
    return macro


def _create_base_map() -> folium.Map:
    """Create a tile-less Folium map sized for the choropleth."""
    return folium.Map(
        location=DEFAULT_MAP_CENTER,
        zoom_start=DEFAULT_MAP_ZOOM,
        tiles=None,
        width=MAP_WIDTH,
        height=MAP_HEIGHT,
        control_scale=False,
    )


def _region_style(fill_color: str):
    """Return a function compatible with Folium GeoJson style_function."""

    def fn(_: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "color": MAP_STROKE_COLOR,
            "weight": MAP_STROKE_WEIGHT,
            "opacity": 1,
            "fillColor": fill_color,
            "fillOpacity": MAP_FILL_OPACITY,
        }

    return fn


def _region_highlight(_: Dict[str, Any]) -> Dict[str, Any]:
    # Leaflet restores the style_function result on mouseout
    return {"opacity": MAP_HOVER_OPACITY, "fillOpacity": MAP_HOVER_OPACITY}


def create_choropleth_map(
    region_collection: Dict[str, Any],
) -> tuple[folium.Map, List[str]]:
    """
    Draw one shape per region, filled by its incident count.

    Args:
        region_collection: FeatureCollection returned by
            :func:`geo.regions.load_region_collection`.

    Returns:
        Tuple[folium.Map, List[str]]: map object and warnings encountered while drawing.
    """
    warnings: List[str] = []
    m = _create_base_map()
    color_scale = create_color_scale()

    features = region_collection.get("features", []) if region_collection else []
    bounds = compute_bounds(region_collection) if features else None
    if bounds:
        m.fit_bounds(bounds)
    else:
        warnings.append("No hay geometrías de regiones para mostrar.")
        return m, warnings

    regions = folium.FeatureGroup(name="Infracciones por Comunidad Autónoma", show=True)
    for index, feature in enumerate(features):
        if not feature.get("geometry"):
            label = (feature.get("properties") or {}).get("name") or f"#{index}"
            warnings.append(f"La región {label} no tiene geometría y se omitió.")
            continue

        props = feature.get("properties") or {}
        fill_color = region_fill_color(color_scale, props.get("incident_count"))
        shape = folium.GeoJson(
            dict(feature, id=str(feature.get("id", index))),
            style_function=_region_style(fill_color),
            highlight_function=_region_highlight,
            name=props.get("name") or f"region-{index}",
        )
        shape.add_child(
            folium.Tooltip(
                build_tooltip_html(props.get("name", ""), props.get("incident_count_label", MISSING_LABEL)),
                style=TOOLTIP_STYLE,
                sticky=True,
                offset=TOOLTIP_OFFSET,
            )
        )
        shape.add_to(regions)

    regions.add_to(m)
    m.get_root().add_child(build_fade_in())
    logger.debug("Drew %d region shape(s)", len(regions._children))
    return m, warnings
