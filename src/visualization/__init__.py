"""Visualization module for the choropleth map and the bar chart"""

from .map_view import (
    build_gradient_legend_html,
    create_choropleth_map,
    create_color_scale,
    format_count,
)
from .charts import chart_to_html, create_vehicle_theft_chart

__all__ = [
    "build_gradient_legend_html",
    "chart_to_html",
    "create_choropleth_map",
    "create_color_scale",
    "create_vehicle_theft_chart",
    "format_count",
]
