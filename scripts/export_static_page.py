#!/usr/bin/env python3
"""
Export the choropleth map and the bar chart into one standalone HTML page.

The page needs no Streamlit server: open it in a browser to get the same
tooltips and entrance animations as the dashboard.
"""
from __future__ import annotations

import argparse
import html
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from config import (  # noqa: E402
    APP_SUBTITLE,
    APP_TITLE,
    CRIME_STATS_PATH,
    LOG_LEVEL,
    MAP_HEIGHT,
    MAP_WIDTH,
    PROJECT_ROOT,
    REGIONS_GEOJSON_PATH,
)
from analytics.incidents import build_yearly_series, load_incident_records  # noqa: E402
from geo.regions import load_region_collection  # noqa: E402
from visualization.charts import chart_to_html, create_vehicle_theft_chart  # noqa: E402
from visualization.map_view import (  # noqa: E402
    build_gradient_legend_html,
    create_choropleth_map,
    create_color_scale,
)

logger = logging.getLogger("export_static_page")

DEFAULT_OUTPUT = PROJECT_ROOT / "build" / "index.html"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="es">
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
        body {{ font-family: 'Arial', sans-serif; margin: 24px; color: #222222; }}
        .sections {{ display: flex; flex-wrap: wrap; gap: 32px; }}
        .warning {{ color: #8a6d3b; background: #fcf8e3; padding: 6px 10px; border-radius: 4px; }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <p>{subtitle}</p>
    <div class="sections">
        <section>{map_section}</section>
        <section>{chart_section}</section>
    </div>
</body>
</html>
"""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Write the vehicle theft map and bar chart into a standalone HTML page."
    )
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=DEFAULT_OUTPUT,
        help="Destination HTML file (default: %(default)s).",
    )
    parser.add_argument(
        "--regions",
        type=Path,
        default=REGIONS_GEOJSON_PATH,
        help="Region boundary GeoJSON (default: %(default)s).",
    )
    parser.add_argument(
        "--stats",
        type=Path,
        default=CRIME_STATS_PATH,
        help="Crime statistics JSON (default: %(default)s).",
    )
    return parser.parse_args()


def _warnings_html(messages: list[str]) -> str:
    return "".join(
        f'<p class="warning">{html.escape(message)}</p>' for message in dict.fromkeys(messages)
    )


def render_map_section(regions_path: Path) -> str:
    collection, warnings = load_region_collection(regions_path)
    if collection is None:
        return _warnings_html(warnings)

    choropleth, map_warnings = create_choropleth_map(collection)
    warnings.extend(map_warnings)
    document = choropleth.get_root().render()
    frame = (
        f'<iframe srcdoc="{html.escape(document, quote=True)}" '
        f'width="{MAP_WIDTH}" height="{MAP_HEIGHT}" style="border:none;"></iframe>'
    )
    legend = build_gradient_legend_html(create_color_scale())
    return _warnings_html(warnings) + frame + legend


def render_chart_section(stats_path: Path) -> str:
    records, warnings = load_incident_records(stats_path)
    if records.empty:
        return _warnings_html(warnings)

    series = build_yearly_series(records)
    fig = create_vehicle_theft_chart(series)
    return _warnings_html(warnings) + chart_to_html(fig)


def build_page(regions_path: Path, stats_path: Path) -> str:
    return PAGE_TEMPLATE.format(
        title=html.escape(APP_TITLE),
        subtitle=html.escape(APP_SUBTITLE),
        map_section=render_map_section(regions_path),
        chart_section=render_chart_section(stats_path),
    )


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    page = build_page(args.regions, args.stats)

    output_path: Path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(page, encoding="utf-8")

    print(f"Wrote dashboard page to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
