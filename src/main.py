"""
Main Streamlit application for the vehicle theft dashboard
Sustracciones de vehículos en España
"""
import logging
import sys
from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components
from streamlit_folium import st_folium

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from config import (
    APP_SUBTITLE,
    APP_TITLE,
    BAR_HEIGHT,
    CRIME_STATS_PATH,
    LEGEND_HEIGHT,
    LOG_LEVEL,
    MAP_HEIGHT,
    MAP_WIDTH,
    REGIONS_GEOJSON_PATH,
)
from analytics.incidents import build_yearly_series, load_incident_records
from geo.regions import load_region_collection
from visualization.charts import chart_to_html, create_vehicle_theft_chart
from visualization.map_view import (
    build_gradient_legend_html,
    create_choropleth_map,
    create_color_scale,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title=APP_TITLE,
    page_icon="🚗",
    layout="wide",
)


@st.cache_data(show_spinner=False)
def _cached_regions(path: str):
    return load_region_collection(path)


@st.cache_data(show_spinner=False)
def _cached_records(path: str):
    return load_incident_records(path)


def _show_warnings(messages) -> None:
    for message in dict.fromkeys(messages):
        st.warning(message)


def section_map() -> None:
    """Choropleth of vehicle thefts per autonomous community."""
    st.subheader("🗺️ Infracciones por Comunidad Autónoma")
    try:
        with st.spinner("Cargando regiones..."):
            collection, load_warnings = _cached_regions(str(REGIONS_GEOJSON_PATH))
        _show_warnings(load_warnings)
        if collection is None:
            return

        choropleth, map_warnings = create_choropleth_map(collection)
        _show_warnings(map_warnings)
        st_folium(
            choropleth,
            width=MAP_WIDTH,
            height=MAP_HEIGHT,
            returned_objects=[],
        )
        components.html(
            build_gradient_legend_html(create_color_scale()),
            height=LEGEND_HEIGHT + 20,
        )
    except Exception as e:
        logger.exception("Map section failed")
        st.error(f"Error al generar el mapa: {e}")


def section_bar_chart() -> None:
    """Animated bar chart of first-quarter vehicle thefts by year."""
    st.subheader("📊 Sustracciones de vehículos, primer trimestre")
    try:
        with st.spinner("Cargando estadísticas..."):
            records, load_warnings = _cached_records(str(CRIME_STATS_PATH))
        _show_warnings(load_warnings)
        if records.empty:
            return

        series = build_yearly_series(records)
        if series.empty:
            st.info("No hay registros de sustracciones de vehículos en el conjunto de datos.")
            return

        fig = create_vehicle_theft_chart(series)
        components.html(chart_to_html(fig), height=BAR_HEIGHT + 40)
    except Exception as e:
        logger.exception("Bar chart section failed")
        st.error(f"Error al generar el gráfico: {e}")


def main():
    """Main application"""

    # Header
    st.title(f"🚗 {APP_TITLE}")
    st.caption(APP_SUBTITLE)

    col_map, col_chart = st.columns([3, 2])
    with col_map:
        section_map()
    with col_chart:
        section_bar_chart()

    st.caption("Fuente: Balance de Criminalidad, Ministerio del Interior")


if __name__ == "__main__":
    main()
