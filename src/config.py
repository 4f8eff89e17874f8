"""
Configuration management for the vehicle theft dashboard
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "datasets"))).expanduser()

REGIONS_GEOJSON_PATH = Path(
    os.getenv("REGIONS_GEOJSON_PATH", str(DATA_DIR / "spain-communities-merged.geojson"))
).expanduser()
CRIME_STATS_PATH = Path(
    os.getenv("CRIME_STATS_PATH", str(DATA_DIR / "las_cifras_del_crimen_en_españa.json"))
).expanduser()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

# Application Settings
APP_TITLE = "Sustracciones de vehículos en España"
APP_SUBTITLE = "Infracciones penales por Comunidad Autónoma y evolución trimestral"

# Region GeoJSON property names
REGION_NAME_FIELD = "parametro"
REGION_YEAR_FIELD = "agno"
REGION_PERIOD_FIELD = "periodo"
REGION_COUNT_FIELD = "valor"

# Statistics JSON layout
STATS_RECORD_FIELDS = {"Agno": "year", "Parametro": "category", "Valor": "value"}
VEHICLE_THEFT_CATEGORY = "Sustracciones de vehículos"
QUARTER_LABEL_PREFIX = "1er T - "

# Map Configuration
DEFAULT_MAP_CENTER = [40.4168, -3.7038]  # Madrid
DEFAULT_MAP_ZOOM = 5
MAP_WIDTH = 900
MAP_HEIGHT = 720
MAP_STROKE_COLOR = "black"
MAP_STROKE_WEIGHT = 1
MAP_FILL_OPACITY = 1.0
MAP_HOVER_OPACITY = 0.5
MAP_NO_DATA_COLOR = "#bdbdbd"
TOOLTIP_OFFSET = (70, -70)

# Observed min/max of vehicle thefts across communities
COLOR_DOMAIN = (891, 108560)
COLOR_RANGE = ("#f7efd9", "#7a0177")

# Legend Configuration
LEGEND_WIDTH = 725
LEGEND_HEIGHT = 80
LEGEND_CELLS = int(os.getenv("LEGEND_CELLS", "10"))
LEGEND_SHAPE_WIDTH = 60
LEGEND_SHAPE_PADDING = 10
LEGEND_CAPTION = "Número de infracciones"

# Entrance animation shared by the map and its legend
MAP_FADE_DURATION_MS = 2000
MAP_FADE_EASING = "cubic-bezier(0.6, -0.28, 0.4, 1.28)"

# Bar chart Configuration
BAR_MARGIN = {"t": 10, "r": 30, "b": 90, "l": 40}
BAR_WIDTH = 460
BAR_HEIGHT = 450
BAR_Y_MAX = 13000
BAR_PADDING = 0.2
BAR_COLOR = "#69b3a2"
BAR_TICK_ANGLE = -45
BAR_TRANSITION_MS = 800
BAR_STAGGER_MS = 1000
