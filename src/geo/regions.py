"""
Region boundary loading for the choropleth map
"""
import copy
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from shapely.geometry import shape
from shapely.ops import unary_union

from config import (
    REGIONS_GEOJSON_PATH,
    REGION_COUNT_FIELD,
    REGION_NAME_FIELD,
    REGION_PERIOD_FIELD,
    REGION_YEAR_FIELD,
)

logger = logging.getLogger(__name__)

MISSING_LABEL = "—"


def parse_incident_count(raw: Any) -> Optional[int]:
    """Permissive integer parse, rounded down; None for anything non-numeric."""
    if isinstance(raw, (bool, dict, list)):
        return None
    value = pd.to_numeric(pd.Series([raw], dtype="object"), errors="coerce").iloc[0]
    if pd.isna(value) or math.isinf(float(value)):
        return None
    return int(math.floor(float(value)))


def _normalize_feature(feature: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the feature with the dashboard's derived properties."""
    normalized = copy.deepcopy(feature)
    props = normalized.get("properties") or {}
    count = parse_incident_count(props.get(REGION_COUNT_FIELD))

    props["name"] = str(props.get(REGION_NAME_FIELD) or "").strip()
    props["year"] = props.get(REGION_YEAR_FIELD)
    props["period"] = props.get(REGION_PERIOD_FIELD)
    props["incident_count"] = count
    props["incident_count_label"] = f"{count:,}" if count is not None else MISSING_LABEL
    normalized["properties"] = props
    return normalized


def normalize_region_collection(data: Any) -> tuple[Dict[str, Any], List[str]]:
    """
    Validate a GeoJSON object and normalise every feature.

    Accepts a FeatureCollection or a single Feature; the latter is wrapped
    into a collection. Raises ValueError on anything else.
    """
    if not isinstance(data, dict) or "type" not in data:
        raise ValueError("Invalid GeoJSON: top-level object must be a dict with a 'type' key")

    geo_type = data["type"]
    if geo_type == "FeatureCollection":
        features = data.get("features")
        if not isinstance(features, list):
            raise ValueError("Invalid GeoJSON: 'features' must be a list")
    elif geo_type == "Feature":
        features = [data]
    else:
        raise ValueError(f"Unsupported GeoJSON type '{geo_type}'")

    warnings: List[str] = []
    normalized: List[Dict[str, Any]] = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        item = _normalize_feature(feature)
        props = item["properties"]
        if props["incident_count"] is None:
            raw = props.get(REGION_COUNT_FIELD)
            label = props["name"] or "región sin nombre"
            warnings.append(f"Valor de infracciones no numérico para {label}: {raw!r}")
            logger.warning("Non-numeric incident count for %s: %r", label, raw)
        normalized.append(item)

    return {"type": "FeatureCollection", "features": normalized}, warnings


def load_region_collection(
    path: Path | str | None = None,
) -> tuple[Optional[Dict[str, Any]], List[str]]:
    """
    Load the region boundary GeoJSON.

    Returns:
        Tuple of the normalised FeatureCollection (None when the file cannot
        be used) and the warnings encountered while loading.
    """
    source = Path(path) if path is not None else REGIONS_GEOJSON_PATH
    if not source.exists():
        logger.warning("Region dataset not found: %s", source)
        return None, [f"No se encontró el archivo de regiones {source.name}."]

    try:
        with source.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to read region dataset %s: %s", source, exc)
        return None, [f"Error al leer {source.name}: {exc}"]

    try:
        collection, warnings = normalize_region_collection(data)
    except ValueError as exc:
        logger.warning("Invalid region dataset %s: %s", source, exc)
        return None, [f"{source.name} no es un GeoJSON válido: {exc}"]

    logger.debug("Loaded %d region feature(s) from %s", len(collection["features"]), source)
    return collection, warnings


def compute_bounds(collection: Dict[str, Any]) -> Optional[List[List[float]]]:
    """Bounding box as [[south, west], [north, east]], or None without geometry."""
    geometries = []
    for feature in collection.get("features", []):
        geometry = feature.get("geometry")
        if not geometry:
            continue
        try:
            geometries.append(shape(geometry))
        except (ValueError, TypeError, AttributeError, KeyError) as exc:
            logger.warning("Skipping unreadable geometry: %s", exc)

    if not geometries:
        return None

    merged = unary_union(geometries)
    if merged.is_empty:
        return None
    west, south, east, north = merged.bounds
    return [[south, west], [north, east]]
