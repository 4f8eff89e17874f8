"""
Crime statistics loading and the yearly vehicle theft series
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from config import (
    CRIME_STATS_PATH,
    QUARTER_LABEL_PREFIX,
    STATS_RECORD_FIELDS,
    VEHICLE_THEFT_CATEGORY,
)

logger = logging.getLogger(__name__)

RECORD_COLUMNS = list(STATS_RECORD_FIELDS.values())
SERIES_COLUMNS = ["label", "value", "year"]


def extract_metric_rows(payload: Any) -> List[Dict[str, Any]]:
    """
    Walk the response envelope down to ``Respuesta.Datos.Metricas[0].Datos``.

    Raises:
        ValueError: if any level of the envelope is missing or has the wrong shape.
    """
    try:
        metrics = payload["Respuesta"]["Datos"]["Metricas"]
        rows = metrics[0]["Datos"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError(f"Unexpected statistics envelope: missing {exc}") from exc

    if not isinstance(rows, list):
        raise ValueError("Unexpected statistics envelope: 'Datos' must be a list")
    return [row for row in rows if isinstance(row, dict)]


def records_from_rows(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Rename the source keys and keep only year, category and value."""
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)

    df = pd.DataFrame(rows).rename(columns=STATS_RECORD_FIELDS)
    for col in RECORD_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA
    # Nullable integers keep years like 2020 intact when a sibling row has none
    df["year"] = pd.to_numeric(df["year"], errors="coerce").round().astype("Int64")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    return df[RECORD_COLUMNS].reset_index(drop=True)


def load_incident_records(
    path: Path | str | None = None,
) -> tuple[pd.DataFrame, List[str]]:
    """Load the statistics JSON into a DataFrame of year/category/value records."""
    warnings: List[str] = []
    source = Path(path) if path is not None else CRIME_STATS_PATH
    empty = pd.DataFrame(columns=RECORD_COLUMNS)

    if not source.exists():
        logger.warning("Statistics dataset not found: %s", source)
        warnings.append(f"No se encontró el archivo de estadísticas {source.name}.")
        return empty, warnings

    try:
        with source.open("r", encoding="utf-8") as fp:
            payload = json.load(fp)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to read statistics dataset %s: %s", source, exc)
        warnings.append(f"Error al leer {source.name}: {exc}")
        return empty, warnings

    try:
        rows = extract_metric_rows(payload)
    except ValueError as exc:
        logger.warning("Invalid statistics dataset %s: %s", source, exc)
        warnings.append(f"{source.name} no tiene el formato esperado: {exc}")
        return empty, warnings

    records = records_from_rows(rows)
    logger.debug("Loaded %d statistics record(s) from %s", len(records), source)
    return records, warnings


def build_yearly_series(
    records: pd.DataFrame,
    category: str = VEHICLE_THEFT_CATEGORY,
) -> pd.DataFrame:
    """
    Filter records to one category and label each one by quarter and year.

    Matching is exact string equality on the category; row order follows the
    dataset.
    """
    if records is None or records.empty or "category" not in records.columns:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    selected = records[records["category"] == category]
    if selected.empty:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    series = pd.DataFrame(
        {
            "label": QUARTER_LABEL_PREFIX + selected["year"].astype(str),
            "value": selected["value"],
            "year": selected["year"],
        }
    )
    return series.reset_index(drop=True)
