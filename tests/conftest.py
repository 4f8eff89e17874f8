"""Pytest fixtures writing small region and statistics datasets."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _square(x: float, y: float, size: float = 1.0) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [
            [[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]
        ],
    }


@pytest.fixture
def region_collection_data() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": _square(-6.0, 37.0),
                "properties": {"parametro": "Andalucía", "agno": 2021, "periodo": "T1", "valor": "108560"},
            },
            {
                "type": "Feature",
                "geometry": _square(-3.0, 42.0),
                "properties": {"parametro": "La Rioja", "agno": 2021, "periodo": "T1", "valor": 891},
            },
            {
                "type": "Feature",
                "geometry": _square(-1.0, 40.0),
                "properties": {"parametro": "Aragón", "agno": 2021, "periodo": "T1", "valor": "12.345,6"},
            },
        ],
    }


@pytest.fixture
def region_geojson_path(tmp_path: Path, region_collection_data: dict) -> Path:
    path = tmp_path / "regions.geojson"
    path.write_text(json.dumps(region_collection_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def crime_stats_payload() -> dict:
    rows = [
        {"Agno": 2019, "Parametro": "Sustracciones de vehículos", "Valor": 9850},
        {"Agno": 2019, "Parametro": "Robos con violencia", "Valor": 15000},
        {"Agno": 2020, "Parametro": "Sustracciones de vehículos", "Valor": 5000},
        {"Agno": 2021, "Parametro": "Sustracciones de vehiculos", "Valor": 7000},
        {"Agno": 2021, "Parametro": "Sustracciones de vehículos", "Valor": 7320},
    ]
    return {"Respuesta": {"Datos": {"Metricas": [{"Datos": rows}]}}}


@pytest.fixture
def crime_stats_path(tmp_path: Path, crime_stats_payload: dict) -> Path:
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(crime_stats_payload, ensure_ascii=False), encoding="utf-8")
    return path
