"""Region boundary loading for the choropleth map."""

from .regions import compute_bounds, load_region_collection, parse_incident_count  # noqa: F401

__all__ = ["compute_bounds", "load_region_collection", "parse_incident_count"]
