"""Analytics module for crime statistics records"""

from .incidents import build_yearly_series, extract_metric_rows, load_incident_records

__all__ = ["build_yearly_series", "extract_metric_rows", "load_incident_records"]
