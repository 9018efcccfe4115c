"""Functional Core - Pure functions with no side effects.

This module contains the earthquake logic as pure functions:
- GeoJSON parsing into earthquake records
- Display formatting for the earthquake list
- Configuration models and validation

All functions here are deterministic and have no I/O.
"""

from quakereport.core.earthquake import EarthquakeRecord, ParseResult, parse_earthquakes
from quakereport.core.formatter import EarthquakeRow, format_row, format_rows
from quakereport.core.config import Config, validate_config

__all__ = [
    # Earthquake
    "EarthquakeRecord",
    "ParseResult",
    "parse_earthquakes",
    # Formatter
    "EarthquakeRow",
    "format_row",
    "format_rows",
    # Config
    "Config",
    "validate_config",
]
