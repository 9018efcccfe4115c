"""Earthquake records and GeoJSON parsing - Pure functions.

This module turns the USGS GeoJSON response body into typed
EarthquakeRecord objects. Apart from a diagnostic log line on
malformed input, all functions are pure.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


logger = logging.getLogger(__name__)


# Parse/load statuses
STATUS_LOADED = "loaded"
STATUS_NO_DATA = "no_data"
STATUS_ERROR = "error"


class FeatureError(ValueError):
    """Raised when a GeoJSON feature is missing a field or has the wrong type."""


@dataclass(frozen=True)
class EarthquakeRecord:
    """Immutable earthquake record.

    Attributes:
        magnitude: Earthquake magnitude
        location: Location description, e.g. "5km N of Cairo, Egypt"
        timestamp_millis: Event time in milliseconds since the epoch
        detail_url: USGS event page URL
    """
    magnitude: float
    location: str
    timestamp_millis: int
    detail_url: str

    @property
    def time(self) -> datetime:
        """Return the event time as a UTC datetime."""
        return datetime.fromtimestamp(self.timestamp_millis / 1000, tz=timezone.utc)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one response body.

    Attributes:
        status: 'loaded', 'no_data' or 'error'
        records: Records parsed, in document order (partial on error)
        error: Description of the failure, if any
    """
    status: str
    records: tuple[EarthquakeRecord, ...] = field(default_factory=tuple)
    error: str | None = None


def _require(properties: dict[str, Any], key: str, kinds: tuple[type, ...]) -> Any:
    if key not in properties:
        raise FeatureError(f"missing '{key}'")

    value = properties[key]
    # bool is an int subclass but never a valid mag/time
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise FeatureError(f"'{key}' has unexpected type {type(value).__name__}")

    return value


def parse_feature(feature: Any) -> EarthquakeRecord:
    """Parse a single GeoJSON feature into an EarthquakeRecord.

    Args:
        feature: GeoJSON feature dict from the USGS API

    Returns:
        EarthquakeRecord built from the feature's properties

    Raises:
        FeatureError: If any required property is missing, mistyped
            or out of range
    """
    if not isinstance(feature, dict):
        raise FeatureError("feature is not an object")

    properties = feature.get("properties")
    if not isinstance(properties, dict):
        raise FeatureError("missing 'properties'")

    try:
        magnitude = float(_require(properties, "mag", (int, float)))
    except OverflowError:
        raise FeatureError("'mag' is out of range") from None
    if not math.isfinite(magnitude):
        raise FeatureError("'mag' is not a finite number")

    timestamp_millis = _require(properties, "time", (int,))
    try:
        datetime.fromtimestamp(timestamp_millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise FeatureError("'time' is out of range") from None

    return EarthquakeRecord(
        magnitude=magnitude,
        location=_require(properties, "place", (str,)),
        timestamp_millis=timestamp_millis,
        detail_url=_require(properties, "url", (str,)),
    )


def parse_earthquakes(json_text: str | None) -> ParseResult:
    """Parse a USGS GeoJSON response body.

    An empty body yields status 'no_data'. A malformed document or
    feature yields status 'error'; records parsed before the bad feature
    are kept, in order.

    Args:
        json_text: Raw response body

    Returns:
        ParseResult with the records and status
    """
    if not json_text or not json_text.strip():
        return ParseResult(status=STATUS_NO_DATA)

    try:
        root = json.loads(json_text)
    except (ValueError, RecursionError) as e:
        logger.error("Problem parsing the earthquake JSON results: %s", e)
        return ParseResult(status=STATUS_ERROR, error=f"invalid JSON: {e}")

    if not isinstance(root, dict) or not isinstance(root.get("features"), list):
        logger.error("Problem parsing the earthquake JSON results: no 'features' array")
        return ParseResult(status=STATUS_ERROR, error="missing 'features' array")

    records: list[EarthquakeRecord] = []

    for index, feature in enumerate(root["features"]):
        try:
            records.append(parse_feature(feature))
        except FeatureError as e:
            logger.error(
                "Problem parsing earthquake feature %d: %s (kept %d records)",
                index,
                e,
                len(records),
            )
            return ParseResult(
                status=STATUS_ERROR,
                records=tuple(records),
                error=f"feature {index}: {e}",
            )

    return ParseResult(status=STATUS_LOADED, records=tuple(records))
