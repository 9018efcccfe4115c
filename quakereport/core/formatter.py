"""Display formatting - Pure functions.

This module projects earthquake records into the strings shown in
each row of the earthquake list.
All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any

from quakereport.core.earthquake import EarthquakeRecord


# Label used when a location has no distance offset
NEAR_THE = "Near the"

# Magnitude circle colors, keyed by bucket
MAGNITUDE_COLORS = {
    1: "#4A7BA7",
    2: "#04B4B3",
    3: "#10CAC9",
    4: "#F5A623",
    5: "#FF7D50",
    6: "#FC6644",
    7: "#E75F40",
    8: "#E13A20",
    9: "#D93218",
    10: "#C03823",
}


@dataclass(frozen=True)
class EarthquakeRow:
    """Display strings for one row of the earthquake list.

    Attributes:
        primary_location: Place name, e.g. "Cairo, Egypt"
        offset: Distance prefix, e.g. "5km N of", or the near label
        date: Event date, e.g. "Mar 3, 1984"
        time: Event time, e.g. "4:30 PM"
        magnitude: Magnitude with one decimal place
        magnitude_color: Hex color of the magnitude circle
        detail_url: USGS event page opened when the row is tapped
    """
    primary_location: str
    offset: str
    date: str
    time: str
    magnitude: str
    magnitude_color: str
    detail_url: str

    def to_dict(self) -> dict[str, Any]:
        """Return the row as a JSON-serializable dict."""
        return {
            "primary_location": self.primary_location,
            "offset": self.offset,
            "date": self.date,
            "time": self.time,
            "magnitude": self.magnitude,
            "magnitude_color": self.magnitude_color,
            "detail_url": self.detail_url,
        }


def split_location(location: str, near_label: str = NEAR_THE) -> tuple[str, str]:
    """Split a location into (offset, primary location).

    "5km N of Cairo, Egypt" -> ("5km N of", "Cairo, Egypt")
    "Pacific-Antarctic Ridge" -> (near_label, "Pacific-Antarctic Ridge")

    Pure function.
    """
    if location and location[0] in "0123456789":
        index_of_f = location.find("f")
        if index_of_f != -1:
            return location[:index_of_f + 1], location[index_of_f + 2:]

    return near_label, location


def _to_datetime(timestamp_millis: int, tz: tzinfo | None) -> datetime:
    return datetime.fromtimestamp(timestamp_millis / 1000, tz=tz or timezone.utc)


def format_date(timestamp_millis: int, tz: tzinfo | None = None) -> str:
    """Format an epoch-millisecond timestamp as e.g. "Mar 3, 1984".

    Pure function.
    """
    moment = _to_datetime(timestamp_millis, tz)
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}"


def format_time(timestamp_millis: int, tz: tzinfo | None = None) -> str:
    """Format an epoch-millisecond timestamp as e.g. "4:30 PM".

    Pure function.
    """
    moment = _to_datetime(timestamp_millis, tz)
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.strftime('%M')} {'AM' if moment.hour < 12 else 'PM'}"


def format_magnitude(magnitude: float) -> str:
    """Format a magnitude with one decimal place, e.g. "6.7"."""
    return f"{magnitude:.1f}"


def get_magnitude_bucket(magnitude: float) -> int:
    """Map a magnitude to its color bucket (1-10).

    The magnitude is truncated, not rounded: 9.95 is bucket 9.
    Magnitudes below 2 (including negative ones) share bucket 1,
    anything of 10 or more is bucket 10.

    Pure function.
    """
    truncated = int(magnitude)

    if truncated <= 1:
        return 1
    elif truncated >= 10:
        return 10
    else:
        return truncated


def get_magnitude_color(magnitude: float) -> str:
    """Get the hex color for a magnitude's circle.

    Pure function.
    """
    return MAGNITUDE_COLORS[get_magnitude_bucket(magnitude)]


def format_row(
    record: EarthquakeRecord,
    tz: tzinfo | None = None,
    near_label: str = NEAR_THE,
) -> EarthquakeRow:
    """Format an earthquake record as a list row.

    Pure function.

    Args:
        record: Earthquake to format
        tz: Timezone for date and time (UTC if None)
        near_label: Offset label for locations without a distance prefix

    Returns:
        EarthquakeRow with display strings
    """
    offset, primary = split_location(record.location, near_label)

    return EarthquakeRow(
        primary_location=primary,
        offset=offset,
        date=format_date(record.timestamp_millis, tz),
        time=format_time(record.timestamp_millis, tz),
        magnitude=format_magnitude(record.magnitude),
        magnitude_color=get_magnitude_color(record.magnitude),
        detail_url=record.detail_url,
    )


def format_rows(
    records: list[EarthquakeRecord] | tuple[EarthquakeRecord, ...],
    tz: tzinfo | None = None,
    near_label: str = NEAR_THE,
) -> list[EarthquakeRow]:
    """Format records as list rows, preserving order."""
    return [format_row(r, tz, near_label) for r in records]


def format_list_text(rows: list[EarthquakeRow]) -> str:
    """Render rows as plain text, one earthquake per line.

    Pure function.

    Args:
        rows: Rows to render

    Returns:
        Multi-line string, numbered from 1
    """
    lines = []
    for position, row in enumerate(rows, start=1):
        lines.append(
            f"{position:>2}. M{row.magnitude}  {row.offset} {row.primary_location}"
            f"  ({row.date} {row.time})"
        )
    return "\n".join(lines)
