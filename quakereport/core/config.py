"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from urllib.parse import urlsplit
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from quakereport.core.formatter import NEAR_THE


# Ten most recent M5+ earthquakes from the USGS FDSN Event Web Service
USGS_REQUEST_URL = (
    "https://earthquake.usgs.gov/fdsnws/event/1/query"
    "?format=geojson&eventtype=earthquake&orderby=time&minmag=5&limit=10"
)


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        request_url: USGS query URL to load earthquakes from
        connect_timeout_seconds: HTTP connect timeout
        read_timeout_seconds: HTTP read timeout
        display_timezone: IANA timezone name for dates and times
        near_label: Offset label for locations without a distance prefix
        connectivity_host: Host probed before loading
        connectivity_port: Port probed before loading
        connectivity_timeout_seconds: Timeout for the connectivity probe
    """
    request_url: str = USGS_REQUEST_URL
    connect_timeout_seconds: float = 15
    read_timeout_seconds: float = 10
    display_timezone: str = "UTC"
    near_label: str = NEAR_THE
    connectivity_host: str = "earthquake.usgs.gov"
    connectivity_port: int = 443
    connectivity_timeout_seconds: float = 3

    @property
    def tz(self) -> tzinfo:
        """Resolve the display timezone, falling back to UTC."""
        try:
            return ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return timezone.utc


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_url(url: str, field_name: str) -> list[ValidationError]:
    """Validate that a URL is absolute http(s).

    Pure function.
    """
    parts = urlsplit(url or "")

    if parts.scheme not in ("http", "https") or not parts.netloc:
        return [ValidationError(
            field=field_name,
            message=f"Not an absolute http(s) URL: {url!r}",
        )]

    return []


def validate_positive(value: float, field_name: str) -> list[ValidationError]:
    """Validate that a numeric setting is positive.

    Pure function.
    """
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]

    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_url(config.request_url, "request_url"))

    for name in (
        "connect_timeout_seconds",
        "read_timeout_seconds",
        "connectivity_timeout_seconds",
    ):
        errors.extend(validate_positive(getattr(config, name), name))

    if not 0 < config.connectivity_port < 65536:
        errors.append(ValidationError(
            field="connectivity_port",
            message=f"Port {config.connectivity_port} out of range [1, 65535]",
        ))

    try:
        ZoneInfo(config.display_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        errors.append(ValidationError(
            field="display_timezone",
            message=f"Unknown timezone '{config.display_timezone}', using UTC",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
