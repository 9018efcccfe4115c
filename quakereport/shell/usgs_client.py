"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; parsing is in the core module.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests
from requests.models import PreparedRequest


logger = logging.getLogger(__name__)


# USGS FDSN Event Web Service base URL
USGS_API_BASE = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# Default timeouts for API requests (seconds)
DEFAULT_CONNECT_TIMEOUT = 15
DEFAULT_READ_TIMEOUT = 10


@dataclass
class USGSQueryParams:
    """Parameters for USGS API query.

    Attributes:
        min_magnitude: Minimum magnitude to fetch
        limit: Maximum number of results
        event_type: USGS event type filter
        order_by: Result ordering
    """
    min_magnitude: float = 5
    limit: int = 10
    event_type: str = "earthquake"
    order_by: str = "time"


@dataclass
class FetchResult:
    """Result of fetching a USGS response body.

    Attributes:
        success: Whether a 200 response was read
        status_code: HTTP status code (0 if no response)
        body: Response text (empty on failure)
        error: Error message if failed
    """
    success: bool
    status_code: int
    body: str = ""
    error: str | None = None


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_query_url(
    params: USGSQueryParams | None = None,
    base_url: str = USGS_API_BASE,
) -> str:
    """Build a USGS query URL.

    The defaults produce the ten most recent M5+ earthquakes.

    Args:
        params: Query parameters
        base_url: USGS API base URL

    Returns:
        Full query URL
    """
    params = params or USGSQueryParams()

    query = {
        "format": "geojson",
        "eventtype": params.event_type,
        "orderby": params.order_by,
        "minmag": _format_number(params.min_magnitude),
        "limit": str(params.limit),
    }

    return f"{base_url}?{urlencode(query)}"


def create_url(url: str | None) -> str | None:
    """Validate and normalize a URL string.

    Args:
        url: URL to validate

    Returns:
        The prepared URL, or None if it cannot be used
    """
    prepared = PreparedRequest()
    try:
        prepared.prepare_url(url, None)
    except (requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL) as e:
        logger.error("Error creating URL %r: %s", url, e)
        return None

    if not prepared.url.startswith(("http://", "https://")):
        logger.error("Error creating URL %r: unsupported scheme", url)
        return None

    return prepared.url


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ) -> None:
        """Initialize USGS client.

        Args:
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    def fetch(self, url: str) -> FetchResult:
        """Fetch a USGS response body.

        This method performs HTTP I/O. It never raises; every failure
        is logged and reported through the returned FetchResult.

        Args:
            url: Query URL

        Returns:
            FetchResult with the body on HTTP 200
        """
        logger.info("Fetching earthquakes from USGS: %s", url)

        try:
            with requests.get(
                url,
                timeout=(self.connect_timeout, self.read_timeout),
            ) as response:
                if response.status_code != 200:
                    logger.error("Error response code: %d", response.status_code)
                    return FetchResult(
                        success=False,
                        status_code=response.status_code,
                        error=f"HTTP {response.status_code}",
                    )

                body = response.text

        except requests.Timeout:
            logger.error("USGS request timed out")
            return FetchResult(
                success=False,
                status_code=0,
                error="Request timed out",
            )
        except requests.RequestException as e:
            logger.error("Problem retrieving the earthquake JSON results: %s", str(e))
            return FetchResult(
                success=False,
                status_code=0,
                error=str(e),
            )

        logger.info("Fetched %d bytes from USGS", len(body))

        return FetchResult(
            success=True,
            status_code=200,
            body=body,
        )
