"""Cloud Function Entry Point.

This module provides the HTTP entry point for Google Cloud Functions
and a local terminal view of the earthquake list. Both are thin
wrappers that load configuration and invoke the loader.
"""

import logging
import os
from typing import Any

import functions_framework
from flask import Request

from quakereport.core.earthquake import STATUS_ERROR
from quakereport.core.formatter import format_list_text, format_rows
from quakereport.loader import load_earthquakes
from quakereport.presenter import EarthquakeListPresenter
from quakereport.shell.config_loader import load_config, load_config_from_env
from quakereport.shell.usgs_client import USGSClient


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config():
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("USGS_REQUEST_URL"):
        return load_config_from_env()
    else:
        return load_config()


@functions_framework.http
def earthquake_report(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Loads the most recent earthquakes and returns them as list rows.

    Args:
        request: Flask request object (not used, but required by framework)

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    logger.info("Loading earthquake report")

    try:
        config = _get_config()

        client = USGSClient(
            connect_timeout=config.connect_timeout_seconds,
            read_timeout=config.read_timeout_seconds,
        )
        result = load_earthquakes(config.request_url, client)
        rows = format_rows(result.records, config.tz, config.near_label)

        response: dict[str, Any] = {
            "status": result.status,
            "count": len(rows),
            "earthquakes": [row.to_dict() for row in rows],
        }

        if result.error:
            response["error"] = result.error

        logger.info("Completed: %s", result.summary)

        status_code = 502 if result.status == STATUS_ERROR else 200
        return response, status_code

    except Exception as e:
        logger.exception("Unexpected error in earthquake report")
        return {
            "status": "error",
            "message": str(e),
        }, 500


def run_terminal(config=None, timeout: float | None = None) -> str:
    """Load earthquakes and render the list as text.

    Args:
        config: Configuration (loaded from file/environment if None)
        timeout: Seconds to wait for the load

    Returns:
        The rendered list, or the empty-state message
    """
    presenter = EarthquakeListPresenter(config or _get_config())

    if presenter.start():
        presenter.wait(timeout)

    if presenter.rows:
        return format_list_text(presenter.rows)
    return presenter.empty_message


# For local testing
if __name__ == "__main__":
    print(run_terminal())
