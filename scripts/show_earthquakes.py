#!/usr/bin/env python3
"""Show the most recent earthquakes in the terminal.

Loads the earthquake list the same way the app does and prints one
row per earthquake. Optionally opens a row's USGS page in the browser.

Usage:
    # Ten most recent M5+ earthquakes
    python scripts/show_earthquakes.py

    # Rows as JSON
    python scripts/show_earthquakes.py --json

    # Open the USGS page of the first earthquake
    python scripts/show_earthquakes.py --open 1

    # Custom query URL
    python scripts/show_earthquakes.py --url "https://earthquake.usgs.gov/fdsnws/event/1/query?format=geojson&minmag=6&limit=5"

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: WARNING)
"""

import argparse
import json
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quakereport.core.formatter import format_list_text
from quakereport.presenter import EarthquakeListPresenter
from quakereport.shell.config_loader import ConfigError, load_config

logging.basicConfig(
    level=getattr(logging, os.environ.get("LOG_LEVEL", "WARNING").upper(), logging.WARNING),
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Show recent earthquakes from USGS")
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--url", help="USGS query URL (overrides config)")
    parser.add_argument("--json", action="store_true", help="Print rows as JSON")
    parser.add_argument(
        "--open",
        type=int,
        metavar="N",
        help="Open the USGS page of earthquake N (1-based) in the browser",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if args.url:
        config.request_url = args.url

    presenter = EarthquakeListPresenter(config)

    if presenter.start():
        presenter.wait()

    if args.json:
        print(json.dumps([row.to_dict() for row in presenter.rows], indent=2))
    elif presenter.rows:
        print(format_list_text(presenter.rows))
    else:
        print(presenter.empty_message)

    if args.open is not None:
        try:
            url = presenter.open_detail(args.open - 1)
        except IndexError:
            logger.error("No earthquake number %d in the list", args.open)
            return 1
        print(f"Opened {url}")

    return 0 if presenter.rows else 1


if __name__ == "__main__":
    sys.exit(main())
