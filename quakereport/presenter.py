"""Earthquake list presenter.

Holds the state of the earthquake list screen independently of any
UI toolkit: the formatted rows, the empty-state message and whether a
load is in progress. A front end renders that state and forwards row
taps to open_detail().
"""

import logging
import threading
import webbrowser
from typing import Callable

from quakereport.core.config import Config
from quakereport.core.earthquake import STATUS_ERROR
from quakereport.core.formatter import EarthquakeRow, format_rows
from quakereport.loader import EarthquakeLoader, LoadResult
from quakereport.shell.connectivity import is_connected
from quakereport.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


NO_INTERNET_MESSAGE = "No internet connection."
NO_EARTHQUAKES_MESSAGE = "No earthquakes found."
LOAD_ERROR_MESSAGE = "Problem loading earthquakes."


class EarthquakeListPresenter:
    """Drives one earthquake list screen."""

    def __init__(
        self,
        config: Config,
        loader_factory: Callable[..., EarthquakeLoader] | None = None,
        connectivity_check: Callable[[], bool] | None = None,
        open_url: Callable[[str], object] = webbrowser.open,
    ) -> None:
        """Initialize presenter.

        Args:
            config: Application configuration
            loader_factory: Builds the loader from (url, client, on_finished)
            connectivity_check: Returns True if the network is reachable
            open_url: Opens a detail URL (default: system web browser)
        """
        self.config = config
        self.open_url = open_url
        self._loader_factory = loader_factory or EarthquakeLoader
        self._connectivity_check = connectivity_check or (
            lambda: is_connected(
                config.connectivity_host,
                config.connectivity_port,
                config.connectivity_timeout_seconds,
            )
        )

        self._lock = threading.Lock()
        self._loader: EarthquakeLoader | None = None
        self.rows: list[EarthquakeRow] = []
        self.empty_message = ""
        self.loading = False
        self.last_result: LoadResult | None = None

    def start(self) -> bool:
        """Start loading earthquakes if the network is reachable.

        Returns:
            True if a load was started
        """
        if not self._connectivity_check():
            logger.warning("No network connectivity, not loading earthquakes")
            with self._lock:
                self.loading = False
                self.rows = []
                self.last_result = None
                self.empty_message = NO_INTERNET_MESSAGE
            return False

        if self._loader is None:
            client = USGSClient(
                connect_timeout=self.config.connect_timeout_seconds,
                read_timeout=self.config.read_timeout_seconds,
            )
            self._loader = self._loader_factory(
                self.config.request_url,
                client,
                self.on_load_finished,
            )

        if self._loader.is_running:
            logger.debug("Earthquakes already loading")
            return False

        with self._lock:
            self.loading = True

        return self._loader.start()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the current load, if any, to finish."""
        if self._loader is None:
            return True
        return self._loader.wait(timeout)

    def on_load_finished(self, result: LoadResult) -> None:
        """Replace the list with the result of a load."""
        try:
            rows = format_rows(result.records, self.config.tz, self.config.near_label)
        except (ValueError, OverflowError, OSError) as e:
            result = LoadResult(status=STATUS_ERROR, error=f"cannot display earthquakes: {e}")
            rows = []

        with self._lock:
            self.loading = False
            self.last_result = result
            self.rows = rows
            if result.status == STATUS_ERROR and not rows:
                self.empty_message = LOAD_ERROR_MESSAGE
            else:
                self.empty_message = NO_EARTHQUAKES_MESSAGE

        if result.status == STATUS_ERROR:
            logger.warning("Earthquake load failed: %s", result.error)

    def open_detail(self, position: int) -> str:
        """Open the USGS page of the earthquake at a list position.

        Raises:
            IndexError: If no row exists at the position
        """
        with self._lock:
            if not 0 <= position < len(self.rows):
                raise IndexError(f"No earthquake at position {position}")
            url = self.rows[position].detail_url

        logger.info("Opening earthquake details: %s", url)
        self.open_url(url)

        return url

    def reset(self) -> None:
        """Cancel any load and clear the list."""
        if self._loader is not None:
            self._loader.reset()

        with self._lock:
            self.rows = []
            self.loading = False
            self.last_result = None
            self.empty_message = ""
