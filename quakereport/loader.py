"""Loader - Wires Functional Core and Imperative Shell.

This module runs the fetch -> parse pipeline and wraps it in an
explicit background task with start/cancel/finished signaling, so
any front end can drive a single earthquake load.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from quakereport.core.earthquake import (
    STATUS_ERROR,
    STATUS_NO_DATA,
    EarthquakeRecord,
    parse_earthquakes,
)
from quakereport.shell.usgs_client import USGSClient, create_url


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Result of one earthquake load.

    Attributes:
        status: 'loaded', 'no_data' or 'error'
        records: Earthquakes in response order (partial on parse errors)
        error: Reason for an 'error' status
    """
    status: str
    records: tuple[EarthquakeRecord, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True unless the load failed."""
        return self.status != STATUS_ERROR

    @property
    def is_empty(self) -> bool:
        """Returns True if there is nothing to show."""
        return len(self.records) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the load."""
        if self.status == STATUS_ERROR:
            return f"Load failed ({self.error}), {len(self.records)} earthquakes kept"
        if self.status == STATUS_NO_DATA:
            return "No data returned"
        return f"Loaded {len(self.records)} earthquakes"


def load_earthquakes(url: str, client: USGSClient | None = None) -> LoadResult:
    """Fetch and parse earthquakes from a USGS query URL.

    This function performs HTTP I/O but never raises; every failure
    is returned as an 'error' result.

    Args:
        url: USGS query URL
        client: USGS client (created if not provided)

    Returns:
        LoadResult with the parsed earthquakes
    """
    client = client or USGSClient()

    query_url = create_url(url)
    if query_url is None:
        return LoadResult(status=STATUS_ERROR, error=f"invalid URL: {url!r}")

    fetched = client.fetch(query_url)
    if not fetched.success:
        return LoadResult(status=STATUS_ERROR, error=fetched.error)

    parsed = parse_earthquakes(fetched.body)

    result = LoadResult(
        status=parsed.status,
        records=parsed.records,
        error=parsed.error,
    )

    logger.info("%s", result.summary)

    return result


class EarthquakeLoader:
    """Background task that runs one earthquake load at a time.

    The load runs on a daemon thread. on_finished is called with the
    LoadResult once per completed load unless the load was cancelled.
    """

    def __init__(
        self,
        url: str,
        client: USGSClient | None = None,
        on_finished: Callable[[LoadResult], None] | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            url: USGS query URL
            client: USGS client (created if not provided)
            on_finished: Callback receiving the result of each load
        """
        self.url = url
        self.client = client or USGSClient()
        self.on_finished = on_finished

        # Reentrant: on_finished runs under the lock and may read result
        self._lock = threading.RLock()
        self._thread: threading.Thread | None = None
        self._done = threading.Event()
        self._cancelled = threading.Event()
        self._result: LoadResult | None = None

    @property
    def is_running(self) -> bool:
        """Returns True while a load is in flight."""
        with self._lock:
            return self._running_locked()

    @property
    def result(self) -> LoadResult | None:
        """Result of the last completed, uncancelled load."""
        with self._lock:
            return self._result

    def start(self) -> bool:
        """Start a load in the background.

        Returns:
            True if a load was started, False if one is already running
        """
        with self._lock:
            if self._running_locked():
                logger.debug("Load already in progress, ignoring start")
                return False

            self._done = threading.Event()
            self._cancelled = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._done, self._cancelled),
                name="earthquake-loader",
                daemon=True,
            )
            self._thread.start()

        return True

    def cancel(self) -> None:
        """Discard the pending result of the current load.

        The HTTP request itself is not interrupted; its result is dropped.
        If on_finished is already running, waits for it to return.
        """
        with self._lock:
            self._cancelled.set()
            self._done.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the current load to finish or be cancelled.

        Returns:
            True if the load is no longer pending
        """
        return self._done.wait(timeout)

    def reset(self) -> None:
        """Cancel any load and drop the previous result."""
        self.cancel()
        with self._lock:
            self._result = None

    def _running_locked(self) -> bool:
        return self._thread is not None and not self._done.is_set()

    def _run(self, done: threading.Event, cancelled: threading.Event) -> None:
        try:
            result = load_earthquakes(self.url, self.client)
        except Exception as e:
            logger.exception("Unexpected error loading earthquakes")
            result = LoadResult(status=STATUS_ERROR, error=str(e))

        # cancel() waits for on_finished; nothing reports after it returns
        with self._lock:
            if cancelled.is_set():
                logger.info("Load cancelled, discarding result")
                return
            self._result = result

            try:
                if self.on_finished is not None:
                    self.on_finished(result)
            except Exception:
                logger.exception("Error handling loaded earthquakes")
            finally:
                done.set()
