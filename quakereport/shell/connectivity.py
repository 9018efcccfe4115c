"""Network connectivity check - Imperative Shell."""

import logging
import socket


logger = logging.getLogger(__name__)


def is_connected(
    host: str = "earthquake.usgs.gov",
    port: int = 443,
    timeout: float = 3,
) -> bool:
    """Check whether a TCP connection to host:port can be opened.

    This function performs network I/O.

    Args:
        host: Host to probe
        port: Port to probe
        timeout: Connection timeout in seconds

    Returns:
        True if the connection succeeded
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug("Connectivity check to %s:%d failed: %s", host, port, e)
        return False
