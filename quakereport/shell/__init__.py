"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS API client (HTTP)
- Connectivity check (sockets)
- Configuration loading (environment/files)

Keep this layer thin and simple. All parsing and formatting is in core.
"""

from quakereport.shell.usgs_client import USGSClient, FetchResult
from quakereport.shell.connectivity import is_connected
from quakereport.shell.config_loader import load_config, ConfigError

__all__ = [
    "USGSClient",
    "FetchResult",
    "is_connected",
    "load_config",
    "ConfigError",
]
