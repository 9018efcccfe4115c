"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config) are defined in quakereport/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakereport.core.config import USGS_REQUEST_URL, Config, validate_config
from quakereport.shell.usgs_client import USGSQueryParams, build_query_url


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration has critical validation errors."""


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Args:
        value: Value to resolve

    Returns:
        Resolved value, or the original value if nothing to resolve
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_request_url(data: dict[str, Any]) -> str:
    """Get the request URL, building it from query settings if given."""
    if "request_url" in data:
        return _resolve_value(data["request_url"])

    if "min_magnitude" in data or "limit" in data:
        return build_query_url(USGSQueryParams(
            min_magnitude=float(data.get("min_magnitude", 5)),
            limit=int(data.get("limit", 10)),
        ))

    return USGS_REQUEST_URL


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    return Config(
        request_url=_parse_request_url(data),
        connect_timeout_seconds=float(
            data.get("connect_timeout_seconds", defaults.connect_timeout_seconds)
        ),
        read_timeout_seconds=float(
            data.get("read_timeout_seconds", defaults.read_timeout_seconds)
        ),
        display_timezone=_resolve_value(
            data.get("display_timezone", defaults.display_timezone)
        ),
        near_label=data.get("near_label", defaults.near_label),
        connectivity_host=_resolve_value(
            data.get("connectivity_host", defaults.connectivity_host)
        ),
        connectivity_port=int(data.get("connectivity_port", defaults.connectivity_port)),
        connectivity_timeout_seconds=float(
            data.get("connectivity_timeout_seconds", defaults.connectivity_timeout_seconds)
        ),
    )


def _check_config(config: Config) -> Config:
    """Log validation problems and reject configs with critical errors."""
    result = validate_config(config)

    for warning in result.warnings:
        logger.warning("Config warning in %s: %s", warning.field, warning.message)

    if not result.valid:
        for error in result.critical_errors:
            logger.error("Config error in %s: %s", error.field, error.message)
        raise ConfigError(
            "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        )

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If the configuration is invalid
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = _check_config(load_config_from_dict(data))

    logger.info("Loaded config: request URL %s", config.request_url)

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        USGS_REQUEST_URL: Query URL to load earthquakes from
        CONNECT_TIMEOUT: HTTP connect timeout in seconds
        READ_TIMEOUT: HTTP read timeout in seconds
        DISPLAY_TIMEZONE: IANA timezone for dates and times

    Returns:
        Config object from environment

    Raises:
        ConfigError: If the configuration is invalid
    """
    data: dict[str, Any] = {}

    if os.environ.get("USGS_REQUEST_URL"):
        data["request_url"] = os.environ["USGS_REQUEST_URL"]
    if os.environ.get("CONNECT_TIMEOUT"):
        data["connect_timeout_seconds"] = os.environ["CONNECT_TIMEOUT"]
    if os.environ.get("READ_TIMEOUT"):
        data["read_timeout_seconds"] = os.environ["READ_TIMEOUT"]
    if os.environ.get("DISPLAY_TIMEZONE"):
        data["display_timezone"] = os.environ["DISPLAY_TIMEZONE"]

    return _check_config(load_config_from_dict(data))
