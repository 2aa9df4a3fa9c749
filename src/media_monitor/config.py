"""Configuration management."""

import os

# Global singleton instance
_config_instance: "Config | None" = None

_ENV_PREFIX = "MEDIA_MONITOR_"


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(_ENV_PREFIX + name, default).strip().lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(_ENV_PREFIX + name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(_ENV_PREFIX + name, default))
    except ValueError:
        return default


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration with defaults and env overrides."""
        # Log level
        self._log_level = os.environ.get(_ENV_PREFIX + "LOG_LEVEL", "INFO").upper()

        # JSON logging
        self._json_logging = _env_bool("JSON_LOGGING", "true")

        # Check defaults used by the runner
        self._max_results = _env_int("MAX_RESULTS", 20)
        self._use_cache = _env_bool("USE_CACHE", "true")
        self._debug = _env_bool("DEBUG", "false")

        # Percentage drop in item count treated as a broken listing
        self._decrease_threshold = _env_float("DECREASE_THRESHOLD", 50.0)

    @property
    def log_level(self) -> str:
        """Logging level."""
        return self._log_level

    @property
    def json_logging(self) -> bool:
        """Whether to use JSON logging format."""
        return self._json_logging

    @property
    def max_results(self) -> int:
        """Maximum number of teasers requested per check."""
        return self._max_results

    @property
    def use_cache(self) -> bool:
        """Whether crawlers may reuse previously fetched detail lookups."""
        return self._use_cache

    @property
    def debug(self) -> bool:
        """Whether checks log verbose diagnostics."""
        return self._debug

    @property
    def decrease_threshold(self) -> float:
        """Maximum tolerated drop in item count, as a percentage."""
        return self._decrease_threshold


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        The singleton Config instance.
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance
