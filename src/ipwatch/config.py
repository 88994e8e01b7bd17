"""Configuration management for ipwatch."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlsplit

import yaml

from ipwatch.errors import ConfigError


DEFAULT_ENDPOINT = "https://api64.ipify.org?format=json"


@dataclass(frozen=True)
class Config:
    """Watcher configuration. Immutable once built."""

    interval: int = 60  # seconds between checks
    log_file: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    quiet: bool = False  # only log to file when log_file is set
    max_retries: int = 5  # total attempts per check
    request_timeout: float = 5.0  # seconds per attempt
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with every non-None override applied.

        Args:
            **overrides: Field values, typically straight from CLI options.

        Returns:
            New Config.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def validate(self) -> None:
        """Check value types and ranges.

        Values read from YAML arrive untyped, so types are checked here too.

        Raises:
            ConfigError: If any setting has the wrong type or is out of range.
        """
        for name in ("interval", "max_retries"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.request_timeout, bool) or not isinstance(
            self.request_timeout, (int, float)
        ):
            raise ConfigError(
                f"request_timeout must be a number, got {self.request_timeout!r}"
            )
        for name in ("endpoint", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError(f"log_file must be a string, got {self.log_file!r}")
        if not isinstance(self.quiet, bool):
            raise ConfigError(f"quiet must be true or false, got {self.quiet!r}")

        if self.interval <= 0:
            raise ConfigError(f"interval must be positive, got {self.interval}")
        if self.max_retries < 1:
            raise ConfigError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.request_timeout <= 0:
            raise ConfigError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

        try:
            parts = urlsplit(self.endpoint)
        except ValueError as e:
            raise ConfigError(f"endpoint is not a valid URL: {e}") from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(f"endpoint must be an http(s) URL, got {self.endpoint!r}")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"Unknown log level: {self.log_level}")


def get_config_path(custom_path: Path | None = None) -> Path:
    """Get the configuration file path.

    Args:
        custom_path: Override path. If None, returns default.

    Returns:
        Path to config file.
    """
    if custom_path is not None:
        return custom_path
    return Path.home() / ".config" / "ipwatch" / "config.yaml"


def _default_file_reader(path: Path) -> dict[str, Any] | None:
    """Default file reader that loads YAML from disk."""
    if not path.exists():
        return None
    try:
        content = path.read_text()
        if not content.strip():
            return None
        data = yaml.safe_load(content)
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None


def load_config(
    path: Path | None = None,
    file_reader: Callable[[Path], dict[str, Any] | None] | None = None,
) -> Config:
    """Load configuration from file.

    Args:
        path: Path to config file. If None, uses default path.
        file_reader: Injectable file reader for testing.

    Returns:
        Config object with values from file or defaults.
    """
    config_path = get_config_path(path)
    reader = file_reader or _default_file_reader

    data = reader(config_path)

    if data is None:
        return Config()

    return Config(
        interval=data.get("interval", Config.interval),
        log_file=data.get("log_file", Config.log_file),
        endpoint=data.get("endpoint", Config.endpoint),
        quiet=data.get("quiet", Config.quiet),
        max_retries=data.get("max_retries", Config.max_retries),
        request_timeout=data.get("request_timeout", Config.request_timeout),
        log_level=data.get("log_level", Config.log_level),
    )
