"""Run configuration for tagmatrix.

All tunables that used to be ambient (environment lookups, compiled-in lists)
are gathered in ``MatrixConfig`` and validated when it is built, so a missing
output destination is reported before any network traffic happens.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

CONFIG_KEYS = (
    "destination_path",
    "major_lines",
    "catalog_url",
    "page_size",
    "timeout",
    "retries",
    "retry_delay",
)


class ConfigError(ValueError):
    """Raised when the run configuration is missing or invalid."""


@dataclass
class MatrixConfig:
    """Configuration for one matrix resolution run."""

    destination_path: Optional[str] = None
    major_lines: List[int] = field(default_factory=lambda: list(Constants.MAJOR_LINES))
    catalog_url: str = Constants.CATALOG_URL
    page_size: int = Constants.CATALOG_PAGE_SIZE
    timeout: float = Constants.REQUEST_TIMEOUT
    retries: int = Constants.HTTP_RETRY_MAX
    retry_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC
    require_destination: bool = True

    def __post_init__(self) -> None:
        if self.require_destination and not self.destination_path:
            raise ConfigError(
                f"No output destination configured; set {Constants.ENV_GITHUB_OUTPUT} "
                "or pass --output"
            )
        if self.destination_path is not None and not isinstance(self.destination_path, str):
            raise ConfigError(
                f"destination_path must be a string, got: {self.destination_path!r}"
            )
        if not isinstance(self.major_lines, (list, tuple)):
            raise ConfigError("major_lines must be a list of integers")
        # bool is an int subclass; floats are never truncated
        not_ints = [m for m in self.major_lines if isinstance(m, bool) or not isinstance(m, int)]
        if not_ints:
            raise ConfigError(f"Major lines must be integers, got: {not_ints}")
        self.major_lines = list(self.major_lines)
        try:
            self.page_size = int(self.page_size)
            self.timeout = float(self.timeout)
            self.retries = int(self.retries)
            self.retry_delay = float(self.retry_delay)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e

        if not self.major_lines:
            raise ConfigError("At least one major line is required")
        bad = [m for m in self.major_lines if m < 1]
        if bad:
            raise ConfigError(f"Major lines must be positive integers, got: {bad}")
        if not self.catalog_url:
            raise ConfigError("catalog_url must not be empty")
        if self.page_size < 1:
            raise ConfigError("page_size must be at least 1")
        if self.timeout <= 0:
            raise ConfigError("timeout must be greater than zero")
        if self.retries < 1:
            raise ConfigError("retries must be at least 1")
        if self.retry_delay < 0:
            raise ConfigError("retry_delay must not be negative")

    @classmethod
    def from_args(cls, args: Any, environ: Optional[Mapping[str, str]] = None) -> "MatrixConfig":
        """Create config from CLI arguments.

        Precedence, lowest first: built-in defaults, YAML config file,
        environment (GITHUB_OUTPUT), CLI flags.

        Args:
            args: Parsed CLI arguments namespace.
            environ: Environment mapping; defaults to ``os.environ``.

        Returns:
            MatrixConfig instance.

        Raises:
            ConfigError: If the merged configuration is invalid.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = load_config_file(getattr(args, "CONFIG_FILE", None))

        env_output = env.get(Constants.ENV_GITHUB_OUTPUT)
        if env_output:
            values["destination_path"] = env_output

        overrides = {
            "destination_path": getattr(args, "OUTPUT", None),
            "major_lines": getattr(args, "MAJORS", None),
            "catalog_url": getattr(args, "CATALOG_URL", None),
            "page_size": getattr(args, "PAGE_SIZE", None),
            "timeout": getattr(args, "TIMEOUT", None),
            "retries": getattr(args, "RETRIES", None),
            "retry_delay": getattr(args, "RETRY_DELAY", None),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        values["require_destination"] = getattr(args, "action", "resolve") == "resolve"
        return cls(**values)

    def catalog_start_url(self) -> str:
        """First catalog page URL including the requested page size."""
        sep = "&" if "?" in self.catalog_url else "?"
        return f"{self.catalog_url}{sep}page_size={self.page_size}"


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration values from a YAML file.

    Args:
        config_path: Path to YAML config file, or None.

    Returns:
        Mapping of recognized config keys; empty when no path is given.

    Raises:
        ConfigError: If the file is missing or not a YAML mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", config_path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in CONFIG_KEYS}
