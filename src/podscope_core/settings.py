"""Resolver settings with environment variable overrides.

Settings come from defaults, then an optional mapping supplied by the caller,
then ``PODSCOPE_``-prefixed environment variables (later wins):

* ``PODSCOPE_LOG_LEVEL``: level for the ``podscope_core`` logger
* ``PODSCOPE_WARN_DUPLICATE_NAMES``: log duplicate env/volume/mount names when checking
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PODSCOPE_"
ENV_LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"
ENV_WARN_DUPLICATE_NAMES = f"{ENV_PREFIX}WARN_DUPLICATE_NAMES"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "log_level": "WARNING",
    "warn_on_duplicate_names": True,
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass
class ResolverSettings:
    """Settings for resolution diagnostics."""

    log_level: str = "WARNING"
    warn_on_duplicate_names: bool = True

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        self.validate()

    def validate(self) -> None:
        """Validate settings values."""
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(_LOG_LEVELS)}: {self.log_level}")
        if not isinstance(self.warn_on_duplicate_names, bool):
            raise ConfigError("warn_on_duplicate_names must be a boolean")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResolverSettings":
        unknown = set(data) - set(DEFAULT_SETTINGS)
        if unknown:
            raise ConfigError(f"Unknown resolver settings: {', '.join(sorted(unknown))}")
        merged = {**DEFAULT_SETTINGS, **data}
        return cls(
            log_level=merged["log_level"],
            warn_on_duplicate_names=merged["warn_on_duplicate_names"],
        )

    @classmethod
    def from_env(
        cls,
        base: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ResolverSettings":
        """Build settings from ``base`` with environment variable overrides."""
        env = os.environ if environ is None else environ
        data = dict(base or {})

        if ENV_LOG_LEVEL in env:
            data["log_level"] = env[ENV_LOG_LEVEL]

        if ENV_WARN_DUPLICATE_NAMES in env:
            raw = env[ENV_WARN_DUPLICATE_NAMES].strip().lower()
            if raw in _TRUE_VALUES:
                data["warn_on_duplicate_names"] = True
            elif raw in _FALSE_VALUES:
                data["warn_on_duplicate_names"] = False
            else:
                logger.warning("Invalid %s value: %s", ENV_WARN_DUPLICATE_NAMES, env[ENV_WARN_DUPLICATE_NAMES])

        return cls.from_dict(data)


def configure_logging(settings: ResolverSettings) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    package_logger = logging.getLogger("podscope_core")
    package_logger.setLevel(settings.log_level)
    return package_logger
