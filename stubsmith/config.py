"""Configuration management for stubsmith.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass
class MockerConfig:
    """Engine-wide settings shared by every stub and binding of one engine."""

    log_level: str = "WARNING"
    strict_returns: bool = True  # returns() after then_returns() raises
    describe_width: int = 80  # pprint width for argument renderings
    auto_check: bool = True  # pytest fixtures verify expectations at teardown

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.describe_width <= 0:
            raise ValueError(f"describe_width must be positive, got {self.describe_width}")

    @classmethod
    def from_env(cls) -> "MockerConfig":
        return cls(
            log_level=os.getenv("STUBSMITH_LOG_LEVEL", "WARNING"),
            strict_returns=_env_flag("STUBSMITH_STRICT_RETURNS", True),
            describe_width=_env_int("STUBSMITH_DESCRIBE_WIDTH", 80),
            auto_check=_env_flag("STUBSMITH_AUTO_CHECK", True),
        )


def configure_logging(config: MockerConfig | None = None) -> None:
    """Apply the configured level to the library's loggers."""
    config = config or MockerConfig.from_env()
    level = getattr(logging, config.log_level, logging.WARNING)
    logging.getLogger("stubsmith").setLevel(level)
