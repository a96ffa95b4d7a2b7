"""
Formguard Configuration
=======================

Library settings resolved from FORMGUARD_* environment variables.

Variables:
    FORMGUARD_PASSWORD_MIN_LENGTH  default minimum for password_strength()
    FORMGUARD_DATE_FORMAT          extra strptime format tried for dates
    FORMGUARD_LOG_LEVEL            level used by configure_logging()
    FORMGUARD_LOG_FORMAT           "text" or "json"

Example:
    settings = get_settings()
    settings.password_min_length  # 8
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from formguard.utils.env import Env

ENV_PREFIX = "FORMGUARD_"


@dataclass(frozen=True)
class Settings:
    """Resolved library settings."""

    password_min_length: int = 8
    date_format: str = "%Y-%m-%d"
    log_level: str = "WARNING"
    log_format: str = "text"

    def __post_init__(self) -> None:
        if self.password_min_length < 0:
            raise ValueError("password_min_length must not be negative")
        if self.log_format not in ("text", "json"):
            raise ValueError(f"Unsupported log format: {self.log_format!r}")

    @classmethod
    def from_env(cls, env: Optional[Env] = None) -> "Settings":
        """
        Build settings from the environment, falling back to defaults.

        A .env file in the working directory is read but never exported
        to ``os.environ``.
        """
        env = env or Env(prefix=ENV_PREFIX).load(export=False)
        defaults = cls()

        return cls(
            password_min_length=env.int(
                "PASSWORD_MIN_LENGTH", default=defaults.password_min_length
            ),
            date_format=env.str("DATE_FORMAT", default=defaults.date_format),
            log_level=env.str("LOG_LEVEL", default=defaults.log_level),
            log_format=env.str("LOG_FORMAT", default=defaults.log_format).lower(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get cached settings, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next access reloads them."""
    global _settings
    _settings = None
