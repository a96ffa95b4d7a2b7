"""
Formguard Utils Package
=======================

Logging, environment access and date helpers.
"""

from __future__ import annotations

from formguard.utils.dates import epoch_offset_years, parse_date, utcnow
from formguard.utils.env import Env
from formguard.utils.logger import LogLevel, Logger, configure_logging, get_logger

__all__ = [
    # Environment
    "Env",
    # Logging
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
    # Dates
    "parse_date",
    "epoch_offset_years",
    "utcnow",
]
