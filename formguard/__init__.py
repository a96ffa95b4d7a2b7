"""
Formguard - Composable Field and Form Validation
================================================

Validation predicates that return structured failure codes, plus a
message resolver that renders them for touched fields.

Features:
---------
- Pure rule factories (password, dates, files, formats)
- Async image dimension check that never raises for bad input
- Cross-field rules over any tree exposing value/parent/get
- Static message templates keyed by failure code

Quick Start:
    from formguard import password_strength, errors_for

    result = password_strength(8)("Short1!")
    result.code    # FailureCode.PASSWORD_LENGTH
    result.params  # {"requiredLength": 8}
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.core.field import FieldNode
from formguard.messages.resolver import MessageResolver, errors_for, resolve
from formguard.validation import *  # noqa: F401,F403
from formguard.validation import __all__ as _validation_all


def __getattr__(name: str):
    """Lazy access to the ambient utilities."""
    _imports = {
        "Settings": "formguard.core.config",
        "get_settings": "formguard.core.config",
        "Logger": "formguard.utils.logger",
        "get_logger": "formguard.utils.logger",
        "configure_logging": "formguard.utils.logger",
        "Env": "formguard.utils.env",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'formguard' has no attribute '{name}'")


__all__ = [
    "__version__",
    "VALID",
    "FailureCode",
    "ValidationResult",
    "FieldNode",
    "MessageResolver",
    "errors_for",
    "resolve",
    "Settings",
    "get_settings",
    "Logger",
    "get_logger",
    "configure_logging",
    "Env",
    *_validation_all,
]
