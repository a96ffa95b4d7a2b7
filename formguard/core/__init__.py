"""
Formguard Core
==============

Shared contracts: failure codes and results, the field tree interface,
settings and exceptions.
"""

from formguard.core.config import Settings, get_settings, reset_settings
from formguard.core.exceptions import FieldLookupError, FormguardError, RuleDefinitionError
from formguard.core.field import (
    DetachedField,
    FieldNode,
    as_field,
    parent_of,
    root_of,
    value_of,
)
from formguard.core.result import (
    PARAM_SHAPES,
    VALID,
    FailureCode,
    ValidationResult,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "FormguardError",
    "RuleDefinitionError",
    "FieldLookupError",
    "FieldNode",
    "DetachedField",
    "as_field",
    "parent_of",
    "root_of",
    "value_of",
    "FailureCode",
    "PARAM_SHAPES",
    "VALID",
    "ValidationResult",
]
