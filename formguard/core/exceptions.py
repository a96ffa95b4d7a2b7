"""
Formguard Exceptions
====================

Raised for programming and configuration mistakes only. Invalid user
input is never an exception; rules report it as a ValidationResult.
"""

from __future__ import annotations


class FormguardError(Exception):
    """Base class for formguard errors."""


class RuleDefinitionError(FormguardError, ValueError):
    """A rule was configured incorrectly or could not be built."""

    def __init__(self, message: str, rule: str = "") -> None:
        super().__init__(message)
        self.rule = rule


class FieldLookupError(FormguardError, KeyError):
    """A field name could not be resolved in a form."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown field: {self.name!r}"
