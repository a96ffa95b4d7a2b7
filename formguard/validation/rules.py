"""
Formguard Validation Rules
==========================

Base rule classes and the generic built-in rules.

Each rule is a small dataclass configured once and then checked against
any number of fields. A check never mutates the field and never raises
for bad input; it returns a ValidationResult.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, ClassVar, Optional, Union

from formguard.core.field import FieldNode, as_field
from formguard.core.result import VALID, FailureCode, ValidationResult


class Rule(ABC):
    """
    Abstract validation rule.

    Implement ``check`` to create custom rules. Rules are callable with
    either a field node or a bare value.

    Example:
        @dataclass
        class AtLeastOne(Rule):
            alias = "at_least_one"

            def check(self, field: FieldNode) -> ValidationResult:
                if field.value < 1:
                    return ValidationResult.failure(
                        FailureCode.MIN, requiredMin=1, actual=field.value
                    )
                return VALID
    """

    # Name used in pipe-separated rule strings ("required|email")
    alias: ClassVar[str] = ""
    is_async: ClassVar[bool] = False

    @abstractmethod
    def check(self, field: FieldNode) -> ValidationResult:
        """
        Check the field's current value.

        Args:
            field: Node to check; siblings are reachable through its root

        Returns:
            VALID or an invalid result with one failure code
        """
        ...

    def __call__(self, target: Any) -> ValidationResult:
        """Check a field node or a bare value."""
        return self.check(as_field(target))


class AsyncRule(Rule):
    """Rule whose check must be awaited."""

    is_async: ClassVar[bool] = True

    @abstractmethod
    async def check(self, field: FieldNode) -> ValidationResult:
        ...

    def __call__(self, target: Any) -> Awaitable[ValidationResult]:
        return self.check(as_field(target))


RuleLike = Union[Rule, AsyncRule]


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def as_text(value: Any) -> str:
    """String view of a value for pattern checks; None becomes ''."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def as_number(value: Any) -> Optional[float]:
    """Numeric view of a value, or None when it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass
class Required(Rule):
    """Require the field to be present and not empty."""

    alias: ClassVar[str] = "required"

    def check(self, field: FieldNode) -> ValidationResult:
        if is_empty(field.value):
            return ValidationResult.failure(FailureCode.REQUIRED)
        return VALID


@dataclass
class MinValue(Rule):
    """Numeric lower bound, inclusive. Empty or non-numeric values pass."""

    min_value: float
    alias: ClassVar[str] = "min"

    def check(self, field: FieldNode) -> ValidationResult:
        number = as_number(field.value)
        if number is None or number >= self.min_value:
            return VALID
        return ValidationResult.failure(
            FailureCode.MIN, requiredMin=self.min_value, actual=field.value
        )


@dataclass
class MaxValue(Rule):
    """Numeric upper bound, inclusive. Empty or non-numeric values pass."""

    max_value: float
    alias: ClassVar[str] = "max"

    def check(self, field: FieldNode) -> ValidationResult:
        number = as_number(field.value)
        if number is None or number <= self.max_value:
            return VALID
        return ValidationResult.failure(
            FailureCode.MAX, requiredMax=self.max_value, actual=field.value
        )


# Rule factory functions

def required() -> Required:
    """Create Required rule."""
    return Required()


def min_value(value: float) -> MinValue:
    """Create MinValue rule."""
    return MinValue(min_value=value)


def max_value(value: float) -> MaxValue:
    """Create MaxValue rule."""
    return MaxValue(max_value=value)
