"""
Formguard Date Rules
====================

Date range ordering across sibling fields and age bounds on a date of
birth.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from datetime import datetime
from typing import Any, Callable, ClassVar, List, Optional

from formguard.core.config import get_settings
from formguard.core.exceptions import RuleDefinitionError
from formguard.core.field import FieldNode, value_of
from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.utils.dates import DEFAULT_FORMATS, epoch_offset_years, parse_date, utcnow
from formguard.validation.rules import Rule, is_empty

Clock = Callable[[], datetime]


def configured_formats() -> List[str]:
    """Date formats to try: the configured one first, then the defaults."""
    configured = get_settings().date_format
    return [configured] + [fmt for fmt in DEFAULT_FORMATS if fmt != configured]


@dataclass
class DateRange(Rule):
    """
    Start date must not be after end date.

    Both dates are read by name from the root of the tree, so the rule
    can sit on the end-date field or on the group itself. Missing or
    unparseable endpoints are not this rule's concern.
    """

    start: str = "startDate"
    end: str = "endDate"
    formats: Optional[List[str]] = dataclass_field(default=None, repr=False, compare=False)
    alias: ClassVar[str] = "date_range"

    def __post_init__(self) -> None:
        if self.formats is None:
            self.formats = configured_formats()

    def check(self, field: FieldNode) -> ValidationResult:
        start_value = value_of(field, self.start)
        end_value = value_of(field, self.end)

        if is_empty(start_value) or is_empty(end_value):
            return VALID

        start = parse_date(start_value, self.formats)
        end = parse_date(end_value, self.formats)

        if start is not None and end is not None and start > end:
            return ValidationResult.failure(FailureCode.DATE_RANGE_INVALID)
        return VALID


@dataclass
class _AgeRule(Rule):
    limit: int
    clock: Clock = dataclass_field(default=utcnow, repr=False, compare=False)
    formats: Optional[List[str]] = dataclass_field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise RuleDefinitionError("age limit must not be negative", rule=self.alias)
        if self.formats is None:
            self.formats = configured_formats()

    def age(self, value: Any) -> Optional[int]:
        """Age for a date-of-birth value, or None if it does not parse."""
        birth = parse_date(value, self.formats)
        if birth is None:
            return None
        return epoch_offset_years(birth, self.clock())


@dataclass
class MinimumAge(_AgeRule):
    """Date of birth must be at least ``limit`` years ago (inclusive)."""

    alias: ClassVar[str] = "minimum_age"

    def check(self, field: FieldNode) -> ValidationResult:
        age = self.age(field.value)
        if age is not None and age < self.limit:
            return ValidationResult.failure(
                FailureCode.MINIMUM_AGE, requiredAge=self.limit, actualAge=age
            )
        return VALID


@dataclass
class MaximumAge(_AgeRule):
    """Date of birth must be at most ``limit`` years ago (inclusive)."""

    alias: ClassVar[str] = "maximum_age"

    def check(self, field: FieldNode) -> ValidationResult:
        age = self.age(field.value)
        if age is not None and age > self.limit:
            return ValidationResult.failure(
                FailureCode.MAXIMUM_AGE, requiredAge=self.limit, actualAge=age
            )
        return VALID


def date_range(start: str = "startDate", end: str = "endDate") -> DateRange:
    """Create DateRange rule."""
    return DateRange(start=start, end=end)


def minimum_age(min_age: int, clock: Clock = utcnow) -> MinimumAge:
    """Create MinimumAge rule."""
    return MinimumAge(limit=min_age, clock=clock)


def maximum_age(max_age: int, clock: Clock = utcnow) -> MaximumAge:
    """Create MaximumAge rule."""
    return MaximumAge(limit=max_age, clock=clock)
