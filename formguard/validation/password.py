"""
Formguard Password Rules
========================

Password strength checks and the cross-field password match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Pattern

from formguard.core.config import get_settings
from formguard.core.exceptions import RuleDefinitionError
from formguard.core.field import FieldNode, value_of
from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.validation.rules import Rule, as_text

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;':\",.<>/?"

_LOWER: Pattern = re.compile(r"[a-z]")
_UPPER: Pattern = re.compile(r"[A-Z]")
_DIGIT: Pattern = re.compile(r"\d", re.ASCII)
_SPECIAL: Pattern = re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]")
_STRONG: Pattern = re.compile(r"(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*\W)", re.ASCII)


@dataclass
class PasswordStrength(Rule):
    """
    Graded password strength.

    Conditions are checked in a fixed order and the first failure is
    reported: length, mixed case, digit, special character.
    """

    min_length: Optional[int] = None
    alias: ClassVar[str] = "password_strength"

    def __post_init__(self) -> None:
        if self.min_length is None:
            self.min_length = get_settings().password_min_length
        if self.min_length < 0:
            raise RuleDefinitionError(
                "min_length must not be negative", rule=self.alias
            )

    def check(self, field: FieldNode) -> ValidationResult:
        password = as_text(field.value)

        if len(password) < self.min_length:
            return ValidationResult.failure(
                FailureCode.PASSWORD_LENGTH, requiredLength=self.min_length
            )

        if not _LOWER.search(password) or not _UPPER.search(password):
            return ValidationResult.failure(FailureCode.PASSWORD_CASE)

        if not _DIGIT.search(password):
            return ValidationResult.failure(FailureCode.PASSWORD_DIGIT)

        if not _SPECIAL.search(password):
            return ValidationResult.failure(FailureCode.PASSWORD_SPECIAL)

        return VALID


@dataclass
class StrongPassword(Rule):
    """Pass/fail strength probe: digit, both cases and a non-word character."""

    alias: ClassVar[str] = "strong_password"

    def check(self, field: FieldNode) -> ValidationResult:
        if _STRONG.search(as_text(field.value)):
            return VALID
        return ValidationResult.failure(FailureCode.STRONG_PASSWORD)


@dataclass
class PasswordMatch(Rule):
    """
    Confirmation field must equal the password field.

    Attach to the confirmation field; the password is looked up by name
    from the root of the same tree.
    """

    other: str = "password"
    alias: ClassVar[str] = "password_match"

    def check(self, field: FieldNode) -> ValidationResult:
        if value_of(field, self.other) != field.value:
            return ValidationResult.failure(FailureCode.PASSWORD_MISMATCH)
        return VALID


@dataclass
class PasswordMatchGroup(Rule):
    """
    Group-level password match.

    Attach to the group holding both fields. Fails only when both fields
    exist and their values differ.
    """

    password: str = "password"
    confirm: str = "confirmPassword"
    alias: ClassVar[str] = "password_match_group"

    def check(self, field: FieldNode) -> ValidationResult:
        password = field.get(self.password)
        confirm = field.get(self.confirm)

        if password is not None and confirm is not None \
                and password.value != confirm.value:
            return ValidationResult.failure(FailureCode.PASSWORD_MISMATCH)
        return VALID


def password_strength(min_length: Optional[int] = None) -> PasswordStrength:
    """Create PasswordStrength rule (default length from settings)."""
    return PasswordStrength(min_length=min_length)


def strong_password() -> StrongPassword:
    """Create StrongPassword rule."""
    return StrongPassword()


def password_match(other: str = "password") -> PasswordMatch:
    """Create PasswordMatch rule."""
    return PasswordMatch(other=other)


def password_match_group(
    password: str = "password",
    confirm: str = "confirmPassword",
) -> PasswordMatchGroup:
    """Create PasswordMatchGroup rule."""
    return PasswordMatchGroup(password=password, confirm=confirm)
