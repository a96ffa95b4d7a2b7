"""
Formguard Format Rules
======================

Single-pattern string checks: URLs, national phone numbers, ISBNs,
emails, allowed email domains and surrounding whitespace.

Patterns must match the whole value. Whether an empty value passes is
decided per rule (``allow_empty``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar, List, Pattern, Sequence

from formguard.core.field import FieldNode
from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.validation.rules import Rule, as_text

URL_PATTERN: Pattern = re.compile(
    r"^(https?://)?"                              # protocol
    r"((([a-z\d]([a-z\d-]*[a-z\d])*)\.)+[a-z]{2,}|"  # domain name
    r"((\d{1,3}\.){3}\d{1,3}))"                   # or IPv4 address
    r"(:\d+)?(/[-a-z\d%_.~+]*)*"                  # port and path
    r"(\?[;&a-z\d%_.~+=-]*)?"                     # query string
    r"(#[-a-z\d_]*)?$",                           # fragment
    re.IGNORECASE | re.ASCII,
)

PHONE_PATTERNS = {
    FailureCode.INVALID_NIGERIAN_PHONE_NUMBER: re.compile(r"^(\+?234|0)\d{10}$", re.ASCII),
    FailureCode.INVALID_US_PHONE_NUMBER: re.compile(r"^\(?\d{3}\)?[- ]?\d{3}[- ]?\d{4}$", re.ASCII),
    FailureCode.INVALID_UK_PHONE_NUMBER: re.compile(r"^(\+?44|0)\d{10}$", re.ASCII),
    FailureCode.INVALID_GHANAIAN_PHONE_NUMBER: re.compile(r"^(\+?233|0)\d{9}$", re.ASCII),
    FailureCode.INVALID_KENYAN_PHONE_NUMBER: re.compile(r"^(\+?254|0)\d{9}$", re.ASCII),
    FailureCode.INVALID_SOUTH_AFRICAN_PHONE_NUMBER: re.compile(r"^(\+?27|0)\d{9}$", re.ASCII),
}

# 10 or 13 digits, hyphens allowed anywhere
ISBN_PATTERN: Pattern = re.compile(
    r"^(?=(?:\D*\d){10}(?:(?:\D*\d){3})?$)[\d-]+$", re.ASCII
)

EMAIL_PATTERN: Pattern = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

_EDGE_WHITESPACE: Pattern = re.compile(r"^\s|\s\Z")


@dataclass
class PatternRule(Rule):
    """Value must fully match ``pattern``; failure reports ``code``."""

    pattern: Pattern
    code: FailureCode
    allow_empty: bool = False

    def check(self, field: FieldNode) -> ValidationResult:
        text = as_text(field.value)
        if not text and self.allow_empty:
            return VALID
        if self.pattern.fullmatch(text):
            return VALID
        return ValidationResult.failure(self.code)


@dataclass
class Url(PatternRule):
    """Validate URL format. Empty values fail."""

    pattern: Pattern = URL_PATTERN
    code: FailureCode = FailureCode.INVALID_URL
    alias: ClassVar[str] = "url"


@dataclass
class PhoneNumber(PatternRule):
    """Validate a national phone number format. Empty values fail."""

    alias: ClassVar[str] = "phone"


@dataclass
class Isbn(PatternRule):
    """Validate ISBN-10/13 shape (digit count only). Empty values fail."""

    pattern: Pattern = ISBN_PATTERN
    code: FailureCode = FailureCode.INVALID_ISBN
    alias: ClassVar[str] = "isbn"


@dataclass
class Email(PatternRule):
    """Validate email format. Empty values pass."""

    pattern: Pattern = EMAIL_PATTERN
    code: FailureCode = FailureCode.INVALID_EMAIL
    allow_empty: bool = True
    alias: ClassVar[str] = "email"


@dataclass
class EmailDomain(Rule):
    """
    Email domain must be one of ``allowed_domains``.

    Empty values and values without an ``@`` pass; malformed addresses
    are left to the Email rule. The domain is the text between the first
    and second ``@``.
    """

    allowed_domains: Sequence[str] = field(default_factory=list)
    alias: ClassVar[str] = "email_domain"

    def check(self, field: FieldNode) -> ValidationResult:
        email = as_text(field.value)
        if not email:
            return VALID

        parts = email.split("@")
        if len(parts) > 1 and parts[1] not in self.allowed_domains:
            return ValidationResult.failure(FailureCode.INVALID_DOMAIN)

        return VALID


@dataclass
class NoWhitespace(Rule):
    """Value must not start or end with whitespace. Empty values pass."""

    alias: ClassVar[str] = "no_whitespace"

    def check(self, field: FieldNode) -> ValidationResult:
        text = as_text(field.value)
        if text and _EDGE_WHITESPACE.search(text):
            return ValidationResult.failure(FailureCode.WHITESPACE)
        return VALID


# Rule factory functions

def url_validator() -> Url:
    """Create Url rule."""
    return Url()


def _phone(code: FailureCode) -> PhoneNumber:
    return PhoneNumber(pattern=PHONE_PATTERNS[code], code=code)


def nigerian_phone_number() -> PhoneNumber:
    """Create Nigerian phone number rule (+234 or 0, then 10 digits)."""
    return _phone(FailureCode.INVALID_NIGERIAN_PHONE_NUMBER)


def us_phone_number() -> PhoneNumber:
    """Create US phone number rule ((123) 456-7890 style)."""
    return _phone(FailureCode.INVALID_US_PHONE_NUMBER)


def uk_phone_number() -> PhoneNumber:
    """Create UK phone number rule (+44 or 0, then 10 digits)."""
    return _phone(FailureCode.INVALID_UK_PHONE_NUMBER)


def ghanaian_phone_number() -> PhoneNumber:
    """Create Ghanaian phone number rule (+233 or 0, then 9 digits)."""
    return _phone(FailureCode.INVALID_GHANAIAN_PHONE_NUMBER)


def kenyan_phone_number() -> PhoneNumber:
    """Create Kenyan phone number rule (+254 or 0, then 9 digits)."""
    return _phone(FailureCode.INVALID_KENYAN_PHONE_NUMBER)


def south_african_phone_number() -> PhoneNumber:
    """Create South African phone number rule (+27 or 0, then 9 digits)."""
    return _phone(FailureCode.INVALID_SOUTH_AFRICAN_PHONE_NUMBER)


def isbn() -> Isbn:
    """Create Isbn rule."""
    return Isbn()


def email() -> Email:
    """Create Email rule."""
    return Email()


def email_domain(allowed_domains: List[str]) -> EmailDomain:
    """Create EmailDomain rule."""
    return EmailDomain(allowed_domains=list(allowed_domains))


def no_whitespace() -> NoWhitespace:
    """Create NoWhitespace rule."""
    return NoWhitespace()
