"""
Formguard Results
=================

The failure vocabulary shared by rules and the message resolver, and the
per-check ValidationResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class FailureCode(str, Enum):
    """Closed set of reasons a rule can reject a value."""

    REQUIRED = "required"
    PASSWORD_LENGTH = "passwordLength"
    PASSWORD_CASE = "passwordCase"
    PASSWORD_DIGIT = "passwordDigit"
    PASSWORD_SPECIAL = "passwordSpecial"
    STRONG_PASSWORD = "strongPassword"
    PASSWORD_MISMATCH = "passwordMismatch"
    DATE_RANGE_INVALID = "dateRangeInvalid"
    MINIMUM_AGE = "minimumAge"
    MAXIMUM_AGE = "maximumAge"
    INVALID_FILE_TYPE = "invalidFileType"
    FILE_SIZE_EXCEEDED = "fileSizeExceeded"
    IMAGE_DIMENSIONS_EXCEEDED = "imageDimensionsExceeded"
    INVALID_IMAGE = "invalidImage"
    INVALID_URL = "invalidUrl"
    INVALID_NIGERIAN_PHONE_NUMBER = "invalidNigerianPhoneNumber"
    INVALID_US_PHONE_NUMBER = "invalidUSPhoneNumber"
    INVALID_UK_PHONE_NUMBER = "invalidUKPhoneNumber"
    INVALID_GHANAIAN_PHONE_NUMBER = "invalidGhanaianPhoneNumber"
    INVALID_KENYAN_PHONE_NUMBER = "invalidKenyanPhoneNumber"
    INVALID_SOUTH_AFRICAN_PHONE_NUMBER = "invalidSouthAfricanPhoneNumber"
    INVALID_ISBN = "invalidISBN"
    INVALID_EMAIL = "invalidEmail"
    INVALID_DOMAIN = "invalidDomain"
    WHITESPACE = "whitespace"
    MIN = "min"
    MAX = "max"

    def __str__(self) -> str:
        return self.value


# Parameter names each code carries; empty means a bare flag.
PARAM_SHAPES: Mapping[FailureCode, Tuple[str, ...]] = MappingProxyType({
    FailureCode.PASSWORD_LENGTH: ("requiredLength",),
    FailureCode.MINIMUM_AGE: ("requiredAge", "actualAge"),
    FailureCode.MAXIMUM_AGE: ("requiredAge", "actualAge"),
    FailureCode.FILE_SIZE_EXCEEDED: ("requiredFileSize",),
    FailureCode.IMAGE_DIMENSIONS_EXCEEDED: ("requiredWidth", "requiredHeight"),
    FailureCode.MIN: ("requiredMin", "actual"),
    FailureCode.MAX: ("requiredMax", "actual"),
    **{
        code: ()
        for code in FailureCode
        if code not in (
            FailureCode.PASSWORD_LENGTH,
            FailureCode.MINIMUM_AGE,
            FailureCode.MAXIMUM_AGE,
            FailureCode.FILE_SIZE_EXCEEDED,
            FailureCode.IMAGE_DIMENSIONS_EXCEEDED,
            FailureCode.MIN,
            FailureCode.MAX,
        )
    },
})


# What a field's error mapping stores per code: the params, or True.
ErrorPayload = Union[Dict[str, Any], bool]


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a single rule check.

    Valid results carry no code. Invalid results carry exactly one
    FailureCode and, for parameterized codes, the params used to render
    the message.

    Example:
        result = password_strength(8)("Short1!")
        result.valid   # False
        result.code    # FailureCode.PASSWORD_LENGTH
        result.params  # {"requiredLength": 8}
    """

    valid: bool = True
    code: Optional[FailureCode] = None
    params: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if self.valid and self.code is not None:
            raise ValueError("A valid result cannot carry a failure code")
        if not self.valid and self.code is None:
            raise ValueError("An invalid result needs a failure code")

    def __bool__(self) -> bool:
        """Allow using result as boolean."""
        return self.valid

    @classmethod
    def success(cls) -> "ValidationResult":
        """The valid result."""
        return VALID

    @classmethod
    def failure(cls, code: FailureCode, **params: Any) -> "ValidationResult":
        """
        Build an invalid result.

        Raises:
            ValueError: If params do not match the code's declared shape
        """
        code = FailureCode(code)
        expected = PARAM_SHAPES[code]
        if set(params) != set(expected):
            raise ValueError(
                f"{code.value} expects params {expected}, got {tuple(params)}"
            )
        return cls(
            valid=False,
            code=code,
            params=MappingProxyType(dict(params)) if params else None,
        )

    def payload(self) -> ErrorPayload:
        """Value stored under the code in a field's error mapping."""
        return dict(self.params) if self.params else True

    def to_errors(self) -> Optional[Dict[str, ErrorPayload]]:
        """Error mapping for this result, or None when valid."""
        if self.valid:
            return None
        return {self.code.value: self.payload()}


VALID = ValidationResult()
