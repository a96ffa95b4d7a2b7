"""
Formguard Message Resolver
==========================

Turns stored failure codes into human-readable messages.

Templates interpolate params by name with ``str.format`` syntax. Lookup is
static and keyed by failure code; unknown codes resolve to None.

Example:
    resolve("passwordLength", {"requiredLength": 8})
    # "Password must be at least 8 characters long"

    field.touched = True
    errors_for(field)
    # ["Passwords do not match. Please ensure ..."]
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from formguard.core.field import FieldNode
from formguard.core.result import FailureCode
from formguard.utils.logger import get_logger

logger = get_logger("formguard.messages")

DEFAULT_MESSAGES: Mapping[FailureCode, str] = {
    FailureCode.REQUIRED: "This field is required",
    FailureCode.PASSWORD_MISMATCH: (
        "Passwords do not match. Please ensure that your passwords match and try again."
    ),
    FailureCode.STRONG_PASSWORD: "Please choose a stronger password and try again",
    FailureCode.PASSWORD_LENGTH: "Password must be at least {requiredLength} characters long",
    FailureCode.PASSWORD_CASE: "Password must contain both uppercase and lowercase letters",
    FailureCode.PASSWORD_DIGIT: "Password must contain at least one numeric digit",
    FailureCode.PASSWORD_SPECIAL: "Password must contain at least one special character",
    FailureCode.DATE_RANGE_INVALID: "Start date must not be after end date.",
    FailureCode.MINIMUM_AGE: "Minimum age required is {requiredAge}.",
    FailureCode.MAXIMUM_AGE: "Maximum age allowed is {requiredAge}.",
    FailureCode.INVALID_FILE_TYPE: "Invalid file type.",
    FailureCode.FILE_SIZE_EXCEEDED: "File size exceeded, maximum size allowed is {requiredFileSize}",
    FailureCode.IMAGE_DIMENSIONS_EXCEEDED: (
        "Image dimensions of max width {requiredWidth} and max height "
        "{requiredHeight} should not be exceeded"
    ),
    FailureCode.INVALID_IMAGE: "Invalid image file.",
    FailureCode.INVALID_URL: "Invalid URL.",
    FailureCode.INVALID_NIGERIAN_PHONE_NUMBER: "Invalid Nigerian phone number.",
    FailureCode.INVALID_US_PHONE_NUMBER: "Invalid US phone number.",
    FailureCode.INVALID_UK_PHONE_NUMBER: "Invalid UK phone number.",
    FailureCode.INVALID_GHANAIAN_PHONE_NUMBER: "Invalid Ghanaian phone number.",
    FailureCode.INVALID_KENYAN_PHONE_NUMBER: "Invalid Kenyan phone number.",
    FailureCode.INVALID_SOUTH_AFRICAN_PHONE_NUMBER: "Invalid South African phone number.",
    FailureCode.INVALID_ISBN: "Invalid ISBN.",
    FailureCode.INVALID_EMAIL: "Invalid email address.",
    FailureCode.INVALID_DOMAIN: "Invalid domain.",
    FailureCode.WHITESPACE: "Field cannot start or end with whitespace.",
    FailureCode.MIN: "Min value is {requiredMin}",
    FailureCode.MAX: "Enter value less than {requiredMax}",
}


class _Params(dict):
    """Format mapping that renders missing params as empty text."""

    def __missing__(self, key: str) -> str:
        return ""


class MessageResolver:
    """
    Failure code to message lookup.

    Example:
        resolver = MessageResolver()
        resolver.override("invalidDomain", "Use your work email.")
        resolver.resolve("invalidDomain")  # "Use your work email."
    """

    def __init__(self, templates: Optional[Mapping[Union[FailureCode, str], str]] = None) -> None:
        self._templates: Dict[str, str] = {
            str(code): template for code, template in DEFAULT_MESSAGES.items()
        }
        if templates:
            for code, template in templates.items():
                self.override(code, template)

    def override(self, code: Union[FailureCode, str], template: str) -> "MessageResolver":
        """Replace the template for a code."""
        self._templates[str(code)] = template
        return self

    def resolve(
        self,
        code: Union[FailureCode, str],
        params: Any = None,
    ) -> Optional[str]:
        """
        Render the message for a failure code.

        Args:
            code: Failure code
            params: Mapping of template params; non-mappings (such as the
                ``True`` flag payload) are ignored

        Returns:
            The message, or None for an unknown code or a template that
            cannot be formatted
        """
        template = self._templates.get(str(code))
        if template is None:
            return None

        values = _Params(params) if isinstance(params, Mapping) else _Params()
        try:
            return template.format_map(values)
        except (ValueError, AttributeError, IndexError, KeyError) as exc:
            logger.debug("Message template could not be formatted", code=str(code), error=str(exc))
            return None

    def errors_for(self, field: Optional[FieldNode]) -> Optional[List[str]]:
        """
        Messages to show for a field.

        Returns:
            None when the field is missing or has no errors; an empty list
            while the field is untouched; otherwise one message per stored
            error, in insertion order
        """
        if field is None or not field.errors:
            return None

        if not field.touched:
            return []

        messages = []
        for code, payload in field.errors.items():
            message = self.resolve(code, payload)
            if message is None:
                logger.debug("No message for failure code", code=code)
                continue
            messages.append(message)

        return messages


default_resolver = MessageResolver()


def resolve(code: Union[FailureCode, str], params: Any = None) -> Optional[str]:
    """Render a message with the default resolver."""
    return default_resolver.resolve(code, params)


def errors_for(field: Optional[FieldNode]) -> Optional[List[str]]:
    """Messages for a field with the default resolver."""
    return default_resolver.errors_for(field)
