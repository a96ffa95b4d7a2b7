"""
Formguard Messages
==================

Failure code to message lookup for presentation layers.
"""

from formguard.messages.resolver import (
    DEFAULT_MESSAGES,
    MessageResolver,
    default_resolver,
    errors_for,
    resolve,
)

__all__ = [
    "DEFAULT_MESSAGES",
    "MessageResolver",
    "default_resolver",
    "errors_for",
    "resolve",
]
