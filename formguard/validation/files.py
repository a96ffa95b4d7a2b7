"""
Formguard File Rules
====================

MIME type and size constraints on uploaded files.

Files are duck-typed: anything with a ``content_type`` (or ``type``)
attribute and a ``size`` attribute, a file-like object with ``read``, a
mapping with those keys, or raw bytes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Optional, Sequence

from formguard.core.exceptions import RuleDefinitionError
from formguard.core.field import FieldNode
from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.validation.rules import Rule


@dataclass
class UploadedFile:
    """
    In-memory upload.

    Example:
        avatar = UploadedFile("me.png", "image/png", png_bytes)
        avatar.size  # len(png_bytes)
    """

    filename: str
    content_type: Optional[str]
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    def read(self) -> bytes:
        return self.data


def _attr(file: Any, *names: str) -> Any:
    for name in names:
        if isinstance(file, Mapping):
            if name in file:
                return file[name]
        elif hasattr(file, name):
            return getattr(file, name)
    return None


def mime_type_of(file: Any) -> Optional[str]:
    """MIME type of a file, or None when absent or unknown."""
    if not file:
        return None
    return _attr(file, "content_type", "type")


def size_of(file: Any) -> int:
    """Size of a file in bytes; absent files count as 0."""
    if not file:
        return 0
    if isinstance(file, (bytes, bytearray, memoryview)):
        return len(file)

    size = _attr(file, "size")
    if size is not None:
        return size

    content = read_bytes(file)
    return len(content) if content is not None else 0


def read_bytes(file: Any) -> Optional[bytes]:
    """
    Full content of a file, rewinding seekable streams afterwards.

    Returns:
        The bytes, or None if the object holds no readable content
    """
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)

    data = _attr(file, "data", "content")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)

    if hasattr(file, "read"):
        content = file.read()
        if hasattr(file, "seek"):
            file.seek(0)
        if isinstance(content, (bytes, bytearray)):
            return bytes(content)

    return None


@dataclass
class FileType(Rule):
    """File MIME type must exactly match one of ``allowed_types``."""

    allowed_types: Sequence[Optional[str]] = field(default_factory=list)
    alias: ClassVar[str] = "file_type"

    def check(self, field: FieldNode) -> ValidationResult:
        if mime_type_of(field.value) in self.allowed_types:
            return VALID
        return ValidationResult.failure(FailureCode.INVALID_FILE_TYPE)


@dataclass
class FileSize(Rule):
    """File size in bytes must not exceed ``max_bytes`` (inclusive)."""

    max_bytes: int
    alias: ClassVar[str] = "file_size"

    def __post_init__(self) -> None:
        if self.max_bytes < 0:
            raise RuleDefinitionError("max_bytes must not be negative", rule=self.alias)

    def check(self, field: FieldNode) -> ValidationResult:
        if size_of(field.value) <= self.max_bytes:
            return VALID
        return ValidationResult.failure(
            FailureCode.FILE_SIZE_EXCEEDED, requiredFileSize=self.max_bytes
        )


@dataclass
class FileValidator(Rule):
    """
    Combined size and extension check.

    Differs from FileType/FileSize on purpose: the limit is in kilobytes
    and exclusive (a file of exactly ``max_size_kb`` passes), and the type
    compared is the token after ``/`` in the MIME type ("png" for
    "image/png"). Size is checked first. Absent files pass.
    """

    allowed_extensions: Sequence[str]
    max_size_kb: float
    alias: ClassVar[str] = "file"

    def __post_init__(self) -> None:
        if self.max_size_kb < 0:
            raise RuleDefinitionError("max_size_kb must not be negative", rule=self.alias)

    def check(self, field: FieldNode) -> ValidationResult:
        file = field.value
        if not file:
            return VALID

        if size_of(file) / 1024 > self.max_size_kb:
            return ValidationResult.failure(
                FailureCode.FILE_SIZE_EXCEEDED, requiredFileSize=self.max_size_kb
            )

        parts = (mime_type_of(file) or "").split("/")
        extension = parts[1] if len(parts) > 1 else None
        if extension not in self.allowed_extensions:
            return ValidationResult.failure(FailureCode.INVALID_FILE_TYPE)

        return VALID


def file_type(allowed_types: List[Optional[str]]) -> FileType:
    """Create FileType rule."""
    return FileType(allowed_types=list(allowed_types))


def file_size(max_bytes: int) -> FileSize:
    """Create FileSize rule."""
    return FileSize(max_bytes=max_bytes)


def file_validator(allowed_extensions: List[str], max_size_kb: float) -> FileValidator:
    """Create FileValidator rule."""
    return FileValidator(
        allowed_extensions=list(allowed_extensions), max_size_kb=max_size_kb
    )
