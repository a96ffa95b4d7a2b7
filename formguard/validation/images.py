"""
Formguard Image Rules
=====================

Asynchronous image dimension check.

The file bytes are wrapped in a transient in-memory buffer, decoded once
(Pillow, in a worker thread by default), measured, and the buffer is
closed before the result is produced. Every failure path, including
unreadable files and decoder errors, resolves to ``invalidImage``; the
coroutine itself does not raise for bad input.
"""

from __future__ import annotations

import asyncio
import io
from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar, Optional, Tuple

from PIL import Image

from formguard.core.exceptions import RuleDefinitionError
from formguard.core.field import FieldNode
from formguard.core.result import VALID, FailureCode, ValidationResult
from formguard.utils.logger import get_logger
from formguard.validation.files import read_bytes
from formguard.validation.rules import AsyncRule

logger = get_logger("formguard.validation")

Dimensions = Tuple[int, int]


class ImageDecoder(ABC):
    """Turns an image byte stream into its natural (width, height)."""

    @abstractmethod
    async def decode(self, buffer: BinaryIO) -> Dimensions:
        """
        Decode the image in ``buffer``.

        Raises:
            Exception: Any error means the bytes are not a usable image
        """
        ...


class PillowDecoder(ImageDecoder):
    """
    Decode with Pillow off the event loop.

    Args:
        executor: Executor for the blocking decode (default thread pool
            when None)
    """

    def __init__(self, executor: Optional[Executor] = None) -> None:
        self.executor = executor

    async def decode(self, buffer: BinaryIO) -> Dimensions:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self._decode, buffer)

    @staticmethod
    def _decode(buffer: BinaryIO) -> Dimensions:
        with Image.open(buffer) as image:
            # Force a full decode so truncated data is rejected
            image.load()
            return image.size


@dataclass
class ImageDimensions(AsyncRule):
    """Image width and height must not exceed the given maxima (inclusive)."""

    max_width: int
    max_height: int
    decoder: ImageDecoder = field(default_factory=PillowDecoder, repr=False, compare=False)
    alias: ClassVar[str] = "image_dimensions"

    def __post_init__(self) -> None:
        if self.max_width < 0 or self.max_height < 0:
            raise RuleDefinitionError(
                "image dimension limits must not be negative", rule=self.alias
            )

    async def check(self, field: FieldNode) -> ValidationResult:
        buffer: Optional[io.BytesIO] = None
        try:
            content = read_bytes(field.value) if field.value else None
            if content is None:
                logger.debug("No image content to decode", rule=self.alias)
                return ValidationResult.failure(FailureCode.INVALID_IMAGE)

            buffer = io.BytesIO(content)
            width, height = await self.decoder.decode(buffer)
        except Exception as exc:
            logger.debug(
                "Image decode failed",
                rule=self.alias,
                error=f"{type(exc).__name__}: {exc}",
            )
            return ValidationResult.failure(FailureCode.INVALID_IMAGE)
        finally:
            if buffer is not None:
                buffer.close()

        if width <= self.max_width and height <= self.max_height:
            return VALID

        return ValidationResult.failure(
            FailureCode.IMAGE_DIMENSIONS_EXCEEDED,
            requiredWidth=self.max_width,
            requiredHeight=self.max_height,
        )


def image_dimensions(
    max_width: int,
    max_height: int,
    decoder: Optional[ImageDecoder] = None,
) -> ImageDimensions:
    """Create ImageDimensions rule (Pillow decoder unless one is given)."""
    if decoder is None:
        return ImageDimensions(max_width=max_width, max_height=max_height)
    return ImageDimensions(max_width=max_width, max_height=max_height, decoder=decoder)
