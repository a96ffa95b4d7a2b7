"""
Formguard Environment Access
============================

Typed access to prefixed environment variables, with optional .env
loading.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar, Union

T = TypeVar("T")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off", ""})

# ${VAR} or $VAR
_VARIABLE = re.compile(r"\$\{([^}]+)\}|\$(\w+)")


class Env:
    """
    Environment variable reader.

    Every key is looked up with ``prefix`` prepended. Values from a loaded
    .env file are exported to ``os.environ`` unless a variable is already
    set (or ``override`` is true).

    Example:
        env = Env(prefix="FORMGUARD_").load()

        min_length = env.int("PASSWORD_MIN_LENGTH", default=8)
        level = env.str("LOG_LEVEL", default="WARNING")
    """

    def __init__(
        self,
        env_file: Optional[Union[str, Path]] = None,
        prefix: str = "",
        override: bool = False,
    ):
        self.env_file = Path(env_file) if env_file else None
        self.prefix = prefix
        self.override = override
        self._loaded: Dict[str, str] = {}

    def load(self, export: bool = True) -> "Env":
        """
        Read the .env file (default: ``./.env``) if it exists.

        Args:
            export: Also write the values into ``os.environ``; when false
                they are only visible through this Env
        """
        path = self.env_file or Path.cwd() / ".env"
        if path.is_file():
            for key, value in self._parse(path.read_text()):
                self._loaded[key] = value
                if export and (self.override or key not in os.environ):
                    os.environ[key] = value
        return self

    def _parse(self, text: str):
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):]

            key, sep, value = line.partition("=")
            if not sep:
                continue

            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                value = value[1:-1]

            yield key.strip(), self._expand(value)

    def _expand(self, value: str) -> str:
        def replace(match: "re.Match[str]") -> str:
            name = match.group(1) or match.group(2)
            return os.environ.get(name, self._loaded.get(name, ""))

        return _VARIABLE.sub(replace, value)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(
        self,
        key: str,
        default: Optional[str] = None,
        required: bool = False,
    ) -> Optional[str]:
        """
        Raw string value.

        Raises:
            KeyError: If required and not set
        """
        full_key = self._key(key)
        value = os.environ.get(full_key, self._loaded.get(full_key))

        if value is None:
            if required:
                raise KeyError(f"Required environment variable '{full_key}' is not set")
            return default
        return value

    def _typed(
        self,
        key: str,
        convert: Callable[[str], T],
        default: Optional[T],
        required: bool,
    ) -> Optional[T]:
        value = self.get(key, required=required)
        if value is None:
            return default
        return convert(value)

    def str(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        return self.get(key, default, required)

    def int(self, key: str, default: Optional[int] = None, required: bool = False) -> Optional[int]:
        """
        Integer value.

        Raises:
            ValueError: If the variable is set but not an integer
        """
        def convert(value):
            try:
                return int(value)
            except ValueError:
                raise ValueError(
                    f"Environment variable '{self._key(key)}' is not a valid integer"
                ) from None

        return self._typed(key, convert, default, required)

    def bool(self, key: str, default: Optional[bool] = None, required: bool = False) -> Optional[bool]:
        """
        Boolean value (true/1/yes/on, false/0/no/off).

        Raises:
            ValueError: For any other text
        """
        def convert(value):
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(f"Environment variable '{self._key(key)}' is not a valid boolean")

        return self._typed(key, convert, default, required)

    def list(
        self,
        key: str,
        default: Optional[List[str]] = None,
        separator: str = ",",
        required: bool = False,
    ) -> Optional[List[str]]:
        """Separated list value; blank items are dropped."""
        def convert(value):
            return [item.strip() for item in value.split(separator) if item.strip()]

        return self._typed(key, convert, default, required)

    def __contains__(self, key: str) -> bool:
        full_key = self._key(key)
        return full_key in os.environ or full_key in self._loaded
