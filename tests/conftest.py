"""
Shared fixtures for formguard tests.
"""

import io
import os
from datetime import datetime, timezone

import pytest
from PIL import Image

from formguard.core.config import reset_settings

# Fixed "now" for age arithmetic
NOW = datetime(2026, 10, 17, tzinfo=timezone.utc)


class StubNode:
    """Minimal field tree node: value, touched, errors, parent and get()."""

    def __init__(self, value=None, children=None, touched=False, errors=None):
        self.value = value
        self.touched = touched
        self.errors = errors
        self.parent = None
        self.children = children or {}
        for child in self.children.values():
            child.parent = self

    def get(self, name):
        return self.children.get(name)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from FORMGUARD_* variables and cached settings."""
    for key in list(os.environ):
        if key.startswith("FORMGUARD_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def make_png():
    """Factory for PNG bytes of a given size."""
    def _make(width, height):
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="PNG")
        return buffer.getvalue()
    return _make


@pytest.fixture
def stub_tree():
    """Factory building a one-level stub group from name -> value."""
    def _build(**values):
        return StubNode(children={name: StubNode(value) for name, value in values.items()})
    return _build
