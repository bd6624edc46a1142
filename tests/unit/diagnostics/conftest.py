"""Pytest configuration and fixtures for error context tests."""

import pytest

from errctx.config import CaptureConfig
from errctx.diagnostics import error_context


@pytest.fixture(autouse=True)
def builtin_capture_defaults(monkeypatch):
    """Built-in capture defaults, independent of any .errctx.json on disk."""
    monkeypatch.setattr(error_context, "_configured_capture", CaptureConfig())


@pytest.fixture
def unconfigured(monkeypatch):
    """No capture defaults set yet, so the next wrap loads them."""
    monkeypatch.setattr(error_context, "_configured_capture", None)
