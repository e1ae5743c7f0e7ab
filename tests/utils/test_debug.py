"""Tests for logging setup (audioshelf.utils.debug)."""

import logging

import pytest

from audioshelf.utils import debug


@pytest.fixture(autouse=True)
def fresh_logger(monkeypatch: pytest.MonkeyPatch):
    """Reset the cached package logger around each test."""
    package_logger = logging.getLogger("audioshelf")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    monkeypatch.setattr(debug, "_logger", None)
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)


def test_debug_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    assert not debug.debug_enabled()
    monkeypatch.setenv("AUDIOSHELF_DEBUG", "1")
    assert debug.debug_enabled()


def test_setup_logger_defaults_to_warning() -> None:
    logger = debug.setup_logger()
    assert logger.name == "audioshelf"
    assert logger.level == logging.WARNING
    assert logger.handlers


def test_setup_logger_debug_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUDIOSHELF_DEBUG", "1")
    assert debug.setup_logger().level == logging.DEBUG


def test_setup_logger_is_cached_and_updates_level() -> None:
    first = debug.setup_logger()
    second = debug.setup_logger(logging.INFO)
    assert first is second
    assert second.level == logging.INFO
