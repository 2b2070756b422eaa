# topmark:header:start
#
#   project      : Loreley
#   file         : test_logging.py
#   file_relpath : tests/test_logging.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tests for `loreley.config.logging`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from loreley.config.logging import (
    LOG_LEVEL_ENV,
    TRACE_LEVEL,
    ChalkFormatter,
    LoreleyLogger,
    get_logger,
    level_from_name,
    resolve_env_log_level,
    setup_logging,
)
from tests.conftest import parametrize

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def restore_trace_logging() -> Iterator[None]:
    yield
    setup_logging(level=TRACE_LEVEL)


@parametrize(
    "name, level",
    [
        ("TRACE", TRACE_LEVEL),
        ("debug", logging.DEBUG),
        (" Info ", logging.INFO),
        ("warn", logging.WARNING),
        ("fatal", logging.CRITICAL),
        ("15", 15),
        ("loud", None),
    ],
)
def test_level_from_name(name: str, level: int | None) -> None:
    assert level_from_name(name) == level


def test_resolve_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_env_log_level() is None
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_env_log_level() == logging.DEBUG


def test_trace_level_is_named() -> None:
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_get_logger_returns_loreley_logger() -> None:
    assert isinstance(get_logger("loreley.test"), LoreleyLogger)


def test_setup_logging_replaces_handlers() -> None:
    setup_logging(level=logging.INFO)
    setup_logging(level=logging.DEBUG)
    pkg_logger = logging.getLogger("loreley")
    assert pkg_logger.level == logging.DEBUG
    assert len(pkg_logger.handlers) == 1
    assert isinstance(pkg_logger.handlers[0].formatter, ChalkFormatter)
    assert pkg_logger.propagate is False


def test_setup_logging_defaults_to_critical() -> None:
    setup_logging()
    assert logging.getLogger("loreley").level == logging.CRITICAL


def test_trace_messages_are_emitted(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(level=TRACE_LEVEL)
    get_logger("loreley.test").trace("hello %s", "trace")
    assert "hello trace" in capsys.readouterr().err


def test_trace_messages_are_filtered_above_trace(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(level=logging.DEBUG)
    get_logger("loreley.test").trace("hidden")
    assert "hidden" not in capsys.readouterr().err
