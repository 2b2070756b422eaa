# topmark:header:start
#
#   project      : Loreley
#   file         : test_main.py
#   file_relpath : tests/cli/test_main.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""CLI tests for the command group: help, verbosity flags and exit codes."""

from __future__ import annotations

import logging

import click
import pytest

from loreley.cli.errors import LoreleyConfigError, LoreleyDataError, LoreleyUsageError
from loreley.cli.options import resolve_verbosity
from loreley.cli_shared.exit_codes import ExitCode
from loreley.config.logging import LOG_LEVEL_ENV, TRACE_LEVEL
from tests.cli.conftest import (
    assert_CLICK_USAGE_ERROR,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
)
from tests.conftest import parametrize

pytestmark = pytest.mark.cli


def test_no_subcommand_prints_hint_and_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert result.output.startswith("Hint: use 'loreley render TEMPLATE'")
    for name in ("render", "strip", "directives", "config", "version"):
        assert name in result.output


@parametrize("flag", ["-h", "--help"])
def test_help_flags(flag: str) -> None:
    result = run_cli([flag])
    assert_SUCCESS(result)
    assert "Usage: loreley" in result.output


def test_subcommand_help() -> None:
    result = run_cli(["render", "-h"])
    assert_SUCCESS(result)
    assert "--data-json" in result.output
    assert "--left-delim" in result.output


def test_verbose_and_quiet_are_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])
    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output


def test_unknown_color_mode() -> None:
    assert_CLICK_USAGE_ERROR(run_cli(["--color", "rainbow", "version"]))


def test_unknown_command() -> None:
    assert_CLICK_USAGE_ERROR(run_cli(["paint"]))


def test_env_log_level_wins_over_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    result = run_cli(["-vvv", "version"])
    assert_SUCCESS(result)
    assert logging.getLogger("loreley").level == logging.ERROR


@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (5, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    assert resolve_verbosity(verbose, quiet) == level


def test_exit_code_values() -> None:
    assert [int(c) for c in ExitCode] == [0, 1, 64, 65, 78, 255]


@parametrize(
    "error_cls, code",
    [
        (LoreleyUsageError, ExitCode.USAGE_ERROR),
        (LoreleyDataError, ExitCode.DATA_ERROR),
        (LoreleyConfigError, ExitCode.CONFIG_ERROR),
    ],
)
def test_cli_errors_carry_exit_codes(error_cls: type[click.ClickException], code: int) -> None:
    error = error_cls("boom")
    assert error.exit_code == code
    assert error.format_message() == "boom"
