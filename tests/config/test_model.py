# topmark:header:start
#
#   project      : Loreley
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tests for `loreley.config.model.LoreleyConfig`."""

from __future__ import annotations

from pathlib import Path

import pytest

from loreley.cli_shared.color import ColorMode
from loreley.config.model import LoreleyConfig

pytestmark = pytest.mark.config


def test_defaults() -> None:
    config = LoreleyConfig()
    assert (config.left_delim, config.right_delim) == ("{", "}")
    assert config.missing_key == "default"
    assert config.reset is True
    assert config.color is None
    assert config.config_file is None


def test_with_overrides_skips_none() -> None:
    base = LoreleyConfig(left_delim="<<", right_delim=">>")
    merged = base.with_overrides(left_delim=None, right_delim="]]", reset=False)
    assert merged.left_delim == "<<"
    assert merged.right_delim == "]]"
    assert merged.reset is False
    assert base.right_delim == ">>"


def test_with_overrides_without_changes_is_equal() -> None:
    base = LoreleyConfig(missing_key="error")
    assert base.with_overrides(missing_key=None) == base


def test_with_overrides_rejects_unknown_fields() -> None:
    with pytest.raises(TypeError, match="unknown configuration field\\(s\\): bogus"):
        LoreleyConfig().with_overrides(bogus=1)


def test_config_is_frozen() -> None:
    with pytest.raises(AttributeError):
        LoreleyConfig().reset = False  # type: ignore[misc]


def test_compiler_uses_configured_delimiters() -> None:
    config = LoreleyConfig(left_delim="<%", right_delim="%>", missing_key="error")
    compiler = config.compiler(no_colors=True)
    assert compiler.reset_action == "<%reset%>"
    assert compiler.missing_key == "error"
    assert compiler.no_colors is True
    assert compiler.compile("<%bg 1%>x").execute_to_string() == "x"


def test_compiler_rejects_invalid_delimiters() -> None:
    with pytest.raises(ValueError, match="left_delim must not be empty"):
        LoreleyConfig(left_delim="").compiler()


def test_to_toml_dict_leaves_out_unset_color_and_source() -> None:
    config = LoreleyConfig(config_file=Path("loreley.toml"))
    assert config.to_toml_dict() == {
        "left_delim": "{",
        "right_delim": "}",
        "missing_key": "default",
        "reset": True,
    }


def test_to_toml_dict_includes_color_value() -> None:
    assert LoreleyConfig(color=ColorMode.NEVER).to_toml_dict()["color"] == "never"
