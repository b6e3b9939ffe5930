# topmark:header:start
#
#   project      : DiagMark
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `RenderConfig` and its mutable builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from diagmark.config.io.loaders import parse_toml_text
from diagmark.config.io.render import to_toml
from diagmark.config.model import MIN_WIDTH, MutableRenderConfig, RenderConfig, sanitize_config
from diagmark.config.types import Palette, RenderMode, Toggle
from diagmark.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults() -> None:
    """Defaults: 80 columns, graphical output, capabilities left to ``auto``."""
    config = RenderConfig()

    assert config.width == 80
    assert config.mode is RenderMode.GRAPHICAL
    assert config.color is Toggle.AUTO
    assert not config.color_enabled
    assert config.unicode_enabled
    assert not config.links_enabled


def test_palette_none_disables_color() -> None:
    """Color needs both the toggle and a real palette."""
    assert RenderConfig(color=Toggle.ON).color_enabled
    assert not RenderConfig(color=Toggle.ON, palette=Palette.NONE).color_enabled


def test_links_auto_follows_color() -> None:
    """``links=auto`` is on exactly when color is on; explicit values win."""
    assert RenderConfig(color=Toggle.ON).links_enabled
    assert not RenderConfig(color=Toggle.ON, links=Toggle.OFF).links_enabled
    assert RenderConfig(color=Toggle.OFF, links=Toggle.ON).links_enabled


def test_sanitize_clamps_out_of_range_values() -> None:
    """Numeric options are clamped into range."""
    config: RenderConfig = sanitize_config(
        RenderConfig(width=3, tab_width=0, context_lines=-1, max_related_depth=-5)
    )

    assert config.width == MIN_WIDTH
    assert config.tab_width >= 1
    assert config.context_lines == 0
    assert config.max_related_depth == 0


def test_sanitize_keeps_valid_config_identity() -> None:
    """A config that needs no clamping is returned unchanged."""
    config = RenderConfig(width=100)

    assert sanitize_config(config) is config


def test_thaw_freeze_round_trip() -> None:
    """Thawing and freezing preserves every field."""
    config = RenderConfig(width=120, unicode=Toggle.OFF, palette=Palette.RGB, footer="bye")

    assert config.thaw().freeze() == config


def test_merge_with_prefers_set_values() -> None:
    """Set fields of the later layer override; unset fields fall through."""
    base = MutableRenderConfig(width=90, tab_width=2)
    top = MutableRenderConfig(width=100)
    merged: MutableRenderConfig = base.merge_with(top)

    assert merged.width == 100
    assert merged.tab_width == 2
    assert base.width == 90


def test_from_toml_dict_parses_tokens_and_booleans() -> None:
    """Toggles accept booleans and tokens; enums accept aliases."""
    draft: MutableRenderConfig = MutableRenderConfig.from_toml_dict(
        {"color": True, "unicode": "never", "links": "auto", "mode": "plain", "width": 70}
    )

    assert draft.color is Toggle.ON
    assert draft.unicode is Toggle.OFF
    assert draft.links is Toggle.AUTO
    assert draft.mode is RenderMode.NARRATABLE
    assert draft.width == 70


def test_from_toml_dict_rejects_invalid_values() -> None:
    """Invalid enum tokens and wrong types raise `ConfigError`."""
    with pytest.raises(ConfigError, match="mode"):
        MutableRenderConfig.from_toml_dict({"mode": "fancier"})
    with pytest.raises(ConfigError, match="width"):
        MutableRenderConfig.from_toml_dict({"width": "wide"})


def test_unknown_keys_are_ignored() -> None:
    """Unknown keys do not fail the load."""
    draft: MutableRenderConfig = MutableRenderConfig.from_toml_dict({"colour": "on"})

    assert draft.freeze() == RenderConfig()


def test_toml_round_trip() -> None:
    """A config dumped under ``[tool.diagmark]`` loads back unchanged."""
    config = RenderConfig(width=100, color=Toggle.ON, mode=RenderMode.NARRATABLE, footer="x")
    text: str = to_toml(config.to_toml_dict(), section="tool.diagmark")
    table = parse_toml_text(text)["tool"]["diagmark"]

    assert MutableRenderConfig.from_toml_dict(table).freeze() == config


def test_pyproject_without_table_is_empty(tmp_path: Path) -> None:
    """A ``pyproject.toml`` without DiagMark settings yields the defaults."""
    path: Path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n', encoding="utf-8")

    assert MutableRenderConfig.from_toml_file(path).freeze() == RenderConfig()


def test_from_toml_file_reads_pyproject_table(tmp_path: Path) -> None:
    """Settings are read from ``[tool.diagmark]``; errors name that table."""
    path: Path = tmp_path / "pyproject.toml"
    path.write_text("[tool.diagmark]\nwidth = 95\n", encoding="utf-8")

    assert MutableRenderConfig.from_toml_file(path).freeze().width == 95

    path.write_text('[tool.diagmark]\nwidth = "x"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="tool.diagmark"):
        MutableRenderConfig.from_toml_file(path)
