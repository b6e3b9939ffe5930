# topmark:header:start
#
#   project      : DiagMark
#   file         : test_width.py
#   file_relpath : tests/core/test_width.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for display-width helpers and keyed enums."""

from __future__ import annotations

from diagmark.config.types import Toggle
from diagmark.core.width import char_width, text_width
from diagmark.diagnostic.types import Severity
from tests.conftest import parametrize


@parametrize(
    "ch, expected",
    [("a", 1), ("全", 2), ("\u0301", 0), ("\x00", 0), ("\x07", 1)],
)
def test_char_width(ch: str, expected: int) -> None:
    """Wide glyphs take two columns, combining marks none, controls one."""
    assert char_width(ch) == expected


def test_ascii_mode_counts_characters() -> None:
    """Without Unicode every character is one column."""
    assert text_width("a全é") == 4
    assert text_width("a全é", unicode=False) == 3
    assert text_width("全全", unicode=False) == 2


def test_keyed_enum_parsing() -> None:
    """Keys, names and aliases parse case-insensitively."""
    assert Toggle.parse("ON") is Toggle.ON
    assert Toggle.parse("Never") is Toggle.OFF
    assert Toggle.parse("auto") is Toggle.AUTO
    assert Toggle.parse("maybe") is None
    assert Toggle.parse(None) is None
    assert Severity.parse("Warn") is Severity.WARNING


def test_keyed_enum_metadata() -> None:
    """Members expose their key, label and aliases."""
    assert str(Severity.WARNING) == "warning"
    assert Severity.WARNING.key == "warning"
    assert Severity.WARNING.label == "Warning"
    assert "warn" in Severity.WARNING.aliases
    assert Severity.keys() == ["error", "warning", "advice"]
