# topmark:header:start
#
#   project      : DiagMark
#   file         : test_wrap.py
#   file_relpath : tests/rendering/test_wrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the display-width-aware line wrapper."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from diagmark.core.width import text_width
from diagmark.rendering.wrap import wrap


def test_short_text_is_one_line() -> None:
    """Text that fits stays on one line, with the initial indent."""
    assert wrap("hello world", 40, initial_indent="> ") == ["> hello world"]


def test_breaks_at_whitespace_with_subsequent_indent() -> None:
    """Continuation lines use the subsequent indent."""
    assert wrap("aaa bbb ccc", 8, initial_indent="* ", subsequent_indent="  ") == [
        "* aaa",
        "  bbb",
        "  ccc",
    ]


def test_long_tokens_are_never_split() -> None:
    """A token longer than the width overflows on its own line."""
    assert wrap("x https://example.com/a/very/long/path y", 10) == [
        "x",
        "https://example.com/a/very/long/path",
        "y",
    ]


def test_explicit_newlines_are_hard_breaks() -> None:
    """``\\n`` forces a break and an empty paragraph keeps its line."""
    assert wrap("one\n\ntwo", 40, initial_indent="- ", subsequent_indent="  ") == [
        "- one",
        "  ",
        "  two",
    ]


def test_wide_characters_count_double() -> None:
    """Two wide glyphs fill four columns."""
    assert wrap("全全 全全", 5) == ["全全", "全全"]
    assert wrap("全全 全全", 5, unicode=False) == ["全全 全全"]


def test_empty_text_yields_the_indent() -> None:
    """Empty input still produces one (indent-only) line."""
    assert wrap("", 10, initial_indent="  × ") == ["  × "]


@given(
    words=st.lists(st.text("abcdefg", min_size=1, max_size=8), min_size=1, max_size=20),
    width=st.integers(min_value=10, max_value=60),
)
def test_wrapped_lines_fit_and_keep_every_word(words: list[str], width: int) -> None:
    """Lines fit the width (tokens are short enough) and no word is lost."""
    lines: list[str] = wrap(" ".join(words), width)

    assert all(text_width(line) <= width for line in lines)
    assert " ".join(lines).split() == words
