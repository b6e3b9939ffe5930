# topmark:header:start
#
#   project      : DiagMark
#   file         : test_resolver.py
#   file_relpath : tests/source/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `diagmark.source.resolver`.

Spans resolve into 1-based character coordinates and 0-based display columns;
malformed spans clamp instead of failing, and unavailable sources are reported
with the `NO_SOURCE` marker.
"""

from __future__ import annotations

from diagmark.diagnostic.model import NamedSource, SourceSpan
from diagmark.source.resolver import (
    NO_SOURCE,
    LineInfo,
    ResolvedSource,
    ResolvedSpan,
    expand_text,
    resolve,
)
from tests.conftest import SAMPLE_SOURCE


def _resolved(text: str | bytes, **kwargs: object) -> ResolvedSource:
    source = ResolvedSource.from_named(NamedSource("t", text), **kwargs)  # type: ignore[arg-type]
    assert isinstance(source, ResolvedSource)
    return source


def test_sample_span_coordinates() -> None:
    """Offset 9, length 4 covers "text" on line 2 (columns 3-6)."""
    span: ResolvedSpan = _resolved(SAMPLE_SOURCE).resolve_span(SourceSpan(9, 4))

    assert (span.start_line, span.end_line) == (2, 2)
    assert (span.start_column, span.end_column) == (3, 6)
    assert (span.start_display, span.end_display) == (2, 6)
    assert not span.multiline
    assert not span.zero_length


def test_resolve_returns_context_lines() -> None:
    """`resolve` pads the span's lines with context lines on both sides."""
    lines = resolve(NamedSource("t", SAMPLE_SOURCE), SourceSpan(9, 4), 1)

    assert isinstance(lines, list)
    assert [info.number for info in lines] == [1, 2, 3]
    assert [info.text for info in lines] == ["source", "  text", "    here"]


def test_resolve_without_text_reports_no_source() -> None:
    """A source whose text is unavailable yields the marker, not an error."""
    assert resolve(NamedSource("gone.rs", None), SourceSpan(0, 1), 1) is NO_SOURCE
    assert ResolvedSource.from_named(None) is NO_SOURCE


def test_tabs_expand_to_tab_stops() -> None:
    """Display columns follow the configured tab width."""
    source: ResolvedSource = _resolved("\tx", tab_width=4)
    info: LineInfo = source.line(1)
    span: ResolvedSpan = source.resolve_span(SourceSpan(1, 1))

    assert info.rendered == "    x"
    assert info.text == "\tx"
    assert (span.start_display, span.end_display) == (4, 5)


def test_expand_text_respects_starting_column() -> None:
    """A tab after two columns pads to the next stop only."""
    assert expand_text("ab\tc", tab_width=4) == ("ab  c", 5)


def test_wide_characters_take_two_columns() -> None:
    """A CJK glyph spans two display columns."""
    span: ResolvedSpan = _resolved("a全b").resolve_span(SourceSpan(1, 3))

    assert (span.start_display, span.end_display) == (1, 3)
    assert (span.start_column, span.end_column) == (2, 2)


def test_wide_characters_count_one_column_without_unicode() -> None:
    """With Unicode off, every character is one column."""
    span: ResolvedSpan = _resolved("a全b", unicode=False).resolve_span(SourceSpan(1, 3))

    assert (span.start_display, span.end_display) == (1, 2)


def test_span_inside_multibyte_character_snaps_outward() -> None:
    """A span starting mid-character covers the whole character."""
    span: ResolvedSpan = _resolved("全").resolve_span(SourceSpan(1, 1))

    assert (span.start, span.end) == (0, 3)


def test_out_of_range_spans_clamp() -> None:
    """Negative and past-the-end spans never fault."""
    source: ResolvedSource = _resolved(SAMPLE_SOURCE)

    before: ResolvedSpan = source.resolve_span(SourceSpan(-5, 2))
    after: ResolvedSpan = source.resolve_span(SourceSpan(100, 5))

    assert (before.start, before.end, before.start_line) == (0, 0, 1)
    assert before.zero_length
    assert (after.start, after.end, after.start_line) == (22, 22, 3)


def test_negative_length_is_zero_length() -> None:
    """A negative length degrades to an insertion point."""
    span: ResolvedSpan = _resolved(SAMPLE_SOURCE).resolve_span(SourceSpan(3, -2))

    assert span.zero_length
    assert span.start == 3


def test_multiline_span() -> None:
    """A span crossing a newline is multiline and records both ends."""
    span: ResolvedSpan = _resolved("ab\ncd").resolve_span(SourceSpan(1, 3))

    assert span.multiline
    assert (span.start_line, span.start_column) == (1, 2)
    assert (span.end_line, span.end_column) == (2, 1)


def test_span_including_terminator_stays_on_its_line() -> None:
    """Covering the newline does not pull the span onto the next line."""
    span: ResolvedSpan = _resolved("abc\ndef").resolve_span(SourceSpan(0, 4))

    assert not span.multiline
    assert span.end_display == 4


def test_both_crlf_bytes_share_the_end_of_line_column() -> None:
    """Insertion points on ``\\r`` and on ``\\n`` of a CRLF line land in one column."""
    source: ResolvedSource = _resolved("ab\r\ncd")

    on_cr: ResolvedSpan = source.resolve_span(SourceSpan(2, 0))
    on_lf: ResolvedSpan = source.resolve_span(SourceSpan(3, 0))

    assert source.display_column(2) == source.display_column(3) == 2
    assert (on_cr.start_line, on_cr.start_column, on_cr.start_display) == (1, 3, 2)
    assert (on_lf.start_line, on_lf.start_column, on_lf.start_display) == (1, 3, 2)


def test_control_characters_are_replaced() -> None:
    """Control characters display as U+FFFD (``?`` in ASCII mode)."""
    assert _resolved("a\x07b").line(1).rendered == "a�b"
    assert _resolved("a\x07b", unicode=False).line(1).rendered == "a?b"


def test_undecodable_bytes_are_replaced() -> None:
    """Invalid UTF-8 is shown with a replacement glyph, one column wide."""
    info: LineInfo = _resolved(b"a\xffb").line(1)

    assert info.rendered == "a�b"
    assert info.width == 3
