# topmark:header:start
#
#   project      : DiagMark
#   file         : test_index.py
#   file_relpath : tests/source/test_index.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `diagmark.source.index.LineIndex`.

Covers line splitting (``\\n``, ``\\r\\n``, trailing terminators, empty buffers),
offset → (line, column) conversion, UTF-8 snapping and the reverse conversion
used by line/column labels.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from diagmark.source.index import LineIndex
from tests.conftest import SAMPLE_SOURCE, parametrize


def test_lines_split_on_lf_and_crlf() -> None:
    """Both terminators end a line; the terminator is excluded from the content."""
    idx: LineIndex = LineIndex.build("a\nbc\r\nd")

    assert idx.starts == (0, 2, 6)
    assert idx.ends == (1, 4, 7)
    assert [idx.line_text(i) for i in range(len(idx))] == ["a", "bc", "d"]


def test_trailing_newline_does_not_open_an_empty_line() -> None:
    """``"a\\n"`` is one line, not two."""
    assert len(LineIndex.build("a\n")) == 1


def test_empty_buffer_has_one_empty_line() -> None:
    """An empty source still has a line to point at."""
    idx: LineIndex = LineIndex.build("")

    assert len(idx) == 1
    assert idx.line_text(0) == ""
    assert idx.location(0) == (1, 1)


def test_lone_carriage_return_is_text() -> None:
    """Only ``\\n`` and ``\\r\\n`` terminate lines."""
    assert len(LineIndex.build("a\rb")) == 1


def test_sample_location() -> None:
    """Offset 9 of the sample source is line 2, column 3."""
    assert LineIndex.build(SAMPLE_SOURCE).location(9) == (2, 3)


@parametrize(
    "offset, expected",
    [
        (-4, (1, 1)),
        (6, (1, 7)),  # on the terminator: end-of-line insertion column
        (7, (2, 1)),
        (10_000, (3, 9)),
    ],
)
def test_location_clamps_and_handles_terminators(offset: int, expected: tuple[int, int]) -> None:
    """Out-of-range offsets clamp; terminator offsets belong to the line they end."""
    assert LineIndex.build(SAMPLE_SOURCE).location(offset) == expected


def test_columns_count_characters_not_bytes() -> None:
    """A two-byte character advances the column by one."""
    idx: LineIndex = LineIndex.build("aé b")

    assert idx.column_of(3) == 3  # after "aé"


def test_undecodable_bytes_count_as_one_column() -> None:
    """Invalid UTF-8 bytes are still addressable, one column each."""
    idx: LineIndex = LineIndex.build(b"a\xffb")

    assert idx.column_of(2) == 3


def test_snapping_inside_a_multibyte_character() -> None:
    """Offsets inside a UTF-8 sequence snap to its boundaries."""
    idx: LineIndex = LineIndex.build("全x")

    assert idx.snap_back(1) == 0
    assert idx.snap_back(2) == 0
    assert idx.snap_forward(1) == 3
    assert idx.snap_forward(3) == 3


@parametrize(
    "line, column, expected",
    [
        (2, 3, 9),
        (1, 1, 0),
        (1, 100, 6),  # past the end of line 1
        (99, 1, len(SAMPLE_SOURCE)),  # past the last line
        (0, 0, 0),
    ],
)
def test_offset_of(line: int, column: int, expected: int) -> None:
    """1-based line/column pairs convert back to byte offsets, clamping as needed."""
    assert LineIndex.build(SAMPLE_SOURCE).offset_of(line, column) == expected


@given(
    text=st.text(st.sampled_from(list("ab xy\n")), max_size=60),
    data=st.data(),
)
def test_location_matches_manual_newline_counting(text: str, data: st.DataObject) -> None:
    """For in-range offsets, (line, column) equals what counting newlines gives."""
    offset: int = data.draw(st.integers(min_value=0, max_value=len(text)))
    before: str = text[:offset]
    line: int = before.count("\n") + 1
    column: int = len(before) - (before.rfind("\n") + 1) + 1

    idx: LineIndex = LineIndex.build(text)
    got_line, got_column = idx.location(offset)

    if text.endswith("\n") and offset == len(text):
        # The end of a buffer with a trailing newline stays on the last line.
        assert got_line == max(line - 1, 1)
    else:
        assert (got_line, got_column) == (line, column)
