# topmark:header:start
#
#   project      : DiagMark
#   file         : resolver.py
#   file_relpath : src/diagmark/source/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source resolver: byte-offset spans to lines, columns and display text.

`ResolvedSource` wraps a `LineIndex` together with the display settings of one
render call (tab width, unicode) and answers three kinds of questions:

- which lines a span touches, in user-facing 1-based character coordinates
  (`ResolvedSpan.start_column` etc.);
- where a span sits in *display columns* of the tab-expanded line
  (`ResolvedSpan.start_display` etc.), which is what underlines align to;
- what each line looks like on screen (`LineInfo.rendered`).

Spans never fault: offsets are clamped into the buffer, offsets inside a multi-byte
UTF-8 sequence snap outward to cover the whole character, and a span whose end
lies beyond its line's text (e.g. one that includes the line terminator) is
clamped to one column past the end of the text.

Display sanitation: control characters other than tab, and undecodable bytes, are
shown as U+FFFD (``?`` when unicode is off), one column wide.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from diagmark.config.logging import get_logger
from diagmark.core.width import char_width
from diagmark.source.index import LineIndex

if TYPE_CHECKING:
    from diagmark.config.logging import DiagmarkLogger
    from diagmark.diagnostic.model import NamedSource, SourceSpan

logger: DiagmarkLogger = get_logger(__name__)

REPLACEMENT_CHAR: Final[str] = "\ufffd"
ASCII_REPLACEMENT_CHAR: Final[str] = "?"


class Unavailable(Enum):
    """Marker returned when a source has no text to show."""

    NO_SOURCE = "no-source"


NO_SOURCE: Final[Unavailable] = Unavailable.NO_SOURCE


@dataclass(frozen=True, slots=True)
class LineInfo:
    """One resolved source line.

    Attributes:
        number (int): 1-based line number.
        start (int): Byte offset of the first byte of the line.
        end (int): Byte offset one past the last content byte (terminator excluded).
        text (str): Display-safe text, tabs kept as-is.
        rendered (str): Display-safe text with tabs expanded to spaces.
        width (int): Display width of ``rendered``.
    """

    number: int
    start: int
    end: int
    text: str
    rendered: str
    width: int


@dataclass(frozen=True, slots=True)
class ResolvedSpan:
    """A span clamped and located within its source.

    Attributes:
        start (int): Clamped, snapped start byte offset.
        end (int): Clamped, snapped exclusive end byte offset.
        start_line (int): 1-based line of the first covered character.
        end_line (int): 1-based line of the last covered character.
        start_column (int): 1-based character column of ``start``.
        end_column (int): 1-based character column of the last covered character
            (equals ``start_column`` for zero-length spans).
        start_display (int): 0-based display column of ``start`` on ``start_line``.
        end_display (int): 0-based exclusive display column of the end on ``end_line``.
    """

    start: int
    end: int
    start_line: int
    end_line: int
    start_column: int
    end_column: int
    start_display: int
    end_display: int

    @property
    def zero_length(self) -> bool:
        """Whether the span covers no bytes (an insertion point)."""
        return self.end == self.start

    @property
    def multiline(self) -> bool:
        """Whether the span crosses a line boundary."""
        return self.end_line != self.start_line


def display_char(ch: str, *, unicode: bool = True) -> str:
    """Return a printable stand-in for ``ch`` (tabs are left to the caller)."""
    if "\udc80" <= ch <= "\udcff" or (ch != "\t" and unicodedata.category(ch) == "Cc"):
        return REPLACEMENT_CHAR if unicode else ASCII_REPLACEMENT_CHAR
    return ch


def expand_text(
    text: str,
    *,
    tab_width: int,
    unicode: bool = True,
    column: int = 0,
) -> tuple[str, int]:
    """Sanitize ``text`` and expand its tabs.

    Args:
        text (str): Decoded line text (may contain lone surrogates).
        tab_width (int): Tab stop distance.
        unicode (bool): Whether wcwidth-based widths and U+FFFD are used.
        column (int): Display column at which ``text`` starts (for tab stops).

    Returns:
        tuple[str, int]: The rendered text and the display column after it.
    """
    parts: list[str] = []
    for ch in text:
        if ch == "\t":
            pad: int = tab_width - (column % tab_width)
            parts.append(" " * pad)
            column += pad
            continue
        shown: str = display_char(ch, unicode=unicode)
        parts.append(shown)
        column += char_width(shown, unicode=unicode)
    return "".join(parts), column


class ResolvedSource:
    """A source prepared for one render call.

    Args:
        name (str | None): Display name of the source.
        text (str | bytes): Source content.
        tab_width (int): Tab stop distance for rendered lines.
        unicode (bool): Whether display widths follow wcwidth.
    """

    def __init__(
        self,
        name: str | None,
        text: str | bytes,
        *,
        tab_width: int = 4,
        unicode: bool = True,
    ) -> None:
        self.name = name
        self.index = LineIndex.build(text)
        self.tab_width = tab_width
        self.unicode = unicode
        self._lines: dict[int, LineInfo] = {}
        logger.trace(
            "Indexed source %r: %d byte(s), %d line(s)", name, self.index.size, len(self.index)
        )

    @classmethod
    def from_named(
        cls,
        source: NamedSource | str | bytes | None,
        *,
        tab_width: int = 4,
        unicode: bool = True,
    ) -> ResolvedSource | Unavailable:
        """Prepare ``source``, or return `NO_SOURCE` when its text is unavailable."""
        if isinstance(source, (str, bytes)):
            return cls(None, source, tab_width=tab_width, unicode=unicode)
        if source is None or source.text is None:
            return NO_SOURCE
        return cls(source.name, source.text, tab_width=tab_width, unicode=unicode)

    @property
    def line_count(self) -> int:
        """Number of lines (at least one)."""
        return len(self.index)

    def line(self, number: int) -> LineInfo:
        """Return the resolved line with 1-based ``number``."""
        info: LineInfo | None = self._lines.get(number)
        if info is None:
            i: int = number - 1
            text: str = self.index.line_text(i)
            rendered, width = expand_text(text, tab_width=self.tab_width, unicode=self.unicode)
            shown: str = "".join(
                ch if ch == "\t" else display_char(ch, unicode=self.unicode) for ch in text
            )
            info = LineInfo(
                number=number,
                start=self.index.starts[i],
                end=self.index.ends[i],
                text=shown,
                rendered=rendered,
                width=width,
            )
            self._lines[number] = info
        return info

    def display_column(self, offset: int) -> int:
        """Return the 0-based display column of ``offset`` on its line.

        Offsets on the line terminator (either byte of ``\\r\\n``) report the column
        just past the last character, matching `LineIndex.column_of`.
        """
        i: int = self.index.line_of(offset)
        info: LineInfo = self.line(i + 1)
        if offset >= info.end:
            return info.width
        prefix: str = self.index.data[info.start : offset].decode("utf-8", errors="surrogateescape")
        return expand_text(prefix, tab_width=self.tab_width, unicode=self.unicode)[1]

    def resolve_span(self, span: SourceSpan) -> ResolvedSpan:
        """Clamp ``span`` into this source and locate it."""
        idx: LineIndex = self.index
        start: int = idx.snap_back(span.offset)
        end: int = max(idx.snap_forward(span.offset + max(span.length, 0)), start)
        if (start, end) != (span.offset, span.offset + span.length):
            logger.trace(
                "Clamped span (%d, %d) to [%d, %d) in %r",
                span.offset,
                span.length,
                start,
                end,
                self.name,
            )

        start_line, start_column = idx.location(start)
        start_display: int = self.display_column(start)
        if end == start:
            return ResolvedSpan(
                start=start,
                end=end,
                start_line=start_line,
                end_line=start_line,
                start_column=start_column,
                end_column=start_column,
                start_display=start_display,
                end_display=start_display,
            )

        last: int = idx.snap_back(end - 1)
        end_line, end_column = idx.location(last)
        last_line: LineInfo = self.line(end_line)
        if end > last_line.end:
            end_display: int = last_line.width + 1
        else:
            end_display = self.display_column(end)
        if end_line == start_line:
            end_display = max(end_display, start_display + 1)
        return ResolvedSpan(
            start=start,
            end=end,
            start_line=start_line,
            end_line=end_line,
            start_column=start_column,
            end_column=end_column,
            start_display=start_display,
            end_display=end_display,
        )


def resolve(
    source: NamedSource | str | bytes | None,
    span: SourceSpan,
    context_lines: int,
    *,
    tab_width: int = 4,
    unicode: bool = True,
) -> list[LineInfo] | Unavailable:
    """Return the lines covering ``span`` plus ``context_lines`` of padding.

    Args:
        source (NamedSource | str | bytes | None): The source the span points into.
        span (SourceSpan): The span to resolve (clamped as needed).
        context_lines (int): Lines of padding above and below the span.
        tab_width (int): Tab stop distance for `LineInfo.rendered`.
        unicode (bool): Whether display widths follow wcwidth.

    Returns:
        list[LineInfo] | Unavailable: The ordered lines, or `NO_SOURCE` when the
        source text is unavailable.
    """
    resolved: ResolvedSource | Unavailable = ResolvedSource.from_named(
        source, tab_width=tab_width, unicode=unicode
    )
    if isinstance(resolved, Unavailable):
        return NO_SOURCE
    rs: ResolvedSpan = resolved.resolve_span(span)
    first: int = max(rs.start_line - context_lines, 1)
    last: int = min(rs.end_line + context_lines, resolved.line_count)
    return [resolved.line(n) for n in range(first, last + 1)]
