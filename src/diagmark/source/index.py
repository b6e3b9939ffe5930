# topmark:header:start
#
#   project      : DiagMark
#   file         : index.py
#   file_relpath : src/diagmark/source/index.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-start offset table for a source buffer.

A `LineIndex` is built once per source per render call and answers
offset → (line, column) questions by bisection over the line starts.

Conventions:
    - Offsets are UTF-8 byte offsets. A ``str`` source is encoded first (lone
      surrogates are replaced), a ``bytes`` source is used as-is.
    - ``\\n`` and ``\\r\\n`` terminate lines; a lone ``\\r`` is ordinary text.
    - A trailing terminator does not open a phantom empty line, but an empty
      buffer still has one (empty) line.
    - Line indexes are 0-based internally; user-facing lines and columns are
      1-based, and columns count decoded characters (an undecodable byte counts
      as one character).
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Final

_NEWLINE: Final[re.Pattern[bytes]] = re.compile(rb"\r?\n")

# Longest UTF-8 sequence is 4 bytes: at most 3 continuation bytes to skip.
_MAX_CONTINUATION: Final[int] = 3


def to_bytes(text: str | bytes) -> bytes:
    """Return the UTF-8 bytes that offsets into ``text`` refer to."""
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8", errors="replace")


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


@dataclass(frozen=True, slots=True)
class LineIndex:
    """Line table over a byte buffer.

    Attributes:
        data (bytes): The source bytes.
        starts (tuple[int, ...]): Byte offset of the first byte of every line.
        ends (tuple[int, ...]): Byte offset one past the last content byte of every
            line (the terminator is excluded).
    """

    data: bytes
    starts: tuple[int, ...]
    ends: tuple[int, ...]

    @classmethod
    def build(cls, text: str | bytes) -> LineIndex:
        """Scan ``text`` once and record where every line starts and ends."""
        data: bytes = to_bytes(text)
        starts: list[int] = [0]
        ends: list[int] = []
        for m in _NEWLINE.finditer(data):
            ends.append(m.start())
            starts.append(m.end())
        ends.append(len(data))
        if len(starts) > 1 and starts[-1] == len(data):
            # Trailing terminator: no phantom empty last line.
            starts.pop()
            ends.pop()
        return cls(data=data, starts=tuple(starts), ends=tuple(ends))

    def __len__(self) -> int:
        return len(self.starts)

    @property
    def size(self) -> int:
        """Length of the buffer in bytes."""
        return len(self.data)

    def clamp(self, offset: int) -> int:
        """Clamp ``offset`` into ``[0, size]``."""
        return min(max(offset, 0), len(self.data))

    def snap_back(self, offset: int) -> int:
        """Move a clamped offset back to the start of the character it falls inside."""
        offset = self.clamp(offset)
        steps = 0
        while (
            0 < offset < len(self.data)
            and steps < _MAX_CONTINUATION
            and _is_continuation(self.data[offset])
        ):
            offset -= 1
            steps += 1
        return offset

    def snap_forward(self, offset: int) -> int:
        """Move a clamped offset forward past the character it falls inside."""
        offset = self.clamp(offset)
        steps = 0
        while (
            offset < len(self.data)
            and steps < _MAX_CONTINUATION
            and _is_continuation(self.data[offset])
        ):
            offset += 1
            steps += 1
        return offset

    def line_of(self, offset: int) -> int:
        """Return the 0-based index of the line containing ``offset``.

        Offsets on a terminator belong to the line it terminates; offsets past the
        end belong to the last line.
        """
        return max(bisect_right(self.starts, self.clamp(offset)) - 1, 0)

    def line_bytes(self, index: int) -> bytes:
        """Return the content bytes of line ``index`` (terminator excluded)."""
        return self.data[self.starts[index] : self.ends[index]]

    def line_text(self, index: int) -> str:
        """Decode line ``index``; undecodable bytes become lone surrogates (one char each)."""
        return self.line_bytes(index).decode("utf-8", errors="surrogateescape")

    def column_of(self, offset: int) -> int:
        """Return the 1-based character column of ``offset`` within its line.

        Offsets on or past the line terminator report the end-of-line insertion
        column (line length + 1).
        """
        offset = self.clamp(offset)
        index: int = self.line_of(offset)
        start: int = self.starts[index]
        stop: int = min(offset, self.ends[index])
        return len(self.data[start:stop].decode("utf-8", errors="surrogateescape")) + 1

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of ``offset``."""
        return self.line_of(offset) + 1, self.column_of(offset)

    def offset_of(self, line: int, column: int) -> int:
        """Return the byte offset of a 1-based ``(line, column)`` position.

        Lines past the end map to the end of the buffer; columns past the end of a
        line map to the end of that line. Values below 1 are treated as 1.
        """
        if line > len(self.starts):
            return len(self.data)
        index: int = max(line, 1) - 1
        text: str = self.line_text(index)
        prefix: str = text[: max(column, 1) - 1]
        return self.starts[index] + len(prefix.encode("utf-8", errors="surrogateescape"))
