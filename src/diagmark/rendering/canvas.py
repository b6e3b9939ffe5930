# topmark:header:start
#
#   project      : DiagMark
#   file         : canvas.py
#   file_relpath : src/diagmark/rendering/canvas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Column-addressed builder for one line of graphical output.

A `LineCanvas` holds one cell per display column. Glyphs are placed (and may be
overwritten) by column; free text is appended as a single run. `render` groups
adjacent cells sharing a style into one colorizer call and trims trailing blanks,
so styling never changes the visible layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from diagmark.core.width import text_width

if TYPE_CHECKING:
    from diagmark.rendering.theme import Colorizer


class LineCanvas:
    """One output line under construction.

    Args:
        unicode (bool): Whether appended text is measured with wcwidth.
    """

    def __init__(self, *, unicode: bool = True) -> None:
        self.unicode = unicode
        self._cells: list[str] = []
        self._styles: list[Colorizer | None] = []

    def __len__(self) -> int:
        return len(self._cells)

    def _grow(self, width: int) -> None:
        while len(self._cells) < width:
            self._cells.append(" ")
            self._styles.append(None)

    def get(self, column: int) -> str:
        """Return the glyph at ``column`` (a blank when unset)."""
        return self._cells[column] if column < len(self._cells) else " "

    def put(self, column: int, glyph: str, style: Colorizer | None = None) -> None:
        """Place a one-column ``glyph`` at ``column``, overwriting what is there."""
        self._grow(column + 1)
        self._cells[column] = glyph
        self._styles[column] = style

    def fill(self, start: int, end: int, glyph: str, style: Colorizer | None = None) -> None:
        """Place ``glyph`` on every column of ``[start, end)``."""
        for column in range(start, end):
            self.put(column, glyph, style)

    def write(self, column: int, text: str, style: Colorizer | None = None) -> None:
        """Write a run of ``text`` starting at ``column``.

        The run occupies as many columns as its display width; wide characters and
        zero-width marks stay in one cell so they are never split.
        """
        if not text:
            return
        self._grow(column)
        width: int = text_width(text, unicode=self.unicode)
        del self._cells[column : column + max(width, 1)]
        del self._styles[column : column + max(width, 1)]
        pad: list[str] = [""] * (max(width, 1) - 1)
        self._cells[column:column] = [text, *pad]
        self._styles[column:column] = [style] * (1 + len(pad))

    def append(self, text: str, style: Colorizer | None = None) -> None:
        """Write ``text`` right after the last occupied column."""
        self.write(len(self._cells), text, style)

    def render(self) -> str:
        """Return the styled line without trailing whitespace."""
        end: int = len(self._cells)
        while end and not self._cells[end - 1].strip():
            end -= 1
        cells: list[str] = self._cells[:end]
        if cells:
            cells[-1] = cells[-1].rstrip()
        parts: list[str] = []
        run: list[str] = []
        current: Colorizer | None = None
        for cell, style in zip(cells, self._styles[:end], strict=True):
            if style is not current and run:
                parts.append(_apply(current, "".join(run)))
                run = []
            current = style
            run.append(cell)
        if run:
            parts.append(_apply(current, "".join(run)))
        return "".join(parts).rstrip()


def _apply(style: Colorizer | None, text: str) -> str:
    if style is None or not text.strip():
        return text
    return style(text)
