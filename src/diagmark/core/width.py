# topmark:header:start
#
#   project      : DiagMark
#   file         : width.py
#   file_relpath : src/diagmark/core/width.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Display-width helpers.

Column math throughout the renderer is done in *display columns*: East Asian wide
and fullwidth glyphs take two columns, combining marks take none (per `wcwidth`).
With Unicode disabled every decoded character counts as exactly one column, which
keeps ASCII-only terminals aligned at the cost of wide glyphs.
"""

from __future__ import annotations

from wcwidth import wcwidth


def char_width(ch: str, *, unicode: bool = True) -> int:
    """Return the display width of a single character.

    Non-printable characters (for which `wcwidth` reports ``-1``) count as one
    column; callers replace them with a visible placeholder before display.

    Args:
        ch (str): A single character.
        unicode (bool): When False, every character is one column wide.

    Returns:
        int: 0, 1 or 2.
    """
    if not unicode:
        return 1
    w: int = wcwidth(ch)
    return 1 if w < 0 else w


def text_width(text: str, *, unicode: bool = True) -> int:
    """Return the display width of ``text`` (sum of `char_width` over its characters)."""
    if not unicode:
        return len(text)
    return sum(char_width(ch) for ch in text)
