# topmark:header:start
#
#   project      : DiagMark
#   file         : wrap.py
#   file_relpath : src/diagmark/rendering/wrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Display-width-aware word wrapping.

Unlike `textwrap`, widths are measured in terminal display columns (wide glyphs
count 2, combining marks 0), tokens longer than the width are never split, and
explicit newlines are hard breaks (an empty line separates paragraphs).
"""

from __future__ import annotations

from diagmark.core.width import text_width


def wrap(
    text: str,
    width: int,
    *,
    initial_indent: str = "",
    subsequent_indent: str = "",
    unicode: bool = True,
) -> list[str]:
    """Wrap ``text`` to ``width`` display columns.

    Args:
        text (str): Text to wrap; ``\\n`` forces a break.
        width (int): Maximum line width including the indent.
        initial_indent (str): Prefix of the first output line.
        subsequent_indent (str): Prefix of every other output line.
        unicode (bool): Whether widths follow wcwidth (else one column per character).

    Returns:
        list[str]: The wrapped lines, indents included; at least one line. Lines
        holding a single over-long token may exceed ``width``.
    """
    out: list[str] = []

    def indent() -> str:
        return initial_indent if not out else subsequent_indent

    for paragraph in text.split("\n"):
        words: list[str] = paragraph.split()
        if not words:
            out.append(indent())
            continue
        prefix: str = indent()
        line: str = prefix + words[0]
        used: int = text_width(line, unicode=unicode)
        for word in words[1:]:
            w: int = text_width(word, unicode=unicode)
            if used + 1 + w <= width:
                line += " " + word
                used += 1 + w
            else:
                out.append(line)
                line = subsequent_indent + word
                used = text_width(line, unicode=unicode)
        out.append(line)
    return out
