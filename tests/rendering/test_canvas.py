# topmark:header:start
#
#   project      : DiagMark
#   file         : test_canvas.py
#   file_relpath : tests/rendering/test_canvas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the line canvas and theme selection."""

from __future__ import annotations

from diagmark.config.types import Palette, Toggle
from diagmark.diagnostic.types import Severity
from diagmark.rendering.canvas import LineCanvas
from diagmark.rendering.theme import GraphicalTheme, ThemeCharacters, ThemeStyles, plain
from tests.conftest import plain_config


def brackets(*args: object, sep: str = " ") -> str:
    """Colorizer that makes styled runs visible."""
    return "[" + sep.join(str(a) for a in args) + "]"


def test_put_fill_and_trailing_blanks() -> None:
    """Glyphs land on their columns; trailing blanks are trimmed."""
    c = LineCanvas()
    c.put(2, "x")
    c.fill(4, 6, "-")
    c.put(9, " ")

    assert c.render() == "  x --"
    assert c.get(2) == "x"
    assert c.get(50) == " "


def test_wide_text_occupies_two_columns() -> None:
    """A wide glyph pushes later columns by two."""
    c = LineCanvas()
    c.append("a全")
    c.put(len(c), "|")

    assert len(c) == 4
    assert c.render() == "a全|"


def test_styles_group_adjacent_cells() -> None:
    """Neighboring cells with the same style share one colorizer call."""
    c = LineCanvas()
    c.append("ab", brackets)
    c.put(len(c), "c", brackets)
    c.append(" d")

    assert c.render() == "[abc] d"


def test_blank_runs_are_never_styled() -> None:
    """Whitespace-only runs stay plain."""
    c = LineCanvas()
    c.append("   ", brackets)
    c.append("x")

    assert c.render() == "   x"


def test_theme_follows_config() -> None:
    """Glyphs follow ``unicode``; styles follow ``color`` and ``palette``."""
    plain_theme: GraphicalTheme = GraphicalTheme.from_config(plain_config())
    ascii_theme: GraphicalTheme = GraphicalTheme.from_config(plain_config(unicode=Toggle.OFF))
    muted: GraphicalTheme = GraphicalTheme.from_config(
        plain_config(color=Toggle.ON, palette=Palette.NONE)
    )

    assert plain_theme.characters == ThemeCharacters.unicode()
    assert ascii_theme.characters == ThemeCharacters.ascii()
    assert plain_theme.styles.error is plain
    assert muted.styles.error is plain


def test_severity_glyphs() -> None:
    """Each severity maps onto its own glyph in both glyph sets."""
    chars: ThemeCharacters = ThemeCharacters.unicode()

    assert [chars.severity(s) for s in Severity] == ["×", "⚠", "☞"]
    assert ThemeCharacters.ascii().severity(Severity.ERROR) == "x"


def test_glyph_sets_cover_only_drawn_slots() -> None:
    """Both glyph sets define the same slots, and markers differ from underlines."""
    slots: set[str] = {
        "hbar", "vbar", "xbar", "vbar_break", "uarrow", "rarrow", "ltop", "mtop",
        "lbot", "mbot", "lcross", "underbar", "underline", "error", "warning",
        "advice", "ellipsis",
    }  # fmt: skip

    for chars in (ThemeCharacters.unicode(), ThemeCharacters.ascii()):
        assert set(ThemeCharacters.__dataclass_fields__) == slots
        assert chars.uarrow != chars.underline


def test_colored_styles_emit_escapes() -> None:
    """Both color palettes decorate text with SGR sequences."""
    for styles in (ThemeStyles.ansi(), ThemeStyles.rgb()):
        assert styles.error("boom").startswith("\x1b[")
        assert styles.highlight(4) is styles.highlights[1]
