# topmark:header:start
#
#   project      : DiagMark
#   file         : theme.py
#   file_relpath : src/diagmark/rendering/theme.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Glyph sets and color styles for the graphical composer.

A `GraphicalTheme` pairs `ThemeCharacters` (which glyphs draw gutters, underlines
and brackets) with `ThemeStyles` (which `Colorizer` decorates each logical slot).

Styles are built from a dedicated `yachalk.ChalkFactory` per palette instead of the
global ``chalk`` object, so the bytes emitted depend only on the render config and
never on terminal auto-detection.

Key types:
    - `Colorizer`: Protocol for any callable compatible with `yachalk.ChalkBuilder.__call__`.
    - `ThemeCharacters`: ``unicode()`` box-drawing glyphs or ``ascii()`` fallbacks.
    - `ThemeStyles`: ``ansi()`` (16 colors), ``rgb()`` (true color) or ``none()``.
    - `GraphicalTheme`: the combination, usually built with `GraphicalTheme.from_config`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from yachalk.chalk_factory import ChalkFactory
from yachalk.types import ColorMode

from diagmark.config.types import Palette
from diagmark.diagnostic.types import Severity

if TYPE_CHECKING:
    from diagmark.config.model import RenderConfig


class Colorizer(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`, which accepts a variadic list
    of arguments and a `sep` keyword. DiagMark calls colorizers with a single string.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Colorize and concatenate ``args`` into a display string.

        Args:
            *args (object): One or more objects to render, typically strings.
            sep (str): Separator between arguments when multiple values are provided.

        Returns:
            str: The decorated string.
        """
        ...


def plain(*args: object, sep: str = " ") -> str:
    """Identity `Colorizer`: joins ``args`` without any decoration."""
    return sep.join(str(a) for a in args)


@dataclass(frozen=True, slots=True)
class ThemeCharacters:
    """Glyphs used to draw the graphical report."""

    hbar: str
    vbar: str
    xbar: str
    vbar_break: str
    uarrow: str
    rarrow: str
    ltop: str
    mtop: str
    lbot: str
    mbot: str
    lcross: str
    underbar: str
    underline: str
    error: str
    warning: str
    advice: str
    ellipsis: str

    @classmethod
    def unicode(cls) -> ThemeCharacters:
        """Box-drawing glyphs."""
        return cls(
            hbar="─",
            vbar="│",
            xbar="┼",
            vbar_break="·",
            uarrow="▲",
            rarrow="▶",
            ltop="╭",
            mtop="┬",
            lbot="╰",
            mbot="┴",
            lcross="├",
            underbar="┬",
            underline="─",
            error="×",
            warning="⚠",
            advice="☞",
            ellipsis="…",
        )

    @classmethod
    def ascii(cls) -> ThemeCharacters:
        """7-bit fallbacks for terminals without Unicode support."""
        return cls(
            hbar="-",
            vbar="|",
            xbar="+",
            vbar_break=":",
            uarrow="^",
            rarrow=">",
            ltop=",",
            mtop="v",
            lbot="`",
            mbot="^",
            lcross="|",
            underbar="|",
            underline="-",
            error="x",
            warning="!",
            advice=">",
            ellipsis="...",
        )

    def severity(self, severity: Severity) -> str:
        """Return the glyph announcing ``severity``."""
        if severity is Severity.WARNING:
            return self.warning
        if severity is Severity.ADVICE:
            return self.advice
        return self.error


@dataclass(frozen=True, slots=True)
class ThemeStyles:
    """Colorizers for the logical slots of a report.

    Attributes:
        error (Colorizer): Error glyph, bars and cause arrows.
        warning (Colorizer): Warning glyph, bars and cause arrows.
        advice (Colorizer): Advice glyph, bars and cause arrows.
        code (Colorizer): Diagnostic code in the header.
        help (Colorizer): The ``help:`` prefix.
        link (Colorizer): URLs and the ``(link)`` marker.
        filename (Colorizer): Source names in context headers.
        gutter (Colorizer): Line numbers and gutter rules.
        highlights (tuple[Colorizer, ...]): Label styles, cycled by declaration order.
    """

    error: Colorizer
    warning: Colorizer
    advice: Colorizer
    code: Colorizer
    help: Colorizer
    link: Colorizer
    filename: Colorizer
    gutter: Colorizer
    highlights: tuple[Colorizer, ...]

    @classmethod
    def ansi(cls) -> ThemeStyles:
        """Basic 16-color styles."""
        c = ChalkFactory(ColorMode.Basic16)
        return cls(
            error=c.red,
            warning=c.yellow,
            advice=c.cyan,
            code=c.bold,
            help=c.cyan,
            link=c.cyan.underline,
            filename=c.cyan.bold,
            gutter=c.dim,
            highlights=(c.magenta_bright, c.yellow_bright, c.green_bright),
        )

    @classmethod
    def rgb(cls) -> ThemeStyles:
        """True-color styles."""
        c = ChalkFactory(ColorMode.FullTrueColor)
        return cls(
            error=c.rgb(255, 30, 30),
            warning=c.rgb(244, 191, 117),
            advice=c.rgb(106, 159, 181),
            code=c.rgb(170, 170, 170).bold,
            help=c.rgb(106, 159, 181),
            link=c.rgb(92, 157, 255).underline,
            filename=c.rgb(92, 157, 255).bold,
            gutter=c.rgb(120, 120, 120),
            highlights=(
                c.rgb(246, 87, 248),
                c.rgb(30, 201, 212),
                c.rgb(145, 246, 111),
            ),
        )

    @classmethod
    def none(cls) -> ThemeStyles:
        """No decoration at all."""
        return cls(
            error=plain,
            warning=plain,
            advice=plain,
            code=plain,
            help=plain,
            link=plain,
            filename=plain,
            gutter=plain,
            highlights=(plain,),
        )

    def severity(self, severity: Severity) -> Colorizer:
        """Return the style for ``severity``."""
        if severity is Severity.WARNING:
            return self.warning
        if severity is Severity.ADVICE:
            return self.advice
        return self.error

    def highlight(self, order: int) -> Colorizer:
        """Return the style of the label declared at position ``order``."""
        return self.highlights[order % len(self.highlights)]


@dataclass(frozen=True, slots=True)
class GraphicalTheme:
    """Glyphs plus styles."""

    characters: ThemeCharacters
    styles: ThemeStyles

    @classmethod
    def from_config(cls, config: RenderConfig) -> GraphicalTheme:
        """Pick the theme matching the resolved ``unicode``, ``color`` and ``palette`` settings."""
        characters: ThemeCharacters = (
            ThemeCharacters.unicode() if config.unicode_enabled else ThemeCharacters.ascii()
        )
        if not config.color_enabled:
            styles: ThemeStyles = ThemeStyles.none()
        elif config.palette is Palette.RGB:
            styles = ThemeStyles.rgb()
        else:
            styles = ThemeStyles.ansi()
        return cls(characters=characters, styles=styles)
