# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Composers, themes and the rendering entry points."""

from __future__ import annotations

from .api import render, render_to
from .graphical import GraphicalComposer
from .narratable import NarratableComposer
from .theme import GraphicalTheme, ThemeCharacters, ThemeStyles
from .walker import RenderUnit, TruncationReason, UnitKind, walk
from .wrap import wrap

__all__ = [
    "GraphicalComposer",
    "GraphicalTheme",
    "NarratableComposer",
    "RenderUnit",
    "ThemeCharacters",
    "ThemeStyles",
    "TruncationReason",
    "UnitKind",
    "render",
    "render_to",
    "walk",
    "wrap",
]
