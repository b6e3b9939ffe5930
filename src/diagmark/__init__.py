# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark package.

DiagMark renders structured diagnostics (message, severity, code, help, labeled
source spans, related diagnostics and cause chains) as annotated source snippets
for terminals, or as linear prose for screen readers.

Example:
    ```python
    from pathlib import Path

    from diagmark import Diagnostic, RenderConfig, render

    d = (
        Diagnostic("oops!")
        .with_code("oops::my::bad")
        .with_source(Path("bad_file.rs").read_text(), name="bad_file.rs")
        .with_label(9, 4, "this bit here")
        .with_help("try doing it better next time?")
    )
    print(render(d, RenderConfig(width=80)), end="")
    ```
"""

from __future__ import annotations

from diagmark.config.model import MutableRenderConfig, RenderConfig
from diagmark.config.types import Palette, RenderMode, Toggle
from diagmark.diagnostic.adapt import as_diagnostic
from diagmark.diagnostic.model import (
    Diagnostic,
    LabeledSpan,
    NamedSource,
    SourceOffset,
    SourceSpan,
)
from diagmark.diagnostic.protocol import DiagnosticLike
from diagmark.diagnostic.types import Severity
from diagmark.rendering.api import render, render_to
from diagmark.rendering.theme import GraphicalTheme, ThemeCharacters, ThemeStyles

__all__ = [
    "Diagnostic",
    "DiagnosticLike",
    "GraphicalTheme",
    "LabeledSpan",
    "MutableRenderConfig",
    "NamedSource",
    "Palette",
    "RenderConfig",
    "RenderMode",
    "Severity",
    "SourceOffset",
    "SourceSpan",
    "ThemeCharacters",
    "ThemeStyles",
    "Toggle",
    "as_diagnostic",
    "render",
    "render_to",
]
