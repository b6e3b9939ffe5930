# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic data model, upstream protocol and adapters."""

from __future__ import annotations

from .adapt import as_diagnostic
from .model import Diagnostic, LabeledSpan, NamedSource, SourceOffset, SourceSpan
from .protocol import DiagnosticLike
from .types import Severity

__all__ = [
    "Diagnostic",
    "DiagnosticLike",
    "LabeledSpan",
    "NamedSource",
    "Severity",
    "SourceOffset",
    "SourceSpan",
    "as_diagnostic",
]
