# topmark:header:start
#
#   project      : DiagMark
#   file         : protocol.py
#   file_relpath : src/diagmark/diagnostic/protocol.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Upstream data interface for renderable diagnostics.

`DiagnosticLike` documents the capabilities the renderer can use. Every member is
optional and may be either a plain attribute or a zero-argument method; objects
are adapted to the built-in `Diagnostic` by `diagmark.diagnostic.adapt.as_diagnostic`,
which also accepts plain strings and Python exceptions.

Member shapes accepted by the adapter:
    - ``message``: ``str`` (falls back to ``str(obj)``)
    - ``severity``: `Severity`, a token such as ``"warning"``, or any enum whose name parses
    - ``code`` / ``url`` / ``help``: ``str`` (other values are ``str()``-ed)
    - ``source`` (or ``source_code``): `NamedSource`, ``str``/``bytes``, or an object
      with ``name``/``text`` attributes
    - ``labels``: iterable of `LabeledSpan`, `SourceSpan`, ``(offset, length[, text])``
      tuples, or objects with ``offset``/``length`` (or ``span``) and ``text``/``label``
    - ``related``: iterable of diagnostic-like objects
    - ``causes``: iterable of strings (outermost first)
    - ``diagnostic_id``: hashable identity used by the cycle guard
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


class DiagnosticLike(Protocol):
    """Structural description of a renderable diagnostic (all members optional at runtime)."""

    @property
    def message(self) -> str:
        """Primary message."""
        ...

    @property
    def severity(self) -> Any:
        """Severity (member, token or foreign enum)."""
        ...

    @property
    def code(self) -> str | None:
        """Machine-readable code."""
        ...

    @property
    def url(self) -> str | None:
        """Documentation URL."""
        ...

    @property
    def help(self) -> str | None:
        """Help text."""
        ...

    @property
    def source(self) -> Any:
        """Default source for labels."""
        ...

    @property
    def labels(self) -> Iterable[Any]:
        """Highlights, in declaration order."""
        ...

    @property
    def related(self) -> Iterable[Any]:
        """Related diagnostics."""
        ...

    @property
    def causes(self) -> Iterable[str]:
        """Cause chain, outermost first."""
        ...

    @property
    def diagnostic_id(self) -> Hashable | None:
        """Stable identity."""
        ...
