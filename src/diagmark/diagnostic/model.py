# topmark:header:start
#
#   project      : DiagMark
#   file         : model.py
#   file_relpath : src/diagmark/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in diagnostic data model.

Sections:
    * NamedSource: a named, read-only source buffer (text may be unavailable).
    * SourceSpan / SourceOffset: byte-offset spans and location helpers.
    * LabeledSpan: a span with optional label text and an optional source override.
    * Diagnostic: the render request, with an immutable ``with_*`` builder.

All types are frozen dataclasses; a diagnostic is built fresh for each error
occurrence and never mutated afterwards. Any other object can be rendered through
the `DiagnosticLike` protocol (see `diagmark.diagnostic.adapt`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from diagmark.diagnostic.types import Severity
from diagmark.source.index import LineIndex

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


@dataclass(frozen=True, slots=True)
class NamedSource:
    """A named source buffer.

    Attributes:
        name (str | None): Display name (usually a file path).
        text (str | bytes | None): The content, or ``None`` when it is unavailable;
            labels into an unavailable source are listed without a snippet.
    """

    name: str | None = None
    text: str | bytes | None = None

    @property
    def available(self) -> bool:
        """Whether the source text can be shown."""
        return self.text is not None


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """A byte range ``[offset, offset + length)`` into a source.

    Out-of-range and negative values are legal here; they are clamped when the
    span is resolved against a source.
    """

    offset: int
    length: int = 0

    @property
    def end(self) -> int:
        """Exclusive end offset."""
        return self.offset + self.length

    @classmethod
    def from_range(cls, start: int, end: int) -> SourceSpan:
        """Build a span from a ``[start, end)`` pair (reversed pairs are swapped)."""
        lo, hi = min(start, end), max(start, end)
        return cls(offset=lo, length=hi - lo)


class SourceOffset:
    """Helpers converting human coordinates into byte offsets."""

    @staticmethod
    def from_location(source: str | bytes | NamedSource, line: int, column: int) -> int:
        """Return the byte offset of a 1-based ``line``/``column`` pair.

        Columns count characters. Positions past the end of a line clamp to the end
        of that line; lines past the end of the source clamp to the end of the source.

        Args:
            source (str | bytes | NamedSource): The source the position refers to.
            line (int): 1-based line number.
            column (int): 1-based character column.

        Returns:
            int: The byte offset (0 for an unavailable source).
        """
        text: str | bytes | None = source.text if isinstance(source, NamedSource) else source
        if text is None:
            return 0
        return LineIndex.build(text).offset_of(line, column)


@dataclass(frozen=True, slots=True)
class LabeledSpan:
    """A span to highlight, with optional label text.

    Attributes:
        span (SourceSpan): The highlighted byte range.
        text (str | None): Label text; ``None`` draws an unlabeled underline.
        source (NamedSource | None): Overrides the diagnostic's source for this label.
    """

    span: SourceSpan
    text: str | None = None
    source: NamedSource | None = None

    @classmethod
    def at(
        cls,
        offset: int,
        length: int = 0,
        text: str | None = None,
        *,
        source: NamedSource | None = None,
    ) -> LabeledSpan:
        """Build a label from a raw offset/length pair."""
        return cls(span=SourceSpan(offset, length), text=text, source=source)

    @property
    def offset(self) -> int:
        """Start offset of the span."""
        return self.span.offset

    @property
    def length(self) -> int:
        """Length of the span in bytes."""
        return self.span.length


@dataclass(frozen=True)
class Diagnostic:
    """A structured report to render.

    Attributes:
        message (str): Primary message (may be empty).
        severity (Severity): Error, Warning or Advice.
        code (str | None): Machine-readable code (e.g. ``"oops::my::bad"``).
        url (str | None): Link to documentation for the code.
        help (str | None): Free help text; explicit line breaks are kept.
        source (NamedSource | None): Default source for labels that carry none.
        labels (tuple[LabeledSpan, ...]): Highlights, in declaration order.
        related (tuple[Any, ...]): Related diagnostics (`Diagnostic` or any
            `DiagnosticLike`), rendered after this one.
        causes (tuple[str, ...]): Cause chain, outermost first.
        diagnostic_id (Hashable | None): Optional stable identity used by the
            cycle guard; defaults to object identity.
    """

    message: str = ""
    severity: Severity = Severity.ERROR
    code: str | None = None
    url: str | None = None
    help: str | None = None
    source: NamedSource | None = None
    labels: tuple[LabeledSpan, ...] = ()
    related: tuple[Any, ...] = ()
    causes: tuple[str, ...] = ()
    diagnostic_id: Hashable | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.message

    # --- builder ---

    def with_severity(self, severity: Severity | str) -> Diagnostic:
        """Return a copy with ``severity`` (members or tokens such as ``"warn"``)."""
        return replace(self, severity=Severity.coerce(severity))

    def with_code(self, code: str | None) -> Diagnostic:
        """Return a copy with ``code``."""
        return replace(self, code=code)

    def with_url(self, url: str | None) -> Diagnostic:
        """Return a copy with ``url``."""
        return replace(self, url=url)

    def with_help(self, help: str | None) -> Diagnostic:  # noqa: A002 - mirrors the field
        """Return a copy with ``help`` text."""
        return replace(self, help=help)

    def with_source(self, source: NamedSource | str | bytes, name: str | None = None) -> Diagnostic:
        """Return a copy with a default source.

        Args:
            source (NamedSource | str | bytes): The source, or its raw text.
            name (str | None): Display name when ``source`` is raw text.

        Returns:
            Diagnostic: The updated copy.
        """
        if not isinstance(source, NamedSource):
            source = NamedSource(name=name, text=source)
        return replace(self, source=source)

    def with_label(
        self,
        label: LabeledSpan | int,
        length: int = 0,
        text: str | None = None,
    ) -> Diagnostic:
        """Return a copy with one more label.

        Accepts either a ready `LabeledSpan` or ``offset, length, text``.
        """
        if not isinstance(label, LabeledSpan):
            label = LabeledSpan.at(label, length, text)
        return replace(self, labels=(*self.labels, label))

    def with_labels(self, labels: Iterable[LabeledSpan]) -> Diagnostic:
        """Return a copy with ``labels`` appended."""
        return replace(self, labels=(*self.labels, *labels))

    def with_related(self, *related: Any) -> Diagnostic:
        """Return a copy with related diagnostics appended."""
        return replace(self, related=(*self.related, *related))

    def with_cause(self, *causes: str) -> Diagnostic:
        """Return a copy with cause-chain entries appended (outermost first)."""
        return replace(self, causes=(*self.causes, *causes))
