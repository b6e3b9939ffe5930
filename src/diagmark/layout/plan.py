# topmark:header:start
#
#   project      : DiagMark
#   file         : plan.py
#   file_relpath : src/diagmark/layout/plan.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render plan data structures.

A `RenderPlan` is the composer-independent result of laying out one diagnostic's
labels: an ordered sequence of sections, each either a `Context` (a contiguous
excerpt of one source with underline rows and bracket lanes assigned) or an
`UnavailableSource` (labels whose source text cannot be shown).

Plans are ephemeral: built per render call, never cached, never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diagmark.source.resolver import LineInfo, ResolvedSpan


@dataclass(frozen=True, slots=True)
class PlacedLabel:
    """A label positioned in the layout.

    Exactly one of ``row`` (single-line labels) and ``lane`` (multiline labels)
    is set.

    Attributes:
        order (int): Declaration index of the label in its diagnostic.
        text (str | None): Label text.
        span (ResolvedSpan): The clamped, located span.
        row (int | None): Underline row on the label's line (0 = closest to the text).
        lane (int | None): Gutter lane of a multiline bracket (0 = leftmost).
    """

    order: int
    text: str | None
    span: ResolvedSpan
    row: int | None = None
    lane: int | None = None

    @property
    def multiline(self) -> bool:
        """Whether the label is drawn as a bracket."""
        return self.lane is not None

    @property
    def start(self) -> int:
        """First display column covered on the start line."""
        return self.span.start_display

    @property
    def end(self) -> int:
        """Exclusive last display column; zero-length labels occupy one column."""
        if self.span.zero_length:
            return self.span.start_display + 1
        return self.span.end_display

    @property
    def connector(self) -> int:
        """Display column where the label's connector leaves the underline."""
        if self.span.zero_length:
            return self.start
        return self.start + (self.end - self.start) // 2

    @property
    def has_text(self) -> bool:
        """Whether the label carries text to print."""
        return self.text is not None


@dataclass(frozen=True, slots=True)
class PlanLine:
    """One displayed source line with its underline rows.

    Attributes:
        info (LineInfo): The resolved line.
        rows (tuple[tuple[PlacedLabel, ...], ...]): Single-line labels starting on
            this line, grouped by row; each row is ordered by start column and no
            two labels in a row overlap.
    """

    info: LineInfo
    rows: tuple[tuple[PlacedLabel, ...], ...] = ()

    @property
    def number(self) -> int:
        """1-based line number."""
        return self.info.number

    @property
    def labels(self) -> tuple[PlacedLabel, ...]:
        """All single-line labels of this line, row by row."""
        return tuple(label for row in self.rows for label in row)


@dataclass(frozen=True, slots=True)
class Context:
    """A contiguous excerpt of one source.

    Attributes:
        source_name (str | None): Display name of the source.
        lines (tuple[PlanLine, ...]): The displayed lines, in order.
        labels (tuple[PlacedLabel, ...]): Every label in the excerpt, sorted by
            (start offset, declaration order).
        lane_count (int): Number of bracket lanes in the gutter.
    """

    source_name: str | None
    lines: tuple[PlanLine, ...]
    labels: tuple[PlacedLabel, ...]
    lane_count: int = 0

    @property
    def first_line(self) -> int:
        """1-based number of the first displayed line."""
        return self.lines[0].number

    @property
    def last_line(self) -> int:
        """1-based number of the last displayed line."""
        return self.lines[-1].number

    @property
    def brackets(self) -> tuple[PlacedLabel, ...]:
        """Multiline labels, in lane-assignment order."""
        return tuple(label for label in self.labels if label.multiline)

    @property
    def line_number_width(self) -> int:
        """Digits needed for the largest line number in the excerpt."""
        return len(str(self.last_line))


@dataclass(frozen=True, slots=True)
class UnresolvedLabel:
    """A label whose source text is unavailable (raw offsets are reported)."""

    order: int
    offset: int
    length: int
    text: str | None


@dataclass(frozen=True, slots=True)
class UnavailableSource:
    """Labels pointing into a source without text."""

    source_name: str | None
    labels: tuple[UnresolvedLabel, ...]


Section = Context | UnavailableSource


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Layout of one diagnostic.

    Attributes:
        sections (tuple[Section, ...]): Contexts and unavailable-source listings,
            grouped by source in order of first appearance.
        dropped_labels (int): Labels beyond ``max_labels`` that were not laid out.
    """

    sections: tuple[Section, ...] = ()
    dropped_labels: int = 0

    @property
    def contexts(self) -> tuple[Context, ...]:
        """Only the source excerpts."""
        return tuple(s for s in self.sections if isinstance(s, Context))
