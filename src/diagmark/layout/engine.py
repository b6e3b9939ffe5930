# topmark:header:start
#
#   project      : DiagMark
#   file         : engine.py
#   file_relpath : src/diagmark/layout/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Span layout engine.

Turns a diagnostic's labels into a `RenderPlan`:

1. Labels beyond ``max_labels`` are dropped (with a warning).
2. Labels are grouped by source (a label's own source, else the diagnostic's),
   in order of first appearance. Sources without text become `UnavailableSource`
   sections.
3. Within a source, labels are resolved and sorted by (start offset, declaration
   order); each label's line range, padded by ``context_lines``, opens a context,
   and ranges that overlap or touch merge into one context.
4. Single-line labels on each line get underline rows (`assign_rows`); multiline
   labels get gutter lanes (`assign_lanes`).

The layout is pure: the same diagnostic and config always yield the same plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from diagmark.config.logging import get_logger
from diagmark.layout.plan import (
    Context,
    PlacedLabel,
    PlanLine,
    RenderPlan,
    UnavailableSource,
    UnresolvedLabel,
)
from diagmark.source.resolver import ResolvedSource, Unavailable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.diagnostic.model import Diagnostic, LabeledSpan, NamedSource
    from diagmark.layout.plan import Section
    from diagmark.source.resolver import ResolvedSpan

logger: DiagmarkLogger = get_logger(__name__)


def assign_rows(labels: Sequence[PlacedLabel]) -> list[list[PlacedLabel]]:
    """Greedily pack single-line labels into non-overlapping underline rows.

    Labels are taken in (start column, declaration order) order; each joins the
    lowest row whose last label ends before the label's start column, or opens a
    new row.

    Args:
        labels (Sequence[PlacedLabel]): Single-line labels of one source line.

    Returns:
        list[list[PlacedLabel]]: Rows (row 0 first), each ordered by start column,
        with ``row`` set on every label.
    """
    rows: list[list[PlacedLabel]] = []
    row_ends: list[int] = []
    for label in sorted(labels, key=lambda lb: (lb.start, lb.order)):
        for r, end in enumerate(row_ends):
            if end <= label.start:
                break
        else:
            r = len(rows)
            rows.append([])
            row_ends.append(0)
        rows[r].append(replace(label, row=r))
        row_ends[r] = label.end
    return rows


def assign_lanes(labels: Sequence[PlacedLabel]) -> tuple[list[PlacedLabel], int]:
    """Greedily assign gutter lanes to multiline labels.

    Labels are taken in (start offset, declaration order) order; each takes the
    lowest lane whose previous bracket ended on an earlier line than the label's
    start line, or opens a new lane.

    Args:
        labels (Sequence[PlacedLabel]): Multiline labels of one context.

    Returns:
        tuple[list[PlacedLabel], int]: The labels with ``lane`` set, and the lane count.
    """
    placed: list[PlacedLabel] = []
    lane_ends: list[int] = []
    for label in sorted(labels, key=lambda lb: (lb.span.start, lb.order)):
        for lane, end_line in enumerate(lane_ends):
            if end_line < label.span.start_line:
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(0)
        placed.append(replace(label, lane=lane))
        lane_ends[lane] = label.span.end_line
    return placed, len(lane_ends)


@dataclass
class _ContextDraft:
    first: int
    last: int
    labels: list[PlacedLabel] = field(default_factory=lambda: [])


def _group_contexts(
    labels: Sequence[PlacedLabel],
    context_lines: int,
    line_count: int,
) -> list[_ContextDraft]:
    drafts: list[_ContextDraft] = []
    for label in labels:
        first: int = max(label.span.start_line - context_lines, 1)
        last: int = min(label.span.end_line + context_lines, line_count)
        if drafts and first <= drafts[-1].last + 1:
            drafts[-1].last = max(drafts[-1].last, last)
            drafts[-1].labels.append(label)
        else:
            drafts.append(_ContextDraft(first=first, last=last, labels=[label]))
    return drafts


def _build_context(source: ResolvedSource, draft: _ContextDraft) -> Context:
    singles: list[PlacedLabel] = [lb for lb in draft.labels if not lb.span.multiline]
    brackets, lane_count = assign_lanes([lb for lb in draft.labels if lb.span.multiline])

    by_line: dict[int, list[PlacedLabel]] = {}
    for label in singles:
        by_line.setdefault(label.span.start_line, []).append(label)

    lines: list[PlanLine] = []
    placed_singles: list[PlacedLabel] = []
    for number in range(draft.first, draft.last + 1):
        rows: list[list[PlacedLabel]] = assign_rows(by_line.get(number, []))
        for row in rows:
            placed_singles.extend(row)
        lines.append(PlanLine(info=source.line(number), rows=tuple(tuple(row) for row in rows)))

    ordered: list[PlacedLabel] = sorted(
        [*placed_singles, *brackets], key=lambda lb: (lb.span.start, lb.order)
    )
    logger.trace(
        "Context %r lines %d-%d: %d label(s), %d lane(s)",
        source.name,
        draft.first,
        draft.last,
        len(ordered),
        lane_count,
    )
    return Context(
        source_name=source.name,
        lines=tuple(lines),
        labels=tuple(ordered),
        lane_count=lane_count,
    )


def layout_source(
    source: ResolvedSource,
    labels: Sequence[tuple[int, LabeledSpan]],
    config: RenderConfig,
) -> list[Context]:
    """Lay out the labels of one available source.

    Args:
        source (ResolvedSource): The prepared source.
        labels (Sequence[tuple[int, LabeledSpan]]): ``(declaration order, label)`` pairs.
        config (RenderConfig): Render configuration (``context_lines`` is used).

    Returns:
        list[Context]: The contexts, top to bottom.
    """
    placed: list[PlacedLabel] = []
    for order, label in labels:
        span: ResolvedSpan = source.resolve_span(label.span)
        placed.append(PlacedLabel(order=order, text=label.text, span=span))
    placed.sort(key=lambda lb: (lb.span.start, lb.order))
    drafts: list[_ContextDraft] = _group_contexts(placed, config.context_lines, source.line_count)
    return [_build_context(source, d) for d in drafts]


def build_plan(diagnostic: Diagnostic, config: RenderConfig) -> RenderPlan:
    """Compute the layout of ``diagnostic``.

    Args:
        diagnostic (Diagnostic): The (adapted) diagnostic.
        config (RenderConfig): A sanitized render configuration.

    Returns:
        RenderPlan: Sections grouped by source in order of first appearance.
    """
    labels: tuple[LabeledSpan, ...] = diagnostic.labels
    dropped: int = 0
    if len(labels) > config.max_labels:
        dropped = len(labels) - config.max_labels
        logger.warning(
            "Diagnostic has %d labels; dropping %d beyond max_labels=%d",
            len(labels),
            dropped,
            config.max_labels,
        )
        labels = labels[: config.max_labels]

    groups: dict[NamedSource | None, list[tuple[int, LabeledSpan]]] = {}
    for order, label in enumerate(labels):
        src: NamedSource | None = label.source if label.source is not None else diagnostic.source
        groups.setdefault(src, []).append((order, label))

    sections: list[Section] = []
    for src, items in groups.items():
        resolved: ResolvedSource | Unavailable = ResolvedSource.from_named(
            src,
            tab_width=config.tab_width,
            unicode=config.unicode_enabled,
        )
        if isinstance(resolved, Unavailable):
            logger.debug("Source %r has no text; listing %d label(s)", src and src.name, len(items))
            sections.append(
                UnavailableSource(
                    source_name=src.name if src is not None else None,
                    labels=tuple(
                        UnresolvedLabel(
                            order=order,
                            offset=label.offset,
                            length=label.length,
                            text=label.text,
                        )
                        for order, label in items
                    ),
                )
            )
            continue
        sections.extend(layout_source(resolved, items, config))

    return RenderPlan(sections=tuple(sections), dropped_labels=dropped)
