# topmark:header:start
#
#   project      : DiagMark
#   file         : walker.py
#   file_relpath : src/diagmark/rendering/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cause/related walker.

`walk` flattens a root diagnostic into the ordered sequence of units a composer
prints: the diagnostic itself, one unit per cause-chain entry, then every related
diagnostic (recursively, depth-first, in declaration order).

The traversal uses an explicit stack, never Python recursion. Each pending item
carries the identities of its ancestors: an item whose identity already appears on
its own path is a cycle, and an item deeper than ``max_related_depth`` is cut off.
Both become a `TRUNCATED` unit instead of being rendered. The same diagnostic may
legitimately appear twice in sibling branches; only ancestry counts.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from diagmark.config.logging import get_logger
from diagmark.diagnostic.adapt import as_diagnostic, identity_of

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator

    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.diagnostic.model import Diagnostic, NamedSource

logger: DiagmarkLogger = get_logger(__name__)


class UnitKind(Enum):
    """Kinds of renderable units."""

    DIAGNOSTIC = "diagnostic"
    CAUSE = "cause"
    TRUNCATED = "truncated"


class TruncationReason(Enum):
    """Why a related diagnostic was not rendered."""

    CYCLE = "cycle detected"
    DEPTH = "depth limit reached"


@dataclass(frozen=True, slots=True)
class RenderUnit:
    """One step of the rendering sequence.

    Attributes:
        kind (UnitKind): What to print.
        depth (int): Nesting level (0 for the root and its causes).
        diagnostic (Diagnostic | None): The diagnostic to render (``DIAGNOSTIC``) or
            the diagnostic owning the cause (``CAUSE``).
        text (str): Cause text (``CAUSE`` only).
        last (bool): Whether this is the final cause of its diagnostic.
        reason (TruncationReason | None): Why rendering stopped (``TRUNCATED`` only).
    """

    kind: UnitKind
    depth: int
    diagnostic: Diagnostic | None = None
    text: str = ""
    last: bool = False
    reason: TruncationReason | None = None


@dataclass(frozen=True, slots=True)
class _Pending:
    obj: Any
    depth: int
    path: frozenset[Hashable]
    inherited: NamedSource | None


def walk(root: object, config: RenderConfig) -> Iterator[RenderUnit]:
    """Yield the rendering sequence for ``root``.

    Args:
        root (object): A `Diagnostic` or any object accepted by `as_diagnostic`.
        config (RenderConfig): Supplies ``max_related_depth``.

    Yields:
        RenderUnit: Units in print order.
    """
    stack: list[_Pending] = [_Pending(obj=root, depth=0, path=frozenset(), inherited=None)]
    while stack:
        item: _Pending = stack.pop()
        ident: Hashable = identity_of(item.obj)
        if ident in item.path:
            logger.debug("Cycle detected at depth %d; emitting truncation marker", item.depth)
            yield RenderUnit(UnitKind.TRUNCATED, item.depth, reason=TruncationReason.CYCLE)
            continue
        if item.depth > config.max_related_depth:
            logger.debug(
                "Related depth %d exceeds max_related_depth=%d; emitting truncation marker",
                item.depth,
                config.max_related_depth,
            )
            yield RenderUnit(UnitKind.TRUNCATED, item.depth, reason=TruncationReason.DEPTH)
            continue

        diagnostic: Diagnostic = as_diagnostic(item.obj)
        if diagnostic.source is None and item.inherited is not None:
            diagnostic = replace(diagnostic, source=item.inherited)
        yield RenderUnit(UnitKind.DIAGNOSTIC, item.depth, diagnostic=diagnostic)

        count: int = len(diagnostic.causes)
        for i, cause in enumerate(diagnostic.causes):
            yield RenderUnit(
                UnitKind.CAUSE,
                item.depth,
                diagnostic=diagnostic,
                text=cause,
                last=i == count - 1,
            )

        path: frozenset[Hashable] = item.path | {ident}
        for child in reversed(diagnostic.related):
            stack.append(
                _Pending(obj=child, depth=item.depth + 1, path=path, inherited=diagnostic.source)
            )
