# topmark:header:start
#
#   project      : DiagMark
#   file         : adapt.py
#   file_relpath : src/diagmark/diagnostic/adapt.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Adapters from arbitrary upstream objects to the built-in `Diagnostic`.

Adaptation is *shallow*: related diagnostics are kept as the original objects and
adapted one level at a time by the walker, so a cyclic graph of upstream objects
never sends the adapter into a loop.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from diagmark.config.logging import get_logger
from diagmark.diagnostic.model import Diagnostic, LabeledSpan, NamedSource, SourceSpan
from diagmark.diagnostic.types import Severity

if TYPE_CHECKING:
    from collections.abc import Hashable

    from diagmark.config.logging import DiagmarkLogger

logger: DiagmarkLogger = get_logger(__name__)

_NOT_CALLED = (str, bytes, tuple, list, dict, type)


def _member(obj: object, *names: str) -> Any:
    """Return the first present member among ``names``; zero-argument methods are called."""
    for name in names:
        value: Any = getattr(obj, name, None)
        if value is None:
            continue
        if callable(value) and not isinstance(value, _NOT_CALLED):
            value = value()
        if value is not None:
            return value
    return None


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def as_source(value: Any, *, name: str | None = None) -> NamedSource | None:
    """Normalize a source-ish value into a `NamedSource` (``None`` stays ``None``)."""
    if value is None or isinstance(value, NamedSource):
        return value
    if isinstance(value, (str, bytes)):
        return NamedSource(name=name, text=value)
    text: Any = _member(value, "text", "content", "data")
    return NamedSource(
        name=_optional_str(_member(value, "name")) or name,
        text=text if isinstance(text, (str, bytes)) else None,
    )


def as_label(item: Any) -> LabeledSpan | None:
    """Normalize one label-ish value; returns ``None`` (and logs) for unusable items."""
    if isinstance(item, LabeledSpan):
        return item
    if isinstance(item, SourceSpan):
        return LabeledSpan(span=item)
    if isinstance(item, (tuple, list)) and 2 <= len(item) <= 3:
        offset, length = item[0], item[1]
        text: Any = item[2] if len(item) == 3 else None
        if isinstance(offset, int) and isinstance(length, int):
            return LabeledSpan.at(offset, length, _optional_str(text))
    else:
        span: Any = _member(item, "span")
        if isinstance(span, SourceSpan):
            offset, length = span.offset, span.length
        elif isinstance(span, (tuple, list)) and len(span) == 2:
            offset, length = span[0], span[1]
        else:
            offset, length = _member(item, "offset"), _member(item, "length", "len")
            if length is None and isinstance(offset, int):
                length = 0
        if isinstance(offset, int) and isinstance(length, int):
            return LabeledSpan(
                span=SourceSpan(offset, length),
                text=_optional_str(_member(item, "text", "label")),
                source=as_source(_member(item, "source")),
            )
    logger.debug("Ignoring label without a usable offset/length: %r", item)
    return None


def exception_causes(exc: BaseException) -> tuple[str, ...]:
    """Return the display strings of an exception's cause chain, outermost first.

    Follows ``__cause__``, then ``__context__`` unless suppressed; stops on a repeat.
    """
    out: list[str] = []
    seen: set[int] = {id(exc)}
    current: BaseException | None = _next_exception(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        out.append(str(current) or type(current).__name__)
        current = _next_exception(current)
    return tuple(out)


def _next_exception(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if not exc.__suppress_context__:
        return exc.__context__
    return None


def identity_of(obj: object) -> Hashable:
    """Identity used by the cycle guard: ``diagnostic_id`` when provided, else ``id()``."""
    ident: Any = getattr(obj, "diagnostic_id", None)
    if ident is not None:
        try:
            hash(ident)
        except TypeError:
            logger.debug("Unhashable diagnostic_id on %r; using object identity", obj)
        else:
            return ("id", ident)
    return ("obj", id(obj))


def as_diagnostic(obj: object) -> Diagnostic:
    """Adapt any supported object to a `Diagnostic`.

    Args:
        obj (object): A `Diagnostic` (returned unchanged), a string (the message),
            an exception (message plus cause chain), or any `DiagnosticLike` object.

    Returns:
        Diagnostic: The adapted diagnostic. Missing members take their defaults.
    """
    if isinstance(obj, Diagnostic):
        return obj
    if isinstance(obj, str):
        return Diagnostic(message=obj)

    if isinstance(obj, BaseException):
        message: str = _optional_str(_member(obj, "message")) or str(obj) or type(obj).__name__
    else:
        message = _optional_str(_member(obj, "message"))
        if message is None:
            message = str(obj)

    labels: list[LabeledSpan] = []
    raw_labels: Any = _member(obj, "labels")
    if isinstance(raw_labels, Iterable) and not isinstance(raw_labels, (str, bytes)):
        for item in raw_labels:
            label: LabeledSpan | None = as_label(item)
            if label is not None:
                labels.append(label)

    raw_causes: Any = _member(obj, "causes")
    if raw_causes is None and isinstance(obj, BaseException):
        causes: tuple[str, ...] = exception_causes(obj)
    elif isinstance(raw_causes, (str, bytes)):
        causes = (str(raw_causes),)
    elif isinstance(raw_causes, Iterable):
        causes = tuple(str(c) for c in raw_causes)
    else:
        causes = ()

    raw_related: Any = _member(obj, "related")
    related: tuple[Any, ...] = (
        tuple(raw_related)
        if isinstance(raw_related, Iterable) and not isinstance(raw_related, (str, bytes))
        else ()
    )

    diagnostic = Diagnostic(
        message=message,
        severity=Severity.coerce(_member(obj, "severity")),
        code=_optional_str(_member(obj, "code")),
        url=_optional_str(_member(obj, "url")),
        help=_optional_str(_member(obj, "help")),
        source=as_source(_member(obj, "source", "source_code")),
        labels=tuple(labels),
        related=related,
        causes=causes,
        diagnostic_id=_member(obj, "diagnostic_id"),
    )
    logger.trace(
        "Adapted %s: %d label(s), %d related, %d cause(s)",
        type(obj).__name__,
        len(labels),
        len(related),
        len(causes),
    )
    return diagnostic
