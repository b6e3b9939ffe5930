# topmark:header:start
#
#   project      : DiagMark
#   file         : test_adapt.py
#   file_relpath : tests/diagnostic/test_adapt.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for adapting upstream objects into `Diagnostic`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from diagmark.diagnostic.adapt import (
    as_diagnostic,
    as_label,
    as_source,
    exception_causes,
    identity_of,
)
from diagmark.diagnostic.model import Diagnostic, LabeledSpan, NamedSource, SourceSpan
from diagmark.diagnostic.types import Severity


@dataclass
class Upstream:
    """Attribute-style upstream diagnostic."""

    message: str = "upstream"
    severity: str = "advice"
    help: str | None = "do this"
    source_code: Any = None
    labels: list[Any] = field(default_factory=lambda: [])
    related: list[Any] = field(default_factory=lambda: [])


class MethodStyle:
    """Method-style upstream diagnostic."""

    def message(self) -> str:
        return "via methods"

    def code(self) -> int:
        return 42

    def causes(self) -> str:
        return "single cause"


@dataclass
class LabelObject:
    """Label with a ``span`` pair and a ``label`` member."""

    span: tuple[int, int]
    label: str


def test_diagnostic_passes_through() -> None:
    """Built-in diagnostics are returned unchanged."""
    d = Diagnostic("m")

    assert as_diagnostic(d) is d


def test_string_becomes_message() -> None:
    """A string is an error diagnostic with that message."""
    assert as_diagnostic("boom") == Diagnostic("boom")


def test_attribute_style_object() -> None:
    """Attributes map onto fields; related objects are kept as-is."""
    child = Upstream(message="child")
    up = Upstream(source_code="abc", labels=[(0, 1, "a"), ("bad",)], related=[child])
    d: Diagnostic = as_diagnostic(up)

    assert d.message == "upstream"
    assert d.severity is Severity.ADVICE
    assert d.help == "do this"
    assert d.source == NamedSource(None, "abc")
    assert d.labels == (LabeledSpan.at(0, 1, "a"),)
    assert d.related == (child,)


def test_method_style_object() -> None:
    """Zero-argument methods are called; non-string values are stringified."""
    d: Diagnostic = as_diagnostic(MethodStyle())

    assert d.message == "via methods"
    assert d.code == "42"
    assert d.causes == ("single cause",)
    assert d.severity is Severity.ERROR


def test_object_without_message_uses_str() -> None:
    """Objects lacking ``message`` fall back to `str()`."""

    class Plain:
        def __str__(self) -> str:
            return "plain text"

    assert as_diagnostic(Plain()).message == "plain text"


def test_exception_chain() -> None:
    """Exceptions adapt with their explicit and implicit cause chain."""
    try:
        try:
            try:
                raise KeyError("k")
            except KeyError:
                raise ValueError("middle") from None
        except ValueError as e:
            raise RuntimeError() from e
    except RuntimeError as exc:
        d: Diagnostic = as_diagnostic(exc)
        causes: tuple[str, ...] = exception_causes(exc)

    assert d.message == "RuntimeError"
    assert d.causes == ("middle",)
    assert causes == ("middle",)


def test_implicit_context_is_followed() -> None:
    """Exceptions raised while handling another list it as a cause."""
    try:
        try:
            raise KeyError("first")
        except KeyError:
            raise ValueError("second")  # noqa: B904
    except ValueError as exc:
        assert exception_causes(exc) == ("'first'",)


def test_label_shapes() -> None:
    """Tuples, spans and objects are all accepted as labels."""
    assert as_label((2, 3)) == LabeledSpan.at(2, 3)
    assert as_label(SourceSpan(1, 1)) == LabeledSpan(span=SourceSpan(1, 1))
    assert as_label(LabelObject(span=(4, 2), label="obj")) == LabeledSpan.at(4, 2, "obj")
    assert as_label("nonsense") is None


def test_source_shapes() -> None:
    """Raw text, bytes and ``name``/``text`` objects become `NamedSource`."""

    @dataclass
    class File:
        name: str
        text: str

    assert as_source(None) is None
    assert as_source(b"xy", name="b") == NamedSource("b", b"xy")
    assert as_source(File("f.py", "pass")) == NamedSource("f.py", "pass")


def test_identity_prefers_diagnostic_id() -> None:
    """Explicit identities are shared across objects; otherwise identity is per object."""
    a = Diagnostic("a", diagnostic_id="same")
    b = Diagnostic("b", diagnostic_id="same")

    x1, x2 = Diagnostic("x"), Diagnostic("x")

    assert identity_of(a) == identity_of(b)
    assert identity_of(x1) != identity_of(x2)


def test_unhashable_identity_falls_back_to_object() -> None:
    """An unhashable ``diagnostic_id`` is ignored."""
    up = Upstream()
    up.diagnostic_id = ["not", "hashable"]  # type: ignore[attr-defined]

    assert identity_of(up) == ("obj", id(up))
