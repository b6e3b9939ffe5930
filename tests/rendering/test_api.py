# topmark:header:start
#
#   project      : DiagMark
#   file         : test_api.py
#   file_relpath : tests/rendering/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public `render` / `render_to` entry points."""

from __future__ import annotations

import io

import pytest
from hypothesis import given, settings

import diagmark
from diagmark import Diagnostic, RenderConfig, render, render_to
from tests.conftest import plain_config, sample_diagnostic
from tests.strategies_diagmark import s_diagnostic


class RecordingStream(io.StringIO):
    """Text stream counting `write` calls."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: int = 0

    def write(self, s: str) -> int:
        self.writes += 1
        return super().write(s)


class BrokenStream(io.StringIO):
    """Text stream whose writes always fail."""

    def write(self, s: str) -> int:
        raise OSError("stream closed")


def test_package_exports() -> None:
    """The top-level package exposes the rendering API."""
    assert diagmark.render is render
    assert "render_to" in diagmark.__all__


def test_default_config_is_plain_unicode() -> None:
    """Without a config, output is graphical, uncolored and uses Unicode glyphs."""
    assert render(sample_diagnostic()) == render(sample_diagnostic(), plain_config())


def test_render_to_writes_once() -> None:
    """The whole report reaches the stream in a single write."""
    stream = RecordingStream()

    render_to(sample_diagnostic(), stream, plain_config())

    assert stream.writes == 1
    assert stream.getvalue() == render(sample_diagnostic(), plain_config())


def test_render_to_propagates_stream_errors() -> None:
    """A failing stream surfaces as the original `OSError`."""
    with pytest.raises(OSError, match="stream closed"):
        render_to(sample_diagnostic(), BrokenStream(), plain_config())


def test_narrow_width_is_clamped() -> None:
    """Widths below the minimum behave like the minimum."""
    d = Diagnostic("alpha beta gamma delta epsilon")

    assert render(d, plain_config(width=5)) == render(d, plain_config(width=20))


def test_plain_string_input() -> None:
    """A string renders as an error with that message."""
    assert render("something broke", plain_config()) == "  × something broke\n"


def test_exception_input_renders_its_chain() -> None:
    """An exception renders its message followed by its cause chain."""
    try:
        try:
            raise ValueError("inner")
        except ValueError as e:
            raise RuntimeError("outer") from e
    except RuntimeError as exc:
        out: str = render(exc, plain_config())

    assert out == "  × outer\n  ╰─▶ caused by: inner\n"


def test_duck_typed_object() -> None:
    """Objects exposing diagnostic members render like the built-in model."""

    class Upstream:
        message = "upstream"
        severity = "warn"

        def code(self) -> str:
            return "up::1"

        labels = [(0, 3, "here")]
        source = "abc def"

    assert render(Upstream(), plain_config()) == (
        "up::1\n"
        "\n"
        "  ⚠ upstream\n"
        "   ╭─[1:1]\n"
        " 1 │ abc def\n"
        "   · ─┬─\n"
        "   ·  ╰── here\n"
        "   ╰────\n"
    )


def test_render_config_is_immutable() -> None:
    """Render configs are frozen."""
    config = RenderConfig()

    with pytest.raises(AttributeError):
        config.width = 10  # type: ignore[misc]


@pytest.mark.hypothesis_slow
@settings(max_examples=100, deadline=None)
@given(d=s_diagnostic())
def test_any_diagnostic_renders_newline_terminated(d: Diagnostic) -> None:
    """Rendering never fails and every line ends with a newline."""
    for config in (plain_config(), plain_config(unicode=diagmark.Toggle.OFF)):
        out: str = render(d, config)

        assert out.endswith("\n")
        assert render(d, config) == out
