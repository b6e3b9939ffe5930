# topmark:header:start
#
#   project      : DiagMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the DiagMark test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs with `plain_config()` / `RenderConfig(...)` and pass them
      explicitly to `diagmark.render`.
    - Do **not** mutate a frozen `RenderConfig`. If you need to tweak one,
      call `RenderConfig.thaw()`, edit the returned `MutableRenderConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Final, TypeVar, cast

import pytest

from diagmark.config import RenderConfig, Toggle
from diagmark.config import logging as diagmark_logging
from diagmark.diagnostic.model import Diagnostic, NamedSource

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

#: The three-line source used throughout the rendering tests.
SAMPLE_SOURCE: Final[str] = "source\n  text\n    here"

_ANSI_RE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_diagmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure DiagMark's runtime log level and color policy are not forced via env.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("DIAGMARK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure TRACE logging for the whole test suite.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    diagmark_logging.setup_logging(level=diagmark_logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an empty project directory so config discovery finds nothing.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The isolated working directory (contains a `diagmark.toml` with no
            settings, which stops discovery from climbing further up).
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "diagmark.toml").write_text("", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


def plain_config(**overrides: Any) -> RenderConfig:
    """Return a deterministic config: Unicode glyphs, no color, no links.

    Args:
        **overrides (Any): Field values replacing the defaults.

    Returns:
        RenderConfig: The frozen configuration.
    """
    values: dict[str, Any] = {
        "color": Toggle.OFF,
        "unicode": Toggle.ON,
        "links": Toggle.OFF,
    }
    values.update(overrides)
    return RenderConfig(**values)


def sample_diagnostic() -> Diagnostic:
    """Return the canonical ``oops!`` diagnostic over `SAMPLE_SOURCE`."""
    return (
        Diagnostic("oops!")
        .with_code("oops::my::bad")
        .with_help("try doing it better next time?")
        .with_source(NamedSource("bad_file.rs", SAMPLE_SOURCE))
        .with_label(9, 4, "this bit here")
    )


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)
