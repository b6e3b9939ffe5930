# topmark:header:start
#
#   project      : DiagMark
#   file         : color.py
#   file_relpath : src/diagmark/cli_shared/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-independent terminal capability policy for DiagMark.

The rendering engine never inspects the environment: it receives explicit
`RenderConfig` toggles. This module is where the CLI turns flags, environment
variables and stream properties into those toggles:

- `ColorMode` and `resolve_color_mode()`: ``--color``, ``FORCE_COLOR``,
  ``NO_COLOR`` and TTY detection.
- `resolve_unicode()`: whether the output stream's encoding can carry
  box-drawing glyphs.
- `resolve_render_mode()`: graphical output for terminals, narratable prose
  otherwise.

These helpers are deliberately kept Click-free so they can be reused from other
frontends or tests.
"""

from __future__ import annotations

import codecs
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING

from diagmark.config.logging import get_logger
from diagmark.config.types import RenderMode

if TYPE_CHECKING:
    from typing import TextIO

    from diagmark.config.logging import DiagmarkLogger


logger: DiagmarkLogger = get_logger(__name__)


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when appropriate (typically when stdout is a TTY).
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def _isatty(stream: TextIO | None) -> bool:
    target: TextIO = stream or sys.stdout
    try:
        return target.isatty()
    except (AttributeError, OSError, ValueError):
        return False


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
        2. **Environment**:
            - ``FORCE_COLOR`` (set and not equal to ``"0"``) → True
            - ``NO_COLOR`` (set to any value) → False
        3. **Auto**: ``stdout.isatty()``.

    Args:
        color_mode_override (ColorMode | None): Parsed ``--color`` value;
            ``None`` means "not provided".
        stdout_isatty (bool | None): Optional override for TTY detection.

    Returns:
        bool: True if ANSI color should be enabled.

    Examples:
        >>> resolve_color_mode(color_mode_override=ColorMode.NEVER)
        False
        >>> resolve_color_mode(color_mode_override=None, stdout_isatty=True)
        True  # unless NO_COLOR is set
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        stdout_isatty = _isatty(None)
    return bool(stdout_isatty)


def resolve_unicode(stream: TextIO | None = None) -> bool:
    """Return True when ``stream`` (default: stdout) can encode box-drawing glyphs."""
    target: TextIO = stream or sys.stdout
    encoding: str | None = getattr(target, "encoding", None)
    if not encoding:
        return False
    try:
        name: str = codecs.lookup(encoding).name
    except LookupError:
        logger.debug("Unknown output encoding %r; using ASCII glyphs", encoding)
        return False
    return name.startswith("utf")


def resolve_render_mode(
    *,
    mode_override: RenderMode | None,
    color_forced: bool,
    stdout_isatty: bool | None = None,
) -> RenderMode:
    """Choose graphical or narratable output.

    An explicit ``--format`` wins. Otherwise graphical output is used on a TTY or
    when color was explicitly forced, and narratable prose when piped.
    """
    if mode_override is not None:
        return mode_override
    if stdout_isatty is None:
        stdout_isatty = _isatty(None)
    return RenderMode.GRAPHICAL if stdout_isatty or color_forced else RenderMode.NARRATABLE
