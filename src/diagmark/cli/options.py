# topmark:header:start
#
#   project      : DiagMark
#   file         : options.py
#   file_relpath : src/diagmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the DiagMark CLI.

This module centralizes reusable options (verbosity, color, configuration files,
render settings) and their resolution logic, so commands and groups can stay thin.
The helpers here are Click-aware.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from diagmark.cli.cli_types import EnumChoiceParam
from diagmark.cli.errors import DiagmarkUsageError
from diagmark.cli_shared.color import ColorMode
from diagmark.config.logging import TRACE_LEVEL, get_logger
from diagmark.config.types import Palette, RenderMode

if TYPE_CHECKING:
    from collections.abc import Callable

    from diagmark.config.logging import DiagmarkLogger

P = ParamSpec("P")
R = TypeVar("R")

# Custom verbosity levels, mapped to standard logging levels
LOG_LEVELS: dict[str, int] = {
    "TRACE": TRACE_LEVEL,  # Custom TRACE (5) sits below logging.DEBUG.
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

logger: DiagmarkLogger = get_logger(__name__)

#: Click context settings shared by the group and its commands.
CONTEXT_SETTINGS: dict[str, list[str]] = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the final logging level based on verbose and quiet counts.

    Args:
        verbose_count (int): Number of times the verbose flag (-v) is passed.
        quiet_count (int): Number of times the quiet flag (-q) is passed.

    Returns:
        int: The logging level.

    Raises:
        DiagmarkUsageError: If both verbose and quiet flags are used simultaneously.

    Behavior:
        The --verbose and --quiet options are mutually exclusive.
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One or more -q flags set ERROR level.
        Default level is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise DiagmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return LOG_LEVELS["TRACE"]
    if verbose_count == 2:  # -vv
        return LOG_LEVELS["DEBUG"]
    if verbose_count == 1:  # -v
        return LOG_LEVELS["INFO"]

    if quiet_count >= 1:  # -q
        return LOG_LEVELS["ERROR"]

    return LOG_LEVELS["WARNING"]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Both options count occurrences, are mutually exclusive and control logging
    verbosity (see `resolve_verbosity`).
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only log errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --config and --no-config options to a command.

    Without --no-config, the nearest ``diagmark.toml`` or ``pyproject.toml`` (with a
    ``[tool.diagmark]`` table) above the working directory is merged first; each
    --config file is merged on top, in order.
    """
    f = click.option(
        "--config",
        "config_paths",
        type=click.Path(dir_okay=False, path_type=str),
        multiple=True,
        help="Merge settings from this TOML file (repeatable; later files win).",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Do not discover diagmark.toml / pyproject.toml automatically.",
    )(f)
    return f


def common_render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the render settings that override configuration values."""
    f = click.option(
        "-f",
        "--format",
        "render_mode",
        type=EnumChoiceParam(RenderMode),
        default=None,
        help="Output style: graphical or narratable (default: graphical on a terminal).",
    )(f)
    f = click.option(
        "--width",
        type=int,
        default=None,
        help="Terminal width used for wrapping (default: 80).",
    )(f)
    f = click.option(
        "--tab-width",
        "tab_width",
        type=int,
        default=None,
        help="Tab stop distance for source lines (default: 4).",
    )(f)
    f = click.option(
        "--context-lines",
        "context_lines",
        type=int,
        default=None,
        help="Lines of context around each label (default: 1).",
    )(f)
    f = click.option(
        "--unicode/--ascii",
        "unicode",
        default=None,
        help="Use Unicode box drawing (default: when stdout can encode it).",
    )(f)
    f = click.option(
        "--links/--no-links",
        "links",
        default=None,
        help="Emit terminal hyperlinks for diagnostic URLs (default: with color).",
    )(f)
    f = click.option(
        "--max-depth",
        "max_related_depth",
        type=int,
        default=None,
        help="Deepest level of related diagnostics to render (default: 8).",
    )(f)
    f = click.option(
        "--palette",
        type=EnumChoiceParam(Palette),
        default=None,
        help="Color palette: ansi, rgb or none.",
    )(f)
    return f
