# topmark:header:start
#
#   project      : DiagMark
#   file         : main.py
#   file_relpath : src/diagmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark command-line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into ``ctx.obj``.
- Subcommands resolve their own `RenderConfig` through `diagmark.cli.cmd_common`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from diagmark.cli.commands.dump_config import dump_config_command
from diagmark.cli.commands.render import render_command
from diagmark.cli.commands.version import version_command
from diagmark.cli.console import ClickConsole
from diagmark.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from diagmark.cli_shared.color import ColorMode, resolve_color_mode
from diagmark.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from diagmark.cli_shared.console_api import ConsoleLike
    from diagmark.config.logging import DiagmarkLogger

logger: DiagmarkLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbose

    # DIAGMARK_LOG_LEVEL wins over -v/-q for internal logging.
    level_env: int | None = resolve_env_log_level()
    log_level: int = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    explicit: ColorMode | None = ColorMode.NEVER if no_color else color_mode
    ctx.obj["color_mode"] = explicit
    enable_color: bool = resolve_color_mode(color_mode_override=explicit)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)
    logger.trace("CLI state: %s", ctx.obj)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="DiagMark: render compiler-style diagnostics with annotated source snippets.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the DiagMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'diagmark render REPORT.toml' to render a diagnostic report.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(render_command)

cli.add_command(dump_config_command)

if __name__ == "__main__":
    cli()
