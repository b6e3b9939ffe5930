# topmark:header:start
#
#   project      : DiagMark
#   file         : render.py
#   file_relpath : src/diagmark/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark `render` command.

Loads a TOML report document (see `diagmark.diagnostic.report`) and prints the
rendered diagnostic to stdout. Terminal capabilities left on ``auto`` are resolved
from the environment: color from ``--color``/``NO_COLOR``/``FORCE_COLOR`` and TTY
detection, Unicode from the stdout encoding, and the output style from whether
stdout is a terminal.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from diagmark.cli.cmd_common import build_render_config
from diagmark.cli.console import ClickConsole
from diagmark.cli.errors import DiagmarkIOError, from_library_error
from diagmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_render_options,
)
from diagmark.config.logging import get_logger
from diagmark.core.errors import ReportFileError
from diagmark.diagnostic.report import load_report
from diagmark.rendering.api import render

if TYPE_CHECKING:
    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.config.types import Palette, RenderMode
    from diagmark.diagnostic.model import Diagnostic

logger: DiagmarkLogger = get_logger(__name__)


@click.command(
    name="render",
    help="Render the diagnostic described by the TOML report REPORT.",
    epilog=(
        "Exit codes: 0 success, 64 usage error, 65 malformed report, "
        "66 missing report or source file, 74 I/O error, 78 config error."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("report", type=click.Path(dir_okay=False, path_type=Path))
@common_config_options
@common_render_options
def render_command(
    *,
    report: Path,
    no_config: bool,
    config_paths: tuple[str, ...],
    render_mode: RenderMode | None,
    width: int | None,
    tab_width: int | None,
    context_lines: int | None,
    unicode: bool | None,
    links: bool | None,
    max_related_depth: int | None,
    palette: Palette | None,
) -> None:
    """Render a report file to stdout.

    Args:
        report (Path): The TOML report document.
        no_config (bool): Skip config discovery.
        config_paths (tuple[str, ...]): Extra config files to merge.
        render_mode (RenderMode | None): Output style override.
        width (int | None): Wrapping width override.
        tab_width (int | None): Tab stop override.
        context_lines (int | None): Context line override.
        unicode (bool | None): Unicode glyph override.
        links (bool | None): Hyperlink override.
        max_related_depth (int | None): Related depth override.
        palette (Palette | None): Palette override.

    Raises:
        DiagmarkCliError: Mapped from report, config and output failures.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)

    config: RenderConfig = build_render_config(
        ctx,
        no_config=no_config,
        config_paths=list(config_paths),
        render_mode=render_mode,
        width=width,
        tab_width=tab_width,
        context_lines=context_lines,
        unicode=unicode,
        links=links,
        max_related_depth=max_related_depth,
        palette=palette,
    )

    try:
        diagnostic: Diagnostic = load_report(report)
    except ReportFileError as e:
        raise from_library_error(e) from e

    text: str = render(diagnostic, config)
    console = ClickConsole(enable_color=config.color_enabled)
    try:
        console.print(text, nl=False)
    except OSError as e:
        logger.error("Cannot write rendered report: %s", e)
        raise DiagmarkIOError(f"Cannot write output: {e}") from e
