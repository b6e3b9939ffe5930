# topmark:header:start
#
#   project      : DiagMark
#   file         : dump_config.py
#   file_relpath : src/diagmark/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark `dump-config` command.

Emits the effective render configuration as a ``[tool.diagmark]`` TOML table, after
applying defaults, discovered/explicit config files, CLI overrides and terminal
detection. The output is wrapped between ``# === BEGIN ===`` and ``# === END ===``
markers for easy parsing in tests or tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from diagmark.cli.cmd_common import build_render_config
from diagmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_render_options,
)
from diagmark.config.io.render import to_toml
from diagmark.config.logging import get_logger

if TYPE_CHECKING:
    from diagmark.cli_shared.console_api import ConsoleLike
    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.config.types import Palette, RenderMode

logger: DiagmarkLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the effective DiagMark render configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@common_render_options
def dump_config_command(
    *,
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
    """Dump the final merged configuration as TOML.

    Takes the same configuration options as `render`, so the dump shows exactly
    what a `render` call with these flags would use.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

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
    logger.trace("Config after merging CLI and discovered config: %s", config)

    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict(), section="tool.diagmark").rstrip("\n"))
    console.print("# === END ===")
