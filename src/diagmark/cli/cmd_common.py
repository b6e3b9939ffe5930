# topmark:header:start
#
#   project      : DiagMark
#   file         : cmd_common.py
#   file_relpath : src/diagmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small helpers shared by several CLI commands: reading the
effective verbosity and resolving the layered `RenderConfig` from Click
parameters.

Resolution order (lowest → highest precedence):
  1. `RenderConfig` defaults.
  2. The discovered project config (``diagmark.toml`` or ``[tool.diagmark]`` in
     ``pyproject.toml``, nearest to the working directory), unless ``--no-config``.
  3. Explicit ``--config`` files, merged in order.
  4. CLI overrides.
  5. Terminal policy for options still set to ``auto`` (color, unicode, mode).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from diagmark.cli.errors import DiagmarkConfigError, from_library_error
from diagmark.cli_shared.color import (
    ColorMode,
    resolve_color_mode,
    resolve_render_mode,
    resolve_unicode,
)
from diagmark.config.io.loaders import discover_config_file
from diagmark.config.logging import get_logger
from diagmark.config.model import MutableRenderConfig
from diagmark.config.types import Toggle
from diagmark.core.errors import ConfigError

if TYPE_CHECKING:
    import click

    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.config.types import Palette, RenderMode

logger: DiagmarkLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored by the group (0 = terse)."""
    obj: object = ctx.find_root().obj
    if not isinstance(obj, dict):
        return 0
    return int(obj.get("verbosity_level", 0))


def load_config_layers(*, no_config: bool, config_paths: list[str]) -> MutableRenderConfig:
    """Merge the discovered and explicit config files into one draft.

    Raises:
        DiagmarkConfigError: If a config file is missing, unreadable or invalid.
    """
    draft = MutableRenderConfig()
    try:
        if not no_config:
            found: Path | None = discover_config_file(Path.cwd())
            if found is not None:
                logger.info("Loading project config: %s", found)
                draft = draft.merge_with(MutableRenderConfig.from_toml_file(found))
        for entry in config_paths:
            p = Path(entry)
            if not p.is_file():
                raise DiagmarkConfigError(f"Config file not found: {p}")
            logger.info("Loading explicit config: %s", p)
            draft = draft.merge_with(MutableRenderConfig.from_toml_file(p))
    except ConfigError as e:
        raise from_library_error(e) from e
    logger.trace("Merged config draft: %s", draft)
    return draft


def build_render_config(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: list[str],
    render_mode: RenderMode | None = None,
    width: int | None = None,
    tab_width: int | None = None,
    context_lines: int | None = None,
    unicode: bool | None = None,
    links: bool | None = None,
    max_related_depth: int | None = None,
    palette: Palette | None = None,
) -> RenderConfig:
    """Build the effective `RenderConfig` for a command.

    Args:
        ctx (click.Context): Click context holding the group state (``color_mode``).
        no_config (bool): Skip config discovery.
        config_paths (list[str]): Extra config files merged after discovery.
        render_mode (RenderMode | None): ``--format`` override.
        width (int | None): ``--width`` override.
        tab_width (int | None): ``--tab-width`` override.
        context_lines (int | None): ``--context-lines`` override.
        unicode (bool | None): ``--unicode/--ascii`` override.
        links (bool | None): ``--links/--no-links`` override.
        max_related_depth (int | None): ``--max-depth`` override.
        palette (Palette | None): ``--palette`` override.

    Returns:
        RenderConfig: The frozen, sanitized configuration with every ``auto``
        capability resolved against the terminal.

    Raises:
        DiagmarkConfigError: If a config file is missing or invalid.
    """
    draft: MutableRenderConfig = load_config_layers(
        no_config=no_config, config_paths=config_paths
    )

    cli_layer = MutableRenderConfig(
        width=width,
        tab_width=tab_width,
        context_lines=context_lines,
        unicode=Toggle.from_bool(unicode) if unicode is not None else None,
        links=Toggle.from_bool(links) if links is not None else None,
        max_related_depth=max_related_depth,
        mode=render_mode,
        palette=palette,
    )
    draft = draft.merge_with(cli_layer)

    obj: object = ctx.find_root().obj
    explicit_color: ColorMode | None = (
        obj.get("color_mode") if isinstance(obj, dict) else None
    )
    if explicit_color is not None and explicit_color is not ColorMode.AUTO:
        draft.color = Toggle.from_bool(explicit_color is ColorMode.ALWAYS)
    elif draft.color in (None, Toggle.AUTO):
        draft.color = Toggle.from_bool(resolve_color_mode(color_mode_override=None))

    if draft.unicode in (None, Toggle.AUTO):
        draft.unicode = Toggle.from_bool(resolve_unicode())

    draft.mode = resolve_render_mode(
        mode_override=draft.mode,
        color_forced=draft.color is Toggle.ON,
    )

    config: RenderConfig = draft.freeze()
    logger.debug("Effective render config: %s", config)
    return config
