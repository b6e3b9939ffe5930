# topmark:header:start
#
#   project      : DiagMark
#   file         : version.py
#   file_relpath : src/diagmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark `version` command.

Prints the current DiagMark version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from diagmark.cli.cmd_common import get_effective_verbosity
from diagmark.cli.options import CONTEXT_SETTINGS
from diagmark.constants import DIAGMARK_VERSION

if TYPE_CHECKING:
    from diagmark.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of DiagMark.",
    context_settings=CONTEXT_SETTINGS,
)
def version_command() -> None:
    """Show the current version of DiagMark."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("DiagMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(DIAGMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(DIAGMARK_VERSION, bold=True))
