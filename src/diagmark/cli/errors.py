# topmark:header:start
#
#   project      : DiagMark
#   file         : errors.py
#   file_relpath : src/diagmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the DiagMark CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. `from_library_error()` maps library exceptions
    (`ConfigError`, `ReportFileError`) onto the matching CLI error.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from diagmark.cli_shared.exit_codes import ExitCode
from diagmark.core.errors import ConfigError, DiagmarkError, ReportFileError


class DiagmarkCliError(click.ClickException):
    """Base class for all DiagMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class DiagmarkUsageError(DiagmarkCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class DiagmarkReportError(DiagmarkCliError):
    """Error for malformed report documents or undecodable input."""

    exit_code = ExitCode.REPORT_ERROR


class DiagmarkFileNotFoundError(DiagmarkCliError):
    """Error when a report or source file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class DiagmarkIOError(DiagmarkCliError):
    """Error for I/O errors reading input or writing output."""

    exit_code = ExitCode.IO_ERROR


class DiagmarkConfigError(DiagmarkCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


def from_library_error(exc: DiagmarkError) -> DiagmarkCliError:
    """Return the CLI error matching a library exception."""
    if isinstance(exc, ConfigError):
        return DiagmarkConfigError(str(exc))
    if isinstance(exc, ReportFileError):
        if exc.missing:
            return DiagmarkFileNotFoundError(str(exc))
        if isinstance(exc.__cause__, OSError):
            return DiagmarkIOError(str(exc))
        return DiagmarkReportError(str(exc))
    return DiagmarkCliError(str(exc))
