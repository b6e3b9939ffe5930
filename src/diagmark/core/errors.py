# topmark:header:start
#
#   project      : DiagMark
#   file         : errors.py
#   file_relpath : src/diagmark/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Library-level exceptions for DiagMark.

Rendering itself never raises these: malformed spans clamp, missing sources
degrade and cyclic graphs are truncated. They are raised by the configuration
and report-loading layers, and translated into Click exceptions with
sysexits-aligned exit codes by the CLI (see `diagmark.cli.errors`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class DiagmarkError(Exception):
    """Base class for all DiagMark library errors."""


class ConfigError(DiagmarkError):
    """Invalid configuration value, or a config file that cannot be read or parsed.

    Attributes:
        path (Path | None): The offending config file, when the error relates to one.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ReportFileError(DiagmarkError):
    """Malformed or unreadable diagnostic report document.

    Attributes:
        path (Path | None): The report (or referenced source file) that failed.
        missing (bool): True when the error is caused by a file that does not exist.
    """

    def __init__(self, message: str, *, path: Path | None = None, missing: bool = False) -> None:
        super().__init__(message)
        self.path = path
        self.missing = missing
