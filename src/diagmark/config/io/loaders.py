# topmark:header:start
#
#   project      : DiagMark
#   file         : loaders.py
#   file_relpath : src/diagmark/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading DiagMark configuration from on-disk
TOML files (``diagmark.toml`` / ``pyproject.toml``) and for locating them.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from diagmark.config.logging import get_logger
from diagmark.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from diagmark.config.logging import DiagmarkLogger

    from .types import TomlTable

logger: DiagmarkLogger = get_logger(__name__)

#: Config file names, in discovery precedence order (per directory).
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = ("diagmark.toml", "pyproject.toml")


def parse_toml_text(text: str, *, origin: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain ``dict``.

    Args:
        text (str): TOML document text.
        origin (str): Human-readable origin used in error messages.

    Returns:
        TomlTable: The unwrapped top-level table.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", origin, e)
        raise ConfigError(f"Invalid TOML in {origin}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (e.g., ``diagmark.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read {path}: {e}", path=path) from e
    except UnicodeDecodeError as e:
        logger.error("Error decoding %s as UTF-8: %s", path, e)
        raise ConfigError(f"Cannot decode {path} as UTF-8: {e}", path=path) from e
    try:
        return parse_toml_text(text, origin=str(path))
    except ConfigError as e:
        e.path = path
        raise


def extract_diagmark_table(data: TomlTable, path: Path) -> TomlTable | None:
    """Return the DiagMark settings table of a parsed config document.

    ``pyproject.toml`` keeps settings under ``[tool.diagmark]``; a dedicated
    ``diagmark.toml`` keeps them at the top level.

    Returns:
        TomlTable | None: The settings table, or ``None`` when a ``pyproject.toml``
        has no ``[tool.diagmark]`` section.
    """
    if path.name != "pyproject.toml":
        return data
    tool: Any = data.get("tool")
    if not isinstance(tool, dict):
        return None
    section: Any = tool.get("diagmark")
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError(f"[tool.diagmark] in {path} must be a table", path=path)
    return cast("TomlTable", section)


def discover_config_file(start: Path) -> Path | None:
    """Walk from ``start`` up to the filesystem root looking for a config file.

    In each directory, ``diagmark.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts when it has a ``[tool.diagmark]`` table.

    Args:
        start (Path): Directory (or file, whose parent is used) to start from.

    Returns:
        Path | None: The first matching config file, or ``None``.
    """
    here: Path = start.resolve()
    if here.is_file():
        here = here.parent
    for directory in (here, *here.parents):
        for name in CONFIG_FILE_NAMES:
            candidate: Path = directory / name
            if not candidate.is_file():
                continue
            if name == "pyproject.toml":
                try:
                    table = extract_diagmark_table(load_toml_dict(candidate), candidate)
                except ConfigError as e:
                    logger.debug("Skipping unreadable %s: %s", candidate, e)
                    continue
                if table is None:
                    continue
            logger.debug("Discovered config file: %s", candidate)
            return candidate
    return None
