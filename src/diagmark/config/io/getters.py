# topmark:header:start
#
#   project      : DiagMark
#   file         : getters.py
#   file_relpath : src/diagmark/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML tables.

These helpers extract optional values from parsed TOML tables (config files and
report documents). A missing key yields ``None``; a key that is present with the
wrong shape raises `ConfigError` naming the offending location (``where.key``), so
user mistakes surface instead of being silently ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, TypeVar

from diagmark.config.logging import get_logger
from diagmark.core.errors import ConfigError

if TYPE_CHECKING:
    from diagmark.config.logging import DiagmarkLogger
    from diagmark.core.enum_mixins import KeyedStrEnum

    from .types import TomlTable

logger: DiagmarkLogger = get_logger(__name__)

E = TypeVar("E", bound="KeyedStrEnum")


def _fail(where: str, key: str, expected: str, value: Any) -> ConfigError:
    loc: Final[str] = f"{where}.{key}" if where else key
    logger.warning("Expected %s in %s, got %s: %r", expected, loc, type(value).__name__, value)
    return ConfigError(f"Expected {expected} in {loc}, got {type(value).__name__}: {value!r}")


def get_int_or_none(table: TomlTable, key: str, *, where: str = "") -> int | None:
    """Return an optional integer value.

    Booleans are rejected even though ``bool`` subclasses ``int`` in Python.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        where (str): Dotted table path used in error messages.

    Returns:
        int | None: The value, or ``None`` when the key is absent.

    Raises:
        ConfigError: If the value is present but not an integer.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(where, key, "integer", value)
    return value


def get_string_or_none(table: TomlTable, key: str, *, where: str = "") -> str | None:
    """Return an optional string value (no coercion from other scalar types).

    Raises:
        ConfigError: If the value is present but not a string.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _fail(where, key, "string", value)
    return value


def get_string_list(table: TomlTable, key: str, *, where: str = "") -> list[str]:
    """Return a list of strings, or an empty list when the key is absent.

    Raises:
        ConfigError: If the value is not a list, or an item is not a string.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _fail(where, key, "array of strings", value)
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise _fail(where, key, "array of strings", value)
        out.append(item)
    return out


def get_table_list(table: TomlTable, key: str, *, where: str = "") -> list[TomlTable]:
    """Return an array of tables (``[[key]]``), or an empty list when absent.

    Raises:
        ConfigError: If the value is not an array of tables.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise _fail(where, key, "array of tables", value)
    return list(value)


def get_enum_or_none(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str = "",
) -> E | None:
    """Return an optional `KeyedStrEnum` member parsed from a string token.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        enum_cls (type[E]): The enum to parse into (keys and aliases are accepted).
        where (str): Dotted table path used in error messages.

    Returns:
        E | None: The parsed member, or ``None`` when the key is absent.

    Raises:
        ConfigError: If the value is not a string or is not a known token.
    """
    raw: str | None = get_string_or_none(table, key, where=where)
    if raw is None:
        return None
    member: E | None = enum_cls.parse(raw)
    if member is None:
        loc: str = f"{where}.{key}" if where else key
        raise ConfigError(
            f"Invalid value {raw!r} for {loc}; expected one of: {', '.join(enum_cls.keys())}"
        )
    return member
