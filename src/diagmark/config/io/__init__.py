# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O for DiagMark configuration.

Reading (`loaders`), typed value extraction (`getters`) and serialization
(`render`) are kept apart from `diagmark.config.model` so the model stays focused
on merge and sanitation policy.
"""

from __future__ import annotations

from .loaders import (
    CONFIG_FILE_NAMES,
    discover_config_file,
    extract_diagmark_table,
    load_toml_dict,
    parse_toml_text,
)
from .render import to_toml
from .types import TomlTable

__all__ = [
    "CONFIG_FILE_NAMES",
    "TomlTable",
    "discover_config_file",
    "extract_diagmark_table",
    "load_toml_dict",
    "parse_toml_text",
    "to_toml",
]
