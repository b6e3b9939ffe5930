# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across DiagMark.

The ``diagmark.core`` package provides small building blocks that are safe to
import from anywhere in the codebase (CLI, config, rendering, tests):

- ``enum_mixins``
  Typing-friendly Enum utilities (keys, labels, aliases, parsing).

- ``errors``
  The library exception hierarchy, independent of the CLI.

- ``width``
  Display-width measurement for terminal columns (wide glyphs, combining marks).
"""

from __future__ import annotations
