# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for DiagMark rendering.

Notes:
    - Build configs using `MutableRenderConfig` (mutable), then `freeze()` into a
      `RenderConfig` for render calls.
    - Do **not** try to mutate a frozen `RenderConfig`. Call `RenderConfig.thaw()`,
      edit the returned builder, then `freeze()` again.
"""

from __future__ import annotations

from .model import MutableRenderConfig, RenderConfig, sanitize_config
from .types import Palette, RenderMode, Toggle

__all__ = [
    "MutableRenderConfig",
    "Palette",
    "RenderConfig",
    "RenderMode",
    "Toggle",
    "sanitize_config",
]
