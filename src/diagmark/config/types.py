# topmark:header:start
#
#   project      : DiagMark
#   file         : types.py
#   file_relpath : src/diagmark/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enumerations used by the DiagMark render configuration.

All enums are `KeyedStrEnum`s: their ``.value`` is the token written in config files
and accepted on the command line, and ``parse()`` also accepts the listed aliases.
"""

from __future__ import annotations

from diagmark.core.enum_mixins import KeyedStrEnum


class Toggle(KeyedStrEnum):
    """Tri-state capability switch (``color``, ``unicode``, ``links``).

    ``AUTO`` never consults the environment inside the engine; see
    `RenderConfig.color_enabled` and friends for how it resolves.
    """

    AUTO = ("auto", "Automatic", ("default",))
    ON = ("on", "Enabled", ("always", "yes", "true", "1", "force", "enabled"))
    OFF = ("off", "Disabled", ("never", "no", "false", "0", "none", "disabled"))

    @classmethod
    def from_bool(cls, value: bool | None) -> Toggle:
        """Map a boolean (or None) onto a toggle: True→ON, False→OFF, None→AUTO."""
        if value is None:
            return cls.AUTO
        return cls.ON if value else cls.OFF


class RenderMode(KeyedStrEnum):
    """Which composer turns the layout plan into text."""

    GRAPHICAL = ("graphical", "Graphical (ANSI/Unicode)", ("fancy", "graphic", "ansi"))
    NARRATABLE = (
        "narratable",
        "Narratable (plain prose)",
        ("plain", "text", "screen_reader", "accessible"),
    )


class Palette(KeyedStrEnum):
    """Color palette applied to the logical style slots when color is enabled."""

    ANSI = ("ansi", "16-color ANSI", ("basic", "16"))
    RGB = ("rgb", "24-bit true color", ("truecolor", "24bit", "true_color"))
    NONE = ("none", "No styling", ("plain", "monochrome"))
