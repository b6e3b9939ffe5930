# topmark:header:start
#
#   project      : DiagMark
#   file         : model.py
#   file_relpath : src/diagmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render configuration model (immutable snapshot + mutable builder).

`RenderConfig` is the frozen value threaded explicitly through every render call;
nothing in the engine reads process-wide state. `MutableRenderConfig` is the
builder used while layering sources (defaults, config files, CLI flags): every
field is optional (``None`` = inherit), `merge_with` applies last-wins
precedence, and `freeze` sanitizes and produces a `RenderConfig`.

Symmetry:
    Prefer thaw → edit → freeze over constructing modified copies by hand; a frozen
    `RenderConfig` built directly with out-of-range values is clamped by
    `sanitize_config` at the render entry point.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from diagmark.config.io.getters import get_enum_or_none, get_int_or_none, get_string_or_none
from diagmark.config.io.loaders import extract_diagmark_table, load_toml_dict
from diagmark.config.logging import get_logger
from diagmark.config.types import Palette, RenderMode, Toggle
from diagmark.core.errors import ConfigError

if TYPE_CHECKING:
    from diagmark.config.io.types import TomlTable
    from diagmark.config.logging import DiagmarkLogger

logger: DiagmarkLogger = get_logger(__name__)

# Sanitation bounds (inclusive).
MIN_WIDTH: Final[int] = 20
MIN_TAB_WIDTH: Final[int] = 1
MAX_TAB_WIDTH: Final[int] = 16
MAX_CONTEXT_LINES: Final[int] = 32
MIN_MAX_LABELS: Final[int] = 1

_TOGGLE_KEYS: Final[tuple[str, ...]] = ("color", "unicode", "links")


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable rendering configuration.

    Attributes:
        width (int): Terminal width in display columns used for wrapping free text.
        tab_width (int): Tab stop distance used when expanding source lines.
        context_lines (int): Lines of context shown above and below each label.
        color (Toggle): ANSI styling. ``AUTO`` resolves to off inside the engine.
        unicode (Toggle): Unicode box-drawing glyphs and display-width math.
            ``AUTO`` resolves to on.
        links (Toggle): OSC 8 terminal hyperlinks for the diagnostic URL.
            ``AUTO`` follows the resolved color setting.
        max_related_depth (int): Deepest level of related diagnostics rendered
            before a truncation marker is emitted.
        max_labels (int): Upper bound on labels laid out per diagnostic; extras are
            dropped (with a logged warning).
        mode (RenderMode): Graphical or narratable output.
        palette (Palette): Color palette used when color is enabled.
        footer (str | None): Optional text appended after the root report.
    """

    width: int = 80
    tab_width: int = 4
    context_lines: int = 1
    color: Toggle = Toggle.AUTO
    unicode: Toggle = Toggle.AUTO
    links: Toggle = Toggle.AUTO
    max_related_depth: int = 8
    max_labels: int = 256
    mode: RenderMode = RenderMode.GRAPHICAL
    palette: Palette = Palette.ANSI
    footer: str | None = None

    @property
    def color_enabled(self) -> bool:
        """Whether ANSI styles are emitted (``AUTO`` means off)."""
        return self.color is Toggle.ON and self.palette is not Palette.NONE

    @property
    def unicode_enabled(self) -> bool:
        """Whether Unicode glyphs and wcwidth-based width math are used (``AUTO`` means on)."""
        return self.unicode is not Toggle.OFF

    @property
    def links_enabled(self) -> bool:
        """Whether URLs are emitted as OSC 8 hyperlinks (``AUTO`` follows color)."""
        if self.links is Toggle.AUTO:
            return self.color_enabled
        return self.links is Toggle.ON

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (enum keys as strings)."""
        out: TomlTable = {}
        for f in fields(self):
            value: Any = getattr(self, f.name)
            out[f.name] = value.value if isinstance(value, (Toggle, RenderMode, Palette)) else value
        return out

    def thaw(self) -> MutableRenderConfig:
        """Return a mutable copy of this frozen config.

        Returns:
            MutableRenderConfig: A builder with every field explicitly set.
        """
        return MutableRenderConfig(
            width=self.width,
            tab_width=self.tab_width,
            context_lines=self.context_lines,
            color=self.color,
            unicode=self.unicode,
            links=self.links,
            max_related_depth=self.max_related_depth,
            max_labels=self.max_labels,
            mode=self.mode,
            palette=self.palette,
            footer=self.footer,
            config_files=[],
        )


def sanitize_config(config: RenderConfig) -> RenderConfig:
    """Return ``config`` with out-of-range values clamped.

    Thaws the config into a builder, sanitizes and freezes again. Returns the same
    object when nothing needed clamping.
    """
    m: MutableRenderConfig = config.thaw()
    frozen: RenderConfig = m.freeze()
    return config if frozen == config else frozen


# -------------------------- Mutable builder --------------------------


def _clamp(name: str, value: int, lo: int, hi: int | None = None) -> int:
    clamped: int = max(lo, value)
    if hi is not None:
        clamped = min(hi, clamped)
    if clamped != value:
        logger.warning("Config value %s=%d out of range; using %d", name, value, clamped)
    return clamped


def _get_toggle(table: TomlTable, key: str, *, where: str) -> Toggle | None:
    value: Any = table.get(key)
    if isinstance(value, bool):
        return Toggle.from_bool(value)
    return get_enum_or_none(table, key, Toggle, where=where)


@dataclass
class MutableRenderConfig:
    """Mutable render configuration used while layering config sources.

    Every option is tri-state-ish: ``None`` means "not set here, inherit".

    Attributes:
        config_files (list[Path | str]): Provenance of merged config sources.
    """

    width: int | None = None
    tab_width: int | None = None
    context_lines: int | None = None
    color: Toggle | None = None
    unicode: Toggle | None = None
    links: Toggle | None = None
    max_related_depth: int | None = None
    max_labels: int | None = None
    mode: RenderMode | None = None
    palette: Palette | None = None
    footer: str | None = None

    config_files: list[Path | str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def sanitize(self) -> None:
        """Clamp numeric options into their supported ranges (logging a warning)."""
        if self.width is not None:
            self.width = _clamp("width", self.width, MIN_WIDTH)
        if self.tab_width is not None:
            self.tab_width = _clamp("tab_width", self.tab_width, MIN_TAB_WIDTH, MAX_TAB_WIDTH)
        if self.context_lines is not None:
            self.context_lines = _clamp("context_lines", self.context_lines, 0, MAX_CONTEXT_LINES)
        if self.max_related_depth is not None:
            self.max_related_depth = _clamp("max_related_depth", self.max_related_depth, 0)
        if self.max_labels is not None:
            self.max_labels = _clamp("max_labels", self.max_labels, MIN_MAX_LABELS)

    def freeze(self) -> RenderConfig:
        """Sanitize and freeze this builder into an immutable `RenderConfig`.

        Unset fields take the `RenderConfig` defaults.
        """
        self.sanitize()
        defaults = RenderConfig()
        return RenderConfig(
            width=self.width if self.width is not None else defaults.width,
            tab_width=self.tab_width if self.tab_width is not None else defaults.tab_width,
            context_lines=self.context_lines
            if self.context_lines is not None
            else defaults.context_lines,
            color=self.color or defaults.color,
            unicode=self.unicode or defaults.unicode,
            links=self.links or defaults.links,
            max_related_depth=self.max_related_depth
            if self.max_related_depth is not None
            else defaults.max_related_depth,
            max_labels=self.max_labels if self.max_labels is not None else defaults.max_labels,
            mode=self.mode or defaults.mode,
            palette=self.palette or defaults.palette,
            footer=self.footer if self.footer is not None else defaults.footer,
        )

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableRenderConfig) -> MutableRenderConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableRenderConfig): The config whose set values win.

        Returns:
            MutableRenderConfig: A new mutable configuration representing the merged result.
        """
        merged = MutableRenderConfig(config_files=self.config_files + other.config_files)
        for f in fields(self):
            if f.name == "config_files":
                continue
            theirs: Any = getattr(other, f.name)
            setattr(merged, f.name, theirs if theirs is not None else getattr(self, f.name))
        return merged

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_toml_dict(cls, table: TomlTable, *, where: str = "diagmark") -> MutableRenderConfig:
        """Build a draft from a DiagMark settings table.

        Unknown keys are logged and ignored; known keys with invalid values raise.

        Args:
            table (TomlTable): The ``[tool.diagmark]`` table (or ``diagmark.toml`` top level).
            where (str): Table path used in error messages.

        Returns:
            MutableRenderConfig: The parsed draft.

        Raises:
            ConfigError: If a known key has the wrong type or an unknown token.
        """
        known: set[str] = {f.name for f in fields(cls)} - {"config_files"}
        for key in table:
            if key not in known:
                logger.warning("Ignoring unknown config key %s.%s", where, key)

        draft = cls(
            width=get_int_or_none(table, "width", where=where),
            tab_width=get_int_or_none(table, "tab_width", where=where),
            context_lines=get_int_or_none(table, "context_lines", where=where),
            max_related_depth=get_int_or_none(table, "max_related_depth", where=where),
            max_labels=get_int_or_none(table, "max_labels", where=where),
            mode=get_enum_or_none(table, "mode", RenderMode, where=where),
            palette=get_enum_or_none(table, "palette", Palette, where=where),
            footer=get_string_or_none(table, "footer", where=where),
        )
        for key in _TOGGLE_KEYS:
            setattr(draft, key, _get_toggle(table, key, where=where))
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRenderConfig:
        """Load a draft from ``diagmark.toml`` or the ``[tool.diagmark]`` table of ``pyproject.toml``.

        A ``pyproject.toml`` without a ``[tool.diagmark]`` table yields an empty draft.

        Raises:
            ConfigError: If the file cannot be read or holds invalid settings.
        """
        data: TomlTable = load_toml_dict(path)
        table: TomlTable | None = extract_diagmark_table(data, path)
        if table is None:
            logger.debug("No [tool.diagmark] table in %s", path)
            draft = cls()
        else:
            where: str = "tool.diagmark" if path.name == "pyproject.toml" else path.name
            try:
                draft = cls.from_toml_dict(table, where=where)
            except ConfigError as e:
                e.path = path
                raise
        draft.config_files.append(path)
        logger.debug("Loaded config from %s", path)
        return draft
