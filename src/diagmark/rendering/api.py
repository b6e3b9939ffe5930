# topmark:header:start
#
#   project      : DiagMark
#   file         : api.py
#   file_relpath : src/diagmark/rendering/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public rendering entry points.

`render` turns a diagnostic (or anything `as_diagnostic` accepts) into text using an
explicit `RenderConfig`; `render_to` writes that text to a stream in one call.
Rendering itself never raises on malformed input; only a failing write surfaces,
unmodified, to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from diagmark.config.logging import get_logger
from diagmark.config.model import RenderConfig, sanitize_config
from diagmark.config.types import RenderMode
from diagmark.rendering.graphical import GraphicalComposer
from diagmark.rendering.narratable import NarratableComposer
from diagmark.rendering.walker import walk

if TYPE_CHECKING:
    from typing import TextIO

    from diagmark.config.logging import DiagmarkLogger
    from diagmark.rendering.walker import RenderUnit

logger: DiagmarkLogger = get_logger(__name__)


def render(diagnostic: object, config: RenderConfig | None = None) -> str:
    """Render ``diagnostic`` to text.

    Args:
        diagnostic (object): A `Diagnostic`, a `DiagnosticLike` object, a string or
            an exception.
        config (RenderConfig | None): Render options; defaults to `RenderConfig()`.
            Out-of-range values are clamped.

    Returns:
        str: The report; every line (including the last) ends with ``"\\n"``.
    """
    effective: RenderConfig = sanitize_config(config or RenderConfig())
    units: list[RenderUnit] = list(walk(diagnostic, effective))
    if effective.mode is RenderMode.NARRATABLE:
        lines: list[str] = NarratableComposer(effective).compose(units)
    else:
        lines = GraphicalComposer(effective).compose(units)
    logger.debug(
        "Rendered %d unit(s) into %d line(s) (%s)", len(units), len(lines), effective.mode.key
    )
    return "".join(f"{line}\n" for line in lines)


def render_to(diagnostic: object, stream: TextIO, config: RenderConfig | None = None) -> None:
    """Render ``diagnostic`` and write the result to ``stream`` in a single write.

    Args:
        diagnostic (object): Anything accepted by `render`.
        stream (TextIO): Destination text stream.
        config (RenderConfig | None): Render options.

    Raises:
        OSError: Propagated unchanged when the stream fails to accept the text.
    """
    text: str = render(diagnostic, config)
    stream.write(text)
