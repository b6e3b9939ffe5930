# topmark:header:start
#
#   project      : DiagMark
#   file         : narratable.py
#   file_relpath : src/diagmark/rendering/narratable.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Narratable composer: linear plain-prose reports for screen readers.

The output is built from the same `RenderPlan` as the graphical composer but
contains no glyphs, no color and no wrapping, so it never depends on terminal width
or capabilities:

```text
Error: oops!

Begin snippet for bad_file.rs starting at line 1, column 1

snippet line 1: source
snippet line 2:   text
    highlight starting at line 2, column 3: this bit here
snippet line 3:     here

diagnostic help: try doing it better next time?
diagnostic code: oops::my::bad
```

Cause-chain entries (`    Caused by: ...`) follow the severity lines, before the
first snippet.

Columns are 1-based character columns; a highlight's end column is the column of
its last covered character.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from diagmark.diagnostic.types import Severity
from diagmark.layout.engine import build_plan
from diagmark.layout.plan import Context, UnavailableSource
from diagmark.rendering.walker import UnitKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from diagmark.config.model import RenderConfig
    from diagmark.diagnostic.model import Diagnostic
    from diagmark.layout.plan import PlacedLabel, RenderPlan
    from diagmark.rendering.walker import RenderUnit


def _highlight(label: PlacedLabel) -> str:
    span = label.span
    sentence: str = (
        f"    highlight starting at line {span.start_line}, column {span.start_column}"
    )
    if span.multiline:
        sentence += f" and ending at line {span.end_line}, column {span.end_column}"
    return f"{sentence}: {label.text if label.text is not None else 'this'}"


def _caused_by(text: str) -> str:
    return f"    Caused by: {text}"


class NarratableComposer:
    """Compose narratable reports.

    Args:
        config (RenderConfig): A sanitized render configuration; only the layout
            options (tab width, context lines, label cap, depth, footer) matter.
    """

    def __init__(self, config: RenderConfig) -> None:
        self.config = config

    def compose(self, units: Iterable[RenderUnit]) -> list[str]:
        """Render a walker sequence into output lines (without newlines).

        Causes are announced right after the severity line; the snippets and the
        closing sentences of a diagnostic wait until its cause units are done.
        """
        out: list[str] = []
        body: list[str] = []
        for unit in units:
            if unit.kind is not UnitKind.CAUSE:
                out.extend(body)
                body = []
            if unit.kind is UnitKind.DIAGNOSTIC and unit.diagnostic is not None:
                if unit.depth:
                    out.append("")
                head, body = self.diagnostic_parts(unit.diagnostic, root=unit.depth == 0)
                out.extend(head)
            elif unit.kind is UnitKind.CAUSE:
                out.append(_caused_by(unit.text))
            elif unit.reason is not None:
                out.extend(["", f"Related diagnostic omitted: {unit.reason.value}."])
        out.extend(body)
        return [line.rstrip() for line in out]

    def diagnostic_lines(self, diagnostic: Diagnostic, *, root: bool = True) -> list[str]:
        """Render one diagnostic, causes included."""
        head, tail = self.diagnostic_parts(diagnostic, root=root)
        return head + [_caused_by(cause) for cause in diagnostic.causes] + tail

    def diagnostic_parts(
        self, diagnostic: Diagnostic, *, root: bool = True
    ) -> tuple[list[str], list[str]]:
        """Render one diagnostic as the lines before and after its cause chain."""
        head: list[str] = [f"{diagnostic.severity.label}: {diagnostic.message}"]
        if diagnostic.severity is not Severity.ERROR:
            head.append(f"    Diagnostic severity: {diagnostic.severity.key}")

        lines: list[str] = []
        plan: RenderPlan = build_plan(diagnostic, self.config)
        for section in plan.sections:
            lines.append("")
            if isinstance(section, Context):
                lines.extend(self._context_lines(section))
            elif isinstance(section, UnavailableSource):
                lines.extend(self._unavailable_lines(section))
        if plan.sections:
            lines.append("")

        if diagnostic.help is not None:
            lines.append(f"diagnostic help: {diagnostic.help}")
        if diagnostic.code is not None:
            lines.append(f"diagnostic code: {diagnostic.code}")
        if diagnostic.url is not None:
            lines.append(f"For more details, see {diagnostic.url}")
        if root and self.config.footer:
            lines.append(self.config.footer)
        return head, lines

    def _context_lines(self, ctx: Context) -> list[str]:
        header: str = "Begin snippet"
        if ctx.source_name:
            header += f" for {ctx.source_name}"
        header += f" starting at line {ctx.first_line}, column 1"
        lines: list[str] = [header, ""]
        for line in ctx.lines:
            lines.append(f"snippet line {line.number}: {line.info.text}")
            for label in ctx.labels:
                if label.span.start_line == line.number:
                    lines.append(_highlight(label))
        return lines

    def _unavailable_lines(self, section: UnavailableSource) -> list[str]:
        header: str = "Source text unavailable"
        if section.source_name:
            header += f" for {section.source_name}"
        lines: list[str] = [header]
        for label in section.labels:
            text: str = label.text if label.text is not None else "this"
            lines.append(f"    highlight at offset {label.offset}, length {label.length}: {text}")
        return lines
