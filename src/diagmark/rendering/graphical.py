# topmark:header:start
#
#   project      : DiagMark
#   file         : graphical.py
#   file_relpath : src/diagmark/rendering/graphical.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Graphical composer: annotated source snippets with gutters and underlines.

Output shape of one diagnostic (Unicode theme, no color):

```text
oops::my::bad

  × oops!
   ╭─[bad_file.rs:1:1]
 1 │ source
 2 │   text
   ·   ──┬─
   ·     ╰── this bit here
 3 │     here
   ╰────
  help: try doing it better next time?
```

Cause-chain entries hang from the message line (`├─▶`, `╰─▶ caused by: ...`)
ahead of the snippets; help and the footer come last.

Each source line is followed by its underline rows (one per row assigned by the
layout engine), then the label texts right to left, then the label texts of
multiline brackets ending on that line. Multiline brackets live in a gutter
between the line-number column and the source text, one lane per bracket.

All positions are display columns (see `diagmark.core.width`), so wide glyphs and
tabs keep underlines aligned. Colors are applied per cell group by `LineCanvas`
and never move anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from diagmark.config.logging import get_logger
from diagmark.config.model import MIN_WIDTH
from diagmark.layout.engine import build_plan
from diagmark.layout.plan import Context, UnavailableSource
from diagmark.rendering.canvas import LineCanvas
from diagmark.rendering.theme import GraphicalTheme
from diagmark.rendering.walker import UnitKind
from diagmark.rendering.wrap import wrap

if TYPE_CHECKING:
    from collections.abc import Iterable

    from diagmark.config.logging import DiagmarkLogger
    from diagmark.config.model import RenderConfig
    from diagmark.diagnostic.model import Diagnostic
    from diagmark.layout.plan import PlacedLabel, PlanLine, RenderPlan
    from diagmark.rendering.theme import Colorizer
    from diagmark.rendering.walker import RenderUnit, TruncationReason

logger: DiagmarkLogger = get_logger(__name__)

# Narrowest column budget offered to label text before it wraps word by word.
MIN_LABEL_WIDTH: Final[int] = 10

OSC8_OPEN: Final[str] = "\x1b]8;;{url}\x1b\\"
OSC8_CLOSE: Final[str] = "\x1b]8;;\x1b\\"


def _styled_prefix(prefix: str, style: Colorizer | None) -> str:
    """Style the visible part of ``prefix``, keeping surrounding blanks plain."""
    core: str = prefix.strip()
    if style is None or not core:
        return prefix
    lead: int = len(prefix) - len(prefix.lstrip())
    trail: str = prefix[len(prefix.rstrip()) :]
    return prefix[:lead] + style(core) + trail


def _indented(lines: list[str], indent: str) -> list[str]:
    return [(indent + line).rstrip() if line else "" for line in lines]


def _continues(label: PlacedLabel | None, number: int) -> bool:
    """Whether a bracket's vertical bar runs below line ``number``."""
    return label is not None and label.span.start_line <= number < label.span.end_line


def _text_column(ctx: Context) -> int:
    """Display column where source text starts (after line numbers and bracket lanes)."""
    return ctx.line_number_width + 4 + (ctx.lane_count + 3 if ctx.lane_count else 0)


class GraphicalComposer:
    """Compose graphical reports.

    Args:
        config (RenderConfig): A sanitized render configuration.
        theme (GraphicalTheme | None): Glyphs and styles; derived from ``config``
            when omitted.
    """

    def __init__(self, config: RenderConfig, theme: GraphicalTheme | None = None) -> None:
        self.config = config
        self.theme = theme or GraphicalTheme.from_config(config)
        self.unicode = config.unicode_enabled
        self.links = config.links_enabled

    # ------------------------------------------------------------------ units

    def compose(self, units: Iterable[RenderUnit]) -> list[str]:
        """Render a walker sequence into output lines (without newlines).

        A diagnostic's cause units hang from its message line, so its snippets,
        help and footer are held back until the next non-cause unit. Nested units
        are indented two columns per depth level and wrapped to the
        correspondingly reduced width.
        """
        out: list[str] = []
        body: list[str] = []
        for unit in units:
            if unit.kind is not UnitKind.CAUSE:
                out.extend(body)
                body = []
            indent: str = "  " * unit.depth
            width: int = max(self.config.width - 2 * unit.depth, MIN_WIDTH)
            if unit.kind is UnitKind.DIAGNOSTIC and unit.diagnostic is not None:
                if unit.depth:
                    out.append("")
                head, tail = self.diagnostic_parts(
                    unit.diagnostic, width=width, root=unit.depth == 0
                )
                out.extend(_indented(head, indent))
                body = _indented(tail, indent)
            elif unit.kind is UnitKind.CAUSE and unit.diagnostic is not None:
                lines: list[str] = self.cause_lines(
                    unit.text, unit.diagnostic, last=unit.last, width=width
                )
                out.extend(_indented(lines, indent))
            elif unit.reason is not None:
                out.append("")
                out.extend(_indented(self.truncation_lines(unit.reason), indent))
        out.extend(body)
        return out

    def diagnostic_lines(
        self,
        diagnostic: Diagnostic,
        *,
        width: int,
        root: bool = True,
    ) -> list[str]:
        """Render one diagnostic (header, message, causes, snippets, help, footer)."""
        head, tail = self.diagnostic_parts(diagnostic, width=width, root=root)
        count: int = len(diagnostic.causes)
        causes: list[str] = []
        for i, cause in enumerate(diagnostic.causes):
            causes.extend(self.cause_lines(cause, diagnostic, last=i == count - 1, width=width))
        return head + causes + tail

    def diagnostic_parts(
        self,
        diagnostic: Diagnostic,
        *,
        width: int,
        root: bool = True,
    ) -> tuple[list[str], list[str]]:
        """Render one diagnostic split around its cause chain.

        Returns:
            tuple[list[str], list[str]]: The header and message lines, then the
            snippet, help and footer lines.
        """
        styles = self.theme.styles
        head: list[str] = []
        header: str | None = self._header(diagnostic)
        if header is not None:
            head.extend([header, ""])
        head.extend(self._message_lines(diagnostic, width))

        lines: list[str] = []
        plan: RenderPlan = build_plan(diagnostic, self.config)
        for section in plan.sections:
            if isinstance(section, Context):
                lines.extend(self._context_lines(section, width))
            elif isinstance(section, UnavailableSource):
                lines.extend(self._unavailable_lines(section))

        if diagnostic.help is not None:
            lines.extend(
                self._wrap_prefixed(
                    diagnostic.help,
                    width,
                    ("  help: ", styles.help),
                    ("        ", None),
                )
            )
        if root and self.config.footer:
            lines.append("")
            lines.extend(self._wrap_prefixed(self.config.footer, width, ("  ", None), ("  ", None)))
        logger.trace(
            "Composed %d line(s) for %s diagnostic (%d section(s), %d label(s) dropped)",
            len(head) + len(lines),
            diagnostic.severity.key,
            len(plan.sections),
            plan.dropped_labels,
        )
        return head, lines

    def cause_lines(
        self,
        text: str,
        owner: Diagnostic,
        *,
        last: bool,
        width: int,
    ) -> list[str]:
        """Render one cause-chain entry of ``owner``."""
        ch = self.theme.characters
        style: Colorizer = self.theme.styles.severity(owner.severity)
        corner: str = ch.lbot if last else ch.lcross
        first: str = f"  {corner}{ch.hbar}{ch.rarrow} "
        rest: str = "      " if last else f"  {ch.vbar}   "
        return self._wrap_prefixed(f"caused by: {text}", width, (first, style), (rest, style))

    def truncation_lines(self, reason: TruncationReason) -> list[str]:
        """Render the marker replacing an omitted related diagnostic."""
        ch = self.theme.characters
        return [f"  {ch.ellipsis} related diagnostic omitted: {reason.value}"]

    # ----------------------------------------------------------------- header

    def _header(self, diagnostic: Diagnostic) -> str | None:
        styles = self.theme.styles
        code: str | None = diagnostic.code
        url: str | None = diagnostic.url
        if code is None and url is None:
            return None
        if url is not None and self.links:
            shown: str = styles.link("(link)")
            if code is not None:
                shown = f"{styles.code(code)} {shown}"
            return OSC8_OPEN.format(url=url) + shown + OSC8_CLOSE
        if url is not None:
            shown = f"({styles.link(url)})"
            return shown if code is None else f"{styles.code(code)} {shown}"
        return styles.code(code) if code is not None else None

    def _message_lines(self, diagnostic: Diagnostic, width: int) -> list[str]:
        ch = self.theme.characters
        style: Colorizer = self.theme.styles.severity(diagnostic.severity)
        return self._wrap_prefixed(
            diagnostic.message,
            width,
            (f"  {ch.severity(diagnostic.severity)} ", style),
            (f"  {ch.vbar} ", style),
        )

    def _wrap_prefixed(
        self,
        text: str,
        width: int,
        first: tuple[str, Colorizer | None],
        rest: tuple[str, Colorizer | None],
    ) -> list[str]:
        wrapped: list[str] = wrap(
            text,
            width,
            initial_indent=first[0],
            subsequent_indent=rest[0],
            unicode=self.unicode,
        )
        out: list[str] = []
        for i, line in enumerate(wrapped):
            prefix, style = first if i == 0 else rest
            out.append(_styled_prefix(prefix, style) + line[len(prefix) :])
        return out

    # --------------------------------------------------------------- contexts

    def _context_lines(self, ctx: Context, width: int) -> list[str]:
        ch = self.theme.characters
        styles = self.theme.styles
        w: int = ctx.line_number_width
        lines: list[str] = []

        c = LineCanvas(unicode=self.unicode)
        c.append(" " * (w + 2))
        c.append(f"{ch.ltop}{ch.hbar}[", styles.gutter)
        location: str = f"{ctx.first_line}:1"
        if ctx.source_name:
            c.append(ctx.source_name, styles.filename)
            c.append(f":{location}")
        else:
            c.append(location)
        c.append("]", styles.gutter)
        lines.append(c.render())

        for line in ctx.lines:
            lines.extend(self._line_block(ctx, line, width))

        c = LineCanvas(unicode=self.unicode)
        c.append(" " * (w + 2))
        c.append(ch.lbot + ch.hbar * 4, styles.gutter)
        lines.append(c.render())
        return lines

    def _unavailable_lines(self, section: UnavailableSource) -> list[str]:
        ch = self.theme.characters
        styles = self.theme.styles
        lines: list[str] = []
        c = LineCanvas(unicode=self.unicode)
        c.append("   ")
        c.append(f"{ch.ltop}{ch.hbar}[", styles.gutter)
        c.append(section.source_name or "source unavailable", styles.filename)
        c.append("]", styles.gutter)
        lines.append(c.render())
        for label in section.labels:
            c = LineCanvas(unicode=self.unicode)
            c.append("   ")
            c.append(ch.vbar_break, styles.gutter)
            c.append(" ")
            position: str = f"(offset {label.offset}, length {label.length})"
            if label.text is not None:
                c.append(label.text, styles.highlight(label.order))
                c.append(" ")
            c.append(position)
            lines.append(c.render())
        c = LineCanvas(unicode=self.unicode)
        c.append("   ")
        c.append(ch.lbot + ch.hbar * 4, styles.gutter)
        lines.append(c.render())
        return lines

    def _lanes_at(self, ctx: Context, number: int) -> list[PlacedLabel | None]:
        lanes: list[PlacedLabel | None] = [None] * ctx.lane_count
        for bracket in ctx.brackets:
            if bracket.lane is not None and (
                bracket.span.start_line <= number <= bracket.span.end_line
            ):
                lanes[bracket.lane] = bracket
        return lanes

    def _source_canvas(
        self,
        ctx: Context,
        line: PlanLine,
        lanes: list[PlacedLabel | None],
    ) -> LineCanvas:
        ch = self.theme.characters
        styles = self.theme.styles
        n: int = line.number
        c = LineCanvas(unicode=self.unicode)
        c.append(" ")
        c.append(f"{n:>{ctx.line_number_width}}", styles.gutter)
        c.append(" ")
        c.append(ch.vbar, styles.gutter)
        c.append(" ")
        base: int = len(c)
        g: int = ctx.lane_count

        events: list[int] = [
            j
            for j, b in enumerate(lanes)
            if b is not None and n in (b.span.start_line, b.span.end_line)
        ]
        if not events:
            for j, b in enumerate(lanes):
                if b is not None and b.span.start_line < n < b.span.end_line:
                    c.put(base + j, ch.vbar, styles.highlight(b.order))
        else:
            i: int = events[0]
            owner: PlacedLabel | None = lanes[i]
            assert owner is not None
            style: Colorizer = styles.highlight(owner.order)
            for j in range(i):
                b = lanes[j]
                if b is not None:
                    c.put(base + j, ch.vbar, styles.highlight(b.order))
            if owner.span.start_line == n:
                corner: str = ch.ltop
            else:
                corner = ch.lcross if owner.has_text else ch.lbot
            c.put(base + i, corner, style)
            c.fill(base + i + 1, base + g + 1, ch.hbar, style)
            c.put(base + g + 1, ch.rarrow, style)
            for j in range(i + 1, g):
                b = lanes[j]
                if b is None:
                    continue
                if b.span.start_line == n:
                    glyph: str = ch.mtop
                elif b.span.end_line == n:
                    glyph = ch.mbot
                else:
                    glyph = ch.xbar
                c.put(base + j, glyph, styles.highlight(b.order))

        gutter: int = g + 3 if g else 0
        c.write(base + gutter, line.info.rendered)
        return c

    def _sub_canvas(
        self,
        ctx: Context,
        lanes: list[PlacedLabel | None],
        number: int,
        *,
        pending: set[int] | None = None,
    ) -> tuple[LineCanvas, int]:
        """Start a line below source line ``number``.

        Returns the canvas and the display column where source text starts. Lanes
        draw a bar while their bracket continues, or while it ends on this line with
        a label still to print (every labeled lane when ``pending`` is ``None``).
        """
        ch = self.theme.characters
        styles = self.theme.styles
        c = LineCanvas(unicode=self.unicode)
        c.append(" " * (ctx.line_number_width + 2))
        c.append(ch.vbar_break, styles.gutter)
        c.append(" ")
        base: int = len(c)
        for j, b in enumerate(lanes):
            if b is None:
                continue
            waiting: bool = b.span.end_line == number and b.has_text
            if pending is not None:
                waiting = waiting and j in pending
            if _continues(b, number) or waiting:
                c.put(base + j, ch.vbar, styles.highlight(b.order))
        gutter: int = ctx.lane_count + 3 if ctx.lane_count else 0
        return c, base + gutter

    def _line_block(self, ctx: Context, line: PlanLine, width: int) -> list[str]:
        ch = self.theme.characters
        styles = self.theme.styles
        n: int = line.number
        lanes: list[PlacedLabel | None] = self._lanes_at(ctx, n)
        out: list[str] = [self._source_canvas(ctx, line, lanes).render()]

        # Underline rows; connectors of labels in earlier rows pass through.
        for r, row in enumerate(line.rows):
            c, text_col = self._sub_canvas(ctx, lanes, n)
            kinds: dict[int, str] = {}
            for label in row:
                style: Colorizer = styles.highlight(label.order)
                if label.span.zero_length:
                    c.put(text_col + label.start, ch.uarrow, style)
                    kinds[label.start] = "marker"
                    continue
                c.fill(text_col + label.start, text_col + label.end, ch.underline, style)
                for col in range(label.start, label.end):
                    kinds[col] = "line"
                if label.has_text:
                    c.put(text_col + label.connector, ch.underbar, style)
            for earlier in line.rows[:r]:
                for label in earlier:
                    if not label.has_text:
                        continue
                    kind: str | None = kinds.get(label.connector)
                    if kind == "marker":
                        continue
                    glyph: str = ch.xbar if kind is not None else ch.vbar
                    c.put(text_col + label.connector, glyph, styles.highlight(label.order))
            out.append(c.render())

        # Label texts, rightmost connector first.
        labeled: list[PlacedLabel] = sorted(
            (lb for lb in line.labels if lb.has_text),
            key=lambda lb: (-lb.connector, lb.row or 0, lb.order),
        )
        for k, label in enumerate(labeled):
            remaining: list[PlacedLabel] = labeled[k + 1 :]
            shares: bool = any(o.connector == label.connector for o in remaining)
            style = styles.highlight(label.order)
            text_col = _text_column(ctx)
            budget: int = max(width - (text_col + label.connector + 4), MIN_LABEL_WIDTH)
            for idx, text in enumerate(wrap(label.text or "", budget, unicode=self.unicode)):
                c, text_col = self._sub_canvas(ctx, lanes, n)
                for other in remaining:
                    c.put(text_col + other.connector, ch.vbar, styles.highlight(other.order))
                col: int = text_col + label.connector
                if idx == 0:
                    c.put(col, ch.lcross if shares else ch.lbot, style)
                    c.fill(col + 1, col + 3, ch.hbar, style)
                c.write(col + 4, text, style)
                out.append(c.render())

        out.extend(self._bracket_labels(ctx, lanes, n, width))
        return out

    def _bracket_labels(
        self,
        ctx: Context,
        lanes: list[PlacedLabel | None],
        number: int,
        width: int,
    ) -> list[str]:
        ch = self.theme.characters
        styles = self.theme.styles
        g: int = ctx.lane_count
        ending: list[int] = [
            j
            for j, b in enumerate(lanes)
            if b is not None and b.span.end_line == number and b.has_text
        ]
        pending: set[int] = set(ending)
        out: list[str] = []
        for i in reversed(ending):
            pending.discard(i)
            bracket: PlacedLabel | None = lanes[i]
            assert bracket is not None
            style: Colorizer = styles.highlight(bracket.order)
            c, text_col = self._sub_canvas(ctx, lanes, number, pending=pending)
            base: int = text_col - (g + 3)
            budget: int = max(width - (text_col + 2), MIN_LABEL_WIDTH)
            for idx, text in enumerate(wrap(bracket.text or "", budget, unicode=self.unicode)):
                if idx:
                    c, _ = self._sub_canvas(ctx, lanes, number, pending=pending)
                else:
                    c.put(base + i, ch.lbot, style)
                    c.fill(base + i + 1, base + g + 4, ch.hbar, style)
                    for j in range(i + 1, g):
                        if _continues(lanes[j], number):
                            other: PlacedLabel | None = lanes[j]
                            assert other is not None
                            c.put(base + j, ch.xbar, styles.highlight(other.order))
                c.write(base + g + 5, text, style)
                out.append(c.render())
        return out
