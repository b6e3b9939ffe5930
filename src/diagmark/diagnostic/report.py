# topmark:header:start
#
#   project      : DiagMark
#   file         : report.py
#   file_relpath : src/diagmark/diagnostic/report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML report documents.

A report document describes one diagnostic so the CLI can render it:

```toml
message = "oops!"
severity = "warning"          # error (default), warning, advice; aliases accepted
code = "oops::my::bad"
url = "https://example.com/oops"
help = "try doing it better next time?"
causes = ["outer failure", "root failure"]

[source]
name = "bad_file.rs"          # defaults to `path`
path = "bad_file.rs"          # relative to the report file; or inline `text = "..."`

[[labels]]
offset = 9
length = 4
text = "this bit here"

[[labels]]
line = 3                      # 1-based line/column instead of offset
column = 5
end_line = 3                  # optional; position just past the highlight
end_column = 9

[[related]]                   # same shape, recursively; inherits the source
message = "see also"
```

Shape errors raise `ReportFileError` naming the offending key.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from diagmark.config.io.getters import (
    get_enum_or_none,
    get_int_or_none,
    get_string_list,
    get_string_or_none,
    get_table_list,
)
from diagmark.config.io.loaders import parse_toml_text
from diagmark.config.logging import get_logger
from diagmark.core.errors import ConfigError, ReportFileError
from diagmark.diagnostic.model import Diagnostic, LabeledSpan, NamedSource, SourceOffset
from diagmark.diagnostic.types import Severity

if TYPE_CHECKING:
    from diagmark.config.io.types import TomlTable
    from diagmark.config.logging import DiagmarkLogger

logger: DiagmarkLogger = get_logger(__name__)


def load_report(path: Path) -> Diagnostic:
    """Load a diagnostic from a TOML report file.

    Args:
        path (Path): The report document.

    Returns:
        Diagnostic: The described diagnostic (related diagnostics included).

    Raises:
        ReportFileError: If the report (or a referenced source file) is missing,
            unreadable, not valid TOML, or has values of the wrong shape.
    """
    if not path.is_file():
        raise ReportFileError(f"Report file not found: {path}", path=path, missing=True)
    try:
        text: str = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ReportFileError(f"Cannot decode {path} as UTF-8: {e}", path=path) from e
    except OSError as e:
        raise ReportFileError(f"Cannot read {path}: {e}", path=path) from e
    try:
        data: TomlTable = parse_toml_text(text, origin=str(path))
        diagnostic: Diagnostic = report_from_table(data, base_dir=path.parent)
    except ConfigError as e:
        raise ReportFileError(str(e), path=path) from e
    logger.debug("Loaded report %s (%d label(s))", path, len(diagnostic.labels))
    return diagnostic


def report_from_table(
    table: TomlTable,
    *,
    base_dir: Path | None = None,
    where: str = "report",
    parent_source: NamedSource | None = None,
) -> Diagnostic:
    """Build a diagnostic from a parsed report table.

    Args:
        table (TomlTable): The report table.
        base_dir (Path | None): Directory that relative ``source.path`` values are
            resolved against (defaults to the working directory).
        where (str): Table path used in error messages.
        parent_source (NamedSource | None): Source used to convert line/column
            labels when the table has no source of its own.

    Returns:
        Diagnostic: The described diagnostic.

    Raises:
        ConfigError: If a value has the wrong shape.
        ReportFileError: If a referenced source file cannot be read.
    """
    source: NamedSource | None = _source_from(table.get("source"), base_dir, where)
    label_source: NamedSource | None = source or parent_source

    labels: list[LabeledSpan] = []
    for i, entry in enumerate(get_table_list(table, "labels", where=where)):
        labels.append(_label_from(entry, label_source, where=f"{where}.labels[{i}]"))

    related: list[Diagnostic] = [
        report_from_table(
            entry,
            base_dir=base_dir,
            where=f"{where}.related[{i}]",
            parent_source=label_source,
        )
        for i, entry in enumerate(get_table_list(table, "related", where=where))
    ]

    return Diagnostic(
        message=get_string_or_none(table, "message", where=where) or "",
        severity=get_enum_or_none(table, "severity", Severity, where=where) or Severity.ERROR,
        code=get_string_or_none(table, "code", where=where),
        url=get_string_or_none(table, "url", where=where),
        help=get_string_or_none(table, "help", where=where),
        source=source,
        labels=tuple(labels),
        related=tuple(related),
        causes=tuple(get_string_list(table, "causes", where=where)),
    )


def _source_from(raw: Any, base_dir: Path | None, where: str) -> NamedSource | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = {"path": raw}
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a table or path string in {where}.source")
    loc: str = f"{where}.source"
    name: str | None = get_string_or_none(raw, "name", where=loc)
    text: str | None = get_string_or_none(raw, "text", where=loc)
    rel: str | None = get_string_or_none(raw, "path", where=loc)
    if text is not None:
        return NamedSource(name=name or rel, text=text)
    if rel is None:
        # A named source without text: labels are listed without a snippet.
        return NamedSource(name=name, text=None)

    file: Path = Path(rel)
    if not file.is_absolute() and base_dir is not None:
        file = base_dir / file
    if not file.is_file():
        raise ReportFileError(f"Source file not found: {file}", path=file, missing=True)
    try:
        data: bytes = file.read_bytes()
    except OSError as e:
        raise ReportFileError(f"Cannot read source file {file}: {e}", path=file) from e
    logger.trace("Read %d byte(s) of source from %s", len(data), file)
    return NamedSource(name=name or rel, text=data)


def _label_from(entry: TomlTable, source: NamedSource | None, *, where: str) -> LabeledSpan:
    text: str | None = get_string_or_none(entry, "text", where=where)
    offset: int | None = get_int_or_none(entry, "offset", where=where)
    length: int | None = get_int_or_none(entry, "length", where=where)
    line: int | None = get_int_or_none(entry, "line", where=where)

    if offset is None and line is not None:
        if source is None:
            raise ConfigError(f"{where}: line/column labels need a source")
        column: int = get_int_or_none(entry, "column", where=where) or 1
        offset = SourceOffset.from_location(source, line, column)
        end_line: int | None = get_int_or_none(entry, "end_line", where=where)
        if length is None and end_line is not None:
            end_column: int = get_int_or_none(entry, "end_column", where=where) or 1
            length = max(SourceOffset.from_location(source, end_line, end_column) - offset, 0)
    if offset is None:
        raise ConfigError(f"{where}: a label needs `offset` or `line`")
    return LabeledSpan.at(offset, length or 0, text)
