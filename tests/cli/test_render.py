# topmark:header:start
#
#   project      : DiagMark
#   file         : test_render.py
#   file_relpath : tests/cli/test_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `render` output in both styles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, run_cli, write_report
from tests.conftest import mark_cli, strip_ansi

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

GRAPHICAL: str = (
    "oops::my::bad\n"
    "\n"
    "  × oops!\n"
    "   ╭─[bad_file.rs:1:1]\n"
    " 1 │ source\n"
    " 2 │   text\n"
    "   ·   ──┬─\n"
    "   ·     ╰── this bit here\n"
    " 3 │     here\n"
    "   ╰────\n"
    "  help: try doing it better next time?\n"
)


@mark_cli
def test_render_graphical(isolation: Path) -> None:
    """``--format graphical`` prints the annotated snippet."""
    write_report(isolation)
    result: Result = run_cli(
        ["--no-color", "render", "report.toml", "--format", "graphical", "--unicode"]
    )

    assert_SUCCESS(result)
    assert result.output == GRAPHICAL


@mark_cli
def test_render_ascii(isolation: Path) -> None:
    """``--ascii`` swaps the glyph set."""
    write_report(isolation)
    result: Result = run_cli(["--no-color", "render", "report.toml", "-f", "graphical", "--ascii"])

    assert_SUCCESS(result)
    assert "  x oops!\n" in result.output
    assert "   :     `-- this bit here\n" in result.output


@mark_cli
def test_render_defaults_to_narratable_when_piped(isolation: Path) -> None:
    """Without a terminal, output falls back to narratable prose."""
    write_report(isolation)
    result: Result = run_cli(["render", "report.toml"])

    assert_SUCCESS(result)
    assert result.output.startswith("Error: oops!\n\nBegin snippet for bad_file.rs")
    assert result.output.endswith("diagnostic code: oops::my::bad\n")


@mark_cli
def test_forced_color_keeps_layout(isolation: Path) -> None:
    """``--color always`` adds styles without moving anything."""
    write_report(isolation)
    result: Result = run_cli(["--color", "always", "render", "report.toml", "--unicode"])

    assert_SUCCESS(result)
    assert "\x1b[" in result.output
    assert strip_ansi(result.output) == GRAPHICAL


@mark_cli
def test_discovered_config_applies(isolation: Path) -> None:
    """Settings from the project ``diagmark.toml`` are honored; flags override them."""
    (isolation / "diagmark.toml").write_text(
        'mode = "graphical"\nunicode = false\n', encoding="utf-8"
    )
    write_report(isolation)

    configured: Result = run_cli(["--no-color", "render", "report.toml"])
    overridden: Result = run_cli(["--no-color", "render", "report.toml", "--format", "narratable"])
    ignored: Result = run_cli(["--no-color", "render", "report.toml", "--no-config"])

    assert_SUCCESS(configured)
    assert "  x oops!\n" in configured.output
    assert overridden.output.startswith("Error: oops!")
    assert ignored.output.startswith("Error: oops!")


@mark_cli
def test_render_report_with_related_and_source_file(isolation: Path) -> None:
    """Reports can read their source from disk and nest related diagnostics."""
    (isolation / "src.txt").write_text("let x = 1;", encoding="utf-8")
    write_report(
        isolation,
        'message = "parent"\n'
        'source = "src.txt"\n'
        "[[related]]\n"
        'message = "child"\n'
        'severity = "warning"\n'
        "[[related.labels]]\n"
        "line = 1\n"
        "column = 5\n"
        "end_line = 1\n"
        "end_column = 6\n"
        'text = "here"\n',
    )
    result: Result = run_cli(["--no-color", "render", "report.toml", "-f", "graphical", "--unicode"])

    assert_SUCCESS(result)
    assert result.output == (
        "  × parent\n"
        "\n"
        "    ⚠ child\n"
        "     ╭─[src.txt:1:1]\n"
        "   1 │ let x = 1;\n"
        "     ·     ┬\n"
        "     ·     ╰── here\n"
        "     ╰────\n"
    )
