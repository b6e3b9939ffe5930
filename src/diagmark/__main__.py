# topmark:header:start
#
#   project      : DiagMark
#   file         : __main__.py
#   file_relpath : src/diagmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running DiagMark via ``python -m diagmark``.

Delegates to :func:`diagmark.cli.main.cli`, the single authoritative CLI entry
point, exactly like the ``diagmark`` console script.

Examples:
    Render a report using the module interface::

        python -m diagmark render report.toml
"""

from __future__ import annotations

from diagmark.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
