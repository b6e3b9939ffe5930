# topmark:header:start
#
#   project      : DiagMark
#   file         : constants.py
#   file_relpath : src/diagmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

DIAGMARK_VERSION: str = get_version("diagmark")
