# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click command-line interface for DiagMark."""
