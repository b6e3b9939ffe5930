# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagMark CLI subcommands."""
