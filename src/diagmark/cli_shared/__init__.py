# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-independent helpers shared by CLI frontends (color policy, exit codes, console API)."""
