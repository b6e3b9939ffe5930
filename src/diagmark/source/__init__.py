# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/source/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source resolution: line tables, coordinates and display text.

Import the submodules directly (`diagmark.source.index`, `diagmark.source.resolver`);
this package deliberately re-exports nothing so that the data model can depend on
`diagmark.source.index` without import cycles.
"""
