# topmark:header:start
#
#   project      : DiagMark
#   file         : __init__.py
#   file_relpath : src/diagmark/layout/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Span layout: contexts, underline rows and bracket lanes."""

from __future__ import annotations

from .engine import assign_lanes, assign_rows, build_plan
from .plan import Context, PlacedLabel, PlanLine, RenderPlan, UnavailableSource, UnresolvedLabel

__all__ = [
    "Context",
    "PlacedLabel",
    "PlanLine",
    "RenderPlan",
    "UnavailableSource",
    "UnresolvedLabel",
    "assign_lanes",
    "assign_rows",
    "build_plan",
]
