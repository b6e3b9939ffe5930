# topmark:header:start
#
#   project      : DiagMark
#   file         : types.py
#   file_relpath : src/diagmark/diagnostic/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Severity levels for diagnostics."""

from __future__ import annotations

from diagmark.core.enum_mixins import KeyedStrEnum


class Severity(KeyedStrEnum):
    """How serious a diagnostic is. A missing severity means ``ERROR``.

    The ``.label`` is the capitalized word used in narratable output
    (``"Warning: ..."``); the ``.value`` is the lowercase machine key.
    """

    ERROR = ("error", "Error", ("err", "fatal", "failure"))
    WARNING = ("warning", "Warning", ("warn",))
    ADVICE = ("advice", "Advice", ("note", "info", "hint", "help"))

    @classmethod
    def coerce(cls, raw: object) -> Severity:
        """Return a severity for any upstream value, defaulting to ``ERROR``.

        Accepts members, parseable tokens, and objects whose ``name`` or ``str()``
        parses (so foreign enums such as ``logging``-style levels map by name).
        """
        if isinstance(raw, Severity):
            return raw
        if raw is None:
            return cls.ERROR
        for candidate in (getattr(raw, "name", None), str(raw)):
            if isinstance(candidate, str):
                parsed: Severity | None = cls.parse(candidate)
                if parsed is not None:
                    return parsed
        return cls.ERROR
