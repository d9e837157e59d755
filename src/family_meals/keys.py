"""Aggregation keys identifying a single shopping list line."""

from __future__ import annotations

KEY_SEPARATOR = "|"
_ESCAPE = "\\"


def normalize_field(value: str | None) -> str:
    """Trim and case-fold a name or unit for comparison."""
    if not value:
        return ""
    return value.strip().casefold()


def _escape(value: str) -> str:
    return value.replace(_ESCAPE, _ESCAPE * 2).replace(KEY_SEPARATOR, _ESCAPE + KEY_SEPARATOR)


def build_key(name: str | None, unit: str | None) -> str:
    """Build the deduplication key for an ingredient name and unit.

    Both fields are normalized, then escaped so the separator can only occur
    between them: ("a|b", "") and ("a", "b|") never collide.
    """
    return _escape(normalize_field(name)) + KEY_SEPARATOR + _escape(normalize_field(unit))
