"""Cell value parsing and placeholder resolution."""

from __future__ import annotations

import math
from typing import Any

from exam_scheduler.domain.records import EMPTY, Cell, EmptyCell, NumberCell, PlaceholderCell


PLACEHOLDER_ALL = "x"
PLACEHOLDER_HALF = "x/2"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (18.5 -> 19, not 18)."""
    if value is None or not math.isfinite(value):
        return 0
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def _to_finite_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_cell(raw: Any) -> Cell:
    """
    Parse a raw counter cell into the Cell union.

    Args:
        raw: Literal number, numeric string, "x"/"x/2" placeholder (any case), or empty

    Returns:
        NumberCell for non-negative finite numbers (floored), PlaceholderCell for
        placeholders, EmptyCell for anything else
    """
    if raw is None:
        return EMPTY
    if isinstance(raw, str):
        text = raw.strip().lower().replace(" ", "")
        if not text:
            return EMPTY
        if text in (PLACEHOLDER_ALL, PLACEHOLDER_HALF):
            return PlaceholderCell(text)

    number = _to_finite_float(raw)
    if number is None or number < 0:
        return EMPTY
    return NumberCell(math.floor(number))


def resolve_cell(cell: Cell, actual_count: int) -> int:
    """Resolve a parsed cell against the number of people examined in the session."""
    actual = max(0, int(actual_count or 0))
    if isinstance(cell, NumberCell):
        return max(0, cell.value)
    if isinstance(cell, PlaceholderCell):
        if cell.kind == PLACEHOLDER_ALL:
            return actual
        if cell.kind == PLACEHOLDER_HALF:
            return round_half_up(actual / 2)
    return 0


def resolve(raw: Any, actual_count: int) -> int:
    """
    Resolve a raw cell value to a non-negative integer count.

    >>> resolve("x", 37), resolve("X/2", 37), resolve("15.7", 0), resolve("-5", 10)
    (37, 19, 15, 0)
    """
    if isinstance(raw, (NumberCell, PlaceholderCell, EmptyCell)):
        return resolve_cell(raw, actual_count)
    return resolve_cell(parse_cell(raw), actual_count)


def parse_count(raw: Any) -> int:
    """Parse a headcount field: floored non-negative integer, 0 when invalid."""
    number = _to_finite_float(raw)
    if number is None or number < 0:
        return 0
    return math.floor(number)


def parse_float(raw: Any) -> float:
    """Parse an average field: non-negative float, 0.0 when invalid."""
    number = _to_finite_float(raw)
    if number is None or number < 0:
        return 0.0
    return number
