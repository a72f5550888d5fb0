"""Parsing of free-text specific examination dates.

The field holds comma-separated entries in one of three shapes:

- ``MM/DD``            legacy entry, counts derived from the record's aggregates
- ``MM/DD(total)``     explicit entry, total split evenly between sessions
- ``MM/DD(am,pm)``     explicit entry with morning and afternoon counts

for example ``"8/18(10,20), 8/19(30), 8/23"``. The year is not written in the
text and is supplied by the caller.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import ParsedDayEntry

from .calendar_range import is_rest_day


_ENTRY = re.compile(r"^(\d{1,2})\s*/\s*(\d{1,2})\s*(?:\((.*)\))?$")
_COUNT = re.compile(r"^\d+$")
# Payload values are plain counts, so "MM/DD" after a comma starts a new entry
_ENTRY_START = re.compile(r"\s*\d{1,2}\s*/\s*\d{1,2}")


def split_date_entries(text: str) -> List[str]:
    """
    Split on top-level commas only.

    Commas inside parentheses belong to the entry's payload, so
    "8/18(10,20),8/19" gives ["8/18(10,20)", "8/19"]. A comma inside an
    unclosed parenthesis that is followed by a new MM/DD entry ends the
    broken entry, so "8/1(30,8/2" gives ["8/1(30", "8/2"].
    """
    text = text or ""
    entries: List[str] = []
    current: List[str] = []
    depth = 0

    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == "," and depth > 0 and _ENTRY_START.match(text, index + 1):
            depth = 0
        if char == "," and depth == 0:
            entry = "".join(current).strip()
            if entry:
                entries.append(entry)
            current = []
            continue
        current.append(char)

    entry = "".join(current).strip()
    if entry:
        entries.append(entry)
    return entries


def _parse_count(token: str) -> Optional[int]:
    token = token.strip()
    if token == "":
        return 0
    if _COUNT.match(token):
        return int(token)
    return None


def parse_date_entry(entry: str, reference_year: int) -> Optional[ParsedDayEntry]:
    """
    Parse a single entry.

    Returns:
        ParsedDayEntry, or None when the entry has an unrecognised shape
    """
    match = _ENTRY.match(entry.strip())
    if not match:
        return None

    month, day, payload = match.groups()
    try:
        entry_date = date(reference_year, int(month), int(day))
    except ValueError:
        return None

    if payload is None:
        return ParsedDayEntry(date=entry_date, explicit=False, source=entry)

    values = payload.split(",")
    if len(values) == 1:
        total = _parse_count(values[0])
        if total is None:
            return None
        morning = total // 2
        return ParsedDayEntry(
            date=entry_date,
            morning=morning,
            afternoon=total - morning,
            total=total,
            explicit=True,
            source=entry,
        )

    if len(values) == 2:
        morning = _parse_count(values[0])
        afternoon = _parse_count(values[1])
        if morning is None or afternoon is None:
            return None
        return ParsedDayEntry(
            date=entry_date,
            morning=morning,
            afternoon=afternoon,
            total=morning + afternoon,
            explicit=True,
            source=entry,
        )

    return None


def parse_specific_dates(
    text: str,
    reference_year: int,
    cfg: EngineConfig | None = None,
) -> List[ParsedDayEntry]:
    """
    Parse a specific-dates list into day entries.

    Malformed entries are skipped with a warning; entries on the rest day are
    dropped silently. Output keeps input order.

    Args:
        text: Raw specific-dates text
        reference_year: Year applied to every MM/DD entry
        cfg: EngineConfig (rest weekday)

    Returns:
        List of ParsedDayEntry
    """
    if not text or not text.strip():
        return []

    results: List[ParsedDayEntry] = []
    for entry in split_date_entries(text):
        parsed = parse_date_entry(entry, reference_year)
        if parsed is None:
            print(f"[WARN] Skipping unrecognised date entry '{entry}' in '{text}'")
            continue
        if is_rest_day(parsed.date, cfg):
            continue
        results.append(parsed)
    return results
