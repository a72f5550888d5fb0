"""Calendar helpers and reporting-window date ranges."""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterator, List, Optional

import pandas as pd

from exam_scheduler.config import EngineConfig


def parse_date_value(value: Any) -> Optional[date]:
    """
    Coerce a stored date value to a calendar date.

    Text is parsed with pandas and the date is rebuilt from the parsed
    year/month/day, so an offset such as "+07:00" never shifts the day.

    Returns:
        date, or None for empty/invalid input
    """
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, (pd.Timestamp, datetime)):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        print(f"[WARN] Unrecognised date value '{text}', treating as empty")
        return None
    return date(parsed.year, parsed.month, parsed.day)


def is_rest_day(day: date, cfg: EngineConfig | None = None) -> bool:
    """Check whether the facility is closed on this day."""
    cfg = cfg or EngineConfig()
    return day.weekday() == cfg.rest_weekday


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_working_days(start: date, end: date, cfg: EngineConfig | None = None) -> int:
    """Count non-rest days in [start, end]."""
    if start is None or end is None or end < start:
        return 0
    return sum(1 for day in iter_days(start, end) if not is_rest_day(day, cfg))


@dataclass(frozen=True)
class ReportingWindow:
    """
    The period a report covers.

    Either an explicit start/end pair (both required) or a month/year pair.
    When both are supplied the explicit pair wins.
    """

    month: Optional[int] = None
    year: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.has_explicit_range:
            return
        if self.month is None or self.year is None:
            raise ValueError("ReportingWindow needs a start/end pair or a month/year pair")
        if not 1 <= int(self.month) <= 12:
            raise ValueError(f"Invalid month: {self.month}")
        if not 1 <= int(self.year) <= 9999:
            raise ValueError(f"Invalid year: {self.year}")

    @property
    def has_explicit_range(self) -> bool:
        return self.start is not None and self.end is not None

    @classmethod
    def for_month(cls, month: int, year: int) -> "ReportingWindow":
        return cls(month=month, year=year)

    @classmethod
    def between(cls, start: Any, end: Any) -> "ReportingWindow":
        start_date = parse_date_value(start)
        end_date = parse_date_value(end)
        if start_date is None or end_date is None:
            raise ValueError(f"Invalid date range: {start!r} - {end!r}")
        return cls(start=start_date, end=end_date)

    def bounds(self) -> tuple[date, date]:
        """First and last calendar day covered by the window."""
        if self.has_explicit_range:
            return self.start, self.end
        month, year = int(self.month), int(self.year)
        days_in_month = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, days_in_month)


def build_calendar_range(window: ReportingWindow, cfg: EngineConfig | None = None) -> List[date]:
    """
    Build the ordered list of operating days in a reporting window.

    Args:
        window: Explicit start/end range or month/year
        cfg: EngineConfig (rest weekday)

    Returns:
        Dates in ascending order, rest days omitted; empty when start > end
    """
    start, end = window.bounds()
    return [day for day in iter_days(start, end) if not is_rest_day(day, cfg)]
