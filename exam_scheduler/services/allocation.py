"""Per-day headcount allocation for a single scheduling record."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import (
    ZERO_ALLOCATION,
    DayAllocation,
    ParsedDayEntry,
    SchedulingRecord,
)

from .calendar_range import count_working_days, is_rest_day
from .date_parser import parse_specific_dates
from .placeholders import round_half_up


def _even_split(daily_count: int) -> DayAllocation:
    daily_count = max(0, daily_count)
    morning = daily_count // 2
    return DayAllocation(total=daily_count, morning=morning, afternoon=daily_count - morning)


def _from_averages(record: SchedulingRecord) -> DayAllocation:
    morning_avg = max(0.0, record.morning_average)
    afternoon_avg = max(0.0, record.afternoon_average)
    return DayAllocation(
        total=round_half_up(morning_avg + afternoon_avg),
        morning=round_half_up(morning_avg),
        afternoon=round_half_up(afternoon_avg),
    )


def _legacy_completed(record: SchedulingRecord, entries: Sequence[ParsedDayEntry]) -> DayAllocation:
    # Explicit days already account for their people; spread only what is left
    explicit_sum = sum(e.total or 0 for e in entries if e.explicit)
    remaining_days = sum(1 for e in entries if not e.explicit)
    if remaining_days == 0:
        return ZERO_ALLOCATION
    remaining_people = max(0, record.total_people - explicit_sum)
    return _even_split(round_half_up(remaining_people / remaining_days))


def _range_allocation(record: SchedulingRecord, day: date, cfg: EngineConfig) -> DayAllocation:
    start = record.start_date
    end = record.effective_end_date
    if not start <= day <= end:
        return ZERO_ALLOCATION

    if record.is_completed:
        working_days = count_working_days(start, end, cfg)
        if working_days == 0:
            return ZERO_ALLOCATION
        return _even_split(round_half_up(record.total_people / working_days))

    return _from_averages(record)


def allocate_for_day(
    record: SchedulingRecord,
    day: date,
    cfg: EngineConfig | None = None,
    parsed_entries: Optional[List[ParsedDayEntry]] = None,
) -> DayAllocation:
    """
    Decide how many people of a record are examined on a given day.

    Precedence (first match wins):
      1. no start date, or the rest day -> nothing
      2. specific dates present -> the matching entry decides; explicit
         entries return their own counts, legacy entries are derived from
         the record (remaining people spread over legacy days when
         completed, stored averages when ongoing)
      3. otherwise the start/end range -> even spread over working days
         when completed, stored averages when ongoing

    Args:
        record: Scheduling record
        day: Calendar day to allocate
        cfg: EngineConfig
        parsed_entries: Pre-parsed specific dates for day.year (skips re-parsing)

    Returns:
        DayAllocation with non-negative total/morning/afternoon
    """
    cfg = cfg or EngineConfig()

    if record.start_date is None or is_rest_day(day, cfg):
        return ZERO_ALLOCATION

    if record.has_specific_dates:
        entries = parsed_entries
        if entries is None:
            entries = parse_specific_dates(record.specific_dates, day.year, cfg)

        match = next((e for e in entries if e.date == day), None)
        if match is None:
            return ZERO_ALLOCATION

        if match.explicit:
            return DayAllocation(
                total=match.total or 0,
                morning=match.morning or 0,
                afternoon=match.afternoon or 0,
            )

        if record.is_completed:
            return _legacy_completed(record, entries)
        return _from_averages(record)

    return _range_allocation(record, day, cfg)
