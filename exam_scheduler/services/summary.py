"""Per-company summaries used by detail views and reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import DayAllocation, SchedulingRecord

from .allocation import allocate_for_day
from .calendar_range import count_working_days
from .date_parser import parse_specific_dates
from .placeholders import round_half_up


@dataclass(frozen=True)
class CompanySummary:
    company_name: str
    total_people: int
    total_days: int
    morning_count: int
    afternoon_count: int
    employee_name: str
    blood_draw_date: Optional[date]
    specific_dates: List[date]


def company_summary(
    record: SchedulingRecord,
    reference_year: int,
    cfg: EngineConfig | None = None,
) -> CompanySummary:
    """
    Summarize a campaign: examination days and rounded session averages.

    Days are the specific-date entries (rest days excluded) when present,
    otherwise the working days between start and end.
    """
    specific: List[date] = []
    if record.has_specific_dates:
        specific = [e.date for e in parse_specific_dates(record.specific_dates, reference_year, cfg)]
        total_days = len(specific)
    elif record.start_date is not None:
        total_days = count_working_days(record.start_date, record.effective_end_date, cfg)
    else:
        total_days = 0

    return CompanySummary(
        company_name=record.company_name,
        total_people=record.total_people,
        total_days=total_days,
        morning_count=round_half_up(record.morning_average),
        afternoon_count=round_half_up(record.afternoon_average),
        employee_name=record.employee_name,
        blood_draw_date=record.blood_draw_date,
        specific_dates=specific,
    )


def record_overlaps_window(record: SchedulingRecord, start: date, end: date) -> bool:
    """
    Check whether a record can contribute anything between start and end.

    Records with specific dates are always kept because their entries may
    fall outside the stored start/end range. A blood draw inside the window
    keeps a record even when its examinations lie elsewhere.
    """
    if record.blood_draw_date is not None and start <= record.blood_draw_date <= end:
        return True
    if record.start_date is None:
        return False
    if record.has_specific_dates:
        return True
    return record.start_date <= end and record.effective_end_date >= start


def companies_on_day(
    records: Iterable[SchedulingRecord],
    day: date,
    cfg: EngineConfig | None = None,
) -> List[Tuple[SchedulingRecord, DayAllocation]]:
    """
    List the campaigns examined on a day, largest first.

    Returns:
        (record, allocation) pairs with a non-zero total, sorted by people desc
        then company name
    """
    rows = []
    for record in records:
        allocation = allocate_for_day(record, day, cfg)
        if allocation.total > 0:
            rows.append((record, allocation))
    rows.sort(key=lambda pair: (-pair[1].total, pair[0].company_name))
    return rows
