"""External/internal blood-draw partition of a day's headcount."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import BloodDrawSplit, ParsedDayEntry, SchedulingRecord

from .allocation import allocate_for_day


def split_blood_draw(
    records: Iterable[SchedulingRecord],
    day: date,
    day_people_total: int,
    cfg: EngineConfig | None = None,
    parsed_cache: Optional[Dict[int, List[ParsedDayEntry]]] = None,
) -> BloodDrawSplit:
    """
    Split a day's people total into external and internal blood draws.

    External is the full headcount of every campaign whose dedicated blood
    draw falls on this day. Internal is everyone else examined that day:
    the day total minus the allocations of records that have a blood-draw
    date, clamped at zero.

    Args:
        records: All records in the report
        day: Calendar day
        day_people_total: People total for the day (from the aggregator)
        cfg: EngineConfig
        parsed_cache: Optional id(record) -> parsed specific dates for day.year

    Returns:
        BloodDrawSplit
    """
    cfg = cfg or EngineConfig()
    external = 0
    drawn_elsewhere = 0

    for record in records:
        if record.blood_draw_date is None:
            continue
        if record.blood_draw_date == day:
            external += max(0, record.total_people)
        parsed = parsed_cache.get(id(record)) if parsed_cache else None
        drawn_elsewhere += allocate_for_day(record, day, cfg, parsed_entries=parsed).total

    internal = max(0, int(day_people_total) - drawn_elsewhere)
    return BloodDrawSplit(external=external, internal=internal)
