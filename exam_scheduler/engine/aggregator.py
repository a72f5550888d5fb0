"""Daily aggregation of allocations across all scheduling records."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import EXAM_CATEGORIES, GENERAL_MEDICINE, REPORT_GROUPS
from exam_scheduler.domain.records import (
    DailyAggregate,
    DayAllocation,
    ParsedDayEntry,
    SchedulingRecord,
    empty_category_totals,
)
from exam_scheduler.services.allocation import allocate_for_day
from exam_scheduler.services.blood_draw import split_blood_draw
from exam_scheduler.services.calendar_range import is_rest_day, iter_days
from exam_scheduler.services.date_parser import parse_specific_dates
from exam_scheduler.services.placeholders import resolve_cell


# (year, id(record)) -> parsed specific dates
ParsedCache = Dict[Tuple[int, int], List[ParsedDayEntry]]


class DateIndex:
    """
    Map each reporting day to the records that can contribute to it.

    Derived from the records on every call and never stored; lookups give
    the same results as scanning every record for every day.
    """

    def __init__(self, records: Sequence[SchedulingRecord], dates: Sequence[date], cfg: EngineConfig):
        self.cfg = cfg
        self.parsed: ParsedCache = {}
        self.by_date: Dict[date, List[SchedulingRecord]] = defaultdict(list)

        wanted = set(dates)
        years = sorted({d.year for d in wanted})

        for record in records:
            if record.start_date is None:
                continue
            if record.has_specific_dates:
                for year in years:
                    entries = parse_specific_dates(record.specific_dates, year, cfg)
                    self.parsed[(year, id(record))] = entries
                    seen = set()
                    for entry in entries:
                        if entry.date in wanted and entry.date not in seen:
                            seen.add(entry.date)
                            self.by_date[entry.date].append(record)
            else:
                start = max(record.start_date, min(wanted)) if wanted else record.start_date
                end = min(record.effective_end_date, max(wanted)) if wanted else start
                for day in iter_days(start, end):
                    if day in wanted and not is_rest_day(day, cfg):
                        self.by_date[day].append(record)

    def records_for(self, day: date) -> List[SchedulingRecord]:
        return self.by_date.get(day, [])

    def entries_for(self, record: SchedulingRecord, year: int) -> List[ParsedDayEntry] | None:
        return self.parsed.get((year, id(record)))

    def allocate(self, record: SchedulingRecord, day: date) -> DayAllocation:
        return allocate_for_day(record, day, self.cfg, parsed_entries=self.entries_for(record, day.year))

    def parsed_for_year(self, year: int) -> Dict[int, List[ParsedDayEntry]]:
        return {rid: entries for (y, rid), entries in self.parsed.items() if y == year}


def build_date_index(
    records: Sequence[SchedulingRecord],
    dates: Sequence[date],
    cfg: EngineConfig | None = None,
) -> DateIndex:
    """Build the day -> contributing records index for a reporting range."""
    return DateIndex(records, dates, cfg or EngineConfig())


def _add_categories(aggregate: DailyAggregate, record: SchedulingRecord, allocation: DayAllocation) -> None:
    # Placeholders resolve against the session headcount, never the whole day
    for cat in EXAM_CATEGORIES:
        morning_cell, afternoon_cell = record.category_cells(cat.key)
        morning = resolve_cell(morning_cell, allocation.morning)
        afternoon = resolve_cell(afternoon_cell, allocation.afternoon)

        aggregate.category_morning[cat.key] += morning
        aggregate.category_afternoon[cat.key] += afternoon
        aggregate.category_totals[cat.key] += morning + afternoon
        aggregate.group_totals[cat.group] += morning + afternoon
        aggregate.max_category = max(aggregate.max_category, morning, afternoon)


def aggregate_daily(
    records: Sequence[SchedulingRecord],
    dates: Sequence[date],
    cfg: EngineConfig | None = None,
) -> List[DailyAggregate]:
    """
    Sum allocations and category counts for every day of a range.

    Args:
        records: Scheduling records
        dates: Reporting days, typically from build_calendar_range
        cfg: EngineConfig

    Returns:
        One DailyAggregate per date, in the order given
    """
    cfg = cfg or EngineConfig()
    records = list(records)
    index = build_date_index(records, dates, cfg)
    with_blood_draw = [r for r in records if r.blood_draw_date is not None]

    aggregates: List[DailyAggregate] = []
    for day in dates:
        aggregate = DailyAggregate(
            date=day,
            category_totals=empty_category_totals(),
            category_morning=empty_category_totals(),
            category_afternoon=empty_category_totals(),
            group_totals={group: 0 for group in REPORT_GROUPS},
        )

        if not is_rest_day(day, cfg):
            for record in index.records_for(day):
                allocation = index.allocate(record, day)
                if allocation.total <= 0:
                    continue
                aggregate.people_total += allocation.total
                aggregate.morning_total += allocation.morning
                aggregate.afternoon_total += allocation.afternoon
                aggregate.company_count += 1
                _add_categories(aggregate, record, allocation)

        aggregate.group_totals[GENERAL_MEDICINE] = aggregate.people_total

        split = split_blood_draw(
            with_blood_draw,
            day,
            aggregate.people_total,
            cfg,
            parsed_cache=index.parsed_for_year(day.year),
        )
        aggregate.blood_draw_external = split.external
        aggregate.blood_draw_internal = split.internal
        aggregates.append(aggregate)

    return aggregates
