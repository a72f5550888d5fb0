"""ExamDayEngine - runs the full allocation pipeline for a reporting window."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import (
    BloodDrawSplit,
    DailyAggregate,
    DayAllocation,
    ParsedDayEntry,
    SchedulingRecord,
)
from exam_scheduler.services.allocation import allocate_for_day
from exam_scheduler.services.blood_draw import split_blood_draw
from exam_scheduler.services.calendar_range import ReportingWindow, build_calendar_range
from exam_scheduler.services.rooms import estimate_rooms, estimate_rooms_by_group
from exam_scheduler.services.summary import record_overlaps_window

from .aggregator import aggregate_daily


class ExamDayEngine:
    """
    Facade over the allocation services bound to one EngineConfig.

    The engine keeps no state between calls besides its configuration, so a
    single instance can serve any number of reports.
    """

    def __init__(self, cfg: EngineConfig | None = None):
        """
        Initialize the engine.

        Args:
            cfg: EngineConfig (defaults when omitted)
        """
        self.cfg = cfg or EngineConfig()

    def build_calendar_range(self, window: ReportingWindow) -> List[date]:
        return build_calendar_range(window, self.cfg)

    def allocate_for_day(
        self,
        record: SchedulingRecord,
        day: date,
        parsed_entries: Optional[List[ParsedDayEntry]] = None,
    ) -> DayAllocation:
        return allocate_for_day(record, day, self.cfg, parsed_entries=parsed_entries)

    def aggregate_daily(self, records: Sequence[SchedulingRecord], dates: Sequence[date]) -> List[DailyAggregate]:
        return aggregate_daily(records, dates, self.cfg)

    def split_blood_draw(
        self,
        records: Iterable[SchedulingRecord],
        day: date,
        day_people_total: int,
    ) -> BloodDrawSplit:
        return split_blood_draw(records, day, day_people_total, self.cfg)

    def estimate_rooms(self, category_total: int, category: str) -> int:
        return estimate_rooms(category_total, category, self.cfg)

    def estimate_rooms_by_group(self, group_totals: Dict[str, int]) -> Dict[str, int]:
        return estimate_rooms_by_group(group_totals, self.cfg)

    def build_daily_report(
        self,
        records: Iterable[SchedulingRecord],
        window: ReportingWindow,
    ) -> List[DailyAggregate]:
        """
        Build the per-day workload report for a window.

        Args:
            records: Scheduling records (typically from ExamScheduleRepository.to_records)
            window: Reporting window

        Returns:
            One DailyAggregate per operating day, with rooms filled in
        """
        dates = self.build_calendar_range(window)
        if not dates:
            print(f"[WARN] Reporting window {window.bounds()} contains no operating days")
            return []

        start, end = dates[0], dates[-1]
        relevant = [r for r in records if record_overlaps_window(r, start, end)]
        print(f"[INFO] Building daily report {start} -> {end}: {len(relevant)} records, {len(dates)} days")

        aggregates = self.aggregate_daily(relevant, dates)
        for aggregate in aggregates:
            aggregate.rooms = self.estimate_rooms_by_group(aggregate.group_totals)

        total_people = sum(a.people_total for a in aggregates)
        print(f"[OK] Daily report built: {total_people} examinations over {len(aggregates)} days")
        return aggregates


def build_daily_report(
    records: Iterable[SchedulingRecord],
    window: ReportingWindow,
    cfg: EngineConfig | None = None,
) -> List[DailyAggregate]:
    """
    Convenience function to build a daily report with a fresh engine.

    Args:
        records: Scheduling records
        window: Reporting window
        cfg: EngineConfig

    Returns:
        List of DailyAggregate
    """
    engine = ExamDayEngine(cfg)
    return engine.build_daily_report(records, window)
