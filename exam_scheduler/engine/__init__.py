"""Allocation engine: daily aggregation and the report pipeline."""

from .aggregator import DateIndex, aggregate_daily, build_date_index
from .orchestrator import ExamDayEngine, build_daily_report

__all__ = [
    "DateIndex",
    "aggregate_daily",
    "build_date_index",
    "ExamDayEngine",
    "build_daily_report",
]
