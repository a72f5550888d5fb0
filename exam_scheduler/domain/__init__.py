"""Domain types, models and data access layer."""

from .categories import EXAM_CATEGORIES, REPORT_GROUPS, ExamCategory
from .records import (
    BloodDrawSplit,
    DailyAggregate,
    DayAllocation,
    ExamStatus,
    ParsedDayEntry,
    SchedulingRecord,
)
from .models import Base, ExamSchedule
from .repositories import ExamScheduleRepository

__all__ = [
    "EXAM_CATEGORIES",
    "REPORT_GROUPS",
    "ExamCategory",
    "BloodDrawSplit",
    "DailyAggregate",
    "DayAllocation",
    "ExamStatus",
    "ParsedDayEntry",
    "SchedulingRecord",
    "Base",
    "ExamSchedule",
    "ExamScheduleRepository",
]
