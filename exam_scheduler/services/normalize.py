"""Conversion of raw rows into engine SchedulingRecords."""

from __future__ import annotations

from typing import Any, Mapping

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import EXAM_CATEGORIES
from exam_scheduler.domain.records import SchedulingRecord

from .calendar_range import parse_date_value
from .placeholders import parse_cell, parse_count, parse_float
from .status import parse_status


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    return str(value).strip()


def record_from_mapping(row: Mapping[str, Any], cfg: EngineConfig | None = None) -> SchedulingRecord:
    """
    Build a SchedulingRecord from a flat mapping.

    Keys follow ExamSchedule attribute names (CSV rows after column mapping,
    or ORM attributes). Every cell is parsed here so the engine never sees
    raw strings.
    """
    categories = {}
    for cat in EXAM_CATEGORIES:
        categories[cat.key] = (
            parse_cell(row.get(cat.morning_field)),
            parse_cell(row.get(cat.afternoon_field)),
        )

    record_id = row.get("id")
    record_id = parse_count(record_id) if _text(record_id) else None

    return SchedulingRecord(
        company_name=_text(row.get("company_name")),
        start_date=parse_date_value(row.get("start_date")),
        end_date=parse_date_value(row.get("end_date")),
        specific_dates=_text(row.get("specific_dates")),
        total_people=parse_count(row.get("total_people")),
        status=parse_status(row.get("status"), cfg),
        morning_average=parse_float(row.get("morning_average")),
        afternoon_average=parse_float(row.get("afternoon_average")),
        blood_draw_date=parse_date_value(row.get("blood_draw_date")),
        employee_name=_text(row.get("employee_name")),
        categories=categories,
        record_id=record_id,
    )
