"""Services for examination-day allocation."""

from .allocation import allocate_for_day
from .blood_draw import split_blood_draw
from .calendar_range import ReportingWindow, build_calendar_range, count_working_days, is_rest_day
from .date_parser import parse_specific_dates, split_date_entries
from .normalize import record_from_mapping
from .placeholders import parse_cell, resolve, resolve_cell, round_half_up
from .rooms import estimate_rooms, estimate_rooms_by_group
from .summary import companies_on_day, company_summary, record_overlaps_window

__all__ = [
    "allocate_for_day",
    "split_blood_draw",
    "ReportingWindow",
    "build_calendar_range",
    "count_working_days",
    "is_rest_day",
    "parse_specific_dates",
    "split_date_entries",
    "record_from_mapping",
    "parse_cell",
    "resolve",
    "resolve_cell",
    "round_half_up",
    "estimate_rooms",
    "estimate_rooms_by_group",
    "companies_on_day",
    "company_summary",
    "record_overlaps_window",
]
