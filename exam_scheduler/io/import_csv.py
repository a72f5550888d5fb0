"""CSV import utilities to load examination schedules."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import Dict, List

import pandas as pd
from sqlalchemy.orm import Session

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import EXAM_CATEGORIES, SOURCE_CATEGORY_COLUMNS
from exam_scheduler.domain.models import ExamSchedule
from exam_scheduler.domain.records import SchedulingRecord
from exam_scheduler.services.calendar_range import parse_date_value
from exam_scheduler.services.normalize import record_from_mapping
from exam_scheduler.services.placeholders import parse_count, parse_float

# Source spreadsheet headers (unaccented, lower-case) -> ExamSchedule attribute
SOURCE_COLUMNS: Dict[str, str] = {
    "ten cong ty": "company_name",
    "ngay bat dau kham": "start_date",
    "ngay ket thuc kham": "end_date",
    "cac ngay kham thuc te": "specific_dates",
    "so nguoi kham": "total_people",
    "trang thai kham": "status",
    "trung binh ngay sang": "morning_average",
    "trung binh ngay chieu": "afternoon_average",
    "ngay lay mau": "blood_draw_date",
    "ten nhan vien": "employee_name",
    **SOURCE_CATEGORY_COLUMNS,
}

_DATE_COLUMNS = ("start_date", "end_date", "blood_draw_date")
_TEXT_COLUMNS = ("company_name", "specific_dates", "status", "employee_name")


def normalize_header(header: str) -> str:
    """
    Normalize a column header for alias lookup.

    Accents are stripped (đ -> d), case folded and whitespace collapsed,
    so "Tên công ty" and "ten  cong ty" compare equal.
    """
    text = str(header).replace("đ", "d").replace("Đ", "D")
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r"\s+", " ", text).strip().lower()


def read_schedules_csv(csv_path: str | Path) -> pd.DataFrame:
    """
    Read a schedule export into a DataFrame keyed by ExamSchedule attributes.

    Every column is read as text so placeholders ("x", "x/2") and free-text
    date lists reach the parsers untouched.

    Raises:
        ValueError: If the company name column is missing
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

    renamed = {}
    for column in df.columns:
        normalized = normalize_header(column)
        renamed[column] = SOURCE_COLUMNS.get(normalized, normalized.replace(" ", "_"))
    df = df.rename(columns=renamed)

    if "company_name" not in df.columns:
        raise ValueError(f"{csv_path}: missing company name column (expected 'company_name' or 'Tên công ty')")

    # Skip spreadsheet filler rows
    df = df[df["company_name"].str.strip() != ""].copy()
    return df


def records_from_frame(df: pd.DataFrame, cfg: EngineConfig | None = None) -> List[SchedulingRecord]:
    """Convert a schedules DataFrame into engine records."""
    return [record_from_mapping(row, cfg) for row in df.to_dict(orient="records")]


def _schedule_from_row(row: Dict[str, str]) -> ExamSchedule:
    kwargs = {}
    for column in _TEXT_COLUMNS:
        value = str(row.get(column, "") or "").strip()
        kwargs[column] = value or None
    for column in _DATE_COLUMNS:
        kwargs[column] = parse_date_value(row.get(column))
    kwargs["total_people"] = parse_count(row.get("total_people"))
    kwargs["morning_average"] = parse_float(row.get("morning_average"))
    kwargs["afternoon_average"] = parse_float(row.get("afternoon_average"))

    for cat in EXAM_CATEGORIES:
        for field_name in (cat.morning_field, cat.afternoon_field):
            value = str(row.get(field_name, "") or "").strip()
            kwargs[field_name] = value or None

    return ExamSchedule(**kwargs)


def import_schedules_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import examination schedules from CSV into database.

    Args:
        session: Database session
        csv_path: Path to schedules CSV (English attribute headers or the
            Vietnamese source headers)

    Returns:
        Number of schedules imported
    """
    df = read_schedules_csv(csv_path)

    schedules = [_schedule_from_row(row) for row in df.to_dict(orient="records")]

    session.add_all(schedules)
    session.commit()

    print(f"[INFO] Imported {len(schedules)} schedules from {csv_path}")
    return len(schedules)
