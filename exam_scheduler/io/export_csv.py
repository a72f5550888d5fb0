"""CSV export of daily reports and the company x day allocation matrix."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import REPORT_GROUPS
from exam_scheduler.domain.records import DailyAggregate, SchedulingRecord
from exam_scheduler.services.allocation import allocate_for_day
from exam_scheduler.services.rooms import estimate_rooms_by_group

DAILY_REPORT_COLUMNS = [
    "date",
    "weekday",
    "people_total",
    "morning_total",
    "afternoon_total",
    "company_count",
    "blood_draw_external",
    "blood_draw_internal",
    "max_category",
]


def daily_report_frame(aggregates: Sequence[DailyAggregate], cfg: EngineConfig | None = None) -> pd.DataFrame:
    """
    Flatten daily aggregates into one row per day.

    Group totals appear as "<group>_total" columns and room requirements as
    "<group>_rooms". Rooms are estimated here when the aggregate has none.
    """
    rows = []
    for agg in aggregates:
        rooms = agg.rooms or estimate_rooms_by_group(agg.group_totals, cfg)
        row = {
            "date": agg.date.isoformat(),
            "weekday": agg.date.strftime("%a"),
            "people_total": agg.people_total,
            "morning_total": agg.morning_total,
            "afternoon_total": agg.afternoon_total,
            "company_count": agg.company_count,
            "blood_draw_external": agg.blood_draw_external,
            "blood_draw_internal": agg.blood_draw_internal,
            "max_category": agg.max_category,
        }
        for group in REPORT_GROUPS:
            row[f"{group}_total"] = agg.group_totals.get(group, 0)
        for group in REPORT_GROUPS:
            row[f"{group}_rooms"] = rooms.get(group, 0)
        rows.append(row)

    columns = DAILY_REPORT_COLUMNS + [f"{g}_total" for g in REPORT_GROUPS] + [f"{g}_rooms" for g in REPORT_GROUPS]
    return pd.DataFrame(rows, columns=columns)


def company_matrix_frame(
    records: Sequence[SchedulingRecord],
    dates: Sequence[date],
    cfg: EngineConfig | None = None,
) -> pd.DataFrame:
    """
    Build the company x day people matrix with a leading TOTAL row.

    Companies with nothing allocated in the range are left out.
    """
    day_columns = [d.isoformat() for d in dates]
    rows = []
    for record in records:
        counts = [allocate_for_day(record, d, cfg).total for d in dates]
        if sum(counts) == 0:
            continue
        rows.append({"company_name": record.company_name, **dict(zip(day_columns, counts)), "total": sum(counts)})

    rows.sort(key=lambda r: (-r["total"], r["company_name"]))

    total_row = {"company_name": "TOTAL"}
    for column in day_columns + ["total"]:
        total_row[column] = sum(r[column] for r in rows)

    return pd.DataFrame([total_row] + rows, columns=["company_name"] + day_columns + ["total"])


def export_daily_report_csv(
    aggregates: Sequence[DailyAggregate],
    csv_path: str | Path,
    cfg: EngineConfig | None = None,
) -> int:
    """
    Write a daily report to CSV.

    Returns:
        Number of day rows written
    """
    df = daily_report_frame(aggregates, cfg)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} report days to {csv_path}")
    return len(df)


def export_company_matrix_csv(
    records: Sequence[SchedulingRecord],
    dates: List[date],
    csv_path: str | Path,
    cfg: EngineConfig | None = None,
) -> int:
    """Write the company x day matrix to CSV. Returns the number of company rows."""
    df = company_matrix_frame(records, dates, cfg)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df) - 1} companies to {csv_path}")
    return len(df) - 1
