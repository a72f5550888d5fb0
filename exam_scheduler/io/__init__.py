"""I/O utilities for CSV import/export."""

from .export_csv import (
    company_matrix_frame,
    daily_report_frame,
    export_company_matrix_csv,
    export_daily_report_csv,
)
from .import_csv import import_schedules_csv, read_schedules_csv, records_from_frame

__all__ = [
    "import_schedules_csv",
    "read_schedules_csv",
    "records_from_frame",
    "daily_report_frame",
    "company_matrix_frame",
    "export_daily_report_csv",
    "export_company_matrix_csv",
]
