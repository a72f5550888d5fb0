"""Exam scheduler: daily workload engine for company health-examination campaigns.

Modules:
- config: load and validate engine configuration (YAML or JSON)
- domain: value types, exam categories, SQLAlchemy models and repositories
- services: placeholder resolution, specific-date parsing, calendar ranges,
  per-day allocation, blood-draw split, room estimates, company summaries
- engine: daily aggregation and the report pipeline (ExamDayEngine)
- io: CSV import of schedules and CSV export of reports
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
