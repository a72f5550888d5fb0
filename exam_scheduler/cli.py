"""Command-line interface for the examination workload reports."""

from __future__ import annotations

import argparse
from datetime import date

from exam_scheduler.config import load_config
from exam_scheduler.domain.categories import GENERAL_MEDICINE, ULTRASOUND
from exam_scheduler.domain.db import DEFAULT_DB_URL, get_session, init_database, reset_database
from exam_scheduler.domain.repositories import ExamScheduleRepository
from exam_scheduler.engine.orchestrator import ExamDayEngine
from exam_scheduler.io.export_csv import export_company_matrix_csv, export_daily_report_csv
from exam_scheduler.io.import_csv import import_schedules_csv
from exam_scheduler.services.calendar_range import ReportingWindow, parse_date_value
from exam_scheduler.services.summary import companies_on_day, company_summary


def _db_url(args: argparse.Namespace, cfg=None) -> str:
    if args.db:
        return args.db
    if cfg is not None:
        return cfg.db_url
    return DEFAULT_DB_URL


def _window_from_args(args: argparse.Namespace) -> ReportingWindow:
    if args.start or args.end:
        if not (args.start and args.end):
            raise ValueError("--start and --end must be given together")
        return ReportingWindow.between(args.start, args.end)
    if args.month is None or args.year is None:
        raise ValueError("Give either --start/--end or --month/--year")
    return ReportingWindow.for_month(args.month, args.year)


def _parse_day(value: str) -> date:
    day = parse_date_value(value)
    if day is None:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    return day


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = _db_url(args)
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_reset_db(args: argparse.Namespace) -> None:
    """Drop and recreate all tables."""
    reset_database(_db_url(args))


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import schedule CSV into database."""
    session = get_session(_db_url(args))

    try:
        if args.replace:
            deleted = ExamScheduleRepository.delete_all(session)
            print(f"[INFO] Deleted {deleted} existing schedules")

        count = import_schedules_csv(session, args.schedules)
        session.close()
        print(f"[OK] Imported {count} schedules")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_report(args: argparse.Namespace) -> None:
    """Build the daily workload report for a window."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        window = _window_from_args(args)
        start, end = window.bounds()

        rows = ExamScheduleRepository.get_overlapping(session, start, end)
        records = ExamScheduleRepository.to_records(rows, cfg)

        engine = ExamDayEngine(cfg)
        aggregates = engine.build_daily_report(records, window)

        for agg in aggregates:
            print(
                f"  {agg.date} {agg.date.strftime('%a')}: people={agg.people_total} "
                f"(AM {agg.morning_total} / PM {agg.afternoon_total}) "
                f"companies={agg.company_count} "
                f"blood ext/int={agg.blood_draw_external}/{agg.blood_draw_internal} "
                f"ultrasound={agg.group_totals.get(ULTRASOUND, 0)} "
                f"rooms us/gm={agg.rooms.get(ULTRASOUND, 0)}/{agg.rooms.get(GENERAL_MEDICINE, 0)}"
            )

        if args.out:
            export_daily_report_csv(aggregates, args.out, cfg)
        if args.matrix:
            export_company_matrix_csv(records, [a.date for a in aggregates], args.matrix, cfg)

        session.close()
        print(f"[OK] Report covers {len(aggregates)} days, {sum(a.people_total for a in aggregates)} examinations")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Report failed: {e}")
        raise


def _cmd_day(args: argparse.Namespace) -> None:
    """List the companies examined on one day."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        day = _parse_day(args.date)
        rows = ExamScheduleRepository.get_overlapping(session, day, day)
        records = ExamScheduleRepository.to_records(rows, cfg)

        pairs = companies_on_day(records, day, cfg)
        for record, allocation in pairs:
            print(
                f"  {record.company_name}: {allocation.total} "
                f"(AM {allocation.morning} / PM {allocation.afternoon}) {record.employee_name}"
            )

        session.close()
        print(f"[OK] {len(pairs)} companies on {day}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Day listing failed: {e}")
        raise


def _cmd_companies(args: argparse.Namespace) -> None:
    """Print a summary line per company."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        records = ExamScheduleRepository.to_records(ExamScheduleRepository.get_all(session), cfg)
        for record in records:
            year = args.year or (record.start_date.year if record.start_date else date.today().year)
            summary = company_summary(record, year, cfg)
            print(
                f"  {summary.company_name}: {summary.total_people} people over {summary.total_days} days "
                f"(avg AM {summary.morning_count} / PM {summary.afternoon_count})"
            )

        session.close()
        print(f"[OK] {len(records)} companies")

    except Exception as e:
        session.close()
        print(f"[ERROR] Company listing failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="exam-scheduler",
        description="Daily workload reports for company health-examination campaigns",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: config db_url or {DEFAULT_DB_URL})")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # reset-db command
    reset = sub.add_parser("reset-db", help="Drop and recreate all tables")
    reset.set_defaults(func=_cmd_reset_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import schedules CSV into database")
    imp.add_argument("--schedules", required=True, help="Path to schedules CSV")
    imp.add_argument("--replace", action="store_true", help="Delete existing schedules first")
    imp.set_defaults(func=_cmd_import_csv)

    # report command
    rep = sub.add_parser("report", help="Build the daily workload report")
    rep.add_argument("--month", type=int, help="Report month (1-12)")
    rep.add_argument("--year", type=int, help="Report year")
    rep.add_argument("--start", help="Window start (YYYY-MM-DD), overrides month/year")
    rep.add_argument("--end", help="Window end (YYYY-MM-DD)")
    rep.add_argument("--config", help="Path to config YAML/JSON")
    rep.add_argument("--out", help="Optional: export daily report to CSV")
    rep.add_argument("--matrix", help="Optional: export company x day matrix to CSV")
    rep.set_defaults(func=_cmd_report)

    # day command
    day = sub.add_parser("day", help="List companies examined on a day")
    day.add_argument("--date", required=True, help="Day (YYYY-MM-DD)")
    day.add_argument("--config", help="Path to config YAML/JSON")
    day.set_defaults(func=_cmd_day)

    # companies command
    comp = sub.add_parser("companies", help="Summarize every company campaign")
    comp.add_argument("--year", type=int, help="Reference year for specific dates (default: start date year)")
    comp.add_argument("--config", help="Path to config YAML/JSON")
    comp.set_defaults(func=_cmd_companies)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
