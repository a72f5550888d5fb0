"""Tests for the ExamDayEngine facade and company summaries."""

from datetime import date

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import GENERAL_MEDICINE, ULTRASOUND
from exam_scheduler.engine.orchestrator import ExamDayEngine, build_daily_report
from exam_scheduler.services.calendar_range import ReportingWindow
from exam_scheduler.services.summary import companies_on_day, company_summary, record_overlaps_window


def test_engine_contracts_use_its_config(make_record):
    """Test each engine call applies the configuration it was built with."""
    engine = ExamDayEngine(EngineConfig(rest_weekday=0, imaging_room_tiers=[50]))
    record = make_record(start_date="2025-08-01", specific_dates="8/3(40),8/4(20)", total_people=60)

    dates = engine.build_calendar_range(ReportingWindow.between("2025-08-01", "2025-08-05"))
    assert date(2025, 8, 3) in dates
    assert date(2025, 8, 4) not in dates

    assert engine.allocate_for_day(record, date(2025, 8, 3)).total == 40
    assert engine.allocate_for_day(record, date(2025, 8, 4)).total == 0
    assert engine.estimate_rooms(51, "ultrasound") == 2
    assert engine.estimate_rooms(500, "ultrasound") == 2

    split = engine.split_blood_draw([record], date(2025, 8, 3), 40)
    assert (split.external, split.internal) == (0, 40)


def test_daily_report_attaches_rooms(make_record):
    """Test the report pipeline fills room requirements per group."""
    records = [
        make_record(
            company_name="Big",
            start_date="2025-08-04",
            specific_dates="8/4(100,100)",
            us_abdomen_morning="x",
            us_abdomen_afternoon="x",
        ),
        make_record(company_name="Later", start_date="2025-09-01", end_date="2025-09-05", total_people=50),
    ]

    aggregates = build_daily_report(records, ReportingWindow.between("2025-08-04", "2025-08-05"))

    assert [a.date for a in aggregates] == [date(2025, 8, 4), date(2025, 8, 5)]
    first = aggregates[0]
    assert first.people_total == 200
    assert first.group_totals[ULTRASOUND] == 200
    assert first.rooms[ULTRASOUND] == 2
    assert first.rooms[GENERAL_MEDICINE] == 3
    assert aggregates[1].rooms[ULTRASOUND] == 0


def test_daily_report_empty_window(make_record, capsys):
    """Test a window with only the rest day gives an empty report."""
    record = make_record(start_date="2025-08-01", end_date="2025-08-05", total_people=10)

    assert ExamDayEngine().build_daily_report([record], ReportingWindow.between("2025-08-03", "2025-08-03")) == []
    assert "[WARN]" in capsys.readouterr().out


def _report_values(aggregates):
    return [
        (
            a.date,
            a.people_total,
            a.morning_total,
            a.afternoon_total,
            a.company_count,
            a.blood_draw_external,
            a.blood_draw_internal,
            a.category_totals,
            a.group_totals,
            a.max_category,
        )
        for a in aggregates
    ]


def test_report_matches_direct_aggregation(make_record):
    """Test pre-filtering by window never changes any reported value."""
    records = [
        make_record(
            company_name="A",
            start_date="2025-07-20",
            end_date="2025-08-10",
            total_people=90,
            status="Completed",
            blood_draw_date="2025-08-12",
            ecg_morning="x",
        ),
        make_record(company_name="B", start_date="2025-06-01", specific_dates="8/5(12),8/6", us_abdomen_afternoon="x/2"),
        make_record(company_name="C", start_date="2025-05-01", end_date="2025-05-30", total_people=70),
        make_record(
            company_name="July draw",
            start_date="2025-07-07",
            end_date="2025-07-11",
            total_people=40,
            status="Completed",
            blood_draw_date="2025-08-05",
        ),
        make_record(company_name="Draw only", total_people=15, blood_draw_date="2025-08-20"),
        make_record(
            company_name="Ongoing",
            start_date="2025-08-18",
            end_date="2025-08-29",
            morning_average="20",
            afternoon_average="10",
            us_abdomen_morning="x",
        ),
    ]
    engine = ExamDayEngine()
    window = ReportingWindow.for_month(8, 2025)

    report = engine.build_daily_report(records, window)
    direct = engine.aggregate_daily(records, engine.build_calendar_range(window))

    assert _report_values(report) == _report_values(direct)

    by_day = {a.date: a for a in report}
    assert by_day[date(2025, 8, 5)].blood_draw_external == 40
    assert by_day[date(2025, 8, 12)].blood_draw_external == 90
    assert by_day[date(2025, 8, 20)].blood_draw_external == 15


def test_company_summary(make_record):
    """Test day counts and rounded averages for a campaign."""
    ranged = make_record(
        company_name="Ranged",
        start_date="2025-08-04",
        end_date="2025-08-16",
        total_people=240,
        morning_average="12.5",
        afternoon_average="7.4",
        employee_name="Lan",
    )
    summary = company_summary(ranged, 2025)
    assert summary.total_days == 12
    assert (summary.morning_count, summary.afternoon_count) == (13, 7)
    assert summary.employee_name == "Lan"

    listed = make_record(company_name="Listed", start_date="2025-08-01", specific_dates="8/1(5),8/3,8/4")
    summary = company_summary(listed, 2025)
    assert summary.total_days == 2
    assert summary.specific_dates == [date(2025, 8, 1), date(2025, 8, 4)]

    assert company_summary(make_record(company_name="Empty"), 2025).total_days == 0


def test_record_overlaps_window(make_record):
    """Test window pre-filter rules."""
    start, end = date(2025, 8, 1), date(2025, 8, 31)

    assert record_overlaps_window(make_record(start_date="2025-07-25", end_date="2025-08-02"), start, end)
    assert not record_overlaps_window(make_record(start_date="2025-07-01", end_date="2025-07-31"), start, end)
    assert record_overlaps_window(make_record(start_date="2025-01-01", specific_dates="8/4"), start, end)
    assert not record_overlaps_window(make_record(specific_dates="8/4"), start, end)

    drawn_later = make_record(start_date="2025-07-07", end_date="2025-07-11", blood_draw_date="2025-08-05")
    assert record_overlaps_window(drawn_later, start, end)
    assert record_overlaps_window(make_record(blood_draw_date="2025-08-31"), start, end)
    assert not record_overlaps_window(
        make_record(start_date="2025-07-07", end_date="2025-07-11", blood_draw_date="2025-09-01"), start, end
    )


def test_companies_on_day_sorted(make_record):
    """Test day detail lists non-zero companies largest first."""
    records = [
        make_record(company_name="Small", start_date="2025-08-04", specific_dates="8/4(5)"),
        make_record(company_name="Beta", start_date="2025-08-04", specific_dates="8/4(20)"),
        make_record(company_name="Alpha", start_date="2025-08-04", specific_dates="8/4(20)"),
        make_record(company_name="Absent", start_date="2025-08-05", specific_dates="8/5(50)"),
    ]

    pairs = companies_on_day(records, date(2025, 8, 4))
    assert [(r.company_name, a.total) for r, a in pairs] == [("Alpha", 20), ("Beta", 20), ("Small", 5)]
