"""Integration tests for the command-line interface."""

import pandas as pd
import pytest

from exam_scheduler.cli import main

SCHEDULES_CSV = """company_name,start_date,end_date,specific_dates,total_people,status,morning_average,afternoon_average,blood_draw_date,us_abdomen_morning
Alpha,2025-08-01,2025-08-05,"8/1(30),8/2(50),8/3(40),8/4(20),8/5(20)",160,Completed,,,,x
Beta,2025-08-04,2025-08-08,,50,Ongoing,6,4,2025-08-06,
"""


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'exam.db'}"


@pytest.mark.integration
def test_import_and_report(db_url, tmp_path, capsys):
    """Test init-db, import-csv and report end to end."""
    csv_file = tmp_path / "schedules.csv"
    csv_file.write_text(SCHEDULES_CSV, encoding="utf-8")
    out = tmp_path / "report.csv"
    matrix = tmp_path / "matrix.csv"

    main(["--db", db_url, "init-db"])
    main(["--db", db_url, "import-csv", "--schedules", str(csv_file)])
    main([
        "--db", db_url, "report",
        "--start", "2025-08-01", "--end", "2025-08-03",
        "--out", str(out), "--matrix", str(matrix),
    ])

    report = pd.read_csv(out)
    assert list(report["date"]) == ["2025-08-01", "2025-08-02"]
    assert list(report["people_total"]) == [30, 50]

    companies = pd.read_csv(matrix)
    assert list(companies["company_name"]) == ["TOTAL", "Alpha"]

    output = capsys.readouterr().out
    assert "[OK] Imported 2 schedules" in output
    assert "[OK] Report covers 2 days" in output


@pytest.mark.integration
def test_day_and_companies(db_url, tmp_path, capsys):
    """Test the day listing and company summary commands."""
    csv_file = tmp_path / "schedules.csv"
    csv_file.write_text(SCHEDULES_CSV, encoding="utf-8")

    main(["--db", db_url, "init-db"])
    main(["--db", db_url, "import-csv", "--schedules", str(csv_file)])
    capsys.readouterr()

    main(["--db", db_url, "day", "--date", "2025-08-04"])
    output = capsys.readouterr().out
    assert "Alpha: 20" in output
    assert "Beta: 10" in output
    assert "[OK] 2 companies on 2025-08-04" in output

    main(["--db", db_url, "companies"])
    output = capsys.readouterr().out
    assert "Alpha: 160 people over 4 days" in output


@pytest.mark.integration
def test_replace_import(db_url, tmp_path, capsys):
    """Test --replace clears previous schedules."""
    csv_file = tmp_path / "schedules.csv"
    csv_file.write_text(SCHEDULES_CSV, encoding="utf-8")

    main(["--db", db_url, "init-db"])
    main(["--db", db_url, "import-csv", "--schedules", str(csv_file)])
    main(["--db", db_url, "import-csv", "--schedules", str(csv_file), "--replace"])

    assert "[INFO] Deleted 2 existing schedules" in capsys.readouterr().out


@pytest.mark.integration
def test_report_requires_window(db_url):
    """Test the report command rejects a missing window."""
    main(["--db", db_url, "init-db"])
    with pytest.raises(ValueError):
        main(["--db", db_url, "report", "--month", "8"])


@pytest.mark.integration
def test_uninitialized_database(db_url):
    """Test commands refuse a database without the schema."""
    with pytest.raises(RuntimeError):
        main(["--db", db_url, "day", "--date", "2025-08-04"])
