"""Tests for the blood-draw split and room estimates."""

from datetime import date

import pytest

from exam_scheduler.config import EngineConfig
from exam_scheduler.services.blood_draw import split_blood_draw
from exam_scheduler.services.rooms import estimate_rooms, estimate_rooms_by_group

DAY = date(2025, 8, 4)


def test_external_and_internal_partition(make_record):
    """Test a 50-person day with a 20-person external draw."""
    drawn = make_record(
        company_name="Drawn",
        start_date="2025-08-04",
        specific_dates="8/4(20)",
        total_people=20,
        blood_draw_date="2025-08-04",
    )
    walk_in = make_record(company_name="Walk-in", start_date="2025-08-04", specific_dates="8/4(30)", total_people=30)

    split = split_blood_draw([drawn, walk_in], DAY, 50)

    assert split.external == 20
    assert split.internal == 30


def test_external_uses_whole_campaign(make_record):
    """Test the external draw counts every person of the campaign."""
    record = make_record(
        start_date="2025-08-01",
        end_date="2025-08-08",
        total_people=120,
        status="Completed",
        blood_draw_date="2025-08-04",
    )
    assert split_blood_draw([record], DAY, 0).external == 120


def test_internal_is_clamped(make_record):
    """Test inconsistent inputs never drive internal below zero."""
    drawn = make_record(
        start_date="2025-08-04",
        specific_dates="8/4(20)",
        total_people=20,
        blood_draw_date="2025-08-10",
    )
    split = split_blood_draw([drawn], DAY, 5)

    assert split.external == 0
    assert split.internal == 0


def test_records_without_draw_date_do_not_reduce_internal(make_record):
    """Test only records with a blood-draw date are subtracted."""
    plain = make_record(start_date="2025-08-04", specific_dates="8/4(40)", total_people=40)
    split = split_blood_draw([plain], DAY, 40)

    assert split.external == 0
    assert split.internal == 40


@pytest.mark.parametrize(
    "total,category,expected",
    [
        (0, "ultrasound", 0),
        (90, "ultrasound", 1),
        (91, "ultrasound", 2),
        (200, "ultrasound", 2),
        (201, "ultrasound", 3),
        (5000, "ultrasound", 3),
        (91, "ecg", 2),
        (90, "ecg", 1),
        (0, "ecg", 0),
        (181, "general_medicine", 3),
        (270, "gynecology", 3),
    ],
)
def test_room_tiers(total, category, expected):
    """Test stepped ultrasound tiers and per-90 rooms elsewhere."""
    assert estimate_rooms(total, category) == expected


def test_room_aliases_map_to_ultrasound():
    """Test category keys and aliases reach the ultrasound rule."""
    assert estimate_rooms(500, "imaging") == 3
    assert estimate_rooms(150, "us_heart") == 2


def test_room_tiers_from_config():
    """Test thresholds and capacity come from config."""
    cfg = EngineConfig(room_capacity=50, imaging_room_tiers=[60])

    assert estimate_rooms(60, "ultrasound", cfg) == 1
    assert estimate_rooms(61, "ultrasound", cfg) == 2
    assert estimate_rooms(1000, "ultrasound", cfg) == 2
    assert estimate_rooms(101, "ecg", cfg) == 3


def test_rooms_by_group():
    """Test every group of a day gets an estimate."""
    rooms = estimate_rooms_by_group({"ultrasound": 120, "ecg": 10, "xray": 0})
    assert rooms == {"ultrasound": 2, "ecg": 1, "xray": 0}
