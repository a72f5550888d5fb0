"""SQLAlchemy models for company examination schedules."""

from __future__ import annotations

from sqlalchemy import Column, Date, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class ExamSchedule(Base):
    """
    One company's examination campaign.

    Category counters are kept as text so "x" / "x/2" placeholders survive
    storage; they are parsed into cells by record_from_mapping.
    """

    __tablename__ = "exam_schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    specific_dates = Column(Text, nullable=True)  # e.g. "8/1(30),8/2(50,60),8/4"
    total_people = Column(Integer, nullable=False, default=0)
    status = Column(String(50), nullable=True)  # Completed / Ongoing (or source labels)
    morning_average = Column(Float, nullable=True)
    afternoon_average = Column(Float, nullable=True)
    blood_draw_date = Column(Date, nullable=True)
    employee_name = Column(String(255), nullable=True)

    # Ultrasound
    us_abdomen_morning = Column(String(20), nullable=True)
    us_abdomen_afternoon = Column(String(20), nullable=True)
    us_breast_morning = Column(String(20), nullable=True)
    us_breast_afternoon = Column(String(20), nullable=True)
    us_thyroid_morning = Column(String(20), nullable=True)
    us_thyroid_afternoon = Column(String(20), nullable=True)
    us_heart_morning = Column(String(20), nullable=True)
    us_heart_afternoon = Column(String(20), nullable=True)
    us_carotid_morning = Column(String(20), nullable=True)
    us_carotid_afternoon = Column(String(20), nullable=True)
    us_liver_elastography_morning = Column(String(20), nullable=True)
    us_liver_elastography_afternoon = Column(String(20), nullable=True)
    us_transvaginal_morning = Column(String(20), nullable=True)
    us_transvaginal_afternoon = Column(String(20), nullable=True)

    xray_morning = Column(String(20), nullable=True)
    xray_afternoon = Column(String(20), nullable=True)
    ecg_morning = Column(String(20), nullable=True)
    ecg_afternoon = Column(String(20), nullable=True)
    gynecology_morning = Column(String(20), nullable=True)
    gynecology_afternoon = Column(String(20), nullable=True)
    bone_density_morning = Column(String(20), nullable=True)
    bone_density_afternoon = Column(String(20), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<ExamSchedule(id={self.id}, company='{self.company_name}', "
            f"start={self.start_date}, end={self.end_date}, status='{self.status}')>"
        )
