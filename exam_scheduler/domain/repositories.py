"""Repository classes for data access."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from .models import ExamSchedule
from .records import SchedulingRecord


def _row_to_mapping(row: ExamSchedule) -> Dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in ExamSchedule.__table__.columns}


class ExamScheduleRepository:
    """Repository for examination schedule data access."""

    @staticmethod
    def get_all(session: Session) -> List[ExamSchedule]:
        """Get all schedules ordered by start date then company."""
        return (
            session.query(ExamSchedule)
            .order_by(ExamSchedule.start_date, ExamSchedule.company_name)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, schedule_id: int) -> Optional[ExamSchedule]:
        """Get schedule by ID."""
        return session.query(ExamSchedule).filter(ExamSchedule.id == schedule_id).first()

    @staticmethod
    def get_by_status(session: Session, status: str) -> List[ExamSchedule]:
        """Get schedules whose stored status label matches (case-insensitive for ASCII labels)."""
        label = status.strip()
        # SQLite lower() only folds ASCII, so exact matches are checked too
        return (
            session.query(ExamSchedule)
            .filter(or_(ExamSchedule.status == label, func.lower(ExamSchedule.status) == label.lower()))
            .all()
        )

    @staticmethod
    def get_overlapping(session: Session, start: date, end: date) -> List[ExamSchedule]:
        """
        Get schedules that may contribute to days between start and end.

        Rows with specific dates are always returned because their entries
        can fall outside the stored start/end range. Rows with a blood draw
        inside the window are returned for the external count.
        """
        has_specific = and_(ExamSchedule.specific_dates.is_not(None), ExamSchedule.specific_dates != "")
        in_range = and_(
            ExamSchedule.start_date <= end,
            func.coalesce(ExamSchedule.end_date, ExamSchedule.start_date) >= start,
        )
        examined = and_(ExamSchedule.start_date.is_not(None), or_(has_specific, in_range))
        drawn = ExamSchedule.blood_draw_date.between(start, end)
        return (
            session.query(ExamSchedule)
            .filter(or_(examined, drawn))
            .order_by(ExamSchedule.start_date, ExamSchedule.company_name)
            .all()
        )

    @staticmethod
    def create(session: Session, schedule: ExamSchedule) -> ExamSchedule:
        """Create a new schedule."""
        session.add(schedule)
        session.commit()
        session.refresh(schedule)
        return schedule

    @staticmethod
    def bulk_create(session: Session, schedules: List[ExamSchedule]) -> None:
        """Create multiple schedules."""
        session.add_all(schedules)
        session.commit()

    @staticmethod
    def delete_all(session: Session) -> int:
        """Delete every schedule. Returns the number of rows removed."""
        count = session.query(ExamSchedule).delete()
        session.commit()
        return count

    @staticmethod
    def to_records(rows: Iterable[ExamSchedule], cfg=None) -> List[SchedulingRecord]:
        """
        Convert ORM rows into engine records.

        Args:
            rows: ExamSchedule rows
            cfg: EngineConfig used to interpret status labels

        Returns:
            List of SchedulingRecord in row order
        """
        from exam_scheduler.services.normalize import record_from_mapping

        return [record_from_mapping(_row_to_mapping(row), cfg) for row in rows]
