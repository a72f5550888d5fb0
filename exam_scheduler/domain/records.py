"""Engine value types: scheduling records, parsed day entries and daily aggregates."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, Optional, Tuple, Union

from .categories import EXAM_CATEGORIES


class ExamStatus(enum.Enum):
    COMPLETED = "Completed"
    ONGOING = "Ongoing"


# Cell values: a literal count, a dynamic placeholder, or nothing
@dataclass(frozen=True)
class NumberCell:
    value: int


@dataclass(frozen=True)
class PlaceholderCell:
    kind: str  # "x" (everyone examined that session) or "x/2" (half of them)


@dataclass(frozen=True)
class EmptyCell:
    pass


Cell = Union[NumberCell, PlaceholderCell, EmptyCell]
EMPTY = EmptyCell()


@dataclass(frozen=True)
class SchedulingRecord:
    """
    One company's examination campaign as read from the data store.

    Category counters are stored as (morning, afternoon) cell pairs keyed by
    category key, already parsed into the Cell union.
    """

    company_name: str
    start_date: Optional[date]
    end_date: Optional[date] = None
    specific_dates: str = ""
    total_people: int = 0
    status: ExamStatus = ExamStatus.ONGOING
    morning_average: float = 0.0
    afternoon_average: float = 0.0
    blood_draw_date: Optional[date] = None
    employee_name: str = ""
    categories: Mapping[str, Tuple[Cell, Cell]] = field(default_factory=dict)
    record_id: Optional[int] = None

    @property
    def effective_end_date(self) -> Optional[date]:
        return self.end_date or self.start_date

    @property
    def is_completed(self) -> bool:
        return self.status is ExamStatus.COMPLETED

    @property
    def has_specific_dates(self) -> bool:
        return bool(self.specific_dates and self.specific_dates.strip())

    def category_cells(self, key: str) -> Tuple[Cell, Cell]:
        return self.categories.get(key, (EMPTY, EMPTY))


@dataclass(frozen=True)
class ParsedDayEntry:
    """
    One entry of a specific-dates list.

    Explicit entries carry their own counts; legacy entries (a bare MM/DD)
    have morning/afternoon/total set to None.
    """

    date: date
    morning: Optional[int] = None
    afternoon: Optional[int] = None
    total: Optional[int] = None
    explicit: bool = False
    source: str = ""


@dataclass(frozen=True)
class DayAllocation:
    total: int = 0
    morning: int = 0
    afternoon: int = 0


ZERO_ALLOCATION = DayAllocation()


@dataclass(frozen=True)
class BloodDrawSplit:
    external: int = 0
    internal: int = 0


@dataclass
class DailyAggregate:
    """Workload totals for one calendar day across all records."""

    date: date
    people_total: int = 0
    morning_total: int = 0
    afternoon_total: int = 0
    category_totals: Dict[str, int] = field(default_factory=dict)
    category_morning: Dict[str, int] = field(default_factory=dict)
    category_afternoon: Dict[str, int] = field(default_factory=dict)
    group_totals: Dict[str, int] = field(default_factory=dict)
    max_category: int = 0
    blood_draw_external: int = 0
    blood_draw_internal: int = 0
    company_count: int = 0
    rooms: Dict[str, int] = field(default_factory=dict)


def empty_category_totals() -> Dict[str, int]:
    return {cat.key: 0 for cat in EXAM_CATEGORIES}
