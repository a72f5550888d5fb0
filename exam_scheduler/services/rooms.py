"""Room/staff requirements from daily case volume."""

from __future__ import annotations

import math
from typing import Dict

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.categories import ULTRASOUND, normalize_group


def estimate_rooms(category_total: int, category: str, cfg: EngineConfig | None = None) -> int:
    """
    Convert a day's case volume into a number of rooms or staff.

    Ultrasound uses stepped tiers with a hard cap (default: <=90 -> 1,
    <=200 -> 2, above -> 3). Every other category needs one room per
    room_capacity cases, uncapped.

    Args:
        category_total: Cases for the day
        category: Reporting group or category key ("ultrasound", "ecg", ...)
        cfg: EngineConfig

    Returns:
        Number of rooms, 0 when there are no cases
    """
    cfg = cfg or EngineConfig()
    total = max(0, int(category_total or 0))
    if total == 0:
        return 0

    if normalize_group(category) == ULTRASOUND:
        for rooms, threshold in enumerate(cfg.imaging_room_tiers, start=1):
            if total <= threshold:
                return rooms
        return cfg.imaging_room_cap

    return math.ceil(total / cfg.room_capacity)


def estimate_rooms_by_group(group_totals: Dict[str, int], cfg: EngineConfig | None = None) -> Dict[str, int]:
    """Estimate rooms for every reporting group of a day."""
    return {group: estimate_rooms(total, group, cfg) for group, total in group_totals.items()}
