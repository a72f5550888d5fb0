"""Engine configuration (YAML or JSON)."""

from __future__ import annotations

import json
import unicodedata
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml


COMPLETED_STATUS_LABELS = ["Completed", "Đã khám xong", "Da kham xong"]
ONGOING_STATUS_LABELS = ["Ongoing", "Chưa khám xong", "Chua kham xong", "Đang khám"]


@dataclass
class EngineConfig:
    """
    Business rules for the allocation engine.

    Attributes:
        rest_weekday: Python weekday index the facility is closed (6 = Sunday)
        room_capacity: Cases one room/staff member handles per day (uncapped categories)
        imaging_room_tiers: Ascending case thresholds for ultrasound rooms; volume above
            the last threshold maps to len(tiers) + 1 rooms
        completed_statuses: Status labels meaning the campaign has finished
        ongoing_statuses: Status labels meaning the campaign is still running
        db_url: SQLAlchemy database URL used by the CLI
    """

    rest_weekday: int = 6
    room_capacity: int = 90
    imaging_room_tiers: List[int] = field(default_factory=lambda: [90, 200])
    completed_statuses: List[str] = field(default_factory=lambda: list(COMPLETED_STATUS_LABELS))
    ongoing_statuses: List[str] = field(default_factory=lambda: list(ONGOING_STATUS_LABELS))
    db_url: str = "sqlite:///exam_schedule.db"

    def __post_init__(self) -> None:
        validate_config(self)

    @property
    def imaging_room_cap(self) -> int:
        return len(self.imaging_room_tiers) + 1


def validate_config(cfg: EngineConfig) -> None:
    """
    Validate configuration values.

    Raises:
        ValueError: If any value is out of range
    """
    if not isinstance(cfg.rest_weekday, int) or not 0 <= cfg.rest_weekday <= 6:
        raise ValueError(f"rest_weekday must be an integer 0-6, got {cfg.rest_weekday!r}")

    if not isinstance(cfg.room_capacity, int) or cfg.room_capacity <= 0:
        raise ValueError(f"room_capacity must be a positive integer, got {cfg.room_capacity!r}")

    tiers = list(cfg.imaging_room_tiers)
    if not tiers:
        raise ValueError("imaging_room_tiers must contain at least one threshold")
    if any(int(t) <= 0 for t in tiers):
        raise ValueError(f"imaging_room_tiers must be positive, got {tiers}")
    if sorted(tiers) != tiers or len(set(tiers)) != len(tiers):
        raise ValueError(f"imaging_room_tiers must be strictly ascending, got {tiers}")

    def folded(labels):
        return {unicodedata.normalize("NFC", s).strip().lower() for s in labels}

    overlap = folded(cfg.completed_statuses) & folded(cfg.ongoing_statuses)
    if overlap:
        raise ValueError(f"Status labels listed as both completed and ongoing: {sorted(overlap)}")


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_config(path: str | Path | None = None) -> EngineConfig:
    """
    Load engine configuration from a YAML or JSON file.

    Unknown keys are ignored with a warning. Missing keys keep their defaults.

    Args:
        path: Path to config file; None returns the defaults

    Returns:
        EngineConfig

    Raises:
        ValueError: If the file content is invalid
    """
    if path is None:
        return EngineConfig()

    path = Path(path)
    raw = _read_raw(path)
    # Allow the settings to live under an "engine" section
    if isinstance(raw.get("engine"), dict):
        raw = {**raw, **raw["engine"]}

    known = {f.name for f in fields(EngineConfig)}
    kwargs: Dict[str, Any] = {}
    for key, value in raw.items():
        if key == "engine":
            continue
        if key not in known:
            print(f"[WARN] Unknown config key '{key}' in {path}, ignoring")
            continue
        kwargs[key] = value

    if "imaging_room_tiers" in kwargs:
        kwargs["imaging_room_tiers"] = [int(t) for t in kwargs["imaging_room_tiers"]]

    return EngineConfig(**kwargs)
