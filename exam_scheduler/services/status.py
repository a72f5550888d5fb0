"""Campaign status parsing."""

from __future__ import annotations

import unicodedata
from typing import Any, Iterable, Set

from exam_scheduler.config import EngineConfig
from exam_scheduler.domain.records import ExamStatus


def _fold(label: Any) -> str:
    # Spreadsheets may store decomposed (NFD) accents
    return unicodedata.normalize("NFC", str(label or "")).strip().lower()


def _folded(labels: Iterable[str]) -> Set[str]:
    return {_fold(label) for label in labels}


def parse_status(raw: Any, cfg: EngineConfig | None = None) -> ExamStatus:
    """
    Map a stored status label to ExamStatus.

    Completed labels give COMPLETED, ongoing labels give ONGOING. An empty
    status is ongoing; any other label is ongoing too, with a warning, so
    the record falls back to its stored daily averages.
    """
    if isinstance(raw, ExamStatus):
        return raw
    cfg = cfg or EngineConfig()
    label = _fold(raw)
    if label in _folded(cfg.completed_statuses):
        return ExamStatus.COMPLETED
    if label and label not in _folded(cfg.ongoing_statuses):
        print(f"[WARN] Unknown status '{raw}', treating as ongoing")
    return ExamStatus.ONGOING
