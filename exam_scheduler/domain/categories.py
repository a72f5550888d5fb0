"""Clinical test categories tracked per examination session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


ULTRASOUND = "ultrasound"
XRAY = "xray"
ECG = "ecg"
GYNECOLOGY = "gynecology"
BONE_DENSITY = "bone_density"
GENERAL_MEDICINE = "general_medicine"

# Groups reported as daily totals; general medicine is derived from the people total
REPORT_GROUPS = [ULTRASOUND, XRAY, ECG, GYNECOLOGY, BONE_DENSITY, GENERAL_MEDICINE]


@dataclass(frozen=True)
class ExamCategory:
    """A clinical test with one counter per session (morning/afternoon)."""

    key: str
    label: str
    group: str

    @property
    def morning_field(self) -> str:
        return f"{self.key}_morning"

    @property
    def afternoon_field(self) -> str:
        return f"{self.key}_afternoon"


EXAM_CATEGORIES: List[ExamCategory] = [
    ExamCategory("us_abdomen", "Siêu âm bụng", ULTRASOUND),
    ExamCategory("us_breast", "Siêu âm vú", ULTRASOUND),
    ExamCategory("us_thyroid", "Siêu âm giáp", ULTRASOUND),
    ExamCategory("us_heart", "Siêu âm tim", ULTRASOUND),
    ExamCategory("us_carotid", "SA động mạch cảnh", ULTRASOUND),
    ExamCategory("us_liver_elastography", "SA đàn hồi mô gan", ULTRASOUND),
    ExamCategory("us_transvaginal", "SA đầu dò âm đạo", ULTRASOUND),
    ExamCategory("xray", "X-quang", XRAY),
    ExamCategory("ecg", "Điện tâm đồ", ECG),
    ExamCategory("gynecology", "Khám phụ khoa", GYNECOLOGY),
    ExamCategory("bone_density", "Đo loãng xương", BONE_DENSITY),
]

CATEGORY_BY_KEY: Dict[str, ExamCategory] = {cat.key: cat for cat in EXAM_CATEGORIES}

# Source spreadsheet headers (unaccented) -> category counter attribute
SOURCE_CATEGORY_COLUMNS: Dict[str, str] = {
    "sieu am bung sang": "us_abdomen_morning",
    "sieu am bung chieu": "us_abdomen_afternoon",
    "sieu am vu sang": "us_breast_morning",
    "sieu am vu chieu": "us_breast_afternoon",
    "sieu am giap sang": "us_thyroid_morning",
    "sieu am giap chieu": "us_thyroid_afternoon",
    "sieu am tim sang": "us_heart_morning",
    "sieu am tim chieu": "us_heart_afternoon",
    "sieu am dong mach canh sang": "us_carotid_morning",
    "sieu am dong mach canh chieu": "us_carotid_afternoon",
    "sieu am dan hoi mo gan sang": "us_liver_elastography_morning",
    "sieu am dan hoi mo gan chieu": "us_liver_elastography_afternoon",
    "sieu am dau do am dao sang": "us_transvaginal_morning",
    "sieu am dau do am dao chieu": "us_transvaginal_afternoon",
    "x quang sang": "xray_morning",
    "x quang chieu": "xray_afternoon",
    "dien tam do sang": "ecg_morning",
    "dien tam do chieu": "ecg_afternoon",
    "kham phu khoa sang": "gynecology_morning",
    "kham phu khoa chieu": "gynecology_afternoon",
    "do loang xuong sang": "bone_density_morning",
    "do loang xuong chieu": "bone_density_afternoon",
}


def normalize_group(name: str) -> str:
    """
    Map a category or group name to its reporting group.

    Accepts group names ("ultrasound", "imaging", "ecg"...), category keys
    ("us_heart") and a few common spellings. Unknown names are returned
    lower-cased so callers can still apply the default rule.
    """
    key = (name or "").strip().lower().replace("-", "_").replace(" ", "_")
    aliases = {
        "imaging": ULTRASOUND,
        "sieu_am": ULTRASOUND,
        "x_ray": XRAY,
        "x_quang": XRAY,
        "ekg": ECG,
        "gynecology_exam": GYNECOLOGY,
        "internal_medicine": GENERAL_MEDICINE,
        "general": GENERAL_MEDICINE,
    }
    if key in aliases:
        return aliases[key]
    if key in CATEGORY_BY_KEY:
        return CATEGORY_BY_KEY[key].group
    return key
