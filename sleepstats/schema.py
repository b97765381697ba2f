from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Callable, Dict, List, Optional, Tuple


TOTAL_SLEEP_COL = "Total Sleep"
REM_COL = "Sleep Analysis [REM] (hr)"
DEEP_COL = "Sleep Analysis [Deep] (hr)"
CORE_COL = "Sleep Analysis [Core] (hr)"
AWAKE_COL = "Sleep Analysis [Awake] (hr)"
RESTED_COL = "How well-rested do you feel upon waking up?"
MORNING_ENERGY_COL = "How was your energy level in the Morning?"
AFTERNOON_ENERGY_COL = "How was your energy level in the Afternoon?"
MOOD_COL = "How was your mood after waking up?"
CAFFEINE_COL = "Did you consume caffeine or alcohol before bed?"
ACTIVITY_TIMING_COL = "If you have done any physical activity. What time have you done?"
WORKLOAD_COL = "If Yes, you worked today. How much work you did?"
NAP_COL = "Did you feel the need to take a nap during the day?"
DINNER_COL = "What time you had Dinner?"

NUMERIC_COLUMNS = {
    TOTAL_SLEEP_COL: "total_sleep",
    REM_COL: "rem_hours",
    DEEP_COL: "deep_hours",
    CORE_COL: "core_hours",
    AWAKE_COL: "awake_hours",
}

CATEGORICAL_COLUMNS = {
    RESTED_COL: "rested",
    MORNING_ENERGY_COL: "morning_energy",
    AFTERNOON_ENERGY_COL: "afternoon_energy",
    MOOD_COL: "mood",
    CAFFEINE_COL: "caffeine",
    ACTIVITY_TIMING_COL: "activity_timing",
    WORKLOAD_COL: "workload",
    NAP_COL: "nap_need",
    DINNER_COL: "dinner_time",
}

QUALITY_ORDER: List[str] = ["Tired", "Moderately Rested", "Well Rested"]
ENERGY_ORDER: List[str] = ["Low", "Moderate", "High"]
MOOD_ORDER: List[str] = ["Negative", "Neutral", "Positive"]
WORKLOAD_ORDER: List[str] = ["Low Work", "Medium Work", "High Work"]
ACTIVITY_TIMING_ORDER: List[str] = ["Morning", "Afternoon", "Evening"]
YES_NO_ORDER: List[str] = ["Yes", "No"]
SLEEP_STAGES: List[str] = ["REM", "Deep", "Core"]


@dataclass(frozen=True)
class SleepRecord:
    """One survey day. Numeric fields are hours; categorical fields are the raw answers."""

    total_sleep: Optional[float] = None
    rem_hours: Optional[float] = None
    deep_hours: Optional[float] = None
    core_hours: Optional[float] = None
    awake_hours: Optional[float] = None
    rested: Optional[str] = None
    morning_energy: Optional[str] = None
    afternoon_energy: Optional[str] = None
    mood: Optional[str] = None
    caffeine: Optional[str] = None
    activity_timing: Optional[str] = None
    workload: Optional[str] = None
    nap_need: Optional[str] = None
    dinner_time: Optional[str] = None


Dataset = Tuple[SleepRecord, ...]

RECORD_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(SleepRecord))
NUMERIC_FIELDS = frozenset(NUMERIC_COLUMNS.values())
CATEGORICAL_FIELDS = frozenset(CATEGORICAL_COLUMNS.values())

# Sleep stage label -> record field, in stacking order.
STAGE_FIELDS: Dict[str, str] = {
    "REM": "rem_hours",
    "Deep": "deep_hours",
    "Core": "core_hours",
}


def field_getter(name: str) -> Callable[[SleepRecord], object]:
    if name not in RECORD_FIELDS:
        raise KeyError(f"Unknown record field: {name}")
    return lambda record: getattr(record, name)
