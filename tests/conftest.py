"""Pytest fixtures shared across the sleep dashboard tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from sleepstats.schema import SleepRecord


@pytest.fixture
def records() -> tuple[SleepRecord, ...]:
    """Return a small survey covering every chart's fields, with gaps."""

    return (
        SleepRecord(
            total_sleep=7.0, rem_hours=1.5, deep_hours=0.8, core_hours=4.2, awake_hours=0.2,
            rested="Well Rested", morning_energy="High", afternoon_energy="High", mood="Positive",
            caffeine="No", activity_timing="Morning", workload="Low Work", nap_need="No",
            dinner_time="7:00 PM",
        ),
        SleepRecord(
            total_sleep=5.5, rem_hours=1.0, deep_hours=0.5, core_hours=3.5, awake_hours=0.4,
            rested="Tired", morning_energy="Low", afternoon_energy="Low", mood="Negative",
            caffeine="Yes", activity_timing="Evening", workload="High Work", nap_need="Yes",
            dinner_time="9:30 PM",
        ),
        SleepRecord(
            total_sleep=None, rem_hours=1.2, deep_hours=0.6, core_hours=None,
            rested="Moderately Rested", morning_energy="Moderate", mood="Neutral",
            caffeine="Yes", workload="Medium Work", nap_need="Yes", dinner_time="8:00 PM",
        ),
        SleepRecord(
            total_sleep=6.5, rem_hours=1.4, deep_hours=0.7, core_hours=3.9, awake_hours=0.3,
            rested="Moderately Rested", morning_energy="Moderate", afternoon_energy="Low", mood="Neutral",
            caffeine="No", activity_timing="Morning", workload="Low Work", nap_need="No",
            dinner_time="8:00 PM",
        ),
        SleepRecord(
            total_sleep=None, rested="Tired", mood="Negative", dinner_time="sometime",
        ),
    )


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    """Write a survey CSV using the exported column headers."""

    path = tmp_path / "sleep.csv"
    path.write_text(
        "Total Sleep,Sleep Analysis [REM] (hr),Sleep Analysis [Deep] (hr),Sleep Analysis [Core] (hr),"
        "Sleep Analysis [Awake] (hr),How well-rested do you feel upon waking up?,"
        "How was your energy level in the Morning?,What time you had Dinner?\n"
        "7.25,1.5,0.9,4.1,0.2, Well Rested ,High,7:30 PM\n"
        ",1.1,,3.0,,Tired,Low,\n"
        "abc,1.3,0.7,3.8,0.1,Moderately Rested,,8:00:00 PM\n",
        encoding="utf-8",
    )
    return path
