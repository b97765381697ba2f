"""Tests for the per-chart compute functions."""

from __future__ import annotations

import pytest

from sleepstats.filters import ChartOptions
from sleepstats.metrics_energy import compute_afternoon_energy_vs_sleep, compute_morning_energy_vs_deep_sleep
from sleepstats.metrics_lifestyle import (
    compute_activity_timing_vs_sleep,
    compute_dinner_time_vs_sleep,
    compute_nap_vs_sleep,
    compute_workload_vs_sleep,
)
from sleepstats.metrics_quality import compute_quality_vs_total_sleep, compute_sleep_quality_distribution
from sleepstats.metrics_stages import compute_caffeine_vs_rem_sleep, compute_mood_vs_sleep_stages
from sleepstats.schema import SleepRecord


def test_quality_vs_total_sleep_skips_missing_sleep(records) -> None:
    """Two of five records lack total sleep, so three take part."""

    payload = compute_quality_vs_total_sleep(records)
    assert payload["count"] == 3
    assert len(payload["points"]) == 3
    assert payload["categories"] == ["Tired", "Moderately Rested", "Well Rested"]
    assert [g["mean_total_sleep"] for g in payload["groups"]] == [5.5, 6.5, 7.0]
    assert payload["x_extent"] == [5.5, 7.0]


def test_quality_vs_total_sleep_without_points(records) -> None:
    """Points can be left out of the payload."""

    payload = compute_quality_vs_total_sleep(records, ChartOptions(include_points=False))
    assert payload["points"] == []
    assert payload["options"] == {"bucket_step": 0.5, "include_points": False}


def test_morning_energy_vs_deep_sleep(records) -> None:
    """Energy levels follow Low, Moderate, High with a whole-hour size legend."""

    payload = compute_morning_energy_vs_deep_sleep(records)
    assert payload["count"] == 3
    assert [g["category"] for g in payload["groups"]] == ["Low", "Moderate", "High"]
    assert payload["size_legend"] == [6.0, 7.0]
    assert payload["y_max"] == 0.8


def test_caffeine_vs_rem_sleep_box_summary(records) -> None:
    """One box per answer, Yes first."""

    payload = compute_caffeine_vs_rem_sleep(records)
    assert payload["count"] == 4
    yes, no = payload["groups"]
    assert yes["category"] == "Yes"
    assert yes["count"] == 2
    assert yes["median"] == pytest.approx(1.1)
    assert yes["q1"] == pytest.approx(1.05)
    assert (yes["min"], yes["max"]) == (1.0, 1.2)
    assert yes["outliers"] == []
    assert no["category"] == "No"
    assert payload["y_max"] == 1.5


def test_caffeine_outliers_raise_y_max() -> None:
    """Outliers above the whisker set the axis ceiling."""

    rows = [SleepRecord(rem_hours=v, caffeine="No") for v in (1.0, 1.1, 1.2, 1.3, 1.4, 4.0)]
    payload = compute_caffeine_vs_rem_sleep(rows)
    (group,) = payload["groups"]
    assert group["outliers"] == [4.0]
    assert payload["y_max"] == 4.0


def test_activity_timing_counts_every_quality_level(records) -> None:
    """Quality counts keep zero entries; absent timings are skipped."""

    payload = compute_activity_timing_vs_sleep(records)
    assert [g["category"] for g in payload["groups"]] == ["Morning", "Evening"]
    morning = payload["groups"][0]
    assert morning["count"] == 2
    assert morning["mean_total_sleep"] == pytest.approx(6.75)
    assert morning["quality_counts"] == {"Tired": 0, "Moderately Rested": 1, "Well Rested": 1}
    assert len(morning["points"]) == 2


def test_mood_stage_means_share_member_set(records) -> None:
    """A record missing one stage contributes to none of them."""

    payload = compute_mood_vs_sleep_stages(records)
    assert payload["stages"] == ["REM", "Deep", "Core"]
    assert [g["category"] for g in payload["groups"]] == ["Negative", "Neutral", "Positive"]
    neutral = payload["groups"][1]
    assert neutral["count"] == 1
    assert neutral["REM"] == pytest.approx(1.4)
    assert neutral["Deep"] == pytest.approx(0.7)
    assert neutral["Core"] == pytest.approx(3.9)


def test_workload_spread(records) -> None:
    """Sample standard deviation per workload, zero for singletons."""

    payload = compute_workload_vs_sleep(records)
    assert [g["category"] for g in payload["groups"]] == ["Low Work", "High Work"]
    low, high = payload["groups"]
    assert low["mean_total_sleep"] == pytest.approx(6.75)
    assert low["std_total_sleep"] == pytest.approx(0.3535533906)
    assert high["std_total_sleep"] == 0.0
    assert payload["y_max"] == 7.0


def test_afternoon_energy_buckets_merge_nearby_nights() -> None:
    """Nights rounding to the same half hour share one bucket."""

    rows = [
        SleepRecord(total_sleep=6.9, afternoon_energy="Low"),
        SleepRecord(total_sleep=7.1, afternoon_energy="Low"),
        SleepRecord(total_sleep=7.25, afternoon_energy="High"),
        SleepRecord(total_sleep=None, afternoon_energy="High"),
    ]
    payload = compute_afternoon_energy_vs_sleep(rows)
    assert payload["count"] == 3
    assert payload["buckets"] == [
        {"energy": "Low", "sleep_hour": 7.0, "count": 2},
        {"energy": "High", "sleep_hour": 7.5, "count": 1},
    ]
    assert payload["max_bucket_count"] == 2
    assert [g["category"] for g in payload["groups"]] == ["Low", "High"]


def test_nap_vs_sleep_puts_yes_first(records) -> None:
    """Yes before No, with quality counts of answered labels only."""

    payload = compute_nap_vs_sleep(records)
    yes, no = payload["groups"]
    assert yes["category"] == "Yes"
    assert yes["quality_counts"] == {"Tired": 1}
    assert no["quality_counts"] == {"Moderately Rested": 1, "Well Rested": 1}
    assert payload["y_max"] == pytest.approx(6.75 + 0.3535533906)


def test_dinner_time_regression(records) -> None:
    """Later dinners in the fixture go with shorter nights."""

    payload = compute_dinner_time_vs_sleep(records)
    assert payload["count"] == 3
    assert payload["unparsed"] == 0
    reg = payload["regression"]
    assert reg["slope"] == pytest.approx(-1.916666667 / 3.166666667)
    assert (reg["x1"], reg["x2"]) == (19.0, 21.5)
    assert reg["y1"] == pytest.approx(reg["intercept"] + reg["slope"] * 19.0)


def test_dinner_time_excludes_unparsed_and_flat_predictor() -> None:
    """Bad clock strings are dropped; one distinct dinner time means no trend line."""

    rows = [
        SleepRecord(total_sleep=7.0, dinner_time="7:00 PM"),
        SleepRecord(total_sleep=6.0, dinner_time="19:00"),
        SleepRecord(total_sleep=6.5, dinner_time="around seven"),
    ]
    payload = compute_dinner_time_vs_sleep(rows)
    assert payload["count"] == 2
    assert payload["unparsed"] == 1
    assert payload["regression"] is None
    assert payload["x_extent"] == [19.0, 19.0]


def test_dinner_time_single_minute_has_no_trend() -> None:
    """5:06 PM repeated is 17.1 every time, so there is no slope to fit."""

    rows = [SleepRecord(total_sleep=t, dinner_time="5:06 PM") for t in (5.0, 6.0, 7.0, 8.0, 6.5, 7.5, 9.0)]
    payload = compute_dinner_time_vs_sleep(rows)
    assert payload["count"] == 7
    assert payload["regression"] is None


def test_sleep_quality_distribution(records) -> None:
    """Percentages are shares of all answered records."""

    payload = compute_sleep_quality_distribution(records)
    assert payload["count"] == 5
    assert [(g["category"], g["count"]) for g in payload["groups"]] == [
        ("Tired", 2),
        ("Moderately Rested", 2),
        ("Well Rested", 1),
    ]
    assert sum(g["percentage"] for g in payload["groups"]) == pytest.approx(100.0)
