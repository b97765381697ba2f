from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional, Tuple

from sleepstats.data import bucket_value, round_half_up
from sleepstats.filters import ChartOptions, filter_records, requirements
from sleepstats.grouping import group_records, order_groups
from sleepstats.schema import ENERGY_ORDER, Dataset, SleepRecord
from sleepstats.stats import extent, mean


def compute_morning_energy_vs_deep_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("deep_hours", "morning_energy", "total_sleep"))
    payload: Dict[str, Any] = {
        "chart": "morning_energy_vs_deep_sleep",
        "options": asdict(options),
        "count": len(rows),
        "groups": [],
        "points": [],
        "x_extent": None,
        "y_max": None,
        "size_legend": [],
    }
    if not rows:
        return payload

    groups = order_groups(group_records(rows, "morning_energy"), ENERGY_ORDER)
    payload["groups"] = [
        {
            "category": label,
            "count": len(members),
            "mean_deep_hours": mean([r.deep_hours for r in members]),
            "mean_total_sleep": mean([r.total_sleep for r in members]),
        }
        for label, members in groups
    ]
    if options.include_points:
        payload["points"] = [
            {"total_sleep": r.total_sleep, "deep_hours": r.deep_hours, "energy": r.morning_energy}
            for r in rows
        ]
    total_sleep = [r.total_sleep for r in rows]
    payload["x_extent"] = extent(total_sleep)
    payload["y_max"] = max(r.deep_hours for r in rows)
    # Bubble size legend: shortest and longest night, to the whole hour.
    payload["size_legend"] = [round_half_up(min(total_sleep)), round_half_up(max(total_sleep))]
    return payload


def count_buckets(rows: Iterable[SleepRecord], category_field: str, value_field: str, step: float = 0.5) -> Dict[Tuple[str, float], int]:
    """Count records per (category, bucketed value), in first-occurrence order."""
    counts: Dict[Tuple[str, float], int] = {}
    for r in rows:
        key = (getattr(r, category_field), bucket_value(getattr(r, value_field), step))
        counts[key] = counts.get(key, 0) + 1
    return counts


def compute_afternoon_energy_vs_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("total_sleep", "afternoon_energy"))
    payload: Dict[str, Any] = {
        "chart": "afternoon_energy_vs_sleep",
        "options": asdict(options),
        "count": len(rows),
        "buckets": [],
        "groups": [],
        "x_extent": None,
        "max_bucket_count": 0,
    }
    if not rows:
        return payload

    counts = count_buckets(rows, "afternoon_energy", "total_sleep", options.bucket_step)
    payload["buckets"] = [
        {"energy": energy, "sleep_hour": sleep_hour, "count": n}
        for (energy, sleep_hour), n in counts.items()
    ]
    payload["max_bucket_count"] = max(counts.values())
    payload["x_extent"] = extent([b["sleep_hour"] for b in payload["buckets"]])

    groups = order_groups(group_records(rows, "afternoon_energy"), ENERGY_ORDER)
    payload["groups"] = [
        {
            "category": label,
            "count": len(members),
            "mean_total_sleep": mean([r.total_sleep for r in members]),
        }
        for label, members in groups
    ]
    return payload
