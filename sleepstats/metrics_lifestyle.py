from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from sleepstats.data import parse_clock_time
from sleepstats.filters import ChartOptions, filter_records, requirements
from sleepstats.grouping import category_counts, group_records, order_groups
from sleepstats.schema import ACTIVITY_TIMING_ORDER, QUALITY_ORDER, WORKLOAD_ORDER, YES_NO_ORDER, Dataset, SleepRecord
from sleepstats.stats import extent, linear_regression, mean, std_dev


def _sleep_spread(label: str, members: List[SleepRecord]) -> Dict[str, Any]:
    hours = [r.total_sleep for r in members]
    return {
        "category": label,
        "count": len(members),
        "mean_total_sleep": mean(hours),
        "std_total_sleep": std_dev(hours),
    }


def compute_activity_timing_vs_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("activity_timing", "total_sleep", "rested"))
    payload: Dict[str, Any] = {
        "chart": "activity_timing_vs_sleep",
        "options": asdict(options),
        "count": len(rows),
        "groups": [],
    }
    if not rows:
        return payload

    out = []
    for label, members in order_groups(group_records(rows, "activity_timing"), ACTIVITY_TIMING_ORDER):
        entry: Dict[str, Any] = {
            "category": label,
            "count": len(members),
            "mean_total_sleep": mean([r.total_sleep for r in members]),
            "quality_counts": category_counts(members, "rested", QUALITY_ORDER, fill_order=True),
        }
        if options.include_points:
            entry["points"] = [{"total_sleep": r.total_sleep, "rested": r.rested} for r in members]
        out.append(entry)
    payload["groups"] = out
    return payload


def compute_workload_vs_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("total_sleep", "workload"))
    payload: Dict[str, Any] = {
        "chart": "workload_vs_sleep",
        "options": asdict(options),
        "count": len(rows),
        "groups": [],
        "y_max": None,
    }
    if not rows:
        return payload

    out = []
    for label, members in order_groups(group_records(rows, "workload"), WORKLOAD_ORDER):
        entry = _sleep_spread(label, members)
        if options.include_points:
            entry["points"] = [{"total_sleep": r.total_sleep, "rested": r.rested} for r in members]
        out.append(entry)
    payload["groups"] = out
    payload["y_max"] = max(r.total_sleep for r in rows)
    return payload


def compute_nap_vs_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("total_sleep", "nap_need"))
    payload: Dict[str, Any] = {
        "chart": "nap_vs_sleep",
        "options": asdict(options),
        "count": len(rows),
        "groups": [],
        "y_max": None,
    }
    if not rows:
        return payload

    out = []
    for label, members in order_groups(group_records(rows, "nap_need"), YES_NO_ORDER):
        entry = _sleep_spread(label, members)
        # Only answered quality labels are counted here.
        entry["quality_counts"] = category_counts(filter_records(members, ["rested"]), "rested", QUALITY_ORDER)
        out.append(entry)
    payload["groups"] = out
    payload["y_max"] = max(g["mean_total_sleep"] + g["std_total_sleep"] for g in out)
    return payload


def compute_dinner_time_vs_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("total_sleep", "dinner_time"))
    parsed = [(parse_clock_time(r.dinner_time), r) for r in rows]
    valid = [(hour, r) for hour, r in parsed if hour is not None]
    payload: Dict[str, Any] = {
        "chart": "dinner_time_vs_sleep",
        "options": asdict(options),
        "count": len(valid),
        "unparsed": len(rows) - len(valid),
        "points": [],
        "x_extent": None,
        "regression": None,
    }
    if not valid:
        return payload

    xs = [hour for hour, _ in valid]
    ys = [r.total_sleep for _, r in valid]
    if options.include_points:
        payload["points"] = [
            {"dinner_hour": hour, "total_sleep": r.total_sleep, "rested": r.rested}
            for hour, r in valid
        ]
    payload["x_extent"] = extent(xs)

    fit = linear_regression(xs, ys)
    if fit is not None:
        x1, x2 = min(xs), max(xs)
        payload["regression"] = {
            "slope": fit.slope,
            "intercept": fit.intercept,
            "n": fit.n,
            "x1": x1,
            "y1": fit.predict(x1),
            "x2": x2,
            "y2": fit.predict(x2),
        }
    return payload
