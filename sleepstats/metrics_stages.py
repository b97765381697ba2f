from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from sleepstats.filters import ChartOptions, filter_records, requirements
from sleepstats.grouping import group_records, order_groups
from sleepstats.schema import MOOD_ORDER, SLEEP_STAGES, STAGE_FIELDS, YES_NO_ORDER, Dataset
from sleepstats.stats import box_stats, mean


def compute_caffeine_vs_rem_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("rem_hours", "caffeine"))
    payload: Dict[str, Any] = {
        "chart": "caffeine_vs_rem_sleep",
        "options": asdict(options),
        "count": len(rows),
        "groups": [],
        "y_max": None,
    }
    if not rows:
        return payload

    groups = order_groups(group_records(rows, "caffeine"), YES_NO_ORDER)
    out = []
    for label, members in groups:
        stats = box_stats([r.rem_hours for r in members])
        out.append({"category": label, "count": len(members), **asdict(stats)})
    payload["groups"] = out
    payload["y_max"] = max(max([g["max"]] + g["outliers"]) for g in out)
    return payload


def compute_mood_vs_sleep_stages(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    """Mean REM, Deep and Core hours per mood.

    All three means come from the same member set, so stacked totals are consistent.
    """
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements(*STAGE_FIELDS.values(), "mood"))
    payload: Dict[str, Any] = {
        "chart": "mood_vs_sleep_stages",
        "options": asdict(options),
        "count": len(rows),
        "stages": list(SLEEP_STAGES),
        "groups": [],
    }
    if not rows:
        return payload

    groups = order_groups(group_records(rows, "mood"), MOOD_ORDER)
    out = []
    for label, members in groups:
        entry: Dict[str, Any] = {"category": label, "count": len(members)}
        for stage in SLEEP_STAGES:
            field = STAGE_FIELDS[stage]
            entry[stage] = mean([getattr(r, field) for r in members])
        out.append(entry)
    payload["groups"] = out
    return payload
