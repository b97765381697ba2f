from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from sleepstats.filters import ChartOptions, filter_records, requirements
from sleepstats.grouping import group_records, order_groups
from sleepstats.schema import QUALITY_ORDER, Dataset
from sleepstats.stats import extent, mean


def compute_quality_vs_total_sleep(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("total_sleep", "rested"))
    payload: Dict[str, Any] = {
        "chart": "quality_vs_total_sleep",
        "options": asdict(options),
        "count": len(rows),
        "categories": [],
        "groups": [],
        "points": [],
        "x_extent": None,
    }
    if not rows:
        return payload

    groups = order_groups(group_records(rows, "rested"), QUALITY_ORDER)
    payload["categories"] = [label for label, _ in groups]
    payload["groups"] = [
        {
            "category": label,
            "count": len(members),
            "mean_total_sleep": mean([r.total_sleep for r in members]),
        }
        for label, members in groups
    ]
    if options.include_points:
        payload["points"] = [{"total_sleep": r.total_sleep, "rested": r.rested} for r in rows]
    payload["x_extent"] = extent([r.total_sleep for r in rows])
    return payload


def compute_sleep_quality_distribution(dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    options = options or ChartOptions()
    rows = filter_records(dataset, requirements("rested"))
    total = len(rows)
    payload: Dict[str, Any] = {
        "chart": "sleep_quality_distribution",
        "options": asdict(options),
        "count": total,
        "groups": [],
    }
    if not rows:
        return payload

    groups = order_groups(group_records(rows, "rested"), QUALITY_ORDER)
    payload["groups"] = [
        {
            "category": label,
            "count": len(members),
            "percentage": len(members) / total * 100,
        }
        for label, members in groups
    ]
    return payload
