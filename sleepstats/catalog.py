from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

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
from sleepstats.schema import Dataset


ComputeFn = Callable[[Dataset, Optional[ChartOptions]], Dict[str, Any]]


@dataclass(frozen=True)
class ChartSpec:
    id: int
    slug: str
    title: str
    description: str
    compute: ComputeFn

    def meta(self) -> Dict[str, Any]:
        return {"id": self.id, "slug": self.slug, "title": self.title, "description": self.description}


CHARTS: Tuple[ChartSpec, ...] = (
    ChartSpec(
        1,
        "quality_vs_total_sleep",
        "Sleep Quality vs Total Sleep",
        "This chart explores the relationship between how well-rested people feel and their actual total sleep "
        "duration. It helps identify whether more sleep consistently leads to feeling more rested.",
        compute_quality_vs_total_sleep,
    ),
    ChartSpec(
        2,
        "morning_energy_vs_deep_sleep",
        "Morning Energy vs Deep Sleep",
        "Examining how deep sleep hours affect morning energy levels. The bubble size represents total sleep "
        "duration, showing whether deep sleep or overall sleep duration has a stronger impact on morning energy.",
        compute_morning_energy_vs_deep_sleep,
    ),
    ChartSpec(
        3,
        "caffeine_vs_rem_sleep",
        "Caffeine Intake vs REM Sleep",
        "This analysis shows how caffeine consumption before bed affects REM sleep duration. The boxplot displays "
        "the distribution, median, and outliers for both groups.",
        compute_caffeine_vs_rem_sleep,
    ),
    ChartSpec(
        4,
        "activity_timing_vs_sleep",
        "Activity Timing vs Sleep Duration",
        "Comparing average sleep duration based on when physical activity was performed (morning, afternoon, or "
        "evening). This helps determine the optimal time for exercise to improve sleep quality.",
        compute_activity_timing_vs_sleep,
    ),
    ChartSpec(
        5,
        "mood_vs_sleep_stages",
        "Mood vs Sleep Stages",
        "Analyzing how different sleep stages (REM, Deep, Core) contribute to mood after waking up. The stacked "
        "bars show the composition of sleep for different mood outcomes.",
        compute_mood_vs_sleep_stages,
    ),
    ChartSpec(
        6,
        "workload_vs_sleep",
        "Workload vs Sleep Duration",
        "Exploring how work intensity affects sleep duration and quality. The visualization includes error bars "
        "to show the variability within each workload group.",
        compute_workload_vs_sleep,
    ),
    ChartSpec(
        7,
        "afternoon_energy_vs_sleep",
        "Afternoon Energy vs Sleep",
        "Investigating the relationship between total sleep duration and afternoon energy levels. Larger circles "
        "indicate more data points with that specific combination.",
        compute_afternoon_energy_vs_sleep,
    ),
    ChartSpec(
        8,
        "nap_vs_sleep",
        "Nap Need vs Sleep Duration",
        "Comparing sleep duration between people who feel the need to nap during the day and those who don't. "
        "This helps identify whether shorter night sleep leads to daytime nap needs.",
        compute_nap_vs_sleep,
    ),
    ChartSpec(
        9,
        "dinner_time_vs_sleep",
        "Dinner Time vs Sleep Quality",
        "Analyzing how the timing of dinner affects sleep duration and quality. This chart helps identify whether "
        "late dinners are associated with poorer sleep outcomes.",
        compute_dinner_time_vs_sleep,
    ),
    ChartSpec(
        10,
        "sleep_quality_distribution",
        "Sleep Quality Distribution",
        "An overview of how sleep quality is distributed across the dataset. This donut chart shows the "
        "proportion of participants reporting different levels of feeling rested.",
        compute_sleep_quality_distribution,
    ),
)

_BY_ID = {spec.id: spec for spec in CHARTS}
_BY_SLUG = {spec.slug: spec for spec in CHARTS}


def get_chart(chart: int | str) -> ChartSpec:
    """Look a chart up by numeric id (or its string form) or slug."""
    if isinstance(chart, int):
        spec = _BY_ID.get(chart)
    else:
        key = str(chart).strip()
        spec = _BY_ID.get(int(key)) if key.isdecimal() else _BY_SLUG.get(key)
    if spec is None:
        raise KeyError(f"Unknown chart: {chart}")
    return spec


def compute_chart(chart: int | str, dataset: Dataset, options: Optional[ChartOptions] = None) -> Dict[str, Any]:
    spec = get_chart(chart)
    payload = spec.compute(dataset, options)
    payload["id"] = spec.id
    payload["title"] = spec.title
    return payload
