from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from sleepstats.schema import CATEGORICAL_FIELDS, NUMERIC_FIELDS, RECORD_FIELDS, SleepRecord


@dataclass(frozen=True)
class FieldRequirement:
    """A record field that must be present for a record to take part in an aggregation.

    Numeric fields must be non-null; categorical fields must be a non-empty string.
    """

    field: str

    def __post_init__(self) -> None:
        if self.field not in RECORD_FIELDS:
            raise KeyError(f"Unknown record field: {self.field}")

    @property
    def numeric(self) -> bool:
        return self.field in NUMERIC_FIELDS

    def is_met(self, record: SleepRecord) -> bool:
        value = getattr(record, self.field)
        if value is None:
            return False
        if self.field in CATEGORICAL_FIELDS:
            return isinstance(value, str) and bool(value.strip())
        return True


def requirements(*names: str) -> Tuple[FieldRequirement, ...]:
    return tuple(FieldRequirement(name) for name in names)


def filter_records(
    records: Sequence[SleepRecord],
    required: Iterable[FieldRequirement | str] = (),
) -> List[SleepRecord]:
    """Keep records meeting every requirement, in their original order."""
    reqs = [r if isinstance(r, FieldRequirement) else FieldRequirement(r) for r in required]
    if not reqs:
        return list(records)
    return [record for record in records if all(req.is_met(record) for req in reqs)]


@dataclass(frozen=True)
class ChartOptions:
    bucket_step: float = 0.5
    include_points: bool = True


def _as_float(value: object, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except Exception:
        return default


def normalize_options(raw: Optional[dict]) -> ChartOptions:
    raw = raw or {}

    bucket_step = _as_float(raw.get("bucket_step"), 0.5)
    if bucket_step != bucket_step:  # NaN
        bucket_step = 0.5
    bucket_step = max(0.1, min(2.0, bucket_step))

    include_points = bool(raw.get("include_points", True))
    return ChartOptions(bucket_step=bucket_step, include_points=include_points)
