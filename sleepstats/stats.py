"""Descriptive statistics shared by the chart recipes.

All functions take plain sequences of floats and never return NaN: empty or
degenerate input maps to a documented value (``None`` or ``0.0``) instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class BoxStats:
    min: float
    q1: float
    median: float
    q3: float
    max: float
    iqr: float
    outliers: List[float]


@dataclass(frozen=True)
class Regression:
    slope: float
    intercept: float
    n: int

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x


def mean(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return float(np.mean(np.asarray(values, dtype=float)))


def extent(values: Sequence[float]) -> Optional[List[float]]:
    if len(values) == 0:
        return None
    return [float(min(values)), float(max(values))]


def std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation (n - 1). A group of fewer than two points has no spread."""
    if len(values) < 2:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=1))


def quantile(sorted_values: Sequence[float], q: float) -> Optional[float]:
    """Linear-interpolation quantile (R-7) of ascending values."""
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"Quantile fraction must be within [0, 1], got {q}")
    n = len(sorted_values)
    if n == 0:
        return None
    pos = q * (n - 1)
    lo = math.floor(pos)
    hi = math.ceil(pos)
    if lo == hi:
        return float(sorted_values[lo])
    a = float(sorted_values[lo])
    b = float(sorted_values[hi])
    return a + (b - a) * (pos - lo)


def box_stats(values: Sequence[float]) -> Optional[BoxStats]:
    """Five-number summary with 1.5 * IQR whiskers clamped to the observed range.

    Values strictly outside the clamped whiskers are outliers.
    """
    if len(values) == 0:
        return None
    ordered = sorted(float(v) for v in values)
    q1 = quantile(ordered, 0.25)
    median = quantile(ordered, 0.5)
    q3 = quantile(ordered, 0.75)
    iqr = q3 - q1
    lower = max(ordered[0], q1 - 1.5 * iqr)
    upper = min(ordered[-1], q3 + 1.5 * iqr)
    return BoxStats(
        min=lower,
        q1=q1,
        median=median,
        q3=q3,
        max=upper,
        iqr=iqr,
        outliers=[v for v in ordered if v < lower or v > upper],
    )


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> Optional[Regression]:
    """Ordinary least squares fit of y on x.

    Returns None when there is nothing to fit or every x is identical.
    """
    if len(xs) != len(ys):
        raise ValueError(f"x and y must be the same length, got {len(xs)} and {len(ys)}")
    if len(xs) == 0:
        return None
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    # Compare the raw spread: x - mean leaves rounding residue when every x is 17.1.
    if x.max() == x.min():
        return None
    dx = x - x.mean()
    ss_xx = float(np.sum(dx * dx))
    ss_xy = float(np.sum(dx * (y - y.mean())))
    slope = ss_xy / ss_xx
    intercept = float(y.mean()) - slope * float(x.mean())
    return Regression(slope=slope, intercept=intercept, n=len(xs))
