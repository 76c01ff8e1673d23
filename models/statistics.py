# models/statistics.py
"""Pearson correlation and ordinary least squares over a bivariate sample.

Degenerate inputs (too few points, a constant dimension) return defined
values instead of NaN so the view always has something plottable.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .sampling import Sample


@dataclass(frozen=True)
class RegressionResult:
    slope: float = 0.0
    intercept: float = 0.0
    mean_y: float = 0.0

    def predict(self, x):
        """Evaluate ``slope * x + intercept`` for a scalar or an array."""
        if np.isscalar(x):
            return self.slope * float(x) + self.intercept
        return self.slope * np.asarray(x, dtype=float) + self.intercept


@dataclass(frozen=True)
class ResidualSegment:
    """Vertical segment from an observed point to the fitted line."""

    x: float
    y_actual: float
    y_predicted: float

    @property
    def start(self) -> Tuple[float, float]:
        return self.x, self.y_actual

    @property
    def end(self) -> Tuple[float, float]:
        return self.x, self.y_predicted


def _paired_arrays(xs, ys) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(xs, dtype=float).ravel()
    y = np.asarray(ys, dtype=float).ravel()
    if x.size != y.size:
        raise ValueError(f"x and y must have the same length (got {x.size} and {y.size})")
    return x, y


def correlation(xs, ys) -> float:
    """Pearson correlation of two equal-length sequences.

    Uses the two-pass definition (means first, then centred sums). Returns 0.0
    for fewer than two points or when either dimension has zero spread.
    """
    x, y = _paired_arrays(xs, ys)
    n = x.size
    if n <= 1:
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    sxy = float(np.sum(dx * dy))
    sxx = float(np.sum(dx * dx))
    syy = float(np.sum(dy * dy))
    if sxx == 0 or syy == 0:
        return 0.0
    return sxy / float(np.sqrt(sxx * syy))


def regress(sample, ys: Optional[object] = None) -> RegressionResult:
    """Least-squares line ``y = slope * x + intercept``.

    Accepts either a :class:`Sample` or parallel ``(xs, ys)`` sequences.
    An empty sample gives all zeros; a sample whose x values are all equal
    gives a horizontal line through the mean of y.
    """
    if ys is None:
        if isinstance(sample, Sample):
            x, y = _paired_arrays(sample.x, sample.y)
        else:
            pts = np.asarray(list(sample), dtype=float).reshape(-1, 2)
            x, y = pts[:, 0], pts[:, 1]
    else:
        x, y = _paired_arrays(sample, ys)

    n = x.size
    if n == 0:
        return RegressionResult(0.0, 0.0, 0.0)

    mean_x = float(x.mean())
    mean_y = float(y.mean())
    dx = x - mean_x
    numerator = float(np.sum(dx * (y - mean_y)))
    denominator = float(np.sum(dx * dx))
    if denominator == 0:
        return RegressionResult(0.0, mean_y, mean_y)

    slope = numerator / denominator
    return RegressionResult(slope, mean_y - slope * mean_x, mean_y)


def residual_segments(sample: Sample, regression: RegressionResult) -> List[ResidualSegment]:
    """One segment per point, in sample order, against ``regression``."""
    predicted = regression.predict(sample.x)
    return [
        ResidualSegment(float(xv), float(yv), float(pv))
        for xv, yv, pv in zip(sample.x, sample.y, predicted)
    ]
