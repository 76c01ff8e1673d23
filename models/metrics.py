import numpy as np
from typing import Optional, Dict

from .statistics import RegressionResult, correlation


def compute_residual_sum_of_squares(x: np.ndarray,
                                    y: np.ndarray,
                                    regression: RegressionResult) -> Optional[float]:
    """Sum of squared vertical distances from the points to the regression line.

    Returns None on invalid input.
    """
    try:
        if x is None or y is None or regression is None:
            return None
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.size != y.size:
            return None
        resid = y - regression.predict(x)
        return float(np.sum(resid ** 2))
    except (TypeError, ValueError):
        return None


def compute_fit_statistics(sample, regression: Optional[RegressionResult]) -> Dict[str, Optional[float]]:
    """Convenience: pull arrays from a Sample-like object and compute stats.

    Returns dict with keys: 'sse', 'r_squared'
    """
    stats = {"sse": None, "r_squared": None}
    x = getattr(sample, "x", None)
    y = getattr(sample, "y", None)
    if x is None or y is None or regression is None:
        return stats
    try:
        stats["sse"] = compute_residual_sum_of_squares(x, y, regression)
        r = correlation(x, y)
        stats["r_squared"] = r * r
    except ValueError:
        pass
    return stats
