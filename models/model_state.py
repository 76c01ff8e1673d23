# models/model_state.py
import math
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from dataio.variant_config import VariantConfig
from .sampling import Sample, StandardNormalGenerator, generate_correlated_sample
from .statistics import RegressionResult, ResidualSegment, correlation, regress, residual_segments

logger = logging.getLogger(__name__)


class DisplayMode(Enum):
    BASELINE = "baseline"
    FITTED = "fitted"


class BaselineLineMode(Enum):
    """Where the reference line sits before a fit is requested."""
    MEAN_Y = "mean_y"
    ZERO = "zero"


@dataclass(frozen=True)
class GenerationParameters:
    target_correlation: float
    sample_size: int


@dataclass(frozen=True)
class SampleSnapshot:
    """Parameters together with everything derived from them.

    Replaced as a whole, so the sample and its statistics always belong to
    the same parameter set.
    """
    parameters: GenerationParameters
    sample: Sample
    actual_correlation: float
    regression: RegressionResult


class ModelState:
    """
    Holds the generation parameters, the current sample and its statistics,
    and whether the regression line has been fit.

    Every parameter change regenerates the sample and recomputes the
    statistics before returning, and drops the display back to the baseline
    line. Only :meth:`fit` switches to the fitted line.
    """

    def __init__(self, config: Optional[VariantConfig] = None, rng=None):
        self.config = (config or VariantConfig()).validate()
        self.baseline_line_mode = BaselineLineMode(self.config.baseline_line_mode)
        self._generator = rng if isinstance(rng, StandardNormalGenerator) else StandardNormalGenerator(rng)
        self._display_mode = DisplayMode.BASELINE

        params = GenerationParameters(
            self.clamp_correlation(self.config.initial_correlation),
            self.clamp_sample_size(self.config.initial_sample_size),
        )
        self._snapshot = self._compute(params)

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    def clamp_correlation(self, r) -> float:
        value = float(r)
        if not math.isfinite(value):
            raise ValueError(f"Correlation must be a finite number, got {r!r}")
        return min(max(value, self.config.correlation_min), self.config.correlation_max)

    def clamp_sample_size(self, n) -> int:
        value = float(n)
        if not math.isfinite(value):
            raise ValueError(f"Sample size must be a finite number, got {n!r}")
        return int(min(max(int(round(value)), self.config.sample_size_min), self.config.sample_size_max))

    # ------------------------------------------------------------------
    # Recomputation
    # ------------------------------------------------------------------
    def _compute(self, params: GenerationParameters) -> SampleSnapshot:
        sample = generate_correlated_sample(
            params.target_correlation,
            params.sample_size,
            self.config.range_min,
            self.config.range_max,
            generator=self._generator,
        )
        return SampleSnapshot(
            parameters=params,
            sample=sample,
            actual_correlation=correlation(sample.x, sample.y),
            regression=regress(sample),
        )

    def _apply(self, params: GenerationParameters) -> None:
        self._snapshot = self._compute(params)
        self._display_mode = DisplayMode.BASELINE
        logger.debug(
            "Regenerated sample: r=%.2f n=%d actual r=%.3f",
            params.target_correlation, params.sample_size, self._snapshot.actual_correlation,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def set_correlation(self, r) -> float:
        """Set the target correlation (clamped) and regenerate. Returns the stored value."""
        value = self.clamp_correlation(r)
        self._apply(GenerationParameters(value, self.parameters.sample_size))
        return value

    def set_sample_size(self, n) -> int:
        """Set the sample size (rounded and clamped) and regenerate. Returns the stored value."""
        value = self.clamp_sample_size(n)
        self._apply(GenerationParameters(self.parameters.target_correlation, value))
        return value

    def set_parameters(self, r, n) -> GenerationParameters:
        params = GenerationParameters(self.clamp_correlation(r), self.clamp_sample_size(n))
        self._apply(params)
        return params

    def resample(self) -> None:
        """Draw a fresh sample for the current parameters."""
        self._apply(self.parameters)

    def fit(self) -> None:
        self._display_mode = DisplayMode.FITTED

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def snapshot(self) -> SampleSnapshot:
        return self._snapshot

    @property
    def generator(self) -> StandardNormalGenerator:
        return self._generator

    @property
    def parameters(self) -> GenerationParameters:
        return self._snapshot.parameters

    @property
    def sample(self) -> Sample:
        return self._snapshot.sample

    @property
    def regression(self) -> RegressionResult:
        return self._snapshot.regression

    @property
    def actual_correlation(self) -> float:
        return self._snapshot.actual_correlation

    @property
    def display_mode(self) -> DisplayMode:
        return self._display_mode

    @property
    def is_fitted(self) -> bool:
        return self._display_mode is DisplayMode.FITTED

    @property
    def displayed_slope(self) -> float:
        return self.regression.slope if self.is_fitted else 0.0

    @property
    def displayed_intercept(self) -> float:
        if self.is_fitted:
            return self.regression.intercept
        if self.baseline_line_mode is BaselineLineMode.MEAN_Y:
            return self.regression.mean_y
        return 0.0

    def displayed_line(self, x0: Optional[float] = None, x1: Optional[float] = None) -> Tuple[np.ndarray, np.ndarray]:
        """Endpoints of the line currently on screen, spanning the display range by default."""
        x0 = self.config.range_min if x0 is None else float(x0)
        x1 = self.config.range_max if x1 is None else float(x1)
        xs = np.array([x0, x1], dtype=float)
        return xs, self.displayed_slope * xs + self.displayed_intercept

    def residual_segments(self) -> List[ResidualSegment]:
        """Segments against the fitted regression, whatever the display mode."""
        return residual_segments(self.sample, self.regression)
