# models/__init__.py

"""Public API for the models package.

Exports provided:
  - Sample, StandardNormalGenerator - sample container and normal source
  - generate_correlated_sample(), rescale_to_range() - sample synthesis
  - correlation(), regress(), residual_segments() - statistics engine
  - RegressionResult, ResidualSegment - derived results
  - ModelState - interaction state machine
  - DisplayMode, BaselineLineMode, GenerationParameters, SampleSnapshot

Everything in this package is plain numpy and has no Qt dependency, so it
can be driven from tests or a different front end.
"""

from .sampling import Sample, StandardNormalGenerator, generate_correlated_sample, rescale_to_range
from .statistics import RegressionResult, ResidualSegment, correlation, regress, residual_segments
from .metrics import compute_fit_statistics, compute_residual_sum_of_squares
from .model_state import (
    BaselineLineMode,
    DisplayMode,
    GenerationParameters,
    ModelState,
    SampleSnapshot,
)

__all__ = [
    "Sample",
    "StandardNormalGenerator",
    "generate_correlated_sample",
    "rescale_to_range",
    "RegressionResult",
    "ResidualSegment",
    "correlation",
    "regress",
    "residual_segments",
    "compute_fit_statistics",
    "compute_residual_sum_of_squares",
    "ModelState",
    "DisplayMode",
    "BaselineLineMode",
    "GenerationParameters",
    "SampleSnapshot",
]
