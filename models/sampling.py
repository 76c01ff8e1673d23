# models/sampling.py
"""Synthetic bivariate samples with a requested population correlation.

The generator draws standard-normal pairs with a Box-Muller transform and
mixes them so that ``corr(x, y)`` equals the target in expectation. The
realised sample correlation wanders around the target for small samples,
which is the point of the exercise.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import numpy as np

SeedLike = Union[None, int, np.random.Generator]


@dataclass(frozen=True)
class Sample:
    """Ordered ``(x, y)`` points, stored as two read-only float arrays."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = np.array(self.x, dtype=float, copy=True)
        y = np.array(self.y, dtype=float, copy=True)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(f"Sample arrays must be 1-D and equal length (got {x.shape} and {y.shape})")
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __len__(self) -> int:
        return int(self.x.size)

    def points(self) -> Iterator[Tuple[float, float]]:
        for xv, yv in zip(self.x, self.y):
            yield float(xv), float(yv)


def _as_generator(source: SeedLike) -> np.random.Generator:
    # anything with a random() method can act as the uniform source
    if isinstance(source, np.random.Generator) or callable(getattr(source, "random", None)):
        return source
    return np.random.default_rng(source)


class StandardNormalGenerator:
    """Approximately N(0, 1) values from two uniform draws (Box-Muller).

    Only the underlying uniform source carries state, so two generators
    seeded identically produce identical streams.
    """

    def __init__(self, rng: SeedLike = None):
        self.rng = _as_generator(rng)

    def _nonzero_uniform(self) -> float:
        # ln(0) would give -inf, so redraw exact zeros
        u = 0.0
        while u == 0.0:
            u = float(self.rng.random())
        return u

    def next_standard_normal(self) -> float:
        u = self._nonzero_uniform()
        v = self._nonzero_uniform()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def standard_normals(self, count: int) -> np.ndarray:
        """Return ``count`` successive draws as a float array."""
        return np.array([self.next_standard_normal() for _ in range(int(count))], dtype=float)


def rescale_to_range(values, range_min: float, range_max: float) -> np.ndarray:
    """Map ``values`` linearly from their own [min, max] onto [range_min, range_max].

    A constant input has no spread to map; its divisor is taken as 1 and every
    value lands on ``range_min``.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr.copy()
    lo = float(np.min(arr))
    hi = float(np.max(arr))
    span = hi - lo
    if span == 0:
        span = 1.0
    return range_min + ((arr - lo) / span) * (range_max - range_min)


def generate_correlated_sample(target_correlation: float,
                               n: int,
                               range_min: float = 0.0,
                               range_max: float = 10.0,
                               generator: Optional[Union[StandardNormalGenerator, SeedLike]] = None) -> Sample:
    """Build ``n`` points whose population correlation is ``target_correlation``.

    Parameters
    ----------
    target_correlation : float
        Correlation in [-1, 1] used to mix the two normal draws.
    n : int
        Number of points, assumed >= 1 (callers clamp).
    range_min, range_max : float
        Display range both axes are rescaled into, each axis independently.
    generator : StandardNormalGenerator, numpy Generator, int or None
        Source of normal draws; seeds and numpy generators are wrapped.
    """
    if not isinstance(generator, StandardNormalGenerator):
        generator = StandardNormalGenerator(generator)

    r = float(target_correlation)
    # guard against 1 - r*r dipping below zero through rounding
    mix = math.sqrt(max(0.0, 1.0 - r * r))

    raw_x = np.empty(int(n), dtype=float)
    raw_y = np.empty(int(n), dtype=float)
    for i in range(int(n)):
        z1 = generator.next_standard_normal()
        z2 = generator.next_standard_normal()
        raw_x[i] = z1
        raw_y[i] = r * z1 + mix * z2

    return Sample(
        rescale_to_range(raw_x, range_min, range_max),
        rescale_to_range(raw_y, range_min, range_max),
    )
