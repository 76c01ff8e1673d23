"""
Tests for the interaction state machine (ModelState).
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dataio.variant_config import VariantConfig
from models import BaselineLineMode, DisplayMode, GenerationParameters, ModelState, regress, correlation


@pytest.fixture
def state():
    return ModelState(VariantConfig(initial_correlation=0.0, initial_sample_size=30), rng=123)


def test_initial_state(state):
    assert state.parameters == GenerationParameters(0.0, 30)
    assert state.display_mode is DisplayMode.BASELINE
    assert len(state.sample) == 30


def test_fit_scenario(state):
    state.set_correlation(0.9)
    assert state.display_mode is DisplayMode.BASELINE
    state.set_sample_size(50)
    assert state.display_mode is DisplayMode.BASELINE
    assert state.parameters == GenerationParameters(0.9, 50)
    assert len(state.sample) == 50

    state.fit()
    assert state.display_mode is DisplayMode.FITTED
    assert state.displayed_slope == state.regression.slope
    assert state.displayed_intercept == state.regression.intercept
    assert state.parameters == GenerationParameters(0.9, 50)

    state.set_sample_size(60)
    assert state.display_mode is DisplayMode.BASELINE
    assert len(state.sample) == 60


def test_fit_does_not_regenerate(state):
    before = state.snapshot()
    state.fit()
    assert state.snapshot() is before


def test_fit_is_repeatable(state):
    state.fit()
    state.fit()
    assert state.is_fitted


def test_correlation_change_resets_fit(state):
    state.fit()
    state.set_correlation(-0.4)
    assert not state.is_fitted


def test_resample_keeps_parameters_and_resets_fit(state):
    state.set_parameters(0.5, 40)
    state.fit()
    old_sample = state.sample
    state.resample()
    assert state.parameters == GenerationParameters(0.5, 40)
    assert state.display_mode is DisplayMode.BASELINE
    assert not np.array_equal(old_sample.x, state.sample.x)


@pytest.mark.parametrize("requested, stored", [(1.7, 1.0), (-3.0, -1.0), (0.25, 0.25)])
def test_correlation_is_clamped(state, requested, stored):
    assert state.set_correlation(requested) == stored
    assert state.parameters.target_correlation == stored


@pytest.mark.parametrize("requested, stored", [(0, 10), (5, 10), (500, 200), (42.6, 43), ("75", 75)])
def test_sample_size_is_clamped(state, requested, stored):
    assert state.set_sample_size(requested) == stored
    assert len(state.sample) == stored


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_non_finite_correlation_is_rejected(state, bad):
    with pytest.raises(ValueError):
        state.set_correlation(bad)
    assert state.parameters.target_correlation == 0.0


def test_statistics_belong_to_current_sample(state):
    for r, n in [(0.9, 50), (-0.3, 120), (0.0, 10)]:
        state.set_parameters(r, n)
        snap = state.snapshot()
        assert snap.parameters == GenerationParameters(r, n)
        assert len(snap.sample) == n
        assert snap.regression == regress(snap.sample)
        assert snap.actual_correlation == correlation(snap.sample.x, snap.sample.y)


def test_mean_baseline_before_fit():
    state = ModelState(VariantConfig(baseline_line_mode="mean_y"), rng=1)
    assert state.baseline_line_mode is BaselineLineMode.MEAN_Y
    assert state.displayed_slope == 0.0
    assert state.displayed_intercept == pytest.approx(float(np.mean(state.sample.y)))


def test_zero_baseline_before_fit():
    state = ModelState(VariantConfig(baseline_line_mode="zero"), rng=1)
    assert state.baseline_line_mode is BaselineLineMode.ZERO
    assert state.displayed_slope == 0.0
    assert state.displayed_intercept == 0.0
    state.fit()
    assert state.displayed_intercept == state.regression.intercept


def test_displayed_line_spans_display_range(state):
    xs, ys = state.displayed_line()
    np.testing.assert_array_equal(xs, [0.0, 10.0])
    np.testing.assert_allclose(ys, [state.regression.mean_y] * 2)
    state.fit()
    xs, ys = state.displayed_line()
    reg = state.regression
    np.testing.assert_allclose(ys, [reg.intercept, reg.slope * 10.0 + reg.intercept])


@pytest.mark.parametrize("fit_first", [False, True])
def test_residual_segments_use_fitted_regression_in_any_mode(state, fit_first):
    state.set_parameters(0.7, 25)
    if fit_first:
        state.fit()
    reg = state.regression
    segments = state.residual_segments()
    assert len(segments) == 25
    for seg, (x, y) in zip(segments, state.sample.points()):
        assert seg.x == x
        assert seg.y_actual == y
        assert seg.y_predicted == pytest.approx(reg.slope * x + reg.intercept)


def test_seeded_states_are_reproducible():
    a = ModelState(rng=77)
    b = ModelState(rng=77)
    np.testing.assert_array_equal(a.sample.x, b.sample.x)
    np.testing.assert_array_equal(a.sample.y, b.sample.y)


def test_invalid_config_is_rejected():
    with pytest.raises(ValueError):
        ModelState(VariantConfig(initial_sample_size=5, sample_size_min=10))
