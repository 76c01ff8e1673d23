"""
Tests for the Qt viewmodel: signal flow, plot payloads and action dispatch.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

QtCore = pytest.importorskip("PySide6.QtCore")

from dataio.variant_config import VariantConfig
from models import DisplayMode, ModelState
from viewmodel.visualizer_vm import VisualizerViewModel


@pytest.fixture(scope="module")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


@pytest.fixture
def vm(qapp):
    return VisualizerViewModel(ModelState(VariantConfig(), rng=2024))


class _Recorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(lambda *args: self.calls.append(args))


def test_parameter_change_emits_full_update(vm):
    params = _Recorder(vm.parameters_updated)
    modes = _Recorder(vm.display_mode_changed)
    plots = _Recorder(vm.plot_updated)
    summaries = _Recorder(vm.summary_updated)

    vm.set_correlation(0.9)

    assert params.calls == [(pytest.approx(0.9), 30)]
    assert modes.calls == [("baseline",)]
    assert len(plots.calls) == 1
    payload = plots.calls[0][0]
    assert payload.x.shape == (30,)
    assert not payload.fitted
    assert payload.residual_x.size == 0
    assert summaries.calls[-1][1] == "Line not yet fit!"


def test_fit_scenario_through_actions(vm):
    vm.handle_action("set_correlation", value=0.9)
    vm.handle_action("set_sample_size", value=50)
    assert vm.state.display_mode is DisplayMode.BASELINE

    plots = _Recorder(vm.plot_updated)
    vm.handle_action("fit_line")
    assert vm.state.display_mode is DisplayMode.FITTED
    payload = plots.calls[-1][0]
    reg = vm.state.regression
    assert payload.fitted
    np.testing.assert_allclose(payload.line_y, [reg.intercept, reg.slope * 10.0 + reg.intercept])

    vm.handle_action("set_sample_size", n=60)
    assert vm.state.display_mode is DisplayMode.BASELINE
    assert vm.get_parameters() == {"target_correlation": 0.9, "sample_size": 60, "display_mode": "baseline"}


def test_fitted_payload_pairs_points_with_predictions(vm):
    vm.set_sample_size(12)
    vm.fit_line()
    payload = vm.build_plot_payload()
    reg = vm.state.regression
    assert payload.residual_x.size == 24
    np.testing.assert_array_equal(payload.residual_x[0::2], vm.state.sample.x)
    np.testing.assert_array_equal(payload.residual_x[1::2], vm.state.sample.x)
    np.testing.assert_array_equal(payload.residual_y[0::2], vm.state.sample.y)
    np.testing.assert_allclose(payload.residual_y[1::2], reg.slope * vm.state.sample.x + reg.intercept)


def test_summary_text(vm):
    corr_text, line_text = vm.summary_lines()
    assert corr_text == f"Actual Sample Correlation (r): {vm.state.actual_correlation:.2f}"
    assert line_text == "Line not yet fit!"
    vm.fit_line()
    reg = vm.state.regression
    assert vm.summary_lines()[1] == f"Slope = {reg.slope:.2f}, Intercept = {reg.intercept:.2f}"


def test_resample_action_redraws(vm):
    old_x = vm.state.sample.x
    vm.fit_line()
    vm.handle_action("resample")
    assert not vm.state.is_fitted
    assert not np.array_equal(old_x, vm.state.sample.x)


def test_load_variant_switches_baseline(vm):
    variants = _Recorder(vm.variant_changed)
    assert vm.handle_action("load_variant", name="zero_baseline") is True
    assert vm.config.baseline_line_mode == "zero"
    assert vm.state.parameters.sample_size == 30
    assert variants.calls[0][0].name == "zero_baseline"
    np.testing.assert_array_equal(vm.build_plot_payload().line_y, [0.0, 0.0])


def test_unknown_variant_is_logged(vm):
    logs = _Recorder(vm.log_message)
    assert vm.load_variant("does_not_exist") is False
    assert any("does_not_exist" in call[0] for call in logs.calls)


def test_bad_actions_are_logged_not_raised(vm):
    logs = _Recorder(vm.log_message)
    assert vm.handle_action("launch_rocket") is None
    assert vm.handle_action("set_correlation") is None
    assert vm.handle_action("set_correlation", value="nan") is None
    assert vm.handle_action("") is None
    assert len(logs.calls) == 4
    assert vm.state.parameters.target_correlation == 0.0


def test_statistics_for_summary(vm):
    stats = vm.compute_statistics()
    assert set(stats) == {"sse", "r_squared"}
    assert stats["sse"] >= 0.0
