# viewmodel/visualizer_vm.py
from PySide6.QtCore import QObject, Signal
import numpy as np
from dataclasses import dataclass, field
import typing as _typing

from models import ModelState, compute_fit_statistics
from dataio import VariantConfig, VariantConfigError, load_variant
from .logging_helpers import log_exception, log_message, safe_emit


def _empty() -> np.ndarray:
    return np.array([], dtype=float)


@dataclass
class PlotPayload:
    """Everything the view needs to redraw the chart in one go."""
    x: np.ndarray = field(default_factory=_empty)
    y: np.ndarray = field(default_factory=_empty)
    line_x: np.ndarray = field(default_factory=_empty)
    line_y: np.ndarray = field(default_factory=_empty)
    # residual segments flattened as consecutive (start, end) pairs for connect="pairs"
    residual_x: np.ndarray = field(default_factory=_empty)
    residual_y: np.ndarray = field(default_factory=_empty)
    fitted: bool = False
    range_min: float = 0.0
    range_max: float = 10.0


class VisualizerViewModel(QObject):
    """
    Central logic layer: relays slider and button input to the model state
    and turns the resulting sample and statistics into plot payloads.
    """

    plot_updated = Signal(object)                # PlotPayload
    parameters_updated = Signal(float, int)      # target correlation, sample size
    display_mode_changed = Signal(str)           # "baseline" or "fitted"
    summary_updated = Signal(str, str)           # correlation line, line description
    variant_changed = Signal(object)             # VariantConfig
    log_message = Signal(str)

    def __init__(self, model_state: _typing.Optional[ModelState] = None, rng=None):
        super().__init__()
        self.state = model_state or ModelState(rng=rng)

    def _log_message(self, message: str) -> None:
        """Emit a message via the shared logging helper."""
        log_message(message, vm=self)

    def _log_exception(self, context: str, exc: Exception) -> None:
        """Emit an exception context via the shared logging helper."""
        log_exception(context, exc, vm=self)

    # --------------------------
    # Accessors
    # --------------------------
    @property
    def config(self) -> VariantConfig:
        return self.state.config

    def get_parameters(self) -> dict:
        params = self.state.parameters
        return {
            "target_correlation": params.target_correlation,
            "sample_size": params.sample_size,
            "display_mode": self.state.display_mode.value,
        }

    # --------------------------
    # Parameter transitions
    # --------------------------
    def set_correlation(self, r) -> float:
        """Apply a new target correlation; regenerates and drops back to the baseline line."""
        value = self.state.set_correlation(r)
        self._after_parameter_change()
        return value

    def set_sample_size(self, n) -> int:
        """Apply a new sample size; regenerates and drops back to the baseline line."""
        value = self.state.set_sample_size(n)
        self._after_parameter_change()
        return value

    def resample(self):
        """Draw a new sample with the current parameters."""
        self.state.resample()
        self._after_parameter_change()
        self._log_message(f"Drew a new sample of {self.state.parameters.sample_size} points.")

    def fit_line(self):
        """Show the least-squares line and the residual segments."""
        self.state.fit()
        reg = self.state.regression
        self._log_message(f"Fit regression line: slope={reg.slope:.3f}, intercept={reg.intercept:.3f}")
        safe_emit(self.display_mode_changed, self.state.display_mode.value, vm=self,
                  signal_name="display_mode_changed")
        self.update_plot()

    def _after_parameter_change(self):
        params = self.state.parameters
        safe_emit(self.parameters_updated, params.target_correlation, params.sample_size, vm=self,
                  signal_name="parameters_updated")
        safe_emit(self.display_mode_changed, self.state.display_mode.value, vm=self,
                  signal_name="display_mode_changed")
        self.update_plot()

    # --------------------------
    # Variants
    # --------------------------
    def load_variant(self, name: str) -> bool:
        """Switch to a named variant preset; returns False if it cannot be loaded."""
        try:
            cfg = load_variant(name)
        except VariantConfigError as e:
            self._log_exception(f"Could not load variant '{name}'", e)
            return False
        self.apply_variant(cfg)
        return True

    def apply_variant(self, cfg: VariantConfig):
        self.state = ModelState(cfg, rng=self.state.generator)
        self._log_message(f"Loaded variant '{cfg.name}' (n={cfg.initial_sample_size}, "
                          f"baseline={cfg.baseline_line_mode}).")
        safe_emit(self.variant_changed, cfg, vm=self, signal_name="variant_changed")
        self._after_parameter_change()

    # --------------------------
    # Plot + summary
    # --------------------------
    def build_plot_payload(self) -> PlotPayload:
        snap = self.state.snapshot()
        line_x, line_y = self.state.displayed_line()
        payload = PlotPayload(
            x=np.asarray(snap.sample.x, dtype=float),
            y=np.asarray(snap.sample.y, dtype=float),
            line_x=line_x,
            line_y=line_y,
            fitted=self.state.is_fitted,
            range_min=self.config.range_min,
            range_max=self.config.range_max,
        )
        if self.state.is_fitted:
            predicted = snap.regression.predict(snap.sample.x)
            payload.residual_x = np.repeat(snap.sample.x, 2)
            payload.residual_y = np.column_stack([snap.sample.y, predicted]).ravel()
        return payload

    def summary_lines(self) -> _typing.Tuple[str, str]:
        corr_text = f"Actual Sample Correlation (r): {self.state.actual_correlation:.2f}"
        if not self.state.is_fitted:
            return corr_text, "Line not yet fit!"
        reg = self.state.regression
        return corr_text, f"Slope = {reg.slope:.2f}, Intercept = {reg.intercept:.2f}"

    def compute_statistics(self) -> dict:
        """Residual sum of squares and r^2 for the current sample."""
        return compute_fit_statistics(self.state.sample, self.state.regression)

    def update_plot(self):
        """Push the current sample, line, residuals and summary to the view."""
        payload = self.build_plot_payload()
        safe_emit(self.plot_updated, payload, vm=self, signal_name="plot_updated")
        safe_emit(self.summary_updated, *self.summary_lines(), vm=self, signal_name="summary_updated")

    # --------------------------
    # Action dispatch
    # --------------------------
    def handle_action(self, action: str, **kwargs):
        """
        Central dispatcher for view-driven actions.

        Examples:
            handle_action('fit_line')
            handle_action('set_correlation', value=0.9)
            handle_action('set_sample_size', value=50)

        Returns:
            The result of the called action function, or None if the action is not recognized or an error occurs.
        """
        if not action:
            self._log_message("handle_action: no action provided")
            return None

        a = str(action).strip()

        def _value(*keys):
            for k in keys:
                if kwargs.get(k) is not None:
                    return kwargs[k]
            raise ValueError(f"'{a}' requires one of {keys}")

        mapping = {
            "fit_line": self.fit_line,
            "fit": self.fit_line,
            "resample": self.resample,
            "update_plot": self.update_plot,
            "set_correlation": lambda: self.set_correlation(_value("value", "r", "correlation")),
            "set_sample_size": lambda: self.set_sample_size(_value("value", "n", "sample_size")),
            "load_variant": lambda: self.load_variant(_value("name", "variant")),
        }

        if a not in mapping:
            self._log_message(f"Unknown action requested: '{action}'")
            return None
        try:
            return mapping[a]()
        except (TypeError, ValueError) as e:
            self._log_exception(f"handle_action('{action}') failed", e)
            return None
