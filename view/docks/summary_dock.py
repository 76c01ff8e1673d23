"""
Summary dock showing the realised correlation and the fitted line.
"""

from PySide6.QtWidgets import QDockWidget, QWidget, QVBoxLayout, QLabel
from PySide6.QtCore import Qt

EXPLANATION = (
    "The sample is drawn from a 2D normal distribution with a target correlation of {target:.2f} "
    "and rescaled to the range [{lo:g}, {hi:g}]. Because of randomness and sample size, the actual "
    "correlation may differ from the target.\n\n"
    "Fitting places the line that minimizes the total squared vertical distances (residuals) between "
    "each point and the line. The dashed red lines show these residuals."
)


class SummaryDock(QDockWidget):
    """Dock widget with the summary text under the chart."""

    def __init__(self, parent=None):
        super().__init__("Summary", parent)
        container = QWidget()
        layout = QVBoxLayout(container)

        self.corr_label = QLabel("Actual Sample Correlation (r): N/A")
        self.line_label = QLabel("Line not yet fit!")
        self.sse_label = QLabel("")
        self.explanation_label = QLabel("")
        self.explanation_label.setWordWrap(True)
        for lbl in (self.corr_label, self.line_label, self.sse_label):
            lbl.setAlignment(Qt.AlignHCenter)
            layout.addWidget(lbl)
        layout.addWidget(self.explanation_label)
        layout.addStretch(1)
        self.setWidget(container)

    def set_summary(self, corr_text: str, line_text: str):
        self.corr_label.setText(corr_text)
        self.line_label.setText(line_text)

    def set_statistics(self, stats: dict, fitted: bool):
        sse = stats.get("sse")
        if fitted and sse is not None:
            self.sse_label.setText(f"Sum of squared residuals = {sse:.2f}")
        else:
            self.sse_label.setText("")

    def set_explanation(self, target: float, range_min: float, range_max: float):
        self.explanation_label.setText(EXPLANATION.format(target=target, lo=range_min, hi=range_max))
