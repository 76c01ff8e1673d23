"""
Controls dock widget for the correlation and sample-size sliders.
"""

from PySide6.QtWidgets import (
    QDockWidget, QWidget, QVBoxLayout, QPushButton, QLabel,
    QSlider, QComboBox
)
from PySide6.QtCore import Qt, Signal


class ControlsDock(QDockWidget):
    """Dock widget with the sliders, the variant selector and the fit button."""

    # Signals
    correlation_changed = Signal(float)
    sample_size_changed = Signal(int)
    fit_clicked = Signal()
    resample_clicked = Signal()
    variant_selected = Signal(str)

    def __init__(self, parent=None):
        """
        Initialize the controls dock.

        Args:
            parent: Parent widget (typically the main window)
        """
        super().__init__("Controls", parent)
        # QSlider is integer-only; correlation is stored in slider ticks of this size
        self._corr_step = 0.01
        self._init_ui()

    def _init_ui(self):
        """Initialize the UI components."""
        left_widget = QWidget()
        layout = QVBoxLayout(left_widget)

        layout.addWidget(QLabel("Variant"))
        self.variant_combo = QComboBox()
        layout.addWidget(self.variant_combo)

        self.corr_label = QLabel("Correlation (r): 0.00")
        self.corr_slider = QSlider(Qt.Horizontal)
        layout.addWidget(self.corr_label)
        layout.addWidget(self.corr_slider)

        self.size_label = QLabel("Sample Size: 0")
        self.size_slider = QSlider(Qt.Horizontal)
        self.size_slider.setSingleStep(1)
        layout.addWidget(self.size_label)
        layout.addWidget(self.size_slider)

        self.fit_btn = QPushButton("Fit the best-fit regression line")
        self.resample_btn = QPushButton("New Sample")
        layout.addWidget(self.fit_btn)
        layout.addWidget(self.resample_btn)

        layout.addStretch(1)
        self.setWidget(left_widget)

        # Connect internal signals to emit dock signals
        self.corr_slider.valueChanged.connect(self._on_corr_slider)
        self.size_slider.valueChanged.connect(self._on_size_slider)
        self.fit_btn.clicked.connect(self.fit_clicked.emit)
        self.resample_btn.clicked.connect(self.resample_clicked.emit)
        self.variant_combo.currentIndexChanged.connect(self._on_variant_changed)

    def configure(self, config):
        """Apply slider bounds from a VariantConfig without emitting change signals."""
        self._corr_step = float(config.correlation_step) or 0.01
        self.corr_slider.blockSignals(True)
        self.size_slider.blockSignals(True)
        try:
            self.corr_slider.setRange(round(config.correlation_min / self._corr_step),
                                      round(config.correlation_max / self._corr_step))
            self.size_slider.setRange(int(config.sample_size_min), int(config.sample_size_max))
        finally:
            self.corr_slider.blockSignals(False)
            self.size_slider.blockSignals(False)

    def set_values(self, correlation: float, sample_size: int):
        """Move the sliders to match the model without feeding the change back."""
        self.corr_slider.blockSignals(True)
        self.size_slider.blockSignals(True)
        try:
            self.corr_slider.setValue(round(correlation / self._corr_step))
            self.size_slider.setValue(int(sample_size))
        finally:
            self.corr_slider.blockSignals(False)
            self.size_slider.blockSignals(False)
        self.corr_label.setText(f"Correlation (r): {correlation:.2f}")
        self.size_label.setText(f"Sample Size: {sample_size}")

    def set_variants(self, variants, current=None):
        """Populate the variant selector from list_available_variants() entries."""
        self.variant_combo.blockSignals(True)
        self.variant_combo.clear()
        for entry in variants:
            self.variant_combo.addItem(entry["name"], entry["name"])
            self.variant_combo.setItemData(self.variant_combo.count() - 1, entry.get("description", ""),
                                           Qt.ToolTipRole)
        if current is not None:
            idx = self.variant_combo.findData(current)
            # -1 leaves nothing selected so any listed preset can still be picked
            self.variant_combo.setCurrentIndex(idx)
        self.variant_combo.blockSignals(False)

    def _on_corr_slider(self, ticks):
        value = round(ticks * self._corr_step, 10)
        self.corr_label.setText(f"Correlation (r): {value:.2f}")
        self.correlation_changed.emit(value)

    def _on_size_slider(self, value):
        self.size_label.setText(f"Sample Size: {value}")
        self.sample_size_changed.emit(int(value))

    def _on_variant_changed(self, index):
        name = self.variant_combo.itemData(index)
        if name:
            self.variant_selected.emit(str(name))
