# view/main_window.py
from PySide6.QtWidgets import QMainWindow, QDockWidget
from PySide6.QtCore import Qt
import pyqtgraph as pg
import numpy as np

from view.docks.controls_dock import ControlsDock
from view.docks.summary_dock import SummaryDock
from view.docks.log_dock import LogDock

# -- color palette (change these) --
PLOT_BG = "white"       # plot background
POINT_COLOR = "#8884d8" # scatter points
LINE_COLOR = "red"      # baseline / fitted line
RESIDUAL_COLOR = "red"  # dashed residual segments
AXIS_COLOR = "black"    # axis and tick labels
GRID_ALPHA = 0.3
POINT_TIP = "x: {x:.2f}\ny: {y:.2f}"


class MainWindow(QMainWindow):
    def __init__(self, viewmodel=None):
        super().__init__()
        self.setWindowTitle("Correlation & Regression Visualizer")
        self.viewmodel = viewmodel

        # --- Central Plot ---
        self._init_plot()

        # --- Docks ---
        self._init_docks()

        for dock in [self.controls_dock, self.summary_dock, self.log_dock]:
            dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)

        self.resize(1100, 750)

    # --------------------------
    # Plot setup
    # --------------------------
    def _init_plot(self):
        self.plot_widget = pg.PlotWidget(title="Explore how correlation influences the best-fit regression line")
        self.setCentralWidget(self.plot_widget)

        self.plot_widget.setBackground(PLOT_BG)
        self.plot_widget.showGrid(x=True, y=True, alpha=GRID_ALPHA)
        self.plot_widget.setLabel("bottom", "X")
        self.plot_widget.setLabel("left", "Y")
        self.plot_widget.setMouseEnabled(x=False, y=False)

        # residuals first so the points draw on top of them
        dashed = pg.mkPen(RESIDUAL_COLOR, width=1, style=Qt.DashLine)
        self.residual_item = pg.PlotDataItem(pen=dashed, connect="pairs")
        self.plot_widget.addItem(self.residual_item)

        self.scatter = pg.ScatterPlotItem(size=7, pen=None, brush=pg.mkBrush(POINT_COLOR),
                                          hoverable=True, tip=POINT_TIP.format)
        self.plot_widget.addItem(self.scatter)

        self.line_item = pg.PlotDataItem(pen=pg.mkPen(LINE_COLOR, width=2))
        self.plot_widget.addItem(self.line_item)

        for ax in ("left", "bottom"):
            axis = self.plot_widget.getAxis(ax)
            axis.setPen(pg.mkPen(AXIS_COLOR))
            axis.setTextPen(pg.mkPen(AXIS_COLOR))

    def _init_docks(self):
        """Initialize all dock widgets using the modular dock classes."""
        # Create the log dock first so logging is available immediately
        self.log_dock = LogDock(self)
        self.addDockWidget(Qt.BottomDockWidgetArea, self.log_dock)

        self.controls_dock = ControlsDock(self)
        self.addDockWidget(Qt.LeftDockWidgetArea, self.controls_dock)

        self.summary_dock = SummaryDock(self)
        self.addDockWidget(Qt.RightDockWidgetArea, self.summary_dock)
        self.summary_dock.setMinimumWidth(300)

        self._wire_dock_signals()

    def _wire_dock_signals(self):
        """Wire up all dock signals to main window handlers."""
        if not self.viewmodel:
            return
        vm = self.viewmodel
        self.controls_dock.correlation_changed.connect(
            lambda r: vm.handle_action("set_correlation", value=r))
        self.controls_dock.sample_size_changed.connect(
            lambda n: vm.handle_action("set_sample_size", value=n))
        self.controls_dock.fit_clicked.connect(lambda: vm.handle_action("fit_line"))
        self.controls_dock.resample_clicked.connect(lambda: vm.handle_action("resample"))
        self.controls_dock.variant_selected.connect(
            lambda name: vm.handle_action("load_variant", name=name))

        vm.plot_updated.connect(self.update_plot_data)
        vm.summary_updated.connect(self.summary_dock.set_summary)
        vm.parameters_updated.connect(self._on_parameters_updated)
        vm.variant_changed.connect(self._on_variant_changed)
        vm.log_message.connect(self.append_log)

        self._on_variant_changed(vm.config)

    # --------------------------
    # ViewModel → View
    # --------------------------
    def _on_variant_changed(self, config):
        self.controls_dock.configure(config)
        self.plot_widget.setXRange(config.range_min, config.range_max, padding=0.02)
        self.plot_widget.setYRange(config.range_min, config.range_max, padding=0.02)
        params = self.viewmodel.state.parameters
        self._on_parameters_updated(params.target_correlation, params.sample_size)

    def _on_parameters_updated(self, correlation, sample_size):
        self.controls_dock.set_values(correlation, sample_size)
        cfg = self.viewmodel.config
        self.summary_dock.set_explanation(correlation, cfg.range_min, cfg.range_max)

    def update_plot_data(self, payload):
        if payload is None:
            return
        self.scatter.setData(x=np.asarray(payload.x, dtype=float), y=np.asarray(payload.y, dtype=float))
        self.line_item.setData(x=payload.line_x, y=payload.line_y)
        # residuals are only populated in the fitted mode
        self.residual_item.setData(x=payload.residual_x, y=payload.residual_y)
        self.residual_item.setVisible(bool(payload.fitted))
        if self.viewmodel is not None:
            self.summary_dock.set_statistics(self.viewmodel.compute_statistics(), payload.fitted)

    def append_log(self, msg: str):
        self.log_dock.append_log(msg)

