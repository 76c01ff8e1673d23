"""
Dock widgets package for the visualizer.

Each dock is a self-contained module that can be developed independently.
"""

from .controls_dock import ControlsDock
from .summary_dock import SummaryDock
from .log_dock import LogDock

__all__ = ["ControlsDock", "SummaryDock", "LogDock"]
