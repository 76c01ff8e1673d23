"""
Log dock widget for displaying application log messages.
"""

from PySide6.QtWidgets import QDockWidget, QPlainTextEdit
import logging

logger = logging.getLogger(__name__)

# older lines are dropped once the log grows past this
MAX_LOG_LINES = 2000


class LogDock(QDockWidget):
    """Dock widget for displaying log messages."""

    def __init__(self, parent=None):
        super().__init__("Log", parent)
        self.log_text = QPlainTextEdit()
        self.log_text.setReadOnly(True)
        self.log_text.setMaximumBlockCount(MAX_LOG_LINES)
        self.log_text.appendPlainText("Visualizer ready.")
        self.setWidget(self.log_text)

    def append_log(self, msg: str):
        try:
            self.log_text.appendPlainText(str(msg))
        except RuntimeError:
            # widget already destroyed during shutdown
            logger.info(msg)
