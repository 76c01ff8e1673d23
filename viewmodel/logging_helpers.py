"""Utility helpers for routing log messages and exceptions through the ViewModel.

These helpers centralize how we surface log output to the GUI. They attempt to
emit messages via a viewmodel's ``log_message`` signal when available and fall
back to the standard logger so messages are never lost silently.
"""
from __future__ import annotations

import logging
import sys
import traceback
from typing import Optional

logger = logging.getLogger("viewmodel")


def log_message(message: str, vm: Optional[object] = None, level: int = logging.INFO) -> None:
    """Emit *message* through ``vm.log_message`` when possible, and always to the logger."""
    text = str(message)
    logger.log(level, text)
    if vm is None:
        return
    signal = getattr(vm, "log_message", None)
    if signal is None or not hasattr(signal, "emit"):
        return
    try:
        signal.emit(text)
    except RuntimeError:
        # the Qt object behind the signal may already be deleted during shutdown
        logger.debug("log_message signal unavailable; message kept in logger only")


def log_exception(context: str, exc: Optional[BaseException] = None, vm: Optional[object] = None) -> None:
    """Format *exc* with traceback and delegate to :func:`log_message`."""
    if exc is None:
        exc = sys.exc_info()[1]
    tb = traceback.format_exc()
    if exc is None and (tb is None or tb.strip() == "NoneType: None"):
        payload = f"{context}: (no exception details available)"
    else:
        payload = f"{context}: {exc}\n{tb}"
    log_message(payload, vm=vm, level=logging.ERROR)


def safe_emit(signal, *args, vm: Optional[object] = None, signal_name: str = "signal"):
    """Safely emit a Qt signal, catching and logging any exceptions.

    Args:
        signal: Qt signal to emit
        *args: Arguments to pass to signal.emit()
        vm: ViewModel instance for logging
        signal_name: Name of signal for error messages
    """
    try:
        signal.emit(*args)
    except Exception as e:
        log_exception(f"Failed to emit {signal_name}", e, vm=vm)
