"""Round clock backend driven by the Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class _QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtTimerBackend:
    """Creates repeating ``QTimer`` objects parented to ``parent``."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return _QtTimerHandle(timer)
