"""
Qt Timer Service and Clock

Default host capabilities for the replay engine, built on the Qt event loop.
One single-shot QTimer per scheduled callback keeps cancellation exact: a
cancelled handle can never fire later.
"""

import math
from functools import partial
from typing import Callable, Optional, Set

from PyQt6.QtCore import QElapsedTimer, QObject, Qt, QTimer

from .log import Log


class QtTimerScheduler:
    """
    TimerScheduler on top of single-shot QTimers.

    Requires a running Qt event loop (QCoreApplication/QApplication) for
    callbacks to fire.
    """

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        self._pending: Set[QTimer] = set()

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> QTimer:
        """
        Run callback once after delay_ms (rounded up, negative -> 0).

        Returns:
            The QTimer, used as the cancellation handle
        """
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.timeout.connect(partial(self._fire, timer, callback))
        self._pending.add(timer)
        timer.start(max(0, math.ceil(delay_ms)))
        return timer

    def cancel(self, handle: QTimer) -> None:
        """Stop a pending timer. Unknown or fired handles are ignored."""
        if handle not in self._pending:
            return
        self._pending.discard(handle)
        handle.stop()
        handle.deleteLater()

    def cancel_all(self) -> None:
        for timer in list(self._pending):
            self.cancel(timer)

    def pending_count(self) -> int:
        return len(self._pending)

    def _fire(self, timer: QTimer, callback: Callable[[], None]):
        if timer not in self._pending:
            # Cancelled after the timeout was already queued
            Log.debug("QtTimerScheduler: Ignoring stale timer")
            return
        self._pending.discard(timer)
        timer.deleteLater()
        callback()


class QtWallClock:
    """WallClock measuring elapsed time since construction."""

    def __init__(self):
        self._elapsed = QElapsedTimer()
        self._elapsed.start()

    def now_ms(self) -> float:
        return self._elapsed.nsecsElapsed() / 1_000_000.0

    def restart(self) -> None:
        self._elapsed.restart()
