"""
Replay Interfaces

Protocol definitions for the capabilities the replay engine needs from its
host. The engine owns no timers or clocks of its own; the Qt implementations
live in timers.py, and tests plug in virtual-time fakes.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class TimerScheduler(Protocol):
    """
    Cancellable one-shot delayed callbacks.
    """

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """
        Run callback once after delay_ms.

        A delay <= 0 fires as soon as possible, never synchronously.

        Returns:
            Opaque handle accepted by cancel()
        """
        ...

    def cancel(self, handle: Any) -> None:
        """
        Cancel a pending callback.

        Cancelling a fired or already-cancelled handle is a no-op.
        """
        ...


@runtime_checkable
class WallClock(Protocol):
    """Elapsed real time source."""

    def now_ms(self) -> float:
        """Current time in milliseconds (monotonic)."""
        ...


@runtime_checkable
class ReplayListener(Protocol):
    """
    Receiver of replay events.

    frame is set for TICK and SELECTED_FRAME, virtual_time for TIME_TICK.
    """

    def __call__(self, kind: Any, frame: Optional[Any] = None,
                 virtual_time: Optional[float] = None) -> None:
        ...
