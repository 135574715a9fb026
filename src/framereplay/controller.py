"""
Replay Controller

Qt host for a ReplayEngine. Wires the engine to Qt timers and re-emits its
events as signals so any number of widgets can follow the replay.

Signals:
    replay_started(), replay_resumed(), replay_paused(), replay_stopped()
    frame_ticked(frame): Frame now showing
    time_ticked(ms): Virtual playback clock
    frame_selected(frame): Frame chosen by seek()
    speed_changed(speed): New speed multiplier
    replay_finished()
    buffering_started(), buffering_completed()
"""

from typing import Any, Callable, List, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from .engine import ReplayEngine
from .interfaces import TimerScheduler, WallClock
from .log import Log
from .settings import ReplaySettings
from .timers import QtTimerScheduler, QtWallClock
from .types import ReplayEventKind, StreamingMode


class ReplayController(QObject):
    """
    Coordinates a replay engine with Qt.

    Features:
    - Qt timers and elapsed clock by default (injectable for tests)
    - Signal per event kind, plus plain callback fan-out
    - Transport controls (toggle, seek, step, speed)
    - append_frames() for progressive sources
    """

    replay_started = pyqtSignal()
    replay_resumed = pyqtSignal()
    replay_paused = pyqtSignal()
    replay_stopped = pyqtSignal()
    frame_ticked = pyqtSignal(object)
    time_ticked = pyqtSignal(float)
    frame_selected = pyqtSignal(object)
    speed_changed = pyqtSignal(int)
    replay_finished = pyqtSignal()
    buffering_started = pyqtSignal()
    buffering_completed = pyqtSignal()

    def __init__(
        self,
        frames: Optional[Sequence[Any]] = None,
        settings: Optional[ReplaySettings] = None,
        scheduler: Optional[TimerScheduler] = None,
        clock: Optional[WallClock] = None,
        parent=None,
    ):
        super().__init__(parent)

        self._scheduler = scheduler if scheduler is not None else QtTimerScheduler(self)
        self._clock = clock if clock is not None else QtWallClock()
        self._engine = ReplayEngine(
            list(frames) if frames is not None else [],
            self._scheduler,
            self._clock,
            settings=settings,
            listener=self._on_engine_event,
        )
        self._listeners: List[Callable[..., None]] = []
        self._current_frame: Any = None

    @property
    def engine(self) -> ReplayEngine:
        return self._engine

    @property
    def current_frame(self) -> Any:
        """Last frame ticked or selected"""
        return self._current_frame

    @property
    def is_playing(self) -> bool:
        return self._engine.is_resumed()

    # ── listeners ───────────────────────────────────────────────────────────

    def add_listener(self, listener: Callable[..., None]):
        """
        Add a callback receiving (kind, frame, virtual_time) for every event.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[..., None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── frames ──────────────────────────────────────────────────────────────

    def set_frames(self, frames: Sequence[Any]):
        self._engine.set_frames(list(frames))

    def append_frames(self, frames: Sequence[Any]):
        """
        Append newly arrived frames (progressive sources).

        Resolves buffering if the engine was waiting at the live edge.
        """
        if not frames:
            return
        self._engine.set_frames(list(self._engine.get_frames()) + list(frames))
        Log.debug(f"ReplayController: Appended {len(frames)} frames")

    def set_streaming_mode(self, mode: StreamingMode):
        self._engine.set_streaming_mode(mode)

    # ── transport ───────────────────────────────────────────────────────────

    def play(self):
        """Start, or resume if already started"""
        if self._engine.is_started():
            self._engine.resume()
        else:
            self._engine.start()

    def pause(self):
        self._engine.pause()

    def stop(self):
        self._engine.stop()

    def toggle_playback(self):
        """Toggle between play and pause"""
        if self._engine.is_resumed():
            self._engine.pause()
        else:
            self.play()

    def seek(self, index: int):
        """
        Seek to a frame index.

        Args:
            index: Frame index, clamped to the current sequence
        """
        frames = self._engine.get_frames()
        if not frames:
            return
        self._engine.set_position(max(0, min(index, len(frames) - 1)))

    def step_forward(self):
        self._engine.next_frame()

    def step_backward(self):
        self._engine.prev_frame()

    def faster(self):
        self._engine.increase_speed()

    def slower(self):
        self._engine.decrease_speed()

    def cleanup(self):
        """Stop the replay and release all timers"""
        self._engine.stop()
        if isinstance(self._scheduler, QtTimerScheduler):
            self._scheduler.cancel_all()
        self._listeners.clear()
        Log.debug("ReplayController: Cleanup complete")

    # ── engine events ───────────────────────────────────────────────────────

    def _on_engine_event(self, kind: ReplayEventKind, frame: Any = None,
                         virtual_time: Optional[float] = None):
        if kind in (ReplayEventKind.TICK, ReplayEventKind.SELECTED_FRAME):
            self._current_frame = frame

        if kind == ReplayEventKind.START:
            self.replay_started.emit()
        elif kind == ReplayEventKind.RESUME:
            self.replay_resumed.emit()
        elif kind == ReplayEventKind.PAUSE:
            self.replay_paused.emit()
        elif kind == ReplayEventKind.STOP:
            self.replay_stopped.emit()
        elif kind == ReplayEventKind.TICK:
            self.frame_ticked.emit(frame)
        elif kind == ReplayEventKind.TIME_TICK:
            self.time_ticked.emit(float(virtual_time))
        elif kind == ReplayEventKind.SELECTED_FRAME:
            self.frame_selected.emit(frame)
        elif kind == ReplayEventKind.SPEED_CHANGE:
            self.speed_changed.emit(self._engine.get_speed())
        elif kind == ReplayEventKind.FINISHED:
            self.replay_finished.emit()
        elif kind == ReplayEventKind.BUFFERING_START:
            self.buffering_started.emit()
        elif kind == ReplayEventKind.BUFFERING_COMPLETED:
            self.buffering_completed.emit()

        for listener in list(self._listeners):
            listener(kind, frame, virtual_time)
