"""
Replay Engine

Reproduces the original timing of an ordered sequence of timestamped frames
in real time.

Features:
- Start / stop / pause / resume
- Seeking by index and single-frame stepping
- Speed multiplier (1x..16x by default) with live rescheduling
- Virtual playback clock ticking once per second of virtual time
- Progressive sources: at the end of a growing sequence the engine buffers
  until set_frames() delivers more frames

Two pending timers are owned by the engine: the frame-advance timer and the
virtual-clock timer. Every reschedule cancels the old handle first, so there
is never more than one pending callback per purpose.

Usage:
    engine = ReplayEngine(frames, QtTimerScheduler(), QtWallClock())
    engine.set_event_listener(on_event)
    engine.start()
"""

from typing import Any, Optional, Sequence

from .interfaces import ReplayListener, TimerScheduler, WallClock
from .log import Log
from .settings import ReplaySettings
from .types import ReplayEventKind, StreamingMode


class ReplayEngine:
    """
    Playback scheduler for timestamped frames.

    State:
        started, resumed, waiting: resumed implies started, waiting implies resumed
        position: index of the next frame to show (one past the last shown
            frame while playing)
        speed: current multiplier

    Events are delivered synchronously to a single listener as
    listener(kind, frame=None, virtual_time=None).
    """

    def __init__(
        self,
        frames: Sequence[Any],
        scheduler: TimerScheduler,
        clock: WallClock,
        settings: Optional[ReplaySettings] = None,
        listener: Optional[ReplayListener] = None,
    ):
        self._settings = settings or ReplaySettings()
        self._scheduler = scheduler
        self._clock = clock
        self._listener = listener

        self._frames = frames
        self._streaming_mode = self._settings.streaming_mode

        self._started = False
        self._resumed = False
        self._waiting = False
        self._speed = self._settings.initial_speed

        self._last_index = 0
        self._last_timestamp = 0.0
        self._buffering_started_at: Optional[float] = None

        self._frame_timer = None
        self._time_timer = None
        self._time_tick_value = 0.0
        self._time_tick_next_timestamp = 0.0

    # ── listener & frames ───────────────────────────────────────────────────

    def set_event_listener(self, listener: Optional[ReplayListener]):
        """Register the single event listener, replacing any previous one."""
        self._listener = listener

    def set_frames(self, frames: Sequence[Any]):
        """
        Replace the frame sequence.

        New frames arriving while buffering resolve the buffering.
        """
        self._frames = frames
        if self._waiting:
            self._on_buffering_completed()

    def get_frames(self) -> Sequence[Any]:
        return self._frames

    def set_streaming_mode(self, mode: StreamingMode):
        self._streaming_mode = mode
        Log.debug(f"ReplayEngine: Streaming mode {mode.name}")

    def get_streaming_mode(self) -> StreamingMode:
        return self._streaming_mode

    # ── queries ─────────────────────────────────────────────────────────────

    def is_started(self) -> bool:
        return self._started

    def is_resumed(self) -> bool:
        return self._resumed

    def is_waiting(self) -> bool:
        return self._waiting

    def get_speed(self) -> int:
        return self._speed

    def get_position(self) -> int:
        return self._last_index

    @property
    def started(self) -> bool:
        return self._started

    @property
    def resumed(self) -> bool:
        return self._resumed

    @property
    def waiting(self) -> bool:
        return self._waiting

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def position(self) -> int:
        return self._last_index

    @property
    def settings(self) -> ReplaySettings:
        return self._settings

    # ── transport commands ──────────────────────────────────────────────────

    def start(self):
        """Start the replay from the current position."""
        if self._started:
            return

        self._started = True
        Log.info(f"ReplayEngine: Start at index {self._last_index} ({len(self._frames)} frames)")
        self._emit(ReplayEventKind.START)
        self.resume()

    def stop(self):
        """Stop the replay and rewind to the first frame."""
        if not self._started:
            return

        self.pause()
        self._started = False
        self._last_index = 0
        Log.info("ReplayEngine: Stop")
        self._emit(ReplayEventKind.STOP)

    def pause(self):
        """Pause the replay, dropping both pending timers."""
        if not self._resumed:
            return

        self._resumed = False
        self._waiting = False
        self._buffering_started_at = None
        self._cancel_timers()
        Log.debug(f"ReplayEngine: Pause at index {self._last_index}")
        self._emit(ReplayEventKind.PAUSE)

    def resume(self):
        """Resume the replay; the current frame is shown immediately."""
        if self._resumed:
            return

        self._resumed = True
        Log.debug(f"ReplayEngine: Resume at index {self._last_index}")
        self._emit(ReplayEventKind.RESUME)
        self.advance()

    def set_position(self, index: int):
        """
        Seek to a frame index.

        Emits SELECTED_FRAME and a TIME_TICK carrying the frame time. A
        running replay is restarted from the new index.
        """
        self._last_index = index
        frame = self._frames[index]
        self._emit(ReplayEventKind.SELECTED_FRAME, frame=frame)
        self._emit(ReplayEventKind.TIME_TICK, virtual_time=frame.time)
        Log.debug(f"ReplayEngine: Seek to index {index} (t={frame.time})")

        if self._resumed:
            self.pause()
            self.resume()

    def next_frame(self):
        """Step one frame forward."""
        self._last_index += 1
        self.advance()

    def prev_frame(self):
        """Step one frame back (never before the first frame)."""
        if self._last_index > 0:
            self._last_index -= 1
        self.advance()

    # ── speed ───────────────────────────────────────────────────────────────

    def increase_speed(self):
        self._speed = min(self._speed * self._settings.speed_factor, self._settings.max_speed)
        self._reschedule_after_speed_change()
        Log.info(f"ReplayEngine: Speed {self._speed}x")
        self._emit(ReplayEventKind.SPEED_CHANGE)

    def decrease_speed(self):
        self._speed = max(self._speed // self._settings.speed_factor, self._settings.min_speed)
        self._reschedule_after_speed_change()
        Log.info(f"ReplayEngine: Speed {self._speed}x")
        self._emit(ReplayEventKind.SPEED_CHANGE)

    def _reschedule_after_speed_change(self):
        """
        Re-arm both timers for the new speed.

        The pending interval (previous frame -> next frame) is rescaled by
        the new speed and measured from the moment the previous frame was
        shown. The clock timer's remaining wait is divided by the new speed.
        """
        if not self._resumed or self._waiting:
            return

        index = self._last_index
        if index <= 0 or index >= len(self._frames):
            return

        self._cancel_timers()
        interval = (self._frames[index].time - self._frames[index - 1].time) / self._speed
        now = self._clock.now_ms()
        due = self._last_timestamp + interval

        if now < due:
            self._frame_timer = self._scheduler.schedule(due - now, self._on_frame_timer)
            clock_wait = (self._time_tick_next_timestamp - now) / self._speed
            self._time_timer = self._scheduler.schedule(clock_wait, self._on_time_timer)
        else:
            # Already late at the new speed
            self.advance()

    # ── frame advance ───────────────────────────────────────────────────────

    def advance(self):
        """
        Show the frame at the current position and, while resumed, schedule
        the next one.

        Called from the frame timer, from resume(), from buffering completion
        and from manual stepping.
        """
        frames = self._frames
        count = len(frames)
        index = self._last_index

        if index + 1 >= count:
            self._on_last_frame(index, count)
            return

        frame = frames[index]
        now = self._clock.now_ms()
        Log.debug(f"ReplayEngine: Tick index {index} (t={frame.time})")
        self._emit(ReplayEventKind.TICK, frame=frame)
        self._last_timestamp = now

        if not self._resumed:
            return

        next_delta = frames[index + 1].time - frame.time
        buffering_lost = 0.0
        if self._buffering_started_at is not None:
            buffering_lost = now - self._buffering_started_at

        self._cancel_timers()
        delay = (next_delta - buffering_lost) / self._speed
        Log.debug(f"ReplayEngine: Next frame in {delay:.1f}ms")
        self._frame_timer = self._scheduler.schedule(delay, self._on_frame_timer)
        self._sync_time_tick(frame, now)
        self._last_index += 1

    def _on_last_frame(self, index: int, count: int):
        """No successor frame: show the final one, then finish or buffer."""
        if index == count - 1:
            frame = self._frames[index]
            Log.debug(f"ReplayEngine: Tick last index {index} (t={frame.time})")
            self._emit(ReplayEventKind.TICK, frame=frame)
            self._last_timestamp = self._clock.now_ms()
            if self._resumed:
                # Next set_frames() continues with the first new frame
                self._last_index += 1

        if self._streaming_mode == StreamingMode.AVAILABLE:
            if self._resumed:
                self._on_buffering_required()
        else:
            Log.info("ReplayEngine: Finished")
            self._emit(ReplayEventKind.FINISHED)
            self.stop()

    def _on_frame_timer(self):
        self._frame_timer = None
        self.advance()

    # ── buffering ───────────────────────────────────────────────────────────

    def _on_buffering_required(self):
        self._waiting = True
        self._cancel_timers()
        Log.info(f"ReplayEngine: Buffering at index {self._last_index}")
        self._emit(ReplayEventKind.BUFFERING_START)
        self._buffering_started_at = self._clock.now_ms()

    def _on_buffering_completed(self):
        self._waiting = False
        if self._resumed:
            self.advance()
        Log.info("ReplayEngine: Buffering completed")
        self._emit(ReplayEventKind.BUFFERING_COMPLETED)
        # The advance above may have hit the live edge again
        if not self._waiting:
            self._buffering_started_at = None

    # ── virtual clock ───────────────────────────────────────────────────────

    def _sync_time_tick(self, frame: Any, now: float):
        """Re-align the virtual clock with the frame just shown."""
        tick_rate = self._settings.time_tick_rate_ms
        remaining = self._time_tick_next_timestamp - now

        if remaining > 0:
            self._time_tick_value = frame.time + (tick_rate - remaining)
            self._time_timer = self._scheduler.schedule(remaining, self._on_time_timer)
        else:
            self._time_tick_value = frame.time
            self._on_time_tick()

    def _on_time_timer(self):
        self._time_timer = None
        self._on_time_tick()

    def _on_time_tick(self):
        tick_rate = self._settings.time_tick_rate_ms
        Log.debug(f"ReplayEngine: Time tick {self._time_tick_value:.0f}")
        self._emit(ReplayEventKind.TIME_TICK, virtual_time=self._time_tick_value)
        self._time_tick_value += tick_rate

        self._cancel_time_timer()
        schedule_time = tick_rate / self._speed
        self._time_tick_next_timestamp = self._clock.now_ms() + schedule_time
        self._time_timer = self._scheduler.schedule(schedule_time, self._on_time_timer)

    # ── helpers ─────────────────────────────────────────────────────────────

    def _cancel_timers(self):
        if self._frame_timer is not None:
            self._scheduler.cancel(self._frame_timer)
            self._frame_timer = None
        self._cancel_time_timer()

    def _cancel_time_timer(self):
        if self._time_timer is not None:
            self._scheduler.cancel(self._time_timer)
            self._time_timer = None

    def _emit(self, kind: ReplayEventKind, frame: Any = None, virtual_time: Optional[float] = None):
        if self._listener:
            self._listener(kind, frame, virtual_time)
