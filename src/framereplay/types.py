"""
Replay Data Types
=================

Public data contracts for the replay engine.

Frames are immutable; the engine only ever reads ``time`` and hands the
frame object back to the listener untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ReplayEventKind(Enum):
    """Event kinds delivered to the replay listener."""
    START = "REPLAY_START"
    RESUME = "REPLAY_RESUME"
    PAUSE = "REPLAY_PAUSE"
    STOP = "REPLAY_STOP"
    TICK = "TICK_EVENT"
    TIME_TICK = "TIME_TICK_EVENT"
    SELECTED_FRAME = "SELECTED_FRAME_EVENT"
    SPEED_CHANGE = "SPEED_CHANGE_EVENT"
    FINISHED = "REPLAY_FINISHED"
    BUFFERING_START = "REPLAY_BUFFERING"
    BUFFERING_COMPLETED = "REPLAY_BUFFERING_COMPLETED"


class StreamingMode(Enum):
    """
    Whether the frame sequence may still grow.

    UNAVAILABLE: reaching the end finishes the replay.
    AVAILABLE: reaching the end waits (buffers) for more frames.
    """
    UNAVAILABLE = 1
    AVAILABLE = 2


@dataclass(frozen=True)
class Frame:
    """
    One timestamped unit of recorded data.

    Attributes:
        time: Milliseconds since the start of the recording
        payload: Opaque data, never inspected by the engine

    Example:
        frame = Frame(time=1500, payload={"lat": 45.1, "lon": 7.6})
    """
    time: int
    payload: Any = None

    def __post_init__(self):
        """Validate frame data."""
        if self.time < 0:
            raise ValueError(f"Frame time cannot be negative: {self.time}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {'time': self.time}
        # Flatten dict payloads unless their keys would read back differently
        payload = self.payload
        if isinstance(payload, dict) and payload and not payload.keys() & {'time', 'Time', 'payload'}:
            result.update(payload)
        elif payload is not None:
            result['payload'] = payload
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Frame':
        """Create from dictionary. Accepts legacy 'Time' as the timestamp key."""
        if 'time' in data:
            time_key = 'time'
        elif 'Time' in data:
            time_key = 'Time'
        else:
            raise ValueError("Frame data has no 'time' field")

        extra = {k: v for k, v in data.items() if k != time_key}
        if not extra:
            payload = None
        elif set(extra) == {'payload'}:
            payload = extra['payload']
        else:
            payload = extra
        return cls(time=data[time_key], payload=payload)
