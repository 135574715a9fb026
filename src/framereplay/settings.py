"""
Replay Settings

Configuration for the replay engine: virtual clock rate, speed range and
the initial streaming mode. Defaults reproduce the classic behaviour
(1 s virtual ticks, speeds 1x..16x in powers of two, finite recordings).

Usage:
    settings = ReplaySettings(max_speed=8)
    engine = ReplayEngine(frames, scheduler, clock, settings=settings)

    # Or from a JSON file (missing file -> defaults)
    settings = load_settings("replay.json")
"""

import json
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from .constants import (
    DEFAULT_SPEED,
    DEFAULT_TIME_TICK_RATE_MS,
    MAX_SPEED,
    MIN_SPEED,
    SPEED_FACTOR,
)
from .log import Log
from .types import StreamingMode


@dataclass
class ReplaySettings:
    """Replay engine settings."""
    time_tick_rate_ms: int = DEFAULT_TIME_TICK_RATE_MS
    min_speed: int = MIN_SPEED
    max_speed: int = MAX_SPEED
    speed_factor: int = SPEED_FACTOR
    initial_speed: int = DEFAULT_SPEED
    streaming_mode: StreamingMode = StreamingMode.UNAVAILABLE

    def __post_init__(self):
        """Validate settings."""
        if self.time_tick_rate_ms <= 0:
            raise ValueError(f"time_tick_rate_ms must be > 0 (got {self.time_tick_rate_ms})")
        if self.min_speed < 1:
            raise ValueError(f"min_speed must be >= 1 (got {self.min_speed})")
        if self.max_speed < self.min_speed:
            raise ValueError(
                f"max_speed ({self.max_speed}) must be >= min_speed ({self.min_speed})"
            )
        if self.speed_factor < 2:
            raise ValueError(f"speed_factor must be >= 2 (got {self.speed_factor})")
        if not self.min_speed <= self.initial_speed <= self.max_speed:
            raise ValueError(
                f"initial_speed {self.initial_speed} outside "
                f"[{self.min_speed}, {self.max_speed}]"
            )
        for name in ("max_speed", "initial_speed"):
            value = getattr(self, name)
            if value not in self.speed_steps():
                raise ValueError(
                    f"{name} {value} is not min_speed * speed_factor**k "
                    f"(valid: {list(self.speed_steps())})"
                )
        if not isinstance(self.streaming_mode, StreamingMode):
            raise ValueError(f"Unknown streaming mode: {self.streaming_mode!r}")

    def speed_steps(self) -> Tuple[int, ...]:
        """Speeds reachable from min_speed by repeated increase_speed()."""
        steps = [self.min_speed]
        while steps[-1] * self.speed_factor <= self.max_speed:
            steps.append(steps[-1] * self.speed_factor)
        return tuple(steps)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = asdict(self)
        result['streaming_mode'] = self.streaming_mode.name
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReplaySettings':
        """Create from dictionary. Unknown keys are ignored."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        mode = known.get('streaming_mode')
        if isinstance(mode, str):
            try:
                known['streaming_mode'] = StreamingMode[mode.upper()]
            except KeyError:
                raise ValueError(f"Unknown streaming mode: {mode!r}") from None
        elif isinstance(mode, int):
            known['streaming_mode'] = StreamingMode(mode)
        return cls(**known)


def load_settings(path: str) -> ReplaySettings:
    """
    Load settings from a JSON file.

    Args:
        path: Path to a JSON object with ReplaySettings fields

    Returns:
        ReplaySettings; defaults if the file does not exist
    """
    if not os.path.exists(path):
        Log.debug(f"ReplaySettings: {path} not found, using defaults")
        return ReplaySettings()

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")

    settings = ReplaySettings.from_dict(data)
    Log.info(f"ReplaySettings: loaded {path}")
    return settings
