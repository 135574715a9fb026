"""
framereplay
===========

Real-time replay of timestamped frame sequences.

Reproduces the original arrival timing of recorded frames at 1x..16x speed,
with pause/resume, seeking, single stepping, a virtual playback clock and
progressive (still growing) recordings.

Modules
-------
- engine      - ReplayEngine, the scheduling state machine
- interfaces  - TimerScheduler / WallClock / ReplayListener protocols
- timers      - Qt implementations of the timer service and clock
- controller  - ReplayController, QObject host with signals
- settings    - ReplaySettings and load_settings()
- types       - Frame, ReplayEventKind, StreamingMode
- frame_loader, cli - command line player

Import Examples
---------------
    from framereplay import ReplayEngine, Frame, ReplayEventKind
    from framereplay.controller import ReplayController
    from framereplay.timers import QtTimerScheduler, QtWallClock
"""

from .engine import ReplayEngine
from .errors import FrameLoadError, ReplayError
from .settings import ReplaySettings, load_settings
from .types import Frame, ReplayEventKind, StreamingMode

__version__ = "0.1.0"

__all__ = [
    'ReplayEngine',
    'ReplaySettings',
    'load_settings',
    'Frame',
    'ReplayEventKind',
    'StreamingMode',
    'ReplayError',
    'FrameLoadError',
]
