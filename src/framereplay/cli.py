"""
Replay CLI - play a recorded frame file in real time.

Every replay event is logged; the process exits when the replay finishes
(or, with --progressive, when it reaches the live edge and starts buffering).

Usage:
    python -m framereplay recording.jsonl --speed 4
    framereplay recording.json --progressive --log-level DEBUG
"""

import argparse
import sys
from typing import List, Optional

from .constants import DEFAULT_TIME_TICK_RATE_MS, MIN_SPEED, SPEED_STEPS
from .errors import FrameLoadError
from .frame_loader import load_frames
from .log import Log
from .settings import ReplaySettings
from .types import ReplayEventKind, StreamingMode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framereplay",
        description="Replay timestamped frames with their original timing."
    )
    parser.add_argument("frames", help="Path to a JSON array or JSON Lines frame file")
    parser.add_argument("--speed", type=int, default=MIN_SPEED, choices=SPEED_STEPS,
                        help="Speed multiplier")
    parser.add_argument("--progressive", action="store_true",
                        help="Treat the file as a growing recording (buffer at the end)")
    parser.add_argument("--tick-rate", type=int, default=DEFAULT_TIME_TICK_RATE_MS,
                        help="Virtual clock step in milliseconds")
    parser.add_argument("--log-level", default="INFO",
                        help="DEBUG, INFO, WARNING or ERROR")
    return parser


def build_settings(args: argparse.Namespace) -> ReplaySettings:
    mode = StreamingMode.AVAILABLE if args.progressive else StreamingMode.UNAVAILABLE
    return ReplaySettings(time_tick_rate_ms=args.tick_rate, streaming_mode=mode)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    Log.set_level(args.log_level)

    try:
        frames = load_frames(args.frames)
        settings = build_settings(args)
    except (FrameLoadError, ValueError) as e:
        Log.error(str(e))
        return 1

    # Qt is only needed once there is something to play
    from PyQt6.QtCore import QCoreApplication, QTimer
    from .controller import ReplayController

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    controller = ReplayController(frames, settings=settings)

    while controller.engine.get_speed() < args.speed:
        controller.faster()

    end_events = {ReplayEventKind.STOP}
    if args.progressive:
        end_events.add(ReplayEventKind.BUFFERING_START)

    def on_event(kind, frame=None, virtual_time=None):
        if kind == ReplayEventKind.TICK:
            Log.info(f"frame t={frame.time} {frame.payload if frame.payload is not None else ''}")
        elif kind == ReplayEventKind.TIME_TICK:
            Log.info(f"clock {virtual_time / 1000.0:.1f}s")
        else:
            Log.info(kind.value)
        if kind in end_events:
            app.quit()

    controller.add_listener(on_event)
    # Start inside the event loop so an immediate finish can still quit it
    QTimer.singleShot(0, controller.play)
    app.exec()
    controller.cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(main())
