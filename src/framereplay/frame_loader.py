"""
Frame File Loader

Reads a recording for the command line player. Two layouts are accepted:

    [{"time": 0, "x": 1}, {"time": 100, "x": 2}]     # JSON array

    {"time": 0, "x": 1}                               # JSON Lines
    {"time": 100, "x": 2}

Every object needs an integer "time" (legacy "Time" is accepted) in
milliseconds; timestamps must not decrease.
"""

import json
import os
from typing import Any, List

from .errors import FrameLoadError
from .log import Log
from .types import Frame


def load_frames(path: str) -> List[Frame]:
    """
    Load frames from a JSON or JSON Lines file.

    Args:
        path: File path

    Returns:
        Frames in file order

    Raises:
        FrameLoadError: unreadable file, bad JSON, bad or decreasing time
    """
    if not os.path.isfile(path):
        raise FrameLoadError(path, "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise FrameLoadError(path, str(e)) from e

    if text.lstrip().startswith("["):
        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            raise FrameLoadError(path, f"invalid JSON: {e.msg}", e.lineno) from e
        entries = [(0, record) for record in records]
    else:
        entries = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entries.append((line_no, json.loads(line)))
            except json.JSONDecodeError as e:
                raise FrameLoadError(path, f"invalid JSON: {e.msg}", line_no) from e

    frames: List[Frame] = []
    for position, (line_no, record) in enumerate(entries):
        frame = _to_frame(path, record, line_no or position + 1)
        if frames and frame.time < frames[-1].time:
            raise FrameLoadError(
                path,
                f"time {frame.time} is before previous frame time {frames[-1].time}",
                line_no or position + 1,
            )
        frames.append(frame)

    Log.info(f"FrameLoader: {len(frames)} frames from {path}")
    return frames


def _to_frame(path: str, record: Any, line: int) -> Frame:
    if not isinstance(record, dict):
        raise FrameLoadError(path, "frame must be a JSON object", line)

    time = record.get("time", record.get("Time"))
    # bool is an int subclass
    if not isinstance(time, int) or isinstance(time, bool):
        raise FrameLoadError(path, f"frame time must be an integer (got {time!r})", line)

    try:
        return Frame.from_dict(record)
    except ValueError as e:
        raise FrameLoadError(path, str(e), line) from e
