"""
Replay Exceptions

The engine degrades anomalies to no-ops; these are raised only at the edges
(frame files, CLI).
"""


class ReplayError(Exception):
    """Base exception for framereplay."""
    pass


class FrameLoadError(ReplayError):
    """Raised when a frame file cannot be read or parsed."""

    def __init__(self, path: str, reason: str, line: int = 0):
        self.path = path
        self.reason = reason
        self.line = line
        message = f"Cannot load frames from '{path}': {reason}"
        if line:
            message += f" (line {line})"
        super().__init__(message)
