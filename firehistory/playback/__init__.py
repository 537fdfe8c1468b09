"""Year playback modules for FireHistory."""

from .cursor import PlaybackCursor, CursorMoved
from .scheduler import Scheduler, TickHandle, MatplotlibTimerScheduler

__all__ = [
    "PlaybackCursor",
    "CursorMoved",
    "Scheduler",
    "TickHandle",
    "MatplotlibTimerScheduler",
]
