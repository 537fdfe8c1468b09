"""
Periodic tick scheduling for playback.

A scheduler hands out cancellable tick handles. Once ``cancel()`` returns
the callback never runs again, even if the backend already queued a tick.
"""

from typing import Any, Callable, Optional, Protocol


class TickHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def call_every(self, interval: float, callback: Callable[[], Any]) -> TickHandle: ...


class _GuardedTick:
    """Wraps a callback so it is inert after cancellation."""

    def __init__(self, callback: Callable[[], Any], stop: Optional[Callable[[], None]] = None):
        self._callback = callback
        self._stop = stop
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def fire(self) -> None:
        if self._cancelled:
            return
        self._callback()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._stop is not None:
            self._stop()


class MatplotlibTimerScheduler:
    """
    Scheduler backed by the figure canvas timer.

    Ticks run on the GUI event loop, so playback stays single-threaded.
    """

    def __init__(self, figure):
        self.figure = figure

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TickHandle:
        timer = self.figure.canvas.new_timer(interval=int(interval * 1000))
        tick = _GuardedTick(callback, stop=timer.stop)
        timer.add_callback(tick.fire)
        timer.start()
        # Keep a reference so the timer is not garbage collected while running
        tick.timer = timer
        return tick
