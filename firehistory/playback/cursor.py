"""
Playback cursor module.

The cursor is the single source of truth for the displayed year. It owns
an integer position into the YearIndex; the year itself is always derived.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..analysis.years import EmptyYearIndexError, YearIndex
from .scheduler import Scheduler, TickHandle


@dataclass(frozen=True)
class CursorMoved:
    """One cursor transition, delivered identically to every listener."""
    position: int
    year: int
    revision: int


Listener = Callable[[CursorMoved], None]


class PlaybackCursor:
    """
    Year cursor with manual stepping and timed auto-advance.

    Parameters
    ----------
    years : YearIndex
        Cursor domain, must not be empty
    scheduler : Scheduler
        Source of periodic ticks for ``play()``
    interval : float
        Seconds between ticks

    Raises
    ------
    EmptyYearIndexError
        If ``years`` is empty
    """

    def __init__(self, years: YearIndex, scheduler: Scheduler, interval: float = 1.0):
        if len(years) == 0:
            raise EmptyYearIndexError("Cannot build a cursor over an empty year index")
        self._years = years
        self._scheduler = scheduler
        self._interval = interval
        self._position = 0
        self._revision = 0
        self._tick: Optional[TickHandle] = None
        self._listeners: List[Listener] = []

    @property
    def years(self) -> YearIndex:
        return self._years

    @property
    def position(self) -> int:
        return self._position

    @property
    def year(self) -> int:
        return self._years[self._position]

    @property
    def playing(self) -> bool:
        return self._tick is not None

    @property
    def revision(self) -> int:
        """Incremented on every transition."""
        return self._revision

    @property
    def last_position(self) -> int:
        return len(self._years) - 1

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a transition listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_position(self, position: int) -> None:
        """Move to ``position`` (clamped) and notify every listener."""
        position = max(0, min(int(position), self.last_position))
        self._position = position
        self._revision += 1
        event = CursorMoved(position=position, year=self.year, revision=self._revision)
        for listener in list(self._listeners):
            listener(event)

    def seek_year(self, year: int) -> None:
        """Move to the position of ``year``; raises ValueError if absent."""
        self.set_position(self._years.index_of(year))

    def step_forward(self) -> bool:
        """
        Advance one year.

        At the last year the position is left alone and playback stops.
        Returns True if the cursor moved.
        """
        if self._position >= self.last_position:
            self.pause()
            return False
        self.set_position(self._position + 1)
        return True

    def step_backward(self) -> bool:
        """Go back one year (no wraparound). Returns True if the cursor moved."""
        if self._position <= 0:
            return False
        self.set_position(self._position - 1)
        return True

    def play(self) -> None:
        """Start auto-advance. No-op if already playing."""
        if self._tick is not None:
            return
        self._tick = self._scheduler.call_every(self._interval, self._on_tick)

    def pause(self) -> None:
        """Stop auto-advance. Idempotent."""
        tick, self._tick = self._tick, None
        if tick is not None:
            tick.cancel()

    def _on_tick(self) -> None:
        if self._tick is None:
            return
        self.step_forward()
