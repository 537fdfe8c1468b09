"""
Map/chart synchronization layer.

Wires the playback cursor to the two display consumers: every cursor
transition filters the incidents for the cursor year, replaces the map
layer, and highlights the same year on the chart.
"""

import warnings
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from .analysis.aggregate import YearBucket, aggregate_by_year
from .analysis.filters import DEFAULT_RULES, FilterRules, filter_fires_for_year
from .analysis.years import EmptyYearIndexError, YearIndex
from .io.load_incidents import DEFAULT_FIELDS, Incident, IncidentFields, IncidentStore, load_incidents
from .playback.cursor import CursorMoved, PlaybackCursor
from .playback.scheduler import Scheduler

NO_DATA_MESSAGE = "No fire data available"
NOT_LOADED_MESSAGE = "Fire data could not be loaded"


class MapLayer(Protocol):
    def replace(self, incidents: Sequence[Incident]) -> None: ...

    def show_empty(self, message: str) -> None: ...


class ChartHighlighter(Protocol):
    def draw(self, buckets: Dict[int, YearBucket]) -> None: ...

    def highlight(self, year: int) -> None: ...

    def show_empty(self, message: str) -> None: ...


RenderListener = Callable[[int, List[Incident]], None]


class FireMapSync:
    """
    Owns the session state behind the map, the chart and the cursor.

    States: ``empty`` (nothing loaded yet), ``loading``, ``ready`` (a
    cursor exists) and ``no-data`` (the last load produced no valid year).
    """

    def __init__(
        self,
        map_layer: MapLayer,
        chart: ChartHighlighter,
        scheduler: Scheduler,
        rules: FilterRules = DEFAULT_RULES,
        interval: float = 1.0,
    ):
        self.map_layer = map_layer
        self.chart = chart
        self.scheduler = scheduler
        self.rules = rules
        self.interval = interval

        self.state = "empty"
        self._settled_state = "empty"
        self._load_token = 0
        self._store: Optional[IncidentStore] = None
        self._buckets: Dict[int, YearBucket] = {}
        self._cursor: Optional[PlaybackCursor] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._current_year: Optional[int] = None
        self._current_incidents: List[Incident] = []
        self._render_listeners: List[RenderListener] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def store(self) -> Optional[IncidentStore]:
        return self._store

    @property
    def buckets(self) -> Dict[int, YearBucket]:
        return self._buckets

    @property
    def cursor(self) -> Optional[PlaybackCursor]:
        return self._cursor

    @property
    def years(self) -> YearIndex:
        return self._cursor.years if self._cursor is not None else YearIndex()

    @property
    def current_year(self) -> Optional[int]:
        return self._current_year

    @property
    def current_incidents(self) -> List[Incident]:
        return list(self._current_incidents)

    def on_render(self, listener: RenderListener) -> None:
        """Call ``listener(year, incidents)`` after each completed render."""
        self._render_listeners.append(listener)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def begin_load(self) -> int:
        """Start a load; returns the token that must be used to finish it."""
        self._load_token += 1
        self.state = "loading"
        return self._load_token

    def finish_load(self, token: int, store: IncidentStore) -> bool:
        """
        Install a loaded dataset.

        Returns False if ``token`` was superseded by a newer load.
        """
        if token != self._load_token:
            return False

        buckets = aggregate_by_year(store)
        years = YearIndex.from_incidents(store)
        self._teardown_cursor()
        self._store = store
        self._buckets = buckets

        try:
            cursor = PlaybackCursor(years, self.scheduler, interval=self.interval)
        except EmptyYearIndexError:
            self._settle("no-data")
            self.map_layer.show_empty(NO_DATA_MESSAGE)
            self.chart.show_empty(NO_DATA_MESSAGE)
            return True

        self.chart.draw(buckets)
        self._cursor = cursor
        self._unsubscribe = cursor.subscribe(self._on_cursor_moved)
        self._settle("ready")
        cursor.set_position(0)
        return True

    def fail_load(self, token: int, error: BaseException) -> bool:
        """
        Report a failed load, keeping the last good display.

        Returns False if ``token`` was superseded by a newer load.
        """
        if token != self._load_token:
            return False
        warnings.warn(f"Failed to load fire data: {error}")
        self.state = self._settled_state
        if self._settled_state == "empty":
            self.map_layer.show_empty(NOT_LOADED_MESSAGE)
            self.chart.show_empty(NOT_LOADED_MESSAGE)
        return True

    def load(self, filepath: str, fields: IncidentFields = DEFAULT_FIELDS) -> bool:
        """Load ``filepath`` and install it. Returns True on success."""
        token = self.begin_load()
        try:
            store = load_incidents(filepath, fields)
        except (OSError, ValueError) as e:
            self.fail_load(token, e)
            return False
        return self.finish_load(token, store)

    def _settle(self, state: str) -> None:
        self.state = state
        self._settled_state = state

    def _teardown_cursor(self) -> None:
        if self._cursor is not None:
            self._cursor.pause()
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._cursor = None
        self._unsubscribe = None
        self._current_year = None
        self._current_incidents = []

    # ------------------------------------------------------------------
    # Cursor -> map + chart
    # ------------------------------------------------------------------
    def _is_stale(self, event: CursorMoved) -> bool:
        return self._cursor is None or event.revision != self._cursor.revision

    def _on_cursor_moved(self, event: CursorMoved) -> None:
        if self._is_stale(event):
            return

        # Both consumers get the subset/year computed once, up front
        year = event.year
        incidents = filter_fires_for_year(self._store, year, self.rules)

        self.map_layer.replace(incidents)
        if self._is_stale(event):
            # A newer transition already rendered both consumers
            return
        self.chart.highlight(year)

        self._current_year = year
        self._current_incidents = incidents
        for listener in list(self._render_listeners):
            listener(year, incidents)

    # ------------------------------------------------------------------
    # UI intents; dropped while no cursor exists
    # ------------------------------------------------------------------
    def play(self) -> bool:
        if self._cursor is None:
            return False
        self._cursor.play()
        return True

    def pause(self) -> bool:
        if self._cursor is None:
            return False
        self._cursor.pause()
        return True

    def step_forward(self) -> bool:
        if self._cursor is None:
            return False
        return self._cursor.step_forward()

    def step_backward(self) -> bool:
        if self._cursor is None:
            return False
        return self._cursor.step_backward()

    def set_position(self, position: int) -> bool:
        if self._cursor is None:
            return False
        self._cursor.set_position(position)
        return True

    def seek(self, year: int) -> bool:
        if self._cursor is None or year not in self._cursor.years:
            return False
        self._cursor.seek_year(year)
        return True
