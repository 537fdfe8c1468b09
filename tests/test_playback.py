"""
Tests for the playback cursor.
"""
import pytest

from firehistory.analysis import EmptyYearIndexError, YearIndex
from firehistory.playback import CursorMoved, MatplotlibTimerScheduler, PlaybackCursor


@pytest.fixture
def years():
    return YearIndex([1984, 1990, 1995, 2000])


@pytest.fixture
def cursor(years, scheduler):
    return PlaybackCursor(years, scheduler, interval=1.0)


@pytest.fixture
def events(cursor):
    received = []
    cursor.subscribe(received.append)
    return received


def test_initial_state(cursor):
    assert cursor.position == 0
    assert cursor.year == 1984
    assert cursor.playing is False


def test_empty_index_rejected(scheduler):
    with pytest.raises(EmptyYearIndexError):
        PlaybackCursor(YearIndex(), scheduler)


def test_set_position_clamps(cursor, events):
    cursor.set_position(99)
    assert cursor.position == 3
    cursor.set_position(-5)
    assert cursor.position == 0
    assert [e.year for e in events] == [2000, 1984]


def test_listeners_see_same_event(cursor):
    """Every consumer observes the identical year from one transition."""
    seen_a, seen_b = [], []
    cursor.subscribe(seen_a.append)
    cursor.subscribe(seen_b.append)
    cursor.set_position(2)
    assert seen_a == seen_b == [CursorMoved(position=2, year=1995, revision=1)]


def test_unsubscribe(cursor):
    seen = []
    unsubscribe = cursor.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    cursor.set_position(1)
    assert seen == []


def test_step_forward_and_backward(cursor, events):
    assert cursor.step_forward() is True
    assert cursor.year == 1990
    assert cursor.step_backward() is True
    assert cursor.step_backward() is False
    assert cursor.position == 0
    assert [e.year for e in events] == [1990, 1984]


def test_step_forward_at_end_stops_playing(cursor, scheduler, events):
    cursor.set_position(3)
    cursor.play()
    assert cursor.playing
    assert cursor.step_forward() is False
    assert cursor.position == 3
    assert cursor.playing is False
    assert scheduler.active == []
    # No extra notification for the no-op step
    assert [e.year for e in events] == [2000]


def test_seek_year(cursor):
    cursor.seek_year(1995)
    assert cursor.position == 2
    with pytest.raises(ValueError):
        cursor.seek_year(1985)


def test_play_advances_once_per_interval(cursor, scheduler):
    cursor.play()
    scheduler.advance(2)
    assert cursor.position == 2
    assert scheduler.fired == 2


def test_play_twice_has_one_ticker(cursor, scheduler):
    """A second play() does not start a second ticker."""
    cursor.play()
    cursor.play()
    assert len(scheduler.active) == 1
    scheduler.advance(2)
    assert scheduler.fired == 2
    assert cursor.position == 2


def test_play_stops_at_last_year(cursor, scheduler):
    cursor.play()
    scheduler.advance(10)
    assert cursor.position == 3
    assert cursor.playing is False
    # three advances plus the tick that hit the end
    assert scheduler.fired == 4


def test_pause_cancels_tick(cursor, scheduler):
    cursor.play()
    tick = scheduler.ticks[0]
    cursor.pause()
    assert tick.cancelled
    assert cursor.playing is False
    scheduler.advance(3)
    assert cursor.position == 0
    cursor.pause()  # idempotent


def test_stale_tick_after_pause_is_ignored(cursor, scheduler):
    """A tick delivered after pause() must not move the cursor."""
    cursor.play()
    tick = scheduler.ticks[0]
    cursor.pause()
    tick.callback()
    assert cursor.position == 0


def test_play_after_pause_resumes(cursor, scheduler):
    cursor.play()
    scheduler.advance(1)
    cursor.pause()
    cursor.play()
    scheduler.advance(1)
    assert cursor.position == 2
    assert len(scheduler.active) == 1


def test_revision_increments(cursor):
    cursor.set_position(1)
    cursor.set_position(1)
    assert cursor.revision == 2


class _FakeTimer:
    def __init__(self, interval):
        self.interval = interval
        self.callbacks = []
        self.started = False

    def add_callback(self, func):
        self.callbacks.append(func)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def fire(self):
        for func in self.callbacks:
            func()


class _FakeCanvas:
    def __init__(self):
        self.timers = []

    def new_timer(self, interval):
        timer = _FakeTimer(interval)
        self.timers.append(timer)
        return timer


class _FakeFigure:
    def __init__(self):
        self.canvas = _FakeCanvas()


def test_matplotlib_timer_scheduler(years):
    figure = _FakeFigure()
    cursor = PlaybackCursor(years, MatplotlibTimerScheduler(figure), interval=0.5)
    cursor.play()
    timer = figure.canvas.timers[0]
    assert timer.interval == 500
    assert timer.started

    timer.fire()
    assert cursor.year == 1990

    cursor.pause()
    assert not timer.started
    # A tick the backend had already queued is swallowed
    timer.fire()
    assert cursor.year == 1990
