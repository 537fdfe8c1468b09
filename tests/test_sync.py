"""
Tests for the map/chart synchronization layer.
"""
import pytest

from firehistory.io import IncidentStore
from firehistory.sync import FireMapSync, NO_DATA_MESSAGE, NOT_LOADED_MESSAGE

from conftest import make_feature


class RecordingMap:
    def __init__(self, log):
        self.log = log
        self.layer = None

    def replace(self, incidents):
        self.layer = list(incidents)
        self.log.append(("map", [i.name for i in incidents]))

    def show_empty(self, message):
        self.layer = None
        self.log.append(("map-empty", message))


class RecordingChart:
    def __init__(self, log):
        self.log = log
        self.buckets = None
        self.highlighted = None

    def draw(self, buckets):
        self.buckets = buckets
        self.log.append(("chart-draw", sorted(buckets)))

    def highlight(self, year):
        self.highlighted = year
        self.log.append(("chart", year))

    def show_empty(self, message):
        self.log.append(("chart-empty", message))


@pytest.fixture
def log():
    return []


@pytest.fixture
def sync(log, scheduler):
    return FireMapSync(RecordingMap(log), RecordingChart(log), scheduler)


def test_initial_state(sync):
    assert sync.state == "empty"
    assert sync.cursor is None
    assert len(sync.years) == 0


def test_end_to_end_scenario(sync, log, scheduler, sample_store):
    """1984, 1984, 1990 plus an unparseable date."""
    assert sync.finish_load(sync.begin_load(), sample_store)
    assert sync.state == "ready"
    assert list(sync.years) == [1984, 1987, 1990]

    # Both qualifying 1984 incidents are summed
    assert sync.buckets[1984].total_acres == pytest.approx(2000.0)
    assert sync.buckets[1984].type_acres["Wildfire"] == pytest.approx(1200.0)
    assert sync.buckets[1984].type_acres["Unknown"] == pytest.approx(800.0)

    # Chart drawn once, then position 0 rendered
    assert log[0] == ("chart-draw", [1984, 1990])
    assert log[1] == ("map", ["Alpha", "Bravo", "Featured"])
    assert log[2] == ("chart", 1984)
    assert sync.current_year == 1984

    sync.seek(1990)
    assert sync.current_year == 1990
    # Sub-acre Foxtrot is excluded; featured fire always shown
    assert log[-2] == ("map", ["Charlie", "Featured"])
    assert log[-1] == ("chart", 1990)

    sync.play()
    assert sync.step_forward() is False
    assert sync.cursor.position == 2
    assert sync.cursor.playing is False


def test_map_and_chart_never_diverge(sync, log, sample_store):
    sync.finish_load(sync.begin_load(), sample_store)
    for _ in range(5):
        sync.step_forward()
    sync.step_backward()
    sync.set_position(0)

    renders = [entry for entry in log if entry[0] in ("map", "chart")]
    map_years = []
    for kind, payload in renders:
        if kind == "chart":
            map_years.append(payload)
    # Map and chart alternate, one pair per transition
    assert [kind for kind, _ in renders] == ["map", "chart"] * len(map_years)
    assert map_years == [1984, 1987, 1990, 1987, 1984]


def test_superseded_transition_is_dropped(log, scheduler, sample_store):
    """A transition triggered mid-render wins; the stale one is not finished."""
    class ReentrantMap(RecordingMap):
        def replace(self, incidents):
            super().replace(incidents)
            if sync_ref[0].cursor.year == 1984 and len(self.log) < 4:
                sync_ref[0].step_forward()

    sync_ref = []
    sync = FireMapSync(ReentrantMap(log), RecordingChart(log), scheduler)
    sync_ref.append(sync)
    sync.finish_load(sync.begin_load(), sample_store)

    highlights = [payload for kind, payload in log if kind == "chart"]
    assert highlights == [1987]
    assert sync.current_year == 1987
    assert sync.chart.highlighted == 1987


def test_intents_dropped_before_load(sync):
    assert sync.play() is False
    assert sync.pause() is False
    assert sync.step_forward() is False
    assert sync.step_backward() is False
    assert sync.set_position(3) is False
    assert sync.seek(1990) is False

    sync.begin_load()
    assert sync.state == "loading"
    assert sync.step_forward() is False


def test_seek_unknown_year(sync, sample_store):
    sync.finish_load(sync.begin_load(), sample_store)
    assert sync.seek(1850) is False
    assert sync.current_year == 1984


def test_empty_domain_shows_no_data(sync, log):
    store = IncidentStore.from_features([make_feature("unknown"), make_feature(None)])
    assert sync.finish_load(sync.begin_load(), store)
    assert sync.state == "no-data"
    assert sync.cursor is None
    assert ("map-empty", NO_DATA_MESSAGE) in log
    assert ("chart-empty", NO_DATA_MESSAGE) in log
    assert sync.step_forward() is False


def test_superseded_load_is_ignored(sync, sample_store):
    first = sync.begin_load()
    second = sync.begin_load()
    newer = IncidentStore.from_features([make_feature("2020-01-01", name="Newer")])

    assert sync.finish_load(second, newer)
    assert sync.finish_load(first, sample_store) is False
    assert list(sync.years) == [2020]
    assert sync.fail_load(first, RuntimeError("late")) is False


def test_failed_load_keeps_last_good_state(sync, log, sample_store, tmp_path):
    sync.finish_load(sync.begin_load(), sample_store)
    sync.step_forward()
    n_entries = len(log)

    with pytest.warns(UserWarning, match="Failed to load"):
        assert sync.load(str(tmp_path / "missing.geojson")) is False

    assert sync.state == "ready"
    assert sync.current_year == 1987
    assert len(log) == n_entries
    assert sync.step_forward() is True


def test_failed_first_load_shows_placeholder(sync, log, tmp_path):
    with pytest.warns(UserWarning):
        assert sync.load(str(tmp_path / "missing.geojson")) is False
    assert sync.state == "empty"
    assert ("map-empty", NOT_LOADED_MESSAGE) in log


def test_reload_replaces_cursor(sync, scheduler, sample_store):
    sync.finish_load(sync.begin_load(), sample_store)
    sync.play()
    old_cursor = sync.cursor

    sync.finish_load(sync.begin_load(), IncidentStore.from_features([make_feature("2020-01-01")]))
    assert sync.cursor is not old_cursor
    assert old_cursor.playing is False
    assert len(scheduler.active) == 0
    # Old cursor transitions no longer reach the display
    old_cursor.set_position(2)
    assert sync.current_year == 2020


def test_load_from_file(sync, sample_geojson):
    assert sync.load(sample_geojson)
    assert sync.state == "ready"
    assert sync.current_year == 1984


def test_render_listener(sync, sample_store):
    rendered = []
    sync.on_render(lambda year, incidents: rendered.append((year, len(incidents))))
    sync.finish_load(sync.begin_load(), sample_store)
    sync.step_forward()
    assert rendered == [(1984, 3), (1987, 1)]
