"""
Shared fixtures for FireHistory tests.
"""
import json

import matplotlib
matplotlib.use("Agg")

import pytest

from firehistory.io import IncidentStore


class ManualTick:
    def __init__(self, scheduler, interval, callback):
        self.scheduler = scheduler
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose ticks only fire when the test advances time."""

    def __init__(self):
        self.ticks = []
        self.fired = 0

    @property
    def active(self):
        return [t for t in self.ticks if not t.cancelled]

    def call_every(self, interval, callback):
        tick = ManualTick(self, interval, callback)
        self.ticks.append(tick)
        return tick

    def advance(self, n_intervals=1):
        """Fire every live tick once per elapsed interval."""
        for _ in range(n_intervals):
            for tick in list(self.active):
                self.fired += 1
                tick.callback()


def make_feature(date, incident_type="Wildfire", acres=100.0, featured=None,
                 lon=-120.0, lat=40.0, name=None):
    properties = {"Ig_Date": date, "Incid_Type": incident_type, "BurnBndAc": acres}
    if featured is not None:
        properties["isFeatureFire"] = featured
    if name is not None:
        properties["FireName"] = name
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sample_features():
    """Incidents in 1984, 1984 and 1990, plus one unparseable date."""
    return [
        make_feature("1984-06-01", "Wildfire", 1200.0, name="Alpha"),
        make_feature("1984-08-15", "Unknown", 800.0, name="Bravo"),
        make_feature("1990-07-04", "Wildfire", 60000.0, name="Charlie"),
        make_feature("not-a-date", "Wildfire", 500.0, name="Delta"),
        make_feature("1984-09-09", "Prescribed Fire", 300.0, name="Echo"),
        make_feature("1990-05-05", "Wildfire", 0.5, name="Foxtrot"),
        make_feature("1987-03-03", "Prescribed Fire", 0, featured=1, name="Featured"),
    ]


@pytest.fixture
def sample_store(sample_features):
    return IncidentStore.from_features(sample_features)


@pytest.fixture
def sample_geojson(tmp_path, sample_features):
    """Write the sample incidents as a GeoJSON file."""
    filepath = tmp_path / "fires.geojson"
    filepath.write_text(json.dumps({"type": "FeatureCollection", "features": sample_features}))
    return str(filepath)
