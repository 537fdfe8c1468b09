"""
Fire point map layer.

Draws the incidents of the selected year as proportional markers. The
layer owns its artists and replaces them wholesale on every update.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from ..analysis.size_class import classify_acres, marker_size
from ..io.load_incidents import Incident
from .style import COLORS, type_color

# Region presets as (min_lon, max_lon, min_lat, max_lat)
REGIONS: Dict[str, Tuple[float, float, float, float]] = {
    'US': (-170.0, -60.0, 15.0, 72.0),
    'W': (-125.0, -102.0, 31.0, 49.5),
    'C': (-105.0, -88.0, 25.5, 49.5),
    'E': (-92.0, -66.5, 24.5, 47.5),
    'AK': (-170.0, -129.0, 51.0, 71.5),
    'HI': (-160.5, -154.5, 18.5, 22.5),
}


def region_extent(region: str) -> Tuple[float, float, float, float]:
    """Look up a region preset (case-insensitive)."""
    try:
        return REGIONS[region.upper()]
    except KeyError:
        raise ValueError(f"Unknown region '{region}'. Choose from {sorted(REGIONS)}")


class FireMapLayer:
    """
    Incident layer on a matplotlib axes.

    ``replace()`` removes every artist of the previous layer before the new
    ones are added, so the axes never shows two years at once.
    """

    def __init__(self, ax: Optional[plt.Axes] = None, region: str = "US"):
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 6))
        self.ax = ax
        self._artists: List = []
        self.set_region(region)
        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")

    @property
    def artists(self) -> List:
        return list(self._artists)

    def set_region(self, region: str) -> None:
        min_lon, max_lon, min_lat, max_lat = region_extent(region)
        self.region = region.upper()
        self.ax.set_xlim(min_lon, max_lon)
        self.ax.set_ylim(min_lat, max_lat)

    def clear(self) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def replace(self, incidents: Sequence[Incident]) -> None:
        """Swap the displayed layer for ``incidents``."""
        self.clear()

        regular = [i for i in incidents if i.has_location and not i.is_featured]
        featured = [i for i in incidents if i.has_location and i.is_featured]

        if regular:
            self._artists.append(self.ax.scatter(
                [i.longitude for i in regular],
                [i.latitude for i in regular],
                s=[marker_size(classify_acres(i.burned_acres)) ** 2 for i in regular],
                c=[type_color(i.incident_type) for i in regular],
                alpha=0.7,
                edgecolors='none',
                zorder=3,
            ))
        if featured:
            self._artists.append(self.ax.scatter(
                [i.longitude for i in featured],
                [i.latitude for i in featured],
                s=[marker_size(classify_acres(i.burned_acres)) ** 2 for i in featured],
                c=COLORS['featured'],
                marker='*',
                edgecolors='black',
                linewidths=0.5,
                zorder=4,
            ))

        self.ax.figure.canvas.draw_idle()

    def show_empty(self, message: str) -> None:
        """Clear the layer and show a placeholder message."""
        self.clear()
        self._artists.append(self.ax.text(
            0.5, 0.5, message,
            transform=self.ax.transAxes,
            ha='center', va='center',
            color=COLORS['text'],
        ))
        self.ax.figure.canvas.draw_idle()
