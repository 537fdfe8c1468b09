"""
Annual acreage stacked bar chart.
"""

from typing import Dict, List, Mapping, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import EngFormatter

from ..analysis.aggregate import AGGREGATED_TYPES, YearBucket, year_summary_frame
from .style import COLORS, SERIES_COLORS

_BASE_ALPHA = 0.6


class AcreageBarChart:
    """
    Stacked bars of burned acres per year.

    Bars are indexed by year, so years missing from the data simply have
    no bars; nothing assumes contiguous years.
    """

    def __init__(self, ax: Optional[plt.Axes] = None, types: Sequence[str] = AGGREGATED_TYPES):
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 3))
        self.ax = ax
        self.types = tuple(types)
        self.highlighted_year: Optional[int] = None
        self._bars: Dict[int, List] = {}

    @property
    def years(self) -> List[int]:
        return sorted(self._bars)

    def draw(self, buckets: Mapping[int, YearBucket]) -> None:
        """Draw all bars once from the year buckets."""
        self.ax.clear()
        self._bars = {}
        self.highlighted_year = None

        summary = year_summary_frame(buckets, self.types)
        bottom = np.zeros(len(summary))
        for incident_type in self.types:
            values = summary[incident_type].to_numpy(dtype=float)
            container = self.ax.bar(
                summary['year'],
                values,
                bottom=bottom,
                width=0.8,
                color=SERIES_COLORS.get(incident_type, COLORS['unknown']),
                alpha=_BASE_ALPHA,
                label=incident_type,
            )
            for year, patch in zip(summary['year'], container.patches):
                self._bars.setdefault(int(year), []).append(patch)
            bottom = bottom + values

        self.ax.set_xlabel("Years")
        self.ax.set_ylabel("Acres Burned")
        self.ax.yaxis.set_major_formatter(EngFormatter(sep=""))
        if len(summary):
            self.ax.legend(loc='upper left', frameon=False)
        self.ax.figure.canvas.draw_idle()

    def highlight(self, year: int) -> None:
        """Highlight the bars of ``year``; un-highlight everything else."""
        for patches in self._bars.values():
            for patch in patches:
                patch.set_alpha(_BASE_ALPHA)
                patch.set_edgecolor('none')
                patch.set_linewidth(0)

        patches = self._bars.get(year)
        self.highlighted_year = year if patches else None
        for patch in patches or []:
            patch.set_alpha(1.0)
            patch.set_edgecolor(COLORS['highlight'])
            patch.set_linewidth(2)

        self.ax.figure.canvas.draw_idle()

    def is_highlighted(self, year: int) -> bool:
        return self.highlighted_year == year

    def show_empty(self, message: str) -> None:
        self.ax.clear()
        self._bars = {}
        self.highlighted_year = None
        self.ax.text(0.5, 0.5, message, transform=self.ax.transAxes,
                     ha='center', va='center', color=COLORS['text'])
        self.ax.figure.canvas.draw_idle()


def plot_annual_acres(
    buckets: Mapping[int, YearBucket],
    title: str = "Acres Burned by Year",
    output_path: Optional[str] = None,
):
    """
    Plot the stacked annual acreage chart as a standalone figure.
    """
    fig, ax = plt.subplots(figsize=(10, 4))
    chart = AcreageBarChart(ax)
    chart.draw(buckets)
    ax.set_title(title)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, bbox_inches='tight')
        plt.close()
    else:
        return fig, ax
