"""
Map legends.

Both legends are generated from the same tables the map uses, so legend
and markers cannot drift apart.
"""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from ..analysis.size_class import legend_entries
from .style import COLORS


def draw_size_legend(ax: plt.Axes, title: str = "Acres Burned:"):
    """Proportional legend, one marker per size class."""
    handles = [
        Line2D([], [], linestyle='none', marker='o', markersize=size,
               markerfacecolor='none', markeredgecolor=COLORS['text'], label=label)
        for label, size in legend_entries()
    ]
    return ax.legend(handles=handles, title=title, loc='upper left',
                     frameon=False, labelspacing=1.5, borderpad=1.0)


def draw_type_legend(ax: plt.Axes, years: Optional[Sequence[int]] = None,
                     title: str = "Types of Fire in This Map:"):
    """Legend for the wildfire and featured fire markers."""
    label = "Wildfires"
    if years:
        label = f"Wildfires ({min(years)}-{max(years)})"
    handles = [
        Line2D([], [], linestyle='none', marker='o', markersize=10,
               markerfacecolor=COLORS['wildfire'], markeredgecolor='none', label=label),
        Line2D([], [], linestyle='none', marker='*', markersize=14,
               markerfacecolor=COLORS['featured'], markeredgecolor='black', label="Featured Fires"),
    ]
    return ax.legend(handles=handles, title=title, loc='lower left', frameon=False)


def draw_legends(ax: plt.Axes, years: Optional[Sequence[int]] = None) -> None:
    """Draw both legends on a blank axes."""
    ax.set_axis_off()
    size_legend = draw_size_legend(ax)
    # A second ax.legend() call replaces the first unless it is re-added
    ax.add_artist(size_legend)
    draw_type_legend(ax, years)
