"""Visualization modules for FireHistory."""

from .style import set_firehistory_style, COLORS, type_color
from .fire_map import FireMapLayer, REGIONS, region_extent
from .bar_chart import AcreageBarChart, plot_annual_acres
from .legend import draw_size_legend, draw_type_legend, draw_legends
from .viewer import FireHistoryFigure, FireHistoryViewer, render_year_frames, save_animation

__all__ = [
    "set_firehistory_style",
    "COLORS",
    "type_color",
    "FireMapLayer",
    "REGIONS",
    "region_extent",
    "AcreageBarChart",
    "plot_annual_acres",
    "draw_size_legend",
    "draw_type_legend",
    "draw_legends",
    "FireHistoryFigure",
    "FireHistoryViewer",
    "render_year_frames",
    "save_animation",
]
