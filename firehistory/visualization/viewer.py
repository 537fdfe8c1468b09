"""
Interactive fire history viewer and frame export.

Lays out the map, legends and chart on one figure and drives them through
FireMapSync. The interactive viewer adds a year slider and step/play/pause
buttons; the exporters step the cursor and save one frame per year.
"""

from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.widgets import Button, Slider

from ..analysis.aggregate import year_caption
from ..analysis.years import year_label
from ..config import FireHistoryConfig
from ..io.load_incidents import Incident, IncidentStore
from ..playback.scheduler import MatplotlibTimerScheduler
from ..sync import FireMapSync
from .bar_chart import AcreageBarChart
from .fire_map import REGIONS, FireMapLayer
from .legend import draw_legends
from .style import set_firehistory_style


class FireHistoryFigure:
    """Map, legend and chart panels on a single figure."""

    def __init__(self, region: str = "US", controls: bool = False):
        self.fig = plt.figure(figsize=(12, 8))
        # Leave room at the bottom for the slider and buttons
        bottom = 0.16 if controls else 0.06
        gs = self.fig.add_gridspec(
            2, 2, height_ratios=[3, 1], width_ratios=[4, 1],
            left=0.07, right=0.97, top=0.94, bottom=bottom, hspace=0.3, wspace=0.05,
        )
        self.map_ax = self.fig.add_subplot(gs[0, 0])
        self.legend_ax = self.fig.add_subplot(gs[0, 1])
        self.chart_ax = self.fig.add_subplot(gs[1, :])

        self.map_layer = FireMapLayer(self.map_ax, region=region)
        self.chart = AcreageBarChart(self.chart_ax)
        self.legend_ax.set_axis_off()
        self._legend_drawn = False
        self._sync: Optional[FireMapSync] = None

    def attach(self, sync: FireMapSync) -> None:
        """Update titles and legends after every synchronized render."""
        self._sync = sync
        sync.on_render(self._on_render)

    def _on_render(self, year: int, incidents: List[Incident]) -> None:
        if not self._legend_drawn:
            draw_legends(self.legend_ax, list(self._sync.years))
            self._legend_drawn = True
        self.map_ax.set_title(year_caption(self._sync.buckets, year))

    def save(self, output_path, dpi: Optional[int] = None) -> None:
        self.fig.savefig(output_path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)


def _build_session(store: IncidentStore, config: FireHistoryConfig, controls: bool = False):
    figure = FireHistoryFigure(region=config.region, controls=controls)
    sync = FireMapSync(
        figure.map_layer,
        figure.chart,
        MatplotlibTimerScheduler(figure.fig),
        rules=config.filter_rules,
        interval=config.play_interval,
    )
    figure.attach(sync)
    sync.finish_load(sync.begin_load(), store)
    return figure, sync


class FireHistoryViewer:
    """
    Interactive viewer with a year slider and playback buttons.

    Parameters
    ----------
    store : IncidentStore
        Incidents for the session
    config : FireHistoryConfig
        Viewer settings (region, interval, rules, autoplay)
    """

    def __init__(self, store: IncidentStore, config: FireHistoryConfig):
        set_firehistory_style()
        self.config = config
        self.figure, self.sync = _build_session(store, config, controls=True)
        self.slider: Optional[Slider] = None
        self.buttons = {}
        self.region_buttons = {}

        if self.sync.state == "ready":
            self._add_controls()
            self.sync.on_render(self._on_render)

    def _add_controls(self) -> None:
        fig = self.figure.fig
        n_years = len(self.sync.years)

        # A single year leaves nothing to scrub
        if n_years > 1:
            slider_ax = fig.add_axes([0.25, 0.06, 0.55, 0.03])
            self.slider = Slider(
                slider_ax, "Year", 0, n_years - 1,
                valinit=0, valstep=1, color='red',
            )
            self.slider.valtext.set_text(year_label(self.sync.years[0]))
            self.slider.on_changed(lambda val: self.sync.set_position(int(val)))

        layout = [
            ('reverse', "<", 0.07, lambda event: self.sync.step_backward()),
            ('play', "Play", 0.12, lambda event: self.sync.play()),
            ('pause', "Pause", 0.17, lambda event: self.sync.pause()),
            ('forward', ">", 0.84, lambda event: self.sync.step_forward()),
        ]
        for key, label, left, handler in layout:
            button = Button(fig.add_axes([left, 0.05, 0.045, 0.05]), label)
            button.on_clicked(handler)
            self.buttons[key] = button

        for i, region in enumerate(REGIONS):
            button = Button(fig.add_axes([0.25 + i * 0.07, 0.005, 0.06, 0.035]), region)
            button.on_clicked(lambda event, region=region: self.zoom_to(region))
            self.region_buttons[region] = button

    def zoom_to(self, region: str) -> None:
        """Move the map to a region preset."""
        self.figure.map_layer.set_region(region)
        self.figure.fig.canvas.draw_idle()

    def _on_render(self, year: int, incidents: List[Incident]) -> None:
        if self.slider is None:
            return
        # Mirror the cursor on the slider without re-triggering it
        self.slider.eventson = False
        self.slider.set_val(self.sync.cursor.position)
        self.slider.eventson = True
        self.slider.valtext.set_text(year_label(year))

    def show(self) -> None:
        if self.config.autoplay:
            self.sync.play()
        plt.show()


def render_year_frames(
    store: IncidentStore,
    config: FireHistoryConfig,
    output_dir: Path,
    years: Optional[Sequence[int]] = None,
) -> List[Path]:
    """
    Save one synchronized map + chart frame per year.

    Parameters
    ----------
    store : IncidentStore
        Incidents for the session
    config : FireHistoryConfig
        Region, rules, figure format and dpi
    output_dir : Path
        Frame directory
    years : sequence of int, optional
        Subset of years to render (default: every year in the index)

    Returns
    -------
    list of Path
        Written frame paths, in cursor order
    """
    set_firehistory_style()
    figure, sync = _build_session(store, config)
    paths = []
    try:
        if sync.state != "ready":
            path = Path(output_dir) / f"fire_no_data.{config.figure_format}"
            figure.save(path, dpi=config.figure_dpi)
            return [path]

        wanted = set(sync.years) if years is None else set(years)
        for position, year in enumerate(sync.years):
            if year not in wanted:
                continue
            sync.set_position(position)
            path = Path(output_dir) / f"fire_{year_label(year)}.{config.figure_format}"
            figure.save(path, dpi=config.figure_dpi)
            paths.append(path)
    finally:
        figure.close()
    return paths


def save_animation(
    store: IncidentStore,
    config: FireHistoryConfig,
    output_path: Path,
) -> Optional[Path]:
    """
    Save the full playback as an animated GIF.

    Returns None when the dataset has no valid year.
    """
    set_firehistory_style()
    figure, sync = _build_session(store, config)
    try:
        if sync.state != "ready":
            return None
        anim = FuncAnimation(
            figure.fig,
            lambda frame: sync.set_position(frame),
            frames=len(sync.years),
            interval=config.play_interval_ms,
            blit=False,
            repeat=False,
        )
        fps = max(1000.0 / config.play_interval_ms, 0.1)
        anim.save(str(output_path), writer=PillowWriter(fps=fps), dpi=config.figure_dpi)
    finally:
        figure.close()
    return Path(output_path)
