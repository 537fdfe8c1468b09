"""
Command-line interface for FireHistory.
"""

import click
import pandas as pd

from .config import load_config, FireHistoryConfig
from .io import load_incidents, to_geodataframe
from .analysis import (
    YearIndex, aggregate_by_year, year_summary_frame, filter_fires_for_year, year_label
)
from .visualization import (
    set_firehistory_style, plot_annual_acres, render_year_frames, save_animation,
    FireHistoryViewer, REGIONS
)


def _common_options(func):
    options = [
        click.option('--config', type=click.Path(exists=True), help='Path to config YAML'),
        click.option('--output-dir', default=None, help='Output directory'),
        click.option('--region', type=click.Choice(sorted(REGIONS), case_sensitive=False),
                     default=None, help='Map region preset'),
        click.option('--min-acres', type=float, default=None,
                     help='Minimum acreage for non-featured fires on the map.'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _setup(incidents, config, output_dir, region, min_acres, **extra) -> FireHistoryConfig:
    cfg = load_config(
        config,
        incidents_file=incidents,
        output_dir=output_dir,
        region=region.upper() if region else None,
        min_display_acres=min_acres,
        **extra
    )
    cfg.create_output_dirs()
    click.echo(f"📂 Output directory: {cfg.output_run_dir}")
    return cfg


def _load(cfg: FireHistoryConfig):
    click.echo("📥 Loading incidents...")
    try:
        store = load_incidents(cfg.incidents_file, cfg.incident_fields)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    years = YearIndex.from_incidents(store)
    click.echo(f"   Incidents: {len(store)} ({len(store.featured())} featured)")
    if len(years) == 0:
        raise click.ClickException("No incidents with a valid ignition date - nothing to display.")
    click.echo(f"   Years: {years.first} to {years.last} ({len(years)} distinct)")
    return store, years


@click.group()
@click.version_option()
def cli():
    """FireHistory: Historical Wildfire Map."""
    pass


@cli.command()
@click.argument('incidents', type=click.Path(exists=True))
@_common_options
def summary(incidents, config, output_dir, region, min_acres):
    """Write the annual acreage table and chart."""
    cfg = _setup(incidents, config, output_dir, region, min_acres)
    store, years = _load(cfg)

    click.echo("📊 Aggregating acreage by year...")
    buckets = aggregate_by_year(store)
    table = year_summary_frame(buckets)
    table.to_csv(cfg.tables_dir / "annual_acres.csv", index=False)
    click.echo(f"      -> Saved 'annual_acres.csv' ({len(table)} years)")

    # Map counts per year, using the same inclusion rules as the viewer
    counts = pd.DataFrame({
        'year': list(years),
        'mapped_incidents': [len(filter_fires_for_year(store, y, cfg.filter_rules)) for y in years],
    })
    counts.to_csv(cfg.tables_dir / "mapped_incidents.csv", index=False)

    set_firehistory_style()
    plot_annual_acres(buckets, output_path=cfg.output_run_dir / f"annual_acres.{cfg.figure_format}")
    cfg.save()
    click.echo("✅ Summary complete!")


@cli.command()
@click.argument('incidents', type=click.Path(exists=True))
@_common_options
@click.option('--year', 'only_year', type=int, default=None, help='Render a single year.')
@click.option('--gif', is_flag=True, help='Also save an animated GIF of the playback.')
@click.option('--interval-ms', type=int, default=None, help='Frame interval for the GIF.')
def render(incidents, config, output_dir, region, min_acres, only_year, gif, interval_ms):
    """Render one synchronized map + chart frame per year."""
    cfg = _setup(incidents, config, output_dir, region, min_acres, play_interval_ms=interval_ms)
    store, years = _load(cfg)

    if only_year is not None and only_year not in years:
        raise click.ClickException(f"Year {only_year} is not in the data ({years.first}-{years.last}).")

    click.echo("🎨 Rendering frames...")
    paths = render_year_frames(
        store, cfg, cfg.frames_dir,
        years=[only_year] if only_year is not None else None,
    )
    click.echo(f"      -> Saved {len(paths)} frame(s) to {cfg.frames_dir}")

    if gif:
        click.echo("🎞️  Saving animation...")
        gif_path = save_animation(store, cfg, cfg.output_run_dir / "fire_history.gif")
        click.echo(f"      -> Saved '{gif_path.name}'")

    cfg.save()
    click.echo("✅ Rendering complete!")


@cli.command()
@click.argument('incidents', type=click.Path(exists=True))
@_common_options
def export(incidents, config, output_dir, region, min_acres):
    """Export the map subset of each year as GeoJSON."""
    cfg = _setup(incidents, config, output_dir, region, min_acres)
    store, years = _load(cfg)

    click.echo("📤 Exporting yearly map layers...")
    n_written = 0
    for year in years:
        subset = filter_fires_for_year(store, year, cfg.filter_rules)
        if not subset:
            # Empty layers cannot be written as GeoJSON
            continue
        gdf = to_geodataframe(subset)
        gdf.to_file(cfg.data_dir / f"fires_{year_label(year)}.geojson", driver="GeoJSON")
        n_written += 1
    click.echo(f"      -> Saved {n_written} layer(s) to {cfg.data_dir}")
    cfg.save()
    click.echo("✅ Export complete!")


@cli.command()
@click.argument('incidents', type=click.Path(exists=True))
@_common_options
@click.option('--autoplay/--no-autoplay', default=None, help='Start playback on open.')
@click.option('--interval-ms', type=int, default=None, help='Milliseconds per year during playback.')
def view(incidents, config, output_dir, region, min_acres, autoplay, interval_ms):
    """Open the interactive viewer."""
    cfg = load_config(
        config,
        incidents_file=incidents,
        output_dir=output_dir,
        region=region.upper() if region else None,
        min_display_acres=min_acres,
        autoplay=autoplay,
        play_interval_ms=interval_ms,
    )
    store, _ = _load(cfg)
    FireHistoryViewer(store, cfg).show()


if __name__ == '__main__':
    cli()
