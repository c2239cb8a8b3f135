#!/usr/bin/env python3
"""
RRD Chart Generator
Generates interactive multi-resolution HTML charts directly from rrd4j files
"""

import asyncio
from typing import Optional, Tuple

import click

from .config import chart_options_from_config, load_config
from .errors import ConfigError, IndexOutOfRange, LoadFailure
from .logging_setup import configure_logging
from .models import ChartOptions
from .render import THEMES, HtmlRenderer
from .session import ChartSession
from .styling import DefaultStyler, UnitAxisStyler

ELEMENT_ID = 'rrdChart'


async def _render(rrd: str, renderer: HtmlRenderer, options: ChartOptions,
                  archive: int, secondary_units: Tuple[str, ...]):
    styler = UnitAxisStyler(secondary_units) if secondary_units else DefaultStyler()
    session = ChartSession(renderer, ELEMENT_ID, styler=styler)
    chart = await session.plot(rrd, options, initial_archive=archive)
    # Record every resolution so the page can switch without a server
    session.adapter.prerender_all()
    return chart


@click.command()
@click.option('-o', required=True, help='Output HTML file path')
@click.option('-rrd', required=True, help='Path to rrd4j file')
@click.option('-mode', default='light', type=click.Choice(sorted(THEMES)), help='Theme mode: light or dark')
@click.option('-title', default=None, help='Chart title (overrides the config file)')
@click.option('-archive', default=0, type=int, help='Archive shown first (0-based)')
@click.option('-secondary-unit', 'secondary_units', multiple=True,
              help='Put data sources with this unit (e.g. %, W) on the right axis; repeatable')
@click.option('-config', 'config_path', default=None, help='TOML/JSON config file')
@click.option('-log-level', default='WARNING', help='Logging level')
@click.option('-json-logs', is_flag=True, help='Emit logs in JSON format')
def main(o: str, rrd: str, mode: str, title: Optional[str], archive: int,
         secondary_units: Tuple[str, ...], config_path: Optional[str],
         log_level: str, json_logs: bool):
    """Generate an interactive HTML chart with a resolution picker from an rrd4j file."""
    configure_logging(level=log_level, json_format=json_logs)

    options = ChartOptions()
    if config_path:
        try:
            options = chart_options_from_config(load_config(config_path))
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
    if title is not None:
        options = ChartOptions(title=title)

    renderer = HtmlRenderer(theme=mode)
    try:
        chart = asyncio.run(_render(rrd, renderer, options, archive, secondary_units))
    except LoadFailure as e:
        click.echo(f"Error: Could not load rrd4j file: {rrd} ({e})", err=True)
        raise SystemExit(1)
    except IndexOutOfRange as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    chart.write(o)
    click.echo(f"Generated chart: {o}")


if __name__ == '__main__':
    main()
