"""Standalone HTML renderer backed by Plotly.js."""

import html
import json
import logging
import math
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from .models import LayoutDescriptor, RenderOptions, TraceDescriptor
from .styling import AXIS_SECONDARY

logger = logging.getLogger(__name__)

PLOTLY_SRC = 'https://cdn.plot.ly/plotly-2.35.2.min.js'

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

THEMES = {
    'light': {'bg': '#f1f2f9', 'text': '#0f172a', 'line': '#0f172a', 'grid': 'rgba(148, 163, 184, 0.2)'},
    'dark': {'bg': '#080b28', 'text': '#fafafa', 'line': '#a1a1aa', 'grid': 'rgba(161, 161, 170, 0.1)'},
}


def format_date(ts: int) -> str:
    """Epoch seconds to a Plotly date string (UTC)."""
    return (EPOCH + timedelta(seconds=ts)).strftime('%Y-%m-%d %H:%M:%S')


def _clean(value: float) -> Optional[float]:
    # NaN and inf become null so Plotly treats them as gaps
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


def trace_to_plotly(trace: TraceDescriptor) -> Dict:
    return {
        'type': 'scatter',
        'mode': 'lines',
        'name': trace.name,
        'x': [format_date(ts) for ts in trace.x],
        'y': [_clean(v) for v in trace.y],
        'yaxis': 'y2' if trace.axis == AXIS_SECONDARY else 'y',
        'line': {
            'shape': 'spline',
            'color': trace.color,
        },
        'connectgaps': trace.connect_gaps,
    }


def layout_to_plotly(layout: LayoutDescriptor, theme: str = 'light') -> Dict:
    colors = THEMES[theme]
    start, end = format_date(layout.x_range[0]), format_date(layout.x_range[1])
    result = {
        'margin': {'l': 50, 'r': 0, 't': 50, 'b': 10},
        'paper_bgcolor': colors['bg'],
        'plot_bgcolor': colors['bg'],
        'font': {'color': colors['text']},
        'updatemenus': [
            {
                'buttons': [
                    {'args': [choice.archive_index], 'label': choice.label, 'method': 'skip'}
                    for choice in layout.choices
                ],
                'direction': 'left',
                'pad': {'r': 10, 't': 10},
                'active': layout.active_archive,
                'showactive': True,
                'type': 'buttons',
                'x': 0.1,
                'xanchor': 'left',
                'y': 1.1,
                'yanchor': 'top',
            }
        ],
        'xaxis': {
            'autorange': True,
            'range': [start, end],
            'rangeslider': {'range': [start, end], 'borderwidth': 1},
            'linecolor': colors['line'],
            'gridcolor': colors['grid'],
            'mirror': True,
            'type': 'date',
        },
        'yaxis': {
            'autorange': True,
            'linecolor': colors['line'],
            'gridcolor': colors['grid'],
            'type': 'linear',
        },
        'yaxis2': {
            'overlaying': 'y',
            'linecolor': colors['line'],
            'side': 'right',
            'type': 'linear',
        },
    }
    # An absent title is omitted, not rendered empty
    if layout.title:
        result['title'] = {'text': layout.title}
    return result


def options_to_plotly(options: RenderOptions) -> Dict:
    return {'responsive': options.responsive, 'displaylogo': options.display_logo}


def _script_json(payload) -> str:
    # Valid JSON, and safe inside a <script> element
    return json.dumps(payload, allow_nan=False).replace('</', '<\\/')


class HtmlChart:
    """A chart rendered into a standalone page; one figure per archive shown."""

    def __init__(self, element_id: str, theme: str, plotly_src: str):
        self.element_id = element_id
        self.theme = theme
        self.plotly_src = plotly_src
        self.figures: Dict[int, Dict] = {}
        self.active: Optional[int] = None
        self.title: Optional[str] = None
        self.config: Dict = {}

    def record(self, traces: Sequence[TraceDescriptor], layout: LayoutDescriptor,
               options: RenderOptions) -> None:
        self.figures[layout.active_archive] = {
            'data': [trace_to_plotly(t) for t in traces],
            'layout': layout_to_plotly(layout, self.theme),
        }
        self.active = layout.active_archive
        self.title = layout.title
        self.config = options_to_plotly(options)

    def to_html(self) -> str:
        """Generate the complete HTML page."""
        if self.active is None:
            raise ValueError(f"Nothing rendered into {self.element_id!r} yet")
        colors = THEMES[self.theme]
        figures = {str(k): v for k, v in sorted(self.figures.items())}
        title = html.escape(self.title or '')
        element_id = html.escape(self.element_id, quote=True)

        return f'''<!DOCTYPE html>
<html lang="en" data-theme="{self.theme}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script src="{html.escape(self.plotly_src, quote=True)}"></script>
    <style>
        :root {{
            --bg-primary: {colors['bg']};
            --text-primary: {colors['text']};
        }}

        html, body {{
            height: 100%;
            margin: 0;
            padding: 0;
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: var(--bg-primary);
            color: var(--text-primary);
        }}

        .chart {{
            width: 100%;
            height: 100%;
        }}
    </style>
</head>
<body>
    <div id="{element_id}" class="chart"></div>
    <script>
        const elementId = {_script_json(self.element_id)};
        const figures = {_script_json(figures)};
        const config = {_script_json(self.config)};
        const initial = figures[{_script_json(str(self.active))}];

        Plotly.newPlot(elementId, initial.data, initial.layout, config).then(chart => {{
            chart.on('plotly_buttonclicked', event => {{
                const figure = figures[String(event.button.args[0])];
                if (figure) {{
                    Plotly.react(elementId, figure.data, figure.layout, config);
                }}
            }});
        }});
    </script>
</body>
</html>'''

    def write(self, path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_html(), encoding='utf-8')
        logger.info("Wrote chart %r to %s", self.element_id, output_path)
        return output_path


class HtmlRenderer:
    """Renderer producing HtmlChart pages.

    Every create/update is recorded under the archive it shows, so the
    page can switch resolutions without calling back into Python.
    """

    def __init__(self, theme: str = 'light', plotly_src: str = PLOTLY_SRC):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}, expected one of {sorted(THEMES)}")
        self.theme = theme
        self.plotly_src = plotly_src
        self.charts: Dict[str, HtmlChart] = {}

    def create_chart(self, element_id: str, traces: Sequence[TraceDescriptor],
                     layout: LayoutDescriptor, options: RenderOptions) -> HtmlChart:
        chart = HtmlChart(element_id, self.theme, self.plotly_src)
        chart.record(traces, layout, options)
        self.charts[element_id] = chart
        return chart

    def update_chart(self, element_id: str, traces: Sequence[TraceDescriptor],
                     layout: LayoutDescriptor, options: RenderOptions) -> HtmlChart:
        chart = self.charts[element_id]
        chart.record(traces, layout, options)
        return chart
