"""Display name, color and axis of data sources.

Styling is a capability: anything with `name`, `color` and `axis` methods
taking a DataSource can be passed where a styler is expected.
"""

import re
from typing import Iterable, Protocol

from .models import DataSource, StyleDescriptor

AXIS_PRIMARY = 'primary'
AXIS_SECONDARY = 'secondary'
AXES = (AXIS_PRIMARY, AXIS_SECONDARY)

# d3 category10
PALETTE = (
    '#1f77b4',
    '#ff7f0e',
    '#2ca02c',
    '#d62728',
    '#9467bd',
    '#8c564b',
    '#e377c2',
    '#7f7f7f',
    '#bcbd22',
    '#17becf',
)


class SeriesStyler(Protocol):
    def name(self, ds: DataSource) -> str: ...

    def color(self, ds: DataSource) -> str: ...

    def axis(self, ds: DataSource) -> str: ...


class DefaultStyler:
    """Name as stored, palette color by index, everything on the primary axis."""

    palette = PALETTE

    def name(self, ds: DataSource) -> str:
        return ds.name

    def color(self, ds: DataSource) -> str:
        return self.palette[ds.index % len(self.palette)]

    def axis(self, ds: DataSource) -> str:
        return AXIS_PRIMARY


def deduce_unit(title: str) -> str:
    """Deduce the unit from a name or title (case insensitive), '?' if none."""
    # Pattern: space before, space or end after
    def match_unit(pattern):
        return re.search(r'\s' + pattern + r'(\s|$)', title, re.IGNORECASE)

    if match_unit(r'kwh'):
        return 'kWh'
    if match_unit(r'%'):
        return '%'
    if match_unit(r'°c'):
        return '°C'
    if match_unit(r'mbar'):
        return 'mbar'
    if match_unit(r'l/min'):
        return 'l/min'
    if match_unit(r'm3'):
        return 'm³'
    if match_unit(r'v'):
        return 'V'
    if match_unit(r'w'):
        return 'W'
    if match_unit(r'lm/m2'):
        return 'lm/m²'

    return '?'


class UnitAxisStyler(DefaultStyler):
    """Puts data sources whose name carries one of `secondary_units` on the secondary axis."""

    def __init__(self, secondary_units: Iterable[str]):
        self.secondary_units = frozenset(secondary_units)

    def axis(self, ds: DataSource) -> str:
        if deduce_unit(ds.name) in self.secondary_units:
            return AXIS_SECONDARY
        return AXIS_PRIMARY


def style_of(styler: SeriesStyler, ds: DataSource) -> StyleDescriptor:
    """Collect a styler's answers for `ds`, validating the axis id."""
    axis = styler.axis(ds)
    if axis not in AXES:
        raise ValueError(f"Unknown axis {axis!r} for data source {ds.name!r}")
    return StyleDescriptor(name=styler.name(ds), color=styler.color(ds), axis=axis)
