"""Data models shared by the extraction engine and the chart adapter.

All records are frozen dataclasses: a new selection replaces the old
records wholesale instead of mutating them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class DataSource:
    """One named series tracked by the RRD."""

    index: int
    name: str


@dataclass(frozen=True)
class ArchiveInfo:
    """Resolution metadata of one round-robin archive."""

    index: int
    step: int  # seconds between rows
    rows: int

    @property
    def period(self) -> int:
        """Seconds covered by the whole archive."""
        return self.step * self.rows


@dataclass(frozen=True)
class TimeAxis:
    """Sample timestamps (epoch seconds) of an archive, oldest first."""

    step: int
    timestamps: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def first(self) -> int:
        return self.timestamps[0]

    @property
    def last(self) -> int:
        return self.timestamps[-1]


@dataclass(frozen=True)
class Series:
    """Raw values of one data source, aligned with the active TimeAxis."""

    source: DataSource
    values: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class SelectionState:
    """The active archive together with everything derived from it."""

    archive: ArchiveInfo
    axis: TimeAxis
    series: Tuple[Series, ...]

    @property
    def active_archive_index(self) -> int:
        return self.archive.index


@dataclass(frozen=True)
class StyleDescriptor:
    """Display identity of a data source."""

    name: str
    color: str  # '#rrggbb'
    axis: str  # AXIS_PRIMARY or AXIS_SECONDARY


@dataclass(frozen=True)
class ChartOptions:
    """Caller supplied chart configuration."""

    title: Optional[str] = None


@dataclass(frozen=True)
class TraceDescriptor:
    """Renderer agnostic description of one line on the chart."""

    name: str
    x: Tuple[int, ...]
    y: Tuple[float, ...]
    color: str
    axis: str
    connect_gaps: bool = True


@dataclass(frozen=True)
class ResolutionChoice:
    """One entry of the resolution picker."""

    label: str
    archive_index: int


@dataclass(frozen=True)
class LayoutDescriptor:
    """Renderer agnostic chart layout."""

    title: Optional[str]
    x_range: Tuple[int, int]
    choices: Tuple[ResolutionChoice, ...]
    active_archive: int


@dataclass(frozen=True)
class RenderOptions:
    """Options passed with every create/update call."""

    responsive: bool = True
    display_logo: bool = False


@dataclass(frozen=True)
class ResolutionChosen:
    """Inbound renderer event: the user picked archive `archive_index`."""

    archive_index: int
