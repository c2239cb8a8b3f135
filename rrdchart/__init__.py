from .accessor import ArchiveAccessor, RrdHandle
from .adapter import ChartAdapter, Renderer
from .duration import format_duration
from .errors import (
    ConfigError,
    IndexOutOfRange,
    LoadFailure,
    LoadSuperseded,
    RrdChartError,
)
from .memory import MemoryArchive, MemoryRrd
from .models import (
    ArchiveInfo,
    ChartOptions,
    DataSource,
    LayoutDescriptor,
    RenderOptions,
    ResolutionChoice,
    ResolutionChosen,
    SelectionState,
    Series,
    StyleDescriptor,
    TimeAxis,
    TraceDescriptor,
)
from .render import HtmlChart, HtmlRenderer
from .rrd4j import Rrd4jFile, parse_rrd4j
from .selector import ResolutionSelector
from .series import extract_series, list_data_sources
from .session import ChartSession, load_rrd, plot
from .styling import (
    AXIS_PRIMARY,
    AXIS_SECONDARY,
    PALETTE,
    DefaultStyler,
    SeriesStyler,
    UnitAxisStyler,
)
from .timeaxis import build_time_axis

__all__ = [
    "ArchiveAccessor",
    "RrdHandle",
    "ChartAdapter",
    "Renderer",
    "format_duration",
    # Errors
    "RrdChartError",
    "LoadFailure",
    "LoadSuperseded",
    "IndexOutOfRange",
    "ConfigError",
    # Handles
    "MemoryArchive",
    "MemoryRrd",
    "Rrd4jFile",
    "parse_rrd4j",
    # Models
    "ArchiveInfo",
    "ChartOptions",
    "DataSource",
    "LayoutDescriptor",
    "RenderOptions",
    "ResolutionChoice",
    "ResolutionChosen",
    "SelectionState",
    "Series",
    "StyleDescriptor",
    "TimeAxis",
    "TraceDescriptor",
    # Rendering
    "HtmlChart",
    "HtmlRenderer",
    # Engine
    "ResolutionSelector",
    "extract_series",
    "list_data_sources",
    "build_time_axis",
    "ChartSession",
    "load_rrd",
    "plot",
    # Styling
    "AXIS_PRIMARY",
    "AXIS_SECONDARY",
    "PALETTE",
    "DefaultStyler",
    "SeriesStyler",
    "UnitAxisStyler",
]
