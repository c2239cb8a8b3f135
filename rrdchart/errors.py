"""Exception types raised by rrdchart."""


class RrdChartError(Exception):
    """Base class for all rrdchart errors."""


class LoadFailure(RrdChartError):
    """Raised when an RRD file cannot be fetched or parsed."""


class LoadSuperseded(LoadFailure):
    """Raised when a newer load replaced this one before it finished."""


class IndexOutOfRange(RrdChartError, IndexError):
    """Raised for an archive, data source or row index outside its bounds."""

    def __init__(self, kind: str, index: int, size: int):
        super().__init__(f"{kind} index {index} out of range [0, {size})")
        self.kind = kind
        self.index = index
        self.size = size


class ConfigError(RrdChartError):
    """Raised when configuration loading fails."""
