"""Pull data source values out of an archive."""

from typing import Tuple

from .accessor import ArchiveAccessor
from .errors import IndexOutOfRange
from .models import DataSource, Series


def list_data_sources(accessor: ArchiveAccessor) -> Tuple[DataSource, ...]:
    """All data sources of the RRD, in index order."""
    return tuple(accessor.data_source_at(i) for i in range(accessor.ds_count()))


def extract_series(accessor: ArchiveAccessor, archive: int, ds: int, rows: int) -> Tuple[float, ...]:
    """Raw cell values of `ds` for rows 0..rows-1 of `archive`.

    Unknown cells (NaN) are passed through; gaps are the renderer's business.
    """
    if not 0 <= archive < accessor.archive_count():
        raise IndexOutOfRange('archive', archive, accessor.archive_count())
    if not 0 <= ds < accessor.ds_count():
        raise IndexOutOfRange('data source', ds, accessor.ds_count())
    return tuple(accessor.cell_value(archive, row, ds) for row in range(rows))


def build_series(accessor: ArchiveAccessor, archive: int, source: DataSource, rows: int) -> Series:
    return Series(source=source, values=extract_series(accessor, archive, source.index, rows))
