"""Typed, bounds checked view over a parsed RRD."""

from typing import Protocol

from .errors import IndexOutOfRange
from .models import ArchiveInfo, DataSource


class RrdHandle(Protocol):
    """What the engine needs from a parsed RRD (rrd4j file, in-memory, ...)."""

    ds_count: int
    archive_count: int
    last_update: int

    def ds_name(self, ds: int) -> str: ...

    def archive_step(self, archive: int) -> int: ...

    def archive_rows(self, archive: int) -> int: ...

    def cell(self, archive: int, row: int, ds: int) -> float: ...


def _check(kind: str, index: int, size: int) -> None:
    # Negative indices are rejected, never wrapped
    if not 0 <= index < size:
        raise IndexOutOfRange(kind, index, size)


class ArchiveAccessor:
    """Read-only facade over an RrdHandle.

    All indices are 0-based; row 0 is the oldest sample of an archive.
    """

    def __init__(self, handle: RrdHandle):
        self.handle = handle

    def ds_count(self) -> int:
        return self.handle.ds_count

    def archive_count(self) -> int:
        return self.handle.archive_count

    def last_update(self) -> int:
        return int(self.handle.last_update)

    def data_source_at(self, ds: int) -> DataSource:
        _check('data source', ds, self.ds_count())
        return DataSource(index=ds, name=self.handle.ds_name(ds))

    def archive_info_at(self, archive: int) -> ArchiveInfo:
        _check('archive', archive, self.archive_count())
        return ArchiveInfo(
            index=archive,
            step=self.handle.archive_step(archive),
            rows=self.handle.archive_rows(archive),
        )

    def cell_value(self, archive: int, row: int, ds: int) -> float:
        _check('archive', archive, self.archive_count())
        _check('data source', ds, self.ds_count())
        _check('row', row, self.handle.archive_rows(archive))
        return self.handle.cell(archive, row, ds)
