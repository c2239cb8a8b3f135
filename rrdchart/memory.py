"""In-memory RRD handle."""

import math
from typing import List, Optional, Sequence, Tuple

from .errors import IndexOutOfRange

# Sentinel for a cell without a recorded value
UNKNOWN = math.nan


class MemoryArchive:
    """One archive: step, and one value column per data source (oldest first)."""

    def __init__(self, step: int, columns: Sequence[Sequence[float]],
                 rows: Optional[int] = None):
        self.columns: Tuple[Tuple[float, ...], ...] = tuple(tuple(c) for c in columns)
        lengths = {len(column) for column in self.columns}
        if rows is not None:
            lengths.add(rows)
        if len(lengths) != 1:
            raise ValueError(f"Cannot derive row count from column lengths {sorted(lengths)}")
        self.rows = lengths.pop()
        if step < 1 or self.rows < 1:
            raise ValueError(f"Archive needs a positive step and row count, got {step}/{self.rows}")
        self.step = step


class MemoryRrd:
    """RrdHandle built from plain Python sequences."""

    def __init__(self, ds_names: Sequence[str], archives: Sequence[MemoryArchive],
                 last_update: int):
        for arc in archives:
            if len(arc.columns) != len(ds_names):
                raise ValueError(
                    f"Archive has {len(arc.columns)} columns for {len(ds_names)} data sources")
        self.ds_names = tuple(ds_names)
        self.archives = tuple(archives)
        self.last_update = last_update

    @classmethod
    def synthetic(cls, ds_names: Sequence[str], shapes: Sequence[Tuple[int, int]],
                  last_update: int) -> 'MemoryRrd':
        """Build a handle with archives of the given (step, rows) shapes.

        Cell values encode their position (archive * 1e6 + row * 10 + ds).
        """
        archives: List[MemoryArchive] = []
        for arc, (step, rows) in enumerate(shapes):
            columns = []
            for ds in range(len(ds_names)):
                columns.append([arc * 1e6 + row * 10 + ds for row in range(rows)])
            archives.append(MemoryArchive(step, columns, rows))
        return cls(ds_names, archives, last_update)

    @property
    def ds_count(self) -> int:
        return len(self.ds_names)

    @property
    def archive_count(self) -> int:
        return len(self.archives)

    def ds_name(self, ds: int) -> str:
        return self.ds_names[ds]

    def archive_step(self, archive: int) -> int:
        return self.archives[archive].step

    def archive_rows(self, archive: int) -> int:
        return self.archives[archive].rows

    def cell(self, archive: int, row: int, ds: int) -> float:
        arc = self.archives[archive]
        if not 0 <= row < arc.rows:
            raise IndexOutOfRange('row', row, arc.rows)
        return arc.columns[ds][row]
