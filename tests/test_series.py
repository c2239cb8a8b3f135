import math

import pytest

from rrdchart.accessor import ArchiveAccessor
from rrdchart.errors import IndexOutOfRange
from rrdchart.memory import UNKNOWN, MemoryArchive, MemoryRrd
from rrdchart.models import DataSource
from rrdchart.series import extract_series, list_data_sources


def test_list_data_sources(accessor: ArchiveAccessor):
    assert list_data_sources(accessor) == (
        DataSource(index=0, name='in'),
        DataSource(index=1, name='out'),
    )
    # Restartable: a second call yields the same sequence
    assert list_data_sources(accessor) == list_data_sources(accessor)


@pytest.mark.parametrize("archive, rows", [(0, 288), (1, 168)])
@pytest.mark.parametrize("ds", [0, 1])
def test_extract_series_matches_cells(accessor: ArchiveAccessor, archive, rows, ds):
    values = extract_series(accessor, archive, ds, rows)

    assert len(values) == rows
    assert all(values[k] == accessor.cell_value(archive, k, ds) for k in range(rows))


def test_unknown_values_pass_through():
    handle = MemoryRrd(['x'], [MemoryArchive(60, [[1.0, UNKNOWN, 3.0]])], 600)

    values = extract_series(ArchiveAccessor(handle), 0, 0, 3)

    assert values[0] == 1.0
    assert math.isnan(values[1])
    assert values[2] == 3.0


@pytest.mark.parametrize("archive, ds", [(2, 0), (-1, 0), (0, 2), (0, -1)])
def test_extract_out_of_range(accessor: ArchiveAccessor, archive, ds):
    with pytest.raises(IndexOutOfRange):
        extract_series(accessor, archive, ds, 10)


def test_extract_more_rows_than_archive_has(accessor: ArchiveAccessor):
    with pytest.raises(IndexOutOfRange):
        extract_series(accessor, 1, 0, 169)
