"""rrd4j file parser.

RRD4J File Format (Big Endian):
- Header: signature (40 bytes), step (8 bytes), dsCount (4 bytes), arcCount (4 bytes), lastUpdateTime (8 bytes)
- Datasources: name (40), dsType (40), heartbeat (8), min (8), max (8), lastValue (8), accumValue (8), nanSeconds (8)
- For each archive:
  - Definition: consolFun (40), xff (8), steps (4), rows (4)
  - ArcState per ds: accumValue (8), nanSteps (8)
  - Robin per ds: pointer (4), values (8 * rows)

Strings are 20 UTF-16 characters padded with spaces.
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Tuple

from .errors import IndexOutOfRange, LoadFailure

logger = logging.getLogger(__name__)

SIGNATURES = ('RRD4J', 'JRobin')

STRING_SIZE = 40
HEADER_SIZE = STRING_SIZE + 24
DATASOURCE_SIZE = 128
ARCHIVE_DEF_SIZE = 56
ARC_STATE_SIZE = 16


def _decode_string(raw: bytes) -> str:
    return raw.decode('utf-16-be', errors='replace').rstrip(' \x00')


@dataclass(frozen=True)
class Rrd4jArchive:
    consol_fun: str
    steps: int
    rows: int
    # One tuple per data source, oldest row first
    robins: Tuple[Tuple[float, ...], ...]


class Rrd4jFile:
    """Parsed rrd4j database; implements the RrdHandle protocol."""

    def __init__(self, step: int, last_update: int, ds_names: List[str],
                 archives: List[Rrd4jArchive]):
        self.step = step
        self.last_update = last_update
        self.ds_names = tuple(ds_names)
        self.archives = tuple(archives)

    @property
    def ds_count(self) -> int:
        return len(self.ds_names)

    @property
    def archive_count(self) -> int:
        return len(self.archives)

    def ds_name(self, ds: int) -> str:
        return self.ds_names[ds]

    def archive_step(self, archive: int) -> int:
        return self.step * self.archives[archive].steps

    def archive_rows(self, archive: int) -> int:
        return self.archives[archive].rows

    def cell(self, archive: int, row: int, ds: int) -> float:
        arc = self.archives[archive]
        if not 0 <= row < arc.rows:
            raise IndexOutOfRange('row', row, arc.rows)
        return arc.robins[ds][row]


def parse_rrd4j(data: bytes) -> Rrd4jFile:
    """Parse the raw contents of an rrd4j file."""
    try:
        return _parse(data)
    except struct.error as e:
        raise LoadFailure(f"Truncated rrd4j data: {e}") from e


def _parse(data: bytes) -> Rrd4jFile:
    signature = _decode_string(data[:STRING_SIZE])
    if not signature.startswith(SIGNATURES):
        raise LoadFailure(f"Not an rrd4j file (signature {signature!r})")

    # Parse header in single unpack (step:Q, dsCount:I, arcCount:I, lastUpdate:Q)
    offset = STRING_SIZE
    step, ds_count, arc_count, last_update = struct.unpack_from('>QIIQ', data, offset)
    offset += 24

    if step < 1:
        raise LoadFailure(f"Invalid rrd4j step: {step}")
    if arc_count == 0:
        raise LoadFailure("rrd4j file has no archives")

    ds_names = []
    for ds in range(ds_count):
        name_raw, = struct.unpack_from('>40s', data, offset)
        ds_names.append(_decode_string(name_raw))
        offset += DATASOURCE_SIZE

    # Archive definition and data are interleaved
    archives = []
    for arc in range(arc_count):
        consol_raw, arc_steps, arc_rows = struct.unpack_from('>40s8xII', data, offset)
        offset += ARCHIVE_DEF_SIZE
        if arc_steps < 1 or arc_rows < 1:
            raise LoadFailure(f"Archive {arc} has invalid shape: steps={arc_steps} rows={arc_rows}")

        # ArcState for each datasource
        offset += ds_count * ARC_STATE_SIZE

        robins = []
        for ds in range(ds_count):
            pointer, = struct.unpack_from('>I', data, offset)
            offset += 4

            # Read all values in single unpack
            values = struct.unpack_from(f'>{arc_rows}d', data, offset)
            offset += arc_rows * 8

            # pointer points to the NEXT write position
            # Values from pointer to end are oldest, then 0 to pointer-1 are newest
            if 0 < pointer < arc_rows:
                values = values[pointer:] + values[:pointer]
            robins.append(values)

        archives.append(Rrd4jArchive(
            consol_fun=_decode_string(consol_raw),
            steps=arc_steps,
            rows=arc_rows,
            robins=tuple(robins),
        ))

    logger.debug("Parsed rrd4j file: step=%s ds=%s archives=%s last_update=%s",
                 step, ds_count, arc_count, last_update)
    return Rrd4jFile(step, last_update, ds_names, archives)
