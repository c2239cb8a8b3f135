from __future__ import annotations

import logging
import struct
from typing import List, Sequence, Tuple

import pytest

from rrdchart.accessor import ArchiveAccessor
from rrdchart.memory import MemoryRrd

LAST_UPDATE = 1000000
SHAPES = [(300, 288), (3600, 168)]


def _rrd4j_string(text: str) -> bytes:
    return text.ljust(20)[:20].encode('utf-16-be')


def build_rrd4j(
    step: int,
    last_update: int,
    ds_names: Sequence[str],
    archives: Sequence[Tuple[int, Sequence[Sequence[float]], Sequence[int]]],
    signature: str = 'RRD4J, version 0.1',
) -> bytes:
    """Encode an rrd4j file.

    Each archive is (steps, robins, pointers): one robin (raw storage order)
    and one pointer per data source.
    """
    out = bytearray(_rrd4j_string(signature))
    out += struct.pack('>QIIQ', step, len(ds_names), len(archives), last_update)
    for name in ds_names:
        out += _rrd4j_string(name) + _rrd4j_string('GAUGE')
        out += struct.pack('>qddddq', 600, 0.0, 100.0, 0.0, 0.0, 0)
    for steps, robins, pointers in archives:
        rows = len(robins[0])
        out += _rrd4j_string('AVERAGE') + struct.pack('>dII', 0.5, steps, rows)
        out += b'\x00' * 16 * len(ds_names)
        for robin, pointer in zip(robins, pointers):
            out += struct.pack('>I', pointer)
            out += struct.pack(f'>{rows}d', *robin)
    return bytes(out)


class RecordingRenderer:
    """Renderer double that keeps every call."""

    def __init__(self, fail_on_update: bool = False):
        self.calls: List[tuple] = []
        self.fail_on_update = fail_on_update
        self.on_update = None

    def create_chart(self, element_id, traces, layout, options):
        self.calls.append(('create', element_id, traces, layout, options))
        return f'element:{element_id}'

    def update_chart(self, element_id, traces, layout, options):
        if self.fail_on_update:
            raise RuntimeError('renderer exploded')
        self.calls.append(('update', element_id, traces, layout, options))
        if self.on_update is not None:
            self.on_update(layout)
        return f'element:{element_id}'

    @property
    def last_layout(self):
        return self.calls[-1][3]

    @property
    def last_traces(self):
        return self.calls[-1][2]


@pytest.fixture()
def handle() -> MemoryRrd:
    return MemoryRrd.synthetic(['in', 'out'], SHAPES, LAST_UPDATE)


@pytest.fixture()
def accessor(handle: MemoryRrd) -> ArchiveAccessor:
    return ArchiveAccessor(handle)


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def rrd4j_bytes() -> bytes:
    # 2 data sources, archive 0 rotated by pointer 2, archive 1 not rotated
    return build_rrd4j(
        step=60,
        last_update=LAST_UPDATE,
        ds_names=['temp', 'humidity %'],
        archives=[
            (5, [[3.0, 4.0, 0.0, 1.0, 2.0], [13.0, 14.0, 10.0, 11.0, 12.0]], [2, 2]),
            (60, [[1.5, float('nan'), 2.5], [7.0, 8.0, 9.0]], [0, 0]),
        ],
    )


@pytest.fixture()
def rrd4j_file(tmp_path, rrd4j_bytes: bytes):
    path = tmp_path / 'sensor.rrd'
    path.write_bytes(rrd4j_bytes)
    return path


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # The CLI reconfigures the root logger; undo that after each test
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
