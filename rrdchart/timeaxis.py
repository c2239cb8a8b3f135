"""Reconstruct sample timestamps of an archive."""

from .models import ArchiveInfo, TimeAxis


def build_time_axis(archive: ArchiveInfo, last_update: int) -> TimeAxis:
    """Return the `archive.rows` timestamps of an archive, oldest first.

    The newest row is `last_update - step`: the step containing
    `last_update` is still being accumulated. The start is not clamped,
    so very long archives may begin before the epoch.
    """
    start = last_update - archive.rows * archive.step
    return TimeAxis(
        step=archive.step,
        timestamps=tuple(start + i * archive.step for i in range(archive.rows)),
    )
