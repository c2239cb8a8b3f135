"""Active archive selection.

The selector owns the single piece of mutable session state. A switch
builds the new time axis and every series first and only then replaces
the state, so a failed switch leaves the previous selection in place.
If a listener (the renderer) fails, the previous state is restored.
"""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence

from .accessor import ArchiveAccessor
from .errors import IndexOutOfRange
from .models import DataSource, SelectionState
from .series import build_series, list_data_sources
from .timeaxis import build_time_axis

logger = logging.getLogger(__name__)

Listener = Callable[[SelectionState], None]


class ResolutionSelector:
    """Switches the active archive and keeps axis and series consistent with it.

    Requests arriving while a switch (including its listener calls) is in
    progress are queued and applied afterwards, in arrival order.
    """

    def __init__(self, accessor: ArchiveAccessor, initial: int = 0,
                 sources: Optional[Sequence[DataSource]] = None):
        self.accessor = accessor
        # Visible data sources are fixed for the lifetime of the selector
        self.sources = tuple(sources) if sources is not None else list_data_sources(accessor)
        self._listeners: List[Listener] = []
        self._pending: Deque[int] = deque()
        self._busy = False
        self._state = self._derive(initial)

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def archive_count(self) -> int:
        return self.accessor.archive_count()

    def subscribe(self, listener: Listener) -> None:
        """Call `listener` with the new state after every switch."""
        self._listeners.append(listener)

    def select_archive(self, index: int) -> None:
        """Make archive `index` the active one.

        Raises IndexOutOfRange immediately for an invalid index; the
        current state is left untouched in that case.
        """
        if not 0 <= index < self.archive_count:
            raise IndexOutOfRange('archive', index, self.archive_count)

        self._pending.append(index)
        if self._busy:
            logger.debug("Switch to archive %s queued", index)
            return
        self._drain()

    def _drain(self) -> None:
        self._busy = True
        error: Optional[BaseException] = None
        try:
            while self._pending:
                index = self._pending.popleft()
                try:
                    self._apply(index)
                except Exception as e:
                    # Only this switch is aborted; later requests still run
                    logger.warning("Switch to archive %s failed: %s", index, e)
                    if error is None:
                        error = e
        finally:
            self._busy = False
        if error is not None:
            raise error

    def _apply(self, index: int) -> None:
        state = self._derive(index)
        previous = self._state
        self._state = state
        try:
            for listener in self._listeners:
                listener(state)
        except Exception:
            # Keep the state matching what the chart still shows
            self._state = previous
            raise
        logger.info("Switched to archive %s (step=%ss, rows=%s)",
                    index, state.archive.step, state.archive.rows)

    def _derive(self, index: int) -> SelectionState:
        archive = self.accessor.archive_info_at(index)
        axis = build_time_axis(archive, self.accessor.last_update())
        series = tuple(
            build_series(self.accessor, index, ds, archive.rows)
            for ds in self.sources
        )
        return SelectionState(archive=archive, axis=axis, series=series)
