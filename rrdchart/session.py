"""Loading an RRD and plotting it.

Loading is the only step that awaits; everything after the handle is
available runs synchronously.
"""

import asyncio
import inspect
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from .accessor import ArchiveAccessor, RrdHandle
from .adapter import ChartAdapter, Renderer
from .errors import LoadFailure, LoadSuperseded
from .models import ChartOptions, ResolutionChosen
from .render import HtmlRenderer
from .rrd4j import parse_rrd4j
from .selector import ResolutionSelector
from .styling import SeriesStyler

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[bytes]]
Provider = Union[str, RrdHandle, Awaitable[RrdHandle]]


async def read_file(locator: str) -> bytes:
    """Default fetcher: read a local file without blocking the loop."""
    return await asyncio.to_thread(Path(locator).read_bytes)


async def load_rrd(locator: str, fetch: Optional[Fetcher] = None) -> RrdHandle:
    """Fetch and parse the rrd4j file at `locator`."""
    fetch = fetch or read_file
    try:
        data = await fetch(locator)
    except Exception as e:
        raise LoadFailure(f"Could not fetch {locator}: {e}") from e

    try:
        handle = parse_rrd4j(data)
    except LoadFailure:
        raise
    except Exception as e:
        raise LoadFailure(f"Could not parse {locator}: {e}") from e

    logger.info("Loaded %s: %s data sources, %s archives",
                locator, handle.ds_count, handle.archive_count)
    return handle


class ChartSession:
    """One chart element and the RRD currently plotted into it.

    A later `plot` call wins over an earlier one that is still loading.
    """

    def __init__(self, renderer: Renderer, element_id: str,
                 styler: Optional[SeriesStyler] = None, fetch: Optional[Fetcher] = None):
        self.renderer = renderer
        self.element_id = element_id
        self.styler = styler
        self.fetch = fetch
        self.selector: Optional[ResolutionSelector] = None
        self.adapter: Optional[ChartAdapter] = None
        self._generation = 0

    async def _resolve(self, provider: Provider) -> RrdHandle:
        if isinstance(provider, str):
            return await load_rrd(provider, self.fetch)
        if inspect.isawaitable(provider):
            try:
                return await provider
            except LoadFailure:
                raise
            except Exception as e:
                raise LoadFailure(f"Pending RRD failed to load: {e}") from e
        return provider

    async def plot(self, provider: Provider, options: Optional[ChartOptions] = None,
                   initial_archive: int = 0) -> Any:
        """Load `provider` and render it; returns the renderer's chart element."""
        self._generation += 1
        generation = self._generation

        handle = await self._resolve(provider)
        if generation != self._generation:
            logger.info("Discarding load superseded by a newer plot request")
            raise LoadSuperseded(f"Load {generation} superseded by {self._generation}")

        accessor = ArchiveAccessor(handle)
        selector = ResolutionSelector(accessor, initial=initial_archive)
        adapter = ChartAdapter(selector, self.renderer, self.element_id,
                               options=options, styler=self.styler)
        element = adapter.render()

        self.selector = selector
        self.adapter = adapter
        return element

    def handle_event(self, event: ResolutionChosen) -> None:
        """Forward a renderer event to the chart currently shown."""
        if self.adapter is None:
            raise RuntimeError("Nothing plotted yet")
        self.adapter.handle_event(event)


async def plot(provider: Provider, element_id: str, options: Optional[ChartOptions] = None,
               renderer: Optional[Renderer] = None, styler: Optional[SeriesStyler] = None) -> Any:
    """Plot an RRD into a fresh session; defaults to the HTML renderer."""
    if renderer is None:
        renderer = HtmlRenderer()
    session = ChartSession(renderer, element_id, styler=styler)
    return await session.plot(provider, options)
