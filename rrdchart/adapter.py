"""Bridge between the selection engine and a chart renderer."""

import logging
from typing import Any, Optional, Protocol, Sequence, Tuple

from .duration import format_duration
from .models import (
    ChartOptions,
    LayoutDescriptor,
    RenderOptions,
    ResolutionChoice,
    ResolutionChosen,
    SelectionState,
    TraceDescriptor,
)
from .selector import ResolutionSelector
from .styling import DefaultStyler, SeriesStyler, style_of

logger = logging.getLogger(__name__)

RENDER_OPTIONS = RenderOptions(responsive=True, display_logo=False)


class Renderer(Protocol):
    """Draws charts from descriptors. Errors raised here are not translated."""

    def create_chart(self, element_id: str, traces: Sequence[TraceDescriptor],
                     layout: LayoutDescriptor, options: RenderOptions) -> Any: ...

    def update_chart(self, element_id: str, traces: Sequence[TraceDescriptor],
                     layout: LayoutDescriptor, options: RenderOptions) -> Any: ...


def resolution_label(step: int, rows: int) -> str:
    """Picker caption, e.g. '5 min (24 hrs)'."""
    return f"{format_duration(step)} ({format_duration(step * rows)})"


class ChartAdapter:
    """Turns the current selection into trace/layout descriptors.

    The adapter re-renders after every switch made by the selector and
    forwards picker events to it.
    """

    def __init__(self, selector: ResolutionSelector, renderer: Renderer, element_id: str,
                 options: Optional[ChartOptions] = None, styler: Optional[SeriesStyler] = None):
        self.selector = selector
        self.renderer = renderer
        self.element_id = element_id
        self.options = options or ChartOptions()
        self.styler = styler or DefaultStyler()
        self.element = None
        self._choices = self._build_choices()

    def _build_choices(self) -> Tuple[ResolutionChoice, ...]:
        accessor = self.selector.accessor
        choices = []
        for i in range(accessor.archive_count()):
            info = accessor.archive_info_at(i)
            choices.append(ResolutionChoice(label=resolution_label(info.step, info.rows),
                                            archive_index=i))
        return tuple(choices)

    @property
    def choices(self) -> Tuple[ResolutionChoice, ...]:
        return self._choices

    def traces(self, state: SelectionState) -> Tuple[TraceDescriptor, ...]:
        traces = []
        for series in state.series:
            style = style_of(self.styler, series.source)
            traces.append(TraceDescriptor(
                name=style.name,
                x=state.axis.timestamps,
                y=series.values,
                color=style.color,
                axis=style.axis,
                connect_gaps=True,
            ))
        return tuple(traces)

    def layout(self, state: SelectionState) -> LayoutDescriptor:
        return LayoutDescriptor(
            title=self.options.title,
            x_range=(state.axis.first, state.axis.last),
            choices=self._choices,
            active_archive=state.active_archive_index,
        )

    def render(self) -> Any:
        """Create the chart for the current selection and start following switches."""
        state = self.selector.state
        self.element = self.renderer.create_chart(
            self.element_id, self.traces(state), self.layout(state), RENDER_OPTIONS)
        self.selector.subscribe(self._on_selection)
        logger.debug("Created chart %r at archive %s", self.element_id, state.active_archive_index)
        return self.element

    def _on_selection(self, state: SelectionState) -> None:
        self.renderer.update_chart(
            self.element_id, self.traces(state), self.layout(state), RENDER_OPTIONS)

    def handle_event(self, event: ResolutionChosen) -> None:
        """Forward a picker click to the selector."""
        logger.debug("Resolution chosen: %s", event.archive_index)
        self.selector.select_archive(event.archive_index)

    def prerender_all(self) -> None:
        """Render every resolution once, then return to the current one.

        Used by renderers that record updates (static pages) so that every
        picker entry has a figure.
        """
        current = self.selector.state.active_archive_index
        for choice in self._choices:
            self.handle_event(ResolutionChosen(choice.archive_index))
        self.handle_event(ResolutionChosen(current))
