"""Chart sessions — the event-driven orchestrator around the pipeline.

A ChartSession owns one chart's inputs (dataset, viewport width, theme) and
its last good RenderContext. Every event runs one synchronous pass; the new
frame is published only if the whole pass succeeds. A failed pass keeps the
previous frame and marks the session stale, so the next event re-derives
everything from the latest inputs.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import datetime

from chartengine.data.models import DataPoint, Dataset
from chartengine.data.source import Predicate, StaticDataSource
from chartengine.engine.config import ChartConfig
from chartengine.engine.context import ChartOptions, RenderContext, RenderFrame
from chartengine.engine.interaction import HoverController, HoverState, TooltipState
from chartengine.engine.kinds import ChartKind, Event
from chartengine.engine.pipeline import Pipeline, create_pipeline
from chartengine.engine.theme import ThemeSelector, parse_theme, toggle_theme
from chartengine.errors import ChartError

logger = logging.getLogger(__name__)

ResizeHandler = Callable[[float], None]
FrameListener = Callable[[RenderFrame], None]


class Subscription:
    """Handle returned by ViewportEvents.on_resize; ``cancel()`` deregisters."""

    def __init__(self, hub: ViewportEvents, handler: ResizeHandler) -> None:
        self._hub = hub
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._hub._remove(self)
            self.active = False


class ViewportEvents:
    """Single subscription point for viewport resize notifications."""

    def __init__(self, width: float = 1200.0) -> None:
        self.width = width
        self._subscriptions: list[Subscription] = []

    def on_resize(self, handler: ResizeHandler) -> Subscription:
        sub = Subscription(self, handler)
        self._subscriptions.append(sub)
        return sub

    def emit(self, width: float) -> None:
        self.width = width
        for sub in list(self._subscriptions):
            sub.handler(width)

    def _remove(self, sub: Subscription) -> None:
        self._subscriptions.remove(sub)

    @property
    def handler_count(self) -> int:
        return len(self._subscriptions)


class ChartSession:
    """One chart instance: inputs, last good frame, hover state and listeners."""

    def __init__(
        self,
        options: ChartOptions,
        *,
        source: StaticDataSource | None = None,
        dataset: Dataset | None = None,
        theme: ThemeSelector = ThemeSelector.LIGHT,
        viewport_width: float = 1200.0,
        config: ChartConfig | None = None,
        pipeline: Pipeline | None = None,
    ) -> None:
        self.options = options
        self.pipeline = pipeline or create_pipeline(config)
        self.config = config or self.pipeline.config
        self.source = source or StaticDataSource()
        self.hover = HoverController(self.config, options.kind)

        self._dataset = dataset if dataset is not None else self.source.load()
        self._viewport_width = viewport_width
        self._theme = parse_theme(theme)

        self._context: RenderContext | None = None
        self._frame: RenderFrame | None = None
        self._stale = False
        self.last_error: ChartError | None = None

        self._subscription: Subscription | None = None
        self._listeners: list[FrameListener] = []

    # --- Read-only views ---

    @property
    def kind(self) -> ChartKind:
        return self.options.kind

    @property
    def frame(self) -> RenderFrame | None:
        return self._frame

    @property
    def context(self) -> RenderContext | None:
        return self._context

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def theme(self) -> ThemeSelector:
        return self._theme

    @property
    def tooltip(self) -> TooltipState:
        return self.hover.tooltip

    @property
    def hover_state(self) -> HoverState:
        return self.hover.state

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    # --- Lifecycle ---

    def mount(self, events: ViewportEvents) -> RenderFrame | None:
        """Register this chart's resize handler (replacing any previous one) and render."""
        if self._subscription is not None:
            self._subscription.cancel()
        self._subscription = events.on_resize(self.on_resize)
        self._viewport_width = events.width
        return self.render()

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        self.hover.reset()

    def subscribe(self, listener: FrameListener) -> Callable[[], None]:
        """Notify ``listener`` with every newly published frame. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def render(self) -> RenderFrame | None:
        return self._recompute(Event.INITIAL)

    # --- Events ---

    def on_resize(self, width: float) -> RenderFrame | None:
        self._viewport_width = width
        return self._recompute(Event.RESIZE)

    def set_dataset(self, dataset: Dataset) -> RenderFrame | None:
        self._dataset = dataset
        return self._recompute(Event.DATASET)

    def append_point(self, point: DataPoint) -> RenderFrame | None:
        return self.set_dataset(self.source.append(self._dataset, point))

    def filter(self, predicate: Predicate) -> RenderFrame | None:
        return self.set_dataset(self.source.filter(self._dataset, predicate))

    def synthesize_point(
        self,
        *,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> RenderFrame | None:
        return self.set_dataset(self.source.synthesize(self._dataset, now=now, rng=rng))

    def set_theme(self, selector: ThemeSelector | str) -> RenderFrame | None:
        self._theme = parse_theme(selector)
        return self._recompute(Event.THEME)

    def toggle_theme(self) -> RenderFrame | None:
        return self.set_theme(toggle_theme(self._theme))

    def pointer_move(self, x: float, y: float) -> TooltipState:
        if self._frame is None:
            return self.hover.tooltip
        return self.hover.pointer_move((x, y), self._frame.primitives)

    def pointer_leave(self, target_id: str | None = None) -> TooltipState:
        return self.hover.leave(target_id)

    # --- Derivation ---

    def _recompute(self, event: Event) -> RenderFrame | None:
        if self._context is None or self._stale:
            event = Event.INITIAL
            base = self._context.fork() if self._context else RenderContext(self.options, self.config)
        else:
            base = self._context.fork()
        base.dataset = self._dataset
        base.viewport_width = self._viewport_width
        base.theme = self._theme

        try:
            ctx = self.pipeline.run(base, event)
            frame = ctx.to_frame()
        except ChartError as e:
            self.last_error = e
            self._stale = True
            logger.warning(
                "%s pass (%s) aborted: %s; keeping frame %s",
                self.kind.value,
                event.value,
                e,
                self._frame.generation if self._frame else "none",
            )
            return self._frame

        self._context = ctx
        self._frame = frame
        self._stale = False
        self.last_error = None
        self.hover.viewport = frame.viewport
        for listener in list(self._listeners):
            listener(frame)
        return frame


# View name -> charts shown together, mirroring the dashboard's chart switcher.
DASHBOARD_VIEWS: dict[str, tuple[ChartOptions, ...]] = {
    "sales": (ChartOptions.for_kind(ChartKind.BAR, "sales"),),
    "revenue": (ChartOptions.for_kind(ChartKind.BAR, "revenue"),),
    "pie": (
        ChartOptions.for_kind(ChartKind.BREAKDOWN_PIE, "sales"),
        ChartOptions.for_kind(ChartKind.BREAKDOWN_PIE, "revenue"),
    ),
    "line": (ChartOptions.for_kind(ChartKind.LINE),),
    "totals": (ChartOptions.for_kind(ChartKind.PIE),),
}


class Dashboard:
    """Switches between chart views; only the active view's sessions listen for resizes."""

    def __init__(
        self,
        events: ViewportEvents,
        *,
        source: StaticDataSource | None = None,
        config: ChartConfig | None = None,
        view: str = "sales",
    ) -> None:
        self.events = events
        self.source = source or StaticDataSource()
        self.config = config
        self.pipeline = create_pipeline(config)
        self.view = ""
        self.sessions: list[ChartSession] = []
        self.show(view)

    def show(self, view: str) -> list[ChartSession]:
        if view not in DASHBOARD_VIEWS:
            raise KeyError(f"Unknown dashboard view: {view!r} (known: {sorted(DASHBOARD_VIEWS)})")
        for session in self.sessions:
            session.unmount()
        self.sessions = [
            ChartSession(options, source=self.source, config=self.config, pipeline=self.pipeline)
            for options in DASHBOARD_VIEWS[view]
        ]
        for session in self.sessions:
            session.mount(self.events)
        logger.info("Dashboard view %s -> %s (%d charts)", self.view or "none", view, len(self.sessions))
        self.view = view
        return self.sessions
