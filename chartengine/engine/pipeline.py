"""Pipeline orchestrator — runs the stages an event affects, in dependency order."""

from __future__ import annotations

import logging
import time

from chartengine.engine.config import ChartConfig
from chartengine.engine.context import RenderContext
from chartengine.engine.kinds import Event
from chartengine.engine.registry import StageRegistry, get_registry
from chartengine.errors import EmptySeriesError

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates one derivation pass per event."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: ChartConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or ChartConfig()

    def run(self, ctx: RenderContext, event: Event = Event.INITIAL) -> RenderContext:
        """Run the stages affected by ``event`` on a fork of ``ctx`` and return the fork.

        ``ctx`` itself is never modified, so a pass that raises leaves the
        caller's last good context untouched. EmptySeriesError does not
        abort: the fork switches to a placeholder and the stages downstream
        of the failing one are skipped.
        """
        start = time.perf_counter()
        work = ctx.fork()

        affected = self.registry.affected_by(event.changed_inputs)
        ordered = self.registry.resolve_order(affected, include_dependencies=False)
        logger.debug("Pass %s: %d stages queued", event.value, len(ordered))

        blocked: set[str] = set()
        for spec in ordered:
            if any(dep in blocked for dep in spec.dependencies):
                blocked.add(spec.id)
                work.skipped_stages.append(spec.id)
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(work)
            except EmptySeriesError as e:
                logger.info("  %s: %s; showing placeholder", spec.id, e)
                work.clear_geometry()
                work.placeholder = work.config.placeholder_text
                blocked.add(spec.id)
                work.skipped_stages.append(spec.id)
                continue
            work.completed_stages.append(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        work.generation = ctx.generation + 1
        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pass %s complete: %d/%d stages in %.1fms%s",
            event.value,
            len(work.completed_stages),
            len(ordered),
            total,
            " (placeholder)" if work.placeholder else "",
        )
        return work


def create_pipeline(config: ChartConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline with the built-in stages registered."""
    import chartengine.engine.stages  # noqa: F401  (registers stages)

    return Pipeline(config=config)
