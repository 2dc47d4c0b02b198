"""Stage registry — every derivation stage is a function registered via decorator.

Usage:
    @stage(id="axes", dependencies=["scales"], description="Axis ticks")
    def axes(ctx: RenderContext) -> None:
        ctx.ticks = build_ticks(ctx.x_scale, ctx.y_scale)

A stage declares the inputs it reads directly; an event re-runs exactly the
stages reading a changed input plus everything downstream of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from chartengine.engine.kinds import Input

if TYPE_CHECKING:
    from chartengine.engine.context import RenderContext

logger = logging.getLogger(__name__)


@dataclass
class StageSpec:
    id: str
    fn: Callable[["RenderContext"], None]
    dependencies: list[str] = field(default_factory=list)
    inputs: set[Input] = field(default_factory=set)
    description: str = ""


class StageRegistry:
    """Registry of derivation stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (inputs=%s)", spec.id, sorted(i.value for i in spec.inputs))

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: s.id)

    def dependents(self, stage_ids: set[str]) -> set[str]:
        """``stage_ids`` plus every stage that transitively depends on one of them."""
        result = set(stage_ids)
        changed = True
        while changed:
            changed = False
            for sid, spec in self._stages.items():
                if sid not in result and any(d in result for d in spec.dependencies):
                    result.add(sid)
                    changed = True
        return result

    def affected_by(self, inputs: set[Input] | frozenset[Input]) -> set[str]:
        readers = {sid for sid, spec in self._stages.items() if spec.inputs & inputs}
        return self.dependents(readers)

    def resolve_order(
        self,
        requested_ids: set[str] | None = None,
        include_dependencies: bool = True,
    ) -> list[StageSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all.

        With ``include_dependencies=False`` only the requested stages are
        ordered; their upstream results are assumed to be current already.
        """
        pool = self._stages
        if requested_ids is not None:
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                sid = stack.pop()
                if sid in expanded:
                    continue
                expanded.add(sid)
                spec = pool.get(sid)
                if spec and include_dependencies:
                    stack.extend(spec.dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        # Kahn's algorithm
        in_degree: dict[str, int] = {sid: 0 for sid in pool}
        for sid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[sid] += 1

        queue = sorted([sid for sid, d in in_degree.items() if d == 0])
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(pool[sid])
            for other_id, other_spec in pool.items():
                if sid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    dependencies: list[str] | None = None,
    inputs: set[Input] | None = None,
    description: str = "",
    registry: StageRegistry | None = None,
):
    """Decorator to register a derivation stage."""

    def decorator(fn: Callable[["RenderContext"], None]):
        spec = StageSpec(
            id=id,
            fn=fn,
            dependencies=dependencies or [],
            inputs=inputs or set(),
            description=description,
        )
        (registry or _registry).register(spec)
        return fn

    return decorator
