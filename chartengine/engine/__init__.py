"""Chart geometry engine: scales, layout, theme, interaction and the derivation pipeline."""

from chartengine.engine.context import ChartOptions, RenderContext, RenderFrame
from chartengine.engine.kinds import ChartKind, Event, Input
from chartengine.engine.pipeline import Pipeline, create_pipeline
from chartengine.engine.registry import StageRegistry, get_registry, stage
from chartengine.engine.session import ChartSession, Dashboard, ViewportEvents

__all__ = [
    "ChartKind",
    "ChartOptions",
    "ChartSession",
    "Dashboard",
    "Event",
    "Input",
    "Pipeline",
    "RenderContext",
    "RenderFrame",
    "StageRegistry",
    "ViewportEvents",
    "create_pipeline",
    "get_registry",
    "stage",
]
