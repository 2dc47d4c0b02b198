"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from chartengine.engine.kinds import ChartKind
from chartengine.engine.theme import ThemeSelector


class ChartRequest(BaseModel):
    kind: ChartKind = Field(..., description="Chart kind (pie, breakdown_pie, line, bar)")
    theme: ThemeSelector | None = Field(default=None, description="Theme selector; server default when omitted")
    viewport_width: float | None = Field(default=None, ge=0, description="Viewport width in px")
    metric: str | None = Field(default=None, description="Metric for bar and breakdown pie charts")


class RenderRequest(ChartRequest):
    format: Literal["json", "svg"] = Field(default="json", description="Response body format")


class HoverRequest(ChartRequest):
    x: float = Field(..., description="Pointer x coordinate")
    y: float = Field(..., description="Pointer y coordinate")
