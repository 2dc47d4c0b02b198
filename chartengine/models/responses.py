"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class RenderResponse(BaseModel):
    frame: dict[str, Any]
    processing_time_ms: float = 0.0
    stages_completed: list[str] = Field(default_factory=list)
    stages_skipped: list[str] = Field(default_factory=list)


class TooltipResponse(BaseModel):
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    content: str = ""
    target: str | None = None
