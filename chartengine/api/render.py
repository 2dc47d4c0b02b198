"""POST /api/render and /api/hover — one-shot chart sessions over the sample data."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from chartengine.config import Settings
from chartengine.data.source import StaticDataSource
from chartengine.dependencies import get_data_source, get_settings
from chartengine.engine.context import ChartOptions
from chartengine.engine.session import ChartSession
from chartengine.models.requests import ChartRequest, HoverRequest, RenderRequest
from chartengine.models.responses import RenderResponse, TooltipResponse
from chartengine.render.payload import frame_to_dict
from chartengine.render.svg_driver import SvgRenderDriver

router = APIRouter()


def _open_session(req: ChartRequest, settings: Settings, source: StaticDataSource) -> ChartSession:
    """Build a session for the request and run its first pass; re-raises the pass error."""
    session = ChartSession(
        ChartOptions.for_kind(req.kind, req.metric),
        source=source,
        theme=req.theme or settings.default_theme,
        viewport_width=req.viewport_width if req.viewport_width is not None else settings.default_viewport_width,
    )
    if session.render() is None:
        raise session.last_error
    return session


@router.post("/render", response_model=None)
async def render(
    req: RenderRequest,
    settings: Settings = Depends(get_settings),
    source: StaticDataSource = Depends(get_data_source),
) -> RenderResponse | Response:
    start = time.perf_counter()
    session = _open_session(req, settings, source)
    frame = session.frame

    if req.format == "svg":
        return Response(content=SvgRenderDriver().render(frame), media_type="image/svg+xml")

    elapsed = (time.perf_counter() - start) * 1000
    ctx = session.context
    return RenderResponse(
        frame=frame_to_dict(frame),
        processing_time_ms=round(elapsed, 1),
        stages_completed=ctx.completed_stages,
        stages_skipped=ctx.skipped_stages,
    )


@router.post("/hover", response_model=TooltipResponse)
async def hover(
    req: HoverRequest,
    settings: Settings = Depends(get_settings),
    source: StaticDataSource = Depends(get_data_source),
) -> TooltipResponse:
    session = _open_session(req, settings, source)
    tooltip = session.pointer_move(req.x, req.y)
    return TooltipResponse(
        visible=tooltip.visible,
        x=tooltip.x,
        y=tooltip.y,
        content=tooltip.content,
        target=session.hover_state.target_id,
    )
