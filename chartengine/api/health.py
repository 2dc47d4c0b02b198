"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from chartengine import __version__
from chartengine.engine.kinds import ChartKind
from chartengine.engine.registry import get_registry
from chartengine.engine.session import DASHBOARD_VIEWS
from chartengine.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        stages_registered=get_registry().count,
    )


@router.get("/kinds")
async def kinds() -> dict[str, list[str]]:
    return {
        "kinds": [k.value for k in ChartKind],
        "views": sorted(DASHBOARD_VIEWS),
    }
