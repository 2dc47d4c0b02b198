"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chartengine import __version__
from chartengine.config import settings
from chartengine.errors import ChartError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.chartengine_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def chart_error_handler(request: Request, exc: ChartError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="ChartEngine",
        description="Sales chart geometry engine — scales, shapes, layout and hover for dashboard charts",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ChartError, chart_error_handler)

    # Import stage modules so @stage decorators fire
    _register_stages()

    from chartengine.api.router import api_router

    app.include_router(api_router)

    return app


def _register_stages() -> None:
    import chartengine.engine.stages  # noqa: F401


app = create_app()
