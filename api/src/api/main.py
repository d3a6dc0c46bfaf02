"""FastAPI application factory."""

from __future__ import annotations

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shefa.config import get_settings
from shefa.errors import InvalidInputError, ShefaError

from api.routers import charts, geocode, health, insight, interpret, sky

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


async def _shefa_error_handler(request: Request, exc: ShefaError) -> JSONResponse:
    content: dict = {"detail": str(exc), "kind": exc.kind}
    if isinstance(exc, InvalidInputError):
        content["field"] = exc.field
        status_code = 422
    else:
        logger.error("Unhandled %s on %s: %s", exc.kind, request.url.path, exc)
        status_code = 502
    return JSONResponse(status_code=status_code, content=content)


def create_app() -> FastAPI:
    app = FastAPI(title="Shefa API", version="0.1.0")
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ShefaError, _shefa_error_handler)
    app.include_router(health.router, tags=["health"])
    app.include_router(sky.router, prefix="/v1/sky", tags=["sky"])
    app.include_router(charts.router, prefix="/v1/charts", tags=["charts"])
    app.include_router(insight.router, prefix="/v1", tags=["insight"])
    app.include_router(interpret.router, prefix="/v1", tags=["tarot"])
    app.include_router(geocode.router, prefix="/v1/geocode", tags=["geocode"])
    return app


app = create_app()
