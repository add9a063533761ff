"""FastAPI application factory.

Start with:
    uvicorn dustfree_api.app:app --reload --port 8000
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from dustfree_shared.config import settings

from dustfree_api.errors import DustfreeError
from dustfree_api.middleware.logging import LoggingMiddleware
from dustfree_api.responses import error_response
from dustfree_api.routers.health import router as health_router
from dustfree_api.routers.v1 import v1_router
from dustfree_api.utils.logging import configure_logging

logger = structlog.get_logger()


async def _dustfree_error(request: Request, exc: DustfreeError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.code, exc.message, details=exc.details),
    )


async def _database_error(request: Request, exc: APIError) -> JSONResponse:
    logger.error("database_error", code=exc.code, error=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=502,
        content=error_response(
            "database_error",
            exc.message or "Database request failed",
            details={"upstream_code": exc.code} if exc.code else None,
        ),
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Dustfree API",
        description="Cleaning operations for short-term rental hosts and their cleaners",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(DustfreeError, _dustfree_error)
    app.add_exception_handler(APIError, _database_error)

    # Routers
    app.include_router(health_router)
    app.include_router(v1_router)

    logger.info("app_created", cors_origins=settings.cors_origins_list)
    return app


app = create_app()
