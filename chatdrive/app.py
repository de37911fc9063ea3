"""
FastAPI application entry point for chatdrive.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatdrive.config import get_settings
from chatdrive.db import DbClient
from chatdrive.dependencies import get_db_client
from chatdrive.routes import router


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(db: DbClient | None = None) -> FastAPI:
    """
    Build the application. Passing ``db`` pins the store handle used by every
    route instead of the process-wide one.
    """
    settings = get_settings()
    app = FastAPI(title="chatdrive", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(router)
    if db is not None:
        app.dependency_overrides[get_db_client] = lambda: db
    return app


app = create_app()
