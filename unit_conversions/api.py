"""
FastAPI app entry point aggregating routers under unit_conversions/routes.
Run with `uvicorn unit_conversions.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI

from . import __version__
from .logs import ensure_log_schema
from .services.conversion_time_svc import ensure_schema

app = FastAPI(title="unit-conversions-api", version=__version__)


@app.on_event("startup")
async def on_startup():
    ensure_log_schema()
    await ensure_schema()


from .routes import base as base_routes
from .routes import conversions_time as conversions_time_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(conversions_time_routes.router)
app.include_router(logs_routes.router)
