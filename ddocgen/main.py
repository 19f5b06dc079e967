#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------

"""
ddocgen — FastAPI Application
=============================
Entry point.  Start with:
    uvicorn ddocgen.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ddocgen.core.config import get_settings
from ddocgen.routes import macros, render
from ddocgen.services.macros import register_all_builtins


def create_app() -> FastAPI:
    settings = get_settings()
    register_all_builtins()   # builtins live in the shared registry

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Documentation macro renderer",
        debug=settings.debug,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────
    API = "/api/v1"
    app.include_router(render.router, prefix=API)
    app.include_router(macros.router, prefix=API)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/api/docs",
        }

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
