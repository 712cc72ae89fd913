# -*- coding: utf-8 -*-
"""
FitCoach API

Coaching backend: timer tools, gamification, weekly AI summaries,
meal-photo scans, training logs and the admin console.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .admin.api import router as admin_router
from .analyses.api import router as analyses_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .gamification.api import router as gamification_router
from .goals.api import router as goals_router
from .meal_plans.api import router as meal_plans_router
from .meal_scans.api import router as meal_scans_router
from .performance.api import router as performance_router
from .plans.api import router as plans_router
from .summary.api import router as summary_router
from .timeutil import iso_now
from .tools.api import router as tools_router

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Reachable without a session.
PUBLIC_PATHS = ("/api/health",)
PUBLIC_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)

app = FastAPI(
    title="FitCoach",
    description="Timer tools, streaks, weekly summaries and meal scans",
    version=API_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for _router in (
    auth_router,
    tools_router,
    gamification_router,
    summary_router,
    analyses_router,
    plans_router,
    meal_plans_router,
    goals_router,
    performance_router,
    meal_scans_router,
    admin_router,
):
    app.include_router(_router)

# Test clients may skip startup events, so the schema is created at import as well.
init_app_db(settings.app_db_path)


@app.on_event("startup")
def _ensure_schema() -> None:
    init_app_db(settings.app_db_path)


def requires_session(path: str) -> bool:
    if not path.startswith("/api") or path in PUBLIC_PATHS:
        return False
    return not path.startswith(PUBLIC_PREFIXES)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    if requires_session(request.url.path):
        try:
            get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)
    return await call_next(request)


@app.get("/api/health", summary="Liveness probe")
def health_check():
    return {"status": "ok", "version": API_VERSION, "timestamp": iso_now()}


def _env_port(default: int = 8000) -> int:
    raw = os.environ.get("FITCOACH_PORT") or os.environ.get("PORT")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring invalid port %r, using %d", raw, default)
        return default


def run() -> None:
    """Console entry point (``fitcoach`` script)."""
    import uvicorn

    logging.basicConfig(level=os.environ.get("FITCOACH_LOG_LEVEL", "INFO"))
    host = os.environ.get("FITCOACH_HOST") or os.environ.get("HOST") or "127.0.0.1"
    uvicorn.run("fitcoach.api:app", host=host, port=_env_port(), reload=False)
