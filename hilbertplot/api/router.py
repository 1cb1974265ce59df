"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from hilbertplot.api import curve, health, plot

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(curve.router)
api_router.include_router(plot.router)
