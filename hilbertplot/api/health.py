"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from hilbertplot import __version__
from hilbertplot.engine.grammar import Family, child_families
from hilbertplot.engine.registry import get_registry
from hilbertplot.models.responses import FamilyInfo, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        families=len(Family),
        analyses_registered=get_registry().count,
    )


@router.get("/families", response_model=list[FamilyInfo])
async def families() -> list[FamilyInfo]:
    return [
        FamilyInfo(name=f.name, children=[c.name for c in child_families(f)])
        for f in Family
    ]
