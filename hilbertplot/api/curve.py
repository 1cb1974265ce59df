"""Curve endpoints: points, SVG export and best-fit dimensions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from hilbertplot.config import Settings
from hilbertplot.dependencies import get_pool, get_settings
from hilbertplot.engine.curve import Curve, build_curve
from hilbertplot.engine.plot import best_dimensions
from hilbertplot.engine.pool import ThreadPool
from hilbertplot.models.requests import CurveRequest
from hilbertplot.models.responses import CurveResponse, DimensionsResponse
from hilbertplot.svg.serializer import curve_to_svg

router = APIRouter()


def _build(req: CurveRequest, pool: ThreadPool, cfg: Settings) -> Curve:
    if req.width * req.height > cfg.max_plot_cells:
        raise HTTPException(
            status_code=400,
            detail=f"{req.width}x{req.height} exceeds the {cfg.max_plot_cells} cell limit",
        )
    return build_curve(
        req.family,
        req.width,
        req.height,
        req.origin,
        req.orientation,
        discontinuity=req.discontinuity,
        pool=pool,
    )


@router.post("/curve", response_model=CurveResponse)
def curve(
    req: CurveRequest,
    pool: ThreadPool = Depends(get_pool),
    cfg: Settings = Depends(get_settings),
) -> CurveResponse:
    built = _build(req, pool, cfg)
    return CurveResponse(
        family=built.family.name,
        orientation=built.orientation.name,
        width=built.width,
        height=built.height,
        origin=built.origin,
        points=[(int(x), int(y)) for x, y in built.coordinates],
        discontinuity=built.discontinuity.tolist() if built.has_discontinuity else None,
        mean_discontinuity=built.mean_discontinuity if built.has_discontinuity else None,
    )


@router.post("/curve/svg")
def curve_svg(
    req: CurveRequest,
    pool: ThreadPool = Depends(get_pool),
    cfg: Settings = Depends(get_settings),
) -> Response:
    built = _build(req, pool, cfg)
    svg = curve_to_svg(built, title=f"{built.family.name} {built.width}x{built.height}")
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/dimensions/{length}", response_model=DimensionsResponse)
async def dimensions(length: int) -> DimensionsResponse:
    if length < 0:
        raise HTTPException(status_code=400, detail="length must be non-negative")
    width, height = best_dimensions(length)
    return DimensionsResponse(length=length, width=width, height=height)
