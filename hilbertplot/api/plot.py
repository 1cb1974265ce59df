"""Plot endpoints: full analysis and PNG rendering."""

from __future__ import annotations

import logging
import time

import numpy as np
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from hilbertplot.config import Settings
from hilbertplot.data.sequence import parse_sequence
from hilbertplot.dependencies import get_pool, get_settings
from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.grammar import Family
from hilbertplot.engine.pipeline import create_pipeline
from hilbertplot.engine.plot import HilbertPlot, best_dimensions
from hilbertplot.engine.pool import ThreadPool
from hilbertplot.models.requests import PlotRequest
from hilbertplot.models.responses import PlotAnalysisResponse
from hilbertplot.utils.render import image_to_png

logger = logging.getLogger(__name__)

router = APIRouter()


def _values(req: PlotRequest, cfg: Settings) -> np.ndarray:
    if req.text is not None:
        try:
            values = parse_sequence(req.text)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    else:
        values = np.asarray(req.data, dtype=np.float64)

    if req.width and req.height:
        width, height = req.width, req.height
    else:
        width, height = best_dimensions(len(values))
    if width * height > cfg.max_plot_cells:
        raise HTTPException(
            status_code=400,
            detail=f"{width}x{height} exceeds the {cfg.max_plot_cells} cell limit",
        )
    return values


@router.post("/plot/analyze", response_model=PlotAnalysisResponse)
def analyze(
    req: PlotRequest,
    pool: ThreadPool = Depends(get_pool),
    cfg: Settings = Depends(get_settings),
) -> PlotAnalysisResponse:
    start = time.perf_counter()
    ctx = PlotContext(
        data=_values(req, cfg),
        width=req.width,
        height=req.height,
        family=Family[req.family],
        threshold=req.threshold,
        log_scale=req.log_scale,
        pool=pool,
    )
    create_pipeline().run(ctx)
    if ctx.plot is None:
        raise HTTPException(status_code=400, detail=ctx.errors.get("A0.01", "Plot could not be built"))
    plot = ctx.plot

    return PlotAnalysisResponse(
        width=plot.width,
        height=plot.height,
        family=plot.family.name,
        summary=ctx.summary.to_dict() if ctx.summary else {},
        metrics=ctx.metrics,
        image=ctx.image.tolist() if req.include_image and ctx.image is not None else None,
        spectrum=ctx.spectrum.tolist() if req.include_spectrum and ctx.spectrum is not None else None,
        completed=sorted(ctx.completed),
        errors=ctx.errors,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )


@router.post("/plot/image.png")
def image_png(
    req: PlotRequest,
    scale: int = 8,
    pool: ThreadPool = Depends(get_pool),
    cfg: Settings = Depends(get_settings),
) -> Response:
    values = _values(req, cfg)
    plot = HilbertPlot(values, req.width, req.height, Family[req.family], pool=pool)
    if len(plot) == 0:
        raise HTTPException(status_code=400, detail="Cannot render an empty plot")
    threshold = req.threshold if req.threshold is not None else plot.config.image_threshold
    png = image_to_png(plot.generate_image(threshold), scale=max(1, min(scale, 64)))
    logger.debug("Rendered %dx%d plot to %d PNG bytes", plot.width, plot.height, len(png))
    return Response(content=png, media_type="image/png")
