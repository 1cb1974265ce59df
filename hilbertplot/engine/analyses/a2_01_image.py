"""A2.01 Image. Normalised intensity matrix with discontinuity sentinels."""

from __future__ import annotations

from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A2.01",
    stage=Stage.PRODUCTS,
    dependencies=["A0.01"],
    description="Min/max-normalised image, sentinel 2 above the threshold",
)
def image(ctx: PlotContext) -> None:
    ctx.image = ctx.require_plot().generate_image(ctx.threshold)
