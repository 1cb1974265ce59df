"""A0.01 Build plot. Lays the data out along the requested curve."""

from __future__ import annotations

from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.plot import HilbertPlot
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A0.01",
    stage=Stage.BUILD,
    description="Bind the data sequence to a curve of the requested family",
)
def build_plot(ctx: PlotContext) -> None:
    ctx.plot = HilbertPlot(
        ctx.data, ctx.width, ctx.height, ctx.family, pool=ctx.pool, config=ctx.config
    )
    ctx.metrics["width"] = ctx.plot.width
    ctx.metrics["height"] = ctx.plot.height
    ctx.metrics["padded"] = max(0, len(ctx.plot) - len(ctx.data))
    ctx.metrics["truncated"] = max(0, len(ctx.data) - len(ctx.plot))
