"""A1.01 Data summary. Min, max, mean, std and entropy of the plotted values."""

from __future__ import annotations

from hilbertplot.data.sequence import summarize
from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A1.01",
    stage=Stage.METRICS,
    dependencies=["A0.01"],
    description="Summary statistics of the plotted (padded or truncated) values",
)
def data_summary(ctx: PlotContext) -> None:
    ctx.summary = summarize(ctx.require_plot().data_copy())
