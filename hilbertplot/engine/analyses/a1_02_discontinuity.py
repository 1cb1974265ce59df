"""A1.02 Discontinuity metrics.

Mean and maximum cell discontinuity of the curve, and how many cells exceed
``hotspot_ratio`` times the mean.
"""

from __future__ import annotations

from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A1.02",
    stage=Stage.METRICS,
    dependencies=["A0.01"],
    description="Mean, max and hotspot count of the discontinuity map",
)
def discontinuity_metrics(ctx: PlotContext) -> None:
    curve = ctx.require_plot().curve
    scores = curve.discontinuity
    mean = curve.mean_discontinuity

    ctx.metrics["discontinuity_mean"] = mean
    ctx.metrics["discontinuity_max"] = float(scores.max()) if scores.size else 0.0
    if mean > 0:
        ctx.metrics["discontinuity_hotspots"] = int((scores / mean > ctx.config.hotspot_ratio).sum())
    else:
        ctx.metrics["discontinuity_hotspots"] = 0
