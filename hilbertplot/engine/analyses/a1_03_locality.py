"""A1.03 Locality. Step lengths between consecutive curve points."""

from __future__ import annotations

import numpy as np

from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A1.03",
    stage=Stage.METRICS,
    dependencies=["A0.01"],
    description="Fraction of unit steps and mean Manhattan step length",
)
def locality(ctx: PlotContext) -> None:
    coords = ctx.require_plot().curve.coordinates
    if len(coords) < 2:
        ctx.metrics["unit_step_fraction"] = 1.0
        ctx.metrics["mean_step_length"] = 0.0
        return
    steps = np.abs(np.diff(coords, axis=0)).sum(axis=1)
    ctx.metrics["unit_step_fraction"] = float((steps == 1).mean())
    ctx.metrics["mean_step_length"] = float(steps.mean())
