"""A2.02 Spectrum. DC-centred power spectrum in traversal order."""

from __future__ import annotations

from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import Stage, analysis


@analysis(
    id="A2.02",
    stage=Stage.PRODUCTS,
    dependencies=["A0.01"],
    description="Clamped, normalised 2-D power spectrum re-addressed along the curve",
)
def spectrum(ctx: PlotContext) -> None:
    ctx.spectrum = ctx.require_plot().spectral_magnitude(ctx.log_scale)
