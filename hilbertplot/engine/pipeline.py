"""Pipeline orchestrator: runs analyses in dependency order with adaptive gating."""

from __future__ import annotations

import logging
import time

from hilbertplot.engine.config import EngineConfig
from hilbertplot.engine.context import PlotContext
from hilbertplot.engine.registry import AnalysisRegistry, AnalysisSpec, Stage, get_registry

logger = logging.getLogger(__name__)

# Analyses that need at least one data value
_SPECTRAL = {"A2.02"}


class Pipeline:
    def __init__(
        self,
        registry: AnalysisRegistry | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or EngineConfig()

    def run(self, ctx: PlotContext) -> PlotContext:
        """Run every registered analysis not gated out for ``ctx``."""
        start = time.perf_counter()
        ctx.bind(self.config)
        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info("Pipeline: %d analyses queued (%d skipped)", len(ordered), len(skip_ids))

        for spec in ordered:
            self._run_one(ctx, spec)

        logger.info(
            "Pipeline complete: %d/%d analyses in %.0fms",
            len(ctx.completed),
            len(ordered),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def run_stage(self, ctx: PlotContext, stage: Stage) -> PlotContext:
        """Run only the analyses of one stage."""
        ctx.bind(self.config)
        for spec in self.registry.get_stage(stage):
            self._run_one(ctx, spec)
        return ctx

    def _run_one(self, ctx: PlotContext, spec: AnalysisSpec) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed.add(spec.id)
            logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)

    def _adaptive_gate(self, ctx: PlotContext) -> set[str]:
        """Empty data has no spectrum."""
        skip: set[str] = set()
        if ctx.is_empty:
            skip.update(_SPECTRAL)
        return skip


def create_pipeline(config: EngineConfig | None = None) -> Pipeline:
    return Pipeline(config=config)


def register_analyses() -> None:
    """Import every analysis module so the @analysis decorators fire."""
    import importlib
    import pkgutil

    from hilbertplot.engine import analyses

    for _, module_name, _ in pkgutil.iter_modules(analyses.__path__):
        importlib.import_module(f"{analyses.__name__}.{module_name}")
