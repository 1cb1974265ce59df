"""Analysis registry: every plot analysis is a standalone function registered via decorator.

Usage:
    @analysis(id="A1.02", stage=Stage.METRICS, dependencies=["A0.01"])
    def discontinuity_metrics(ctx: PlotContext) -> None:
        ctx.metrics["discontinuity_mean"] = ctx.plot.mean_discontinuity
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from hilbertplot.engine.context import PlotContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    BUILD = 0
    METRICS = 1
    PRODUCTS = 2


@dataclass
class AnalysisSpec:
    id: str
    stage: Stage
    fn: Callable[["PlotContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class AnalysisRegistry:
    def __init__(self) -> None:
        self._analyses: dict[str, AnalysisSpec] = {}

    def register(self, spec: AnalysisSpec) -> None:
        if spec.id in self._analyses:
            raise ValueError(f"Duplicate analysis ID: {spec.id}")
        self._analyses[spec.id] = spec
        logger.debug("Registered analysis %s (%s)", spec.id, spec.stage.name)

    def get(self, analysis_id: str) -> AnalysisSpec:
        return self._analyses[analysis_id]

    def get_stage(self, stage: Stage) -> list[AnalysisSpec]:
        return sorted((s for s in self._analyses.values() if s.stage == stage), key=lambda s: s.id)

    def all(self) -> list[AnalysisSpec]:
        return sorted(self._analyses.values(), key=lambda s: (s.stage, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[AnalysisSpec]:
        """Dependency order; requested ids pull in their transitive dependencies."""
        pool = self._analyses
        if requested_ids is not None:
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                aid = stack.pop()
                if aid in expanded or aid not in pool:
                    continue
                expanded.add(aid)
                stack.extend(pool[aid].dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        # Kahn's algorithm, ties broken by id
        in_degree = {aid: sum(dep in pool for dep in spec.dependencies) for aid, spec in pool.items()}
        ready = sorted(aid for aid, d in in_degree.items() if d == 0)
        ordered: list[AnalysisSpec] = []
        while ready:
            aid = ready.pop(0)
            ordered.append(pool[aid])
            for other_id, other in pool.items():
                if aid in other.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        ready.append(other_id)
                        ready.sort()

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._analyses)


_registry = AnalysisRegistry()


def get_registry() -> AnalysisRegistry:
    return _registry


def analysis(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator registering an analysis function with the module registry."""

    def decorator(fn: Callable[["PlotContext"], None]):
        _registry.register(
            AnalysisSpec(
                id=id,
                stage=stage,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
