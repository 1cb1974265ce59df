"""PlotContext: the mutable state object flowing through all analyses.

Inputs are set by the caller; each analysis fills one product field or adds
entries to ``metrics``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from hilbertplot.data.sequence import SequenceSummary
from hilbertplot.engine.config import EngineConfig
from hilbertplot.engine.grammar import Family
from hilbertplot.engine.plot import HilbertPlot
from hilbertplot.engine.pool import ThreadPool


@dataclass
class PlotContext:
    # Inputs
    data: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))
    width: int = 0  # 0 with height 0: best-fit dimensions
    height: int = 0
    family: Family = Family.H0
    threshold: float | None = None  # None: config.image_threshold
    log_scale: bool | None = None  # None: config.spectrum_log_scale
    pool: ThreadPool | None = None
    config: EngineConfig | None = None  # None: the running pipeline's config

    # Products
    plot: HilbertPlot | None = None
    summary: SequenceSummary | None = None
    image: NDArray[np.float64] | None = None
    spectrum: NDArray[np.float64] | None = None
    metrics: dict[str, Any] = field(default_factory=dict)

    # Bookkeeping
    completed: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.config is not None:
            self.bind(self.config)

    def bind(self, config: EngineConfig) -> None:
        """Fill the config and any unset analysis defaults; explicit values win."""
        if self.config is None:
            self.config = config
        if self.threshold is None:
            self.threshold = self.config.image_threshold
        if self.log_scale is None:
            self.log_scale = self.config.spectrum_log_scale

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0

    def require_plot(self) -> HilbertPlot:
        if self.plot is None:
            raise RuntimeError("Plot has not been built")
        return self.plot
