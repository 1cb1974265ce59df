"""Engine configuration: parallelism thresholds and analysis defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Tunables shared by curve builds, plots and the analysis pipeline."""

    # Parallel primitives
    reverse_block_size: int = 10_000  # rows per symmetric block swap
    map_min_per_task: int = 10_000  # bisect only ranges >= 2x this

    # Pool size for builds that create their own pool (None: cpu_count - 1)
    pool_workers: int | None = None

    # Image generation
    image_threshold: float = 0.0  # 0 disables the discontinuity sentinel

    # Spectrum
    spectrum_log_scale: bool = True

    # Discontinuity / mean ratio above which a cell counts as a hotspot
    hotspot_ratio: float = 2.0
