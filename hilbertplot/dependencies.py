"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import Iterator

from hilbertplot.config import Settings, settings
from hilbertplot.engine.pool import ThreadPool


def get_settings() -> Settings:
    return settings


def get_pool() -> Iterator[ThreadPool]:
    """A thread pool scoped to one request."""
    with ThreadPool(settings.pool_workers or None) as pool:
        yield pool
