"""Divide-and-conquer reverse and elementwise map over numpy buffers.

Both operate in place on axis 0 and fall back to a single vectorised call
when no pool is given or the buffer is below the size threshold. Every task
owns a disjoint slice of the buffer.
"""

from __future__ import annotations

from typing import Callable

from numpy.typing import NDArray

from hilbertplot.engine.pool import ThreadPool

# Smallest symmetric block handed to a task by reverse_parallel
REVERSE_BLOCK_SIZE = 10_000

# map_parallel bisects only ranges of at least twice this many rows
MAP_MIN_PER_TASK = 10_000


def reverse_parallel(
    buf: NDArray,
    pool: ThreadPool | None = None,
    block_size: int = REVERSE_BLOCK_SIZE,
) -> None:
    """Reverse ``buf`` in place by swapping symmetric blocks in pool tasks."""
    n = len(buf)
    half = n // 2
    if pool is None or half < block_size:
        buf[:] = buf[::-1].copy()
        return

    for start in range(0, half, block_size):
        pool.submit(_swap_blocks, buf, start, min(start + block_size, half))
    pool.drain()


def _swap_blocks(buf: NDArray, start: int, stop: int) -> None:
    """Exchange buf[start:stop] with its mirror range, each reversed."""
    n = len(buf)
    low = buf[start:stop].copy()
    buf[start:stop] = buf[n - stop:n - start][::-1]
    buf[n - stop:n - start] = low[::-1]


def map_parallel(
    buf: NDArray,
    fn: Callable[[NDArray], NDArray],
    pool: ThreadPool | None = None,
    min_per_task: int = MAP_MIN_PER_TASK,
) -> None:
    """Replace every block ``buf[a:b]`` with ``fn(buf[a:b])``.

    ``fn`` must be elementwise along axis 0 so the result does not depend on
    how the range is split.
    """
    if pool is None:
        buf[:] = fn(buf)
        return
    _map_range(buf, fn, pool, 0, len(buf), min_per_task)
    pool.drain()


def _map_range(
    buf: NDArray,
    fn: Callable[[NDArray], NDArray],
    pool: ThreadPool,
    start: int,
    stop: int,
    min_per_task: int,
) -> None:
    length = stop - start
    if length < 2 * min_per_task:
        buf[start:stop] = fn(buf[start:stop])
        return
    mid = start + length // 2
    pool.submit(_map_range, buf, fn, pool, start, mid, min_per_task)
    _map_range(buf, fn, pool, mid, stop, min_per_task)

