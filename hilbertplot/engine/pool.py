"""Worker thread pool with a FIFO task queue and caller-side "helping" drains.

One pool is created per top-level build and handed down explicitly:

    with ThreadPool() as pool:
        pool.submit(build_region, child, buf, index, pool)
        ...
        pool.drain()   # run queued tasks here until none are outstanding

``drain`` never blocks on a future. The calling thread keeps popping and
running tasks until the outstanding counter reaches zero, then re-raises the
first exception any task raised.
"""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from collections import deque
from typing import Any, Callable

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Hardware concurrency minus one, never less than one."""
    return max(1, (os.cpu_count() or 1) - 1)


class ThreadPool:
    """Fixed set of worker threads sharing one mutex-guarded FIFO queue."""

    def __init__(self, workers: int | None = None, name: str = "hilbert") -> None:
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._tasks: deque[Callable[[], Any]] = deque()
        self._lock = threading.Lock()
        self._wakeup = threading.Condition(self._lock)
        self._outstanding = 0
        self._done = False
        self._errors: list[Exception] = []

        count = workers or default_worker_count()
        self._threads = [
            threading.Thread(target=self._worker, name=f"{name}-{i}", daemon=True)
            for i in range(count)
        ]
        for thread in self._threads:
            thread.start()
        logger.debug("ThreadPool %s started with %d workers", name, count)

    # ── Submission ──

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Queue ``fn(*args, **kwargs)`` for execution by any thread."""
        task = functools.partial(fn, *args, **kwargs)
        with self._wakeup:
            if self._done:
                raise RuntimeError("submit() on a pool that has been shut down")
            self._tasks.append(task)
            self._outstanding += 1
            self._wakeup.notify()

    def run_task(self) -> bool:
        """Pop and run one queued task on the calling thread.

        Returns False when the queue was empty.
        """
        with self._lock:
            if not self._tasks:
                return False
            task = self._tasks.popleft()
        self._execute(task)
        return True

    def is_working(self) -> bool:
        """True while any submitted task has not finished."""
        with self._lock:
            return self._outstanding > 0

    def drain(self) -> None:
        """Help run queued tasks until none are outstanding."""
        while self.is_working():
            if not self.run_task():
                time.sleep(0)
        with self._lock:
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]

    # ── Lifecycle ──

    @property
    def worker_count(self) -> int:
        return len(self._threads)

    @property
    def pending(self) -> int:
        """Tasks queued but not yet picked up."""
        with self._lock:
            return len(self._tasks)

    def shutdown(self) -> None:
        """Let workers finish the queue, then join them."""
        with self._wakeup:
            if self._done:
                return
            self._done = True
            self._wakeup.notify_all()
        for thread in self._threads:
            thread.join()
        logger.debug("ThreadPool shut down (%d workers joined)", len(self._threads))

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    # ── Internals ──

    def _worker(self) -> None:
        while True:
            with self._wakeup:
                while not self._tasks and not self._done:
                    self._wakeup.wait()
                if not self._tasks:
                    return
                task = self._tasks.popleft()
            self._execute(task)

    def _execute(self, task: Callable[[], Any]) -> None:
        try:
            task()
        except Exception as e:
            logger.warning("Pool task failed: %s", e)
            with self._lock:
                self._errors.append(e)
        finally:
            with self._lock:
                self._outstanding -= 1
