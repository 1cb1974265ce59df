"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from hilbertplot.engine.pool import ThreadPool


# Reference traversal orders: (family, orientation, width, height) -> "x,y x,y ..."
GOLDEN = {
    ("H0", "A", 1, 3): "0,2 0,1 0,0",
    ("H0", "A", 3, 2): "0,0 1,0 0,1 1,1 2,1 2,0",
    ("H0", "A", 4, 4): "0,0 1,0 1,1 0,1 0,2 0,3 1,3 1,2 2,2 2,3 3,3 3,2 3,1 2,1 2,0 3,0",
    ("H1", "A", 4, 4): "1,0 0,0 0,1 1,1 1,2 0,2 0,3 1,3 2,3 3,3 3,2 2,2 2,1 3,1 3,0 2,0",
    ("H5", "C", 5, 3): "4,2 3,2 3,1 4,1 4,0 3,0 2,0 1,0 0,0 0,1 1,1 2,1 2,2 1,2 0,2",
    ("H12", "B", 4, 4): "0,0 0,1 1,1 1,0 2,0 3,0 3,1 2,1 2,2 3,2 3,3 2,3 1,3 1,2 0,2 0,3",
    ("H39", "D", 6, 5): (
        "3,4 4,4 5,4 5,3 4,3 3,3 2,3 1,3 2,4 1,4 0,4 0,3 1,2 0,2 1,1 "
        "0,1 0,0 1,0 2,0 2,1 2,2 3,2 4,2 4,1 3,1 3,0 4,0 5,0 5,1 5,2"
    ),
}


def parse_points(text: str) -> np.ndarray:
    return np.array([[int(v) for v in p.split(",")] for p in text.split()], dtype=np.int64)


@pytest.fixture(scope="session")
def pool():
    """One pool shared by the heavier build tests."""
    with ThreadPool(4) as p:
        yield p


@pytest.fixture
def twelve_values():
    return [3.0, 1.0, 4.0, 1.0, 5.0, 9.0, 2.0, 6.0, 5.0, 3.0, 5.0, 8.0]
