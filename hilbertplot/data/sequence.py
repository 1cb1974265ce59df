"""Plain-text numeric sequences and their summary statistics."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import asdict, dataclass

import numpy as np
from numpy.typing import NDArray

_SEPARATORS = re.compile(r"[\s,;]+")


def parse_sequence(text: str) -> NDArray[np.float64]:
    """Numbers separated by whitespace, commas or semicolons."""
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    values = np.empty(len(tokens))
    for i, token in enumerate(tokens):
        try:
            values[i] = float(token)
        except ValueError:
            raise ValueError(f"Non-numeric token {token!r} at position {i}") from None
    return values


def format_sequence(values: Sequence[float] | NDArray[np.float64], sep: str = "\n") -> str:
    return sep.join(repr(float(v)) for v in values)


@dataclass
class SequenceSummary:
    length: int = 0
    minimum: float = 0.0
    maximum: float = 0.0
    mean: float = 0.0
    std: float = 0.0
    entropy: float = 0.0  # bits, one symbol per distinct value

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def shannon_entropy(values: NDArray[np.float64]) -> float:
    """Entropy in bits of the empirical distribution of distinct values."""
    if len(values) == 0:
        return 0.0
    _, counts = np.unique(values, return_counts=True)
    p = counts / counts.sum()
    return float(-(p * np.log2(p)).sum())


def summarize(values: Sequence[float] | NDArray[np.float64]) -> SequenceSummary:
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return SequenceSummary()
    return SequenceSummary(
        length=int(arr.size),
        minimum=float(arr.min()),
        maximum=float(arr.max()),
        mean=float(arr.mean()),
        std=float(arr.std()),
        entropy=shannon_entropy(arr),
    )
