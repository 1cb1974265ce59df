"""HilbertPlot: a data sequence laid out along a curve.

Value ``i`` of the sequence sits on curve point ``i``. The (x, y) lookup
table maps grid cells back to traversal indices, so values can be read by
either address. Two analysis products are derived from the layout: a
min/max-normalised intensity image with optional discontinuity sentinels,
and the DC-centred 2-D power spectrum re-addressed in traversal order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
import scipy.fft
from numpy.typing import ArrayLike, NDArray

from hilbertplot.engine.config import EngineConfig
from hilbertplot.engine.curve import Curve
from hilbertplot.engine.grammar import Family
from hilbertplot.engine.point import Point
from hilbertplot.engine.pool import ThreadPool
from hilbertplot.errors import DegenerateOperationError, OutOfRangeError, SizeMismatchError

logger = logging.getLogger(__name__)

# Image cells whose discontinuity ratio exceeds the threshold get this value
SENTINEL = 2.0


def best_dimensions(length: int) -> tuple[int, int]:
    """(width, height) closest to a square that wastes the fewest cells on ``length``.

    Perfect squares map to themselves. Otherwise the candidates are f x f,
    c x c and c x f (c wide, f high) with f = floor(sqrt(L)) and c = f + 1;
    ties go to the later candidate.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    floor = math.isqrt(length)
    if floor * floor == length:
        return (floor, floor)
    ceil = floor + 1

    waste_floor = abs(length - floor * floor)
    waste_ceil = abs(length - ceil * ceil)
    waste_rect = abs(length - floor * ceil)
    if waste_floor < waste_ceil:
        return (floor, floor) if waste_floor < waste_rect else (ceil, floor)
    return (ceil, ceil) if waste_ceil < waste_rect else (ceil, floor)


def _fit(values: NDArray[np.float64], cells: int) -> NDArray[np.float64]:
    """Truncate or zero-pad to exactly ``cells`` values."""
    if len(values) >= cells:
        return values[:cells].copy()
    return np.concatenate([values, np.zeros(cells - len(values))])


class HilbertPlot:
    """A data sequence bound to a curve, with (x, y) and index access."""

    def __init__(
        self,
        data: ArrayLike,
        width: int = 0,
        height: int = 0,
        family: Family | str | int = Family.H0,
        *,
        pool: ThreadPool | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        values = np.asarray(data, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError(f"Plot data must be one-dimensional, got shape {values.shape}")
        if width == 0 or height == 0:
            width, height = best_dimensions(len(values))

        self.config = config or EngineConfig()
        self.curve = Curve(width, height, family, discontinuity=True, pool=pool, config=self.config)
        self._data = _fit(values, width * height)

        # lookup[x, y] -> traversal index
        coords = self.curve.coordinates
        self._lookup = np.zeros((width, height), dtype=np.int64)
        self._lookup[coords[:, 0], coords[:, 1]] = np.arange(len(coords))
        self._refresh_range()
        logger.debug(
            "Plot %dx%d (%s) from %d values", width, height, self.curve.family.name, len(values)
        )

    best_dimensions = staticmethod(best_dimensions)

    # ── Shape ──

    @property
    def width(self) -> int:
        return self.curve.width

    @property
    def height(self) -> int:
        return self.curve.height

    @property
    def family(self) -> Family:
        return self.curve.family

    @property
    def minimum(self) -> float:
        return self._min

    @property
    def maximum(self) -> float:
        return self._max

    @property
    def mean_discontinuity(self) -> float:
        return self.curve.mean_discontinuity

    def __len__(self) -> int:
        return len(self._data)

    # ── Addressing ──

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._data):
            raise OutOfRangeError(f"Index {index} outside plot of length {len(self._data)}")

    def index_of(self, x: int, y: int) -> int:
        """Traversal index of cell (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeError(f"Cell ({x}, {y}) outside {self.width}x{self.height} plot")
        return int(self._lookup[x, y])

    def point_at(self, index: int) -> Point:
        self._check_index(index)
        return self.curve.point_at(index)

    def point_at_xy(self, x: int, y: int) -> Point:
        return self.curve.point_at(self.index_of(x, y))

    # ── Values ──

    def value_at(self, index: int) -> float:
        self._check_index(index)
        return float(self._data[index])

    def value_at_xy(self, x: int, y: int) -> float:
        return self.value_at(self.index_of(x, y))

    def value_normalized_at(self, index: int) -> float:
        """Value rescaled to [0, 1] by the current min/max; 0 when they coincide."""
        value = self.value_at(index)
        span = self._max - self._min
        if span == 0:
            return 0.0
        return (value - self._min) / span

    def value_normalized_at_xy(self, x: int, y: int) -> float:
        return self.value_normalized_at(self.index_of(x, y))

    def replace_value_at(self, index: int, value: float) -> None:
        self._check_index(index)
        self._data[index] = value
        self._refresh_range()

    def replace_value_at_xy(self, x: int, y: int, value: float) -> None:
        self.replace_value_at(self.index_of(x, y), value)

    def data_copy(self) -> NDArray[np.float64]:
        return self._data.copy()

    def replace_data(self, data: Sequence[float] | NDArray[np.float64]) -> None:
        """Replace every value; the new sequence must have the current length."""
        values = np.asarray(data, dtype=np.float64)
        if values.shape != self._data.shape:
            raise SizeMismatchError(
                f"Replacement has {values.size} values, plot holds {len(self._data)}"
            )
        self._data = values.copy()
        self._refresh_range()

    def _refresh_range(self) -> None:
        if len(self._data) == 0:
            self._min = 0.0
            self._max = 0.0
        else:
            self._min = float(self._data.min())
            self._max = float(self._data.max())

    # ── Analysis products ──

    def raster(self) -> NDArray[np.float64]:
        """Values as an (height, width) array, row y, column x."""
        return self._data[self._lookup.T]

    def generate_image(self, threshold: float = 0.0) -> NDArray[np.float64]:
        """(width, height) matrix of normalised values, ``image[x][y]``.

        With a positive threshold, cells whose discontinuity divided by the
        mean discontinuity exceeds it are set to SENTINEL.
        """
        span = self._max - self._min
        if span == 0:
            image = np.zeros((self.width, self.height))
        else:
            image = (self._data[self._lookup] - self._min) / span

        mean = self.curve.mean_discontinuity
        if threshold > 0 and mean > 0:
            scores = self.curve.discontinuity[self._lookup]
            image[scores / mean > threshold] = SENTINEL
        return image

    def spectral_magnitude(self, log_scale: bool = False) -> NDArray[np.float64]:
        """Normalised DC-centred power spectrum, one bin per traversal index.

        The spectrum of the (height, width) raster is rebuilt in full from
        the real-input half spectrum, shifted so DC sits at the centre, and
        bin (kx, ky) is written at the traversal index of cell (kx, ky).
        The largest bins are clamped to the second-largest distinct value
        before normalising; ``log_scale`` compresses with log1p.
        """
        if len(self._data) == 0:
            raise DegenerateOperationError("Spectral transform of an empty plot")

        height, width = self.height, self.width
        half = scipy.fft.rfft2(self.raster())
        power_half = np.abs(half) ** 2

        # Hermitian symmetry: P[ky, kx] == P[-ky mod H, W - kx]
        full = np.empty((height, width))
        cols = power_half.shape[1]
        full[:, :cols] = power_half
        if width > cols:
            kx = np.arange(cols, width)
            ky = (-np.arange(height)) % height
            full[:, cols:] = power_half[ky][:, width - kx]
        spectrum = scipy.fft.fftshift(full)

        top = spectrum.max()
        below = spectrum[spectrum < top]
        ceiling = below.max() if below.size else top
        spectrum = np.minimum(spectrum, ceiling)

        floor = spectrum.min()
        span = ceiling - floor
        if span <= 0:
            normalised = np.zeros_like(spectrum)
        elif log_scale:
            normalised = np.log1p(spectrum - floor) / np.log1p(span)
        else:
            normalised = (spectrum - floor) / span

        out = np.empty(len(self._data))
        out[self._lookup.T] = normalised
        return out

    def __repr__(self) -> str:
        return f"HilbertPlot({self.family.name}, {self.width}x{self.height}, n={len(self._data)})"
