"""Raster rendering of plot images (matplotlib colormaps, Pillow PNG encoding)."""

from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")

import numpy as np
from matplotlib import colormaps
from numpy.typing import NDArray
from PIL import Image

from hilbertplot.engine.plot import SENTINEL


def image_to_rgba(
    image: NDArray[np.float64],
    cmap: str = "viridis",
    sentinel_color: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0),
) -> NDArray[np.uint8]:
    """(height, width, 4) uint8 pixels from an ``image[x][y]`` matrix.

    Row 0 of the result is the top of the picture, i.e. the highest y.
    Sentinel cells are painted ``sentinel_color``.
    """
    raster = np.flipud(np.asarray(image, dtype=np.float64).T)
    sentinel = raster == SENTINEL
    rgba = colormaps[cmap](np.clip(raster, 0.0, 1.0))
    rgba[sentinel] = sentinel_color
    return (rgba * 255).round().astype(np.uint8)


def image_to_png(
    image: NDArray[np.float64],
    cmap: str = "viridis",
    scale: int = 1,
) -> bytes:
    """PNG bytes of ``image_to_rgba``; each cell becomes a scale x scale block."""
    pixels = image_to_rgba(image, cmap)
    if scale > 1:
        pixels = np.repeat(np.repeat(pixels, scale, axis=0), scale, axis=1)
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()
