"""Hilbert-family space-filling curves and locality-preserving data plots."""

from hilbertplot.engine.curve import Curve, build_curve
from hilbertplot.engine.grammar import Family
from hilbertplot.engine.plot import HilbertPlot, best_dimensions
from hilbertplot.engine.point import Point
from hilbertplot.engine.pool import ThreadPool
from hilbertplot.engine.region import Orientation

__version__ = "0.1.0"

__all__ = [
    "Curve",
    "Family",
    "HilbertPlot",
    "Orientation",
    "Point",
    "ThreadPool",
    "best_dimensions",
    "build_curve",
]
