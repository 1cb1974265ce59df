"""Tests for SVG export."""

from __future__ import annotations

from hilbertplot.engine.curve import build_curve
from hilbertplot.svg.serializer import curve_to_svg, serialize_svg


def test_serialize_svg_elements():
    svg = serialize_svg([{"tag": "circle", "cx": 1, "cy": 2, "r": 3}], 10, 20, title="t")
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'viewBox="0 0 10 20"' in svg
    assert "<title>t</title>" in svg
    assert '<circle cx="1" cy="2" r="3" />' in svg
    assert svg.endswith("</svg>")


def test_curve_polyline_flips_y():
    curve = build_curve("H0", 2, 2)
    svg = curve_to_svg(curve, cell_size=10)
    # (0,0) (0,1) (1,1) (1,0) with row 0 at the bottom of a 20px canvas
    assert 'points="5,15 5,5 15,5 15,15"' in svg
    assert 'width="20"' in svg and 'height="20"' in svg


def test_curve_origin_is_normalized():
    svg = curve_to_svg(build_curve("H0", 2, 2, origin=(40, 40)), cell_size=10)
    assert 'points="5,15 5,5 15,5 15,15"' in svg


def test_one_polyline_per_curve():
    svg = curve_to_svg(build_curve("H22", 8, 8), stroke="red", stroke_width=2)
    assert svg.count("<polyline") == 1
    assert 'stroke="red"' in svg
    assert 'stroke-width="2"' in svg


def test_empty_curve():
    svg = curve_to_svg(build_curve("H0", 0, 0))
    assert "<polyline" not in svg
    assert svg.endswith("</svg>")
