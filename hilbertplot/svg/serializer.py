"""Write curves as standalone SVG documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hilbertplot.engine.curve import Curve


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float | str,
    canvas_h: float | str,
    title: str = "",
) -> str:
    """SVG markup for a flat list of elements, one ``{"tag": ..., **attrs}`` dict each."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{canvas_w}" height="{canvas_h}" viewBox="0 0 {canvas_w} {canvas_h}"'
        ' xmlns="http://www.w3.org/2000/svg" version="1.1">',
    ]
    if title:
        lines.append(f"  <title>{title}</title>")

    for elem in elements:
        tag = elem.get("tag", "path")
        attr_str = " ".join(f'{k}="{v}"' for k, v in elem.items() if k != "tag")
        lines.append(f"  <{tag} {attr_str} />")

    lines.append("</svg>")
    return "\n".join(lines)


def curve_to_svg(
    curve: Curve,
    cell_size: float = 10.0,
    stroke: str = "black",
    stroke_width: float = 1.0,
    title: str = "",
) -> str:
    """Polyline through the cell centres of ``curve`` in traversal order.

    Row 0 of the curve is drawn at the bottom of the canvas.
    """
    canvas_w = curve.width * cell_size
    canvas_h = curve.height * cell_size
    x0, y0 = curve.origin

    coords = []
    for x, y in curve.coordinates:
        cx = (int(x) - x0 + 0.5) * cell_size
        cy = canvas_h - (int(y) - y0 + 0.5) * cell_size
        coords.append(f"{cx:g},{cy:g}")

    elements: list[dict[str, Any]] = []
    if coords:
        elements.append({
            "tag": "polyline",
            "points": " ".join(coords),
            "fill": "none",
            "stroke": stroke,
            "stroke-width": f"{stroke_width:g}",
            "stroke-linecap": "butt",
            "stroke-linejoin": "miter",
        })
    return serialize_svg(elements, f"{canvas_w:g}", f"{canvas_h:g}", title=title)
