"""Curve grammar: the productions of the 40 Hilbert-family curves.

H0 is the primitive family built directly by region partitioning. Every
other family F in orientation O splits its W x H grid into four quadrants,

    Q1 lower-left  (0, 0)     w1 x h1        w2 = W // 2, w1 = W - w2
    Q2 upper-left  (0, h1)    w1 x h2        h2 = H // 2, h1 = H - h2
    Q3 upper-right (w1, h1)   w2 x h2
    Q4 lower-right (w1, 0)    w2 x h1

fills each with a full curve of a child family and orientation, applies the
child's transform, and joins the four sequences in the order JOIN_ORDER[O].

Rows of the table read "family:orientation:transform" for Q1..Q4, where the
transform is one of "-" (none), "R" (reverse), "M" (mirror) and "MR"
(mirror, then reverse).
"""

from __future__ import annotations

import enum
import numbers
from dataclasses import dataclass

from hilbertplot.engine.region import Orientation

Family = enum.IntEnum("Family", {f"H{i}": i for i in range(40)}, module=__name__)
Family.__doc__ = "Curve family identifiers H0..H39."


def parse_family(value: Family | str | int) -> Family:
    """Accept a Family, its name ("H12", case-insensitive) or its number."""
    if isinstance(value, Family):
        return value
    integral = isinstance(value, numbers.Integral) and not isinstance(value, bool)
    if integral and 0 <= value < len(Family):
        return Family(int(value))
    if isinstance(value, str) and value.upper() in Family.__members__:
        return Family[value.upper()]
    raise ValueError(f"Unknown curve family: {value!r}")


class Transform(enum.Enum):
    NONE = "-"
    REVERSE = "R"
    MIRROR = "M"
    MIRROR_REVERSE = "MR"

    @property
    def mirrors(self) -> bool:
        return self in (Transform.MIRROR, Transform.MIRROR_REVERSE)

    @property
    def reverses(self) -> bool:
        return self in (Transform.REVERSE, Transform.MIRROR_REVERSE)


@dataclass(frozen=True)
class ChildRule:
    family: Family
    orientation: Orientation
    transform: Transform


@dataclass(frozen=True)
class Production:
    family: Family
    orientation: Orientation
    children: tuple[ChildRule, ChildRule, ChildRule, ChildRule]
    join: tuple[int, int, int, int]


# Quadrant indices (0 = Q1 .. 3 = Q4) in the order they are concatenated
JOIN_ORDER: dict[Orientation, tuple[int, int, int, int]] = {
    Orientation.A: (0, 1, 2, 3),
    Orientation.B: (0, 3, 2, 1),
    Orientation.C: (2, 3, 0, 1),
    Orientation.D: (2, 1, 0, 3),
}

# fmt: off
_ROWS = (
    ("H1",  "A", "H0:D:R",  "H0:D:R",  "H0:B:R",  "H0:B:R"),
    ("H1",  "B", "H0:C:R",  "H0:A:R",  "H0:A:R",  "H0:C:R"),
    ("H1",  "C", "H0:D:R",  "H0:D:R",  "H0:B:R",  "H0:B:R"),
    ("H1",  "D", "H0:C:R",  "H0:A:R",  "H0:A:R",  "H0:C:R"),

    ("H2",  "A", "H0:C:-",  "H0:A:-",  "H0:A:-",  "H0:C:-"),
    ("H2",  "B", "H0:D:-",  "H0:D:-",  "H0:B:-",  "H0:B:-"),
    ("H2",  "C", "H0:C:-",  "H0:A:-",  "H0:A:-",  "H0:C:-"),
    ("H2",  "D", "H0:D:-",  "H0:D:-",  "H0:B:-",  "H0:B:-"),

    ("H3",  "A", "H0:C:R",  "H0:D:R",  "H0:B:R",  "H0:C:R"),
    ("H3",  "B", "H0:D:R",  "H0:D:R",  "H0:A:R",  "H0:C:R"),
    ("H3",  "C", "H0:D:R",  "H0:A:R",  "H0:A:R",  "H0:B:R"),
    ("H3",  "D", "H0:C:R",  "H0:A:R",  "H0:B:R",  "H0:B:R"),

    ("H4",  "A", "H0:B:-",  "H0:A:-",  "H0:A:-",  "H0:C:-"),
    ("H4",  "B", "H0:A:-",  "H0:D:-",  "H0:B:-",  "H0:B:-"),
    ("H4",  "C", "H0:C:-",  "H0:A:-",  "H0:D:-",  "H0:C:-"),
    ("H4",  "D", "H0:D:-",  "H0:D:-",  "H0:C:-",  "H0:B:-"),

    ("H5",  "A", "H0:C:R",  "H0:D:R",  "H0:B:R",  "H0:B:R"),
    ("H5",  "B", "H0:D:R",  "H0:A:R",  "H0:A:R",  "H0:C:R"),
    ("H5",  "C", "H0:D:R",  "H0:D:R",  "H0:A:R",  "H0:B:R"),
    ("H5",  "D", "H0:C:R",  "H0:A:R",  "H0:B:R",  "H0:C:R"),

    ("H6",  "A", "H5:C:-",  "H5:A:MR", "H5:A:-",  "H5:C:MR"),
    ("H6",  "B", "H5:D:-",  "H5:D:MR", "H5:B:-",  "H5:B:MR"),
    ("H6",  "C", "H5:C:-",  "H5:A:MR", "H5:A:-",  "H5:C:MR"),
    ("H6",  "D", "H5:D:-",  "H5:D:MR", "H5:B:-",  "H5:B:MR"),

    ("H7",  "A", "H5:C:-",  "H5:A:MR", "H5:A:-",  "H5:D:-"),
    ("H7",  "B", "H5:A:MR", "H5:D:MR", "H5:B:-",  "H5:B:MR"),
    ("H7",  "C", "H5:C:-",  "H5:B:-",  "H5:A:-",  "H5:C:MR"),
    ("H7",  "D", "H5:D:-",  "H5:D:MR", "H5:C:MR", "H5:B:MR"),

    ("H8",  "A", "H5:B:MR", "H5:A:MR", "H5:A:-",  "H5:D:-"),
    ("H8",  "B", "H5:A:MR", "H5:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H8",  "C", "H5:C:-",  "H5:B:-",  "H5:D:MR", "H5:C:MR"),
    ("H8",  "D", "H5:D:-",  "H5:D:MR", "H5:C:MR", "H5:A:-"),

    ("H9",  "A", "H5:D:R",  "H5:D:M",  "H5:B:R",  "H5:B:M"),
    ("H9",  "B", "H5:C:R",  "H5:A:M",  "H5:A:R",  "H5:C:M"),
    ("H9",  "C", "H5:D:R",  "H5:D:M",  "H5:B:R",  "H5:B:M"),
    ("H9",  "D", "H5:C:R",  "H5:A:M",  "H5:A:R",  "H5:C:M"),

    ("H10", "A", "H5:C:M",  "H5:D:M",  "H5:B:R",  "H5:C:R"),
    ("H10", "B", "H5:D:M",  "H5:D:R",  "H5:A:R",  "H5:C:M"),
    ("H10", "C", "H5:D:R",  "H5:A:R",  "H5:A:M",  "H5:B:M"),
    ("H10", "D", "H5:C:R",  "H5:A:M",  "H5:B:M",  "H5:B:R"),

    ("H11", "A", "H5:C:M",  "H5:D:M",  "H5:B:R",  "H5:B:M"),
    ("H11", "B", "H5:C:R",  "H5:D:R",  "H5:A:R",  "H5:C:M"),
    ("H11", "C", "H5:D:R",  "H5:D:M",  "H5:A:M",  "H5:B:M"),
    ("H11", "D", "H5:C:R",  "H5:A:M",  "H5:A:R",  "H5:B:R"),

    ("H12", "A", "H3:B:-",  "H5:A:MR", "H5:A:-",  "H3:D:-"),
    ("H12", "B", "H3:A:-",  "H3:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H12", "C", "H5:C:-",  "H3:B:-",  "H3:D:-",  "H5:C:MR"),
    ("H12", "D", "H5:D:-",  "H5:D:MR", "H3:C:-",  "H3:A:-"),

    ("H13", "A", "H3:D:R",  "H5:D:M",  "H5:B:R",  "H3:B:R"),
    ("H13", "B", "H3:C:R",  "H3:A:R",  "H5:A:R",  "H5:C:M"),
    ("H13", "C", "H5:D:R",  "H3:D:R",  "H3:B:R",  "H5:B:M"),
    ("H13", "D", "H5:C:R",  "H5:A:M",  "H3:A:R",  "H3:C:R"),

    ("H14", "A", "H3:B:-",  "H5:A:MR", "H5:A:-",  "H5:D:-"),
    ("H14", "B", "H5:A:MR", "H3:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H14", "C", "H5:C:-",  "H5:B:-",  "H3:D:-",  "H5:C:MR"),
    ("H14", "D", "H5:D:-",  "H5:D:MR", "H5:C:MR", "H3:A:-"),

    ("H15", "A", "H3:D:R",  "H5:D:M",  "H5:B:R",  "H5:C:R"),
    ("H15", "B", "H5:D:M",  "H3:A:R",  "H5:A:R",  "H5:C:M"),
    ("H15", "C", "H5:D:R",  "H5:A:R",  "H3:B:R",  "H5:B:M"),
    ("H15", "D", "H5:C:R",  "H5:A:M",  "H5:B:M",  "H3:C:R"),

    ("H16", "A", "H3:B:-",  "H5:A:MR", "H5:A:-",  "H5:C:MR"),
    ("H16", "B", "H5:D:-",  "H3:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H16", "C", "H5:C:-",  "H5:A:MR", "H3:D:-",  "H5:C:MR"),
    ("H16", "D", "H5:D:-",  "H5:D:MR", "H5:B:-",  "H3:A:-"),

    ("H17", "A", "H3:D:R",  "H5:D:M",  "H5:B:R",  "H5:B:M"),
    ("H17", "B", "H5:C:R",  "H3:A:R",  "H5:A:R",  "H5:C:M"),
    ("H17", "C", "H5:D:R",  "H5:D:M",  "H3:B:R",  "H5:B:M"),
    ("H17", "D", "H5:C:R",  "H5:A:M",  "H5:A:R",  "H3:C:R"),

    ("H18", "A", "H4:B:MR", "H0:A:-",  "H0:A:-",  "H4:D:-"),
    ("H18", "B", "H4:A:MR", "H4:C:-",  "H0:B:-",  "H0:B:-"),
    ("H18", "C", "H0:C:-",  "H4:B:-",  "H4:D:MR", "H0:C:-"),
    ("H18", "D", "H0:D:-",  "H0:D:-",  "H4:C:MR", "H4:A:-"),

    ("H19", "A", "H4:C:MR", "H0:A:-",  "H0:A:-",  "H4:C:-"),
    ("H19", "B", "H4:D:MR", "H4:D:-",  "H0:B:-",  "H0:B:-"),
    ("H19", "C", "H0:C:-",  "H4:A:-",  "H4:A:MR", "H0:C:-"),
    ("H19", "D", "H0:D:-",  "H0:D:-",  "H4:B:MR", "H4:B:-"),

    ("H20", "A", "H4:B:MR", "H0:A:-",  "H0:A:-",  "H4:C:-"),
    ("H20", "B", "H4:D:MR", "H4:C:-",  "H0:B:-",  "H0:B:-"),
    ("H20", "C", "H0:C:-",  "H4:A:-",  "H4:D:MR", "H0:C:-"),
    ("H20", "D", "H0:D:-",  "H0:D:-",  "H4:B:MR", "H4:A:-"),

    ("H21", "A", "H4:C:R",  "H0:D:R",  "H0:B:R",  "H4:C:M"),
    ("H21", "B", "H4:D:R",  "H4:D:M",  "H0:A:R",  "H0:C:R"),
    ("H21", "C", "H0:D:R",  "H4:A:M",  "H4:A:R",  "H0:B:R"),
    ("H21", "D", "H0:C:R",  "H0:A:R",  "H4:B:R",  "H4:B:M"),

    ("H22", "A", "H4:D:R",  "H0:D:R",  "H0:B:R",  "H4:B:M"),
    ("H22", "B", "H4:C:R",  "H4:A:M",  "H0:A:R",  "H0:C:R"),
    ("H22", "C", "H0:D:R",  "H4:D:M",  "H4:B:R",  "H0:B:R"),
    ("H22", "D", "H0:C:R",  "H0:A:R",  "H4:A:R",  "H4:C:M"),

    ("H23", "A", "H4:D:R",  "H0:D:R",  "H0:B:R",  "H4:C:M"),
    ("H23", "B", "H4:D:R",  "H4:A:M",  "H0:A:R",  "H0:C:R"),
    ("H23", "C", "H0:D:R",  "H4:A:M",  "H4:B:R",  "H0:B:R"),
    ("H23", "D", "H0:C:R",  "H0:A:R",  "H4:B:R",  "H4:C:M"),

    ("H24", "A", "H0:C:R",  "H0:D:R",  "H0:B:R",  "H4:B:M"),
    ("H24", "B", "H4:C:R",  "H0:D:R",  "H0:A:R",  "H0:C:R"),
    ("H24", "C", "H0:D:R",  "H4:D:M",  "H0:A:R",  "H0:B:R"),
    ("H24", "D", "H0:C:R",  "H0:A:R",  "H4:A:R",  "H0:B:R"),

    ("H25", "A", "H0:D:R",  "H0:D:R",  "H0:B:R",  "H4:C:M"),
    ("H25", "B", "H4:D:R",  "H0:A:R",  "H0:A:R",  "H0:C:R"),
    ("H25", "C", "H0:D:R",  "H4:A:M",  "H0:B:R",  "H0:B:R"),
    ("H25", "D", "H0:C:R",  "H0:A:R",  "H4:B:R",  "H0:C:R"),

    ("H26", "A", "H0:D:R",  "H0:D:R",  "H0:B:R",  "H4:B:M"),
    ("H26", "B", "H4:C:R",  "H0:A:R",  "H0:A:R",  "H0:C:R"),
    ("H26", "C", "H0:D:R",  "H4:D:M",  "H0:B:R",  "H0:B:R"),
    ("H26", "D", "H0:C:R",  "H0:A:R",  "H4:A:R",  "H0:C:R"),

    ("H27", "A", "H0:C:-",  "H0:A:-",  "H0:A:-",  "H4:C:-"),
    ("H27", "B", "H4:D:MR", "H0:D:-",  "H0:B:-",  "H0:B:-"),
    ("H27", "C", "H0:C:-",  "H4:A:-",  "H0:A:-",  "H0:C:-"),
    ("H27", "D", "H0:D:-",  "H0:D:-",  "H4:B:MR", "H0:B:-"),

    ("H28", "A", "H0:C:-",  "H0:A:-",  "H0:A:-",  "H4:D:-"),
    ("H28", "B", "H4:A:MR", "H0:D:-",  "H0:B:-",  "H0:B:-"),
    ("H28", "C", "H0:C:-",  "H4:B:-",  "H0:A:-",  "H0:C:-"),
    ("H28", "D", "H0:D:-",  "H0:D:-",  "H4:C:MR", "H0:B:-"),

    ("H29", "A", "H0:B:-",  "H0:A:-",  "H0:A:-",  "H4:C:-"),
    ("H29", "B", "H4:D:MR", "H0:D:-",  "H0:B:-",  "H0:B:-"),
    ("H29", "C", "H0:C:-",  "H4:A:-",  "H0:D:-",  "H0:C:-"),
    ("H29", "D", "H0:D:-",  "H0:D:-",  "H4:B:MR", "H0:A:-"),

    ("H30", "A", "H0:B:-",  "H0:A:-",  "H0:A:-",  "H4:D:-"),
    ("H30", "B", "H4:A:MR", "H0:C:-",  "H0:B:-",  "H0:B:-"),
    ("H30", "C", "H0:C:-",  "H4:B:-",  "H0:D:-",  "H0:C:-"),
    ("H30", "D", "H0:D:-",  "H0:D:-",  "H4:C:MR", "H0:A:-"),

    ("H31", "A", "H0:C:R",  "H0:D:R",  "H0:B:R",  "H4:C:M"),
    ("H31", "B", "H4:D:R",  "H0:D:R",  "H0:A:R",  "H0:C:R"),
    ("H31", "C", "H0:D:R",  "H4:A:M",  "H0:A:R",  "H0:B:R"),
    ("H31", "D", "H0:C:R",  "H0:A:R",  "H4:B:R",  "H0:B:R"),

    ("H32", "A", "H1:C:-",  "H5:A:MR", "H5:A:-",  "H1:C:-"),
    ("H32", "B", "H1:D:-",  "H1:D:-",  "H5:B:-",  "H5:B:MR"),
    ("H32", "C", "H5:C:-",  "H1:A:-",  "H1:A:-",  "H5:C:MR"),
    ("H32", "D", "H5:D:-",  "H5:D:MR", "H1:B:-",  "H1:B:-"),

    ("H33", "A", "H1:C:R",  "H5:D:M",  "H5:B:R",  "H1:C:R"),
    ("H33", "B", "H1:D:R",  "H1:D:R",  "H5:A:R",  "H5:C:M"),
    ("H33", "C", "H5:D:R",  "H1:A:R",  "H1:A:R",  "H5:B:M"),
    ("H33", "D", "H5:C:R",  "H5:A:M",  "H1:B:R",  "H1:B:R"),

    ("H34", "A", "H5:C:-",  "H5:A:MR", "H5:A:-",  "H1:C:-"),
    ("H34", "B", "H1:D:-",  "H5:D:MR", "H5:B:-",  "H5:B:MR"),
    ("H34", "C", "H5:C:-",  "H1:A:-",  "H5:A:-",  "H5:C:MR"),
    ("H34", "D", "H5:D:-",  "H5:D:MR", "H1:B:-",  "H5:B:MR"),

    ("H35", "A", "H5:D:R",  "H5:D:M",  "H5:B:R",  "H1:C:R"),
    ("H35", "B", "H1:D:R",  "H5:A:M",  "H5:A:R",  "H5:C:M"),
    ("H35", "C", "H5:D:R",  "H1:A:R",  "H5:B:R",  "H5:B:M"),
    ("H35", "D", "H5:C:R",  "H5:A:M",  "H1:B:R",  "H5:C:M"),

    ("H36", "A", "H5:B:MR", "H5:A:MR", "H5:A:-",  "H1:C:-"),
    ("H36", "B", "H1:D:-",  "H5:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H36", "C", "H5:C:-",  "H1:A:-",  "H5:D:MR", "H5:C:MR"),
    ("H36", "D", "H5:D:-",  "H5:D:MR", "H1:B:-",  "H5:A:-"),

    ("H37", "A", "H5:C:M",  "H5:D:M",  "H5:B:R",  "H1:C:R"),
    ("H37", "B", "H1:D:R",  "H5:D:R",  "H5:A:R",  "H5:C:M"),
    ("H37", "C", "H5:D:R",  "H1:A:R",  "H5:A:M",  "H5:B:M"),
    ("H37", "D", "H5:C:R",  "H5:A:M",  "H1:B:R",  "H5:B:R"),

    ("H38", "A", "H3:B:-",  "H5:A:MR", "H5:A:-",  "H1:C:-"),
    ("H38", "B", "H1:D:-",  "H3:C:-",  "H5:B:-",  "H5:B:MR"),
    ("H38", "C", "H5:C:-",  "H1:A:-",  "H3:D:-",  "H5:C:MR"),
    ("H38", "D", "H5:D:-",  "H5:D:MR", "H1:B:-",  "H3:A:-"),

    ("H39", "A", "H3:D:R",  "H5:D:M",  "H5:B:R",  "H1:C:R"),
    ("H39", "B", "H1:D:R",  "H3:A:R",  "H5:A:R",  "H5:C:M"),
    ("H39", "C", "H5:D:R",  "H1:A:R",  "H3:B:R",  "H5:B:M"),
    ("H39", "D", "H5:C:R",  "H5:A:M",  "H1:B:R",  "H3:C:R"),
)
# fmt: on


def _parse_rule(text: str) -> ChildRule:
    family, orientation, transform = text.split(":")
    return ChildRule(Family[family], Orientation[orientation], Transform(transform))


def _build_table() -> dict[tuple[Family, Orientation], Production]:
    table: dict[tuple[Family, Orientation], Production] = {}
    for family_name, orientation_name, *rules in _ROWS:
        family = Family[family_name]
        orientation = Orientation[orientation_name]
        key = (family, orientation)
        if key in table:
            raise ValueError(f"Duplicate production for {family.name}/{orientation.name}")
        table[key] = Production(
            family=family,
            orientation=orientation,
            children=tuple(_parse_rule(r) for r in rules),
            join=JOIN_ORDER[orientation],
        )
    return table


GRAMMAR: dict[tuple[Family, Orientation], Production] = _build_table()


def production(family: Family, orientation: Orientation) -> Production:
    """Production for a composite family; H0 has none."""
    if family == Family.H0:
        raise ValueError("H0 is built by region partitioning and has no production")
    return GRAMMAR[(family, orientation)]


def quadrants(width: int, height: int) -> tuple[tuple[int, int, int, int], ...]:
    """(dx, dy, width, height) of Q1..Q4 for a width x height grid."""
    w2 = width // 2
    w1 = width - w2
    h2 = height // 2
    h1 = height - h2
    return (
        (0, 0, w1, h1),
        (0, h1, w1, h2),
        (w1, h1, w2, h2),
        (w1, 0, w2, h1),
    )


def child_families(family: Family) -> list[Family]:
    """Distinct families referenced by any production of ``family``."""
    if family == Family.H0:
        return []
    found = {
        rule.family
        for orientation in Orientation
        for rule in GRAMMAR[(family, orientation)].children
    }
    return sorted(found)
