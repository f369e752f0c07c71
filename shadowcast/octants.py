# shadowcast/octants.py
"""
Octant transform table.

Each of the eight sectors around the source is described by a frozen record
rather than a closure. Names follow the ``<primary sign><secondary sign><swap>``
scheme: ``p``/``m`` for a positive or negative step, ``y``/``n`` for whether
the primary step runs along y (reflected on x = y) or along x. Drawn with
+y pointing up:

             90
      \\ pmy | ppy /
       \\    |    /
   mpn  \\   |   /  ppn
  180 ------ @ ------ 0
   mmn  /   |   \\  pmn
       /    |    \\
      / mmy | mpy \\
            270

Opposite pairs sharing an axis report it once (``report_axis``); pairs
sharing a diagonal report it once (``owns_diagonal``).
"""

from dataclasses import dataclass
from typing import TypeAlias

Point: TypeAlias = tuple[int, int]


@dataclass(frozen=True, slots=True)
class OctantDescriptor:
    name: str
    primary_sign: int
    secondary_sign: int
    swap: bool
    report_axis: bool
    owns_diagonal: bool

    def to_world(self, origin: Point, d: int, s: int) -> Point:
        """Map primary offset ``d`` and secondary offset ``s`` to world x, y."""
        ox, oy = origin
        if self.swap:
            return ox + self.secondary_sign * s, oy + self.primary_sign * d
        return ox + self.primary_sign * d, oy + self.secondary_sign * s


def _octant(name: str, report_axis: bool, owns_diagonal: bool) -> OctantDescriptor:
    primary, secondary, swap = name
    return OctantDescriptor(
        name=name,
        primary_sign=1 if primary == "p" else -1,
        secondary_sign=1 if secondary == "p" else -1,
        swap=swap == "y",
        report_axis=report_axis,
        owns_diagonal=owns_diagonal,
    )


# Flag assignment must stay exactly as listed; any swap double-reports or
# drops axis and diagonal cells.
PPN = _octant("ppn", report_axis=True, owns_diagonal=True)
PPY = _octant("ppy", report_axis=True, owns_diagonal=False)
PMN = _octant("pmn", report_axis=False, owns_diagonal=True)
PMY = _octant("pmy", report_axis=False, owns_diagonal=False)
MPN = _octant("mpn", report_axis=True, owns_diagonal=True)
MPY = _octant("mpy", report_axis=True, owns_diagonal=False)
MMN = _octant("mmn", report_axis=False, owns_diagonal=True)
MMY = _octant("mmy", report_axis=False, owns_diagonal=False)

CIRCLE_ORDER: tuple[OctantDescriptor, ...] = (PPN, PPY, PMN, PMY, MPN, MPY, MMN, MMY)
OCTANTS: dict[str, OctantDescriptor] = {o.name: o for o in CIRCLE_ORDER}

__all__ = [
    "Point",
    "OctantDescriptor",
    "CIRCLE_ORDER",
    "OCTANTS",
    "PPN",
    "PPY",
    "PMN",
    "PMY",
    "MPN",
    "MPY",
    "MMN",
    "MMY",
]
