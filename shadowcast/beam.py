# shadowcast/beam.py
"""
Angle restriction for beams.

A beam facing a compass direction visits the eight octants in pairs, nearest
to the beam axis first. Cardinal beams have their axis on an octant boundary,
diagonal beams on an octant diagonal, so the two use different slope limits.
"""

from typing import TypeAlias

from shadowcast.constants import EPSILON, Direction
from shadowcast.numeric import clamp
from shadowcast.octants import (
    MMN,
    MMY,
    MPN,
    MPY,
    PMN,
    PMY,
    PPN,
    PPY,
    OctantDescriptor,
)

# (octant, start slope, end slope)
Interval: TypeAlias = tuple[OctantDescriptor, float, float]

BEAM_ORDER: dict[Direction, tuple[OctantDescriptor, ...]] = {
    Direction.E: (PPN, PMN, PPY, MPY, PMY, MMY, MPN, MMN),
    Direction.W: (MPN, MMN, PMY, MMY, PPY, MPY, PPN, PMN),
    Direction.N: (MPY, MMY, MMN, PMN, MPN, PPN, PMY, PPY),
    Direction.S: (PMY, PPY, MPN, PPN, MMN, PMN, MMY, MPY),
    Direction.NE: (PMN, MPY, MMY, PPN, MMN, PPY, MPN, PMY),
    Direction.NW: (MMN, MMY, MPN, MPY, PMY, PMN, PPY, PPN),
    Direction.SE: (PPN, PPY, PMY, PMN, MPN, MPY, MMN, MMY),
    Direction.SW: (PMY, MPN, PPY, MMN, PPN, MMY, PMN, MPY),
}


def _pair_limits(a: float, cardinal: bool) -> list[tuple[float, float]]:
    """Slope limits for each active pair, in pair order."""
    if cardinal:
        limits = [(0.0, clamp(a))]
        if a - 1 > EPSILON:
            limits.append((clamp(2 - a), 1.0))
        if a - 2 > EPSILON:
            limits.append((0.0, clamp(a - 2)))
        if a - 3 > EPSILON:
            limits.append((clamp(4 - a), 1.0))
    else:
        limits = [(clamp(1 - a), 1.0)]
        if a - 1 > EPSILON:
            limits.append((0.0, clamp(a - 1)))
        if a - 2 > EPSILON:
            limits.append((clamp(3 - a), 1.0))
        if a - 3 > EPSILON:
            limits.append((0.0, clamp(a - 3)))
    return limits


def beam_intervals(direction: Direction, a: float) -> list[Interval]:
    """
    Octants and slope intervals swept by a beam.

    ``a`` is the beam's full angle in quarter turns (``angle / 90``), expected
    in ``[0, 4)``. Octants outside the beam are left out entirely.
    """
    order = BEAM_ORDER[direction]
    intervals: list[Interval] = []
    for pair_index, (start, end) in enumerate(_pair_limits(a, direction.is_cardinal)):
        first, second = order[2 * pair_index], order[2 * pair_index + 1]
        intervals.append((first, start, end))
        intervals.append((second, start, end))
    return intervals


__all__ = ["BEAM_ORDER", "Interval", "beam_intervals"]
