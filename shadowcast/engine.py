# shadowcast/engine.py
"""
Shadow sweep for a single octant.

Columns are swept outward from the source. Each maximal run of clear cells
in a column continues as its own branch with its own slope interval; an
occluder closes the current run and spawns a branch for everything visible
before it. Pending branches live on an explicit LIFO stack, so the native
call stack stays flat no matter the radius.
"""

from typing import Callable, TypeAlias

from shadowcast.constants import Opacity, SweepState
from shadowcast.numeric import column_height, round_half_up, slope
from shadowcast.octants import OctantDescriptor, Point

VisitFn: TypeAlias = Callable[[int, int, int, int], None]
OpacityFn: TypeAlias = Callable[[int, int], Opacity]

# (primary offset, start slope, end slope)
Branch: TypeAlias = tuple[int, float, float]


def cast_octant(
    octant: OctantDescriptor,
    origin: Point,
    radius: int,
    on_visible: VisitFn,
    is_opaque: OpacityFn,
    start: float = 0.0,
    end: float = 1.0,
) -> int:
    """
    Sweep one octant restricted to the slope interval ``[start, end]``.

    Reported cells go to ``on_visible(x, y, dx, dy)``. Exceptions raised by
    either callback propagate immediately. Returns the number of columns
    swept, which is only used for diagnostics.
    """
    ox, oy = origin
    pending: list[Branch] = [(1, start, end)]
    columns = 0

    while pending:
        d, start, end = pending.pop()
        if d > radius:
            continue
        columns += 1

        s0 = round_half_up(d * start)
        s1 = round_half_up(d * end)
        # Shared diagonal belongs to exactly one octant of each pair.
        if not octant.owns_diagonal and s1 == d:
            s1 -= 1
        h = column_height(radius, d)
        if s1 > h:
            s1 = h

        state = SweepState.UNKNOWN
        spawned: list[Branch] = []
        for s in range(s0, s1 + 1):
            x, y = octant.to_world(origin, d, s)
            opacity = is_opaque(x, y)
            if opacity == Opacity.CLEAR:
                if octant.report_axis or s > 0:
                    on_visible(x, y, x - ox, y - oy)
                if state is SweepState.BLOCKED:
                    start = slope(d - 0.5, s - 0.5)
                state = SweepState.OPEN
            else:
                if opacity == Opacity.OPAQUE_REPORTED and (octant.report_axis or s > 0):
                    on_visible(x, y, x - ox, y - oy)
                if state is SweepState.OPEN:
                    spawned.append((d + 1, start, slope(d + 0.5, s - 0.5)))
                state = SweepState.BLOCKED

        if state is SweepState.OPEN:
            pending.append((d + 1, start, end))
        # Spawned branches pop first, in sweep order.
        pending.extend(reversed(spawned))

    return columns


__all__ = ["VisitFn", "OpacityFn", "cast_octant"]
