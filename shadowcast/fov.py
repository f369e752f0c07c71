# shadowcast/fov.py
"""
Field of View (FOV) entry points.

``compute_circle`` casts all eight octants for full 360 degree visibility;
``compute_beam`` casts only the octants covered by a cone facing one of the
eight compass directions. Both report cells through a caller supplied
``on_visible(x, y, dx, dy)`` and query ``is_opaque(x, y)`` for each cell
considered. Nothing is stored between calls.
"""

import math
import operator
import time

import structlog

from shadowcast.beam import beam_intervals
from shadowcast.constants import Direction
from shadowcast.engine import OpacityFn, VisitFn, cast_octant
from shadowcast.octants import CIRCLE_ORDER, Point

# --- Logging Setup ---
log = structlog.get_logger(__name__)


class _CountingVisitor:
    """Forwards reports to the caller while counting them for diagnostics."""

    __slots__ = ("on_visible", "count")

    def __init__(self, on_visible: VisitFn) -> None:
        self.on_visible = on_visible
        self.count = 0

    def __call__(self, x: int, y: int, dx: int, dy: int) -> None:
        self.count += 1
        self.on_visible(x, y, dx, dy)


def _check_radius(radius: int) -> int:
    if isinstance(radius, bool):
        raise TypeError("radius must be an int, got bool")
    radius = operator.index(radius)
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    return radius


def _check_angle(angle: float) -> float:
    angle = float(angle)
    if math.isnan(angle):
        raise ValueError("beam angle must be a number, got NaN")
    return angle


def _cast_circle(
    origin: Point,
    radius: int,
    visitor: _CountingVisitor,
    is_opaque: OpacityFn,
    include_origin: bool,
) -> int:
    if include_origin:
        visitor(origin[0], origin[1], 0, 0)
    columns = 0
    for octant in CIRCLE_ORDER:
        columns += cast_octant(octant, origin, radius, visitor, is_opaque)
    return columns


def compute_circle(
    origin: Point,
    radius: int,
    on_visible: VisitFn,
    is_opaque: OpacityFn,
    include_origin: bool = False,
) -> None:
    """
    Report every cell visible from ``origin`` within ``radius``.

    Cells with ``dx*dx + dy*dy <= radius*radius`` are considered. The origin
    is reported once, with offset ``(0, 0)``, only when ``include_origin`` is
    set. Exceptions raised by either callback abort the cast and propagate.
    """
    radius = _check_radius(radius)
    func_log = log.bind(origin=origin, radius=radius)
    func_log.debug("Starting circle cast")
    start_time = time.perf_counter()

    visitor = _CountingVisitor(on_visible)
    try:
        columns = _cast_circle(origin, radius, visitor, is_opaque, include_origin)
    except Exception as e:
        func_log.error("Circle cast aborted", error=str(e), exc_info=True)
        raise

    duration_ms = (time.perf_counter() - start_time) * 1000
    func_log.debug(
        "Circle cast finished",
        duration_ms=f"{duration_ms:.2f}",
        reported_count=visitor.count,
        columns=columns,
    )


def compute_beam(
    origin: Point,
    radius: int,
    direction: Direction | str,
    angle: float,
    on_visible: VisitFn,
    is_opaque: OpacityFn,
    include_origin: bool = False,
) -> None:
    """
    Report every cell visible inside a cone of ``angle`` degrees.

    The cone is centred on ``direction``. A negative angle reports nothing,
    not even the origin; an angle of 360 or more is a full circle cast.
    A NaN angle is rejected with ``ValueError`` before anything is reported.
    ``direction`` may be a :class:`Direction` or its name (``"ne"``, ``"S"``).
    """
    radius = _check_radius(radius)
    direction = Direction.coerce(direction)
    angle = _check_angle(angle)
    func_log = log.bind(
        origin=origin, radius=radius, direction=direction.value, angle=angle
    )

    if angle < 0:
        func_log.debug("Negative beam angle, nothing to cast")
        return

    func_log.debug("Starting beam cast")
    start_time = time.perf_counter()
    visitor = _CountingVisitor(on_visible)
    columns = 0
    try:
        if angle >= 360:
            columns = _cast_circle(origin, radius, visitor, is_opaque, include_origin)
        else:
            if include_origin:
                visitor(origin[0], origin[1], 0, 0)
            for octant, start, end in beam_intervals(direction, angle / 90):
                columns += cast_octant(
                    octant, origin, radius, visitor, is_opaque, start, end
                )
    except Exception as e:
        func_log.error("Beam cast aborted", error=str(e), exc_info=True)
        raise

    duration_ms = (time.perf_counter() - start_time) * 1000
    func_log.debug(
        "Beam cast finished",
        duration_ms=f"{duration_ms:.2f}",
        reported_count=visitor.count,
        columns=columns,
    )


__all__ = ["compute_circle", "compute_beam"]
