# shadowcast/adapters.py
"""
Helpers for hosts that keep their map in NumPy arrays or plain predicates.

The caster itself only sees callables. These adapters build the opacity
callable from a boolean transparency grid (indexed ``[y, x]``), collect
reported cells into lists, and fill a boolean visibility mask.
"""

from __future__ import annotations

from typing import Callable, Iterable, NamedTuple

import numpy as np
import structlog
from numpy.typing import NDArray

from shadowcast.constants import Direction, Opacity
from shadowcast.engine import OpacityFn
from shadowcast.fov import compute_beam, compute_circle
from shadowcast.octants import Point

log = structlog.get_logger(__name__)


class VisibleCell(NamedTuple):
    x: int
    y: int
    dx: int
    dy: int


def opacity_from_predicate(
    blocks_light: Callable[[int, int], bool], *, light_walls: bool = True
) -> OpacityFn:
    """Wrap a ``(x, y) -> bool`` blocker test as an opacity callable.

    With ``light_walls`` the blocking cells themselves are reported, the
    usual roguelike behaviour where the wall you bump into is drawn.
    """
    blocked = Opacity.OPAQUE_REPORTED if light_walls else Opacity.OPAQUE

    def is_opaque(x: int, y: int) -> Opacity:
        return blocked if blocks_light(x, y) else Opacity.CLEAR

    return is_opaque


def opacity_from_mask(
    transparent: NDArray[np.bool_], *, light_walls: bool = True
) -> OpacityFn:
    """Opacity callable over a ``(height, width)`` transparency grid.

    Cells outside the grid block sight and are never reported.
    """
    if not isinstance(transparent, np.ndarray) or transparent.ndim != 2:
        raise TypeError("transparent must be a 2D NumPy array")
    height, width = transparent.shape
    blocked = Opacity.OPAQUE_REPORTED if light_walls else Opacity.OPAQUE

    def is_opaque(x: int, y: int) -> Opacity:
        if not (0 <= x < width and 0 <= y < height):
            return Opacity.OPAQUE
        return Opacity.CLEAR if transparent[y, x] else blocked

    return is_opaque


def collect_circle(
    origin: Point, radius: int, is_opaque: OpacityFn, include_origin: bool = False
) -> list[VisibleCell]:
    """Run a circle cast and return the reported cells in call order."""
    cells: list[VisibleCell] = []
    compute_circle(
        origin,
        radius,
        lambda x, y, dx, dy: cells.append(VisibleCell(x, y, dx, dy)),
        is_opaque,
        include_origin=include_origin,
    )
    return cells


def collect_beam(
    origin: Point,
    radius: int,
    direction: Direction | str,
    angle: float,
    is_opaque: OpacityFn,
    include_origin: bool = False,
) -> list[VisibleCell]:
    """Run a beam cast and return the reported cells in call order."""
    cells: list[VisibleCell] = []
    compute_beam(
        origin,
        radius,
        direction,
        angle,
        lambda x, y, dx, dy: cells.append(VisibleCell(x, y, dx, dy)),
        is_opaque,
        include_origin=include_origin,
    )
    return cells


def nearest_first(cells: Iterable[VisibleCell]) -> list[VisibleCell]:
    """Order cells by squared distance from the source; ties keep call order."""
    return sorted(cells, key=lambda c: c.dx * c.dx + c.dy * c.dy)


def visible_mask(
    transparent: NDArray[np.bool_],
    origin: Point,
    radius: int,
    *,
    light_walls: bool = True,
    direction: Direction | str | None = None,
    angle: float | None = None,
) -> NDArray[np.bool_]:
    """
    Boolean mask of the cells visible from ``origin``.

    Casts a beam when ``direction`` and ``angle`` are both given, otherwise a
    full circle. The origin is marked visible except for a beam with a
    negative angle, which sees nothing at all.
    """
    is_opaque = opacity_from_mask(transparent, light_walls=light_walls)
    height, width = transparent.shape
    ox, oy = origin
    if not (0 <= ox < width and 0 <= oy < height):
        raise ValueError("Origin coordinates out of bounds")
    if (direction is None) != (angle is None):
        raise ValueError("direction and angle must be given together")

    visible = np.zeros(transparent.shape, dtype=np.bool_)

    def mark(x: int, y: int, dx: int, dy: int) -> None:
        visible[y, x] = True

    if direction is None:
        compute_circle(origin, radius, mark, is_opaque, include_origin=True)
    else:
        compute_beam(
            origin, radius, direction, angle, mark, is_opaque, include_origin=True
        )

    log.debug("Visibility mask built", visible_count=int(visible.sum()))
    return visible


__all__ = [
    "VisibleCell",
    "opacity_from_predicate",
    "opacity_from_mask",
    "collect_circle",
    "collect_beam",
    "nearest_first",
    "visible_mask",
]
