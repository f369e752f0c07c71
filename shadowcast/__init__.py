"""Symmetric shadowcasting field of view on an unbounded integer grid."""

from shadowcast.constants import Direction, Opacity
from shadowcast.fov import compute_beam, compute_circle

__all__ = ["Direction", "Opacity", "compute_beam", "compute_circle"]
