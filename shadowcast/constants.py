"""Enumerations and numeric constants shared across the caster."""

from enum import Enum, IntEnum

# Tolerance for slope and angle comparisons.
EPSILON: float = 1e-7


class Opacity(IntEnum):
    """Result of an opacity query for a single cell."""

    CLEAR = 0  # Visible, never blocks
    OPAQUE = 1  # Blocks sight, not reported
    OPAQUE_REPORTED = 2  # Blocks sight, still reported (lit wall)


class SweepState(IntEnum):
    """State of the previous cell while sweeping one column."""

    UNKNOWN = 0  # Start of column, never triggers a transition
    BLOCKED = 1
    OPEN = 2


class Direction(Enum):
    """Compass direction a beam faces. North is -y, east is +x."""

    E = "E"
    NE = "NE"
    N = "N"
    NW = "NW"
    W = "W"
    SW = "SW"
    S = "S"
    SE = "SE"

    @property
    def is_cardinal(self) -> bool:
        return len(self.value) == 1

    @classmethod
    def coerce(cls, value: "Direction | str") -> "Direction":
        """Accept a ``Direction`` or a case-insensitive name such as ``"ne"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unknown beam direction: {value!r}")


__all__ = ["EPSILON", "Opacity", "SweepState", "Direction"]
