"""components.spatial — Grid coordinates, directions, and patrol zones.

All coordinates are integer tile indices.  ``x`` grows to the right,
``y`` grows downwards (row 0 is the first line of the data block).
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal step.  Value is the ``(dx, dy)`` delta."""
    UP    = (0, -1)
    DOWN  = (0, 1)
    LEFT  = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Direction:
        """Uniform pick among the four cardinal directions."""
        return (rng or random).choice(list(cls))


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable tile coordinate.  Value-equal and hashable."""
    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        return Position(self.x + direction.dx, self.y + direction.dy)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_adjacent(self, other: Position) -> bool:
        """True when *other* is this tile or one of its four neighbours."""
        return self.manhattan(other) <= 1

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True, slots=True)
class PatrolZone:
    """Rectangle an enemy was told to patrol.

    ``origin`` is the spawn tile; the zone reaches ``width`` tiles right
    and ``height`` tiles down from there, edges included, so a 0x0 zone
    is the spawn tile alone.  Recorded at spawn but not enforced by
    movement.
    """
    origin: Position
    width: int = 0
    height: int = 0

    @property
    def max_x(self) -> int:
        return self.origin.x + self.width

    @property
    def max_y(self) -> int:
        return self.origin.y + self.height

    def contains(self, pos: Position) -> bool:
        return (self.origin.x <= pos.x <= self.max_x
                and self.origin.y <= pos.y <= self.max_y)
