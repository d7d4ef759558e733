"""Screen coordinates."""

import math
from dataclasses import dataclass

from .config import Direction

_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.RIGHT: (1, 0),
    Direction.LEFT: (-1, 0),
    Direction.STAY: (0, 0),
    Direction.DOWN_AND_LEFT: (-1, 1),
    Direction.DOWN_AND_RIGHT: (1, 1),
    Direction.UP_AND_LEFT: (-1, -1),
    Direction.UP_AND_RIGHT: (1, -1),
}


@dataclass(frozen=True)
class Point:
    """An immutable screen position."""

    x: int = 0
    y: int = 0

    def distance(self, other):
        """Euclidean distance to ``other``."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def moved(self, direction):
        """The position one step away in ``direction``."""
        dx, dy = _DELTAS[Direction(direction)]
        return Point(self.x + dx, self.y + dy)