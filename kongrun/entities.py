"""Everything that is drawn on the board: players, barrels, ghosts, hammer, ladders."""

import random
from dataclasses import dataclass

from .config import FLOOR_DIFF, Direction
from .point import Point

_FALLING = (Direction.DOWN_AND_LEFT, Direction.DOWN_AND_RIGHT)


class GameObject:
    """A character drawn at a position on the screen."""

    def __init__(self, symbol, pos=None):
        self.symbol = symbol
        self.pos = pos if pos is not None else Point()

    def draw(self, console):
        """Draw the symbol at the current position."""
        console.put(self.pos.x, self.pos.y, self.symbol)

    def __repr__(self):
        return f"{type(self).__name__}({self.symbol!r}, {self.pos!r})"


class MovableObject(GameObject):
    """A game object that steps one cell per tick in its direction."""

    def __init__(self, symbol, pos, direction):
        super().__init__(symbol, pos)
        self.direction = direction

    def move(self):
        """Advance one step in the current direction."""
        self.pos = self.pos.moved(self.direction)


class Barrel(MovableObject):
    """A rolling barrel that counts how many ticks it has been falling."""

    def __init__(self, pos, direction):
        super().__init__("O", pos, direction)
        self.fall_secs = 0

    def move(self):
        super().move()
        if self.direction in _FALLING:
            self.fall_secs += 1


class Ghost(MovableObject):
    """A ghost that starts walking left or right at random."""

    def __init__(self, pos, rng=None):
        rng = rng if rng is not None else random.Random()
        start = Direction.RIGHT if rng.randrange(2) == 0 else Direction.LEFT
        super().__init__("x", pos, start)


class Hammer(GameObject):
    """The hammer pickup; without a position it is absent and never drawn."""

    def __init__(self, pos=None):
        super().__init__("P", pos)
        self.visible = pos is not None

    def draw(self, console):
        if self.visible:
            super().draw(console)


class Ladder(GameObject):
    """A ladder standing on ``pos`` and spanning ``floors`` floors upwards."""

    def __init__(self, pos, floors=1):
        super().__init__("H", pos)
        self.steps = floors * FLOOR_DIFF

    def draw(self, console):
        top = self.pos.y - (self.steps - 1)
        for y in range(self.pos.y, top, -1):
            console.put(self.pos.x, y, self.symbol)

    def __repr__(self):
        return f"Ladder({self.pos!r}, steps={self.steps})"


class Player(MovableObject):
    """A character standing still at first, optionally holding a hammer.

    ``hammer`` is ``Direction.STAY`` when no hammer is held, otherwise the
    side the hammer is held on.
    """

    def __init__(self, symbol, pos):
        self.hammer = Direction.STAY
        super().__init__(symbol, pos, Direction.STAY)

    @property
    def direction(self):
        return self._direction

    @direction.setter
    def direction(self, value):
        self._direction = value
        if self.hammer != Direction.STAY and value in (Direction.LEFT, Direction.RIGHT):
            self.hammer = value

    def draw(self, console, climbing=False):
        """Draw the player, and the held hammer beside its head when walking."""
        super().draw(console)
        walking = self.direction in (Direction.STAY, Direction.LEFT, Direction.RIGHT)
        if self.hammer == Direction.STAY or climbing or not walking:
            return
        if self.hammer == Direction.LEFT:
            console.put(self.pos.x - 1, self.pos.y - 1, "P")
        elif self.hammer == Direction.RIGHT:
            console.put(self.pos.x + 1, self.pos.y - 1, "P")


@dataclass(frozen=True)
class BarrelSchedule:
    """A repeating pattern of waits between barrels and their starting directions."""

    intervals: tuple
    directions: tuple

    def __post_init__(self):
        intervals = tuple(int(i) for i in self.intervals)
        directions = tuple(Direction(d) for d in self.directions)
        if not intervals:
            raise ValueError("a barrel schedule needs at least one entry")
        if len(intervals) != len(directions):
            raise ValueError("intervals and directions must have the same length")
        object.__setattr__(self, "intervals", intervals)
        object.__setattr__(self, "directions", directions)

    def __len__(self):
        return len(self.intervals)