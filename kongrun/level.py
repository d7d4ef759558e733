"""A playable board: floors, ladders, start positions, hammer, ghosts and barrel pace."""

import copy
import random

from .config import BOARD_COLS, FLOORS, LEGEND_X, LEGEND_Y, MIN_X, NUM_FLOORS, Direction, Tile
from .entities import BarrelSchedule, Ghost, Hammer, Ladder
from .point import Point

OUT_OF_BOARD = -1
"""Value reported for a cell that lies outside the board."""


class Level:
    """The layout of one level.

    ``board[row][col]`` holds the :class:`Tile` of floor ``row`` (0 is the
    bottom floor) at column ``col`` counted from the first cell inside the
    left frame.
    """

    def __init__(self):
        self.board = [[Tile.EMPTY] * BOARD_COLS for _ in range(NUM_FLOORS)]
        self.ladders = []
        self.ghosts = []
        self.start_mario = Point()
        self.start_pauline = Point()
        self.start_donkey_kong = Point()
        self.hammer = Hammer()
        self.legend = Point(LEGEND_X, LEGEND_Y)
        self.schedule = None

    @staticmethod
    def _inside(row, col):
        return 0 <= row < NUM_FLOORS and 0 <= col < BOARD_COLS

    def set_board_value(self, row, col, value):
        """Set one cell; cells outside the board are ignored."""
        if self._inside(row, col):
            self.board[row][col] = Tile(value)

    def get_board_value(self, row, col):
        """The tile at a cell, or ``OUT_OF_BOARD`` when it lies outside the board."""
        if self._inside(row, col):
            return self.board[row][col]
        return OUT_OF_BOARD

    def add_ladder(self, ladder):
        """Append a ladder."""
        self.ladders.append(ladder)

    def get_ladder(self, index):
        """The ladder at ``index``, or an empty ladder at the origin when there is none."""
        if 0 <= index < len(self.ladders):
            return self.ladders[index]
        return Ladder(Point(), 0)

    def add_ghost(self, ghost):
        """Append a ghost."""
        self.ghosts.append(ghost)

    def print_board(self, console):
        """Draw every floor and then the ladders."""
        for row, y in zip(self.board, FLOORS):
            cells = "".join(Tile(tile).symbol() for tile in row)
            # The last cell is drawn a second time, just inside the right frame.
            console.put(MIN_X + 1, y, cells + Tile(row[-1]).symbol())
        self.print_ladders(console)

    def print_ladders(self, console):
        """Draw all ladders."""
        for ladder in self.ladders:
            ladder.draw(console)

    def copy(self):
        """An independent copy of this level."""
        return copy.deepcopy(self)

    def _fill(self, row, first, last, tile=Tile.PLAIN):
        """Set columns ``first``..``last`` inclusive of ``row``, clipped to the board."""
        for col in range(max(first, 0), min(last, BOARD_COLS - 1) + 1):
            self.board[row][col] = tile

    def initialize_board1(self, rng=None):
        """Lay out the first built-in level."""
        rng = rng if rng is not None else random.Random()
        last = BOARD_COLS - 1

        self._fill(0, 0, 30)
        self.board[0][30] = Tile.RIGHT_SLOPE
        self._fill(0, 71, last)
        self.board[0][71] = Tile.LEFT_SLOPE

        self._fill(1, 0, 15)
        self.board[1][15] = Tile.RIGHT_SLOPE
        self._fill(1, 27, 74)
        self.board[1][74] = Tile.RIGHT_SLOPE

        self._fill(2, 4, 19)
        self.board[2][19] = Tile.RIGHT_SLOPE
        self._fill(2, 22, 50)
        self.board[2][50] = Tile.RIGHT_SLOPE
        self._fill(2, 67, 80)

        self._fill(3, 0, 32)
        self.board[3][32] = Tile.RIGHT_SLOPE
        self._fill(3, 34, 43)
        self.board[3][43] = Tile.RIGHT_SLOPE
        self._fill(3, 55, last)
        self.board[3][55] = Tile.LEFT_SLOPE

        self._fill(4, 33, 70)
        self.board[4][33] = Tile.LEFT_SLOPE

        self._fill(5, 0, 16)
        self._fill(5, 26, 66)
        self.board[5][26] = Tile.LEFT_SLOPE

        self._fill(6, 4, 19)
        self._fill(6, 22, 34)
        self.board[6][34] = Tile.RIGHT_SLOPE
        self._fill(6, 47, 61)
        self._fill(6, 63, 73)
        self.board[6][73] = Tile.RIGHT_SLOPE

        self._fill(7, 0, 30)
        self._fill(7, 50, 58)

        for dx, floor, floors in (
            (10, 0, 5),
            (30, 0, 2),
            (73, 0, 2),
            (60, 3, 2),
            (28, 5, 2),
            (55, 5, 1),
            (37, 3, 1),
        ):
            self.add_ladder(Ladder(Point(MIN_X + dx, FLOORS[floor] - 1), floors))

        self.start_mario = Point(MIN_X + 1, FLOORS[0] - 1)
        self.start_pauline = Point(MIN_X + 2, FLOORS[7] - 1)
        self.start_donkey_kong = Point(MIN_X + 54, FLOORS[7] - 1)
        self.hammer = Hammer(Point(MIN_X + 70, FLOORS[6] - 1))

        self.schedule = BarrelSchedule(
            (9, 13, 12, 0),
            (Direction.RIGHT, Direction.LEFT, Direction.LEFT, Direction.RIGHT),
        )

        self.add_ghost(Ghost(Point(MIN_X + 30, FLOORS[2] - 1), rng))

    def initialize_board2(self, rng=None):
        """Lay out the second built-in level."""
        rng = rng if rng is not None else random.Random()
        last = BOARD_COLS - 1

        self._fill(0, 0, 28)
        self.board[0][0] = Tile.LEFT_SLOPE
        self._fill(0, 30, 38)
        self.board[0][30] = Tile.LEFT_SLOPE
        self._fill(0, 40, 51)
        self.board[0][52] = Tile.RIGHT_SLOPE

        self._fill(1, 9, 32)
        self.board[1][32] = Tile.RIGHT_SLOPE
        self._fill(1, 46, 59)
        self.board[1][46] = Tile.LEFT_SLOPE
        self._fill(1, 61, last)

        self._fill(2, 0, 21)
        self.board[2][21] = Tile.RIGHT_SLOPE
        self._fill(2, 28, 38)
        self.board[2][28] = Tile.LEFT_SLOPE
        self._fill(2, 46, 50)
        self.board[2][50] = Tile.RIGHT_SLOPE
        self._fill(2, 52, 57)
        self.board[2][52] = Tile.LEFT_SLOPE
        self._fill(2, 59, 65)
        self.board[2][65] = Tile.RIGHT_SLOPE
        self._fill(2, 67, 72)
        self.board[2][67] = Tile.LEFT_SLOPE

        self._fill(3, 3, 26)
        self.board[3][26] = Tile.RIGHT_SLOPE
        self._fill(3, 32, 37)
        self.board[3][32] = Tile.LEFT_SLOPE
        self._fill(3, 70, last)
        self.board[3][70] = Tile.LEFT_SLOPE

        self._fill(4, 29, 39)
        self._fill(4, 14, 27)
        self.board[4][14] = Tile.LEFT_SLOPE
        self._fill(4, 2, 12)
        self.board[4][12] = Tile.RIGHT_SLOPE

        self._fill(5, 0, 16)
        self.board[5][16] = Tile.RIGHT_SLOPE
        self._fill(5, 18, 22)
        self.board[5][18] = Tile.LEFT_SLOPE
        self._fill(5, 24, 28)
        self.board[5][24] = Tile.LEFT_SLOPE
        self._fill(5, 30, 76)
        self.board[5][76] = Tile.RIGHT_SLOPE
        self.board[5][41] = Tile.EMPTY

        self._fill(6, 4, 19)
        self.board[6][4] = Tile.LEFT_SLOPE
        self._fill(6, 21, 34)
        self.board[6][34] = Tile.RIGHT_SLOPE
        self._fill(6, 36, 44)
        self.board[6][36] = Tile.LEFT_SLOPE
        self._fill(6, 46, 60)
        self.board[6][60] = Tile.RIGHT_SLOPE
        self._fill(6, 62, 73)
        self.board[6][73] = Tile.RIGHT_SLOPE

        self._fill(7, 0, 30)
        self._fill(7, 50, 57)

        for dx, floor, floors in (
            (12, 0, 1),
            (50, 0, 1),
            (15, 1, 1),
            (6, 2, 1),
            (34, 2, 1),
            (47, 2, 3),
            (73, 2, 1),
            (5, 4, 1),
            (37, 3, 1),
            (72, 5, 1),
            (10, 6, 1),
        ):
            self.add_ladder(Ladder(Point(MIN_X + dx, FLOORS[floor] - 1), floors))

        self.start_mario = Point(MIN_X + 1, FLOORS[0] - 1)
        self.start_pauline = Point(MIN_X + 2, FLOORS[7] - 1)
        self.start_donkey_kong = Point(MIN_X + 54, FLOORS[7] - 1)
        self.hammer = Hammer(Point(MIN_X + 41, FLOORS[1] - 1))

        self.schedule = BarrelSchedule(
            (9, 25, 25, 16),
            (Direction.RIGHT, Direction.LEFT, Direction.LEFT, Direction.LEFT),
        )

        self.add_ghost(Ghost(Point(MIN_X + 20, FLOORS[4] - 1), rng))
        self.add_ghost(Ghost(Point(MIN_X + 40, FLOORS[4] - 1), rng))
        self.add_ghost(Ghost(Point(MIN_X + 60, FLOORS[5] - 1), rng))