"""Fixed dimensions, key codes and enumerations shared by the whole game."""

from enum import IntEnum

JUMP_SECS = 2
MIN_X = 3
MIN_Y = 1
WIDTH = 80
HEIGHT = 25
ESC = 27
SPACE = 32
FLOOR_DIFF = 3
NUM_FLOORS = 8
MAX_GAME_SECS = 600
LEGEND_X = 86
LEGEND_Y = 4

BOARD_COLS = WIDTH - 2
"""Number of playable columns between the left and right frame."""


class Direction(IntEnum):
    """Movement directions; the simple ones share their keyboard codes."""

    LEFT = 97
    RIGHT = 100
    STAY = 115
    UP = 119
    DOWN = 120
    UP_AND_RIGHT = 121
    UP_AND_LEFT = 122
    DOWN_AND_RIGHT = 123
    DOWN_AND_LEFT = 124


class Tile(IntEnum):
    """What a single board cell of a floor holds."""

    EMPTY = 0
    PLAIN = 1
    RIGHT_SLOPE = 2
    LEFT_SLOPE = 3

    def symbol(self):
        """The character that draws this tile on screen."""
        return _TILE_SYMBOLS[self]


_TILE_SYMBOLS = {
    Tile.EMPTY: " ",
    Tile.PLAIN: "=",
    Tile.RIGHT_SLOPE: ">",
    Tile.LEFT_SLOPE: "<",
}

FLOORS = tuple(MIN_Y + HEIGHT - (1 + FLOOR_DIFF * index) for index in range(NUM_FLOORS))
"""Screen row of each floor, from the bottom floor upwards."""


def floor_y(index):
    """Return the screen row of floor ``index`` (0 is the bottom floor)."""
    if not 0 <= index < NUM_FLOORS:
        raise ValueError(f"floor index {index} outside 0..{NUM_FLOORS - 1}")
    return FLOORS[index]