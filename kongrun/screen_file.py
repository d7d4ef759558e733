"""Reading level layouts from ``dkong_NN.screen`` text files."""

import random
import re
from itertools import cycle, islice
from pathlib import Path

from .config import (
    BOARD_COLS,
    FLOOR_DIFF,
    FLOORS,
    HEIGHT,
    MIN_X,
    MIN_Y,
    NUM_FLOORS,
    WIDTH,
    Direction,
    Tile,
)
from .entities import BarrelSchedule, Ghost, Hammer, Ladder
from .level import Level
from .point import Point

_FILE_NAME = re.compile(r"dkong_(\d\d)\.screen")

_CHARACTERS = {
    "@": ("start_mario", "mario"),
    "&": ("start_donkey_kong", "donkey kong"),
    "$": ("start_pauline", "pauline"),
}

_TILES = {
    "=": Tile.PLAIN,
    ">": Tile.RIGHT_SLOPE,
    "<": Tile.LEFT_SLOPE,
    " ": Tile.EMPTY,
}

_REQUIRED = ("mario", "donkey kong", "pauline", "legend")


class LevelFileError(ValueError):
    """A screen file does not describe a valid level."""

    def __init__(self, name, detail):
        super().__init__(f"In File {name} {detail}")
        self.name = name
        self.detail = detail


def level_number(filename):
    """The level number encoded in a screen file name, or None if it is not one.

    Level ``00`` is not a level.
    """
    match = _FILE_NAME.fullmatch(filename)
    if match is None:
        return None
    number = int(match.group(1))
    return number or None


def row_floor_y(row):
    """Screen row of the characters standing on the floor below board row ``row``."""
    res = (HEIGHT + 1 - row) // FLOOR_DIFF
    if res in (0, 1):
        return FLOORS[0] - 1
    if 2 <= res <= NUM_FLOORS:
        return FLOORS[res - 1] - 1
    raise ValueError(f"row {row} lies outside the board")


def _is_blank(line):
    return not line or line.isspace()


class _Builder:
    """Collects a level row by row while validating it."""

    def __init__(self, name, rng):
        self.name = name
        self.rng = rng
        self.level = Level()
        self.found = set()
        self.ladders = [0] * BOARD_COLS
        self.ghost_xs = set()

    def fail(self, detail):
        raise LevelFileError(self.name, detail)

    def place_once(self, label):
        if label in self.found:
            self.fail(f"too many {label} positions")
        self.found.add(label)

    def invalid(self, ch, i, j):
        self.fail(f"there is invalid character: {ch} At : Row: {i} Col: {j}")

    def bad_start(self, i, j):
        self.fail(f"start of a ladder  At : Row: {i - 1} Col: {j} Is not valid")

    def bad_end(self, i, j):
        self.fail(f"end of a ladder  At : Row: {i} Col: {j} Is not valid")

    def legend(self, i, j):
        self.place_once("legend")
        self.level.legend = Point(MIN_X + j, MIN_Y + 1 + i)

    @staticmethod
    def cells(row):
        return enumerate(row[1 : WIDTH - 1], start=1)

    def top_row(self, row, i):
        for j, ch in self.cells(row):
            if ch == "L":
                self.legend(i, j)
            elif ch != " ":
                self.invalid(ch, i, j)

    def air_row(self, row, i):
        for j, ch in self.cells(row):
            if ch == "L":
                self.legend(i, j)
            elif ch == "H":
                self.ladders[j - 1] += 1
            elif self.ladders[j - 1] > 0:
                self.bad_start(i, j)
            elif ch != " ":
                self.invalid(ch, i, j)

    def character_row(self, row, i):
        y = row_floor_y(i)
        for j, ch in self.cells(row):
            x = MIN_X + (j - 1)
            count = self.ladders[j - 1]
            if ch in _CHARACTERS:
                attr, label = _CHARACTERS[ch]
                self.place_once(label)
                setattr(self.level, attr, Point(x, y))
            elif ch == "P":
                self.place_once("hammer")
                self.level.hammer = Hammer(Point(x, y))
            elif ch == "x":
                self.level.add_ghost(Ghost(Point(x, y), self.rng))
                self.ghost_xs.add(x)
            elif ch == "L":
                self.legend(i, j)
            elif ch == "H" and count > 0:
                self.ladders[j - 1] += 1
            elif count > 0:
                self.bad_start(i, j)
            elif ch == "H":
                self.bad_end(i, j)
            elif ch != " ":
                self.invalid(ch, i, j)

    def floor_row(self, row, i):
        floor = (HEIGHT + 1 - i) // FLOOR_DIFF - 1
        for j, ch in self.cells(row):
            count = self.ladders[j - 1]
            if ch in _TILES:
                tile = _TILES[ch]
                if tile == Tile.EMPTY and MIN_X + (j - 1) in self.ghost_xs:
                    self.fail(f"There  At : Row: {i + 1} Col: {j} There is ghost in the air")
                self.level.board[floor][j - 1] = tile
                if count > 0:
                    floors = (count + 1) // FLOOR_DIFF
                    self.level.add_ladder(Ladder(Point(MIN_X + j, MIN_Y + i), floors))
                    self.ladders[j - 1] = 0
            elif ch == "H":
                if count == 0:
                    self.bad_end(i, j)
                # A ladder passing through a floor leaves a plain brick behind it.
                self.level.board[floor][j - 1] = Tile.PLAIN
                self.ladders[j - 1] += 1
            else:
                self.invalid(ch, i, j)
        self.ghost_xs.clear()

    def row(self, row, i):
        if len(row) < WIDTH + 1 or row[0] != "Q" or row[WIDTH] != "Q":
            self.fail("board frame is invalid")
        kind = (HEIGHT - i) % FLOOR_DIFF
        if kind == 1:
            if i == 0:
                self.top_row(row, i)
            else:
                self.air_row(row, i)
        elif kind == 0:
            self.character_row(row, i)
        else:
            self.floor_row(row, i)

    def finish(self):
        if not all(label in self.found for label in _REQUIRED):
            self.fail("one or more of the characters not found")
        size = self.rng.randint(3, 6)
        intervals = tuple(self.rng.randint(10, 30) for _ in range(size))
        directions = tuple(islice(cycle((Direction.LEFT, Direction.RIGHT)), size))
        self.level.schedule = BarrelSchedule(intervals, directions)
        if "hammer" not in self.found:
            self.level.hammer = Hammer()
        return self.level


def parse_level(lines, name="<screen>", rng=None):
    """Build a :class:`Level` from the lines of a screen file.

    Raises :class:`LevelFileError` when the layout is not valid.
    """
    rng = rng if rng is not None else random.Random()
    source = (line.rstrip("\r\n") for line in lines)

    top = next((line for line in source if not _is_blank(line)), None)
    if top is None:
        raise LevelFileError(name, "Is empty")
    if len(top) < WIDTH:
        raise LevelFileError(name, "board is too narrow")

    min_x = 0
    while top[min_x] == " " and min_x < len(top) - WIDTH:
        min_x += 1
    if top[min_x : min_x + WIDTH] != "Q" * WIDTH:
        raise LevelFileError(name, "board frame is invalid")

    builder = _Builder(name, rng)
    for i in range(HEIGHT - 1):
        raw = next(source, None)
        if raw is None:
            raise LevelFileError(name, "too less rows")
        builder.row(raw[min_x:], i)

    if next(source, None) is None:
        raise LevelFileError(name, "No bottom border")
    if any(not _is_blank(line) for line in source):
        raise LevelFileError(name, "extra characters at the bottom")

    return builder.finish()


def read_level(path, rng=None):
    """Read and parse one screen file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_level(text.splitlines(), path.name, rng)


def load_levels(directory=None, rng=None, log=print):
    """Load every valid ``dkong_NN.screen`` file in ``directory``.

    Files that fail to parse are reported through ``log`` and skipped.
    Returns a dict from level number to :class:`Level`, ordered by number.
    """
    directory = Path(directory) if directory is not None else Path.cwd()
    rng = rng if rng is not None else random.Random()
    levels = {}
    for entry in sorted(directory.iterdir()):
        number = level_number(entry.name)
        if number is None or not entry.is_file():
            continue
        try:
            levels[number] = read_level(entry, rng)
        except LevelFileError as err:
            log(str(err))
        except OSError as err:
            log(f"In File {entry.name} could not be read: {err}")
    return dict(sorted(levels.items()))