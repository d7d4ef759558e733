"""Board rules: floors, slopes, ladders, barrel and ghost movement, collisions."""

import random
from dataclasses import dataclass

from .config import FLOOR_DIFF, FLOORS, HEIGHT, MIN_X, MIN_Y, NUM_FLOORS, WIDTH, Direction, Tile

_FALLING = (Direction.DOWN_AND_LEFT, Direction.DOWN_AND_RIGHT)


@dataclass(frozen=True)
class LadderGrip:
    """Where a player grabbed a ladder.

    ``index`` is the ladder's position in the list, ``climb`` the number of
    steps still to go and ``span`` the full length of the climb.
    """

    index: int
    climb: int
    span: int


def _tile(board, row, col):
    """The tile at a cell; cells outside the board count as empty."""
    if 0 <= row < len(board) and 0 <= col < len(board[row]):
        return Tile(board[row][col])
    return Tile.EMPTY


def _column(x):
    return x - (MIN_X + 1)


def floor_index(y):
    """Index of the floor a screen row stands above, or -1 below the bottom floor."""
    if y >= FLOORS[0]:
        return -1
    return ((FLOORS[0] - 1) - y) // FLOOR_DIFF


def slope_at(pos, board):
    """The slope of the brick run under ``pos``: the first slope found, else plain."""
    row = floor_index(pos.y)
    right = left = _column(pos.x)
    stop = False
    while not stop and _tile(board, row, right) <= Tile.PLAIN and _tile(board, row, left) <= Tile.PLAIN:
        stop = True
        if right < WIDTH - 3 and _tile(board, row, right) != Tile.EMPTY:
            stop = False
            right += 1
        if left > 0 and _tile(board, row, left) != Tile.EMPTY:
            stop = False
            left -= 1
    if stop:
        return Tile.PLAIN
    if _tile(board, row, right) > Tile.PLAIN:
        return _tile(board, row, right)
    return _tile(board, row, left)


def can_leave_ladder(pos, ladder, direction, board):
    """Whether a climber at ``pos`` may step off ``ladder`` onto a middle floor."""
    bottom = ladder.pos.y
    for middle in range(bottom - FLOOR_DIFF, bottom - ladder.steps, -FLOOR_DIFF):
        if pos.y != middle:
            continue
        row = floor_index(pos.y)
        col = _column(pos.x)
        if direction == Direction.LEFT and _tile(board, row, col - 1) != Tile.EMPTY:
            return True
        if direction == Direction.RIGHT and _tile(board, row, col + 1) != Tile.EMPTY:
            return True
        return False
    return False


def near_ladder(player, ladders, direction):
    """Find a ladder beside ``player`` to climb up or down.

    The player is moved onto the ladder's column. Returns a
    :class:`LadderGrip`, or None when no ladder is within reach.
    """
    going_up = direction == Direction.UP
    for index, ladder in enumerate(ladders):
        bottom = ladder.pos.y
        top = bottom - ladder.steps
        if going_up:
            floors = range(bottom, top, -FLOOR_DIFF)
        else:
            floors = range(top, bottom, FLOOR_DIFF)
        for current in floors:
            if player.pos.y == current and abs(player.pos.x - ladder.pos.x) <= 1:
                player.pos = type(player.pos)(ladder.pos.x, player.pos.y)
                climb = current - top + 1 if going_up else bottom - current + 1
                return LadderGrip(index, climb, ladder.steps + 1)
    return None


def barrels_check_hits(barrels, player):
    """Remove barrels that collide with each other.

    Returns True, leaving the list untouched, when ``player`` is within two
    cells of a collision.
    """
    kept = []
    remaining = list(barrels)
    while remaining:
        first = remaining.pop(0)
        hit = [b for b in remaining if b.pos.distance(first.pos) <= 1]
        for other in hit:
            if player.pos.distance(other.pos) <= 2 or player.pos.distance(first.pos) <= 2:
                return True
        if hit:
            remaining = [b for b in remaining if all(b is not h for h in hit)]
        else:
            kept.append(first)
    barrels[:] = kept
    return False


def barrel_distance_floor(barrel, floor):
    """How many rows the barrel is above floor ``floor``."""
    return (MIN_Y + HEIGHT - 1) - barrel.pos.y - FLOOR_DIFF * floor - 1


def barrels_update_dirs(barrels, board, mario, console=None):
    """Turn barrels that walk off a ledge or land, and explode long falls.

    Returns False when a barrel explodes within two cells of ``mario``.
    """
    kept = []
    for barrel in barrels:
        current = barrel.direction
        floor = floor_index(barrel.pos.y)
        above = barrel_distance_floor(barrel, floor)
        col = _column(barrel.pos.x)
        if current in (Direction.RIGHT, Direction.LEFT):
            if _tile(board, floor, col) == Tile.EMPTY:
                barrel.direction = (
                    Direction.DOWN_AND_RIGHT if current == Direction.RIGHT else Direction.DOWN_AND_LEFT
                )
        elif current in _FALLING:
            if above == 0 and _tile(board, floor, col) != Tile.EMPTY:
                if barrel.fall_secs >= 4 * FLOOR_DIFF:
                    if mario.pos.distance(barrel.pos) <= 2:
                        return False
                    continue
                barrel.fall_secs = 0
                slope = slope_at(barrel.pos, board)
                if slope == Tile.PLAIN:
                    barrel.direction = (
                        Direction.RIGHT if current == Direction.DOWN_AND_RIGHT else Direction.LEFT
                    )
                elif slope == Tile.RIGHT_SLOPE:
                    barrel.direction = Direction.RIGHT
                else:
                    barrel.direction = Direction.LEFT
            elif above == FLOOR_DIFF - 1 and _tile(board, floor + 1, col) != Tile.EMPTY:
                if console is not None:
                    brick = _tile(board, floor + 1, col)
                    console.put(barrel.pos.x, barrel.pos.y, brick.symbol())
        kept.append(barrel)
    barrels[:] = kept
    return True


def hits_any(objects, player):
    """Whether any of ``objects`` shares the player's position."""
    return any(obj.pos == player.pos for obj in objects)


def ghosts_change_dir(ghosts, board, rng=None):
    """Steer ghosts apart, away from edges, and now and then at random."""
    rng = rng if rng is not None else random.Random()
    by_floor = {}
    for ghost in ghosts:
        by_floor.setdefault(floor_index(ghost.pos.y), []).append(ghost)

    for floor in range(NUM_FLOORS):
        group = by_floor.get(floor, [])
        changed = [False] * len(group)
        for j, ghost in enumerate(group):
            for k, other in enumerate(group[j + 1 :], start=j + 1):
                if abs(ghost.pos.x - other.pos.x) > 2:
                    continue
                if ghost.direction == Direction.STAY:
                    if other.direction == Direction.LEFT:
                        ghost.direction, other.direction = Direction.RIGHT, Direction.LEFT
                    else:
                        ghost.direction, other.direction = Direction.LEFT, Direction.RIGHT
                else:
                    if ghost.direction == Direction.LEFT:
                        mine, theirs = Direction.RIGHT, Direction.LEFT
                    else:
                        mine, theirs = Direction.LEFT, Direction.RIGHT
                    ghost.direction = Direction.STAY if changed[j] else mine
                    other.direction = Direction.STAY if changed[k] else theirs
                changed[j] = changed[k] = True

            if ghost.direction != Direction.STAY or not changed[j]:
                new_dir = ghost_reached_edge(ghost, board)
                if new_dir != Direction.STAY:
                    if ghost.direction == Direction.STAY or not changed[j]:
                        ghost.direction = new_dir
                    else:
                        ghost.direction = Direction.STAY
                    changed[j] = True

            if not changed[j]:
                if ghost.direction == Direction.STAY:
                    ghost.direction = Direction.LEFT if rng.randrange(2) == 0 else Direction.RIGHT
                elif rng.randrange(20) == 0:
                    ghost.direction = (
                        Direction.LEFT if ghost.direction == Direction.RIGHT else Direction.RIGHT
                    )


def ghost_reached_edge(ghost, board):
    """The direction a ghost must turn to at a wall or platform edge, else STAY."""
    x = ghost.pos.x
    if x > MIN_X + WIDTH - 2:
        return Direction.LEFT
    if x < MIN_X + 2:
        return Direction.RIGHT
    floor = floor_index(ghost.pos.y)
    right_col = x - MIN_X + 1
    left_col = _column(x) - 1
    if ghost.direction == Direction.RIGHT:
        if _tile(board, floor, right_col) == Tile.EMPTY:
            return Direction.LEFT
    elif ghost.direction == Direction.LEFT:
        if _tile(board, floor, left_col) == Tile.EMPTY:
            return Direction.RIGHT
    else:
        if _tile(board, floor, left_col) == Tile.EMPTY:
            return Direction.RIGHT
        if _tile(board, floor, right_col) == Tile.EMPTY:
            return Direction.LEFT
    return Direction.STAY


def out_of_bounds(pos):
    """Whether ``pos`` lies outside the playable area."""
    return pos.x < MIN_X + 2 or pos.x > MIN_X + WIDTH - 2 or pos.y > MIN_Y + HEIGHT - 1