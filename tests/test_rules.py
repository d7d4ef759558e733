import io
import random

import pytest

from kongrun.config import BOARD_COLS, FLOOR_DIFF, FLOORS, HEIGHT, MIN_X, MIN_Y, NUM_FLOORS, WIDTH, Direction, Tile
from kongrun.console import Console
from kongrun.entities import Barrel, Ghost, Ladder, Player
from kongrun.level import Level
from kongrun.point import Point
from kongrun.rules import (
    LadderGrip,
    barrel_distance_floor,
    barrels_check_hits,
    barrels_update_dirs,
    can_leave_ladder,
    floor_index,
    ghost_reached_edge,
    ghosts_change_dir,
    hits_any,
    near_ladder,
    out_of_bounds,
    slope_at,
)


def empty_board():
    return Level().board


def plain_board():
    board = empty_board()
    for row in board:
        row[:] = [Tile.PLAIN] * BOARD_COLS
    return board


def ghost(x, y, direction):
    g = Ghost(Point(x, y), random.Random(1))
    g.direction = direction
    return g


@pytest.mark.parametrize("index", range(NUM_FLOORS))
def test_floor_index_of_standing_row(index):
    assert floor_index(FLOORS[index] - 1) == index


def test_floor_index_below_bottom_floor():
    assert floor_index(FLOORS[0]) == -1


def test_out_of_bounds():
    y = FLOORS[0] - 1
    assert out_of_bounds(Point(MIN_X + 2, y)) is False
    assert out_of_bounds(Point(MIN_X + 1, y)) is True
    assert out_of_bounds(Point(MIN_X + WIDTH - 1, y)) is True
    assert out_of_bounds(Point(MIN_X + 10, MIN_Y + HEIGHT)) is True


def test_slope_plain_and_empty():
    pos = Point(MIN_X + 11, FLOORS[0] - 1)
    assert slope_at(pos, plain_board()) == Tile.PLAIN
    assert slope_at(pos, empty_board()) == Tile.PLAIN


def test_slope_finds_right_slope():
    board = empty_board()
    board[0][5:15] = [Tile.PLAIN] * 10
    board[0][14] = Tile.RIGHT_SLOPE
    assert slope_at(Point(MIN_X + 1 + 8, FLOORS[0] - 1), board) == Tile.RIGHT_SLOPE


def test_can_leave_ladder_at_middle_floor():
    ladder = Ladder(Point(MIN_X + 20, FLOORS[0] - 1), 2)
    board = empty_board()
    col = 20 - 1
    board[1][col - 1] = Tile.PLAIN
    pos = Point(MIN_X + 20, FLOORS[1] - 1)
    assert can_leave_ladder(pos, ladder, Direction.LEFT, board) is True
    assert can_leave_ladder(pos, ladder, Direction.RIGHT, board) is False
    assert can_leave_ladder(Point(MIN_X + 20, FLOORS[0] - 1), ladder, Direction.LEFT, board) is False


def test_near_ladder_up_snaps_player():
    ladder = Ladder(Point(MIN_X + 10, FLOORS[0] - 1), 1)
    player = Player("@", Point(MIN_X + 11, FLOORS[0] - 1))
    grip = near_ladder(player, [ladder], Direction.UP)
    assert grip == LadderGrip(0, ladder.steps + 1, ladder.steps + 1)
    assert player.pos == Point(MIN_X + 10, FLOORS[0] - 1)


def test_near_ladder_down_from_top():
    ladder = Ladder(Point(MIN_X + 10, FLOORS[0] - 1), 1)
    other = Ladder(Point(MIN_X + 50, FLOORS[0] - 1), 1)
    player = Player("@", Point(MIN_X + 9, FLOORS[0] - 1 - ladder.steps))
    grip = near_ladder(player, [other, ladder], Direction.DOWN)
    assert grip.index == 1
    assert grip.climb == ladder.steps + 1
    assert player.pos.x == ladder.pos.x


def test_near_ladder_none_when_far():
    ladder = Ladder(Point(MIN_X + 10, FLOORS[0] - 1), 1)
    player = Player("@", Point(MIN_X + 30, FLOORS[0] - 1))
    assert near_ladder(player, [ladder], Direction.UP) is None
    assert player.pos == Point(MIN_X + 30, FLOORS[0] - 1)


def test_barrels_check_hits_removes_colliding_pair():
    y = FLOORS[0] - 1
    a = Barrel(Point(20, y), Direction.RIGHT)
    b = Barrel(Point(21, y), Direction.LEFT)
    c = Barrel(Point(60, y), Direction.LEFT)
    barrels = [a, b, c]
    mario = Player("@", Point(40, y))
    assert barrels_check_hits(barrels, mario) is False
    assert barrels == [c]


def test_barrels_check_hits_reports_nearby_player():
    y = FLOORS[0] - 1
    barrels = [Barrel(Point(20, y), Direction.RIGHT), Barrel(Point(21, y), Direction.LEFT)]
    mario = Player("@", Point(22, y))
    assert barrels_check_hits(barrels, mario) is True


@pytest.mark.parametrize("floor", range(NUM_FLOORS - 1))
def test_barrel_distance_floor(floor):
    standing = Barrel(Point(20, FLOORS[floor] - 1), Direction.RIGHT)
    assert barrel_distance_floor(standing, floor) == 0
    high = Barrel(Point(20, FLOORS[floor] - 3), Direction.RIGHT)
    assert barrel_distance_floor(high, floor) == FLOOR_DIFF - 1


def test_barrel_walks_off_ledge():
    barrel = Barrel(Point(MIN_X + 20, FLOORS[0] - 1), Direction.RIGHT)
    barrels = [barrel]
    mario = Player("@", Point(MIN_X + 60, FLOORS[0] - 1))
    assert barrels_update_dirs(barrels, empty_board(), mario) is True
    assert barrel.direction == Direction.DOWN_AND_RIGHT


def test_barrel_lands_on_plain_floor():
    barrel = Barrel(Point(MIN_X + 20, FLOORS[0] - 1), Direction.DOWN_AND_LEFT)
    barrel.fall_secs = 2
    barrels = [barrel]
    mario = Player("@", Point(MIN_X + 60, FLOORS[0] - 1))
    assert barrels_update_dirs(barrels, plain_board(), mario) is True
    assert barrel.direction == Direction.LEFT
    assert barrel.fall_secs == 0
    assert barrels == [barrel]


def test_barrel_lands_on_left_slope():
    board = empty_board()
    board[0][10:30] = [Tile.PLAIN] * 20
    board[0][10] = Tile.LEFT_SLOPE
    barrel = Barrel(Point(MIN_X + 1 + 20, FLOORS[0] - 1), Direction.DOWN_AND_RIGHT)
    mario = Player("@", Point(MIN_X + 60, FLOORS[0] - 1))
    assert barrels_update_dirs([barrel], board, mario) is True
    assert barrel.direction == Direction.LEFT


def test_long_fall_explodes():
    barrel = Barrel(Point(MIN_X + 20, FLOORS[0] - 1), Direction.DOWN_AND_LEFT)
    barrel.fall_secs = 4 * FLOOR_DIFF
    barrels = [barrel]
    mario = Player("@", Point(MIN_X + 60, FLOORS[0] - 1))
    assert barrels_update_dirs(barrels, plain_board(), mario) is True
    assert barrels == []


def test_long_fall_near_mario():
    barrel = Barrel(Point(MIN_X + 20, FLOORS[0] - 1), Direction.DOWN_AND_LEFT)
    barrel.fall_secs = 4 * FLOOR_DIFF
    mario = Player("@", Point(MIN_X + 21, FLOORS[0] - 1))
    assert barrels_update_dirs([barrel], plain_board(), mario) is False


def test_falling_barrel_redraws_brick():
    stream = io.StringIO()
    console = Console(stream=stream, keys=[])
    board = empty_board()
    board[1][19] = Tile.RIGHT_SLOPE
    barrel = Barrel(Point(MIN_X + 20, FLOORS[1]), Direction.DOWN_AND_RIGHT)
    mario = Player("@", Point(MIN_X + 60, FLOORS[0] - 1))
    assert barrels_update_dirs([barrel], board, mario, console) is True
    assert stream.getvalue().endswith(">")


def test_hits_any():
    mario = Player("@", Point(10, 5))
    assert hits_any([Barrel(Point(10, 5), Direction.LEFT)], mario) is True
    assert hits_any([Barrel(Point(11, 5), Direction.LEFT)], mario) is False
    assert hits_any([], mario) is False


def test_ghost_at_right_bound_turns_left():
    g = ghost(MIN_X + WIDTH - 1, FLOORS[0] - 1, Direction.RIGHT)
    assert ghost_reached_edge(g, plain_board()) == Direction.LEFT


def test_ghost_at_left_bound_turns_right():
    g = ghost(MIN_X + 1, FLOORS[0] - 1, Direction.LEFT)
    assert ghost_reached_edge(g, plain_board()) == Direction.RIGHT


def test_ghost_edge_of_platform():
    g = ghost(MIN_X + 30, FLOORS[0] - 1, Direction.RIGHT)
    assert ghost_reached_edge(g, empty_board()) == Direction.LEFT
    assert ghost_reached_edge(g, plain_board()) == Direction.STAY


def test_close_ghosts_turn_apart():
    y = FLOORS[0] - 1
    a = ghost(MIN_X + 40, y, Direction.LEFT)
    b = ghost(MIN_X + 41, y, Direction.RIGHT)
    ghosts_change_dir([a, b], plain_board(), random.Random(0))
    assert a.direction == Direction.RIGHT
    assert b.direction == Direction.LEFT


def test_standing_ghost_picks_a_direction():
    g = ghost(MIN_X + 40, FLOORS[0] - 1, Direction.STAY)
    ghosts_change_dir([g], plain_board(), random.Random(3))
    assert g.direction in (Direction.LEFT, Direction.RIGHT)


def test_ghost_turns_at_platform_edge():
    board = empty_board()
    board[0][20:40] = [Tile.PLAIN] * 20
    g = ghost(MIN_X + 1 + 38, FLOORS[0] - 1, Direction.RIGHT)
    ghosts_change_dir([g], board, random.Random(0))
    assert g.direction == Direction.LEFT