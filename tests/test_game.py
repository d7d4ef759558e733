import io
import random

import pytest

from kongrun.config import (
    BOARD_COLS,
    FLOOR_DIFF,
    FLOORS,
    HEIGHT,
    MIN_X,
    MIN_Y,
    WIDTH,
    Direction,
    Tile,
)
from kongrun.console import Console
from kongrun.entities import Barrel, BarrelSchedule, Ghost, Hammer, Player
from kongrun.game import Game, RoundState
from kongrun.level import Level
from kongrun.point import Point


def _game(keys=(), directory=None):
    stream = io.StringIO()
    console = Console(stream, list(keys))
    game = Game(console, directory, random.Random(7))
    game.tick_seconds = 0
    return game, stream


def _goto(x, y):
    stream = io.StringIO()
    Console(stream, []).goto(x, y)
    return stream.getvalue()


def _flat_level(schedule=(50,)):
    level = Level()
    level.board[0] = [Tile.PLAIN] * BOARD_COLS
    y = FLOORS[0] - 1
    level.start_mario = Point(MIN_X + 1, y)
    level.start_pauline = Point(MIN_X + 3, y)
    level.start_donkey_kong = Point(MIN_X + 60, FLOORS[7] - 1)
    level.schedule = BarrelSchedule(schedule, (Direction.RIGHT,) * len(schedule))
    return level


def _screen_text():
    lines = ["Q" * WIDTH]
    for i in range(HEIGHT - 1):
        kind = (HEIGHT - i) % FLOOR_DIFF
        cells = ["="] * BOARD_COLS if kind == 2 else [" "] * BOARD_COLS
        if i == 0:
            cells[69] = "L"
        if i == HEIGHT - 3:
            cells[0] = "@"
            cells[4] = "$"
            cells[39] = "&"
        lines.append("Q" + "".join(cells) + " Q")
    lines.append("Q" * WIDTH)
    return "\n".join(lines) + "\n"


def test_restart_resets_round():
    mario = Player("@", Point(10, 10))
    mario.hammer = Direction.RIGHT
    mario.direction = Direction.LEFT
    state = RoundState(mario, barrels=[Barrel(Point(5, 5), Direction.LEFT)])
    state.climb, state.jump, state.time_to_next_barrel = 3, 2, 5
    initial = [Ghost(Point(20, 20), random.Random(1))]
    state.restart(Point(4, 24), initial)
    assert mario.pos == Point(4, 24)
    assert mario.direction == Direction.STAY
    assert mario.hammer == Direction.STAY
    assert state.barrels == []
    assert (state.climb, state.jump, state.time_to_next_barrel) == (0, 0, 0)
    assert len(state.ghosts) == 1
    assert state.ghosts[0] is not initial[0]
    assert state.ghosts[0].pos == initial[0].pos


def test_update_score_only_while_positive():
    game, _ = _game()
    start = game.score
    game.update_score(150)
    assert game.score == start + 150
    game.score = 0
    game.update_score(200)
    assert game.score == 0


def test_show_time_counts_and_resets():
    game, stream = _game()
    legend = Point(86, 4)
    start = game.score
    assert game.show_time(legend) == 0
    assert game.show_time(legend) == 1
    assert "00:01" in stream.getvalue()
    assert game.score == start - 2
    assert game.show_time(legend, reset=True) == 2
    assert game.show_time(legend) == 0


def test_print_lives_and_score():
    game, stream = _game()
    game.print_lives(3, Point(86, 4))
    game.print_score(Point(86, 4))
    out = stream.getvalue()
    assert "Lives:3" in out
    assert f"Score: {game.score}" in out


def test_draw_borders_writes_frame():
    game, stream = _game()
    game.draw_borders()
    assert stream.getvalue().count("Q") == 2 * WIDTH + 2 * HEIGHT + 1


def test_start_menu_clears_only_when_asked():
    game, stream = _game()
    game.start_menu(clear=False)
    assert not stream.getvalue().startswith("\x1b[2J")
    assert "(1)Start a new game" in stream.getvalue()
    game2, stream2 = _game()
    game2.start_menu(clear=True)
    assert stream2.getvalue().startswith("\x1b[2J")


def test_show_instructions_waits_for_two_keys():
    game, stream = _game(["a", "b", "c"])
    game.show_instructions()
    assert "Tumble Down a Ladder" in stream.getvalue()
    assert game.console.read_key() == "c"


def test_select_level_retries_until_known():
    game, stream = _game(["9", "9", "0", "2"])
    assert game.select_level({2: Level()}) == 2
    out = stream.getvalue()
    assert "Wrong choice, Try again" in out
    assert "02\n" in out


def test_pause_waits_for_escape():
    game, stream = _game(["a", chr(27), "z"])
    mario = Player("@", Point(10, 10))
    game.pause(mario, [], [], 0)
    assert "Game Paused" in stream.getvalue()
    assert game.console.read_key() == "z"


def test_mario_trace_erases_hammer():
    game, stream = _game()
    mario = Player("@", Point(10, 10))
    mario.hammer = Direction.RIGHT
    game.print_mario_trace(mario, 0)
    out = stream.getvalue()
    assert _goto(10, 10) + " " in out
    assert _goto(11, 9) + " " in out


def test_play_level_reaches_pauline():
    game, _ = _game(["d"])
    start = game.score
    result = game.play_level(_flat_level(), 3)
    assert result.won is True
    assert result.lives == 3
    assert result.mario.pos == _flat_level().start_pauline
    assert game.score == start + 600


def test_play_level_picks_up_hammer():
    level = _flat_level()
    y = FLOORS[0] - 1
    level.hammer = Hammer(Point(MIN_X + 2, y))
    level.start_pauline = Point(MIN_X + 4, y)
    game, _ = _game(["d"])
    result = game.play_level(level, 3)
    assert result.won is True
    assert result.mario.hammer == Direction.RIGHT
    assert level.hammer.visible is True


def test_play_level_lost_when_falling_out():
    level = _flat_level()
    level.board[0] = [Tile.EMPTY] * BOARD_COLS
    level.start_mario = Point(10, MIN_Y + HEIGHT - 1)
    game, _ = _game()
    result = game.play_level(level, 1)
    assert result.won is False
    assert result.lives == 0


def test_play_level_quit_and_barrel_spawn():
    level = _flat_level(schedule=(0,))
    game, _ = _game([" "])
    result = game.play_level(level, 3)
    assert result.quit is True
    assert result.won is False
    assert result.lives == 3
    assert len(result.barrels) == 1
    assert result.barrels[0].pos == level.start_donkey_kong.moved(Direction.DOWN_AND_RIGHT)


def test_run_without_levels(tmp_path):
    game, stream = _game(["x"], directory=tmp_path)
    game.run()
    assert "None of the boards were defined properly" in stream.getvalue()


def test_run_exit_from_menu(tmp_path):
    (tmp_path / "dkong_01.screen").write_text(_screen_text())
    game, stream = _game(["5", "9"], directory=tmp_path)
    game.run()
    out = stream.getvalue()
    assert "Invalid choice, please try again." in out
    assert "Exiting game..." in out


def test_run_plays_and_quits_level(tmp_path):
    (tmp_path / "dkong_01.screen").write_text(_screen_text())
    game, stream = _game(["1", "0", "1", " ", "9"], directory=tmp_path)
    game.run()
    out = stream.getvalue()
    assert "Lives:3" in out
    assert out.rstrip().endswith("Exiting game...")


def test_run_propagates_end_of_input(tmp_path):
    (tmp_path / "dkong_01.screen").write_text(_screen_text())
    game, _ = _game(["8", "a"], directory=tmp_path)
    with pytest.raises(EOFError):
        game.run()