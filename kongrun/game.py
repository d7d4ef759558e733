"""The interactive game: menus, the tick loop of one level and the whole session."""

import argparse
import copy
import random
import time
from dataclasses import dataclass, field

from .config import (
    BOARD_COLS,
    ESC,
    FLOOR_DIFF,
    HEIGHT,
    JUMP_SECS,
    MIN_X,
    MIN_Y,
    SPACE,
    WIDTH,
    Direction,
    Tile,
)
from .console import Console
from .entities import Barrel, Player
from .point import Point
from .rules import (
    barrels_check_hits,
    barrels_update_dirs,
    can_leave_ladder,
    floor_index,
    ghosts_change_dir,
    hits_any,
    near_ladder,
    out_of_bounds,
)
from .screen_file import load_levels

INTERVAL = 170
"""Milliseconds between two ticks."""
SECOND = 1000
START_SCORE = 999
START_LIVES = 3
BARREL_POINTS = 150
GHOST_POINTS = 200
LEVEL_POINTS = 600

_MESSAGE_ROW = HEIGHT + MIN_Y + 1
_WALKING = (Direction.STAY, Direction.LEFT, Direction.RIGHT)


def _column(x):
    return x - (MIN_X + 1)


@dataclass
class RoundState:
    """Everything that changes while one level is being played."""

    mario: Player
    barrels: list = field(default_factory=list)
    ghosts: list = field(default_factory=list)
    lives: int = START_LIVES
    time_to_next_barrel: int = 0
    climb: int = 0
    jump: int = 0
    descent: int = 0
    ladder_steps: int = 0
    ladder_motion: Direction = Direction.STAY
    ladder_index: int = -1
    last_key: str = ""
    won: bool = False
    quit: bool = False

    def restart(self, start, ghosts):
        """Put Mario back at ``start``, clear the barrels and reset the ghosts."""
        self.mario.pos = start
        self.mario.direction = Direction.STAY
        self.mario.hammer = Direction.STAY
        self.barrels.clear()
        self.ghosts = copy.deepcopy(list(ghosts))
        self.time_to_next_barrel = 0
        self.climb = 0
        self.jump = 0


class Game:
    """A session of menus and levels played on a console."""

    def __init__(self, console=None, directory=None, rng=None):
        self.console = console if console is not None else Console()
        self.directory = directory
        self.rng = rng if rng is not None else random.Random()
        self.score = START_SCORE
        self.tick_seconds = INTERVAL / SECOND
        self._seconds = 0

    # ---- text screens -------------------------------------------------

    def update_score(self, points):
        """Add ``points`` to the score while it is still positive."""
        if self.score > 0:
            self.score += points

    def start_menu(self, clear=True):
        """Show the main menu."""
        con = self.console
        if clear:
            con.clear()
        con.write("======================== Donkey Kong ============================== \n")
        con.write("\n(1)Start a new game\n")
        con.write("(8)instructions and game controls\n")
        con.write("(9)Leave game\n")
        con.write("=================================================================== \n")
        con.write("Please select an option")

    def show_instructions(self):
        """Show the rules and then the controls, each until a key is pressed."""
        con = self.console
        con.clear()
        con.write("============================ Instructions ==========================\n")
        con.write("\nIn this game,, you play as Mario.\n")
        con.write(
            "Mario is given 3 chances (lives) to reach Pauline, which will be displayed "
            "in the upper-right corner of the screen\n"
        )
        con.write(
            "Mario loses a life and the game restarts if he faces a barrel, falls to the "
            "abyss, falls for 3 or more floors, or find himself near a barrels explosion "
            "(2 Characters difference).\n"
        )
        con.write("====================================================================\n")
        con.write("press any key to see the game controls...")
        con.read_key()
        con.clear()
        con.write("============================ game controls ==========================\n")
        con.write("Use the following keys to play the game:\n")
        con.write("A / D - Move Left / Right\n")
        con.write("W - Jump\n")
        con.write("S - Stay\n")
        con.write("X - Tumble Down a Ladder\n")
        con.write("Space - Pause the Game\n")
        con.write("====================================================================\n")
        con.write("Press any key to return to the main menu")
        con.read_key()

    def _read_choice(self):
        con = self.console
        first = con.read_key()
        con.write(first)
        second = con.read_key()
        con.write(second + "\n")
        return (ord(first) - ord("0")) * 10 + (ord(second) - ord("0"))

    def select_level(self, levels):
        """Ask for a two-digit level number until one of ``levels`` is chosen."""
        con = self.console
        con.clear()
        con.write("========================= Level selection ==========================\n")
        con.write("Select the level you wish to play on: \n")
        for number in levels:
            con.write(f"{number:02}\n")
        con.write("====================================================================\n")
        choice = self._read_choice()
        while choice not in levels:
            con.write("Wrong choice, Try again\n")
            choice = self._read_choice()
        return choice

    def draw_borders(self):
        """Draw the frame around the board."""
        con = self.console
        for x in range(MIN_X, MIN_X + WIDTH):
            con.put(x, MIN_Y, "Q")
            con.put(x, MIN_Y + HEIGHT, "Q")
        for y in range(MIN_Y, MIN_Y + HEIGHT):
            con.put(MIN_X, y, "Q")
            con.put(MIN_X + WIDTH, y, "Q")
        con.put(MIN_X + WIDTH, MIN_Y + HEIGHT, "Q")

    def print_lives(self, lives, legend):
        """Show the remaining lives at the legend."""
        self.console.put(legend.x, legend.y, f"Lives:{lives}")

    def show_time(self, legend, reset=False):
        """Show and advance the game clock, or reset it.

        Returns the seconds counted before this call.
        """
        if reset:
            seconds, self._seconds = self._seconds, 0
            return seconds
        minutes, seconds = divmod(self._seconds, 60)
        self.console.put(legend.x, legend.y + 1, "Time: ")
        self.console.put(legend.x + 5, legend.y + 1, f"{minutes:02}:{seconds:02}\n")
        self.update_score(-1)
        shown = self._seconds
        self._seconds += 1
        return shown

    def print_score(self, legend):
        """Show the score below the clock."""
        self.console.put(legend.x, legend.y + 2, f"Score: {self.score}\n")

    def print_mario_trace(self, mario, climb):
        """Erase Mario, and the hammer he holds, from the screen."""
        con = self.console
        con.put(mario.pos.x, mario.pos.y, " ")
        if mario.hammer != Direction.STAY and climb == 0 and mario.direction in _WALKING:
            dx = 1 if mario.hammer == Direction.RIGHT else -1
            con.put(mario.pos.x + dx, mario.pos.y - 1, " ")

    def _erase(self, objects):
        for obj in objects:
            self.console.put(obj.pos.x, obj.pos.y, " ")

    def pause(self, mario, barrels, ghosts, climb):
        """Freeze the game until ESC is pressed again."""
        con = self.console
        con.put(0, _MESSAGE_ROW, "Game Paused")
        mario.draw(con)
        for obj in (*barrels, *ghosts):
            obj.draw(con)
        while con.read_key() != chr(ESC):
            pass
        self.print_mario_trace(mario, climb)
        self._erase(barrels)
        self._erase(ghosts)
        con.put(0, _MESSAGE_ROW, " " * 12)

    # ---- one level ----------------------------------------------------

    def _show_brick(self, x, y, value):
        if value in (Tile.PLAIN, Tile.RIGHT_SLOPE, Tile.LEFT_SLOPE):
            self.console.put(x, y, Tile(value).symbol())

    @staticmethod
    def _lose_life(state, level):
        state.lives -= 1
        state.restart(level.start_mario, level.ghosts)

    def _grab_ladder(self, state, level, direction):
        grip = near_ladder(state.mario, level.ladders, direction)
        if grip is None:
            state.ladder_steps = 0
            return False
        state.ladder_index = grip.index
        state.climb = grip.climb
        state.ladder_steps = grip.span
        return True

    def _swing_hammer(self, state):
        mario = state.mario
        if mario.hammer == Direction.RIGHT:
            def reach(obj):
                return obj.pos.x > mario.pos.x and mario.pos.distance(obj.pos) <= 2
        else:
            def reach(obj):
                return obj.pos.x < mario.pos.x and mario.pos.distance(obj.pos) <= 2
        for objects, points in ((state.barrels, BARREL_POINTS), (state.ghosts, GHOST_POINTS)):
            kept = []
            for obj in objects:
                if reach(obj):
                    self.update_score(points)
                else:
                    kept.append(obj)
            objects[:] = kept

    def _handle_key(self, key, state, level):
        mario = state.mario
        lower = key.lower()
        if lower in ("a", "d"):
            side = Direction.LEFT if lower == "a" else Direction.RIGHT
            if state.climb == 0:
                mario.direction = side
            elif mario.direction == Direction.STAY and can_leave_ladder(
                mario.pos, level.get_ladder(state.ladder_index), side, level.board
            ):
                state.climb = 0
                mario.direction = side
        elif lower == "s":
            mario.direction = Direction.STAY
        elif lower == "w":
            current = mario.direction
            if state.climb:
                if current == Direction.DOWN or (
                    current == Direction.STAY and state.ladder_motion == Direction.DOWN
                ):
                    state.climb = state.ladder_steps - state.climb + 1
                state.ladder_motion = Direction.UP
                mario.direction = Direction.UP
            elif current == Direction.STAY and self._grab_ladder(state, level, Direction.UP):
                state.ladder_motion = Direction.UP
                mario.direction = Direction.UP
            elif state.descent == 0:
                state.jump = JUMP_SECS
                if current == Direction.LEFT:
                    mario.direction = Direction.UP_AND_LEFT
                elif current == Direction.RIGHT:
                    mario.direction = Direction.UP_AND_RIGHT
                else:
                    mario.direction = Direction.UP
        elif lower == "x":
            if state.climb == 0:
                if mario.direction == Direction.STAY and self._grab_ladder(
                    state, level, Direction.DOWN
                ):
                    state.ladder_motion = Direction.DOWN
                    mario.direction = Direction.DOWN
            else:
                if mario.direction == Direction.UP or (
                    mario.direction == Direction.STAY and state.ladder_motion == Direction.UP
                ):
                    state.climb = state.ladder_steps - state.climb + 1
                state.ladder_motion = Direction.DOWN
                mario.direction = Direction.DOWN
        elif key == chr(ESC):
            self.pause(mario, state.barrels, state.ghosts, state.climb)
        elif key == chr(SPACE):
            state.quit = True
        elif lower == "p":
            if state.climb == 0 and mario.hammer != Direction.STAY:
                self._swing_hammer(state)

    def _climb_step(self, state, level):
        mario = state.mario
        up = state.ladder_motion == Direction.UP
        down = state.ladder_motion == Direction.DOWN
        if (state.climb == 1 and up) or (state.climb == state.ladder_steps - 1 and down):
            row = min(floor_index(mario.pos.y) + 1, 7)
            if up:
                row -= 1
            value = level.get_board_value(row, _column(mario.pos.x))
            y = mario.pos.y + 1 if up else mario.pos.y
            self._show_brick(mario.pos.x, y, value)
        if mario.direction != Direction.STAY:
            state.climb -= 1
        if state.climb == 0:
            mario.direction = Direction.STAY

    def _fall_step(self, state, level):
        mario = state.mario
        if state.descent % FLOOR_DIFF == 0:
            col = min(_column(mario.pos.x), BOARD_COLS - 1)
            if level.get_board_value(floor_index(mario.pos.y), col) != Tile.EMPTY:
                if state.descent >= FLOOR_DIFF * 3:
                    self._lose_life(state, level)
                landing = {
                    Direction.DOWN: Direction.STAY,
                    Direction.DOWN_AND_RIGHT: Direction.RIGHT,
                    Direction.DOWN_AND_LEFT: Direction.LEFT,
                }
                if mario.direction in landing:
                    mario.direction = landing[mario.direction]
                state.descent = 0
        elif state.descent % FLOOR_DIFF == 1 and mario.direction != Direction.DOWN:
            value = level.get_board_value(floor_index(mario.pos.y) + 1, _column(mario.pos.x))
            self._show_brick(mario.pos.x, mario.pos.y, value)
        if state.descent != 0:
            state.descent += 1

    def _jump_step(self, state, level):
        mario = state.mario
        if state.jump - 1 == JUMP_SECS // 2:
            if mario.direction == Direction.UP_AND_LEFT:
                mario.direction = Direction.DOWN_AND_LEFT
            elif mario.direction == Direction.UP_AND_RIGHT:
                mario.direction = Direction.DOWN_AND_RIGHT
            else:
                mario.direction = Direction.DOWN
        state.jump -= 1
        if state.jump == 0:
            below = level.get_board_value(floor_index(mario.pos.y), _column(mario.pos.x))
            if mario.direction in (Direction.DOWN_AND_LEFT, Direction.DOWN_AND_RIGHT):
                if below != Tile.EMPTY:
                    mario.direction = (
                        Direction.LEFT
                        if mario.direction == Direction.DOWN_AND_LEFT
                        else Direction.RIGHT
                    )
                else:
                    state.descent += 1
            else:
                mario.direction = Direction.STAY

    def _check_bounds(self, state):
        mario = state.mario
        con = self.console
        if mario.pos.x < MIN_X + 2:
            if state.jump > 0:
                if mario.direction not in (Direction.UP, Direction.DOWN):
                    if state.jump - 1 >= JUMP_SECS // 2:
                        state.jump = JUMP_SECS - state.jump
                    mario.direction = Direction.DOWN if state.jump != 0 else Direction.STAY
            elif mario.direction == Direction.DOWN_AND_LEFT:
                mario.direction = Direction.DOWN
            elif state.last_key in ("d", "D"):
                mario.direction = Direction.RIGHT
            elif state.descent == 0:
                mario.direction = Direction.STAY
            if mario.hammer == Direction.LEFT:
                mario.hammer = Direction.RIGHT
                con.put(mario.pos.x - 1, mario.pos.y - 1, "Q")
        if mario.pos.x > MIN_X + WIDTH - 2:
            if state.jump > 0:
                if mario.direction not in (Direction.UP, Direction.DOWN):
                    if state.jump - 1 >= JUMP_SECS // 2:
                        state.jump = JUMP_SECS - state.jump
                    if state.jump != 0:
                        mario.direction = Direction.DOWN
                    elif state.descent == 0:
                        mario.direction = Direction.STAY
            elif mario.direction == Direction.DOWN_AND_RIGHT:
                mario.direction = Direction.DOWN
            elif state.last_key in ("a", "A"):
                mario.direction = Direction.LEFT
            elif state.descent == 0:
                mario.direction = Direction.STAY
            if mario.hammer == Direction.RIGHT:
                mario.hammer = Direction.LEFT
                con.put(mario.pos.x + 1, mario.pos.y - 1, "Q")

    def play_level(self, level, lives):
        """Play ``level`` until Mario reaches Pauline, runs out of lives or quits.

        Returns the final :class:`RoundState`.
        """
        con = self.console
        con.clear()
        con.show_cursor(False)
        level.print_board(con)
        self.draw_borders()

        state = RoundState(
            Player("@", level.start_mario), ghosts=copy.deepcopy(level.ghosts), lives=lives
        )
        mario = state.mario
        pauline = Player("$", level.start_pauline)
        kong = Player("&", level.start_donkey_kong)
        hammer = copy.copy(level.hammer)
        kong.draw(con)
        pauline.draw(con)

        schedule = level.schedule
        barrel_index = 0
        time_played = 0

        while True:
            if not state.jump:
                if con.key_pressed() and state.descent == 0:
                    state.last_key = con.read_key()
                    self._handle_key(state.last_key, state, level)
                if state.climb > 0:
                    self._climb_step(state, level)
                elif state.descent > 0:
                    self._fall_step(state, level)
                else:
                    below = level.get_board_value(floor_index(mario.pos.y), _column(mario.pos.x))
                    if below == Tile.EMPTY:
                        mario.direction = (
                            Direction.DOWN_AND_RIGHT
                            if mario.direction == Direction.RIGHT
                            else Direction.DOWN_AND_LEFT
                        )
                        state.descent += 1
            else:
                self._jump_step(state, level)

            self._check_bounds(state)
            if mario.pos.y >= MIN_Y + HEIGHT - 1:
                self._lose_life(state, level)

            if state.time_to_next_barrel == schedule.intervals[barrel_index]:
                state.barrels.append(Barrel(kong.pos, schedule.directions[barrel_index]))
                barrel_index = (barrel_index + 1) % len(schedule)
                state.time_to_next_barrel = 0
            else:
                state.time_to_next_barrel += 1

            if not barrels_update_dirs(state.barrels, level.board, mario, con):
                self._lose_life(state, level)
            ghosts_change_dir(state.ghosts, level.board, self.rng)
            for obj in (*state.barrels, *state.ghosts):
                obj.move()

            if hits_any(state.barrels, mario) or hits_any(state.ghosts, mario):
                self._lose_life(state, level)
            if barrels_check_hits(state.barrels, mario):
                self._lose_life(state, level)
            state.barrels[:] = [b for b in state.barrels if not out_of_bounds(b.pos)]

            mario.move()
            if hits_any(state.barrels, mario) or hits_any(state.ghosts, mario):
                self._lose_life(state, level)
            elif hammer.visible and mario.pos == hammer.pos:
                hammer.visible = False
                mario.hammer = mario.direction

            level.print_ladders(con)
            self.print_lives(state.lives, level.legend)
            mario.draw(con, state.climb > 0)
            for obj in (*state.barrels, *state.ghosts):
                obj.draw(con)
            hammer.draw(con)

            time.sleep(self.tick_seconds)
            time_played += INTERVAL
            if time_played >= SECOND:
                time_played -= SECOND
                self.show_time(level.legend)
            self.print_score(level.legend)

            self.print_mario_trace(mario, state.climb)
            self._erase(state.barrels)
            self._erase(state.ghosts)

            if mario.pos == pauline.pos:
                self.update_score(LEVEL_POINTS)
                state.won = True
                break
            if state.lives <= 0 or state.quit:
                break
        return state

    # ---- session ------------------------------------------------------

    def _play_from(self, levels, number):
        con = self.console
        numbers = list(levels)
        position = numbers.index(number)
        level = levels[number].copy()
        con.clear()
        lives = START_LIVES
        while True:
            result = self.play_level(level, lives)
            lives = result.lives
            if result.quit:
                self.show_time(level.legend, reset=True)
                return
            if not result.won:
                con.put(0, _MESSAGE_ROW, "Failure,")
                self.show_time(level.legend, reset=True)
                con.write("Press any key to continue")
                con.read_key()
                return
            con.put(0, _MESSAGE_ROW, "Level Won,")
            position += 1
            if position < len(numbers):
                level = levels[numbers[position]].copy()
                con.write("Press any key to continue")
                con.read_key()
                con.clear()
                continue
            con.clear()
            minutes, seconds = divmod(self.show_time(level.legend, reset=True), 60)
            con.put(0, MIN_Y, f"Time: {minutes:02}:{seconds:02}\n")
            con.write(f"Score: {self.score}\n")
            con.write("Press any key to continue")
            con.read_key()
            return

    def run(self):
        """Load the levels and run the menu until the player leaves."""
        con = self.console
        levels = load_levels(self.directory, self.rng, log=lambda msg: con.write(msg + "\n"))
        if not levels:
            con.write("None of the boards were defined properly\n")
            con.read_key()
            return
        option = 0
        while True:
            self.start_menu(clear=option != 0)
            option = ord(con.read_key()) - ord("0")
            if option == 1:
                number = self.select_level(levels)
                self.score = START_SCORE
                self._play_from(levels, number)
            elif option == 8:
                self.show_instructions()
            elif option == 9:
                con.write("\nExiting game...\n")
                return
            else:
                con.write("Invalid choice, please try again.\n")


def main(argv=None):
    """Start the game on the terminal."""
    parser = argparse.ArgumentParser(description="Climb to Pauline past barrels and ghosts.")
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="directory holding dkong_NN.screen files (default: current directory)",
    )
    args = parser.parse_args(argv)
    console = Console()
    try:
        with console.raw_mode():
            Game(console, args.directory).run()
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        console.show_cursor(True)
    return 0