# kongrun

A console arcade game. You play Mario and climb from the bottom of the board
to Pauline at the top. Donkey Kong throws barrels that roll along the floors
and drop off their edges, ghosts wander back and forth, and a hammer may lie
somewhere on the board.

The game draws with ANSI escape sequences, so it needs a terminal that
understands them. Keys are read one at a time: through `msvcrt` on Windows,
otherwise by putting the terminal in cbreak mode while the game runs.

## Installing

```
pip install .
```

## Playing

Put one or more level files in a directory and start the game there:

```
kongrun
```

or name the directory:

```
kongrun path/to/levels
```

Level files are named `dkong_NN.screen`, where `NN` is a two-digit level
number from `01` to `99`. Every valid file in the directory is loaded; a file
that breaks a rule is skipped with a message. If no file loads, the game says
so and stops. Levels are played in ascending order, starting from the one you
pick in the menu. After the last level the total time and the score are shown.

### Menu

- `1` start a new game, then type the two-digit number of a level
- `8` instructions and controls
- `9` leave the game

### Controls

| Key     | Action                                   |
|---------|------------------------------------------|
| A / D   | move left / right                        |
| W       | jump, or climb up when next to a ladder  |
| X       | climb down when next to a ladder         |
| S       | stand still                              |
| P       | swing the hammer, once you hold it       |
| Esc     | pause; press Esc again to resume         |
| Space   | leave the current game                   |

While on a ladder you can step off onto a floor the ladder passes through by
pressing A or D while standing still.

### Lives and score

You have three lives for the whole run. You lose one when a barrel or ghost
touches you, when you fall three floors or more, when you drop to the bottom
of the board, when two barrels collide within two squares of you, or when a
barrel that fell four floors or more bursts within two squares of you.

The score starts at 999 for each new game and goes down by one each second.
Smashing a barrel with the hammer gives 150, a ghost 200, and reaching
Pauline 600. Once the score reaches zero it no longer changes.

## Level file format

A level is a picture 80 columns wide framed by `Q` characters. The first
non-blank line is the top border: 80 `Q`s, possibly indented. Each of the 24
rows below it (taken from the same indent) must start with `Q` and have a `Q`
in column 80. One more line, the bottom border, must follow, and after it only
blank lines may appear.

Inside the frame:

| Char | Meaning                            |
|------|------------------------------------|
| `=`  | plain floor                        |
| `>`  | floor sloping right                |
| `<`  | floor sloping left                 |
| `H`  | ladder                             |
| `@`  | Mario's start                      |
| `$`  | Pauline                            |
| `&`  | Donkey Kong                        |
| `P`  | hammer (optional)                  |
| `x`  | ghost (any number)                 |
| `L`  | where lives, time and score appear |

Floors lie on every third row from the bottom; characters stand on the row
just above a floor. Mario, Pauline, Donkey Kong and the legend must each
appear exactly once, the hammer at most once, and a ghost must stand on solid
floor. A ladder must rise from a floor and end two rows above a floor. Error
messages name the row and column at fault.

Each loaded level gets a random barrel pace: a repeating pattern of three to
six barrels, each thrown 10 to 30 ticks after the previous one, alternately
to the left and to the right.

## Using it as a library

- `kongrun.screen_file.load_levels(directory, rng, log)` reads a directory of
  level files into a dict of level numbers to `kongrun.level.Level` objects;
  `read_level` reads one file and `parse_level` one level's lines, raising
  `LevelFileError` when they are not valid. `level_number` extracts the level
  number from a file name.
- `kongrun.level.Level` holds the board, ladders, ghosts, start positions,
  hammer, legend position and barrel schedule. `initialize_board1` and
  `initialize_board2` lay out two built-in boards; the game itself only plays
  levels loaded from files.
- `kongrun.rules` has the movement and collision rules: floors, slopes,
  ladders, barrels and ghosts.
- `kongrun.entities` has the game objects (`Player`, `Barrel`, `Ghost`,
  `Hammer`, `Ladder`) and `BarrelSchedule`.
- `kongrun.console.Console` does the drawing and key input; give it a stream
  and a list of keys to drive it from a script.
- `kongrun.game.Game` runs the menus and levels on a `Console`.

## What it does not do

Scores and times are not saved between runs, there is no colour or sound, and
there is no level editor: levels are written by hand as `.screen` files.