"""
Game constants for serpent.
"""

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Movement directions. Row 1 is the top row, so UP decreases y."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP:    (0, -1),
    Direction.DOWN:  (0, 1),
    Direction.LEFT:  (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = set(Direction)

# Board settings
MIN_BOARD_SIZE = 5
DEFAULT_WIDTH = 40
DEFAULT_HEIGHT = 30

# Snake / food settings
START_SNAKE_SIZE = 5
START_DIRECTION = Direction.UP
FOOD_VALUE = 1
MAX_FOOD_PLACEMENT_ATTEMPTS = 1000

# Timing (seconds between ticks)
DEFAULT_TICK_INTERVAL = 0.1
MIN_TICK_INTERVAL = 0.05
SPEEDUP_PER_FOOD = 0.003

# Glyphs
BORDER_CHAR = "#"
SNAKE_BODY = "*"
FOOD_CHAR = "@"
EMPTY_CHAR = " "
HEAD_GLYPHS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}

# Death reasons
DEATH_WALL = "wall"
DEATH_SELF = "self"
DEATH_BOARD_FULL = "board_full"
