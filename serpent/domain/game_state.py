"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Optional, Tuple

from .constants import (
    BORDER_CHAR,
    Direction,
    EMPTY_CHAR,
    FOOD_CHAR,
    HEAD_GLYPHS,
    SNAKE_BODY,
)


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick_number: how many ticks have been processed (0-based)
        snake_positions: list of (x, y), head first
        direction: the snake's current heading
        alive: whether the snake is still alive
        score: points collected so far
        width, height: interior board dimensions
        food: (x, y) of the food item
        tick_interval: seconds the driver should wait before the next tick
        death_reason: why the session ended, if it has
    """

    def __init__(
        self,
        tick_number: int,
        snake_positions: List[Tuple[int, int]],
        direction: Direction,
        alive: bool,
        score: int,
        width: int,
        height: int,
        food: Tuple[int, int],
        tick_interval: float,
        death_reason: Optional[str] = None,
    ):
        self.tick_number = tick_number
        self.snake_positions = snake_positions
        self.direction = direction
        self.alive = alive
        self.score = score
        self.width = width
        self.height = height
        self.food = food
        self.tick_interval = tick_interval
        self.death_reason = death_reason

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[0]

    def print_board(self, border: str = BORDER_CHAR) -> str:
        """
        Returns a string representation of the board with:
        # = border corner, | and - = border edges
        ^ v < > = snake head (pointing where it is going)
        * = snake body
        @ = food
        Row 1 is printed first (top), matching screen coordinates.
        """
        # Interior cells only; index with [y - 1][x - 1]
        board = [[EMPTY_CHAR for _ in range(self.width)] for _ in range(self.height)]

        fx, fy = self.food
        board[fy - 1][fx - 1] = FOOD_CHAR

        # Body first so the head wins when it overlaps a segment
        for x, y in self.snake_positions[1:]:
            board[y - 1][x - 1] = SNAKE_BODY
        hx, hy = self.head
        board[hy - 1][hx - 1] = HEAD_GLYPHS[self.direction]

        edge = border + "-" * self.width + border
        result = [edge]
        for row in board:
            result.append("|" + "".join(row) + "|")
        result.append(edge)

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, head={self.head}, food={self.food}, "
            f"length={len(self.snake_positions)}, score={self.score}, alive={self.alive}>"
        )
