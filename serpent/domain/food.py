"""
Food entity - the single item the snake is chasing.
"""

import random
from typing import Optional, Tuple

from ..exceptions import FoodPlacementError
from .board import Board
from .constants import FOOD_VALUE, MAX_FOOD_PLACEMENT_ATTEMPTS
from .snake import Position, Snake


def _free_cell(
    board: Board,
    snake: Snake,
    rng: random.Random,
    max_attempts: int = MAX_FOOD_PLACEMENT_ATTEMPTS,
) -> Position:
    """
    Return a uniformly random interior cell not occupied by the snake.

    Random draws are tried first; once *max_attempts* have all landed on the
    snake we fall back to picking from an explicit list of free cells, so a
    nearly full board still resolves and a full one raises.
    """
    for _ in range(max_attempts):
        x = rng.randint(1, board.width)
        y = rng.randint(1, board.height)
        if not snake.occupies((x, y), include_head=True):
            return (x, y)

    occupied = set(snake.positions)
    free = [cell for cell in board.cells() if cell not in occupied]
    if not free:
        raise FoodPlacementError(board.width, board.height, len(occupied))
    return rng.choice(free)


class Food:
    """
    A food item on the board.

    Attributes:
        position: (x, y) of the item
        value: score awarded when eaten
    """

    def __init__(self, position: Position, value: int = FOOD_VALUE):
        self.position = tuple(position)
        self.value = value

    @classmethod
    def place(
        cls,
        board: Board,
        snake: Snake,
        rng: Optional[random.Random] = None,
        value: int = FOOD_VALUE,
        max_attempts: int = MAX_FOOD_PLACEMENT_ATTEMPTS,
    ) -> "Food":
        """
        Create food on a random free interior cell.

        Raises:
            FoodPlacementError: if the snake covers the whole board
        """
        rng = rng or random.Random()
        return cls(_free_cell(board, snake, rng, max_attempts), value)

    def relocate(
        self,
        board: Board,
        snake: Snake,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_FOOD_PLACEMENT_ATTEMPTS,
    ) -> Position:
        """Move this item to a new free cell and return it."""
        rng = rng or random.Random()
        self.position = _free_cell(board, snake, rng, max_attempts)
        return self.position

    def is_at(self, position: Tuple[int, int]) -> bool:
        return self.position == tuple(position)

    def __repr__(self):
        return f"<Food at={self.position}, value={self.value}>"
