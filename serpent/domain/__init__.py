"""
Domain entities for the serpent game engine.

This module contains the core game entities that are independent of
presentation concerns (curses, argument parsing, etc.).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, Direction
from .board import Board
from .snake import Snake, Position
from .food import Food
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'Direction',
    'Board',
    'Snake',
    'Position',
    'Food',
    'GameState',
]
