"""
Simulation engine for serpent.

A Session owns one play-through: board, snake, food, score and pacing.
The driver calls tick() once per frame with at most one direction request
and gets back the same session plus a TickOutcome.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .domain.board import Board
from .domain.constants import DEATH_BOARD_FULL, DEATH_SELF, DEATH_WALL, Direction
from .domain.food import Food
from .domain.game_state import GameState
from .domain.snake import Snake
from .exceptions import FoodPlacementError
from .settings import GameSettings

logger = logging.getLogger(__name__)


class TickStatus(str, Enum):
    CONTINUED = "continued"
    ENDED = "ended"


@dataclass(frozen=True)
class TickOutcome:
    """Result of one tick. final_score is only set once the session has ended."""

    status: TickStatus
    final_score: Optional[int] = None

    @classmethod
    def continued(cls) -> "TickOutcome":
        return cls(TickStatus.CONTINUED)

    @classmethod
    def ended(cls, score: int) -> "TickOutcome":
        return cls(TickStatus.ENDED, score)

    @property
    def is_over(self) -> bool:
        return self.status is TickStatus.ENDED


class Session:
    """
    Manages:
      - Board (width, height)
      - Snake
      - Food
      - Score
      - Tick count and tick interval (game speed)
    """

    def __init__(
        self,
        settings: GameSettings,
        board: Board,
        snake: Snake,
        food: Food,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self.board = board
        self.snake = snake
        self.food = food
        self.rng = rng or random.Random()
        self.score = 0
        self.tick_number = 0
        self.tick_interval = settings.tick_interval

    @property
    def alive(self) -> bool:
        return self.snake.alive

    @property
    def initial_length(self) -> int:
        return self.settings.initial_length

    def outcome(self) -> TickOutcome:
        if self.alive:
            return TickOutcome.continued()
        return TickOutcome.ended(self.score)

    def snapshot(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick_number=self.tick_number,
            snake_positions=list(self.snake.positions),
            direction=self.snake.direction,
            alive=self.snake.alive,
            score=self.score,
            width=self.board.width,
            height=self.board.height,
            food=self.food.position,
            tick_interval=self.tick_interval,
            death_reason=self.snake.death_reason,
        )

    def __repr__(self):
        return (
            f"<Session tick={self.tick_number}, score={self.score}, "
            f"alive={self.alive}, snake={self.snake!r}>"
        )


def new_session(
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> Session:
    """
    Start a fresh session: snake centred facing up, food on a free cell.

    Raises:
        ConfigurationError: if the settings cannot produce a playable board
    """
    settings = (settings or GameSettings()).validate()
    rng = rng or random.Random()

    board = settings.board()
    snake = Snake.spawn(board, settings.initial_length)
    food = Food.place(board, snake, rng=rng, value=settings.food_value)

    logger.info(
        "New session on %dx%d board, snake at %s (length %d), food at %s",
        board.width, board.height, snake.head, len(snake), food.position,
    )
    return Session(settings, board, snake, food, rng=rng)


def _speed_up(session: Session):
    settings = session.settings
    session.tick_interval = max(
        settings.min_tick_interval, session.tick_interval - settings.speedup
    )


def _end(session: Session, reason: str) -> TickOutcome:
    session.snake.kill(reason, session.tick_number)
    logger.info(
        "Snake died (%s) at tick %d with score %d",
        reason, session.tick_number, session.score,
    )
    return TickOutcome.ended(session.score)


def tick(
    session: Session,
    direction: Optional[Direction] = None,
) -> Tuple[Session, TickOutcome]:
    """
    Execute one tick:
      1) If the snake is already dead, do nothing
      2) Apply the requested direction (reversals are ignored)
      3) Die on the border before moving, leaving the body untouched
      4) Move, growing if the head lands on food
      5) Score, relocate food and speed up on a meal
      6) Die if the new head hit the rest of the body
    """
    if not session.alive:
        return session, session.outcome()

    session.tick_number += 1
    snake = session.snake
    if direction is not None and not snake.change_direction(direction):
        logger.debug("Ignored reversal %s while heading %s", Direction(direction).value, snake.direction.value)

    next_head = snake.peek_next_head()
    if not session.board.contains(next_head):
        return session, _end(session, DEATH_WALL)

    ate_food = session.food.is_at(next_head)
    snake.advance(grow=ate_food)

    if ate_food:
        session.score += session.food.value
        _speed_up(session)
        logger.debug(
            "Ate food at %s, score %d, length %d, interval %.3fs",
            next_head, session.score, len(snake), session.tick_interval,
        )
        try:
            session.food.relocate(session.board, snake, rng=session.rng)
        except FoodPlacementError as e:
            logger.info("%s", e)
            return session, _end(session, DEATH_BOARD_FULL)

    if snake.occupies(next_head, include_head=False):
        return session, _end(session, DEATH_SELF)

    return session, TickOutcome.continued()
