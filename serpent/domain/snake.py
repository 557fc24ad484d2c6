"""
Snake entity for the game engine.
"""

from collections import deque
from itertools import islice
from typing import Iterable, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .board import Board
from .constants import Direction, START_DIRECTION, START_SNAKE_SIZE

Position = Tuple[int, int]


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: the Direction the head will move on the next tick
        alive: whether this snake is still alive
        death_reason: e.g., 'wall', 'self', 'board_full'
        death_tick: The tick number when the snake died
    """

    def __init__(self, positions: Iterable[Position], direction: Direction = START_DIRECTION):
        self.positions = deque(tuple(p) for p in positions)
        if not self.positions:
            raise ConfigurationError("a snake needs at least one segment", field="length")
        self.direction = Direction(direction)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @classmethod
    def spawn(
        cls,
        board: Board,
        length: int = START_SNAKE_SIZE,
        direction: Direction = START_DIRECTION,
    ) -> "Snake":
        """
        Build a straight snake with its head on the board centre and the body
        trailing away from *direction*.

        Raises:
            ConfigurationError: if the body would not fit inside the board
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise ConfigurationError(f"must be a positive integer, got {length!r}", field="length")

        direction = Direction(direction)
        head_x, head_y = board.center
        dx, dy = direction.opposite.vector
        positions = [(head_x + dx * i, head_y + dy * i) for i in range(length)]

        if not all(board.contains(p) for p in positions):
            raise ConfigurationError(
                f"{length} segments do not fit on a {board.width}x{board.height} board",
                field="length",
            )
        return cls(positions, direction)

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def length(self) -> int:
        return len(self.positions)

    def change_direction(self, requested: Direction) -> bool:
        """
        Turn towards *requested* unless it is the exact reverse of the
        current direction. Returns True if the direction was accepted.
        """
        requested = Direction(requested)
        if requested is self.direction.opposite:
            return False
        self.direction = requested
        return True

    def peek_next_head(self) -> Position:
        """Where the head will be after the next move."""
        dx, dy = self.direction.vector
        hx, hy = self.head
        return (hx + dx, hy + dy)

    def advance(self, grow: bool = False) -> Position:
        """
        Move one cell in the current direction and return the new head.

        Without *grow* the tail is dropped so the length stays the same;
        with it the tail is kept and the snake is one segment longer.
        """
        new_head = self.peek_next_head()
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()
        return new_head

    def occupies(self, position: Position, include_head: bool = True) -> bool:
        """True if any segment (optionally ignoring the head) is at *position*."""
        if include_head:
            return position in self.positions
        return position in islice(self.positions, 1, None)

    def kill(self, reason: str, tick: Optional[int] = None):
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick

    def body(self) -> List[Position]:
        """Segments after the head."""
        return list(self.positions)[1:]

    def __repr__(self):
        return (
            f"<Snake head={self.head}, length={len(self)}, "
            f"direction={self.direction.value}, alive={self.alive}>"
        )
