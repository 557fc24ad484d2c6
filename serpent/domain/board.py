"""
Board entity - fixed grid geometry for one session.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from ..exceptions import ConfigurationError
from .constants import BORDER_CHAR, MIN_BOARD_SIZE


@dataclass(frozen=True)
class Board:
    """
    The playable grid.

    Attributes:
        width, height: interior size; playable cells are 1..width x 1..height
        border: glyph drawn at the border corners (display only)
    """

    width: int
    height: int
    border: str = BORDER_CHAR

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"expected an integer, got {value!r}", field=name)
            if value < MIN_BOARD_SIZE:
                raise ConfigurationError(
                    f"must be at least {MIN_BOARD_SIZE}, got {value}", field=name
                )

    @property
    def capacity(self) -> int:
        """Number of interior cells."""
        return self.width * self.height

    @property
    def center(self) -> Tuple[int, int]:
        return ((self.width + 1) // 2, (self.height + 1) // 2)

    def contains(self, position: Tuple[int, int]) -> bool:
        """True if *position* lies in the interior (not on or past the border)."""
        x, y = position
        return 1 <= x <= self.width and 1 <= y <= self.height

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield every interior cell, row by row."""
        for y in range(1, self.height + 1):
            for x in range(1, self.width + 1):
                yield (x, y)
