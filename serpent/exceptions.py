"""
Custom exceptions for the serpent package.

Collisions and rejected direction changes are ordinary game outcomes and
never raise; these cover the cases where a session cannot be built or the
board has no room left.
"""

from typing import Optional


class SerpentError(Exception):
    """Base exception for all serpent errors."""


class ConfigurationError(SerpentError, ValueError):
    """Raised when game settings cannot produce a playable session."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            message = f"Invalid {field}: {message}"
        super().__init__(message)
        self.field = field


class FoodPlacementError(SerpentError):
    """Raised when there is no free interior cell left for food."""

    def __init__(self, width: int, height: int, occupied: int):
        super().__init__(
            f"No space for food on a {width}x{height} board "
            f"({occupied} cells occupied)"
        )
        self.width = width
        self.height = height
        self.occupied = occupied
