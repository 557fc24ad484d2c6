"""
Game settings for serpent.

Values are resolved in this order:
    1. Explicit overrides (normally command-line flags)
    2. SERPENT_* environment variables, optionally from a .env file
    3. Built-in defaults from domain.constants
"""

import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .domain.board import Board
from .domain.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_TICK_INTERVAL,
    DEFAULT_WIDTH,
    FOOD_VALUE,
    MIN_TICK_INTERVAL,
    SPEEDUP_PER_FOOD,
    START_SNAKE_SIZE,
)
from .domain.snake import Snake
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# settings field -> environment variable
ENV_VARS = {
    "width": "SERPENT_WIDTH",
    "height": "SERPENT_HEIGHT",
    "initial_length": "SERPENT_INITIAL_LENGTH",
    "tick_interval": "SERPENT_TICK_INTERVAL",
    "min_tick_interval": "SERPENT_MIN_TICK_INTERVAL",
    "speedup": "SERPENT_SPEEDUP",
}


@dataclass(frozen=True)
class GameSettings:
    """Plain parameters consumed by the engine at session start."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    initial_length: int = START_SNAKE_SIZE
    tick_interval: float = DEFAULT_TICK_INTERVAL
    min_tick_interval: float = MIN_TICK_INTERVAL
    speedup: float = SPEEDUP_PER_FOOD
    food_value: int = FOOD_VALUE

    def board(self) -> Board:
        return Board(self.width, self.height)

    def validate(self) -> "GameSettings":
        """
        Check that these settings describe a playable session.

        Raises:
            ConfigurationError: on the first invalid value found
        """
        board = self.board()
        # Spawning a throwaway snake checks the length fits from the centre
        Snake.spawn(board, self.initial_length)

        for name in ("tick_interval", "min_tick_interval", "speedup"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"must be a finite number, got {value}", field=name)
        if self.tick_interval <= 0:
            raise ConfigurationError(f"must be positive, got {self.tick_interval}", field="tick_interval")
        if self.min_tick_interval <= 0:
            raise ConfigurationError(
                f"must be positive, got {self.min_tick_interval}", field="min_tick_interval"
            )
        if self.min_tick_interval > self.tick_interval:
            raise ConfigurationError(
                f"{self.min_tick_interval} is larger than the starting interval {self.tick_interval}",
                field="min_tick_interval",
            )
        if self.speedup < 0:
            raise ConfigurationError(f"must not be negative, got {self.speedup}", field="speedup")
        if self.food_value < 1:
            raise ConfigurationError(f"must be at least 1, got {self.food_value}", field="food_value")
        return self

    def with_overrides(self, **overrides: Any) -> "GameSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _coerce(name: str, raw: str) -> Any:
    field_types = {f.name: f.type for f in fields(GameSettings)}
    target = field_types[name]
    try:
        return target(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{ENV_VARS[name]}={raw!r} is not a valid {target.__name__}", field=name
        ) from None


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read the SERPENT_* variables that are set and convert them."""
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for name, var in ENV_VARS.items():
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            continue
        values[name] = _coerce(name, raw)
    return values


def load_settings(**overrides: Any) -> GameSettings:
    """
    Build validated settings from defaults, the environment, and overrides.

    A .env file is expected to have been loaded by the caller already.

    Args:
        **overrides: field values that win over everything else; None is ignored

    Raises:
        ConfigurationError: if the result is not playable
    """
    env_values = settings_from_env()
    if env_values:
        logger.debug("Settings from environment: %s", env_values)

    settings = GameSettings().with_overrides(**env_values).with_overrides(**overrides)
    return settings.validate()
