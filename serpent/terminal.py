"""
Curses presentation for serpent.

Draws GameState snapshots and turns key presses into Directions or
Commands. Nothing in here changes game state.
"""

import curses
from enum import Enum
from typing import Optional, Union

from .domain.constants import (
    BORDER_CHAR,
    Direction,
    FOOD_CHAR,
    HEAD_GLYPHS,
    SNAKE_BODY,
)
from .domain.game_state import GameState

# Colour pair ids
HEAD_PAIR = 1
BODY_PAIR = 2
FOOD_PAIR = 3
BORDER_PAIR = 4
SCORE_PAIR = 5

ESCAPE_KEY = 27

_colors = False


class Command(str, Enum):
    QUIT = "quit"
    PAUSE = "pause"
    RESTART = "restart"


KEY_BINDINGS = {
    curses.KEY_UP: Direction.UP,
    ord('w'): Direction.UP,
    ord('W'): Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    ord('s'): Direction.DOWN,
    ord('S'): Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    ord('a'): Direction.LEFT,
    ord('A'): Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord('d'): Direction.RIGHT,
    ord('D'): Direction.RIGHT,
    ord('q'): Command.QUIT,
    ord('Q'): Command.QUIT,
    ESCAPE_KEY: Command.QUIT,
    ord('p'): Command.PAUSE,
    ord('P'): Command.PAUSE,
    ord('r'): Command.RESTART,
    ord('R'): Command.RESTART,
}

InputEvent = Union[Direction, Command]


def setup_terminal(stdscr):
    """Configure terminal settings."""
    global _colors
    curses.curs_set(0)
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    stdscr.nodelay(True)
    if curses.has_colors():
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(HEAD_PAIR, curses.COLOR_GREEN, -1)
        curses.init_pair(BODY_PAIR, curses.COLOR_CYAN, -1)
        curses.init_pair(FOOD_PAIR, curses.COLOR_RED, -1)
        curses.init_pair(BORDER_PAIR, curses.COLOR_WHITE, -1)
        curses.init_pair(SCORE_PAIR, curses.COLOR_YELLOW, -1)
        _colors = True


def _attr(pair: int, extra: int = 0) -> int:
    if _colors:
        return curses.color_pair(pair) | extra
    return extra


def key_to_event(key: int) -> Optional[InputEvent]:
    """Map a raw curses key code to a Direction or Command."""
    return KEY_BINDINGS.get(key)


def poll_input(window) -> Optional[InputEvent]:
    """
    Non-blocking read of the next key.

    Returns None when no key is waiting or the key has no binding.
    """
    key = window.getch()
    if key == curses.ERR:
        return None
    return key_to_event(key)


def required_size(state: GameState):
    """(rows, cols) the screen needs to show the whole board plus the score line."""
    return state.height + 4, state.width + 2


def _put(window, y: int, x: int, text: str, attr: int = 0):
    # Writing the bottom-right cell raises even though the text is drawn
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        pass


def draw_border(window, state: GameState):
    attr = _attr(BORDER_PAIR)
    edge = BORDER_CHAR + "-" * state.width + BORDER_CHAR
    _put(window, 0, 0, edge, attr)
    _put(window, state.height + 1, 0, edge, attr)
    for y in range(1, state.height + 1):
        _put(window, y, 0, "|", attr)
        _put(window, y, state.width + 1, "|", attr)


def draw_snake(window, state: GameState):
    body_attr = _attr(BODY_PAIR)
    for x, y in state.snake_positions[1:]:
        _put(window, y, x, SNAKE_BODY, body_attr)
    hx, hy = state.head
    _put(window, hy, hx, HEAD_GLYPHS[state.direction], _attr(HEAD_PAIR, curses.A_BOLD))


def draw_score(window, state: GameState, high_score: int = 0):
    attr = _attr(SCORE_PAIR, curses.A_BOLD)
    _put(window, state.height + 3, 0, f"Score: {state.score}   High Score: {high_score}", attr)


def render(window, state: GameState, high_score: int = 0):
    """Draw one full frame."""
    window.erase()
    rows, cols = window.getmaxyx()
    need_rows, need_cols = required_size(state)
    if rows < need_rows or cols < need_cols:
        _put(window, 0, 0, f"Terminal too small: need {need_cols}x{need_rows}, have {cols}x{rows}")
        window.refresh()
        return

    draw_border(window, state)
    fx, fy = state.food
    _put(window, fy, fx, FOOD_CHAR, _attr(FOOD_PAIR, curses.A_BOLD))
    draw_snake(window, state)
    draw_score(window, state, high_score)
    window.refresh()


def show_paused(window, state: GameState):
    text = "PAUSED - press 'p' to resume"
    row = (state.height + 1) // 2
    col = max(1, (state.width + 2 - len(text)) // 2)
    _put(window, row, col, text, _attr(SCORE_PAIR, curses.A_BOLD))
    window.refresh()


def show_game_over(window, state: GameState, high_score: int = 0) -> bool:
    """
    Show the final score and wait for a decision.

    Returns True to restart, False to quit.
    """
    window.erase()
    rows, cols = window.getmaxyx()
    cy = rows // 2
    lines = [
        ("GAME OVER", -3, _attr(FOOD_PAIR, curses.A_BOLD)),
        (f"Your Score: {state.score}", -1, _attr(SCORE_PAIR)),
        (f"High Score: {high_score}", 0, _attr(SCORE_PAIR)),
        ("Press 'r' to restart", 2, 0),
        ("Press 'q' to quit", 3, 0),
    ]
    for text, offset, attr in lines:
        _put(window, cy + offset, max(0, cols // 2 - len(text) // 2), text, attr)
    window.refresh()

    window.nodelay(False)
    try:
        while True:
            event = key_to_event(window.getch())
            if event is Command.RESTART:
                return True
            if event is Command.QUIT:
                return False
    finally:
        window.nodelay(True)
