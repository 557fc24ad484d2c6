"""
Play serpent in the terminal.

Usage:
    serpent [--width 40] [--height 30] [--length 5]
    serpent --show-controls
    python -m serpent --log-file serpent.log --log-level DEBUG

Board size, starting length and speed can also be set with SERPENT_*
environment variables or a .env file; flags win over both.
"""

import argparse
import curses
import logging
import logging.handlers
import os
import sys
import time
from typing import Callable, List, Optional, Tuple

from dotenv import load_dotenv

from . import NAME, __version__
from .domain.constants import Direction
from .engine import Session, new_session, tick
from .exceptions import ConfigurationError
from .settings import GameSettings, load_settings
from .terminal import (
    Command,
    poll_input,
    render,
    setup_terminal,
    show_game_over,
    show_paused,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
HELD_LOG_CAPACITY = 1000

CONTROLS = f"""{NAME} controls.
Movement:
\t↑ / w: move up
\t← / a: move to the left
\t→ / d: move to the right
\t↓ / s: move down
Game:
\tq: quit
\tp: pause
\tr: restart
"""

Sleep = Callable[[float], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=NAME,
        description="Play the all time classic snake game in the console.",
    )
    parser.add_argument("-c", "--show-controls", action="store_true",
                        help="Show the controls for the game and exit.")
    parser.add_argument("-v", "--version", action="version",
                        version=f"{NAME} {__version__}",
                        help="Display version and exit.")
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in cells (default: 40)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in cells (default: 30)")
    parser.add_argument("--length", type=int, default=None, dest="initial_length",
                        help="Starting snake length (default: 5)")
    parser.add_argument("--interval", type=float, default=None, dest="tick_interval",
                        help="Seconds between ticks at the start (default: 0.1)")
    parser.add_argument("--min-interval", type=float, default=None, dest="min_tick_interval",
                        help="Fastest allowed tick interval in seconds (default: 0.05)")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Write logs to this file (the screen is owned by the game)")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level for --log-file (default: SERPENT_LOG_LEVEL or INFO)")
    return parser


def configure_logging(level: Optional[str], log_file: Optional[str]) -> Optional[logging.Handler]:
    """
    Log to a file when asked. Otherwise warnings are held in memory and
    only reach stderr when the returned handler is closed, after curses
    has given the screen back.
    """
    if log_file:
        level = (level or os.getenv("SERPENT_LOG_LEVEL") or "INFO").upper()
        logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)
        return None

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setFormatter(logging.Formatter(LOG_FORMAT))
    held = logging.handlers.MemoryHandler(
        capacity=HELD_LOG_CAPACITY,
        flushLevel=logging.CRITICAL + 1,
        target=stderr,
    )
    held.setLevel(logging.WARNING)
    logging.getLogger().addHandler(held)
    return held


def release_logging(held: Optional[logging.Handler]):
    """Flush held warnings to stderr and detach the handler."""
    if held is None:
        return
    logging.getLogger().removeHandler(held)
    held.close()


def run_game(
    stdscr,
    settings: GameSettings,
    high_score: int = 0,
    sleep: Sleep = time.sleep,
) -> Tuple[Session, Optional[Command]]:
    """
    Drive one session until the snake dies or the player quits or restarts.

    Returns the final session and the command that ended it, or None if
    the snake died.
    """
    session = new_session(settings)
    paused = False
    render(stdscr, session.snapshot(), high_score)

    while True:
        event = poll_input(stdscr)

        if event is Command.QUIT:
            logger.info("Player quit at tick %d with score %d", session.tick_number, session.score)
            return session, Command.QUIT
        if event is Command.RESTART:
            logger.info("Restarting session at tick %d with score %d", session.tick_number, session.score)
            return session, Command.RESTART
        if event is Command.PAUSE:
            paused = not paused
            if paused:
                show_paused(stdscr, session.snapshot())
            else:
                render(stdscr, session.snapshot(), max(high_score, session.score))

        if paused:
            sleep(settings.tick_interval)
            continue

        direction = event if isinstance(event, Direction) else None
        session, outcome = tick(session, direction)
        render(stdscr, session.snapshot(), max(high_score, session.score))

        if outcome.is_over:
            return session, None
        sleep(session.tick_interval)


def play(stdscr, settings: GameSettings, sleep: Sleep = time.sleep) -> int:
    """Main curses loop: play, show game over, restart until the player quits."""
    setup_terminal(stdscr)
    high_score = 0

    while True:
        session, command = run_game(stdscr, settings, high_score, sleep)
        high_score = max(high_score, session.score)
        if command is Command.QUIT:
            return session.score
        if command is Command.RESTART:
            continue
        if not show_game_over(stdscr, session.snapshot(), high_score):
            return session.score


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_controls:
        print(CONTROLS, end="")
        return 0

    load_dotenv()
    held = configure_logging(args.log_level, args.log_file)
    try:
        try:
            settings = load_settings(
                width=args.width,
                height=args.height,
                initial_length=args.initial_length,
                tick_interval=args.tick_interval,
                min_tick_interval=args.min_tick_interval,
            )
        except ConfigurationError as e:
            print(f"{NAME}: {e}", file=sys.stderr)
            print("Use '-h, --help' for help.", file=sys.stderr)
            return 2

        try:
            score = curses.wrapper(play, settings)
        except KeyboardInterrupt:
            print("Interrupted. Goodbye!")
            return 130
    finally:
        release_logging(held)

    print(f"Game over. Score: {score}")
    return 0
