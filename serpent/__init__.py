"""
serpent - the classic snake game in the console.

  domain     – Board, Snake, Food, GameState and game constants.
  settings   – GameSettings and environment/.env loading.
  engine     – Session, new_session() and the per-tick transition tick().
  terminal   – curses rendering and key mapping.
  cli        – command-line entry point and driver loop.
"""

NAME = "serpent"
__version__ = "0.1.0"
