"""Translate raw key names into engine directions and commands."""

from __future__ import annotations

import enum

from classic_snake.engine import (
    GameState,
    restart,
    set_queued_direction,
    toggle_pause,
)
from classic_snake.food import RandomSource
from classic_snake.snake import Direction


class Command(enum.Enum):
    """Control signals that are not movement."""

    PAUSE = "pause"
    RESTART = "restart"


KEY_TO_DIRECTION: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

KEY_TO_COMMAND: dict[str, Command] = {
    " ": Command.PAUSE,
    "Spacebar": Command.PAUSE,
    "r": Command.RESTART,
}


def translate_key(key: str) -> Direction | Command | None:
    """Map a key name to a direction or command; ``None`` if unbound."""
    if len(key) == 1:
        key = key.lower()
    if key in KEY_TO_COMMAND:
        return KEY_TO_COMMAND[key]
    return KEY_TO_DIRECTION.get(key)


def apply_command(
    state: GameState,
    command: Command,
    random_source: RandomSource | None = None,
) -> GameState:
    if command is Command.PAUSE:
        return toggle_pause(state)
    return restart(state, random_source)


def apply_key(
    state: GameState,
    key: str,
    random_source: RandomSource | None = None,
) -> GameState:
    """Route a single key press to the matching engine operation."""
    action = translate_key(key)
    if action is None:
        return state
    if isinstance(action, Command):
        return apply_command(state, action, random_source)
    return set_queued_direction(state, action)
