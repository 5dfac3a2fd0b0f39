"""Classic Snake: a pure, deterministic game-state engine."""

from classic_snake.engine import (
    GameState,
    can_turn,
    create_initial_state,
    restart,
    set_queued_direction,
    step,
    toggle_pause,
)
from classic_snake.food import place_food, seeded_random_source
from classic_snake.snake import Direction

__all__ = [
    "Direction",
    "GameState",
    "can_turn",
    "create_initial_state",
    "place_food",
    "restart",
    "seeded_random_source",
    "set_queued_direction",
    "step",
    "toggle_pause",
]
