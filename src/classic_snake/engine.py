"""Pure, step-based game engine over immutable state snapshots."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from classic_snake.food import RandomSource, place_food
from classic_snake.grid import in_bounds, validate_grid_size
from classic_snake.snake import (
    Body,
    Direction,
    Position,
    initial_body,
    is_reversal,
    next_head,
)

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 20


@dataclass(frozen=True)
class GameState:
    """One complete snapshot of a game.

    Every engine function returns a new instance (or the same one for a
    no-op); nothing mutates a snapshot after creation.
    """

    grid_size: int
    snake: Body
    direction: Direction = Direction.RIGHT
    queued_direction: Direction = Direction.RIGHT
    food: Position | None = None
    score: int = 0
    game_over: bool = False
    paused: bool = False

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def status(self) -> str:
        if self.game_over:
            return "game_over"
        if self.paused:
            return "paused"
        return "running"

    def to_dict(self) -> dict:
        """Return a JSON-serializable view of the state."""
        return {
            "grid_size": self.grid_size,
            "snake": [list(seg) for seg in self.snake],
            "direction": self.direction.label,
            "queued_direction": self.queued_direction.label,
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "game_over": self.game_over,
            "paused": self.paused,
            "status": self.status,
        }


def create_initial_state(
    grid_size: int = DEFAULT_GRID_SIZE,
    random_source: RandomSource | None = None,
) -> GameState:
    """Start a fresh game: centred 3-segment snake heading right."""
    validate_grid_size(grid_size)
    snake = initial_body(grid_size)
    return GameState(
        grid_size=grid_size,
        snake=snake,
        food=place_food(snake, grid_size, random_source),
    )


def can_turn(current: Direction, nxt: Direction | str | None) -> bool:
    """Whether the snake may head towards *nxt* while moving *current*."""
    direction = Direction.parse(nxt)
    if direction is None:
        return False
    return not is_reversal(current, direction)


def set_queued_direction(
    state: GameState, nxt: Direction | str | None,
) -> GameState:
    """Queue a turn for the next tick, ignoring reversals and bad input."""
    if state.game_over or not can_turn(state.direction, nxt):
        return state
    return dataclasses.replace(state, queued_direction=Direction.parse(nxt))


def toggle_pause(state: GameState) -> GameState:
    """Flip the paused flag. Game over absorbs the toggle."""
    if state.game_over:
        return state
    return dataclasses.replace(state, paused=not state.paused)


def restart(
    state: GameState, random_source: RandomSource | None = None,
) -> GameState:
    """Begin a new game on a board of the same size."""
    return create_initial_state(state.grid_size, random_source)


def step(
    state: GameState, random_source: RandomSource | None = None,
) -> GameState:
    """Advance the game by one tick."""
    if state.game_over or state.paused:
        return state

    direction = state.queued_direction
    head = next_head(state.snake, direction)

    # The tail vacates this tick, so it never blocks the head.
    body = state.snake[:-1]
    if not in_bounds(head, state.grid_size) or head in body:
        logger.info(
            "Snake crashed at %s with score %d.", head, state.score,
        )
        return dataclasses.replace(state, direction=direction, game_over=True)

    ate_food = state.food is not None and head == state.food
    if not ate_food:
        return dataclasses.replace(
            state, snake=(head, *body), direction=direction,
        )

    snake = (head, *state.snake)
    return dataclasses.replace(
        state,
        snake=snake,
        direction=direction,
        food=place_food(snake, state.grid_size, random_source),
        score=state.score + 1,
    )
