"""Plain-text presentation of a game state."""

from __future__ import annotations

from classic_snake.engine import GameState

HEAD = "@"
BODY = "o"
FOOD = "*"
EMPTY = "."

_STATUS_TEXT = {
    "running": "Running",
    "paused": "Paused",
    "game_over": "Game over",
}


def status_text(state: GameState) -> str:
    return _STATUS_TEXT[state.status]


def render_board(state: GameState) -> str:
    """Draw the board one row per line, then a score/status footer."""
    rows = [[EMPTY] * state.grid_size for _ in range(state.grid_size)]
    if state.food is not None:
        fx, fy = state.food
        rows[fy][fx] = FOOD
    for index, (x, y) in enumerate(state.snake):
        rows[y][x] = HEAD if index == 0 else BODY
    lines = ["".join(row) for row in rows]
    lines.append(f"Score: {state.score}  {status_text(state)}")
    return "\n".join(lines)
