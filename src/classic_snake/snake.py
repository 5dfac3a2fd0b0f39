"""Snake directions and body construction."""

from __future__ import annotations

import enum

Position = tuple[int, int]
Body = tuple[Position, ...]


class Direction(enum.Enum):
    """Cardinal movement directions with (x_delta, y_delta) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def label(self) -> str:
        """Lower-case name used on the wire and in key bindings."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """Return the direction named by *value*, or ``None`` if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _BY_LABEL.get(value.strip().lower())


_BY_LABEL: dict[str, Direction] = {d.label: d for d in Direction}

INITIAL_LENGTH = 3


def is_reversal(current: Direction, nxt: Direction) -> bool:
    """True when *nxt* points exactly back along *current*."""
    cx, cy = current.value
    nx, ny = nxt.value
    return cx + nx == 0 and cy + ny == 0


def initial_body(grid_size: int) -> Body:
    """Build a horizontal snake with its head on the centre cell.

    The body trails towards negative x, so the snake starts facing right.
    """
    center = grid_size // 2
    return tuple((center - i, center) for i in range(INITIAL_LENGTH))


def next_head(body: Body, direction: Direction) -> Position:
    """Compute where the head lands after one move in *direction*."""
    dx, dy = direction.value
    x, y = body[0]
    return x + dx, y + dy
