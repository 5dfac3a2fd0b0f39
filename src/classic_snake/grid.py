"""Square board helpers backed by NumPy occupancy masks."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from classic_snake.snake import Position

MIN_GRID_SIZE = 4


def validate_grid_size(grid_size: int) -> None:
    """Reject boards too small to hold the starting snake."""
    if grid_size < MIN_GRID_SIZE:
        raise ValueError(
            f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}."
        )


def in_bounds(position: Position, grid_size: int) -> bool:
    """Check whether a coordinate lies within the board."""
    x, y = position
    return 0 <= x < grid_size and 0 <= y < grid_size


def occupancy(cells: Iterable[Position], grid_size: int) -> np.ndarray:
    """Return a ``(grid_size, grid_size)`` boolean mask indexed ``[y, x]``.

    Cells outside the board are ignored.
    """
    mask = np.zeros((grid_size, grid_size), dtype=bool)
    for x, y in cells:
        if 0 <= x < grid_size and 0 <= y < grid_size:
            mask[y, x] = True
    return mask


def free_cells(occupied: Iterable[Position], grid_size: int) -> list[Position]:
    """Return every unoccupied cell in row-major order (y outer, x inner)."""
    ys, xs = np.nonzero(~occupancy(occupied, grid_size))
    return list(zip(xs.tolist(), ys.tolist(), strict=True))
