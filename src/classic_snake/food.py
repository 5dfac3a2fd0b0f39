"""Food placement with an injectable source of randomness."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable

import numpy as np

from classic_snake.grid import free_cells
from classic_snake.snake import Position

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]
"""Zero-argument callable returning a uniform float in ``[0, 1)``."""


def seeded_random_source(seed: int | None = None) -> RandomSource:
    """Build a NumPy-backed random source, reproducible when *seed* is set."""
    return np.random.default_rng(seed).random


def place_food(
    snake: Iterable[Position],
    grid_size: int,
    random_source: RandomSource | None = None,
) -> Position | None:
    """Pick a free cell uniformly at random.

    One draw ``r`` selects index ``floor(r * len(free))`` of the row-major
    free-cell list. Returns ``None`` when the snake fills the board.
    """
    if random_source is None:
        random_source = seeded_random_source()

    empty = free_cells(snake, grid_size)
    if not empty:
        logger.warning("No free cells available for food placement.")
        return None

    index = min(math.floor(random_source() * len(empty)), len(empty) - 1)
    return empty[index]
