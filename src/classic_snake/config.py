"""Runtime configuration for game sessions and the score history."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from classic_snake.grid import validate_grid_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board, clock, and leaderboard settings.

    Supports JSON serialization so a setup can be shared or replayed.
    """

    # Board
    grid_size: int = 20

    # Clock
    tick_ms: int = 120

    # Score history
    leaderboard_limit: int = 10
    leaderboard_key: str = "snake:last10"
    scores_path: str = "scores.json"

    def __post_init__(self) -> None:
        validate_grid_size(self.grid_size)
        if self.tick_ms <= 0:
            raise ValueError("tick_ms must be positive.")
        if self.leaderboard_limit < 1:
            raise ValueError("leaderboard_limit must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
