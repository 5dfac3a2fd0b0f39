"""Bounded, most-recent-first score history kept in a JSON key-value file."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snake:last10"
DEFAULT_LIMIT = 10

_NAME_PREFIXES = ("Neo", "Swift", "Shadow", "Storm", "Vibe", "Turbo", "Nova")
_NAME_SUFFIXES = ("Rider", "Fox", "Blaze", "Drift", "Knight", "Scout", "Ace")


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def generate_player_name(seed: int) -> str:
    """Derive a display name such as ``"Storm Fox"`` from *seed*."""
    first = _NAME_PREFIXES[seed % len(_NAME_PREFIXES)]
    second = _NAME_SUFFIXES[(seed // 7) % len(_NAME_SUFFIXES)]
    return f"{first} {second}"


def initials(name: str) -> str:
    """Two upper-case initials, padding with ``P``/``L`` when missing."""
    words = name.split()
    first = words[0][0] if words else "P"
    second = words[1][0] if len(words) > 1 else "L"
    return f"{first}{second}".upper()


@dataclass(frozen=True)
class ScoreEntry:
    """One finished game in the history."""

    score: int
    played_at: int
    player_name: str | None = None
    avatar_hue: float | None = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_raw(cls, raw: object, fallback_time: int) -> ScoreEntry:
        """Coerce a stored record, replacing unusable fields with defaults."""
        data = raw if isinstance(raw, dict) else {}
        name = data.get("player_name")
        return cls(
            score=_as_int(data.get("score"), 0),
            played_at=_as_int(data.get("played_at"), fallback_time) or fallback_time,
            player_name=name.strip() if isinstance(name, str) and name.strip() else None,
            avatar_hue=_as_finite(data.get("avatar_hue")),
        )


def _as_finite(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: object, default: int) -> int:
    number = _as_finite(value)
    return int(number) if number is not None else default


class ScoreHistory:
    """Most-recent-first log of final scores, capped at *limit* entries.

    The backing file is a JSON object used as a key-value store; the
    history lives under *key* so other values can share the file.
    """

    def __init__(
        self,
        path: str | Path,
        key: str = DEFAULT_KEY,
        limit: int = DEFAULT_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1.")
        self._path = Path(path)
        self._key = key
        self._limit = limit
        self._entries: list[ScoreEntry] = self.load()

    @property
    def entries(self) -> list[ScoreEntry]:
        return list(self._entries)

    @property
    def limit(self) -> int:
        return self._limit

    def _read_store(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable score store at %s.", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> list[ScoreEntry]:
        """Read stored entries; missing or malformed data yields ``[]``."""
        stored = self._read_store().get(self._key)
        if not isinstance(stored, list):
            return []
        fallback = now_ms()
        return [
            ScoreEntry.from_raw(raw, fallback) for raw in stored[: self._limit]
        ]

    def save(self) -> None:
        store = self._read_store()
        store[self._key] = [e.to_dict() for e in self._entries[: self._limit]]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(store, indent=2))

    def record(self, score: int, now: int | None = None) -> ScoreEntry:
        """Prepend a finished game, drop the oldest beyond the cap, persist."""
        if now is None:
            now = now_ms()
        entry = ScoreEntry(
            score=score,
            played_at=now,
            player_name=generate_player_name(now),
            avatar_hue=float(now % 360),
        )
        self._entries = [entry, *self._entries][: self._limit]
        self.save()
        logger.info(
            "Recorded score %d for %s (%d in history).",
            score, entry.player_name, len(self._entries),
        )
        return entry

    def ranked(self) -> list[ScoreEntry]:
        """Entries ordered by score, highest first; ties keep recency order."""
        return sorted(self._entries, key=lambda e: e.score, reverse=True)

    def leaderboard(self) -> list[dict]:
        """Ranked entries with display names and avatar data filled in."""
        rows: list[dict] = []
        for index, entry in enumerate(self.ranked()):
            name = entry.player_name or f"Player {index + 1}"
            hue = entry.avatar_hue
            if hue is None:
                hue = float((index * 47) % 360)
            rows.append({
                "rank": index + 1,
                "score": entry.score,
                "played_at": entry.played_at,
                "player_name": name,
                "initials": initials(name),
                "avatar_hue": hue,
                "leader": index == 0,
            })
        return rows
