"""
Leaderboard store interface.

A leaderboard is a ranked list of score records kept to the top
``MAX_RECORDS``. Ranking is by score, highest first, with ties going to
the earlier record. Every backend shares the ranking, validation, and
query logic in LeaderboardStore; subclasses only provide raw record
storage.
"""

import math
import time
import uuid
from abc import ABC, abstractmethod
from numbers import Integral
from typing import Any, Callable, List, Optional

from models import LeaderboardStats, ScoreRecord
from tapper.logging import emit_record, ensure_module_sink, get_logger

log = get_logger('leaderboard')

MAX_RECORDS = 100
DEFAULT_LIST_LIMIT = 20
DEFAULT_LABEL_LIMIT = 10
MAX_LABEL_LIMIT = 50
DEFAULT_LABEL = 'Player'
RECENT_WINDOW_MS = 60_000


class InvalidScoreError(ValueError):
    """Raised when a score is not a non-negative integer."""
    pass


class LeaderboardStorageError(Exception):
    """Raised when a backend cannot persist its records."""
    pass


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


def _clamp_limit(limit: Any, default: int, maximum: int) -> int:
    """Coerce a user-supplied limit into [1, maximum]; junk or 0 means default."""
    try:
        value = int(limit)
    except (TypeError, ValueError, OverflowError):
        value = 0
    if value == 0:
        value = default
    return max(1, min(value, maximum))


def _rank_key(record: ScoreRecord):
    return (-record.score, record.timestamp)


def _normalize_label(label: Optional[str]) -> str:
    text = str(label).strip() if label is not None else ''
    return text or DEFAULT_LABEL


class LeaderboardStore(ABC):
    """Base class for leaderboard backends.

    Subclasses implement ``_read``/``_write``/``_erase``; records handed to
    ``_write`` are always ranked and capped.

    Args:
        clock: Callable returning the current time in milliseconds
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or _wall_clock_ms
        ensure_module_sink('leaderboard')

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _read(self) -> List[ScoreRecord]:
        """Return all stored records in rank order."""

    @abstractmethod
    def _write(self, records: List[ScoreRecord]) -> None:
        """Replace all stored records."""

    @abstractmethod
    def _erase(self) -> None:
        """Remove all stored records."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def validate_score(score: Any) -> int:
        """Check a score and return it as an int.

        Integral floats such as ``1250.0`` are accepted.

        Raises:
            InvalidScoreError: If the score is not a non-negative integer
        """
        if isinstance(score, bool):
            raise InvalidScoreError(f"Invalid score: must be an integer, got {score!r}")
        if isinstance(score, float) and score.is_integer():
            score = int(score)
        if not isinstance(score, Integral):
            raise InvalidScoreError(f"Invalid score: must be an integer, got {score!r}")
        if score < 0:
            raise InvalidScoreError(f"Invalid score: must be non-negative, got {score}")
        return int(score)

    def save(self, score: Any, label: Optional[str] = None) -> ScoreRecord:
        """Store a new score.

        The leaderboard is re-ranked and trimmed to the top ``MAX_RECORDS``
        afterwards, so a low score may be evicted immediately.

        Args:
            score: Non-negative integer score
            label: Player label; blank or None becomes ``Player``

        Returns:
            The record that was created

        Raises:
            InvalidScoreError: If the score is invalid (nothing is stored)
        """
        value = self.validate_score(score)
        record = ScoreRecord(
            id=str(uuid.uuid4()),
            score=value,
            label=_normalize_label(label),
            timestamp=int(self._clock()),
        )

        records = self._read()
        records.append(record)
        records.sort(key=_rank_key)
        self._write(records[:MAX_RECORDS])

        log.info("Saved score %d for %s", record.score, record.label)
        emit_record('leaderboard', {'type': 'save', **record.model_dump()})
        return record

    def list(self, limit: Any = DEFAULT_LIST_LIMIT) -> List[ScoreRecord]:
        """Top records, best first. ``limit`` is clamped to [1, 100]."""
        return self._read()[:_clamp_limit(limit, DEFAULT_LIST_LIMIT, MAX_RECORDS)]

    def by_label(self, label: str, limit: Any = DEFAULT_LABEL_LIMIT) -> List[ScoreRecord]:
        """Best records for one label (case-insensitive). ``limit`` is clamped to [1, 50]."""
        wanted = str(label).strip().lower()
        matches = [r for r in self._read() if r.label.lower() == wanted]
        return matches[:_clamp_limit(limit, DEFAULT_LABEL_LIMIT, MAX_LABEL_LIMIT)]

    def clear(self) -> None:
        """Remove every record."""
        self._erase()
        log.info("Leaderboard cleared")

    def stats(self) -> LeaderboardStats:
        """Count, rounded average, max and min; all zero when empty."""
        scores = [r.score for r in self._read()]
        if not scores:
            return LeaderboardStats()
        average = math.floor(sum(scores) / len(scores) + 0.5)
        return LeaderboardStats(
            count=len(scores),
            average=average,
            max=max(scores),
            min=min(scores),
        )

    def update_recent_label(
        self,
        old_label: str,
        new_label: str,
        max_age_ms: float = RECENT_WINDOW_MS,
    ) -> int:
        """Relabel recent records, e.g. after a player renames themselves.

        Only records of ``old_label`` (case-insensitive) saved within the last
        ``max_age_ms`` milliseconds are changed.

        Returns:
            Number of records updated
        """
        old = _normalize_label(old_label)
        new = _normalize_label(new_label)
        if old.lower() == new.lower():
            return 0

        now = self._clock()
        updated = 0
        records = []
        for record in self._read():
            if record.label.lower() == old.lower() and now - record.timestamp <= max_age_ms:
                record = record.relabeled(new)
                updated += 1
            records.append(record)

        if updated:
            self._write(records)
            log.info("Updated %d score(s) from '%s' to '%s'", updated, old, new)
        return updated

    def __len__(self) -> int:
        return len(self._read())
