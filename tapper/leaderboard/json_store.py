"""
JSON file leaderboard backend.

Keeps the whole leaderboard as one JSON array on local disk:

    [
      {"id": "uuid", "score": 1250, "label": "Player", "timestamp": 1699123456789},
      ...
    ]

A missing, unreadable, or corrupt file reads as an empty leaderboard.
"""

import json
from pathlib import Path
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from models import ScoreRecord
from tapper.leaderboard.store import LeaderboardStorageError, LeaderboardStore, _rank_key
from tapper.logging import get_logger

log = get_logger('leaderboard')


class JsonFileLeaderboard(LeaderboardStore):
    """Leaderboard persisted to a JSON file.

    Args:
        path: File to read and write; parent directories are created on save
        clock: Callable returning the current time in milliseconds
    """

    def __init__(
        self,
        path: Union[str, Path],
        clock: Optional[Callable[[], float]] = None,
    ):
        super().__init__(clock)
        self.path = Path(path)

    def _read(self) -> List[ScoreRecord]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            records = [ScoreRecord(**item) for item in data]
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            log.error("Error reading scores from %s: %s", self.path, e)
            return []
        records.sort(key=_rank_key)
        return records

    def _write(self, records: List[ScoreRecord]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump([r.model_dump() for r in records], f, indent=2)
        except OSError as e:
            log.error("Error saving scores to %s: %s", self.path, e)
            raise LeaderboardStorageError(f"Failed to save scores to {self.path}") from e

    def _erase(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise LeaderboardStorageError(f"Failed to clear {self.path}") from e
