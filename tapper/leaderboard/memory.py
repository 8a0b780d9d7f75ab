"""In-memory leaderboard backend."""

from typing import Callable, List, Optional

from models import ScoreRecord
from tapper.leaderboard.store import LeaderboardStore


class MemoryLeaderboard(LeaderboardStore):
    """Leaderboard held in a list. Lost when the process exits."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        super().__init__(clock)
        self._records: List[ScoreRecord] = []

    def _read(self) -> List[ScoreRecord]:
        return list(self._records)

    def _write(self, records: List[ScoreRecord]) -> None:
        self._records = list(records)

    def _erase(self) -> None:
        self._records = []
