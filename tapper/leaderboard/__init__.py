"""Leaderboard stores.

Two interchangeable backends behind one interface:

- MemoryLeaderboard: in-process list
- JsonFileLeaderboard: local JSON file
"""

from tapper.leaderboard.json_store import JsonFileLeaderboard
from tapper.leaderboard.memory import MemoryLeaderboard
from tapper.leaderboard.store import (
    MAX_RECORDS,
    InvalidScoreError,
    LeaderboardStorageError,
    LeaderboardStore,
)

__all__ = [
    "MAX_RECORDS",
    "InvalidScoreError",
    "JsonFileLeaderboard",
    "LeaderboardStorageError",
    "LeaderboardStore",
    "MemoryLeaderboard",
]
