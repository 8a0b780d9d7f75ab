"""
Hockey Tapper data models.

Immutable value objects passed between the simulation core, the game
session, and the leaderboard: score records, statistics snapshots, spawn
reports, and game events.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..primitives import Point2D
from .enums import GameEventType


class ScoreRecord(BaseModel):
    """One stored leaderboard entry.

    Attributes:
        id: Unique record identifier (uuid4 string)
        score: Final score (non-negative integer)
        label: Player label / username
        timestamp: Save time in milliseconds since the epoch

    Examples:
        >>> record = ScoreRecord(id='abc', score=1250, label='Player', timestamp=1699123456789)
        >>> record.score
        1250
    """
    id: str
    score: int = Field(..., ge=0)
    label: str
    timestamp: int

    model_config = ConfigDict(frozen=True)

    def relabeled(self, label: str) -> 'ScoreRecord':
        """Copy of this record with a different label."""
        return self.model_copy(update={'label': label})

    def __str__(self) -> str:
        return f"ScoreRecord({self.label}: {self.score})"


class LeaderboardStats(BaseModel):
    """Aggregate leaderboard statistics.

    All fields are zero for an empty leaderboard.

    Attributes:
        count: Number of stored records
        average: Mean score, rounded half up
        max: Highest score
        min: Lowest score
    """
    count: int = 0
    average: int = 0
    max: int = 0
    min: int = 0

    model_config = ConfigDict(frozen=True)


class ComboStats(BaseModel):
    """Snapshot of the combo tracker.

    Attributes:
        count: Current consecutive hit streak
        max_count: Best streak this session
        multiplier: Score multiplier for the current streak
    """
    count: int = 0
    max_count: int = 0
    multiplier: float = 1.0

    @field_validator('count', 'max_count')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate streak counters are non-negative."""
        if v < 0:
            raise ValueError(f'Combo counts must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"ComboStats(count={self.count}, max={self.max_count}, x{self.multiplier:.1f})"


class SpawnResult(BaseModel):
    """Report from a particle spawn request.

    Attributes:
        requested: Number of particles asked for
        spawned: Number actually drawn from the pool

    Examples:
        >>> result = SpawnResult(requested=20, spawned=12)
        >>> result.shortfall
        8
    """
    requested: int = Field(..., ge=0)
    spawned: int = Field(..., ge=0)

    @computed_field
    @property
    def shortfall(self) -> int:
        """How many particles could not be spawned."""
        return max(0, self.requested - self.spawned)

    @property
    def complete(self) -> bool:
        return self.shortfall == 0

    model_config = ConfigDict(frozen=True)


class FrameDimensions(BaseModel):
    """Pixel size of one animation frame and of its whole sprite sheet."""
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    total_width: int = Field(..., gt=0)
    total_height: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class GameEvent(BaseModel):
    """Something that happened during a session tick.

    Attributes:
        type: What happened
        timestamp: Clock timestamp (ms) of the tick that produced the event
        position: Where it happened (puck position), if meaningful
        points: Points awarded (goals only)
        target_id: Target zone that was hit (goals only)
        combo: Combo count after the event
        multiplier: Multiplier applied to the points
    """
    type: GameEventType
    timestamp: float
    position: Optional[Point2D] = None
    points: int = 0
    target_id: Optional[str] = None
    combo: int = 0
    multiplier: float = 1.0

    model_config = ConfigDict(frozen=True)

    def to_record(self) -> dict:
        """Flat JSON-serialisable dict for structured log sinks."""
        return self.model_dump(mode='json', exclude_none=True)

    def __str__(self) -> str:
        text = f"{self.type.value} @ {self.timestamp:.0f}ms"
        if self.type == GameEventType.GOAL:
            text += f" {self.target_id} +{self.points} (x{self.multiplier:.1f}, combo {self.combo})"
        elif self.type == GameEventType.MILESTONE:
            text += f" combo {self.combo}"
        return text
