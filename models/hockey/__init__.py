"""
Hockey Tapper models.

Enumerations, value objects, and the game profile configuration schema used
by the simulation core.
"""

from .enums import (
    AnimationState,
    ParticleType,
    ShotTriggerResult,
    GameEventType,
    GameState,
)
from .models import (
    ScoreRecord,
    LeaderboardStats,
    ComboStats,
    SpawnResult,
    FrameDimensions,
    GameEvent,
)
from .profile_config import (
    PhysicsConfig,
    ViewportConfig,
    SpriteDimensions,
    AnimationDescriptor,
    AnimationConfig,
    ValueRange,
    ParticleProfile,
    ParticleConfig,
    MultiplierTier,
    ComboConfig,
    TargetZone,
    TargetConfig,
    SessionConfig,
    GameProfile,
)

__all__ = [
    # Enums
    "AnimationState",
    "ParticleType",
    "ShotTriggerResult",
    "GameEventType",
    "GameState",
    # Value objects
    "ScoreRecord",
    "LeaderboardStats",
    "ComboStats",
    "SpawnResult",
    "FrameDimensions",
    "GameEvent",
    # Profile configuration
    "PhysicsConfig",
    "ViewportConfig",
    "SpriteDimensions",
    "AnimationDescriptor",
    "AnimationConfig",
    "ValueRange",
    "ParticleProfile",
    "ParticleConfig",
    "MultiplierTier",
    "ComboConfig",
    "TargetZone",
    "TargetConfig",
    "SessionConfig",
    "GameProfile",
]
