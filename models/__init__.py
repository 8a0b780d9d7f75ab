"""
Unified models library for Hockey Tapper.

This package provides the Pydantic data models used across the project:
- Primitives: Basic geometric and color types (Point2D, Vector2D, Color, Rectangle, Resolution)
- Hockey: Enums, value objects, and the game profile configuration schema

Usage:
    >>> from models import Point2D, GameProfile
    >>> from models.hockey import AnimationState, ParticleType
    >>> from models.primitives import Color, Rectangle
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
    Resolution,
    Color,
    Rectangle,
)

# ============================================================================
# Hockey Tapper models
# ============================================================================
from .hockey import (
    AnimationState,
    ParticleType,
    ShotTriggerResult,
    GameEventType,
    GameState,
    ScoreRecord,
    LeaderboardStats,
    ComboStats,
    SpawnResult,
    FrameDimensions,
    GameEvent,
    GameProfile,
)

# Top-level exports - most commonly used models
__all__ = [
    # Primitives
    "Point2D",
    "Vector2D",
    "Resolution",
    "Color",
    "Rectangle",
    # Hockey
    "AnimationState",
    "ParticleType",
    "ShotTriggerResult",
    "GameEventType",
    "GameState",
    "ScoreRecord",
    "LeaderboardStats",
    "ComboStats",
    "SpawnResult",
    "FrameDimensions",
    "GameEvent",
    "GameProfile",
]
