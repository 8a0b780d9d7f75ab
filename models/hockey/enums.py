"""
Hockey Tapper enumerations.

These enums define the animation states, particle effect types, shot trigger
outcomes, and game events of the simulation core.
"""

from enum import Enum


class AnimationState(str, Enum):
    """Character animation states.

    The shot cycle runs idle -> windup -> hit -> cooldown -> idle.

    Attributes:
        IDLE: Waiting for input (looping)
        WINDUP: Pre-shot preparation
        HIT: Shot execution
        COOLDOWN: Return to idle
    """
    IDLE = "idle"
    WINDUP = "windup"
    HIT = "hit"
    COOLDOWN = "cooldown"


class ParticleType(str, Enum):
    """Particle effect profiles.

    Attributes:
        GOAL: Burst when the puck enters a target
        COMBO: Bigger burst on a combo milestone
        MISS: Small grey puff when a shot misses
    """
    GOAL = "goal"
    COMBO = "combo"
    MISS = "miss"


class ShotTriggerResult(str, Enum):
    """Outcome of asking the character to start a shot.

    Attributes:
        ACCEPTED: Shot started, the character is winding up
        SHOT_IN_PROGRESS: Rejected, a shot cycle is already running
        NOT_IDLE: Rejected, the character is not in the idle state
        NOT_PLAYING: Rejected by the session, no game is running
        PUCK_IN_FLIGHT: Rejected by the session, the previous puck is still flying
    """
    ACCEPTED = "accepted"
    SHOT_IN_PROGRESS = "shot_in_progress"
    NOT_IDLE = "not_idle"
    NOT_PLAYING = "not_playing"
    PUCK_IN_FLIGHT = "puck_in_flight"

    @property
    def accepted(self) -> bool:
        """True only for ACCEPTED."""
        return self is ShotTriggerResult.ACCEPTED


class GameEventType(str, Enum):
    """Events emitted by the game session during a tick.

    Attributes:
        SHOT: A puck was launched
        GOAL: The puck entered a target zone
        MISS: The puck left the field without scoring
        MILESTONE: A combo milestone was reached
        GAME_OVER: The last shot of the game was resolved
    """
    SHOT = "shot"
    GOAL = "goal"
    MISS = "miss"
    MILESTONE = "milestone"
    GAME_OVER = "game_over"


class GameState(str, Enum):
    """Session lifecycle states.

    Attributes:
        READY: Created, not started yet
        PLAYING: Active gameplay in progress
        PAUSED: Temporarily paused, the clock is ignored
        GAME_OVER: All shots used or the game was finished
    """
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
