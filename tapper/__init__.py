"""
Hockey Tapper - real-time simulation core.

The player taps to shoot a puck at target zones above them. This package
holds everything except drawing and input:

- engine: puck physics, character animation, combos, particles, targets
- session: the game loop that ties the engine together and keeps score
- clock: frame driver that feeds timestamps to a session
- leaderboard: score persistence
- profile_loader: YAML game profiles validated with pydantic

Usage:
    from tapper import GameSession, FrameDriver, load_default_profile

    session = GameSession(load_default_profile())
    driver = FrameDriver(session)
    driver.run(max_frames=600)
"""

from tapper.clock import FrameDriver, SyntheticClock
from tapper.profile_loader import ProfileLoader, load_default_profile
from tapper.session import GameSession

__version__ = "1.0.0"

__all__ = [
    "FrameDriver",
    "GameSession",
    "ProfileLoader",
    "SyntheticClock",
    "load_default_profile",
]
