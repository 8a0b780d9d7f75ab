"""Real-time simulation core.

Four independent, tick-driven components plus target scoring:

- PuckPhysics: projectile integration, bounds, trajectory previews
- AnimationController: character state machine
- ComboTracker: hit streaks and score multipliers
- ParticleSystem: pooled visual particles
- TargetField: goal detection and scoring
"""

from tapper.engine.animation import AnimationController
from tapper.engine.combo import ComboTracker
from tapper.engine.particles import Particle, ParticlePool, ParticleSystem
from tapper.engine.physics import PuckPhysics, TrajectoryForecast
from tapper.engine.targets import TargetField, TargetHit, score_goal

__all__ = [
    "AnimationController",
    "ComboTracker",
    "Particle",
    "ParticlePool",
    "ParticleSystem",
    "PuckPhysics",
    "TargetField",
    "TargetHit",
    "TrajectoryForecast",
    "score_goal",
]
