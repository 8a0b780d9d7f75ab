"""Pooled particle effects.

Short-lived visual particles (goal bursts, combo fireworks, miss puffs)
with their own ballistic motion. Particles live in a fixed-capacity pool:
spawning draws free slots, expiry hands them back, and nothing is
allocated after the pool is built. When the pool runs dry a spawn
produces as many particles as it can and reports the rest as a shortfall.
"""

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from models import Color, SpawnResult
from models.hockey import ParticleConfig, ParticleProfile, ParticleType
from tapper.logging import get_logger

log = get_logger('particles')

_WHITE = Color(r=255, g=255, b=255)


@dataclass
class Particle:
    """One pooled particle slot.

    Position and velocity are in pixels and pixels per second; ``age`` and
    ``lifetime`` are in seconds.
    """
    slot: int
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    size: float = 5.0
    color: Color = field(default_factory=lambda: _WHITE)
    lifetime: float = 1.0
    age: float = 0.0
    gravity: float = 0.0
    active: bool = False
    particle_type: Optional[ParticleType] = None

    @property
    def progress(self) -> float:
        """Fraction of lifetime used, 0.0 to 1.0 (and beyond once expired)."""
        if self.lifetime <= 0:
            return 1.0
        return self.age / self.lifetime

    @property
    def expired(self) -> bool:
        return self.age >= self.lifetime


class ParticlePool:
    """Fixed set of reusable particle slots.

    Capacity is a hard ceiling: ``acquire`` returns None instead of growing
    the pool.
    """

    def __init__(self, capacity: int):
        self._slots: List[Particle] = [Particle(slot=i) for i in range(capacity)]
        self._free = capacity

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def free_count(self) -> int:
        return self._free

    @property
    def active_count(self) -> int:
        return len(self._slots) - self._free

    def slot(self, index: int) -> Particle:
        return self._slots[index]

    def acquire(self) -> Optional[Particle]:
        """Claim the lowest free slot, or None when the pool is exhausted."""
        if self._free == 0:
            return None
        for particle in self._slots:
            if not particle.active:
                particle.active = True
                particle.age = 0.0
                self._free -= 1
                return particle
        return None

    def release(self, particle: Particle) -> None:
        """Return a particle to the pool. Releasing a free slot is a no-op."""
        if particle.active:
            particle.active = False
            self._free += 1


class ParticleSystem:
    """Spawns, moves, fades, and recycles particles.

    Each system owns its own pool, so separate games (and separate tests)
    never share particles.

    Examples:
        >>> system = ParticleSystem(rng=random.Random(7))
        >>> system.spawn(100, 200, ParticleType.MISS).spawned
        10
        >>> system.advance(1.0)   # longer than any miss particle lives
        >>> system.active_count
        0
    """

    def __init__(
        self,
        config: Optional[ParticleConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or ParticleConfig()
        self._pool = ParticlePool(self.config.pool_capacity)
        self._active: List[Particle] = []
        self._rng = rng or random.Random()

    @property
    def pool(self) -> ParticlePool:
        return self._pool

    @property
    def particles(self) -> Tuple[Particle, ...]:
        """Active particles in spawn order."""
        return tuple(self._active)

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def free_count(self) -> int:
        return self._pool.free_count

    @property
    def capacity(self) -> int:
        return self._pool.capacity

    def profile(self, particle_type: ParticleType) -> ParticleProfile:
        return self.config.types[particle_type]

    def spawn(
        self,
        x: float,
        y: float,
        particle_type: Union[ParticleType, str] = ParticleType.GOAL,
        count: Optional[int] = None,
    ) -> SpawnResult:
        """Emit a burst of particles at (x, y).

        Args:
            x: Burst origin X
            y: Burst origin Y
            particle_type: Effect profile to use
            count: Override the profile's particle count

        Returns:
            How many particles were requested and how many were spawned
        """
        try:
            kind = ParticleType(particle_type)
            profile = self.config.types[kind]
        except (ValueError, KeyError):
            log.warning("Unknown particle type: %s", particle_type)
            return SpawnResult(requested=max(0, count or 0), spawned=0)

        requested = profile.count if count is None else max(0, count)
        spread = math.radians(profile.spread)
        rng = self._rng

        spawned = 0
        for _ in range(requested):
            particle = self._pool.acquire()
            if particle is None:
                break

            # -90 degrees is straight up in screen space
            angle = rng.random() * spread - spread / 2 - math.pi / 2
            speed = rng.uniform(profile.velocity.min, profile.velocity.max)

            particle.x = x
            particle.y = y
            particle.vx = math.cos(angle) * speed
            particle.vy = math.sin(angle) * speed
            particle.size = rng.uniform(profile.size.min, profile.size.max)
            particle.color = rng.choice(profile.colors)
            particle.lifetime = rng.uniform(profile.lifetime.min, profile.lifetime.max)
            particle.age = 0.0
            particle.gravity = profile.gravity
            particle.particle_type = kind

            self._active.append(particle)
            spawned += 1

        result = SpawnResult(requested=requested, spawned=spawned)
        if result.shortfall:
            log.warning("Particle pool exhausted: %d of %d %s particles spawned",
                        spawned, requested, kind.value)
        else:
            log.debug("Spawned %d %s particles at (%.0f, %.0f)", spawned, kind.value, x, y)
        return result

    def advance(self, dt: float) -> None:
        """Age, expire, and move every active particle.

        Args:
            dt: Seconds since the previous advance
        """
        drag = self.config.drag
        survivors: List[Particle] = []

        for particle in self._active:
            particle.age += dt
            if particle.age >= particle.lifetime:
                self._pool.release(particle)
                continue

            particle.vy += particle.gravity * dt
            particle.x += particle.vx * dt
            particle.y += particle.vy * dt
            particle.vx *= drag
            particle.vy *= drag
            survivors.append(particle)

        self._active = survivors

    def opacity(self, particle: Particle) -> float:
        """Opacity 0.0-1.0: solid until ``fade_start`` of the lifetime, then a linear fade."""
        fade_start = self.config.fade_start
        progress = particle.progress
        if progress <= fade_start:
            return 1.0
        return max(0.0, 1.0 - (progress - fade_start) / (1.0 - fade_start))

    def render_color(self, particle: Particle) -> Color:
        """Particle color with its current opacity applied to alpha."""
        return particle.color.with_opacity(self.opacity(particle))

    def clear(self) -> None:
        """Return every active particle to the pool."""
        for particle in self._active:
            self._pool.release(particle)
        if self._active:
            log.debug("Cleared %d particles", len(self._active))
        self._active = []
