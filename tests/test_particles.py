"""
Particle System Tests

Tests for the fixed-capacity particle pool and the particle simulator.

Run with: pytest tests/test_particles.py -v
"""

import math
import random

import pytest

from models import Color
from models.hockey import ParticleConfig, ParticleType
from tapper.engine import ParticlePool, ParticleSystem


@pytest.fixture
def system(rng):
    return ParticleSystem(rng=rng)


def _single(system):
    """Spawn one goal particle and pin its motion to known values."""
    system.spawn(0, 0, ParticleType.GOAL, count=1)
    particle = system.particles[0]
    particle.x, particle.y = 0.0, 0.0
    particle.vx, particle.vy = 10.0, 0.0
    particle.gravity = 100.0
    particle.lifetime = 10.0
    particle.age = 0.0
    return particle


class TestParticlePool:
    """Test slot acquisition and release."""

    def test_capacity(self):
        pool = ParticlePool(3)
        assert pool.capacity == 3
        assert pool.free_count == 3
        assert pool.active_count == 0

    def test_exhaustion(self):
        """acquire returns None once every slot is taken."""
        pool = ParticlePool(2)
        assert pool.acquire() is not None
        assert pool.acquire() is not None
        assert pool.acquire() is None
        assert pool.free_count == 0

    def test_lowest_free_slot_first(self):
        """A released slot is reused before higher ones."""
        pool = ParticlePool(3)
        first, second, third = pool.acquire(), pool.acquire(), pool.acquire()
        assert [p.slot for p in (first, second, third)] == [0, 1, 2]

        pool.release(second)
        assert pool.acquire() is second

    def test_double_release(self):
        """Releasing a free slot does not inflate the free count."""
        pool = ParticlePool(2)
        particle = pool.acquire()
        pool.release(particle)
        pool.release(particle)
        assert pool.free_count == 2

    def test_acquire_resets_age(self):
        pool = ParticlePool(1)
        particle = pool.acquire()
        particle.age = 5.0
        pool.release(particle)
        assert pool.acquire().age == 0.0


class TestSpawn:
    """Test particle bursts."""

    def test_goal_burst(self, system):
        """A goal burst uses the profile's count."""
        result = system.spawn(100, 200, ParticleType.GOAL)

        assert result.requested == 20
        assert result.spawned == 20
        assert result.complete
        assert system.active_count == 20
        assert system.free_count == 180

    def test_burst_properties_in_range(self, system):
        """Sizes, speeds, lifetimes and colors come from the profile."""
        system.spawn(100, 200, ParticleType.COMBO)
        profile = system.profile(ParticleType.COMBO)

        for p in system.particles:
            assert (p.x, p.y) == (100, 200)
            assert profile.size.min <= p.size <= profile.size.max
            assert profile.lifetime.min <= p.lifetime <= profile.lifetime.max
            speed = math.hypot(p.vx, p.vy)
            assert profile.velocity.min - 1e-9 <= speed <= profile.velocity.max + 1e-9
            assert p.color in profile.colors
            assert p.gravity == profile.gravity
            assert p.particle_type == ParticleType.COMBO
            assert p.active

    def test_miss_fans_upward(self, system):
        """A 180 degree spread never points below the horizon."""
        system.spawn(0, 0, ParticleType.MISS)
        assert all(p.vy <= 1e-9 for p in system.particles)

    def test_string_type(self, system):
        """Types can be named by string."""
        assert system.spawn(0, 0, "miss").spawned == 10

    def test_count_override(self, system):
        result = system.spawn(0, 0, ParticleType.GOAL, count=3)
        assert result.requested == 3
        assert result.spawned == 3

    def test_unknown_type(self, system):
        """Unknown effect types spawn nothing."""
        result = system.spawn(0, 0, "sparkle")
        assert result.spawned == 0
        assert system.active_count == 0

    def test_pool_exhaustion_shortfall(self, rng):
        """When the pool runs dry the shortfall is reported."""
        system = ParticleSystem(ParticleConfig(pool_capacity=25), rng=rng)
        system.spawn(0, 0, ParticleType.GOAL)
        result = system.spawn(0, 0, ParticleType.GOAL)

        assert result.requested == 20
        assert result.spawned == 5
        assert result.shortfall == 15
        assert not result.complete
        assert system.active_count == 25

    def test_exhaustion_warns(self, rng, capsys):
        """Shortfalls are logged as warnings."""
        from tapper.logging import configure_logging
        configure_logging('WARNING')

        system = ParticleSystem(ParticleConfig(pool_capacity=5), rng=rng)
        system.spawn(0, 0, ParticleType.GOAL)
        assert "[particles] WARN: Particle pool exhausted" in capsys.readouterr().out

    def test_deterministic_with_seed(self):
        """The same seed produces the same burst."""
        a = ParticleSystem(rng=random.Random(7))
        b = ParticleSystem(rng=random.Random(7))
        a.spawn(10, 10, ParticleType.GOAL)
        b.spawn(10, 10, ParticleType.GOAL)
        assert [(p.vx, p.vy, p.size) for p in a.particles] == \
               [(p.vx, p.vy, p.size) for p in b.particles]


class TestAdvance:
    """Test aging, motion and expiry."""

    def test_motion_order(self, system):
        """Gravity, then position, then drag."""
        particle = _single(system)
        system.advance(0.1)

        assert particle.age == pytest.approx(0.1)
        assert particle.x == pytest.approx(1.0)
        assert particle.y == pytest.approx(1.0)
        assert particle.vx == pytest.approx(9.9)
        assert particle.vy == pytest.approx(9.9)

    def test_expired_particles_return_to_pool(self, system):
        """Particles past their lifetime are released."""
        system.spawn(0, 0, ParticleType.MISS)
        system.advance(1.0)

        assert system.active_count == 0
        assert system.free_count == system.capacity

    def test_expiry_frees_slots_for_reuse(self, rng):
        """A full pool accepts new particles once old ones expire."""
        system = ParticleSystem(ParticleConfig(pool_capacity=10), rng=rng)
        system.spawn(0, 0, ParticleType.MISS)
        assert system.spawn(0, 0, ParticleType.MISS).spawned == 0

        system.advance(1.0)
        assert system.spawn(0, 0, ParticleType.MISS).spawned == 10

    def test_clear(self, system):
        system.spawn(0, 0, ParticleType.GOAL)
        system.clear()
        assert system.active_count == 0
        assert system.free_count == 200


class TestOpacity:
    """Test fade-out."""

    @pytest.mark.parametrize("age,expected", [
        (0.0, 1.0),
        (5.0, 1.0),
        (7.0, 1.0),
        (8.5, 0.5),
        (10.0, 0.0),
    ])
    def test_fades_after_seventy_percent(self, system, age, expected):
        particle = _single(system)
        particle.age = age
        assert system.opacity(particle) == pytest.approx(expected)

    def test_render_color_alpha(self, system):
        """Render color carries the opacity in alpha."""
        particle = _single(system)
        particle.color = Color(r=255, g=0, b=0)
        particle.age = 8.5

        color = system.render_color(particle)
        assert (color.r, color.g, color.b) == (255, 0, 0)
        assert color.a == 128
