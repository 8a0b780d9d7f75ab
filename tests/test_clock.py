"""Tests for the frame driver and the synthetic clock."""

import pytest

from models.hockey import GameEventType, GameState
from tapper.clock import FrameDriver, SyntheticClock
from tapper.session import GameSession


@pytest.fixture
def session(profile, rng):
    return GameSession(profile, rng=rng)


class TestSyntheticClock:
    """Test the deterministic time source."""

    def test_steps(self):
        clock = SyntheticClock(step_ms=10, start_ms=100)
        assert [clock(), clock(), clock()] == [100, 110, 120]

    def test_sixty_fps_default(self):
        clock = SyntheticClock()
        clock()
        assert clock() == pytest.approx(1000 / 60)


class TestStep:
    """Test single frames."""

    def test_step_ticks_session(self, session):
        driver = FrameDriver(session, time_source=SyntheticClock(step_ms=16))
        session.start(timestamp=0.0)
        session.shoot(90)

        events = driver.step()
        assert [e.type for e in events] == [GameEventType.SHOT]
        assert driver.frames == 1
        assert driver.last_timestamp == 0.0

    def test_timestamps_never_go_backwards(self, session):
        readings = iter([100.0, 50.0, 120.0])
        driver = FrameDriver(session, time_source=lambda: next(readings))
        session.start(timestamp=0.0)

        driver.step()
        driver.step()
        assert driver.last_timestamp == 100.0
        driver.step()
        assert driver.last_timestamp == 120.0

    def test_synthetic_source_is_not_paced(self, session):
        assert FrameDriver(session, time_source=SyntheticClock()).paced is False
        assert FrameDriver(session, time_source=SyntheticClock(), paced=True).paced is True


class TestRun:
    """Test the frame loop."""

    def test_starts_ready_session(self, session):
        driver = FrameDriver(session, time_source=SyntheticClock(step_ms=16))
        driver.run(max_frames=10)

        assert session.state == GameState.PLAYING
        assert driver.frames == 10

    def test_until(self, session):
        driver = FrameDriver(session, time_source=SyntheticClock(step_ms=16))
        session.start(timestamp=0.0)
        session.shoot(90)

        events = driver.run(max_frames=500, until=lambda s: s.goals >= 1)

        assert session.goals == 1
        assert GameEventType.GOAL in [e.type for e in events]
        assert driver.frames < 500

    def test_stops_at_game_over(self, short_game_profile, rng):
        session = GameSession(short_game_profile, rng=rng)
        driver = FrameDriver(session, time_source=SyntheticClock(step_ms=16))
        session.start(timestamp=0.0)

        def shoot_when_ready(s):
            if s.can_shoot:
                s.shoot(90)
            return False

        events = driver.run(until=shoot_when_ready)

        assert session.state == GameState.GAME_OVER
        assert events[-1].type == GameEventType.GAME_OVER
        assert [e.type for e in events].count(GameEventType.GOAL) == 3

    def test_frame_budget(self, session):
        driver = FrameDriver(session, time_source=SyntheticClock())
        session.start(timestamp=0.0)
        driver.run(max_frames=3)
        driver.run(max_frames=2)
        assert driver.frames == 5
