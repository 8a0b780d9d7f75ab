"""
Frame driver: the per-frame callback that advances a GameSession.

The simulation components never read a clock themselves; they are handed
a millisecond timestamp on every tick. FrameDriver is the one place that
reads a time source and feeds the session, either in real time against
pygame's clock or against a synthetic clock for headless runs and tests.
"""

from typing import Callable, List, Optional

import pygame

from models.hockey import GameEvent, GameState
from tapper.logging import get_logger
from tapper.session import GameSession

log = get_logger('clock')


def pygame_ticks() -> float:
    """Milliseconds since pygame was initialised (initialising it if needed)."""
    if not pygame.get_init():
        pygame.init()
    return float(pygame.time.get_ticks())


class SyntheticClock:
    """Deterministic time source that moves forward a fixed step per read.

    Args:
        step_ms: Milliseconds added after each read
        start_ms: First value returned
    """

    def __init__(self, step_ms: float = 1000.0 / 60, start_ms: float = 0.0):
        self.step_ms = step_ms
        self.now = start_ms

    def __call__(self) -> float:
        current = self.now
        self.now += self.step_ms
        return current


class FrameDriver:
    """Drives a session one frame at a time.

    Args:
        session: Session to advance
        time_source: Callable returning the current time in ms.
            Defaults to pygame's tick counter.
        target_fps: Frame rate that run() paces to
        paced: Sleep between frames in run(). Defaults to True only for the
            pygame time source, so synthetic clocks run flat out.
    """

    def __init__(
        self,
        session: GameSession,
        time_source: Optional[Callable[[], float]] = None,
        target_fps: int = 60,
        paced: Optional[bool] = None,
    ):
        self.session = session
        self.time_source = time_source or pygame_ticks
        self.target_fps = target_fps
        self.paced = time_source is None if paced is None else paced

        self._last_timestamp: Optional[float] = None
        self._frames = 0

    @property
    def frames(self) -> int:
        """Frames stepped so far."""
        return self._frames

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last_timestamp

    def _now(self) -> float:
        timestamp = float(self.time_source())
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            log.debug("Clock went backwards (%.1f < %.1f), holding", timestamp, self._last_timestamp)
            timestamp = self._last_timestamp
        self._last_timestamp = timestamp
        return timestamp

    def step(self) -> List[GameEvent]:
        """Read the clock once and tick the session.

        Returns:
            Events produced by the tick
        """
        events = self.session.tick(self._now())
        self._frames += 1
        for event in events:
            log.debug("%s", event)
        return events

    def run(
        self,
        max_frames: Optional[int] = None,
        until: Optional[Callable[[GameSession], bool]] = None,
    ) -> List[GameEvent]:
        """Step until the game ends, ``until(session)`` is true, or the frame budget is spent.

        A session that has not been started is started at the first
        timestamp.

        Args:
            max_frames: Most frames to step, or None for no limit
            until: Stop condition checked before every frame

        Returns:
            Every event produced, oldest first
        """
        if self.session.state == GameState.READY:
            self.session.start(self._now())

        pygame_clock = pygame.time.Clock() if self.paced else None
        events: List[GameEvent] = []
        frames = 0

        while self.session.state != GameState.GAME_OVER:
            if max_frames is not None and frames >= max_frames:
                break
            if until is not None and until(self.session):
                break

            if pygame_clock is not None:
                pygame_clock.tick(self.target_fps)

            events.extend(self.step())
            frames += 1

        log.debug("Ran %d frames, %d events", frames, len(events))
        return events
