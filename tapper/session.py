"""
Game session: one player's run of shots.

GameSession owns the four simulation components and the target field and
advances them together, one clock tick at a time. It turns raw simulation
state into game events (shots, goals, misses, milestones, game over) and
keeps the score.

Usage:
    session = GameSession(load_default_profile())
    session.start(timestamp=0)
    session.shoot(angle_degrees=90)
    for t in range(16, 2000, 16):
        for event in session.tick(t):
            print(event)
"""

import random
from typing import Any, Dict, List, Optional

from models.hockey import (
    AnimationState,
    GameEvent,
    GameEventType,
    GameProfile,
    GameState,
    ParticleType,
    ScoreRecord,
    ShotTriggerResult,
)
from tapper.engine import (
    AnimationController,
    ComboTracker,
    ParticleSystem,
    PuckPhysics,
    TargetField,
    TargetHit,
    score_goal,
)
from tapper.leaderboard import LeaderboardStore
from tapper.logging import emit_record, ensure_module_sink, get_logger

log = get_logger('session')


class GameSession:
    """Single control point for a game in progress.

    States:
        READY -> PLAYING <-> PAUSED
        PLAYING -> GAME_OVER (shots exhausted, or finish())

    Only one puck is in play at a time. A shot is resolved on the tick the
    puck enters a target zone (goal) or comes to rest anywhere else (miss);
    the puck then returns to the launch point.

    Args:
        profile: Game profile. Defaults to the built-in profile.
        leaderboard: Where finish() saves the score, if anywhere
        rng: Random source for particle effects
        label: Player label for saved scores
    """

    def __init__(
        self,
        profile: Optional[GameProfile] = None,
        leaderboard: Optional[LeaderboardStore] = None,
        rng: Optional[random.Random] = None,
        label: Optional[str] = None,
    ):
        self.profile = profile or GameProfile()
        self.leaderboard = leaderboard
        self.label = label or self.profile.session.default_label

        self._physics = PuckPhysics(self.profile.physics, self.profile.viewport)
        self._animation = AnimationController(self.profile.animation)
        self._combo = ComboTracker(self.profile.combo)
        self._particles = ParticleSystem(self.profile.particles, rng)
        self._targets = TargetField(self.profile.targets.zones, self.profile.play_field)

        self._state = GameState.READY
        self._score = 0
        self._shots_taken = 0
        self._goals = 0
        self._shot_open = False
        self._last_tick: Optional[float] = None
        self._pending: List[GameEvent] = []
        self._record: Optional[ScoreRecord] = None
        ensure_module_sink('session')

        self._physics.reset(self.profile.viewport.launch_point)

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def shots_taken(self) -> int:
        return self._shots_taken

    @property
    def goals(self) -> int:
        return self._goals

    @property
    def shots_remaining(self) -> Optional[int]:
        """Shots left in this game, or None if unlimited."""
        limit = self.profile.session.shots_per_game
        if limit is None:
            return None
        return max(0, limit - self._shots_taken)

    @property
    def can_shoot(self) -> bool:
        """Whether shoot() would be accepted right now."""
        return (
            self._state == GameState.PLAYING
            and not self._shot_open
            and not self._physics.is_flying
            and not self._animation.shot_in_progress
            and self._animation.current_state == AnimationState.IDLE
        )

    @property
    def physics(self) -> PuckPhysics:
        return self._physics

    @property
    def animation(self) -> AnimationController:
        return self._animation

    @property
    def combo(self) -> ComboTracker:
        return self._combo

    @property
    def particles(self) -> ParticleSystem:
        return self._particles

    @property
    def targets(self) -> TargetField:
        return self._targets

    @property
    def record(self) -> Optional[ScoreRecord]:
        """Leaderboard record saved by finish(), if any."""
        return self._record

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, timestamp: Optional[float] = None) -> None:
        """Begin a new game, discarding any previous one.

        Args:
            timestamp: Clock time (ms) to use as the first tick baseline
        """
        self._physics.reset(self.profile.viewport.launch_point)
        self._animation.reset()
        self._animation.start()
        self._combo = ComboTracker(self.profile.combo)
        self._particles.clear()

        self._score = 0
        self._shots_taken = 0
        self._goals = 0
        self._shot_open = False
        self._pending = []
        self._record = None
        self._last_tick = timestamp

        self._state = GameState.PLAYING
        log.info("Game started for %s", self.label)

    def pause(self) -> None:
        """Freeze the game. Ticks are ignored until resume()."""
        if self._state != GameState.PLAYING:
            return
        self._state = GameState.PAUSED
        self._animation.stop()
        log.debug("Game paused")

    def resume(self) -> None:
        """Continue after pause(); the next tick is a fresh timing baseline."""
        if self._state != GameState.PAUSED:
            return
        self._physics.resume()
        self._animation.start()
        self._last_tick = None
        self._state = GameState.PLAYING
        log.debug("Game resumed")

    def finish(self) -> Optional[ScoreRecord]:
        """End the game and save the score to the leaderboard.

        Safe to call more than once; the score is saved only the first time.

        Returns:
            The saved record, or None without a leaderboard
        """
        if self._state == GameState.READY:
            return None

        if self._state != GameState.GAME_OVER:
            self._end_game(self._last_tick or 0.0)

        if self.leaderboard is not None and self._record is None:
            self._record = self.leaderboard.save(self._score, self.label)
        return self._record

    # =========================================================================
    # Input
    # =========================================================================

    def shoot(self, angle_degrees: Optional[float] = None, power: float = 1.0) -> ShotTriggerResult:
        """Take a shot from the launch point.

        Args:
            angle_degrees: Launch angle (0 = right, 90 = up). Profile default if None.
            power: Multiplier on the base launch velocity

        Returns:
            ACCEPTED when the puck was launched, otherwise why not
        """
        if self._state != GameState.PLAYING:
            return ShotTriggerResult.NOT_PLAYING

        if self._shot_open or self._physics.is_flying:
            return ShotTriggerResult.PUCK_IN_FLIGHT

        result = self._animation.trigger_shot()
        if not result.accepted:
            return result

        self._physics.launch(angle_degrees, power, self.profile.viewport.launch_point)
        self._shots_taken += 1
        self._shot_open = True

        # Stamped by the tick that delivers it
        self._pending.append(GameEvent(
            type=GameEventType.SHOT,
            timestamp=self._last_tick or 0.0,
            position=self._physics.position,
            combo=self._combo.count,
            multiplier=self._combo.multiplier,
        ))
        return result

    # =========================================================================
    # Simulation
    # =========================================================================

    def tick(self, timestamp: float) -> List[GameEvent]:
        """Advance every component to ``timestamp`` and resolve the shot.

        Args:
            timestamp: Clock time in milliseconds (non-decreasing)

        Returns:
            Events produced since the previous tick, oldest first
        """
        if self._state in (GameState.READY, GameState.PAUSED):
            return []

        events = [
            self._emit(event.model_copy(update={'timestamp': timestamp}))
            for event in self._pending
        ]
        self._pending = []

        self._physics.advance(timestamp)
        self._animation.advance(timestamp)

        if self._last_tick is not None:
            dt = max(0.0, (timestamp - self._last_tick) / 1000.0)
            self._particles.advance(min(dt, self.profile.physics.max_frame_delta))
        self._last_tick = timestamp

        if self._state == GameState.PLAYING and self._shot_open:
            events.extend(self._resolve_shot(timestamp))

        return events

    def _resolve_shot(self, timestamp: float) -> List[GameEvent]:
        puck = self._physics
        if puck.is_flying:
            hit = self._targets.hit_test(puck.position)
            if hit is None:
                return []
            events = self._goal(hit, timestamp)
        else:
            events = self._miss(timestamp)

        self._shot_open = False
        puck.reset(self.profile.viewport.launch_point)

        if self.shots_remaining == 0:
            events.append(self._end_game(timestamp))
        return events

    def _goal(self, hit: TargetHit, timestamp: float) -> List[GameEvent]:
        position = self._physics.position
        self._physics.stop()

        milestone = self._combo.increment()
        multiplier = self._combo.multiplier
        points = score_goal(hit, multiplier)
        self._score += points
        self._goals += 1

        self._particles.spawn(position.x, position.y, ParticleType.GOAL)
        events = [self._emit(GameEvent(
            type=GameEventType.GOAL,
            timestamp=timestamp,
            position=position,
            points=points,
            target_id=hit.zone.id,
            combo=self._combo.count,
            multiplier=multiplier,
        ))]
        log.info("Goal on %s: +%d (accuracy %.2f, x%.1f)",
                 hit.zone.id, points, hit.accuracy, multiplier)

        if milestone is not None:
            self._particles.spawn(position.x, position.y, ParticleType.COMBO)
            events.append(self._emit(GameEvent(
                type=GameEventType.MILESTONE,
                timestamp=timestamp,
                position=position,
                combo=milestone,
                multiplier=multiplier,
            )))
        return events

    def _miss(self, timestamp: float) -> List[GameEvent]:
        position = self._physics.position
        self._combo.reset()
        self._particles.spawn(position.x, position.y, ParticleType.MISS)
        log.debug("Miss at %s", position)
        return [self._emit(GameEvent(
            type=GameEventType.MISS,
            timestamp=timestamp,
            position=position,
        ))]

    def _end_game(self, timestamp: float) -> GameEvent:
        self._state = GameState.GAME_OVER
        self._shot_open = False
        self._physics.stop()
        log.info("Game over: score=%d, goals=%d/%d, best combo=%d",
                 self._score, self._goals, self._shots_taken, self._combo.max_count)
        return self._emit(GameEvent(
            type=GameEventType.GAME_OVER,
            timestamp=timestamp,
            points=self._score,
            combo=self._combo.max_count,
        ))

    # =========================================================================
    # Events
    # =========================================================================

    def _emit(self, event: GameEvent) -> GameEvent:
        emit_record('session', event.to_record())
        return event

    # =========================================================================
    # Rendering support
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of everything a renderer needs for one frame."""
        puck = self._physics
        animation = self._animation
        frame_position = animation.frame_source_position
        return {
            'state': self._state.value,
            'score': self._score,
            'shots_taken': self._shots_taken,
            'shots_remaining': self.shots_remaining,
            'goals': self._goals,
            'puck': {
                'position': puck.position.as_tuple,
                'velocity': puck.velocity.as_tuple,
                'flying': puck.is_flying,
                'trajectory': [p.as_tuple for p in puck.predict_trajectory()] if puck.is_flying else [],
            },
            'animation': {
                'state': animation.current_state.value,
                'frame': animation.current_frame,
                'sprite_sheet': animation.sprite_sheet,
                'source': frame_position.as_tuple,
                'shot_in_progress': animation.shot_in_progress,
            },
            'combo': self._combo.get_stats().model_dump(),
            'particles': [
                {
                    'x': p.x,
                    'y': p.y,
                    'size': p.size,
                    'color': self._particles.render_color(p).as_tuple,
                }
                for p in self._particles.particles
            ],
            'targets': [
                {'id': zone.id, 'bounds': self._targets.bounds(zone.id).model_dump()}
                for zone in self._targets.zones
            ],
        }

    def __repr__(self) -> str:
        return (f"GameSession(state={self._state.value}, score={self._score}, "
                f"shots={self._shots_taken})")
