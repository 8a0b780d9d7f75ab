"""Character animation state machine.

Manages the shot cycle idle -> windup -> hit -> cooldown -> idle:

- frame progression at each state's fps (looping or not)
- fixed-duration single-frame states
- automatic transitions from the profile's transition table
- shot triggering that refuses to interrupt a cycle already running

The controller is advanced by clock timestamps in milliseconds. Like the
puck, the first advance after a start or a state change only records a
baseline.
"""

from typing import Optional, Union

from models import Point2D
from models.hockey import (
    AnimationConfig,
    AnimationDescriptor,
    AnimationState,
    FrameDimensions,
    ShotTriggerResult,
)
from tapper.logging import get_logger

log = get_logger('animation')


class AnimationController:
    """Timing-driven animation state machine for the player character.

    Invariants:
        - ``current_frame`` is always below the active descriptor's frame count
        - ``shot_in_progress`` is true exactly from a successful
          ``trigger_shot`` until cooldown hands back to idle

    Examples:
        >>> anim = AnimationController()
        >>> anim.start()
        >>> anim.trigger_shot().accepted
        True
        >>> anim.current_state
        <AnimationState.WINDUP: 'windup'>
        >>> anim.trigger_shot()
        <ShotTriggerResult.SHOT_IN_PROGRESS: 'shot_in_progress'>
    """

    def __init__(self, config: Optional[AnimationConfig] = None):
        self.config = config or AnimationConfig()
        self._state = self.config.initial_state
        self._frame = 0
        self._playing = False
        self._shot_in_progress = False
        self._last_frame_time: Optional[float] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current_state(self) -> AnimationState:
        return self._state

    @property
    def current_frame(self) -> int:
        return self._frame

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def shot_in_progress(self) -> bool:
        return self._shot_in_progress

    @property
    def last_frame_time(self) -> Optional[float]:
        return self._last_frame_time

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    @property
    def current_animation(self) -> AnimationDescriptor:
        """Descriptor of the active state."""
        return self.config.descriptor(self._state)

    @property
    def frame_interval(self) -> float:
        """Milliseconds per frame for the active state."""
        return self.current_animation.frame_interval

    @property
    def sprite_sheet(self) -> str:
        return self.current_animation.sprite_sheet

    @property
    def frame_dimensions(self) -> FrameDimensions:
        dims = self.current_animation.dimensions
        return FrameDimensions(
            width=dims.frame_width,
            height=dims.frame_height,
            total_width=dims.width,
            total_height=dims.height,
        )

    @property
    def frame_source_position(self) -> Point2D:
        """Top-left of the current frame inside the sprite sheet.

        Frames are laid out left to right, wrapping to the next row once a
        row of ``total_width // width`` frames is full.
        """
        dims = self.frame_dimensions
        frames_per_row = max(1, dims.total_width // dims.width)
        row, col = divmod(self._frame, frames_per_row)
        return Point2D(x=col * dims.width, y=row * dims.height)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start playback. No-op when already playing."""
        if self._playing:
            return
        self._playing = True
        self._last_frame_time = None

    def stop(self) -> None:
        """Halt playback, keeping state and frame."""
        self._playing = False

    def reset(self) -> None:
        """Stop and return to the initial state with no shot running."""
        self.stop()
        self._state = self.config.initial_state
        self._frame = 0
        self._last_frame_time = None
        self._shot_in_progress = False

    def advance(self, timestamp: float) -> None:
        """Advance timing by one clock tick.

        Args:
            timestamp: Clock time in milliseconds (non-decreasing)
        """
        if not self._playing:
            return

        if self._last_frame_time is None:
            self._last_frame_time = timestamp
            return

        elapsed = timestamp - self._last_frame_time
        animation = self.current_animation

        if animation.is_timed:
            if elapsed >= animation.duration and not animation.loop:
                self._transition_to_next_state()
            return

        if elapsed < animation.frame_interval:
            return

        self._last_frame_time = timestamp
        self._frame += 1

        if self._frame >= animation.frames:
            if animation.loop:
                self._frame = 0
            else:
                self._frame = animation.frames - 1
                self._transition_to_next_state()

    def _transition_to_next_state(self) -> None:
        next_state = self.config.next_state(self._state)
        if next_state is None:
            return

        if self._state == AnimationState.COOLDOWN and next_state == AnimationState.IDLE:
            self._shot_in_progress = False

        self.change_state(next_state)

    def change_state(self, new_state: Union[AnimationState, str]) -> bool:
        """Switch to ``new_state``.

        Resets the frame and the timing baseline. Entering a looping state
        restarts playback if it was stopped.

        Returns:
            True on success; False (logged, state untouched) for an unknown state
        """
        try:
            state = AnimationState(new_state)
        except ValueError:
            log.error("Invalid animation state: %s", new_state)
            return False

        log.debug("%s -> %s", self._state.value, state.value)
        self._state = state
        self._frame = 0
        self._last_frame_time = None

        if self.current_animation.loop and not self._playing:
            self.start()
        return True

    def trigger_shot(self) -> ShotTriggerResult:
        """Begin the shot cycle from idle.

        Returns:
            ACCEPTED when the windup started, otherwise the rejection reason
        """
        if self._shot_in_progress:
            log.debug("Shot already in progress, ignoring trigger")
            return ShotTriggerResult.SHOT_IN_PROGRESS

        if self._state != AnimationState.IDLE:
            log.debug("Can only trigger shot from idle state (currently %s)", self._state.value)
            return ShotTriggerResult.NOT_IDLE

        self._shot_in_progress = True
        self.change_state(AnimationState.WINDUP)
        return ShotTriggerResult.ACCEPTED

    def __repr__(self) -> str:
        return (f"AnimationController(state={self._state.value}, frame={self._frame}, "
                f"playing={self._playing}, shot={self._shot_in_progress})")
