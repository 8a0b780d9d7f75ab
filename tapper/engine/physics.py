"""Puck physics: launch, gravity + friction integration, bounds, previews.

The puck is driven by timestamps (milliseconds) from the frame clock. The
first advance after a launch or resume only records a baseline; motion
starts on the next tick, with each step clamped to ``max_frame_delta``
seconds so a paused tab or a slow frame never teleports the puck.

Angles follow the launch convention: 0 degrees points right, positive
angles point up. Screen y grows downward, hence the sign flips.
"""

import math
from typing import Iterator, Optional

from models import Point2D, Vector2D
from models.hockey import PhysicsConfig, ViewportConfig
from tapper.logging import get_logger

log = get_logger('physics')


class TrajectoryForecast:
    """Read-only forecast of the puck's path.

    Captures the body's position and velocity when created; every iteration
    re-simulates from that snapshot, so the forecast can be iterated any
    number of times and never touches the live body.

    The first point is the starting position. Simulation stops after
    ``steps`` points or before the first point that is out of bounds.
    """

    def __init__(self, physics: 'PuckPhysics', steps: int):
        self._steps = max(0, steps)
        self._start = physics.position
        self._velocity = physics.velocity
        self._physics_config = physics.physics_config
        self._bounds_check = physics.out_of_bounds

    @property
    def steps(self) -> int:
        return self._steps

    def __iter__(self) -> Iterator[Point2D]:
        cfg = self._physics_config
        dt = cfg.trajectory_step
        x, y = self._start.x, self._start.y
        vx, vy = self._velocity.x, self._velocity.y

        for _ in range(self._steps):
            yield Point2D(x=x, y=y)

            vy += cfg.gravity * dt
            vx *= cfg.friction
            vy *= cfg.friction
            x += vx * dt
            y += vy * dt

            if self._bounds_check(x, y):
                return

    def __repr__(self) -> str:
        return f"TrajectoryForecast(start={self._start}, steps={self._steps})"


class PuckPhysics:
    """Projectile state and integrator for the puck.

    One instance per active game. The body starts at rest at the origin;
    ``launch`` gives it a velocity, ``advance`` integrates it once per
    tick, and leaving the field (or ``stop``) brings it to rest.

    Examples:
        >>> puck = PuckPhysics()
        >>> puck.launch(90, 1.0, Point2D(x=187.5, y=662.0))
        >>> puck.advance(1000.0)   # baseline, no motion
        >>> puck.advance(1016.0)   # 16ms step
        >>> puck.position.y < 662.0
        True
    """

    def __init__(
        self,
        physics_config: Optional[PhysicsConfig] = None,
        viewport: Optional[ViewportConfig] = None,
    ):
        self.physics_config = physics_config or PhysicsConfig()
        self.viewport = viewport or ViewportConfig()

        self._position = Point2D.zero()
        self._velocity = Vector2D.zero()
        self._launch_position = Point2D.zero()
        self._flying = False
        self._last_update_time: Optional[float] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def position(self) -> Point2D:
        return self._position

    @property
    def velocity(self) -> Vector2D:
        return self._velocity

    @property
    def launch_position(self) -> Point2D:
        return self._launch_position

    @property
    def is_flying(self) -> bool:
        return self._flying

    @property
    def last_update_time(self) -> Optional[float]:
        """Timestamp of the last integrated tick, None until the baseline tick."""
        return self._last_update_time

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    @property
    def speed(self) -> float:
        """Magnitude of the velocity (px/s)."""
        return self._velocity.magnitude

    @property
    def direction(self) -> float:
        """Heading in degrees using the launch convention (positive = up)."""
        return math.degrees(math.atan2(-self._velocity.y, self._velocity.x))

    @property
    def is_moving(self) -> bool:
        """Speed above the jitter threshold."""
        return self.speed > self.physics_config.moving_threshold

    def out_of_bounds(self, x: float, y: float) -> bool:
        """True when (x, y) lies beyond the margin around the base canvas.

        Points exactly on the margin are still in bounds.
        """
        margin = self.viewport.out_of_bounds_margin
        width = self.viewport.base_width
        height = self.viewport.base_height
        return (
            x < -margin
            or x > width + margin
            or y < -margin
            or y > height + margin
        )

    @property
    def is_out_of_bounds(self) -> bool:
        return self.out_of_bounds(self._position.x, self._position.y)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def launch(
        self,
        angle_degrees: Optional[float] = None,
        power: float = 1.0,
        start_position: Optional[Point2D] = None,
    ) -> None:
        """Launch the puck.

        The launch speed is ``base_velocity * power`` capped at
        ``max_velocity``; any angle and any power are accepted.

        Args:
            angle_degrees: 0 = right, 90 = up. Defaults to the profile's shot angle.
            power: Multiplier on the base velocity
            start_position: Where to launch from. None keeps the current position.
        """
        cfg = self.physics_config
        if angle_degrees is None:
            angle_degrees = cfg.shot_angle

        if start_position is not None:
            self._position = start_position
            self._launch_position = start_position

        angle_rad = math.radians(angle_degrees)
        total_velocity = min(cfg.base_velocity * power, cfg.max_velocity)

        self._velocity = Vector2D(
            x=math.cos(angle_rad) * total_velocity,
            y=-math.sin(angle_rad) * total_velocity,
        )
        self._flying = True
        self._last_update_time = None

        log.info(
            "Puck launched: angle=%.1f, power=%.2f, velocity=(%.1f, %.1f)",
            angle_degrees, power, self._velocity.x, self._velocity.y,
        )

    def advance(self, timestamp: float) -> None:
        """Integrate one tick.

        Order per tick: gravity into vy, friction on both axes, then
        position += velocity * dt. Leaving the field stops the puck.

        Args:
            timestamp: Clock time in milliseconds (non-decreasing)
        """
        if not self._flying:
            return

        if self._last_update_time is None:
            self._last_update_time = timestamp
            if self.is_out_of_bounds:
                self.stop()
            return

        cfg = self.physics_config
        dt = min((timestamp - self._last_update_time) / 1000.0, cfg.max_frame_delta)
        self._last_update_time = timestamp

        vx = self._velocity.x
        vy = self._velocity.y + cfg.gravity * dt
        vx *= cfg.friction
        vy *= cfg.friction

        self._velocity = Vector2D(x=vx, y=vy)
        self._position = Point2D(
            x=self._position.x + vx * dt,
            y=self._position.y + vy * dt,
        )
        log.trace("step dt=%.4f pos=%s vel=%s", dt, self._position, self._velocity)

        if self.is_out_of_bounds:
            self.stop()
            log.debug("Puck out of bounds at %s - stopping", self._position)

    def stop(self) -> None:
        """Bring the puck to rest where it is."""
        self._flying = False
        self._velocity = Vector2D.zero()
        self._last_update_time = None

    def resume(self) -> None:
        """Re-baseline timing after a pause so the next tick does not jump."""
        self._last_update_time = None

    def reset(self, initial_position: Optional[Point2D] = None) -> None:
        """Stop and move the puck to ``initial_position`` (default: launch point)."""
        self.stop()
        position = initial_position if initial_position is not None else self.viewport.launch_point
        self._position = position
        self._launch_position = position

    def predict_trajectory(self, steps: int = 20) -> TrajectoryForecast:
        """Forecast up to ``steps`` positions from the current state."""
        return TrajectoryForecast(self, steps)

    def __repr__(self) -> str:
        return (f"PuckPhysics(pos={self._position}, vel={self._velocity}, "
                f"flying={self._flying})")
