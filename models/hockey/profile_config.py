"""
Pydantic v2 models for game profile YAML configuration.

A game profile gathers every constant the simulation core consumes: physics
tuning, the base canvas, animation descriptors and transitions, particle
type profiles, combo milestones and multiplier tiers, and the target zones.
All models are frozen; profiles are startup constants, never mutated at
runtime.

The defaults reproduce the shipped ``default.yaml`` profile, so
``GameProfile()`` is a complete, playable configuration.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..primitives import Color, Point2D, Rectangle, Resolution
from .enums import AnimationState, ParticleType


class PhysicsConfig(BaseModel):
    """
    Puck physics tuning.

    Velocities are in pixels per second, gravity in pixels per second
    squared. Friction is a per-tick velocity multiplier.
    """
    model_config = ConfigDict(frozen=True)

    gravity: float = Field(default=180.0, description="Downward acceleration (px/s^2)")
    friction: float = Field(default=0.998, gt=0.0, le=1.0,
                            description="Velocity decay applied every tick")
    base_velocity: float = Field(default=1800.0, ge=0.0,
                                 description="Launch speed at power 1.0 (px/s)")
    max_velocity: float = Field(default=2200.0, gt=0.0,
                                description="Launch speed ceiling (px/s)")
    shot_angle: float = Field(default=78.0,
                              description="Default launch angle in degrees (0 = right, 90 = up)")
    max_frame_delta: float = Field(default=0.05, gt=0.0,
                                   description="Largest integration step (s)")
    trajectory_step: float = Field(default=0.05, gt=0.0,
                                   description="Step used for trajectory previews (s)")
    moving_threshold: float = Field(default=10.0, ge=0.0,
                                    description="Speed below which the puck counts as still")


class ViewportConfig(BaseModel):
    """Base canvas the simulation runs in, independent of display scaling."""
    model_config = ConfigDict(frozen=True)

    base_width: int = Field(default=375, gt=0)
    base_height: int = Field(default=812, gt=0)
    out_of_bounds_margin: float = Field(default=100.0, ge=0.0,
                                        description="Distance outside the canvas before a body is out of bounds")
    launch_offset: float = Field(default=150.0, ge=0.0,
                                 description="Launch point distance above the bottom edge")

    @property
    def canvas(self) -> Resolution:
        return Resolution(width=self.base_width, height=self.base_height)

    @property
    def launch_point(self) -> Point2D:
        """Default puck rest position: centred, ``launch_offset`` above the bottom."""
        return Point2D(x=self.base_width / 2, y=self.base_height - self.launch_offset)


class SpriteDimensions(BaseModel):
    """Sprite sheet size and per-frame size in pixels."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    frame_width: int = Field(gt=0)
    frame_height: int = Field(gt=0)

    @model_validator(mode='after')
    def validate_frame_fits_sheet(self) -> 'SpriteDimensions':
        """A frame cannot be larger than the sheet it is cut from."""
        if self.frame_width > self.width or self.frame_height > self.height:
            raise ValueError("Frame dimensions must fit inside the sprite sheet")
        return self


class AnimationDescriptor(BaseModel):
    """
    Static description of one animation state.

    Single-frame states with a ``duration`` are timed by the duration;
    everything else advances by ``fps``.
    """
    model_config = ConfigDict(frozen=True)

    sprite_sheet: str
    frames: int = Field(default=1, ge=1)
    fps: float = Field(default=8.0, gt=0.0)
    loop: bool = False
    duration: Optional[float] = Field(default=None, gt=0.0,
                                      description="Fixed duration in milliseconds")
    dimensions: SpriteDimensions

    @property
    def frame_interval(self) -> float:
        """Milliseconds per frame."""
        return 1000.0 / self.fps

    @property
    def is_timed(self) -> bool:
        """True when the state is timed by its duration rather than its fps."""
        return self.frames == 1 and self.duration is not None


def _square_sprite(name: str, fps: float, loop: bool = False,
                   duration: Optional[float] = None, width: int = 1024) -> AnimationDescriptor:
    return AnimationDescriptor(
        sprite_sheet=f"/assets/character/{name}.png",
        frames=1,
        fps=fps,
        loop=loop,
        duration=duration,
        dimensions=SpriteDimensions(width=width, height=1024,
                                    frame_width=width, frame_height=1024),
    )


def default_animation_states() -> Dict[AnimationState, AnimationDescriptor]:
    return {
        AnimationState.IDLE: _square_sprite("character-idle", fps=8, loop=True),
        AnimationState.WINDUP: _square_sprite("character-variation", fps=12, duration=200),
        AnimationState.HIT: _square_sprite("character-hit-a0b803", fps=16, duration=150, width=883),
        AnimationState.COOLDOWN: _square_sprite("character-variation", fps=10, duration=300),
    }


def default_transitions() -> Dict[AnimationState, List[AnimationState]]:
    return {
        AnimationState.IDLE: [AnimationState.WINDUP],
        AnimationState.WINDUP: [AnimationState.HIT],
        AnimationState.HIT: [AnimationState.COOLDOWN],
        AnimationState.COOLDOWN: [AnimationState.IDLE],
    }


class AnimationConfig(BaseModel):
    """
    Animation descriptors and the transition table.

    Validation guarantees that every AnimationState has a descriptor, so
    descriptor lookup never fails at runtime.
    """
    model_config = ConfigDict(frozen=True)

    base_path: str = "/assets/character"
    states: Dict[AnimationState, AnimationDescriptor] = Field(default_factory=default_animation_states)
    transitions: Dict[AnimationState, List[AnimationState]] = Field(default_factory=default_transitions)
    initial_state: AnimationState = AnimationState.IDLE

    @model_validator(mode='after')
    def validate_states_complete(self) -> 'AnimationConfig':
        """Every state needs a descriptor."""
        missing = [state.value for state in AnimationState if state not in self.states]
        if missing:
            raise ValueError(f"Missing animation descriptors for: {', '.join(missing)}")
        return self

    def descriptor(self, state: AnimationState) -> AnimationDescriptor:
        return self.states[state]

    def next_state(self, state: AnimationState) -> Optional[AnimationState]:
        """First listed transition out of ``state``, or None for a terminal state."""
        candidates = self.transitions.get(state) or []
        return candidates[0] if candidates else None


class ValueRange(BaseModel):
    """Closed interval [min, max] for uniform sampling."""
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode='after')
    def validate_order(self) -> 'ValueRange':
        if self.min > self.max:
            raise ValueError(f"Range min ({self.min}) must not exceed max ({self.max})")
        return self


class ParticleProfile(BaseModel):
    """
    Spawn parameters for one particle effect type.

    ``spread`` is the angular fan in degrees, centred on straight up.
    """
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    colors: List[Color] = Field(min_length=1)
    size: ValueRange
    velocity: ValueRange
    lifetime: ValueRange
    gravity: float = 0.0
    spread: float = Field(default=360.0, ge=0.0, le=360.0)

    @field_validator('lifetime')
    @classmethod
    def validate_lifetime_positive(cls, v: ValueRange) -> ValueRange:
        """Particles must live for some time or opacity is undefined."""
        if v.min <= 0:
            raise ValueError(f"Particle lifetime must be positive, got min={v.min}")
        return v


def default_particle_types() -> Dict[ParticleType, ParticleProfile]:
    return {
        ParticleType.GOAL: ParticleProfile(
            count=20,
            colors=['#81A7F1', '#FB393A', '#FFFFFF', '#FFD700'],
            size=ValueRange(min=3, max=8),
            velocity=ValueRange(min=100, max=300),
            lifetime=ValueRange(min=0.5, max=1.5),
            gravity=400,
            spread=360,
        ),
        ParticleType.COMBO: ParticleProfile(
            count=30,
            colors=['#FFD700', '#FFA500', '#FF6347', '#FFFFFF'],
            size=ValueRange(min=4, max=12),
            velocity=ValueRange(min=150, max=400),
            lifetime=ValueRange(min=0.8, max=2.0),
            gravity=300,
            spread=360,
        ),
        ParticleType.MISS: ParticleProfile(
            count=10,
            colors=['#808080', '#A0A0A0', '#606060'],
            size=ValueRange(min=2, max=5),
            velocity=ValueRange(min=50, max=150),
            lifetime=ValueRange(min=0.3, max=0.8),
            gravity=500,
            spread=180,
        ),
    }


class ParticleConfig(BaseModel):
    """Particle pool capacity, motion constants, and effect profiles."""
    model_config = ConfigDict(frozen=True)

    pool_capacity: int = Field(default=200, ge=0)
    drag: float = Field(default=0.99, gt=0.0, le=1.0,
                        description="Velocity multiplier applied every tick")
    fade_start: float = Field(default=0.7, ge=0.0, lt=1.0,
                              description="Fraction of lifetime before fading begins")
    types: Dict[ParticleType, ParticleProfile] = Field(default_factory=default_particle_types)


class MultiplierTier(BaseModel):
    """Score multiplier applied from ``min`` consecutive hits upward."""
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    multiplier: float = Field(gt=0.0)


def default_tiers() -> List[MultiplierTier]:
    return [
        MultiplierTier(min=20, multiplier=3.0),
        MultiplierTier(min=15, multiplier=2.0),
        MultiplierTier(min=10, multiplier=1.5),
        MultiplierTier(min=5, multiplier=1.2),
        MultiplierTier(min=0, multiplier=1.0),
    ]


class ComboConfig(BaseModel):
    """
    Combo milestones and multiplier tiers.

    Tiers are stored in descending order of ``min`` and must include a floor
    tier at 0, so the multiplier lookup is total.
    """
    model_config = ConfigDict(frozen=True)

    milestones: List[int] = Field(default_factory=lambda: [5, 10, 15, 20])
    tiers: List[MultiplierTier] = Field(default_factory=default_tiers, min_length=1)

    @field_validator('milestones')
    @classmethod
    def validate_milestones(cls, v: List[int]) -> List[int]:
        if any(m <= 0 for m in v):
            raise ValueError("Combo milestones must be positive")
        return sorted(set(v))

    @field_validator('tiers')
    @classmethod
    def validate_tiers(cls, v: List[MultiplierTier]) -> List[MultiplierTier]:
        ordered = sorted(v, key=lambda tier: tier.min, reverse=True)
        if ordered[-1].min != 0:
            raise ValueError("Multiplier tiers need a floor tier with min=0")
        if len({tier.min for tier in ordered}) != len(ordered):
            raise ValueError("Multiplier tier thresholds must be unique")
        return ordered


class TargetZone(BaseModel):
    """
    A scoring target.

    ``position`` is the target centre as a percentage (0-100) of the play
    field; ``width``/``height`` are in pixels.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    sprite: str = ""
    points: int = Field(ge=0)
    position: Point2D
    width: float = Field(default=50.0, gt=0.0)
    height: float = Field(default=50.0, gt=0.0)
    accuracy_bonus_max: int = Field(default=0, ge=0)

    @field_validator('position')
    @classmethod
    def validate_percentages(cls, v: Point2D) -> Point2D:
        if not (0.0 <= v.x <= 100.0 and 0.0 <= v.y <= 100.0):
            raise ValueError(f"Target position must be a percentage in [0, 100], got {v}")
        return v

    def center(self, play_field: Resolution) -> Point2D:
        """Target centre in pixels for the given play field."""
        return Point2D(x=play_field.width * self.position.x / 100.0,
                       y=play_field.height * self.position.y / 100.0)

    def bounds(self, play_field: Resolution) -> Rectangle:
        """Pixel hit box centred on the target."""
        return Rectangle.centered_at(self.center(play_field), self.width, self.height)


def default_target_zones() -> List[TargetZone]:
    return [
        TargetZone(id='top', sprite='/assets/targets/target-top.png', points=200,
                   position=Point2D(x=50, y=0), accuracy_bonus_max=50),
        TargetZone(id='middle-left', sprite='/assets/targets/target-middle.png', points=100,
                   position=Point2D(x=22, y=31.5), accuracy_bonus_max=30),
        TargetZone(id='middle-right', sprite='/assets/targets/target-middle.png', points=100,
                   position=Point2D(x=78, y=31.5), accuracy_bonus_max=30),
        TargetZone(id='bottom-left', sprite='/assets/targets/target-bottom-left.png', points=50,
                   position=Point2D(x=30, y=60), accuracy_bonus_max=10),
        TargetZone(id='bottom-right', sprite='/assets/targets/target-bottom-right.png', points=50,
                   position=Point2D(x=70, y=60), accuracy_bonus_max=10),
    ]


class TargetConfig(BaseModel):
    """Target zones and the play field their percentages refer to.

    When ``play_field`` is omitted the viewport's base canvas is used.
    """
    model_config = ConfigDict(frozen=True)

    zones: List[TargetZone] = Field(default_factory=default_target_zones)
    play_field: Optional[Resolution] = None

    @field_validator('zones')
    @classmethod
    def validate_unique_ids(cls, v: List[TargetZone]) -> List[TargetZone]:
        ids = [zone.id for zone in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Target zone ids must be unique")
        return v


class SessionConfig(BaseModel):
    """Game session rules."""
    model_config = ConfigDict(frozen=True)

    shots_per_game: Optional[int] = Field(
        default=None, ge=1,
        description="Shots before the game ends. None = endless"
    )
    default_label: str = "Player"


class GameProfile(BaseModel):
    """
    Complete game profile configuration.

    This is the root model for profile YAML files. Sections left out of a
    file fall back to the defaults.
    """
    model_config = ConfigDict(frozen=True)

    name: str = "default"
    description: str = ""
    version: str = "1.0.0"

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    particles: ParticleConfig = Field(default_factory=ParticleConfig)
    combo: ComboConfig = Field(default_factory=ComboConfig)
    targets: TargetConfig = Field(default_factory=TargetConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @property
    def play_field(self) -> Resolution:
        """Resolution the target percentages are measured against."""
        return self.targets.play_field or self.viewport.canvas
