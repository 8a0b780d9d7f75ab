"""
Shared primitive data types for the simulation core.

This module provides the geometric and color types used by the physics
engine, the particle simulator, and the target field.
"""

import math
from typing import Any, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, velocities, and offsets.

    Screen-space convention: x grows rightward, y grows downward.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> vel = Point2D(x=-50.0, y=25.0)  # Moving left and down
        >>> (pos + vel.scale(2.0)).x
        0.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> 'Point2D':
        """Origin / zero vector."""
        return cls(x=0.0, y=0.0)

    @property
    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def scale(self, factor: float) -> 'Point2D':
        """Return this vector multiplied by a scalar."""
        return Point2D(x=self.x * factor, y=self.y * factor)

    def distance_to(self, other: 'Point2D') -> float:
        """Distance between two points."""
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def as_tuple(self) -> Tuple[float, float]:
        """Return point as (x, y) tuple for pygame compatibility."""
        return (self.x, self.y)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(x=self.x - other.x, y=self.y - other.y)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


# Velocities read better as vectors
Vector2D = Point2D


class Resolution(BaseModel):
    """Pixel dimensions of a play field or canvas.

    Attributes:
        width: Width in pixels (must be positive)
        height: Height in pixels (must be positive)

    Examples:
        >>> canvas = Resolution(width=375, height=812)
        >>> round(canvas.aspect_ratio, 3)
        0.462
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width / height)."""
        return self.width / self.height

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Resolution({self.width}x{self.height})"


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All color components must be in the range [0, 255] inclusive. Colors can
    be written as ``#RRGGBB`` / ``#RRGGBBAA`` strings anywhere a Color field
    is declared.

    Attributes:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)
        a: Alpha/opacity component (0-255), where 255 is fully opaque

    Examples:
        >>> Color.from_hex('#81A7F1').as_rgb_tuple
        (129, 167, 241)
    """
    r: int
    g: int
    b: int
    a: int = 255

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @model_validator(mode='before')
    @classmethod
    def parse_hex_string(cls, data: Any) -> Any:
        """Accept ``#RRGGBB`` / ``#RRGGBBAA`` strings as input."""
        if not isinstance(data, str):
            return data
        digits = data.strip().lstrip('#')
        if len(digits) not in (6, 8):
            raise ValueError(f'Hex color must have 6 or 8 digits, got {data!r}')
        try:
            components = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            raise ValueError(f'Invalid hex color {data!r}') from None
        return {
            'r': components[0],
            'g': components[1],
            'b': components[2],
            'a': components[3] if len(components) == 4 else 255,
        }

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse a ``#RRGGBB`` or ``#RRGGBBAA`` string.

        Raises:
            ValidationError: If the string is not a valid hex color
        """
        return cls.model_validate(value)

    @computed_field
    @property
    def hex(self) -> str:
        """Color as ``#RRGGBB`` (alpha omitted when opaque)."""
        text = f'#{self.r:02X}{self.g:02X}{self.b:02X}'
        if self.a != 255:
            text += f'{self.a:02X}'
        return text

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return color as RGBA tuple for pygame compatibility."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    def with_opacity(self, opacity: float) -> 'Color':
        """Return a copy whose alpha is scaled by ``opacity`` (0.0-1.0)."""
        opacity = max(0.0, min(1.0, opacity))
        return Color(r=self.r, g=self.g, b=self.b, a=int(round(self.a * opacity)))

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Color({self.hex})"


class Rectangle(BaseModel):
    """Immutable rectangle defined by its top-left corner and dimensions.

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of rectangle (must be positive)
        height: Height of rectangle (must be positive)

    Examples:
        >>> rect = Rectangle(x=100.0, y=100.0, width=50.0, height=50.0)
        >>> rect.contains_point(Point2D(x=125.0, y=125.0))
        True
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @classmethod
    def centered_at(cls, center: Point2D, width: float, height: float) -> 'Rectangle':
        """Build a rectangle of the given size centred on ``center``."""
        return cls(x=center.x - width / 2, y=center.y - height / 2,
                   width=width, height=height)

    @computed_field
    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(x=self.x + self.width / 2, y=self.y + self.height / 2)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains_point(self, point: Point2D) -> bool:
        """Check if a point is inside or on the boundary of the rectangle."""
        return (self.x <= point.x <= self.right and
                self.y <= point.y <= self.bottom)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
