"""Target zones and goal scoring.

Zones are configured as percentages of the play field and resolved to
pixel hit boxes once, when the field is built. A goal is worth the zone's
points plus an accuracy bonus that shrinks linearly from the zone centre
to its corners, all scaled by the combo multiplier.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from models import Point2D, Rectangle, Resolution
from models.hockey import TargetZone


@dataclass(frozen=True)
class TargetHit:
    """A point landing inside a target zone.

    Attributes:
        zone: The zone that was hit
        distance: Normalised distance from the zone centre,
            0.0 at the centre and 1.0 at a corner
    """
    zone: TargetZone
    distance: float

    @property
    def accuracy(self) -> float:
        return 1.0 - self.distance


def score_goal(hit: TargetHit, multiplier: float = 1.0) -> int:
    """Points for a goal, rounded half up.

    Examples:
        >>> zone = TargetZone(id='top', points=200, position=Point2D(x=50, y=0), accuracy_bonus_max=50)
        >>> score_goal(TargetHit(zone=zone, distance=0.0), 1.5)
        375
    """
    raw = (hit.zone.points + hit.zone.accuracy_bonus_max * hit.accuracy) * multiplier
    return int(math.floor(raw + 0.5))


class TargetField:
    """Resolved target zones for one play field.

    Zones are tested in configuration order; the first zone containing the
    point wins.
    """

    def __init__(self, zones: List[TargetZone], play_field: Resolution):
        self.play_field = play_field
        self._zones: List[Tuple[TargetZone, Rectangle]] = [
            (zone, zone.bounds(play_field)) for zone in zones
        ]

    @property
    def zones(self) -> List[TargetZone]:
        return [zone for zone, _ in self._zones]

    def bounds(self, zone_id: str) -> Rectangle:
        """Pixel hit box of a zone.

        Raises:
            KeyError: If no zone has that id
        """
        for zone, rect in self._zones:
            if zone.id == zone_id:
                return rect
        raise KeyError(zone_id)

    def hit_test(self, point: Point2D) -> Optional[TargetHit]:
        """Find the zone containing ``point``, if any."""
        for zone, rect in self._zones:
            if rect.contains_point(point):
                half_diagonal = math.hypot(rect.width / 2, rect.height / 2)
                distance = min(1.0, point.distance_to(rect.center) / half_diagonal)
                return TargetHit(zone=zone, distance=distance)
        return None

    def __len__(self) -> int:
        return len(self._zones)
