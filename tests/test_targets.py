"""Tests for target zones, hit testing and goal scoring."""

import pytest
from pydantic import ValidationError

from models import Point2D, Resolution
from models.hockey import TargetConfig, TargetZone
from tapper.engine import TargetField, TargetHit, score_goal

CANVAS = Resolution(width=375, height=812)


@pytest.fixture
def field():
    return TargetField(TargetConfig().zones, CANVAS)


def _zone(points: int, bonus: int) -> TargetZone:
    return TargetZone(id='z', points=points, position=Point2D(x=50, y=50),
                      accuracy_bonus_max=bonus)


class TestTargetField:
    """Test zone resolution and hit testing."""

    def test_five_default_zones(self, field):
        assert len(field) == 5
        assert [z.id for z in field.zones] == [
            'top', 'middle-left', 'middle-right', 'bottom-left', 'bottom-right',
        ]

    def test_top_bounds(self, field):
        """Percent positions resolve to centred pixel boxes."""
        rect = field.bounds('top')
        assert rect.x == pytest.approx(162.5)
        assert rect.y == pytest.approx(-25.0)
        assert rect.width == 50
        assert rect.center == Point2D(x=187.5, y=0.0)

    def test_middle_right_centre(self, field):
        rect = field.bounds('middle-right')
        assert rect.center.x == pytest.approx(292.5)
        assert rect.center.y == pytest.approx(255.78)

    def test_unknown_zone(self, field):
        with pytest.raises(KeyError):
            field.bounds('penalty-box')

    def test_dead_centre_hit(self, field):
        hit = field.hit_test(Point2D(x=187.5, y=0.0))
        assert hit is not None
        assert hit.zone.id == 'top'
        assert hit.distance == pytest.approx(0.0)
        assert hit.accuracy == pytest.approx(1.0)

    def test_corner_is_inside(self, field):
        """Edges count as hits at the lowest accuracy."""
        hit = field.hit_test(Point2D(x=212.5, y=25.0))
        assert hit is not None
        assert hit.distance == pytest.approx(1.0)

    def test_miss(self, field):
        assert field.hit_test(Point2D(x=187.5, y=400.0)) is None
        assert field.hit_test(Point2D(x=187.5, y=662.0)) is None

    def test_custom_play_field(self):
        """Zones scale with the play field."""
        field = TargetField(TargetConfig().zones, Resolution(width=750, height=1624))
        assert field.bounds('top').center == Point2D(x=375.0, y=0.0)


class TestScoreGoal:
    """Test goal points."""

    def test_perfect_top(self):
        zone = _zone(200, 50)
        assert score_goal(TargetHit(zone=zone, distance=0.0)) == 250

    def test_edge_top(self):
        zone = _zone(200, 50)
        assert score_goal(TargetHit(zone=zone, distance=1.0)) == 200

    def test_multiplier(self):
        zone = _zone(200, 50)
        assert score_goal(TargetHit(zone=zone, distance=0.0), 1.5) == 375

    def test_rounds_half_up(self):
        """82.5 rounds to 83."""
        zone = _zone(50, 10)
        assert score_goal(TargetHit(zone=zone, distance=0.5), 1.5) == 83

    def test_partial_accuracy(self):
        zone = _zone(100, 30)
        assert score_goal(TargetHit(zone=zone, distance=0.5), 1.2) == 138


class TestTargetConfig:
    """Test target validation."""

    def test_position_must_be_percentage(self):
        with pytest.raises(ValidationError):
            TargetZone(id='bad', points=10, position=Point2D(x=120, y=0))

    def test_unique_ids(self):
        zone = _zone(10, 0)
        with pytest.raises(ValidationError):
            TargetConfig(zones=[zone, zone])
