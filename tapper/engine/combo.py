"""
Combo tracking for consecutive goals.

Each goal extends the streak and each miss breaks it. The streak maps to a
score multiplier through descending thresholds, and a few streak lengths
are milestones that earn an extra celebration.

Default tiers:
    0-4 hits:   1.0x
    5-9 hits:   1.2x
    10-14 hits: 1.5x
    15-19 hits: 2.0x
    20+ hits:   3.0x

Examples:
    >>> combo = ComboTracker()
    >>> [combo.increment() for _ in range(5)]
    [None, None, None, None, 5]
    >>> combo.multiplier
    1.2
    >>> combo.reset()
    >>> combo.count
    0
"""

from typing import Optional

from models import ComboStats
from models.hockey import ComboConfig
from tapper.logging import get_logger

log = get_logger('combo')


class ComboTracker:
    """Hit-streak counter with derived multiplier and milestone detection.

    The multiplier is recomputed from the count on every read, so it can
    never drift out of step with the streak.

    Attributes:
        config: Milestones and multiplier tiers
    """

    def __init__(self, config: Optional[ComboConfig] = None):
        """Initialize with an empty streak.

        Args:
            config: Combo configuration. Defaults to the standard tiers.
        """
        self.config = config or ComboConfig()
        self._count = 0
        self._max_count = 0

    @property
    def count(self) -> int:
        """Current consecutive hit streak."""
        return self._count

    @property
    def max_count(self) -> int:
        """Best streak since the tracker was created."""
        return self._max_count

    @property
    def multiplier(self) -> float:
        """Multiplier for the current streak (first matching tier wins)."""
        return self.multiplier_for(self._count)

    def multiplier_for(self, count: int) -> float:
        """Multiplier for an arbitrary streak length."""
        for tier in self.config.tiers:
            if count >= tier.min:
                return tier.multiplier
        return 1.0

    def increment(self) -> Optional[int]:
        """Record a successful hit.

        Returns:
            The new count if it is a milestone, otherwise None
        """
        self._count += 1
        self._max_count = max(self._max_count, self._count)

        if self.has_milestone():
            log.info("Combo milestone reached: %d (x%.1f)", self._count, self.multiplier)
            return self._count
        return None

    def reset(self) -> None:
        """Break the streak. The best streak is kept."""
        if self._count:
            log.debug("Combo broken at %d", self._count)
        self._count = 0

    def has_milestone(self) -> bool:
        """Whether the current count is a milestone."""
        return self._count in self.config.milestones

    def get_stats(self) -> ComboStats:
        """Immutable snapshot of the tracker."""
        return ComboStats(
            count=self._count,
            max_count=self._max_count,
            multiplier=self.multiplier,
        )

    def __repr__(self) -> str:
        return f"ComboTracker({self.get_stats()!r})"

    def __str__(self) -> str:
        return str(self.get_stats())
