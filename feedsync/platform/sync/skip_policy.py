"""Skip policy for dormant entities.

An entity that keeps coming back empty is scanned less and less often: after
``n`` consecutive empty runs it is scanned with probability
``max(floor, decay ** n)``. Entities with recent activity (``n == 0``) are
always scanned, and the floor keeps every entity on a nonzero re-check rate.
"""

import random
from typing import Callable, Optional


class SkipPolicy:
    """Decides whether an entity is scanned in this run."""

    def __init__(
        self,
        decay: float = 0.75,
        floor: float = 0.05,
        rng: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize the policy.

        Args:
            decay: Per-empty-run multiplier of the scan probability
            floor: Lowest scan probability
            rng: Source of uniform floats in [0, 1), ``random.random`` by default
        """
        if not 0 < floor <= decay <= 1:
            raise ValueError("Expected 0 < floor <= decay <= 1")
        self.decay = decay
        self.floor = floor
        self._rng = rng or random.random

    def run_probability(self, consecutive_empty_runs: int) -> float:
        """Probability that an entity with this history is scanned."""
        if consecutive_empty_runs <= 0:
            return 1.0
        return max(self.floor, self.decay**consecutive_empty_runs)

    def should_run(self, consecutive_empty_runs: int) -> bool:
        """Whether to scan an entity with ``consecutive_empty_runs`` empty scans."""
        probability = self.run_probability(consecutive_empty_runs)
        if probability >= 1.0:
            return True
        return self._rng() < probability
