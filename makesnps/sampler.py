"""Spacing-constrained random selection of SNP positions."""
from typing import Optional

import numpy as np

from .errors import InfeasibleConfiguration, InvalidConfiguration

DEFAULT_MAX_RESTARTS = 1000
DEFAULT_MAX_DRAWS = 500_000


def max_positions(length: int, min_distance: int) -> int:
    """Largest number of positions in [0, length) that can be min_distance apart."""
    return (length - 1) // min_distance + 1


class PositionSampler:
    """Rejection sampler for positions in [0, length) at least min_distance apart.

    Accepted positions are kept in an ascending array. Each candidate is drawn
    uniformly from [0, length), its insertion point is found by binary search
    and it is accepted only if both neighbours are far enough away.

    Rejection sampling degrades as the sequence fills up: once no gap is wide
    enough for another position, further draws can never succeed. Three bounds
    keep that from hanging the run:

    * draws for a single position are capped at ``max_attempts``;
    * when the accepted set is jammed (no free slot remains) before ``count``
      positions are placed, the set is discarded and sampling starts over, at
      most ``max_restarts`` times;
    * draws across all passes are capped at ``max_draws``, by default
      ``max(DEFAULT_MAX_DRAWS, 100 * count)``. A count at or near capacity jams
      on nearly every pass, and each pass on a long sequence costs hundreds of
      thousands of draws.

    Exceeding any bound raises InfeasibleConfiguration.
    """

    def __init__(self, length: int, min_distance: int, rng: np.random.Generator,
                 max_attempts: Optional[int] = None,
                 max_restarts: int = DEFAULT_MAX_RESTARTS,
                 max_draws: Optional[int] = None):
        if length < 1:
            raise InvalidConfiguration(f"Sequence length must be at least 1 (got {length})")
        if min_distance < 1:
            raise InvalidConfiguration(f"Minimum distance must be at least 1 (got {min_distance})")
        self.length = length
        self.min_distance = min_distance
        self.rng = rng
        self.max_attempts = max_attempts if max_attempts is not None else max(1000, 50 * length)
        self.max_restarts = max_restarts
        self.max_draws = max_draws
        self._draw_budget = 0
        self.restarts = 0
        self.draws = 0

        self._positions = np.empty(0, dtype=np.int64)
        self._size = 0

    def insertion_point(self, p: int) -> int:
        """Index at which p would be inserted, or -1 if p is too close to a neighbour."""
        size = self._size
        if size == 0:
            return 0
        accepted = self._positions
        d = self.min_distance
        i = int(np.searchsorted(accepted[:size], p, side="left"))
        if i == size:
            ok = p - accepted[size - 1] >= d
        elif i == 0:
            ok = accepted[0] - p >= d
        else:
            ok = accepted[i] - p >= d and p - accepted[i - 1] >= d
        return i if ok else -1

    def position_ok(self, p: int) -> bool:
        """True if p keeps at least min_distance from every accepted position."""
        return self.insertion_point(p) >= 0

    def has_room(self) -> bool:
        """True if at least one more position could still be accepted."""
        size = self._size
        if size == 0:
            return True
        accepted = self._positions[:size]
        d = self.min_distance
        if accepted[0] >= d or accepted[-1] + d <= self.length - 1:
            return True
        return bool(size > 1 and np.any(np.diff(accepted) >= 2 * d))

    def _insert(self, p: int, i: int) -> None:
        self._positions[i + 1:self._size + 1] = self._positions[i:self._size]
        self._positions[i] = p
        self._size += 1

    def _draw_position(self):
        """Draw until a candidate is accepted; returns (position, insertion index)."""
        for _ in range(self.max_attempts):
            if self.draws >= self._draw_budget:
                raise InfeasibleConfiguration(
                    f"Gave up after {self.draws} random draws ({self.restarts} restarts) with "
                    f"{self._size} SNPs placed; use fewer SNPs or a smaller minimum distance"
                )
            p = int(self.rng.integers(0, self.length))
            self.draws += 1
            i = self.insertion_point(p)
            if i >= 0:
                return p, i
        raise InfeasibleConfiguration(
            f"Could not place SNP {self._size + 1} at least {self.min_distance} bp from the others "
            f"after {self.max_attempts} attempts"
        )

    def sample(self, count: int) -> np.ndarray:
        """Choose count positions; returns them as an ascending read-only array."""
        if count < 0:
            raise InvalidConfiguration(f"SNP count must not be negative (got {count})")
        capacity = max_positions(self.length, self.min_distance)
        if count > capacity:
            raise InfeasibleConfiguration(
                f"Cannot place {count} SNPs at least {self.min_distance} bp apart in a "
                f"sequence of {self.length} bp (at most {capacity} fit)"
            )

        self._positions = np.zeros(count, dtype=np.int64)
        self._size = 0
        self.restarts = 0
        self.draws = 0
        self._draw_budget = (self.max_draws if self.max_draws is not None
                             else max(DEFAULT_MAX_DRAWS, 100 * count))

        while self._size < count:
            self._insert(*self._draw_position())
            if self._size < count and not self.has_room():
                if self.restarts >= self.max_restarts:
                    raise InfeasibleConfiguration(
                        f"Sampling jammed at {self._size} of {count} SNPs "
                        f"{self.max_restarts + 1} times; use fewer SNPs or a smaller minimum distance"
                    )
                self.restarts += 1
                self._size = 0

        result = self._positions[:self._size].copy()
        result.flags.writeable = False
        return result


def sample_positions(length: int, count: int, min_distance: int, rng: np.random.Generator,
                     max_attempts: Optional[int] = None,
                     max_restarts: int = DEFAULT_MAX_RESTARTS,
                     max_draws: Optional[int] = None) -> np.ndarray:
    sampler = PositionSampler(length, min_distance, rng, max_attempts=max_attempts,
                              max_restarts=max_restarts, max_draws=max_draws)
    return sampler.sample(count)
