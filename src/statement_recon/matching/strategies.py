"""
Amount lookup strategies for the reconciliation engine.
Every strategy returns the earliest movement (in original order) whose
amount lies within the tolerance, so they differ only in cost.
"""

from abc import ABC, abstractmethod
from bisect import bisect_left, bisect_right
from typing import AbstractSet, Optional, Sequence

from ..models.transaction import TransactionRecord


class MatchingStrategy(ABC):
    """Abstract base class for matching strategies."""

    def __init__(self, tolerance: float = 0.01):
        """
        Initialize with amount tolerance.

        Args:
            tolerance: Differences strictly below this count as equal
        """
        self.tolerance = tolerance

    def amounts_match(self, expected: float, observed: float) -> bool:
        """Compare two unsigned amounts under the tolerance."""
        return abs(expected - observed) < self.tolerance

    @abstractmethod
    def index(self, observed: Sequence[TransactionRecord]) -> None:
        """
        Prepare the pool of movements to search.

        Args:
            observed: Movements in original order
        """
        pass

    @abstractmethod
    def find_match(
        self, amount: float, excluded: AbstractSet[int] = frozenset()
    ) -> Optional[int]:
        """
        Find the first movement matching an expected amount.

        Args:
            amount: Unsigned expected amount
            excluded: Positions already taken (one-to-one pairing only)

        Returns:
            Position of the movement in the indexed pool, or None
        """
        pass


class LinearScanStrategy(MatchingStrategy):
    """Scans every movement in order and stops at the first hit."""

    def __init__(self, tolerance: float = 0.01):
        super().__init__(tolerance)
        self._amounts: list[float] = []

    def index(self, observed: Sequence[TransactionRecord]) -> None:
        self._amounts = [txn.absolute_amount for txn in observed]

    def find_match(
        self, amount: float, excluded: AbstractSet[int] = frozenset()
    ) -> Optional[int]:
        for position, observed in enumerate(self._amounts):
            if position in excluded:
                continue
            if self.amounts_match(amount, observed):
                return position
        return None


class SortedIndexStrategy(MatchingStrategy):
    """
    Binary-searches a sorted copy of the movement amounts.

    The search window is padded and then filtered with the exact tolerance
    test, so float rounding at the window edges cannot change the answer.
    """

    def __init__(self, tolerance: float = 0.01):
        super().__init__(tolerance)
        self._keys: list[float] = []
        self._positions: list[int] = []

    def index(self, observed: Sequence[TransactionRecord]) -> None:
        entries = sorted(
            (txn.absolute_amount, position) for position, txn in enumerate(observed)
        )
        self._keys = [amount for amount, _ in entries]
        self._positions = [position for _, position in entries]

    def find_match(
        self, amount: float, excluded: AbstractSet[int] = frozenset()
    ) -> Optional[int]:
        lo = bisect_left(self._keys, amount - 2 * self.tolerance)
        hi = bisect_right(self._keys, amount + 2 * self.tolerance)

        best: Optional[int] = None
        for i in range(lo, hi):
            position = self._positions[i]
            if position in excluded or not self.amounts_match(amount, self._keys[i]):
                continue
            if best is None or position < best:
                best = position
        return best


STRATEGIES: dict[str, type[MatchingStrategy]] = {
    "linear": LinearScanStrategy,
    "sorted_index": SortedIndexStrategy,
}
