"""
Amount matching engine for statement reconciliation.
Pairs each expected amount with the first movement carrying that amount.
"""

from datetime import datetime
from typing import Sequence
import logging

from ..models.transaction import (
    TransactionRecord,
    ExpectedAmount,
    MatchResult,
    ReconciliationResult,
    ReconciliationSummary,
)
from ..config import ReconConfig
from ..utils.exceptions import MissingDataError
from .strategies import MatchingStrategy, STRATEGIES

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """
    Main reconciliation engine.

    Expected amounts are processed in input order. Each one takes the first
    movement whose unsigned amount is within the tolerance. By default a
    movement stays in the pool after it is used, so several equal expected
    amounts can all point at the same movement.
    """

    def __init__(self, config: ReconConfig):
        """
        Initialize the reconciliation engine.

        Args:
            config: Application configuration
        """
        self.config = config
        self.settings = config.matching
        self.strategy = self._build_strategy()

    def _build_strategy(self) -> MatchingStrategy:
        """Instantiate the configured lookup strategy."""
        strategy_cls = STRATEGIES[self.settings.strategy]
        logger.debug(
            f"Using {strategy_cls.__name__} with tolerance {self.settings.tolerance}"
        )
        return strategy_cls(tolerance=self.settings.tolerance)

    def reconcile(
        self,
        expected: Sequence[ExpectedAmount],
        observed: Sequence[TransactionRecord],
    ) -> ReconciliationResult:
        """
        Match expected amounts against statement movements.

        Args:
            expected: Expected amounts in operator order
            observed: Movements in export order

        Returns:
            ReconciliationResult with matched and unmatched partitions

        Raises:
            MissingDataError: If there are no movements to match against
        """
        if not observed:
            raise MissingDataError(
                "No statement movements loaded; process the statement exports first"
            )

        start_time = datetime.now()
        logger.info(
            f"Starting reconciliation: {len(expected)} expected amounts, "
            f"{len(observed)} movements"
        )

        self.strategy.index(observed)
        taken: set[int] = set()

        result = ReconciliationResult(total_records=len(observed))

        for expected_amount in expected:
            position = self.strategy.find_match(abs(expected_amount.amount), taken)

            if position is None:
                result.unmatched.append(expected_amount)
                continue

            if not self.settings.reuse_transactions:
                taken.add(position)

            match = MatchResult(expected=expected_amount, transaction=observed[position])
            logger.debug(
                f"{expected_amount.raw_text!r} matched movement {position + 1} "
                f"(difference {match.difference:.4f})"
            )
            result.matched.append(match)

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Reconciliation complete in {elapsed:.2f}s: {len(result.matched)} matched, "
            f"{len(result.unmatched)} unmatched"
        )

        return result

    def generate_summary(self, result: ReconciliationResult) -> ReconciliationSummary:
        """
        Generate a summary of the reconciliation results.

        Args:
            result: Completed reconciliation

        Returns:
            Reconciliation summary object
        """
        summary = result.summary
        logger.info(
            f"Match rate {summary.match_rate:.1f}% "
            f"({summary.matched_count}/{summary.expected_count})"
        )
        return summary
