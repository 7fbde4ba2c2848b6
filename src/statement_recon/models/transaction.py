"""Data models for statement movements, expected amounts and match results."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TransactionRecord:
    """
    A single movement parsed from a statement export.

    ``date`` and ``description`` are kept exactly as they appear in the
    export; only ``amount`` takes part in matching.
    """

    date: str
    description: str

    # Signed amount as normalized from the export
    amount: float

    # Amount field as it appeared in the export, for audit display
    raw_amount_text: str

    # Name of the export the row came from and its 1-based line number
    source: str = ""
    line_number: int = 0

    @property
    def absolute_amount(self) -> float:
        """Unsigned amount used for matching."""
        return abs(self.amount)


@dataclass(frozen=True)
class ExpectedAmount:
    """An amount the operator expects to find among the movements."""

    # Always non-negative
    amount: float
    raw_text: str


@dataclass(frozen=True)
class RowOutcome:
    """Result of scanning one candidate data row: a record or a skip reason."""

    line_number: int
    record: Optional[TransactionRecord] = None
    skip_reason: Optional[str] = None

    @property
    def is_record(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class MatchResult:
    """An expected amount paired with the movement that satisfied it, if any."""

    expected: ExpectedAmount
    transaction: Optional[TransactionRecord] = None

    @property
    def is_matched(self) -> bool:
        return self.transaction is not None

    @property
    def difference(self) -> Optional[float]:
        """Absolute gap between the expected and matched amounts."""
        if self.transaction is None:
            return None
        return abs(self.transaction.absolute_amount - abs(self.expected.amount))


@dataclass
class ReconciliationSummary:
    """Summary of a completed reconciliation."""

    expected_count: int
    matched_count: int
    unmatched_count: int

    # Movements available for matching
    total_records: int = 0

    @property
    def match_rate(self) -> float:
        """Percentage of expected amounts that were matched."""
        if self.expected_count == 0:
            return 0.0
        return (self.matched_count / self.expected_count) * 100


@dataclass
class ReconciliationResult:
    """Partition of the expected amounts into matched and unmatched."""

    matched: list[MatchResult] = field(default_factory=list)
    unmatched: list[ExpectedAmount] = field(default_factory=list)
    total_records: int = 0

    @property
    def expected_count(self) -> int:
        return len(self.matched) + len(self.unmatched)

    @property
    def summary(self) -> ReconciliationSummary:
        return ReconciliationSummary(
            expected_count=self.expected_count,
            matched_count=len(self.matched),
            unmatched_count=len(self.unmatched),
            total_records=self.total_records,
        )
