"""Data models for reconciliation."""

from .transaction import (
    TransactionRecord,
    ExpectedAmount,
    RowOutcome,
    MatchResult,
    ReconciliationResult,
    ReconciliationSummary,
)

__all__ = [
    "TransactionRecord",
    "ExpectedAmount",
    "RowOutcome",
    "MatchResult",
    "ReconciliationResult",
    "ReconciliationSummary",
]
