"""Matching engine and strategies."""

from .engine import ReconciliationEngine
from .strategies import (
    MatchingStrategy,
    LinearScanStrategy,
    SortedIndexStrategy,
)

__all__ = [
    "ReconciliationEngine",
    "MatchingStrategy",
    "LinearScanStrategy",
    "SortedIndexStrategy",
]
