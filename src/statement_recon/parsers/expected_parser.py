"""
Expected amount extraction from typed text or a decoded workbook grid.
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Sequence
import logging

from ..models.transaction import ExpectedAmount
from ..config import ReconConfig
from .amount import AmountNormalizer, format_amount

logger = logging.getLogger(__name__)

# Cells of these types never hold an amount
NON_MONETARY_CELL_TYPES = (bool, date, datetime, time, timedelta)


class ExpectedAmountParser:
    """Reads expected amounts from the operator's list or a spreadsheet grid."""

    def __init__(self, config: ReconConfig):
        self.config = config
        self.separator = config.amounts.token_separator
        self.normalizer = AmountNormalizer(config.amounts)

    def extract_from_text(self, text: str) -> list[ExpectedAmount]:
        """
        Parse a free-form block of comma and newline separated amounts.

        Order and duplicates are kept; tokens that are not numbers are
        dropped.

        Args:
            text: Operator-edited text block

        Returns:
            List of expected amounts, all non-negative
        """
        amounts: list[ExpectedAmount] = []

        for line in text.split("\n"):
            for token in line.split(self.separator):
                token = token.strip()
                if not token:
                    continue

                value = self.normalizer.normalize(token)
                if value is None:
                    logger.debug(f"Ignoring non-numeric token {token!r}")
                    continue

                amounts.append(ExpectedAmount(amount=abs(value), raw_text=token))

        logger.info(f"Parsed {len(amounts)} expected amounts")
        return amounts

    def extract_from_grid(self, grid: Iterable[Sequence[Any]]) -> list[float]:
        """
        Collect every positive amount found in a decoded worksheet.

        Args:
            grid: Rows of raw cell values

        Returns:
            Distinct positive amounts, largest first
        """
        values: set[float] = set()

        for row in grid:
            for cell in row:
                if cell is None or isinstance(cell, NON_MONETARY_CELL_TYPES):
                    continue

                value = self.normalizer.normalize(str(cell))
                if value is None:
                    continue

                # Negative cells are outflows, not amounts to look for
                if value > 0:
                    values.add(value)

        result = sorted(values, reverse=True)
        logger.info(f"Found {len(result)} distinct amounts in worksheet")
        return result

    def format_prefill(self, values: Iterable[float]) -> str:
        """Render grid amounts as the editable text block."""
        return ", ".join(format_amount(v) for v in values)
