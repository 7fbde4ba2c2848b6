"""Parsers for statement exports, expected amounts and workbooks."""

from .amount import AmountNormalizer, normalize_amount, format_amount
from .statement_parser import StatementParser
from .expected_parser import ExpectedAmountParser
from .workbook_reader import read_workbook_grid

__all__ = [
    "AmountNormalizer",
    "normalize_amount",
    "format_amount",
    "StatementParser",
    "ExpectedAmountParser",
    "read_workbook_grid",
]
