"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    MissingDataError,
    SourceReadError,
    StatementReadError,
    SpreadsheetReadError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import configure_logging, setup_logging

__all__ = [
    "ReconciliationError",
    "MissingDataError",
    "SourceReadError",
    "StatementReadError",
    "SpreadsheetReadError",
    "ConfigurationError",
    "ReportGenerationError",
    "configure_logging",
    "setup_logging",
]
