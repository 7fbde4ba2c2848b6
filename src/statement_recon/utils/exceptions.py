"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class MissingDataError(ReconciliationError):
    """An operation was attempted before its required inputs exist."""

    pass


class SourceReadError(ReconciliationError):
    """A source file could not be read or decoded."""

    pass


class StatementReadError(SourceReadError):
    """Error reading a statement export."""

    pass


class SpreadsheetReadError(SourceReadError):
    """Error reading the expected-amounts workbook."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error writing the text report."""

    pass
