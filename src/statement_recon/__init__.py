"""Bank statement reconciliation against expected amounts."""

__version__ = "0.1.0"
