"""Report generation."""

from .text_report import TextReportGenerator

__all__ = ["TextReportGenerator"]
