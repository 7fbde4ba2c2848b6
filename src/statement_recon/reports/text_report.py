"""
Plain-text report generator for reconciliation results.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence
import logging

from ..models.transaction import (
    TransactionRecord,
    ExpectedAmount,
    MatchResult,
    ReconciliationSummary,
)
from ..config import ReconConfig
from ..parsers.amount import format_amount
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class TextReportGenerator:
    """Renders a reconciliation into a fixed-layout text document."""

    def __init__(self, config: ReconConfig):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config
        self.report_config = config.output.report

    def format(
        self,
        summary: ReconciliationSummary,
        matched: Sequence[MatchResult],
        unmatched: Sequence[ExpectedAmount],
        records: Sequence[TransactionRecord],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Build the report text.

        Args:
            summary: Reconciliation summary
            matched: Matched expected amounts with their movements
            unmatched: Expected amounts with no movement
            records: Every movement from every export, in load order
            generated_at: Timestamp printed in the header (defaults to now)

        Returns:
            The complete report
        """
        generated_at = generated_at or datetime.now()
        rule = "=" * self.report_config.rule_width

        lines = [
            rule,
            self.report_config.title,
            rule,
            "",
            f"Date/Time: {generated_at.strftime(TIMESTAMP_FORMAT)}",
            "",
        ]

        lines.extend(self._section("SUMMARY:", 20, self._summary_lines(summary)))

        if unmatched:
            lines.extend(
                self._section(
                    "AMOUNTS NOT FOUND:",
                    30,
                    [
                        f"{i}. {self._money(val.amount)} ('{val.raw_text}')"
                        for i, val in enumerate(unmatched, start=1)
                    ],
                )
            )

        if matched:
            lines.extend(
                self._section(
                    "MATCHES FOUND:",
                    35,
                    [
                        f"{i}. {self._money(match.expected.amount)} → "
                        f"{match.transaction.date} - {match.transaction.description}"
                        for i, match in enumerate(matched, start=1)
                        if match.transaction is not None
                    ],
                )
            )

        if records:
            lines.extend(
                self._section(
                    "ALL STATEMENT MOVEMENTS:",
                    40,
                    [
                        f"{i}. {txn.date} - {txn.description} - {self._money(txn.amount)}"
                        for i, txn in enumerate(records, start=1)
                    ],
                )
            )

        return "\n".join(lines).rstrip("\n") + "\n"

    def _summary_lines(self, summary: ReconciliationSummary) -> list[str]:
        return [
            f"Total expected amounts: {summary.expected_count}",
            f"Found: {summary.matched_count}",
            f"Not found: {summary.unmatched_count}",
            f"Match rate: {summary.match_rate:.1f}%",
        ]

    def _section(self, heading: str, underline: int, body: list[str]) -> list[str]:
        return [heading, "-" * underline, *body, ""]

    def _money(self, value: float) -> str:
        return f"{format_amount(value)}{self.report_config.currency_symbol}"

    def report_filename(self, on_date: Optional[date] = None) -> str:
        """
        Build the date-stamped report file name.

        Args:
            on_date: Date to stamp (defaults to today)

        Returns:
            File name such as ``report_extratos_2024-05-31.txt``
        """
        on_date = on_date or date.today()
        return self.report_config.filename_template.format(date=on_date.isoformat())

    def write_report(self, content: str, output_path: Path) -> Path:
        """
        Write the report to disk.

        Args:
            content: Report text
            output_path: Destination file

        Returns:
            Path to the written report

        Raises:
            ReportGenerationError: If the file cannot be written
        """
        logger.info(f"Writing report: {output_path}")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding=self.report_config.encoding) as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write report: {e}")
            raise ReportGenerationError(f"Failed to write report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path
