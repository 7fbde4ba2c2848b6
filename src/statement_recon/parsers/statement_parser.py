"""
Bank statement export parser.
Extracts movements from semicolon-delimited statement exports.
"""

from pathlib import Path
from typing import Iterator, Optional
import logging

from ..models.transaction import RowOutcome, TransactionRecord
from ..config import ReconConfig
from ..utils.exceptions import StatementReadError
from .amount import AmountNormalizer

logger = logging.getLogger(__name__)


class StatementParser:
    """
    Parser for delimited bank statement exports.

    Exports typically open with account metadata lines; everything before
    the column header row is ignored. Rows after the header that cannot be
    read are skipped rather than failing the whole file.
    """

    def __init__(self, config: ReconConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.settings = config.input.statement
        self.normalizer = AmountNormalizer(config.amounts)

    def parse_file(self, file_path: Path) -> list[TransactionRecord]:
        """
        Read a statement export and return its movements.

        Args:
            file_path: Path to the export

        Returns:
            List of transaction records in file order

        Raises:
            StatementReadError: If the file cannot be read or decoded
        """
        logger.info(f"Parsing statement export: {file_path}")
        return self.extract_records(self.read_text(file_path), source=file_path.name)

    def read_text(self, file_path: Path) -> str:
        """
        Decode a statement export with the configured encoding.

        Raises:
            StatementReadError: If the file cannot be read or decoded
        """
        try:
            with open(file_path, "r", encoding=self.settings.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logger.error(f"Failed to read statement export: {e}")
            raise StatementReadError(
                f"Failed to read statement export {file_path}: {e}"
            ) from e

    def extract_records(self, text: str, source: str = "") -> list[TransactionRecord]:
        """
        Extract movements from the decoded text of one export.

        Args:
            text: Full export content
            source: Name used to tag the records (usually the file name)

        Returns:
            List of transaction records in input order
        """
        records: list[TransactionRecord] = []

        for outcome in self.scan_rows(text, source):
            if outcome.is_record:
                records.append(outcome.record)
            else:
                logger.debug(
                    f"{source or 'statement'} line {outcome.line_number}: "
                    f"skipped ({outcome.skip_reason})"
                )

        logger.info(f"Extracted {len(records)} movements from {source or 'statement'}")
        return records

    def scan_rows(self, text: str, source: str = "") -> Iterator[RowOutcome]:
        """
        Yield one outcome per candidate data row after the header.

        Args:
            text: Full export content
            source: Name used to tag the records

        Yields:
            RowOutcome holding either a record or the reason it was skipped
        """
        header_found = False
        separator = self.settings.field_separator

        for line_number, line in enumerate(text.split("\n"), start=1):
            if self._is_header(line):
                header_found = True
                continue

            if not header_found or not line.strip() or separator not in line:
                continue

            record, reason = self._parse_row(line, source, line_number)
            yield RowOutcome(line_number=line_number, record=record, skip_reason=reason)

        if not header_found:
            logger.warning(
                f"No header row found in {source or 'statement'}; "
                f"expected labels: {', '.join(self.settings.header_labels)}"
            )

    def _is_header(self, line: str) -> bool:
        """Check whether a line carries every configured header label."""
        return all(label in line for label in self.settings.header_labels)

    def _parse_row(
        self, line: str, source: str, line_number: int
    ) -> tuple[Optional[TransactionRecord], Optional[str]]:
        """
        Convert one data row to a TransactionRecord.

        Args:
            line: Raw data line
            source: Export name
            line_number: 1-based line number within the export

        Returns:
            Tuple of (record, None) or (None, skip reason)
        """
        parts = line.split(self.settings.field_separator)
        needed = max(
            self.settings.min_fields,
            self.settings.date_field + 1,
            self.settings.description_field + 1,
            self.settings.amount_field + 1,
        )
        if len(parts) < needed:
            return None, f"{len(parts)} fields, need {needed}"

        date_text = parts[self.settings.date_field].strip()
        description = parts[self.settings.description_field].strip()
        amount_text = parts[self.settings.amount_field].strip()

        amount = self.normalizer.normalize(amount_text)
        if amount is None:
            return None, f"unreadable amount {amount_text!r}"
        if not date_text:
            return None, "empty date"
        if not description:
            return None, "empty description"

        record = TransactionRecord(
            date=date_text,
            description=description,
            amount=amount,
            raw_amount_text=amount_text,
            source=source,
            line_number=line_number,
        )
        return record, None
