"""
Reconciliation session and the parse -> reconcile -> report workflow.

The session is a plain value owned by the caller. Workflow operations take a
session and return an updated copy; a failing operation leaves the caller's
session exactly as it was.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Optional
import logging

from .models.transaction import (
    TransactionRecord,
    ExpectedAmount,
    ReconciliationResult,
    ReconciliationSummary,
)
from .config import ReconConfig
from .matching.engine import ReconciliationEngine
from .parsers.statement_parser import StatementParser
from .parsers.expected_parser import ExpectedAmountParser
from .reports.text_report import TextReportGenerator
from .utils.exceptions import MissingDataError

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationSession:
    """Everything accumulated during one reconciliation run."""

    records: list[TransactionRecord] = field(default_factory=list)
    expected: list[ExpectedAmount] = field(default_factory=list)
    result: Optional[ReconciliationResult] = None

    # (source name, movement count) per loaded export, in load order
    sources: list[tuple[str, int]] = field(default_factory=list)

    @property
    def summary(self) -> Optional[ReconciliationSummary]:
        return self.result.summary if self.result is not None else None

    def reset(self) -> None:
        """Discard all loaded data and results."""
        self.records.clear()
        self.expected.clear()
        self.sources.clear()
        self.result = None


class ReconciliationWorkflow:
    """Runs the reconciliation steps against a caller-owned session."""

    def __init__(self, config: ReconConfig):
        self.config = config
        self.statement_parser = StatementParser(config)
        self.expected_parser = ExpectedAmountParser(config)
        self.engine = ReconciliationEngine(config)
        self.report_generator = TextReportGenerator(config)

    def load_statements(
        self,
        session: ReconciliationSession,
        sources: Iterable[tuple[str, str]],
    ) -> ReconciliationSession:
        """
        Parse statement exports into the session.

        Args:
            session: Current session
            sources: (name, decoded text) pairs, in the order to list them

        Returns:
            Session holding the movements of every export; any previous
            reconciliation result is dropped

        Raises:
            MissingDataError: If no export is given
        """
        sources = list(sources)
        if not sources:
            raise MissingDataError("Select at least one statement export")

        records: list[TransactionRecord] = []
        counts: list[tuple[str, int]] = []
        for name, text in sources:
            parsed = self.statement_parser.extract_records(text, source=name)
            records.extend(parsed)
            counts.append((name, len(parsed)))

        logger.info(f"Loaded {len(records)} movements from {len(sources)} export(s)")
        return replace(
            session, records=records, sources=counts, expected=[], result=None
        )

    def reconcile(
        self, session: ReconciliationSession, expected_text: str
    ) -> ReconciliationSession:
        """
        Reconcile the operator's expected amounts against the loaded movements.

        Args:
            session: Session with movements loaded
            expected_text: Comma/newline separated expected amounts

        Returns:
            Session holding the expected amounts and the result

        Raises:
            MissingDataError: If no movements are loaded or the text is blank
        """
        if not session.records:
            raise MissingDataError(
                "No statement movements loaded; process the statement exports first"
            )
        if not expected_text or not expected_text.strip():
            raise MissingDataError(
                "No expected amounts given; load a workbook or type the amounts"
            )

        expected = self.expected_parser.extract_from_text(expected_text)
        result = self.engine.reconcile(expected, session.records)
        self.engine.generate_summary(result)

        # reset() clears in place, so sessions must not share lists
        return replace(
            session,
            records=list(session.records),
            sources=list(session.sources),
            expected=expected,
            result=result,
        )

    def render_report(
        self,
        session: ReconciliationSession,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Render the text report for a reconciled session.

        Raises:
            MissingDataError: If the session has not been reconciled yet
        """
        if session.result is None:
            raise MissingDataError("Run the comparison before exporting the report")

        return self.report_generator.format(
            summary=session.result.summary,
            matched=session.result.matched,
            unmatched=session.result.unmatched,
            records=session.records,
            generated_at=generated_at,
        )
