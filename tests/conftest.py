import logging

import pytest

from statement_recon.config import ReconConfig
from statement_recon.models.transaction import ExpectedAmount, TransactionRecord

# First export: bank metadata, header, two movements and some noise
EXPORT_ONE = "\n".join(
    [
        "Account;0012 3456 7890",
        "Period;01-10-2026;31-10-2026;",
        "Date of movement;Value date;Description;Amount;Balance",
        "01-10-2026;01-10-2026;Transfer from client A;50,00;1.050,00",
        "02-10-2026;02-10-2026;Supplier payment;120,00 EUR;1.170,00",
        "",
        "Closing balance;1.170,00",
    ]
)

# Second export: one movement
EXPORT_TWO = "\n".join(
    [
        "Date of movement;Value date;Description;Amount;Balance",
        "05-10-2026;05-10-2026;Card refund;75,50;1.245,50",
    ]
)


@pytest.fixture
def config():
    """Default configuration."""
    return ReconConfig()


@pytest.fixture
def export_one():
    return EXPORT_ONE


@pytest.fixture
def export_two():
    return EXPORT_TWO


@pytest.fixture
def make_record():
    """Factory for movements with sensible defaults."""

    def _make(amount, description="Movement", date="01-10-2026", raw=None):
        return TransactionRecord(
            date=date,
            description=description,
            amount=amount,
            raw_amount_text=raw if raw is not None else f"{amount:.2f}",
        )

    return _make


@pytest.fixture
def make_expected():
    """Factory for expected amounts."""

    def _make(amount, raw=None):
        return ExpectedAmount(amount=amount, raw_text=raw if raw is not None else str(amount))

    return _make


@pytest.fixture(autouse=True)
def reset_app_logger():
    """The CLI installs handlers on the application logger; drop them between tests."""
    yield
    logger = logging.getLogger("statement_recon")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
