"""Pytest configuration and fixtures."""
import itertools
import pytest
from datetime import datetime, timezone

from statement_importer.config import Vocabulary
from statement_importer.models import ExtractionResult, ParsedTransaction, TransactionType
from statement_importer.parsers import FieldBuilder, StatementParser

FIXED_NOW = datetime(2025, 6, 15, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Clock reading used for undated records."""
    return FIXED_NOW


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: txn-1, txn-2, ..."""
    counter = itertools.count(1)
    return lambda: f"txn-{next(counter)}"


@pytest.fixture
def vocabulary():
    """Built-in vocabulary."""
    return Vocabulary.default()


@pytest.fixture
def field_builder(vocabulary, sequential_ids, fixed_now):
    """Field builder with a fixed clock and predictable ids."""
    return FieldBuilder(vocabulary, id_factory=sequential_ids, clock=lambda: fixed_now)


@pytest.fixture
def parser(vocabulary, field_builder):
    """Month-first statement parser with deterministic fields."""
    return StatementParser(vocabulary, dayfirst=False, field_builder=field_builder)


@pytest.fixture
def sample_transactions():
    """Create a list of sample transactions."""
    return [
        ParsedTransaction(
            id="txn-1",
            date=datetime(2024, 3, 1, tzinfo=timezone.utc),
            description="COFFEE SHOP",
            category="Dining",
            amount=4.50,
            type=TransactionType.EXPENSE,
        ),
        ParsedTransaction(
            id="txn-2",
            date=datetime(2024, 3, 2, tzinfo=timezone.utc),
            description="PAYCHECK",
            category="Income",
            amount=1500.00,
            type=TransactionType.INCOME,
        ),
        ParsedTransaction(
            id="txn-3",
            date=datetime(2024, 3, 4, tzinfo=timezone.utc),
            description="WALMART SUPERCENTER",
            category="Groceries",
            amount=82.17,
            type=TransactionType.EXPENSE,
        ),
    ]


@pytest.fixture
def sample_result(sample_transactions):
    """Successful extraction result for the sample transactions."""
    return ExtractionResult(
        transactions=sample_transactions,
        success=True,
        extraction_method="pdfplumber",
        source="march.pdf",
        processing_time=0.42,
        extracted_at=datetime(2024, 4, 1, 9, 0, 0),
    )


@pytest.fixture
def prose_statement_text():
    """Credit card style statement with single and multi-line records."""
    return "\n".join([
        "ACME BANK VISA",
        "Statement Period: 03/01/2024 - 03/31/2024",
        "Date Description Amount",
        "03/01/2024 COFFEE SHOP -4.50",
        "03/02/2024 PAYCHECK 1500.00",
        "03/04/2024 WALMART SUPERCENTER",
        "  store #4411",
        "-82.17",
        "TOTAL 1413.33",
    ])


@pytest.fixture
def columnar_statement_text():
    """Checking account statement printed as sectioned columns."""
    return "\n".join([
        "FIRST COMMUNITY BANK",
        "Account summary for March 2024",
        "Deposits & Other Credits",
        "03/05 PAYROLL ACME CORP 1,500.00",
        "Total deposits 1,500.00",
        "ATM Withdrawals & Debits",
        "03/06 ATM CASH WITHDRAWAL -60.00",
        "Checks Paid",
        "03/07 1042 150.00",
        "Ending balance 1,290.00",
    ])
