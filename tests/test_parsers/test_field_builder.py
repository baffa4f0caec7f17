"""Tests for building transactions from candidates."""
import uuid
from datetime import datetime, timezone

import pytest

from statement_importer.config import Vocabulary
from statement_importer.models import TransactionCandidate, TransactionType
from statement_importer.parsers import FieldBuilder


def candidate(date_token, description, amount_token):
    return TransactionCandidate(date_token, description, amount_token)


class TestAmountAndType:
    """Sign handling and amount normalization."""

    def test_negative_amount_is_expense(self, field_builder):
        """Test -42.50 -> 42.50 expense."""
        txn = field_builder.build(candidate("03/14/2024", "GROCERY STORE", "-42.50"))

        assert txn.amount == 42.50
        assert txn.type is TransactionType.EXPENSE

    @pytest.mark.parametrize("token", ["42.50", "+42.50", "$42.50"])
    def test_non_negative_amount_is_income(self, field_builder, token):
        """Test 42.50 and +42.50 -> 42.50 income."""
        txn = field_builder.build(candidate("03/14/2024", "REFUND", token))

        assert txn.amount == 42.50
        assert txn.type is TransactionType.INCOME

    def test_currency_formatting_removed(self, field_builder):
        """Test $ and thousands separators."""
        txn = field_builder.build(candidate("03/14/2024", "RENT", "-$1,204.56"))

        assert txn.amount == 1204.56

    def test_unparsable_amount_dropped(self, field_builder):
        """Test candidates with a non-numeric amount are dropped."""
        assert field_builder.build(candidate("03/14/2024", "GROCERY STORE", "abc")) is None

    def test_zero_amount_dropped(self, field_builder):
        """Test zero amounts are dropped."""
        assert field_builder.build(candidate("03/14/2024", "FEE WAIVED", "0.00")) is None


class TestDescription:
    """Description normalization and rejection."""

    def test_whitespace_collapsed(self, field_builder):
        """Test runs of whitespace become one space."""
        txn = field_builder.build(candidate("03/14/2024", "  GROCERY    STORE  ", "-1.00"))

        assert txn.description == "GROCERY STORE"

    @pytest.mark.parametrize("description", ["", "   ", "TOTAL", "Total fees", "totals for March"])
    def test_empty_or_summary_description_dropped(self, field_builder, description):
        """Test empty and total-led descriptions are dropped."""
        assert field_builder.build(candidate("03/14/2024", description, "-1.00")) is None

    def test_word_starting_with_total_kept(self, field_builder):
        """Test only the word "total" is rejected, not words that start with it."""
        txn = field_builder.build(candidate("03/14/2024", "TOTALLY FIT GYM", "-30.00"))

        assert txn.description == "TOTALLY FIT GYM"


class TestDates:
    """Date resolution inside the builder."""

    def test_numeric_date(self, field_builder):
        """Test month-first numeric date at UTC midnight."""
        txn = field_builder.build(candidate("03/01/2024", "COFFEE SHOP", "-4.50"))

        assert txn.date == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_yearless_date_uses_default_year(self, field_builder):
        """Test document year completes "15 Jan"."""
        txn = field_builder.build(candidate("15 Jan", "Coffee Shop", "-4.50"), default_year=2023)

        assert txn.date == datetime(2023, 1, 15, tzinfo=timezone.utc)

    def test_yearless_date_without_default_uses_clock_year(self, field_builder, fixed_now):
        """Test current year is used when the document has none."""
        txn = field_builder.build(candidate("15 Jan", "Coffee Shop", "-4.50"))

        assert txn.date.year == fixed_now.year

    def test_unparsable_date_keeps_record(self, field_builder, fixed_now):
        """Test bad dates fall back to now instead of dropping the record."""
        txn = field_builder.build(candidate("??", "COFFEE SHOP", "-4.50"))

        assert txn is not None
        assert txn.date == fixed_now

    def test_dayfirst(self, vocabulary, sequential_ids):
        """Test day/month reading when configured."""
        builder = FieldBuilder(vocabulary, dayfirst=True, id_factory=sequential_ids)
        txn = builder.build(candidate("03/01/2024", "COFFEE SHOP", "-4.50"))

        assert txn.date == datetime(2024, 1, 3, tzinfo=timezone.utc)


class TestCategory:
    """Keyword category inference."""

    @pytest.mark.parametrize("description,amount,category", [
        ("WALMART SUPERCENTER", "-82.17", "Groceries"),
        ("COFFEE SHOP", "-4.50", "Dining"),
        ("UBER TRIP", "-12.40", "Transport"),
        ("MYSTERY CHARGE", "-9.99", "General"),
        ("PAYROLL DEPOSIT", "1500.00", "Income"),
        ("COFFEE SHOP REFUND", "4.50", "Income"),
    ])
    def test_default_vocabulary(self, field_builder, description, amount, category):
        """Test categories from the built-in keyword table."""
        txn = field_builder.build(candidate("03/01/2024", description, amount))

        assert txn.category == category

    def test_table_order_breaks_ties(self, field_builder):
        """Test the first matching category wins."""
        txn = field_builder.build(candidate("03/01/2024", "COFFEE MARKET", "-7.00"))

        assert txn.category == "Groceries"

    def test_custom_vocabulary(self):
        """Test injected category keywords replace the default table."""
        vocabulary = Vocabulary({
            "category_keywords": {"pets": ["petco", "chewy"]},
            "default_category": "Other",
        })
        builder = FieldBuilder(vocabulary)

        assert builder.build(candidate("03/01/2024", "PETCO 1123", "-25.00")).category == "Pets"
        assert builder.build(candidate("03/01/2024", "WALMART", "-25.00")).category == "Other"


class TestIdentity:
    """Transaction ids."""

    def test_ids_from_factory(self, field_builder):
        """Test the injected id factory is used."""
        first = field_builder.build(candidate("03/01/2024", "A", "-1.00"))
        second = field_builder.build(candidate("03/01/2024", "A", "-1.00"))

        assert (first.id, second.id) == ("txn-1", "txn-2")

    def test_default_ids_are_unique_uuids(self):
        """Test every built record gets a fresh uuid."""
        builder = FieldBuilder()
        ids = {builder.build(candidate("03/01/2024", "SAME", "-1.00")).id for _ in range(5)}

        assert len(ids) == 5
        for value in ids:
            uuid.UUID(value)
