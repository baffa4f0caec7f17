"""Turn matched candidates into validated transactions."""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config.vocabulary import Vocabulary
from ..models import ParsedTransaction, TransactionCandidate, TransactionType
from ..utils.currency_parser import parse_amount
from ..utils.date_parser import parse_statement_date
from ..utils.text import normalize_description

logger = logging.getLogger(__name__)

SUMMARY_DESCRIPTION_PATTERN = re.compile(r'^totals?\b', re.IGNORECASE)


class FieldBuilder:
    """
    Normalize a candidate's date, description and amount.

    Candidates that cannot become a valid ParsedTransaction (unusable
    amount, empty or summary description) are dropped: build() returns
    None and nothing is raised. Unparsable dates do not drop the record;
    they fall back to the current time.
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        dayfirst: bool = False,
        id_factory: Optional[Callable[[], object]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize builder.

        Args:
            vocabulary: Category keywords and category names
            dayfirst: Read ambiguous numeric dates as day/month
            id_factory: Produces transaction ids (uuid4 by default)
            clock: Returns "now" for undated records
        """
        self.vocabulary = vocabulary or Vocabulary.default()
        self.dayfirst = dayfirst
        self.id_factory = id_factory or uuid.uuid4
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def build(
        self,
        candidate: TransactionCandidate,
        default_year: Optional[int] = None
    ) -> Optional[ParsedTransaction]:
        """
        Build a transaction from a candidate.

        Args:
            candidate: Matched (date, description, amount) triple
            default_year: Year inferred for the document

        Returns:
            ParsedTransaction, or None if the candidate is unusable
        """
        signed_amount = parse_amount(candidate.amount_token)
        if signed_amount is None:
            logger.debug(f"Dropped candidate at line {candidate.line_index}: bad amount {candidate.amount_token!r}")
            return None

        description = normalize_description(candidate.description)
        if not description or SUMMARY_DESCRIPTION_PATTERN.match(description):
            logger.debug(f"Dropped candidate at line {candidate.line_index}: description {description!r}")
            return None

        amount = round(abs(signed_amount), 2)
        if amount == 0:
            logger.debug(f"Dropped candidate at line {candidate.line_index}: zero amount")
            return None

        transaction_type = TransactionType.INCOME if signed_amount >= 0 else TransactionType.EXPENSE
        date = parse_statement_date(
            candidate.date_token,
            default_year=default_year,
            dayfirst=self.dayfirst,
            now=self.clock()
        )

        return ParsedTransaction(
            id=str(self.id_factory()),
            date=date,
            description=description,
            category=self.infer_category(description, transaction_type),
            amount=amount,
            type=transaction_type,
        )

    def infer_category(self, description: str, transaction_type: TransactionType) -> str:
        """
        Guess a category from description keywords.

        Income is always categorized as income. Expenses take the first
        category (in vocabulary order) with a keyword contained in the
        description.

        Args:
            description: Normalized description
            transaction_type: Income or expense

        Returns:
            Category name
        """
        if transaction_type is TransactionType.INCOME:
            return self.vocabulary.income_category

        description_lower = description.lower()
        for category, keywords in self.vocabulary.category_keywords.items():
            if any(keyword in description_lower for keyword in keywords):
                return category[:1].upper() + category[1:]

        return self.vocabulary.default_category
