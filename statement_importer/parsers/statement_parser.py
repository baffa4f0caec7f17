"""Statement text -> transactions.

Wires the parsing stages together:

    raw text -> normalize() -> RecordMatcher -> (ColumnarMatcher) -> FieldBuilder

The columnar matcher only runs when the record matcher finds no candidate
anywhere in the document: a statement is treated as either prose-style or
columnar, never a mix.

The whole chain is pure and synchronous. It never raises for string input;
malformed text degrades to fewer (or zero) transactions.
"""

import logging
from typing import List, Optional

from ..config.settings import DATE_DAYFIRST
from ..config.vocabulary import Vocabulary
from ..models import ParsedTransaction
from .columnar_matcher import ColumnarMatcher
from .field_builder import FieldBuilder
from .line_normalizer import normalize
from .record_matcher import RecordMatcher

logger = logging.getLogger(__name__)


class StatementParser:
    """
    Extract transactions from the text of one statement.

    Usage:
        parser = StatementParser()
        transactions = parser.parse(text)
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        dayfirst: Optional[bool] = None,
        record_matcher: Optional[RecordMatcher] = None,
        columnar_matcher: Optional[ColumnarMatcher] = None,
        field_builder: Optional[FieldBuilder] = None
    ):
        """
        Initialize parser.

        Args:
            vocabulary: Keyword vocabulary (built-in default if None)
            dayfirst: Read ambiguous numeric dates as day/month
                      (DATE_DAYFIRST setting if None)
            record_matcher: Prose-style matcher override
            columnar_matcher: Columnar fallback override
            field_builder: Field builder override
        """
        self.vocabulary = vocabulary or Vocabulary.default()
        if dayfirst is None:
            dayfirst = DATE_DAYFIRST

        self.record_matcher = record_matcher or RecordMatcher()
        self.columnar_matcher = columnar_matcher or ColumnarMatcher(self.vocabulary)
        self.field_builder = field_builder or FieldBuilder(self.vocabulary, dayfirst=dayfirst)

    def parse(self, raw_text: str) -> List[ParsedTransaction]:
        """
        Parse transactions from statement text.

        Args:
            raw_text: Text extracted from a statement

        Returns:
            Transactions in document order
        """
        normalized = normalize(raw_text)
        if not normalized.lines:
            return []

        candidates = self.record_matcher.match(normalized.lines)
        if not candidates:
            logger.debug("No prose-style records found, trying columnar layout")
            candidates = self.columnar_matcher.match(normalized.lines)

        transactions = []
        for candidate in candidates:
            transaction = self.field_builder.build(candidate, normalized.default_year)
            if transaction is not None:
                transactions.append(transaction)

        logger.info(
            f"Parsed {len(transactions)} transactions from {len(normalized.lines)} lines "
            f"({len(candidates) - len(transactions)} candidates dropped)"
        )
        return transactions


def extract_transactions(
    raw_text: str,
    vocabulary: Optional[Vocabulary] = None
) -> List[ParsedTransaction]:
    """
    Extract transactions from statement text.

    Args:
        raw_text: Text extracted from a statement (may be empty)
        vocabulary: Keyword vocabulary (built-in default if None)

    Returns:
        List of ParsedTransaction; empty when nothing is detected
    """
    return StatementParser(vocabulary).parse(raw_text)
