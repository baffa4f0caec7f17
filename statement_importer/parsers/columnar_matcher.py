"""Section-driven matcher for columnar statements.

Some statements (checking accounts in particular) print transactions as
bare rows under section headers::

    Deposits & Other Credits
    03/05   PAYROLL ACME CORP          1,500.00
    Checks Paid
    03/07   1042                         150.00

Rows carry a short date (year optional) and an amount, but the description
may be missing, spread over preceding lines, or implied by the section.
This matcher is only used when the prose-style RecordMatcher finds nothing.
"""

import logging
import re
from collections import deque
from typing import List, Optional, Sequence

from ..config.vocabulary import Vocabulary
from ..models import TransactionCandidate
from ..utils.currency_parser import pick_amount
from ..utils.text import normalize_description

logger = logging.getLogger(__name__)

DATE_TOKEN_PATTERN = re.compile(r'\b\d{1,2}[/-]\d{1,2}(?:[/-]\d{2,4})?\b')
SUMMARY_LINE_PATTERN = re.compile(r'total|balance', re.IGNORECASE)
CHECK_NUMBER_PATTERN = re.compile(r'^[0-9]+$')

# Non-data lines remembered as a fallback description
MAX_PENDING_LINES = 3


class ColumnarMatcher:
    """Extract candidates from sectioned, column-style statement text."""

    name = "columnar"

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        """
        Initialize matcher.

        Args:
            vocabulary: Section headers and check-section marker to use
        """
        self.vocabulary = vocabulary or Vocabulary.default()

    def match(self, lines: Sequence[str]) -> List[TransactionCandidate]:
        """
        Scan lines section by section.

        Args:
            lines: Normalized lines

        Returns:
            List of TransactionCandidate in document order
        """
        candidates: List[TransactionCandidate] = []
        current_section = ""
        pending = deque(maxlen=MAX_PENDING_LINES)

        for index, line in enumerate(lines):
            header = self.vocabulary.find_section_header(line)
            if header:
                current_section = header
                pending.clear()
                continue

            # Section and page summaries
            if SUMMARY_LINE_PATTERN.search(line):
                pending.clear()
                continue

            date_match = DATE_TOKEN_PATTERN.search(line)
            amount = pick_amount(line)

            if date_match and amount:
                date_token = date_match.group(0)
                description = self._describe(line, date_token, amount, current_section, pending)
                candidates.append(
                    TransactionCandidate(date_token, description, amount, self.name, index)
                )
                pending.clear()
                continue

            if not date_match and not amount:
                pending.append(line)

        logger.debug(f"Columnar matcher found {len(candidates)} candidates")
        return candidates

    def _describe(
        self,
        line: str,
        date_token: str,
        amount: str,
        section: str,
        pending: Sequence[str]
    ) -> str:
        """
        Work out the description for a data row.

        Order: checks-paid rows become "Check <number>"; otherwise the row
        text minus its date and amount; otherwise the buffered lines before
        the row; otherwise the section name.
        """
        if section and self.vocabulary.check_section_marker in section:
            check_number = next(
                (token for token in line.split() if CHECK_NUMBER_PATTERN.match(token)),
                None
            )
            if check_number:
                return f"Check {check_number}"

        remainder = line.replace(date_token, ' ', 1).replace(amount, ' ', 1)
        description = normalize_description(re.sub(r'[$,+]', ' ', remainder))

        if not description and pending:
            description = " ".join(pending)
        if not description and section:
            description = section.title()

        return description
