"""Line-oriented record matching for prose-style statements.

Statement text arrives as a flat list of lines with no reliable schema.
The matcher walks the lines with an explicit cursor and, at each position,
tries an ordered list of strategies. The first strategy that recognizes the
line wins; it reports the candidate it found (if any) and where the cursor
should resume, which lets multi-line records skip the lines they consumed.

Strategies, in priority order:

1. SingleLineStrategy      "03/14/2024 GROCERY STORE -42.50"
2. DateLedStrategy         "03/14/2024 GROCERY STORE" ... "42.50" on a later line
3. NamedMonthLeadingStrategy  "12 Jan 2024 COFFEE SHOP" (+ same-line or later amount)
4. NamedMonthTrailingStrategy "COFFEE SHOP 4.50 12 Jan"

Pattern Matching Priority:
    While stitching a multi-line record, each following line is tested for
    an amount first; an amount completes the record even when the line also
    opens a new one. Only an amount-less line that opens a new record
    abandons the record in progress.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections import Counter
from typing import List, NamedTuple, Optional, Sequence

from ..models import TransactionCandidate
from ..utils.currency_parser import BALANCE_LABEL_PATTERN, pick_amount, strip_balance_amounts
from ..utils.date_parser import month_from_name
from ..utils.text import normalize_description

logger = logging.getLogger(__name__)

NUMERIC_DATE = r'\d{1,2}[/-]\d{1,2}[/-]\d{2,4}'
AMOUNT = r'[+-]?\$?\d[\d,]*\.\d{2}'

SINGLE_LINE_PATTERN = re.compile(rf'({NUMERIC_DATE})\s+(.+?)\s+({AMOUNT})$')
DATE_LED_PATTERN = re.compile(rf'^({NUMERIC_DATE})\s+(.+)')
NAMED_MONTH_LEADING_PATTERN = re.compile(r'^(\d{1,2})\s+([A-Za-z]+)(?:\s+(\d{2,4}))?\s+(.+)')
NAMED_MONTH_TRAILING_PATTERN = re.compile(r'^(.+?)\s+(\d{1,2})\s+([A-Za-z]+)(?:\s+(\d{2,4}))?$')


class StrategyMatch(NamedTuple):
    """Outcome of a strategy that recognized the line at the cursor."""
    candidate: Optional[TransactionCandidate]
    next_index: int


def starts_date_led_record(line: str) -> bool:
    """True if line opens with a numeric date followed by text."""
    return DATE_LED_PATTERN.match(line) is not None


def starts_named_month_record(line: str) -> bool:
    """True if line opens with "<day> <month> [<year>]" followed by text."""
    match = NAMED_MONTH_LEADING_PATTERN.match(line)
    return match is not None and month_from_name(match.group(2)) is not None


def split_same_line_amount(text: str) -> tuple:
    """
    Look for the transaction amount inside a record's own text.

    Returns:
        (amount_token, description_without_amount); amount_token is None
        when the text carries no usable amount
    """
    cleaned = strip_balance_amounts(text)
    amount = pick_amount(cleaned)
    if amount is None:
        return None, text
    return amount, normalize_description(cleaned.replace(amount, ' ', 1))


class MatchStrategy(ABC):
    """A single way of recognizing a transaction record at the cursor."""

    name = "strategy"

    @abstractmethod
    def match(self, lines: Sequence[str], index: int) -> Optional[StrategyMatch]:
        """
        Try to recognize a record starting at lines[index].

        Args:
            lines: All normalized lines
            index: Cursor position

        Returns:
            StrategyMatch if the line belongs to this strategy (even when no
            candidate could be completed), None to let the next strategy try
        """
        pass


class SingleLineStrategy(MatchStrategy):
    """<date> <description> <amount> on one line, amount trailing."""

    name = "single_line"

    def match(self, lines: Sequence[str], index: int) -> Optional[StrategyMatch]:
        line = lines[index]
        match = SINGLE_LINE_PATTERN.search(line)
        if not match:
            return None

        # A trailing "Balance: $1,204.56" is never the transaction amount
        if BALANCE_LABEL_PATTERN.search(line):
            match = SINGLE_LINE_PATTERN.search(strip_balance_amounts(line))
            if not match:
                logger.debug(f"Line {index} only carries a balance: {line}")
                return StrategyMatch(None, index + 1)

        date_token, description, amount = match.groups()
        return StrategyMatch(
            TransactionCandidate(date_token, description, amount, self.name, index),
            index + 1
        )


class MultiLineStrategy(MatchStrategy):
    """
    Shared stitching for records whose amount may sit on a later line.

    Subclasses recognize the opening line and decide which lines count as
    the start of a new record.
    """

    @abstractmethod
    def _open_record(self, line: str) -> Optional[tuple]:
        """Return (date_token, remainder) if line opens a record."""
        pass

    @abstractmethod
    def _is_record_boundary(self, line: str) -> bool:
        pass

    def match(self, lines: Sequence[str], index: int) -> Optional[StrategyMatch]:
        opened = self._open_record(lines[index])
        if opened is None:
            return None

        date_token, remainder = opened

        amount, description = split_same_line_amount(remainder)
        if amount is not None:
            return StrategyMatch(
                TransactionCandidate(date_token, description, amount, self.name, index),
                index + 1
            )

        description = normalize_description(remainder)
        lookahead = index + 1
        while lookahead < len(lines):
            next_line = lines[lookahead]

            amount = pick_amount(next_line)
            if amount is not None:
                return StrategyMatch(
                    TransactionCandidate(date_token, description, amount, self.name, index),
                    lookahead + 1
                )

            if self._is_record_boundary(next_line):
                logger.debug(f"Abandoned record at line {index}: next record starts before an amount")
                break

            description = f"{description} {normalize_description(next_line)}"
            lookahead += 1

        return StrategyMatch(None, index + 1)


class DateLedStrategy(MultiLineStrategy):
    """<date> <description...> with the amount on the same or a later line."""

    name = "date_led"

    def _open_record(self, line: str) -> Optional[tuple]:
        match = DATE_LED_PATTERN.match(line)
        if not match:
            return None
        return match.group(1), match.group(2)

    def _is_record_boundary(self, line: str) -> bool:
        return starts_date_led_record(line)


class NamedMonthLeadingStrategy(MultiLineStrategy):
    """<day> <month-name> [<year>] <description...>."""

    name = "named_month_leading"

    def _open_record(self, line: str) -> Optional[tuple]:
        match = NAMED_MONTH_LEADING_PATTERN.match(line)
        if not match:
            return None

        day, month, year, remainder = match.groups()
        if month_from_name(month) is None:
            return None

        date_token = " ".join(part for part in (day, month, year) if part)
        return date_token, remainder

    def _is_record_boundary(self, line: str) -> bool:
        return starts_named_month_record(line) or starts_date_led_record(line)


class NamedMonthTrailingStrategy(MatchStrategy):
    """<description with amount> <day> <month-name> [<year>] at line end."""

    name = "named_month_trailing"

    def match(self, lines: Sequence[str], index: int) -> Optional[StrategyMatch]:
        match = NAMED_MONTH_TRAILING_PATTERN.match(lines[index])
        if not match:
            return None

        text, day, month, year = match.groups()
        if month_from_name(month) is None:
            return None

        amount, description = split_same_line_amount(text)
        if amount is None:
            return None

        date_token = " ".join(part for part in (day, month, year) if part)
        return StrategyMatch(
            TransactionCandidate(date_token, description, amount, self.name, index),
            index + 1
        )


DEFAULT_STRATEGIES = (
    SingleLineStrategy(),
    DateLedStrategy(),
    NamedMonthLeadingStrategy(),
    NamedMonthTrailingStrategy(),
)


class RecordMatcher:
    """
    Greedy single-pass matcher over normalized lines.

    Usage:
        matcher = RecordMatcher()
        candidates = matcher.match(lines)
    """

    def __init__(self, strategies: Optional[Sequence[MatchStrategy]] = None):
        """
        Initialize matcher.

        Args:
            strategies: Strategies in priority order (defaults to all four)
        """
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def match(self, lines: Sequence[str]) -> List[TransactionCandidate]:
        """
        Scan lines and collect transaction candidates in document order.

        Args:
            lines: Normalized lines

        Returns:
            List of TransactionCandidate
        """
        candidates: List[TransactionCandidate] = []
        index = 0

        while index < len(lines):
            for strategy in self.strategies:
                result = strategy.match(lines, index)
                if result is None:
                    continue
                if result.candidate is not None:
                    candidates.append(result.candidate)
                index = max(result.next_index, index + 1)
                break
            else:
                index += 1

        if candidates:
            counts = Counter(candidate.strategy for candidate in candidates)
            logger.debug(f"Record matcher found {len(candidates)} candidates: {dict(counts)}")

        return candidates
