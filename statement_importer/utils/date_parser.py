"""Date handling for statement text."""
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r'\b(?:19|20)\d{2}\b')
NAMED_MONTH_DATE_PATTERN = re.compile(r'^(\d{1,2})\s+([A-Za-z]+)(?:\s+(\d{2,4}))?')
# "03/14/72": numeric date ending in a two-digit year
SHORT_YEAR_DATE_PATTERN = re.compile(r'^(\d{1,2}/\d{1,2}/)(\d{2})$')

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# Shortest accepted month prefix ("Jan", "Sept", "December")
MIN_MONTH_PREFIX = 3


def find_default_year(text: str) -> Optional[int]:
    """
    Infer the statement year from the whole document text.

    Statements often omit the year on each transaction line. The last
    19xx/20xx token in the document wins: period footers repeat on every
    page, so the final occurrence is the most likely statement year.

    Args:
        text: Full extracted text

    Returns:
        Year or None if the text has no year-shaped token
    """
    if not text:
        return None

    matches = YEAR_PATTERN.findall(text)
    if not matches:
        return None

    return int(matches[-1])


def normalize_year(year: str) -> int:
    """Expand a 2-digit year (70-99 -> 19xx, 00-69 -> 20xx)."""
    if len(year) == 2:
        value = int(year)
        return 1900 + value if value >= 70 else 2000 + value
    return int(year)


def month_from_name(name: str) -> Optional[int]:
    """
    Resolve a month name or abbreviation to its number (1-12).

    Case-insensitive prefix match against full English month names, so
    "Jan", "JANUARY" and "Sept" all resolve.
    """
    if not name or len(name) < MIN_MONTH_PREFIX:
        return None

    lowered = name.lower()
    for index, month in enumerate(MONTH_NAMES, start=1):
        if month.startswith(lowered):
            return index

    return None


def normalize_date_string(date_str: str) -> str:
    """
    Normalize a numeric date string for the generic parser.

    Collapses whitespace, drops ordinal suffixes, uses "/" as the only
    separator ("03-14-2024" -> "03/14/2024") and expands a trailing
    two-digit year with normalize_year ("03/14/72" -> "03/14/1972").
    """
    normalized = ' '.join(date_str.split())
    normalized = re.sub(r'(\d+)(?:st|nd|rd|th)\b', r'\1', normalized)
    normalized = normalized.replace('-', '/')

    short_year = SHORT_YEAR_DATE_PATTERN.match(normalized)
    if short_year:
        prefix, year = short_year.groups()
        normalized = f"{prefix}{normalize_year(year)}"

    return normalized


def parse_statement_date(
    date_string: str,
    default_year: Optional[int] = None,
    dayfirst: bool = False,
    now: Optional[datetime] = None
) -> datetime:
    """
    Turn a statement date token into a UTC midnight datetime.

    Named-month tokens ("12 Jan", "12 January 2024") are resolved directly;
    anything else goes through dateutil. A missing year is taken from
    default_year, then from the current year.

    Never raises: an unusable token yields the current time.

    Args:
        date_string: Raw date token
        default_year: Year inferred for the document
        dayfirst: Read ambiguous numeric dates as day/month
        now: Clock reading to use for fallbacks

    Returns:
        Timezone-aware datetime in UTC
    """
    if now is None:
        now = datetime.now(timezone.utc)

    token = (date_string or "").strip()
    fallback_year = default_year or now.year

    named = NAMED_MONTH_DATE_PATTERN.match(token)
    if named:
        day, month_name, year = named.groups()
        month = month_from_name(month_name)
        if month is not None:
            resolved_year = normalize_year(year) if year else fallback_year
            try:
                return datetime(resolved_year, month, int(day), tzinfo=timezone.utc)
            except ValueError:
                logger.debug(f"Invalid calendar date: {token}")

    try:
        parsed = dateutil_parser.parse(
            normalize_date_string(token),
            dayfirst=dayfirst,
            default=datetime(fallback_year, 1, 1)
        )
    except (ValueError, OverflowError, TypeError):
        logger.debug(f"Could not parse date {token!r}, falling back to current time")
        return now

    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)
