"""Parse currency amounts and pick the transaction amount out of a line."""
import math
import re
import logging
from typing import Optional

from ..config.settings import CURRENCY_SYMBOLS, DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

# Optional sign, optional $, grouped digits, exactly two decimals
AMOUNT_PATTERN = re.compile(r'[+-]?\$?\d[\d,]*\.\d{2}(?!\d)')

# A line that is nothing but an amount (a space after $ is tolerated)
AMOUNT_ONLY_PATTERN = re.compile(r'^([+-]?\$?\s?\d[\d,]*\.\d{2})$')

# Lines mentioning these are never amount sources
EXCLUDED_LINE_PATTERN = re.compile(r'balance|total', re.IGNORECASE)

# "Balance: $1,204.56", "Ending balance 980.00" and similar labelled balances
BALANCE_LABEL_PATTERN = re.compile(
    r'(?:\b(?:running|ending|beginning|opening|closing|new|available|daily|current)\s+)?'
    r'\bbalance\b\s*:?\s*[+-]?\$?\s?\d[\d,]*\.\d{2}(?!\d)',
    re.IGNORECASE
)

CURRENCY_SYMBOL_PATTERN = re.compile(r'[£$€¥₹]')
PLAIN_NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)$')


def parse_amount(amount_string: str) -> Optional[float]:
    """
    Parse a signed amount from a currency-shaped token.

    Strips currency symbols, thousands separators and whitespace, then
    reads what is left as a signed decimal:
    - $1,234.56   -> 1234.56
    - -$42.50     -> -42.50
    - +42.50      -> 42.50
    - $ 42.50     -> 42.50

    Args:
        amount_string: Token containing an amount

    Returns:
        Float amount or None if the token is not a finite number
    """
    if not amount_string or not isinstance(amount_string, str):
        return None

    cleaned = CURRENCY_SYMBOL_PATTERN.sub('', amount_string)
    cleaned = re.sub(r'[,\s]', '', cleaned)

    if not PLAIN_NUMBER_PATTERN.match(cleaned):
        return None

    amount = float(cleaned)
    if not math.isfinite(amount):
        return None

    return amount


def pick_amount(line: str) -> Optional[str]:
    """
    Pick the token most likely to be the transaction amount on a line.

    Rules, in order:
    1. Lines mentioning "balance" or "total" never yield an amount.
    2. A line that is itself a single amount is returned as-is.
    3. One amount on the line is returned.
    4. Several amounts: the smallest magnitude wins, since running and
       ending balances printed beside a transaction are usually larger
       than the transaction itself. Ties keep document order.

    Args:
        line: Line of statement text

    Returns:
        The chosen amount token (unnormalized) or None
    """
    if not line or EXCLUDED_LINE_PATTERN.search(line):
        return None

    only_match = AMOUNT_ONLY_PATTERN.match(line.strip())
    if only_match:
        return only_match.group(1)

    matches = AMOUNT_PATTERN.findall(line)
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]

    parsed = [(token, parse_amount(token)) for token in matches]
    parsed = [(token, value) for token, value in parsed if value is not None]
    if not parsed:
        return None

    token, _ = min(parsed, key=lambda entry: abs(entry[1]))
    logger.debug(f"Picked {token} from {len(matches)} amounts on line: {line}")
    return token


def strip_balance_amounts(text: str) -> str:
    """
    Remove labelled balances ("Balance: $1,204.56") from text.

    Args:
        text: Line or line fragment

    Returns:
        Text with every labelled balance replaced by a single space, trimmed
    """
    return re.sub(r'\s{2,}', ' ', BALANCE_LABEL_PATTERN.sub(' ', text)).strip()


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format amount as currency string.

    Args:
        amount: Numeric amount
        currency: Currency code (USD, GBP, EUR)

    Returns:
        Formatted currency string
    """
    symbol = CURRENCY_SYMBOLS.get(currency, "$")

    # Format with thousands separator and 2 decimal places
    formatted = f"{abs(amount):,.2f}"

    if amount < 0:
        return f"-{symbol}{formatted}"
    else:
        return f"{symbol}{formatted}"
