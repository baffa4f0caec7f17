"""Transaction data models."""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple


class TransactionType(Enum):
    """Transaction type enumeration."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCandidate(NamedTuple):
    """
    Unvalidated (date, description, amount) triple found by a matcher strategy.

    Attributes:
        date_token: Raw date text (e.g. "03/14/2024", "12 Jan 2024")
        description: Raw description text
        amount_token: Raw amount text (e.g. "-$1,204.56")
        strategy: Name of the strategy that produced the candidate
        line_index: Index of the line the record started on
    """
    date_token: str
    description: str
    amount_token: str
    strategy: str = ""
    line_index: int = -1


def to_iso_timestamp(value: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 timestamp with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


@dataclass
class ParsedTransaction:
    """
    Represents a single transaction recovered from statement text.

    Attributes:
        id: Opaque unique identifier
        date: Transaction date (UTC midnight unless the date fell back to now)
        description: Whitespace-collapsed description, never empty
        category: Best-effort category guess
        amount: Non-negative magnitude; the sign is carried by type
        type: Income or expense
    """
    id: str
    date: datetime
    description: str
    category: str
    amount: float
    type: TransactionType

    def __post_init__(self):
        """Validate transaction data."""
        if not math.isfinite(self.amount):
            raise ValueError("amount must be a finite number")
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.description or not self.description.strip():
            raise ValueError("description cannot be empty")
        if not isinstance(self.type, TransactionType):
            raise ValueError(f"invalid transaction type: {self.type!r}")

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negative."""
        return self.amount if self.type is TransactionType.INCOME else -self.amount

    def to_dict(self) -> dict:
        """Convert transaction to its JSON wire shape."""
        return {
            'id': self.id,
            'date': to_iso_timestamp(self.date),
            'description': self.description,
            'category': self.category,
            'amount': round(self.amount, 2),
            'type': self.type.value,
        }
