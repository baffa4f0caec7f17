"""Extraction result model."""
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime

from .transaction import ParsedTransaction, TransactionType


@dataclass
class ExtractionResult:
    """
    Outcome of importing one statement.

    A statement with no recognizable transactions is still a successful
    import (with a warning); ``success`` is False only when no text could
    be obtained at all.

    Attributes:
        transactions: Transactions in document order
        success: Whether text was obtained and parsed
        extraction_method: Text source used (text, pdfplumber, ocr, none)
        source: File name or label of the input
        text_confidence: Share of pages that yielded text (0-100)
        error_message: Why the import failed
        warnings: Non-fatal problems noticed while importing
        processing_time: Wall time in seconds
        extracted_at: When the import ran
    """
    transactions: List[ParsedTransaction] = field(default_factory=list)
    success: bool = True
    extraction_method: str = "unknown"
    source: Optional[str] = None
    text_confidence: float = 0.0
    error_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    extracted_at: datetime = field(default_factory=datetime.now)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    @property
    def income(self) -> List[ParsedTransaction]:
        return [t for t in self.transactions if t.type is TransactionType.INCOME]

    @property
    def expenses(self) -> List[ParsedTransaction]:
        return [t for t in self.transactions if t.type is TransactionType.EXPENSE]

    @property
    def total_income(self) -> float:
        return round(sum(t.amount for t in self.income), 2)

    @property
    def total_expense(self) -> float:
        return round(sum(t.amount for t in self.expenses), 2)

    @property
    def net_amount(self) -> float:
        """Income minus expenses."""
        return round(self.total_income - self.total_expense, 2)

    def to_dict(self) -> dict:
        """Summary plus wire-shaped transactions."""
        return {
            'success': self.success,
            'source': self.source,
            'extraction_method': self.extraction_method,
            'text_confidence': round(self.text_confidence, 1),
            'transaction_count': self.transaction_count,
            'total_income': self.total_income,
            'total_expense': self.total_expense,
            'net_amount': self.net_amount,
            'processing_time': round(self.processing_time, 2),
            'extracted_at': self.extracted_at.isoformat(),
            'transactions': [t.to_dict() for t in self.transactions],
            'warnings': self.warnings,
            'error_message': self.error_message,
        }
