"""Bank and credit card statement importer."""
from .models import ExtractionResult, ParsedTransaction, TransactionType
from .parsers import StatementParser, extract_transactions

__version__ = "0.1.0"

__all__ = [
    'ExtractionResult',
    'ParsedTransaction',
    'TransactionType',
    'StatementParser',
    'extract_transactions',
]
