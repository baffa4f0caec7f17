"""Data models for statement import."""
from .transaction import (
    ParsedTransaction,
    TransactionCandidate,
    TransactionType,
    to_iso_timestamp,
)
from .extraction_result import ExtractionResult

__all__ = [
    'ParsedTransaction',
    'TransactionCandidate',
    'TransactionType',
    'ExtractionResult',
    'to_iso_timestamp',
]
