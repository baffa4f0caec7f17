"""Statement text parsing."""
from .line_normalizer import NormalizedText, normalize
from .record_matcher import (
    DEFAULT_STRATEGIES,
    DateLedStrategy,
    MatchStrategy,
    NamedMonthLeadingStrategy,
    NamedMonthTrailingStrategy,
    RecordMatcher,
    SingleLineStrategy,
    StrategyMatch,
)
from .columnar_matcher import ColumnarMatcher
from .field_builder import FieldBuilder
from .statement_parser import StatementParser, extract_transactions

__all__ = [
    'NormalizedText',
    'normalize',
    'DEFAULT_STRATEGIES',
    'MatchStrategy',
    'StrategyMatch',
    'SingleLineStrategy',
    'DateLedStrategy',
    'NamedMonthLeadingStrategy',
    'NamedMonthTrailingStrategy',
    'RecordMatcher',
    'ColumnarMatcher',
    'FieldBuilder',
    'StatementParser',
    'extract_transactions',
]
