"""Utility functions."""
from .logger import setup_logger, log_extraction_audit
from .currency_parser import parse_amount, pick_amount, strip_balance_amounts, format_currency
from .date_parser import (
    find_default_year,
    normalize_year,
    month_from_name,
    normalize_date_string,
    parse_statement_date,
)
from .text import normalize_description

__all__ = [
    'setup_logger',
    'log_extraction_audit',
    'parse_amount',
    'pick_amount',
    'strip_balance_amounts',
    'format_currency',
    'find_default_year',
    'normalize_year',
    'month_from_name',
    'normalize_date_string',
    'parse_statement_date',
    'normalize_description',
]
