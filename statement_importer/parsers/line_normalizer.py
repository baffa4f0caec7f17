"""Split raw statement text into lines and infer the document year."""
import logging
import re
from typing import List, NamedTuple, Optional

from ..utils.date_parser import find_default_year

logger = logging.getLogger(__name__)

NEWLINE_PATTERN = re.compile(r'\r\n|\r|\n')


class NormalizedText(NamedTuple):
    """Trimmed non-blank lines in document order, plus the inferred year."""
    lines: List[str]
    default_year: Optional[int]


def normalize(raw_text: str) -> NormalizedText:
    """
    Prepare extracted text for matching.

    Args:
        raw_text: Text recovered from a PDF or OCR

    Returns:
        NormalizedText with trimmed, non-empty lines and the default year
        (scanned over the full text, not line by line)
    """
    if not raw_text:
        return NormalizedText([], None)

    lines = [line.strip() for line in NEWLINE_PATTERN.split(raw_text)]
    lines = [line for line in lines if line]
    default_year = find_default_year(raw_text)

    logger.debug(f"Normalized {len(lines)} lines, default year {default_year}")
    return NormalizedText(lines, default_year)
