"""Small text helpers shared by the parsers."""
import re

WHITESPACE_RUN_PATTERN = re.compile(r'\s{2,}')


def normalize_description(description: str) -> str:
    """Collapse runs of whitespace to a single space and trim."""
    if not description:
        return ""
    return WHITESPACE_RUN_PATTERN.sub(' ', description).strip()
