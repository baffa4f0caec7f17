"""Keyword vocabularies used for categorization and columnar section detection.

A vocabulary is read-only configuration data. The built-in default covers
common US retail bank statements; alternative vocabularies (per institution,
or per test) are loaded from YAML files shaped like this::

    chase:
      category_keywords:
        groceries: [grocery, market, whole foods]
        dining: [cafe, restaurant]
      section_headers:
        - deposits and additions
        - electronic withdrawals
      check_section_marker: checks paid
      income_category: Income
      default_category: General

Any key missing from a file falls back to the default vocabulary.
"""
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import yaml

from .settings import VOCABULARY_DIR

logger = logging.getLogger(__name__)


DEFAULT_CATEGORY_KEYWORDS = {
    "groceries": ["grocery", "market", "mart", "superstore", "walmart", "aldi", "costco"],
    "dining": ["cafe", "restaurant", "coffee", "diner", "eatery"],
    "transport": ["uber", "lyft", "gas", "fuel", "shell", "chevron", "transport"],
    "income": ["salary", "payroll", "deposit", "paycheck", "direct deposit"],
}

DEFAULT_SECTION_HEADERS = [
    "deposits & other credits",
    "atm withdrawals & debits",
    "visa check card purchases & debits",
    "withdrawals & other debits",
    "checks paid",
]

DEFAULT_VOCABULARY = {
    "category_keywords": DEFAULT_CATEGORY_KEYWORDS,
    "section_headers": DEFAULT_SECTION_HEADERS,
    "check_section_marker": "checks paid",
    "income_category": "Income",
    "default_category": "General",
}


class Vocabulary:
    """Read-only keyword configuration for one institution (or the default)."""

    def __init__(self, config_dict: dict, name: str = "default"):
        """Initialize vocabulary from dictionary, filling gaps from the default."""
        self.name = name
        merged = dict(DEFAULT_VOCABULARY)
        merged.update({k: v for k, v in (config_dict or {}).items() if v is not None})

        keywords = merged["category_keywords"] or {}
        self._category_keywords: Mapping[str, Tuple[str, ...]] = MappingProxyType({
            str(category).lower(): tuple(str(word).lower() for word in words or [])
            for category, words in keywords.items()
        })
        self._section_headers = tuple(
            str(header).strip().lower() for header in merged["section_headers"] or []
        )
        self._check_section_marker = str(merged["check_section_marker"]).lower()
        self._income_category = str(merged["income_category"])
        self._default_category = str(merged["default_category"])

    @classmethod
    def default(cls) -> "Vocabulary":
        """Get the built-in vocabulary."""
        return cls(DEFAULT_VOCABULARY, "default")

    @property
    def category_keywords(self) -> Mapping[str, Tuple[str, ...]]:
        """Category name -> keywords, in tie-break order."""
        return self._category_keywords

    @property
    def section_headers(self) -> Tuple[str, ...]:
        """Lower-cased columnar section headers."""
        return self._section_headers

    @property
    def check_section_marker(self) -> str:
        """Substring identifying the checks-paid section."""
        return self._check_section_marker

    @property
    def income_category(self) -> str:
        return self._income_category

    @property
    def default_category(self) -> str:
        return self._default_category

    def find_section_header(self, line: str) -> Optional[str]:
        """Return the first section header contained in line, if any."""
        lowered = line.lower()
        for header in self._section_headers:
            if header in lowered:
                return header
        return None

    def __repr__(self) -> str:
        return f"Vocabulary(name={self.name!r}, categories={list(self._category_keywords)})"


class VocabularyLoader:
    """Loads and manages vocabularies from a directory of YAML files."""

    def __init__(self, config_dir: Path = VOCABULARY_DIR):
        """
        Initialize vocabulary loader.

        Args:
            config_dir: Directory containing vocabulary YAML files
        """
        self.config_dir = Path(config_dir)
        self._vocabularies: Dict[str, Vocabulary] = {}
        self._load_all()

    def _load_all(self) -> None:
        """Load all vocabulary files."""
        if not self.config_dir.exists():
            logger.warning(f"Vocabulary directory not found: {self.config_dir}")
            return

        yaml_files = sorted(self.config_dir.glob("*.yaml")) + sorted(self.config_dir.glob("*.yml"))

        if not yaml_files:
            logger.warning(f"No vocabulary files found in {self.config_dir}")
            return

        for yaml_file in yaml_files:
            try:
                self._load_file(yaml_file)
            except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
                logger.error(f"Failed to load vocabulary {yaml_file}: {e}")

        logger.info(f"Loaded {len(self._vocabularies)} vocabularies")

    def _load_file(self, yaml_file: Path) -> None:
        """
        Load a single vocabulary file.

        Args:
            yaml_file: Path to YAML file
        """
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            logger.warning(f"Ignoring vocabulary file without a top-level mapping: {yaml_file}")
            return

        # Each top-level key names a vocabulary, e.g. chase: {...}
        for name, config_dict in data.items():
            if isinstance(config_dict, dict):
                self._vocabularies[str(name).lower()] = Vocabulary(config_dict, str(name))
                logger.debug(f"Loaded vocabulary {name}")

    def get_vocabulary(self, name: str) -> Optional[Vocabulary]:
        """
        Get a vocabulary by name.

        Args:
            name: Vocabulary name (case-insensitive)

        Returns:
            Vocabulary or None if not found
        """
        return self._vocabularies.get(name.lower())

    def get_all_vocabularies(self) -> List[str]:
        """Get list of all loaded vocabulary names."""
        return list(self._vocabularies.keys())

    @property
    def vocabulary_count(self) -> int:
        return len(self._vocabularies)


# Singleton instance
_loader: Optional[VocabularyLoader] = None


def get_vocabulary_loader() -> VocabularyLoader:
    """Get singleton instance of VocabularyLoader."""
    global _loader
    if _loader is None:
        _loader = VocabularyLoader()
    return _loader
