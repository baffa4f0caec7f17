"""Tests for keyword vocabularies."""
import pytest

from statement_importer.config import Vocabulary, VocabularyLoader
from statement_importer.config.settings import VOCABULARY_DIR


class TestVocabulary:
    """Test Vocabulary defaults and overrides."""

    def test_default_vocabulary(self):
        """Test the built-in tables."""
        vocabulary = Vocabulary.default()

        assert list(vocabulary.category_keywords) == ["groceries", "dining", "transport", "income"]
        assert "walmart" in vocabulary.category_keywords["groceries"]
        assert "checks paid" in vocabulary.section_headers
        assert vocabulary.income_category == "Income"
        assert vocabulary.default_category == "General"

    def test_partial_override_keeps_defaults(self):
        """Test missing keys fall back to the default vocabulary."""
        vocabulary = Vocabulary({"section_headers": ["Money In", "Money Out"]}, name="test")

        assert vocabulary.section_headers == ("money in", "money out")
        assert "dining" in vocabulary.category_keywords
        assert vocabulary.check_section_marker == "checks paid"

    def test_keywords_lowercased(self):
        """Test keywords and category names are normalized."""
        vocabulary = Vocabulary({"category_keywords": {"Pets": ["PETCO"]}})

        assert vocabulary.category_keywords == {"pets": ("petco",)}

    def test_keywords_read_only(self):
        """Test the keyword table cannot be mutated."""
        vocabulary = Vocabulary.default()

        with pytest.raises(TypeError):
            vocabulary.category_keywords["new"] = ("x",)

    def test_find_section_header(self):
        """Test case-insensitive substring match of section headers."""
        vocabulary = Vocabulary.default()

        assert vocabulary.find_section_header("CHECKS PAID (continued)") == "checks paid"
        assert vocabulary.find_section_header("03/07 1042 150.00") is None


class TestVocabularyLoader:
    """Test loading vocabularies from YAML."""

    def test_load_directory(self, tmp_path):
        """Test every top-level key becomes a vocabulary."""
        (tmp_path / "banks.yaml").write_text(
            "Chase:\n"
            "  section_headers: [deposits and additions]\n"
            "credit_union:\n"
            "  category_keywords:\n"
            "    pets: [petco]\n",
            encoding="utf-8",
        )
        loader = VocabularyLoader(tmp_path)

        assert loader.vocabulary_count == 2
        assert sorted(loader.get_all_vocabularies()) == ["chase", "credit_union"]
        assert loader.get_vocabulary("CHASE").section_headers == ("deposits and additions",)
        assert loader.get_vocabulary("credit_union").category_keywords == {"pets": ("petco",)}

    def test_unknown_vocabulary(self, tmp_path):
        """Test lookup of a missing name."""
        assert VocabularyLoader(tmp_path).get_vocabulary("nope") is None

    def test_broken_file_skipped(self, tmp_path):
        """Test a malformed file does not stop other files loading."""
        (tmp_path / "a_broken.yaml").write_text("bad: [unclosed\n", encoding="utf-8")
        (tmp_path / "b_good.yml").write_text("good:\n  income_category: Earnings\n", encoding="utf-8")
        loader = VocabularyLoader(tmp_path)

        assert loader.get_all_vocabularies() == ["good"]
        assert loader.get_vocabulary("good").income_category == "Earnings"

    def test_non_mapping_file_ignored(self, tmp_path):
        """Test files without a top-level mapping are ignored."""
        (tmp_path / "list.yaml").write_text("- just\n- a list\n", encoding="utf-8")

        assert VocabularyLoader(tmp_path).vocabulary_count == 0

    def test_missing_directory(self, tmp_path):
        """Test a missing directory loads nothing."""
        assert VocabularyLoader(tmp_path / "missing").vocabulary_count == 0

    def test_bundled_vocabularies(self):
        """Test the vocabularies shipped in data/vocabularies."""
        loader = VocabularyLoader(VOCABULARY_DIR)
        us_retail = loader.get_vocabulary("us_retail")

        assert us_retail is not None
        assert "utilities" in us_retail.category_keywords
        assert us_retail.find_section_header("ELECTRONIC WITHDRAWALS") == "electronic withdrawals"
