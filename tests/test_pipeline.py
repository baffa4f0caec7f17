"""Tests for the import pipeline (extract -> parse -> OCR fallback)."""
from pathlib import Path

import pytest

from statement_importer.extractors import BaseExtractor, ExtractionError
from statement_importer.pipeline import ImportPipeline, NO_TRANSACTIONS_WARNING

STATEMENT_TEXT = "03/01/2024 COFFEE SHOP -4.50\n03/02/2024 PAYCHECK 1500.00\nTOTAL 1495.50"


class StubExtractor(BaseExtractor):
    """Extractor returning canned text for the suffixes it accepts."""

    def __init__(self, text="", suffixes=('.pdf',), error=None, confidence=100.0):
        super().__init__()
        self.supported_suffixes = frozenset(suffixes)
        self.text = text
        self.error = error
        self.confidence = confidence
        self.calls = []

    def extract(self, file_path: Path) -> tuple[str, float]:
        self.calls.append(file_path)
        if self.error:
            raise self.error
        return self.text, self.confidence


def make_pipeline(pdf_text="", ocr_text="", ocr_error=None, ocr_enabled=True):
    pdf = StubExtractor(pdf_text)
    ocr = StubExtractor(ocr_text, suffixes=('.pdf', '.png'), error=ocr_error)
    pipeline = ImportPipeline(text_extractor=pdf, ocr_extractor=ocr, ocr_enabled=ocr_enabled)
    return pipeline, pdf, ocr


class TestImportPipeline:
    """Test extraction method selection and failure reporting."""

    def test_text_file(self, tmp_path):
        """Test .txt statements are parsed directly."""
        statement = tmp_path / "march.txt"
        statement.write_text(STATEMENT_TEXT, encoding="utf-8")
        pipeline, pdf, ocr = make_pipeline()

        result = pipeline.process(statement)

        assert result.success
        assert result.extraction_method == "text"
        assert result.source == "march.txt"
        assert [t.description for t in result.transactions] == ["COFFEE SHOP", "PAYCHECK"]
        assert pdf.calls == [] and ocr.calls == []

    def test_pdf_text_layer(self):
        """Test OCR is skipped when the text layer yields transactions."""
        pipeline, pdf, ocr = make_pipeline(pdf_text=STATEMENT_TEXT, ocr_text="unused")

        result = pipeline.process(Path("march.pdf"))

        assert result.extraction_method == "pdfplumber"
        assert result.transaction_count == 2
        assert result.warnings == []
        assert ocr.calls == []

    def test_ocr_fallback(self):
        """Test a second pass over OCR text when the text layer finds nothing."""
        pipeline, pdf, ocr = make_pipeline(pdf_text="scanned page", ocr_text=STATEMENT_TEXT)

        result = pipeline.process(Path("scan.pdf"))

        assert result.success
        assert result.extraction_method == "ocr"
        assert result.transaction_count == 2
        assert len(pdf.calls) == 1 and len(ocr.calls) == 1

    def test_text_confidence_follows_method(self):
        """Test the reported confidence comes from the extractor that was used."""
        pdf = StubExtractor("scanned page", confidence=50.0)
        ocr = StubExtractor(STATEMENT_TEXT, confidence=87.5)
        pipeline = ImportPipeline(text_extractor=pdf, ocr_extractor=ocr, ocr_enabled=True)

        result = pipeline.process(Path("scan.pdf"))

        assert result.extraction_method == "ocr"
        assert result.text_confidence == 87.5
        assert result.to_dict()["text_confidence"] == 87.5

    def test_ocr_disabled(self):
        """Test no OCR pass when disabled."""
        pipeline, pdf, ocr = make_pipeline(pdf_text="scanned page", ocr_text=STATEMENT_TEXT, ocr_enabled=False)

        result = pipeline.process(Path("scan.pdf"))

        assert result.success
        assert result.extraction_method == "pdfplumber"
        assert result.transactions == []
        assert result.warnings == [NO_TRANSACTIONS_WARNING]
        assert ocr.calls == []

    def test_ocr_failure_after_text_layer(self):
        """Test an OCR failure is a warning when the text layer was read."""
        pipeline, _, _ = make_pipeline(pdf_text="", ocr_error=ExtractionError("tesseract missing"))

        result = pipeline.process(Path("scan.pdf"))

        assert result.success
        assert result.extraction_method == "pdfplumber"
        assert result.warnings == ["OCR fallback failed: tesseract missing", NO_TRANSACTIONS_WARNING]

    def test_image_goes_straight_to_ocr(self):
        """Test images skip the text layer."""
        pipeline, pdf, ocr = make_pipeline(ocr_text=STATEMENT_TEXT)

        result = pipeline.process(Path("photo.png"))

        assert result.extraction_method == "ocr"
        assert result.transaction_count == 2
        assert pdf.calls == []

    def test_image_ocr_failure_is_an_error(self):
        """Test OCR failure with no other text source fails the import."""
        pipeline, _, _ = make_pipeline(ocr_error=ExtractionError("tesseract missing"))

        result = pipeline.process(Path("photo.png"))

        assert not result.success
        assert result.error_message == "tesseract missing"

    @pytest.mark.parametrize("ocr_enabled", [True, False])
    def test_unsupported_file_type(self, ocr_enabled):
        """Test files no extractor accepts."""
        pipeline, _, _ = make_pipeline(ocr_enabled=ocr_enabled)

        result = pipeline.process(Path("statement.docx"))

        assert not result.success
        assert result.extraction_method == "none"
        assert "Unsupported file type" in result.error_message

    def test_missing_text_file(self, tmp_path):
        """Test a missing file is reported, not raised."""
        pipeline, _, _ = make_pipeline()

        result = pipeline.process(tmp_path / "missing.txt")

        assert not result.success
        assert "File not found" in result.error_message

    def test_empty_text_file(self, tmp_path):
        """Test an empty file is reported, not raised."""
        statement = tmp_path / "empty.txt"
        statement.write_text("", encoding="utf-8")
        pipeline, _, _ = make_pipeline()

        result = pipeline.process(statement)

        assert not result.success
        assert "empty" in result.error_message

    def test_process_text(self):
        """Test parsing already-extracted text."""
        pipeline, _, _ = make_pipeline()

        result = pipeline.process_text(STATEMENT_TEXT, source="upload")

        assert result.success
        assert result.source == "upload"
        assert result.extraction_method == "text"
        assert result.total_income == 1500.00
        assert result.total_expense == 4.50

    def test_process_text_without_transactions(self):
        """Test "no transactions detected" is a warning, not an error."""
        pipeline, _, _ = make_pipeline()

        result = pipeline.process_text("nothing to see here")

        assert result.success
        assert result.transactions == []
        assert result.warnings == [NO_TRANSACTIONS_WARNING]
