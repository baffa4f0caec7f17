"""
Statement import pipeline.

Phases:
1. Extract - Get text from the file (text file, PDF text layer)
2. Transform - Parse transactions from the text
3. Fallback - If nothing was found, OCR the document and parse again

The parser itself never fails on text; everything that can fail (missing
files, broken PDFs, missing Tesseract) happens in the extract phases and
is reported through ExtractionResult rather than raised.
"""
import logging
import time
from pathlib import Path
from typing import List, Optional

from .config.settings import OCR_ENABLED
from .config.vocabulary import Vocabulary
from .extractors import BaseExtractor, OCRExtractor, PDFExtractor, TextFileExtractor
from .models import ExtractionResult, ParsedTransaction
from .parsers import StatementParser
from .utils import log_extraction_audit

logger = logging.getLogger(__name__)

NO_TRANSACTIONS_WARNING = "No transactions detected"


class ImportPipeline:
    """
    Import transactions from a statement file.

    Usage:
        pipeline = ImportPipeline()
        result = pipeline.process(Path("statement.pdf"))
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        text_extractor: Optional[BaseExtractor] = None,
        ocr_extractor: Optional[BaseExtractor] = None,
        ocr_enabled: bool = OCR_ENABLED,
        parser: Optional[StatementParser] = None
    ):
        """
        Initialize pipeline.

        Args:
            vocabulary: Keyword vocabulary for the parser
            text_extractor: PDF text-layer extractor (pdfplumber by default)
            ocr_extractor: OCR extractor (Tesseract by default, created lazily)
            ocr_enabled: Whether to fall back to OCR when nothing is found
            parser: Statement parser override
        """
        self.parser = parser or StatementParser(vocabulary)
        self.text_file_extractor = TextFileExtractor()
        self.text_extractor = text_extractor or PDFExtractor()
        self._ocr_extractor = ocr_extractor
        self.ocr_enabled = ocr_enabled

    @property
    def ocr_extractor(self) -> BaseExtractor:
        if self._ocr_extractor is None:
            self._ocr_extractor = OCRExtractor()
        return self._ocr_extractor

    def process_text(self, raw_text: str, source: str = "text") -> ExtractionResult:
        """
        Parse already-extracted statement text.

        Args:
            raw_text: Statement text
            source: Label used in the result and audit log

        Returns:
            ExtractionResult
        """
        start_time = time.time()
        transactions = self.parser.parse(raw_text)
        result = self._create_result(transactions, "text", source, start_time)
        self._audit(result)
        return result

    def process(self, file_path: Path) -> ExtractionResult:
        """
        Import a statement file end-to-end.

        Args:
            file_path: Path to a .txt, .pdf or image file

        Returns:
            ExtractionResult with transactions and metadata
        """
        file_path = Path(file_path)
        logger.info(f"Processing statement: {file_path.name}")
        start_time = time.time()

        try:
            transactions, method, confidence, warnings = self._extract_and_parse(file_path)
        except Exception as e:
            logger.exception(f"Import failed: {e}")
            result = ExtractionResult(
                transactions=[],
                success=False,
                extraction_method="none",
                source=file_path.name,
                error_message=str(e),
                processing_time=time.time() - start_time
            )
            self._audit(result)
            return result

        result = self._create_result(transactions, method, file_path.name, start_time, confidence)
        result.warnings[:0] = warnings
        self._audit(result)

        logger.info(
            f"Processing complete in {result.processing_time:.2f} seconds: "
            f"{result.transaction_count} transactions via {method}"
        )
        return result

    def _extract_and_parse(self, file_path: Path) -> tuple:
        """
        Run the extract/parse phases with OCR fallback.

        Returns:
            Tuple of (transactions, method_name, text_confidence, warnings)
        """
        warnings: List[str] = []

        if self.text_file_extractor.can_handle(file_path):
            text, confidence = self.text_file_extractor.extract(file_path)
            return self.parser.parse(text), "text", confidence, warnings

        transactions: List[ParsedTransaction] = []
        method = "none"
        confidence = 0.0

        if self.text_extractor.can_handle(file_path):
            logger.info("Phase 1: EXTRACT (text layer)")
            text, confidence = self.text_extractor.extract(file_path)
            method = "pdfplumber"

            logger.info("Phase 2: TRANSFORM")
            transactions = self.parser.parse(text)
            if transactions:
                return transactions, method, confidence, warnings

        if not self.ocr_enabled:
            if method == "none":
                raise ValueError(f"Unsupported file type: {file_path.suffix or file_path.name}")
            return transactions, method, confidence, warnings

        if not self.ocr_extractor.can_handle(file_path):
            raise ValueError(f"Unsupported file type: {file_path.suffix or file_path.name}")

        # Independent second pass over OCR text
        logger.info("Phase 3: OCR fallback")
        try:
            ocr_text, ocr_confidence = self.ocr_extractor.extract(file_path)
        except Exception as e:
            if method == "none":
                raise
            logger.warning(f"OCR fallback failed: {e}")
            warnings.append(f"OCR fallback failed: {e}")
            return transactions, method, confidence, warnings

        return self.parser.parse(ocr_text), "ocr", ocr_confidence, warnings

    def _create_result(
        self,
        transactions: List[ParsedTransaction],
        method: str,
        source: str,
        start_time: float,
        confidence: float = 100.0
    ) -> ExtractionResult:
        warnings = [] if transactions else [NO_TRANSACTIONS_WARNING]
        return ExtractionResult(
            transactions=transactions,
            success=True,
            extraction_method=method,
            source=source,
            text_confidence=confidence,
            warnings=warnings,
            processing_time=time.time() - start_time
        )

    def _audit(self, result: ExtractionResult) -> None:
        log_extraction_audit(
            source=result.source or "unknown",
            method=result.extraction_method,
            success=result.success,
            transaction_count=result.transaction_count,
            confidence=result.text_confidence,
            error=result.error_message
        )
