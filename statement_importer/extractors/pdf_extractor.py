"""Native PDF text layer extraction (pdfplumber)."""
import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

import pdfplumber

from ..config.settings import PDF_MAX_PAGES
from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class PDFExtractor(BaseExtractor):
    """
    Read the text layer of a PDF statement page by page.

    Scanned statements have no text layer and come back empty; the
    pipeline then retries with OCR.
    """

    supported_suffixes = frozenset({'.pdf'})

    def __init__(self, x_tolerance: float = 3, y_tolerance: float = 3, max_pages: Optional[int] = PDF_MAX_PAGES):
        """
        Initialize PDF extractor.

        Args:
            x_tolerance: Horizontal gap (pt) below which characters join a word
            y_tolerance: Vertical gap (pt) below which characters share a line
            max_pages: Only read the first N pages (all if None; PDF_MAX_PAGES setting by default)
        """
        super().__init__()
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance
        self.max_pages = max_pages

    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        Join the text of every page, separated by a blank line.

        Args:
            file_path: Path to PDF file

        Returns:
            Tuple of (text, confidence); confidence is the share of pages
            that carried any text

        Raises:
            ExtractionError: If the PDF cannot be opened or read
        """
        self.validate_file(file_path)
        if not self.can_handle(file_path):
            raise ExtractionError(f"File is not a PDF: {file_path}")

        logger.info(f"Reading PDF text layer: {file_path.name}")

        try:
            with pdfplumber.open(file_path) as pdf:
                pages = list(self._page_texts(pdf))
        except Exception as e:
            logger.error(f"Could not read {file_path.name}: {e}")
            raise ExtractionError(f"PDF extraction failed: {e}") from e

        texts = [text for _, text in pages if text.strip()]
        if not texts:
            logger.warning(f"{file_path.name} has no text layer (scanned?)")
            return "", 0.0

        confidence = len(texts) / len(pages) * 100.0
        logger.info(f"Text layer found on {len(texts)}/{len(pages)} pages ({confidence:.0f}%)")

        return "\n\n".join(texts), confidence

    def _page_texts(self, pdf) -> Iterator[Tuple[int, str]]:
        """Yield (page_number, text) for each page read."""
        pages = pdf.pages if self.max_pages is None else pdf.pages[:self.max_pages]
        for page_num, page in enumerate(pages, start=1):
            text = page.extract_text(x_tolerance=self.x_tolerance, y_tolerance=self.y_tolerance) or ""
            if not text.strip():
                logger.debug(f"Page {page_num}: no text")
            yield page_num, text
