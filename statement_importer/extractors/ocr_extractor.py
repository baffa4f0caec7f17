"""OCR text extraction for scanned statements (Tesseract)."""
import logging
from pathlib import Path
from typing import List, Optional

import pytesseract
from pdf2image import convert_from_path
from PIL import Image

from ..config.settings import OCR_DPI, OCR_LANGUAGE, TESSERACT_PATH
from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class OCRExtractor(BaseExtractor):
    """
    Extract text by rendering pages to images and running Tesseract.

    Slower than reading the PDF text layer; the pipeline only uses it when
    the text layer yields no transactions.

    Requires: tesseract (binary) and poppler (for pdf2image)
    """

    IMAGE_EXTENSIONS = frozenset({'.png', '.jpg', '.jpeg', '.tiff', '.tif', '.bmp'})
    supported_suffixes = IMAGE_EXTENSIONS | {'.pdf'}

    def __init__(
        self,
        language: str = OCR_LANGUAGE,
        dpi: int = OCR_DPI,
        tesseract_cmd: Optional[str] = TESSERACT_PATH or None
    ):
        """
        Initialize OCR extractor.

        Args:
            language: Tesseract language code
            dpi: Rendering resolution for PDF pages
            tesseract_cmd: Path to the tesseract binary (PATH lookup if None)
        """
        super().__init__()
        self.language = language
        self.dpi = dpi

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        OCR every page of the document.

        Args:
            file_path: Path to PDF or image file

        Returns:
            Tuple of (extracted_text, confidence_score)

        Raises:
            ExtractionError: If rendering or OCR fails
        """
        self.validate_file(file_path)

        if not self.can_handle(file_path):
            raise ExtractionError(f"Unsupported file type for OCR: {file_path}")

        logger.info(f"Running OCR on: {file_path.name}")

        images = self._load_images(file_path)
        if not images:
            return "", 0.0

        chunks = []
        for page_num, image in enumerate(images, start=1):
            try:
                text = pytesseract.image_to_string(image, lang=self.language)
            except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
                raise ExtractionError(f"OCR failed on page {page_num}: {e}") from e

            logger.debug(f"OCR page {page_num}: {len(text)} chars")
            chunks.append(text or "")

        pages_with_text = sum(1 for chunk in chunks if chunk.strip())
        extracted_text = "\n".join(chunks)

        if not extracted_text.strip():
            logger.warning("OCR produced no text")
            return "", 0.0

        confidence = (pages_with_text / len(chunks)) * 100.0
        logger.info(f"OCR extracted {len(extracted_text)} chars from {pages_with_text}/{len(chunks)} pages")

        return extracted_text, confidence

    def _load_images(self, file_path: Path) -> List[Image.Image]:
        """
        Render a PDF to page images, or open a single image file.

        Args:
            file_path: Path to PDF or image

        Returns:
            List of PIL Image objects
        """
        try:
            if file_path.suffix.lower() == '.pdf':
                images = convert_from_path(file_path, dpi=self.dpi, fmt='png')
                logger.debug(f"Converted PDF to {len(images)} images")
                return images

            with Image.open(file_path) as image:
                image.load()
                return [image.copy()]
        except Exception as e:
            raise ExtractionError(f"Failed to load images for OCR: {e}") from e
