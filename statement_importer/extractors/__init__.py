"""Extractors that turn statement files into text."""
from .base_extractor import BaseExtractor, ExtractionError
from .pdf_extractor import PDFExtractor
from .ocr_extractor import OCRExtractor
from .text_extractor import TextFileExtractor

__all__ = ['BaseExtractor', 'ExtractionError', 'PDFExtractor', 'OCRExtractor', 'TextFileExtractor']
