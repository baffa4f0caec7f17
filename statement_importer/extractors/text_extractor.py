"""Plain text input (already-extracted statement text)."""
import logging
from pathlib import Path

from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class TextFileExtractor(BaseExtractor):
    """Read statement text that was extracted elsewhere."""

    supported_suffixes = frozenset({'.txt', '.text'})

    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        Read a UTF-8 text file; undecodable bytes are replaced.

        Returns:
            Tuple of (text, 100.0)

        Raises:
            ExtractionError: If the file cannot be read
        """
        self.validate_file(file_path)

        try:
            text = file_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            raise ExtractionError(f"Could not read text file {file_path}: {e}") from e

        logger.info(f"Read {len(text)} characters from {file_path.name}")
        return text, 100.0
