"""Base extractor abstract class."""
from abc import ABC, abstractmethod
from pathlib import Path

from ..config.settings import MAX_FILE_SIZE_MB

BYTES_PER_MB = 1024 * 1024


class BaseExtractor(ABC):
    """
    Turn a statement file into one string of linear text.

    Extractors know nothing about transactions: the statement parser
    consumes whatever text they hand back. Subclasses list the file
    suffixes they accept in ``supported_suffixes``.
    """

    supported_suffixes: frozenset = frozenset()

    def __init__(self, max_file_size_mb: int = MAX_FILE_SIZE_MB):
        """
        Initialize the extractor.

        Args:
            max_file_size_mb: Refuse files larger than this
        """
        self.name = self.__class__.__name__
        self.max_bytes = max_file_size_mb * BYTES_PER_MB

    @abstractmethod
    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        Recover the text of a statement.

        Args:
            file_path: Path to the statement file

        Returns:
            Tuple of (text, confidence) with confidence in 0.0-100.0

        Raises:
            ExtractionError: If no text could be recovered
        """
        pass

    def can_handle(self, file_path: Path) -> bool:
        """True if the file suffix is one this extractor reads."""
        return Path(file_path).suffix.lower() in self.supported_suffixes

    def validate_file(self, file_path: Path) -> None:
        """
        Reject inputs that cannot be a statement before opening them.

        Raises:
            FileNotFoundError: If the path does not exist
            ValueError: If the path is not a regular file, is empty or too large
        """
        if not file_path.is_file():
            if file_path.exists():
                raise ValueError(f"Not a file: {file_path}")
            raise FileNotFoundError(f"File not found: {file_path}")

        size = file_path.stat().st_size
        if size == 0:
            raise ValueError(f"File is empty: {file_path}")

        if size > self.max_bytes:
            raise ValueError(
                f"File is {size / BYTES_PER_MB:.1f} MB, "
                f"limit is {self.max_bytes // BYTES_PER_MB} MB: {file_path}"
            )


class ExtractionError(Exception):
    """Raised when a file cannot be turned into text."""
    pass
