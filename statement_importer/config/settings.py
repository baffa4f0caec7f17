"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
DATA_DIR = PROJECT_ROOT / "data"
VOCABULARY_DIR = Path(os.getenv("VOCABULARY_DIR", str(DATA_DIR / "vocabularies")))
OUTPUT_DIR = PROJECT_ROOT / "output"
LOGS_DIR = PROJECT_ROOT / "logs"

# Processing settings
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "50"))
# Read at most this many PDF pages (0 reads every page)
PDF_MAX_PAGES = int(os.getenv("PDF_MAX_PAGES", "0")) or None

# Generic numeric dates are month-first (03/14/2024) unless told otherwise
DATE_DAYFIRST = _env_flag("DATE_DAYFIRST", "false")

# OCR fallback
OCR_ENABLED = _env_flag("OCR_ENABLED", "true")
OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")
OCR_DPI = int(os.getenv("OCR_DPI", "200"))
TESSERACT_PATH = os.getenv("TESSERACT_PATH", "")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = Path(os.getenv("LOG_FILE", str(LOGS_DIR / "importer.log")))

# Currency settings
DEFAULT_CURRENCY = "USD"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€"
}
