"""Logging setup and the per-import audit line."""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.settings import LOG_LEVEL, LOG_FILE

ROOT_LOGGER_NAME = "statement_importer"
AUDIT_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.audit"

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def _file_handler(log_file: Path) -> Optional[logging.Handler]:
    """DEBUG-level file handler, or None if the log file cannot be opened."""
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        logging.getLogger(ROOT_LOGGER_NAME).warning(f"File logging disabled ({log_file}): {e}")
        return None

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = LOG_LEVEL,
    log_file: Optional[Path] = LOG_FILE
) -> logging.Logger:
    """
    Configure the package logger once.

    Every module logs through ``logging.getLogger(__name__)`` under the
    statement_importer namespace, so handlers attached here see all of it.
    Console output goes to stderr at INFO and above (stdout is reserved
    for command output such as JSON); the file gets everything from DEBUG.

    Args:
        name: Logger name
        level: Logger level name (LOG_LEVEL setting by default)
        log_file: Debug log path, or None for console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file is not None:
        handler = _file_handler(Path(log_file))
        if handler is not None:
            logger.addHandler(handler)

    return logger


def log_extraction_audit(
    source: str,
    method: str,
    success: bool,
    transaction_count: int = 0,
    confidence: float = 0.0,
    error: Optional[str] = None
) -> None:
    """
    Write one structured audit line for a statement import.

    Args:
        source: File name or label of the imported text
        method: Text source used (text, pdfplumber, ocr, none)
        success: Whether the import succeeded
        transaction_count: Number of transactions extracted
        confidence: Text extraction confidence (0-100)
        error: Error message if the import failed
    """
    fields = {
        "timestamp": datetime.now().isoformat(timespec='seconds'),
        "source": source,
        "method": method,
        "success": success,
        "transactions": transaction_count,
        "confidence": f"{confidence:.0f}%",
    }
    if error:
        fields["error"] = error

    logging.getLogger(AUDIT_LOGGER_NAME).info(
        "AUDIT: " + " | ".join(f"{key}={value}" for key, value in fields.items())
    )
