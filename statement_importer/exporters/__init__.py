"""Export imported transactions."""
from datetime import datetime
from pathlib import Path
from typing import Optional

from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

EXPORTERS = {
    'json': JSONExporter,
    'xlsx': ExcelExporter,
}


def get_exporter(export_format: str):
    """
    Get an exporter instance for a format name.

    Raises:
        ValueError: If the format is not supported
    """
    exporter_class = EXPORTERS.get(export_format.lower())
    if exporter_class is None:
        supported = ', '.join(EXPORTERS)
        raise ValueError(f"Unsupported export format: {export_format}. Supported formats: {supported}")
    return exporter_class()


def generate_output_filename(
    source: str,
    export_format: str,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Generate standardized output filename.

    Format: {source-stem}_{YYYYMMDD-HHMMSS}.{format}

    Args:
        source: Input file name or label
        export_format: File extension (json, xlsx)
        output_dir: Output directory (default: ./output)

    Returns:
        Path for output file
    """
    from ..config.settings import OUTPUT_DIR

    if output_dir is None:
        output_dir = OUTPUT_DIR

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    stem = Path(source).stem or "statement"
    return Path(output_dir) / f"{stem.lower()}_{timestamp}.{export_format.lower()}"


__all__ = ['ExcelExporter', 'JSONExporter', 'get_exporter', 'generate_output_filename']
