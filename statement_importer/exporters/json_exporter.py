"""JSON exporter producing the transaction wire format."""
import json
import logging
from pathlib import Path

from ..models import ExtractionResult

logger = logging.getLogger(__name__)


class JSONExporter:
    """Write transactions as a JSON array of wire-shaped objects."""

    def render(self, result: ExtractionResult) -> str:
        return json.dumps([t.to_dict() for t in result.transactions], indent=2, ensure_ascii=False)

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        """
        Export transactions to a JSON file.

        Args:
            result: Extraction result to export
            output_path: Destination path

        Returns:
            Path to created file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result), encoding='utf-8')
        logger.info(f"JSON export complete: {output_path} ({result.transaction_count} transactions)")
        return output_path
