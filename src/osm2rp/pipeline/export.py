"""
Exporter - RapidPro GeoJSON writer

Serializes TargetDocuments to the ``{country}admin{n}_simplified.json`` files
RapidPro's location import expects.
"""

import json
import logging
from pathlib import Path

from ..domain.enums import AdminTier
from ..domain.models import TargetDocument
from ..types import WriteError

logger = logging.getLogger(__name__)


def generate_export_filename(country_platform_id: str, tier: AdminTier) -> str:
    """
    Filename for one tier, e.g. ``R192798admin1_simplified.json``.

    Args:
        country_platform_id: RapidPro ID of the country feature
        tier: Administrative tier being written
    """
    return f"{country_platform_id}{tier.file_tag}_simplified.json"


def serialize(document: TargetDocument) -> str:
    """Compact JSON in schema key order, non-ASCII names kept as-is."""
    return json.dumps(document.model_dump(mode="json"), ensure_ascii=False, separators=(",", ":"))


class Exporter:
    """
    Write RapidPro documents into an existing output directory.

    The directory is not created; a missing directory is a WriteError like
    any other filesystem failure.
    """

    def __init__(self, out_dir: Path):
        """
        Args:
            out_dir: Output directory
        """
        self.out_dir = Path(out_dir)

    def write(self, document: TargetDocument, filename: str) -> Path:
        """
        Write one document.

        Args:
            document: Document to serialize
            filename: Bare filename inside the output directory

        Returns:
            Path to the created file

        Raises:
            WriteError: On any filesystem failure
        """
        output_path = self.out_dir / filename
        payload = serialize(document)

        try:
            output_path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise WriteError(output_path, e.strerror or str(e)) from e

        logger.info(f"Wrote {len(document.features)} features to {output_path}")
        return output_path
