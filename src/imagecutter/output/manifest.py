"""
File output and JSON manifest for cut images.

Records are written flat into one directory under their synthesized file
names; ``manifest.json`` next to them lists every output with its geometry.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..extraction.driver import OutputRecord
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0.0"


@dataclass(frozen=True)
class ManifestItem:
    """Single output file in the manifest."""
    index: int                              # Output index (start index + position)
    file_name: str                          # Output file name
    operation: str                          # "slice" or "crop"
    width: int                              # Region width in pixels
    height: int                             # Region height in pixels
    mime_type: str                          # MIME type of the encoded file
    size_bytes: int                         # Encoded size
    file_path: Optional[str] = None         # Path to saved file, if written

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    """Complete manifest describing the outputs cut from one source image."""
    version: str                            # Manifest format version
    source_image: str                       # Source image path or name
    extraction_timestamp: str               # When extraction was performed
    total_items: int                        # Number of outputs
    summary: Dict[str, Any]                 # Summary statistics
    items: List[ManifestItem]               # Individual outputs

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "source_image": self.source_image,
            "extraction_timestamp": self.extraction_timestamp,
            "total_items": self.total_items,
            "summary": self.summary,
            "items": [item.to_dict() for item in self.items],
        }


def save_records(records: Sequence[OutputRecord], output_dir: Path) -> Dict[int, Path]:
    """
    Write each record's encoded bytes to ``output_dir / record.file_name``.

    Returns:
        Mapping of output index to written path
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths: Dict[int, Path] = {}

    for record in records:
        path = output_dir / record.file_name
        path.write_bytes(record.data)
        paths[record.index] = path
        logger.debug(f"Saved {record.file_name} ({len(record.data)} bytes)")

    logger.info(f"Saved {len(paths)} files to {output_dir}")
    return paths


def build_manifest(
    source_image: Path,
    records: Sequence[OutputRecord],
    path_mapping: Optional[Dict[int, Path]] = None,
) -> Manifest:
    """
    Build a manifest from output records.

    Args:
        source_image: Path (or name) of the image the records were cut from
        records: Output records in output order
        path_mapping: Mapping of output index to saved file path

    Returns:
        Manifest object
    """
    path_mapping = path_mapping or {}
    items = []
    for record in records:
        saved_path = path_mapping.get(record.index)
        items.append(
            ManifestItem(
                index=record.index,
                file_name=record.file_name,
                operation=record.operation,
                width=record.width,
                height=record.height,
                mime_type=record.mime_type,
                size_bytes=len(record.data),
                file_path=str(saved_path) if saved_path else None,
            )
        )

    manifest = Manifest(
        version=MANIFEST_VERSION,
        source_image=str(source_image),
        extraction_timestamp=datetime.now().isoformat(),
        total_items=len(items),
        summary=_generate_summary(items),
        items=items,
    )

    logger.info(f"Built manifest with {len(items)} items")
    return manifest


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """
    Write manifest to ``manifest.json`` in the output directory.

    Returns:
        Path to the written manifest file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"

    try:
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.error(f"Failed to write manifest to {manifest_path}: {exc}")
        raise

    logger.info(f"Wrote manifest to {manifest_path}")
    return manifest_path


def load_manifest_json(manifest_path: Path) -> Manifest:
    """Load a manifest written by ``write_manifest_json``."""
    with open(manifest_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    items = [ManifestItem(**item_data) for item_data in data.get("items", [])]
    manifest = Manifest(
        version=data["version"],
        source_image=data["source_image"],
        extraction_timestamp=data["extraction_timestamp"],
        total_items=data["total_items"],
        summary=data["summary"],
        items=items,
    )

    logger.info(f"Loaded manifest from {manifest_path} with {len(items)} items")
    return manifest


def _generate_summary(items: List[ManifestItem]) -> Dict[str, Any]:
    """Generate summary statistics for the manifest."""
    total = len(items)
    if total == 0:
        return {"total_items": 0}

    operations: Dict[str, int] = {}
    for item in items:
        operations[item.operation] = operations.get(item.operation, 0) + 1

    return {
        "total_items": total,
        "operations": operations,
        "total_bytes": sum(item.size_bytes for item in items),
        "total_area": sum(item.width * item.height for item in items),
        "index_range": [items[0].index, items[-1].index],
    }
