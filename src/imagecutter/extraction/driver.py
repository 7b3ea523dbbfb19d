"""
Extraction driver: run a plan through the image codec.

Rectangles are extracted one at a time in plan order and the output records
keep that order. The first failure aborts the remaining rectangles of the
image.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..codec.base import ImageCodec
from ..codec.formats import OutputFormat
from ..errors import CodecError, GeometryError
from ..logging import get_logger
from ..planning.model import ImageDimensions, OperationTag, PlanEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class OutputRecord:
    """One encoded region with the metadata handed back to the caller."""
    index: int
    width: int
    height: int
    operation: OperationTag
    data: bytes
    file_name: str
    mime_type: str

    def to_json(self) -> Dict[str, Any]:
        """Metadata part of the record, without the encoded bytes."""
        return {
            "index": self.index,
            "width": self.width,
            "height": self.height,
            "operation": self.operation,
        }


def make_file_name(prefix: str, index: int, output_format: OutputFormat) -> str:
    return f"{prefix}{index}.{output_format.extension}"


def execute(
    image_bytes: bytes,
    dimensions: ImageDimensions,
    plan: Sequence[PlanEntry],
    output_format: OutputFormat,
    codec: ImageCodec,
    file_name_prefix: str = "image_",
    item_index: Optional[int] = None,
) -> List[OutputRecord]:
    """
    Extract every planned rectangle and wrap the results as output records.

    Args:
        image_bytes: Encoded source image
        dimensions: Size of the source image the plan was computed for
        plan: Ordered plan entries
        output_format: Encoding for every extracted region
        codec: Codec used to cut and re-encode regions
        file_name_prefix: Prefix for synthesized file names
        item_index: Position of the image in the caller's batch

    Returns:
        One OutputRecord per plan entry, in plan order

    Raises:
        GeometryError: If an entry does not fit ``dimensions``
        CodecError: If the codec fails on any entry
    """
    records: List[OutputRecord] = []

    for entry in plan:
        rectangle = entry.rectangle
        if not rectangle.fits_within(dimensions):
            raise GeometryError(
                f"Region {rectangle.box} exceeds image bounds "
                f"{dimensions.width}x{dimensions.height}",
                item_index,
            )

        try:
            data = codec.extract_region(image_bytes, rectangle, output_format)
        except CodecError as exc:
            if exc.item_index is None:
                exc.item_index = item_index
            raise

        file_name = make_file_name(file_name_prefix, entry.index, output_format)
        records.append(
            OutputRecord(
                index=entry.index,
                width=rectangle.width,
                height=rectangle.height,
                operation=entry.operation,
                data=data,
                file_name=file_name,
                mime_type=output_format.mime_type,
            )
        )
        logger.debug(f"Extracted {file_name} ({rectangle.width}x{rectangle.height}, {len(data)} bytes)")

    logger.info(f"Extracted {len(records)} regions as {output_format.value}")
    return records
