"""
Entry points composing metadata read, planning and extraction.

``cut_image`` handles one image and raises on the first problem.
``cut_items`` runs a batch, isolating failures so one bad image does not stop
the images after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .codec import SUPPORTED_SOURCE_FORMATS, ImageCodec, PillowCodec
from .errors import ImageCutterError, MetadataError
from .extraction import OutputRecord, execute
from .logging import get_logger
from .params import CutParameters
from .planning import ImageDimensions, plan

logger = get_logger(__name__)


@dataclass(frozen=True)
class ItemResult:
    """Outcome of cutting one image in a batch."""
    item_index: int
    records: List[OutputRecord] = field(default_factory=list)
    error: Optional[ImageCutterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_dimensions(
    image_bytes: bytes,
    codec: ImageCodec,
    item_index: Optional[int] = None,
) -> ImageDimensions:
    """
    Read and validate the source image header.

    Raises:
        MetadataError: If the image is unreadable or not PNG, JPEG or WebP
    """
    try:
        metadata = codec.decode_metadata(image_bytes)
    except MetadataError as exc:
        if exc.item_index is None:
            exc.item_index = item_index
        raise

    if metadata.format not in SUPPORTED_SOURCE_FORMATS:
        raise MetadataError(f"Unsupported image format: {metadata.format}", item_index)

    if not metadata.width or not metadata.height or metadata.width < 0 or metadata.height < 0:
        raise MetadataError("Unable to read image metadata", item_index)

    return metadata.dimensions


def cut_image(
    image_bytes: bytes,
    params: CutParameters,
    codec: Optional[ImageCodec] = None,
    item_index: Optional[int] = None,
) -> List[OutputRecord]:
    """
    Slice or crop one encoded image.

    Args:
        image_bytes: Encoded PNG, JPEG or WebP image
        params: Operation and output options
        codec: Codec to use (defaults to PillowCodec)
        item_index: Position of the image in the caller's batch

    Returns:
        Output records in plan order

    Raises:
        MetadataError: If the image header is unusable
        ParameterError, GeometryError: If no valid plan exists
        CodecError: If extraction fails
    """
    if codec is None:
        codec = PillowCodec()

    dimensions = read_dimensions(image_bytes, codec, item_index)
    entries = plan(dimensions, params.operation, params.start_index, item_index)
    return execute(
        image_bytes,
        dimensions,
        entries,
        params.output_format,
        codec,
        file_name_prefix=params.file_name_prefix,
        item_index=item_index,
    )


def cut_items(
    items: Iterable[Tuple[bytes, CutParameters]],
    codec: Optional[ImageCodec] = None,
) -> List[ItemResult]:
    """
    Cut a sequence of images, one after another.

    A failing image yields an ItemResult carrying the error and no records;
    processing continues with the next image.
    """
    if codec is None:
        codec = PillowCodec()

    results: List[ItemResult] = []
    for item_index, (image_bytes, params) in enumerate(items):
        try:
            records = cut_image(image_bytes, params, codec, item_index)
        except ImageCutterError as exc:
            logger.warning(f"Item {item_index} failed: {exc}")
            results.append(ItemResult(item_index=item_index, error=exc))
            continue
        results.append(ItemResult(item_index=item_index, records=records))

    failed = sum(1 for result in results if not result.ok)
    logger.info(f"Processed {len(results)} items, {failed} failed")
    return results
