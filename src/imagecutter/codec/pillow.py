"""Pillow-backed implementation of the image codec."""

from __future__ import annotations

import io
from typing import Optional, Tuple

from PIL import Image

from ..errors import CodecError, MetadataError
from ..logging import get_logger
from ..planning.model import Rectangle
from .base import ImageMetadata
from .formats import OutputFormat

logger = get_logger(__name__)

# Pillow reports multi-picture JPEGs (common from phone cameras) as MPO.
_FORMAT_ALIASES = {"mpo": "jpeg"}


class PillowCodec:
    """
    Decode and re-encode images in memory with Pillow.

    The most recently decoded source is kept, so cutting N regions from one
    image decodes it once.
    """

    def __init__(self) -> None:
        self._decoded: Optional[Tuple[bytes, Image.Image]] = None

    def decode_metadata(self, data: bytes) -> ImageMetadata:
        """
        Read format and size from an encoded image.

        Raises:
            MetadataError: If the bytes cannot be identified as an image
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                fmt = (img.format or "").lower()
                width, height = img.size
        except Exception as exc:
            raise MetadataError(f"Unable to read image metadata: {exc}") from exc

        fmt = _FORMAT_ALIASES.get(fmt, fmt)
        if not fmt or not width or not height:
            raise MetadataError("Unable to read image metadata")

        logger.debug(f"Decoded {fmt} header: {width}x{height}")
        return ImageMetadata(format=fmt, width=width, height=height)

    def extract_region(self, data: bytes, rectangle: Rectangle, output_format: OutputFormat) -> bytes:
        """
        Cut ``rectangle`` out of the encoded image and encode it as ``output_format``.

        Raises:
            CodecError: If decoding, cropping or encoding fails, or the
                rectangle is not fully inside the image
        """
        try:
            img = self._decode(data)
            width, height = img.size
            if rectangle.right > width or rectangle.bottom > height:
                raise CodecError(
                    f"Region {rectangle.box} lies outside the {width}x{height} image"
                )
            region = img.crop(rectangle.box)
            region = _prepare_mode(region, output_format)

            buffer = io.BytesIO()
            region.save(buffer, format=output_format.codec_format)
        except CodecError:
            raise
        except Exception as exc:
            raise CodecError(f"Failed to extract region {rectangle.box}: {exc}") from exc

        return buffer.getvalue()

    def _decode(self, data: bytes) -> Image.Image:
        if self._decoded is not None:
            source, image = self._decoded
            if source is data or source == data:
                return image

        with Image.open(io.BytesIO(data)) as img:
            img.load()
            image = img.copy()
        self._decoded = (data, image)
        logger.debug(f"Decoded {image.width}x{image.height} source")
        return image


def _prepare_mode(image: Image.Image, output_format: OutputFormat) -> Image.Image:
    """Convert pixel modes the target encoder cannot write."""
    has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info

    if output_format is OutputFormat.JPG:
        if image.mode not in ("RGB", "L"):
            return image.convert("RGB")
        return image

    if output_format is OutputFormat.WEBP:
        if image.mode not in ("RGB", "RGBA"):
            return image.convert("RGBA" if has_alpha else "RGB")
        return image

    # PNG cannot store CMYK
    if image.mode == "CMYK":
        return image.convert("RGB")
    return image
