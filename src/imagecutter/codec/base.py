"""Image codec interface used by the extraction driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..planning.model import ImageDimensions, Rectangle
from .formats import OutputFormat


@dataclass(frozen=True)
class ImageMetadata:
    """Header information read from an encoded image."""
    format: str         # lowercase source format, e.g. "png" or "jpeg"
    width: int
    height: int

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(width=self.width, height=self.height)


@runtime_checkable
class ImageCodec(Protocol):
    """Decodes image headers and extracts re-encoded regions.

    Implementations raise ``MetadataError`` from ``decode_metadata`` and
    ``CodecError`` from ``extract_region``.
    """

    def decode_metadata(self, data: bytes) -> ImageMetadata:
        ...

    def extract_region(self, data: bytes, rectangle: Rectangle, output_format: OutputFormat) -> bytes:
        ...
