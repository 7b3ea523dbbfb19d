"""Image codec service: metadata reads and region re-encoding."""

from .base import ImageCodec, ImageMetadata
from .formats import SUPPORTED_SOURCE_FORMATS, OutputFormat
from .pillow import PillowCodec

__all__ = [
    "ImageCodec",
    "ImageMetadata",
    "OutputFormat",
    "PillowCodec",
    "SUPPORTED_SOURCE_FORMATS",
]
