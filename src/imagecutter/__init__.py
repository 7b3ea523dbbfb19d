"""Slice or crop raster images into deterministic sub-regions."""

from .errors import (
    CodecError,
    GeometryError,
    ImageCutterError,
    MetadataError,
    ParameterError,
    PlanError,
)
from .params import CutParameters
from .pipeline import ItemResult, cut_image, cut_items

__version__ = "0.1.0"

__all__ = [
    "CodecError",
    "CutParameters",
    "GeometryError",
    "ImageCutterError",
    "ItemResult",
    "MetadataError",
    "ParameterError",
    "PlanError",
    "cut_image",
    "cut_items",
]
