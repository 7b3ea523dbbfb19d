"""Exceptions raised while planning and extracting image regions."""

from __future__ import annotations

from typing import Optional


class ImageCutterError(Exception):
    """Base class for all imagecutter failures.

    Attributes:
        message: Human-readable description of the failure
        item_index: Position of the offending image in the caller's batch,
            if known
    """

    def __init__(self, message: str, item_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index

    def __str__(self) -> str:
        if self.item_index is not None:
            return f"{self.message} (item {self.item_index})"
        return self.message


class PlanError(ImageCutterError):
    """Raised when no valid extraction plan exists for an image."""


class ParameterError(PlanError):
    """Raised for malformed counts, sizes or option values."""


class GeometryError(PlanError):
    """Raised when a computed rectangle does not fit inside the image."""


class MetadataError(ImageCutterError):
    """Raised when an image cannot be decoded or is not a supported format."""


class CodecError(ImageCutterError):
    """Raised when extracting or re-encoding a region fails."""
