"""
Data model for region planning.

Every value here is immutable and created fresh for each image. Optional
sizes and positions use ``None`` for "derive it automatically".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

OperationTag = Literal["slice", "crop"]


class Direction(Enum):
    """Axis along which slices are laid out."""
    HORIZONTAL = "horizontal"   # slices side by side, split the width
    VERTICAL = "vertical"       # slices stacked, split the height


class Anchor(Enum):
    """Reference point used to position a crop without explicit coordinates."""
    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of a decoded image."""
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")

    def transposed(self) -> ImageDimensions:
        return ImageDimensions(width=self.height, height=self.width)


@dataclass(frozen=True)
class Rectangle:
    """Pixel-aligned region of an image (left, top, width, height)."""
    left: int
    top: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.left < 0 or self.top < 0:
            raise ValueError(f"Rectangle origin must be non-negative, got ({self.left}, {self.top})")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Rectangle size must be positive, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, upper, right, lower) tuple as expected by ``PIL.Image.crop``."""
        return (self.left, self.top, self.right, self.bottom)

    def fits_within(self, dimensions: ImageDimensions) -> bool:
        return self.right <= dimensions.width and self.bottom <= dimensions.height

    def transposed(self) -> Rectangle:
        return Rectangle(left=self.top, top=self.left, width=self.height, height=self.width)


@dataclass(frozen=True)
class SliceSpec:
    """Equal-parts slicing along one axis."""
    number_of_slices: int
    direction: Direction = Direction.HORIZONTAL
    slice_width: Optional[int] = None       # None = derived from the image
    slice_height: Optional[int] = None      # None = derived from the image
    allow_remainder: bool = False


@dataclass(frozen=True)
class CropSpec:
    """Single rectangular crop, positioned explicitly or by anchor."""
    width: int
    height: int
    x: Optional[int] = None                 # None = resolved from anchor
    y: Optional[int] = None                 # None = resolved from anchor
    anchor: Anchor = Anchor.CENTER


Operation = Union[SliceSpec, CropSpec]


@dataclass(frozen=True)
class PlanEntry:
    """One rectangle to extract, with its output index."""
    rectangle: Rectangle
    index: int
    operation: OperationTag
