"""
Region planning: turn image dimensions and an operation into rectangles.

Planning is pure. Every rejection is raised before any entry is returned, so
a caller either gets a complete plan or an exception, never a partial plan.

Horizontal and vertical slicing share one routine that works on an abstract
"along" axis and "cross" axis; vertical slicing runs it on the transposed
image and transposes the rectangles back. Crop positioning likewise resolves
x and y through the same anchored-offset helper.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import GeometryError, ParameterError
from ..logging import get_logger
from .model import (
    Anchor,
    CropSpec,
    Direction,
    ImageDimensions,
    Operation,
    PlanEntry,
    Rectangle,
    SliceSpec,
)

logger = get_logger(__name__)


def plan(
    dimensions: ImageDimensions,
    operation: Operation,
    start_index: int = 1,
    item_index: Optional[int] = None,
) -> List[PlanEntry]:
    """
    Compute the ordered extraction plan for one image.

    Args:
        dimensions: Size of the source image
        operation: SliceSpec or CropSpec describing what to cut
        start_index: Output index assigned to the first entry
        item_index: Position of the image in the caller's batch, attached to
            any error raised

    Returns:
        List of PlanEntry in output order

    Raises:
        ParameterError: If counts or sizes are malformed
        GeometryError: If the requested regions do not fit the image
    """
    if isinstance(operation, SliceSpec):
        return plan_slices(dimensions, operation, start_index, item_index)
    if isinstance(operation, CropSpec):
        return plan_crop(dimensions, operation, start_index, item_index)
    raise ParameterError(f"Unsupported operation: {operation!r}", item_index)


def plan_slices(
    dimensions: ImageDimensions,
    spec: SliceSpec,
    start_index: int = 1,
    item_index: Optional[int] = None,
) -> List[PlanEntry]:
    """Split the image into ``spec.number_of_slices`` strips along one axis."""
    if spec.number_of_slices < 1:
        raise ParameterError("Number of slices must be at least 1", item_index)

    if spec.direction is Direction.HORIZONTAL:
        frame = dimensions
        fixed_along, fixed_cross = spec.slice_width, spec.slice_height
        along_name, cross_name = "width", "height"
    else:
        frame = dimensions.transposed()
        fixed_along, fixed_cross = spec.slice_height, spec.slice_width
        along_name, cross_name = "height", "width"

    spans, cross_size = _slice_along(
        image_along=frame.width,
        image_cross=frame.height,
        count=spec.number_of_slices,
        fixed_along=fixed_along,
        fixed_cross=fixed_cross,
        allow_remainder=spec.allow_remainder,
        along_name=along_name,
        cross_name=cross_name,
        item_index=item_index,
    )

    entries = []
    for slice_index, (offset, size) in enumerate(spans):
        rectangle = Rectangle(left=offset, top=0, width=size, height=cross_size)
        if spec.direction is Direction.VERTICAL:
            rectangle = rectangle.transposed()
        entries.append(PlanEntry(rectangle=rectangle, index=start_index + slice_index, operation="slice"))

    logger.debug(
        f"Planned {len(entries)} {spec.direction.value} slices for "
        f"{dimensions.width}x{dimensions.height} image"
    )
    return entries


def _slice_along(
    image_along: int,
    image_cross: int,
    count: int,
    fixed_along: Optional[int],
    fixed_cross: Optional[int],
    allow_remainder: bool,
    along_name: str,
    cross_name: str,
    item_index: Optional[int],
) -> Tuple[List[Tuple[int, int]], int]:
    """
    Lay out ``count`` slices on the along axis.

    Returns:
        Tuple of ([(offset, size), ...] along the axis, size on the cross axis)
    """
    _require_positive(fixed_along, f"Slice {along_name}", item_index)
    _require_positive(fixed_cross, f"Slice {cross_name}", item_index)

    slice_size = fixed_along if fixed_along is not None else image_along // count
    cross_size = fixed_cross if fixed_cross is not None else image_cross

    if slice_size < 1:
        raise GeometryError(
            f"Slice {along_name} is too small for the selected number of slices", item_index
        )

    total = slice_size * count
    remainder = image_along - total
    if total > image_along:
        raise GeometryError(
            f"Slice {along_name} and number of slices exceed image {along_name}", item_index
        )

    if remainder != 0 and not allow_remainder:
        raise GeometryError(
            f"Image {along_name} is not divisible by number of slices", item_index
        )

    if cross_size > image_cross:
        raise GeometryError(f"Slice {cross_name} exceeds image {cross_name}", item_index)

    spans = [(i * slice_size, slice_size) for i in range(count)]
    if remainder:
        # The last slice absorbs every leftover pixel.
        offset, size = spans[-1]
        spans[-1] = (offset, size + remainder)

    return spans, cross_size


def plan_crop(
    dimensions: ImageDimensions,
    spec: CropSpec,
    start_index: int = 1,
    item_index: Optional[int] = None,
) -> List[PlanEntry]:
    """Plan a single crop at an explicit or anchor-resolved position."""
    if spec.width <= 0 or spec.height <= 0:
        raise ParameterError("Crop width and height are required", item_index)

    if spec.width > dimensions.width or spec.height > dimensions.height:
        raise GeometryError("Crop dimensions exceed image dimensions", item_index)

    x = spec.x if spec.x is not None else _anchored_offset(
        spec.anchor, dimensions.width, spec.width, start=Anchor.LEFT, end=Anchor.RIGHT
    )
    y = spec.y if spec.y is not None else _anchored_offset(
        spec.anchor, dimensions.height, spec.height, start=Anchor.TOP, end=Anchor.BOTTOM
    )

    if x < 0 or y < 0:
        raise GeometryError("Crop position is outside the image", item_index)

    if x + spec.width > dimensions.width or y + spec.height > dimensions.height:
        raise GeometryError("Crop area exceeds image boundaries", item_index)

    rectangle = Rectangle(left=x, top=y, width=spec.width, height=spec.height)
    logger.debug(f"Planned crop {rectangle} for {dimensions.width}x{dimensions.height} image")
    return [PlanEntry(rectangle=rectangle, index=start_index, operation="crop")]


def _anchored_offset(anchor: Anchor, image_size: int, crop_size: int, start: Anchor, end: Anchor) -> int:
    """
    Offset of a crop on one axis.

    ``start`` and ``end`` are the anchors that pin this axis to its first and
    last pixel. Any other anchor, including ones that belong to the other axis,
    centres the crop.
    """
    if anchor is start:
        return 0
    if anchor is end:
        return image_size - crop_size
    return (image_size - crop_size) // 2


def _require_positive(value: Optional[int], label: str, item_index: Optional[int]) -> None:
    if value is not None and value < 1:
        raise ParameterError(f"{label} must be positive when set, got {value}", item_index)
