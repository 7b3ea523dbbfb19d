"""Pure geometry: compute and validate the rectangles to extract from an image."""

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
from .planner import plan, plan_crop, plan_slices

__all__ = [
    "Anchor",
    "CropSpec",
    "Direction",
    "ImageDimensions",
    "Operation",
    "PlanEntry",
    "Rectangle",
    "SliceSpec",
    "plan",
    "plan_crop",
    "plan_slices",
]
