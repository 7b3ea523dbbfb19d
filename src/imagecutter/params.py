"""
Per-image cutting parameters and conversion from flat host parameters.

Workflow hosts pass every option as a flat mapping in which ``0`` means "auto"
for slice sizes and ``-1`` means "auto" for crop coordinates. Those sentinels
are translated to ``None`` here so the planner only ever sees explicit values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from .codec.formats import OutputFormat
from .config import Settings
from .errors import ParameterError
from .planning.model import Anchor, CropSpec, Direction, Operation, SliceSpec

E = TypeVar("E", bound=Enum)

_DEFAULTS = Settings()

_BOOL_STRINGS = {"true": True, "false": False}


@dataclass(frozen=True)
class CutParameters:
    """Everything needed to cut one image."""
    operation: Operation
    output_format: OutputFormat = OutputFormat.PNG
    file_name_prefix: str = _DEFAULTS.file_name_prefix
    start_index: int = _DEFAULTS.start_index

    def __post_init__(self) -> None:
        if self.start_index < 0:
            raise ParameterError(f"Start index must be zero or greater, got {self.start_index}")

    @classmethod
    def from_node_parameters(cls, params: Mapping[str, Any]) -> CutParameters:
        """
        Build parameters from the host's flat option names.

        Missing keys fall back to the host defaults (slice into 4 horizontal
        PNG parts named ``image_1.png`` onwards).

        Raises:
            ParameterError: For unknown option values or malformed numbers
        """
        operation_name = str(params.get("operation", "slice")).lower()

        if operation_name == "slice":
            operation: Operation = SliceSpec(
                number_of_slices=_as_int(params, "numberOfSlices", _DEFAULTS.number_of_slices),
                direction=_as_enum(params, "direction", Direction, Direction.HORIZONTAL),
                slice_width=_auto_unless_positive(_as_int(params, "sliceWidth", 0)),
                slice_height=_auto_unless_positive(_as_int(params, "sliceHeight", 0)),
                allow_remainder=_as_bool(params, "allowRemainder", False),
            )
        elif operation_name == "crop":
            operation = CropSpec(
                width=_as_int(params, "cropWidth", 0),
                height=_as_int(params, "cropHeight", 0),
                x=_auto_if_negative(_as_int(params, "cropX", -1)),
                y=_auto_if_negative(_as_int(params, "cropY", -1)),
                anchor=_as_enum(params, "anchor", Anchor, Anchor.CENTER),
            )
        else:
            raise ParameterError(f"Unsupported operation: {operation_name}")

        return cls(
            operation=operation,
            output_format=OutputFormat.parse(params.get("outputFormat", _DEFAULTS.output_format)),
            file_name_prefix=str(params.get("fileNamePrefix", _DEFAULTS.file_name_prefix)),
            start_index=_as_int(params, "startIndex", _DEFAULTS.start_index),
        )


def _as_int(params: Mapping[str, Any], key: str, default: int) -> int:
    value = params.get(key, default)
    if isinstance(value, bool):
        raise ParameterError(f"Parameter {key} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"Parameter {key} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ParameterError(f"Parameter {key} must be finite, got {value!r}")
    return math.floor(number)


def _as_bool(params: Mapping[str, Any], key: str, default: bool) -> bool:
    value = params.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ParameterError(f"Parameter {key} must be true or false, got {value!r}")


def _as_enum(params: Mapping[str, Any], key: str, enum_type: Type[E], default: E) -> E:
    value = params.get(key, default)
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_type)
        raise ParameterError(f"Unsupported {key}: {value} (expected one of {choices})") from exc


def _auto_unless_positive(value: int) -> Optional[int]:
    return value if value > 0 else None


def _auto_if_negative(value: int) -> Optional[int]:
    return value if value >= 0 else None
