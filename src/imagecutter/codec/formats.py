"""Supported source and output image formats."""

from __future__ import annotations

from enum import Enum

from ..errors import ParameterError

# Formats accepted as input, as reported by Pillow's ``Image.format`` (lowercased).
SUPPORTED_SOURCE_FORMATS = frozenset({"png", "jpeg", "webp"})


class OutputFormat(Enum):
    """Output encodings with their codec tag and MIME type."""
    PNG = "png"
    JPG = "jpg"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def codec_format(self) -> str:
        """Format name understood by ``PIL.Image.save``."""
        return _CODEC_FORMATS[self]

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            choices = ", ".join(f.value for f in cls)
            raise ParameterError(f"Unsupported output format: {value} (expected one of {choices})") from exc


_CODEC_FORMATS = {
    OutputFormat.PNG: "PNG",
    OutputFormat.JPG: "JPEG",
    OutputFormat.WEBP: "WEBP",
}

_MIME_TYPES = {
    OutputFormat.PNG: "image/png",
    OutputFormat.JPG: "image/jpeg",
    OutputFormat.WEBP: "image/webp",
}
