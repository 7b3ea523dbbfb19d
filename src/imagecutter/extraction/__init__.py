"""Run extraction plans through the image codec."""

from .driver import OutputRecord, execute, make_file_name

__all__ = ["OutputRecord", "execute", "make_file_name"]
