"""Write cut images and their manifest to disk."""

from .manifest import (
    Manifest,
    ManifestItem,
    build_manifest,
    load_manifest_json,
    save_records,
    write_manifest_json,
)

__all__ = [
    "Manifest",
    "ManifestItem",
    "build_manifest",
    "load_manifest_json",
    "save_records",
    "write_manifest_json",
]
