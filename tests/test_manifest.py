"""Tests for file output and manifest generation."""

import json
from pathlib import Path

from imagecutter.extraction import OutputRecord
from imagecutter.output.manifest import (
    Manifest,
    ManifestItem,
    build_manifest,
    load_manifest_json,
    save_records,
    write_manifest_json,
)


def create_test_record(index: int, width: int = 10, height: int = 20, operation: str = "slice") -> OutputRecord:
    """Create a test OutputRecord."""
    return OutputRecord(
        index=index,
        width=width,
        height=height,
        operation=operation,
        data=bytes([index]) * 5,
        file_name=f"image_{index}.png",
        mime_type="image/png",
    )


class TestSaveRecords:
    def test_writes_each_record(self, tmp_path):
        records = [create_test_record(1), create_test_record(2)]

        paths = save_records(records, tmp_path / "out")

        assert set(paths) == {1, 2}
        assert paths[1] == tmp_path / "out" / "image_1.png"
        assert paths[1].read_bytes() == bytes([1]) * 5
        assert paths[2].read_bytes() == bytes([2]) * 5

    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b"

        save_records([create_test_record(3)], target)

        assert (target / "image_3.png").exists()


class TestManifest:
    def test_build_manifest(self):
        records = [create_test_record(1), create_test_record(2, width=12)]
        paths = {1: Path("out/image_1.png")}

        manifest = build_manifest(Path("photo.png"), records, paths)

        assert manifest.version == "1.0.0"
        assert manifest.source_image == "photo.png"
        assert manifest.total_items == 2
        assert manifest.items[0] == ManifestItem(
            index=1,
            file_name="image_1.png",
            operation="slice",
            width=10,
            height=20,
            mime_type="image/png",
            size_bytes=5,
            file_path=str(Path("out/image_1.png")),
        )
        assert manifest.items[1].file_path is None
        assert manifest.summary["operations"] == {"slice": 2}
        assert manifest.summary["total_bytes"] == 10
        assert manifest.summary["total_area"] == 10 * 20 + 12 * 20
        assert manifest.summary["index_range"] == [1, 2]

    def test_empty_manifest(self):
        manifest = build_manifest(Path("photo.png"), [])

        assert manifest.total_items == 0
        assert manifest.items == []
        assert manifest.summary == {"total_items": 0}

    def test_write_and_load(self, tmp_path):
        records = [create_test_record(5, operation="crop")]
        manifest = build_manifest(Path("photo.webp"), records, {5: tmp_path / "image_5.png"})

        manifest_path = write_manifest_json(manifest, tmp_path)

        assert manifest_path == tmp_path / "manifest.json"
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
        assert data["items"][0]["operation"] == "crop"
        assert data["summary"]["index_range"] == [5, 5]

        loaded = load_manifest_json(manifest_path)
        assert isinstance(loaded, Manifest)
        assert loaded.items == manifest.items
        assert loaded.extraction_timestamp == manifest.extraction_timestamp
