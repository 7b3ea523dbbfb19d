"""Tests for the extraction driver."""

from unittest.mock import MagicMock

import pytest

from imagecutter.codec import OutputFormat
from imagecutter.errors import CodecError, GeometryError
from imagecutter.extraction import OutputRecord, execute, make_file_name
from imagecutter.planning import ImageDimensions, PlanEntry, Rectangle


def make_plan(*rectangles, operation="slice", start_index=1):
    return [
        PlanEntry(rectangle=rect, index=start_index + i, operation=operation)
        for i, rect in enumerate(rectangles)
    ]


def fake_codec():
    codec = MagicMock()
    codec.extract_region.side_effect = lambda data, rect, fmt: f"{rect.left},{rect.top}".encode()
    return codec


class TestExecute:
    def test_records_follow_plan_order(self):
        plan = make_plan(Rectangle(0, 0, 10, 20), Rectangle(10, 0, 10, 20), Rectangle(20, 0, 15, 20))
        codec = fake_codec()

        records = execute(b"source", ImageDimensions(35, 20), plan, OutputFormat.PNG, codec)

        assert [r.index for r in records] == [1, 2, 3]
        assert [r.file_name for r in records] == ["image_1.png", "image_2.png", "image_3.png"]
        assert [r.width for r in records] == [10, 10, 15]
        assert all(r.height == 20 for r in records)
        assert [r.data for r in records] == [b"0,0", b"10,0", b"20,0"]
        assert all(r.mime_type == "image/png" for r in records)
        assert all(r.operation == "slice" for r in records)

    def test_codec_called_once_per_rectangle_in_order(self):
        plan = make_plan(Rectangle(0, 0, 5, 5), Rectangle(5, 0, 5, 5))
        codec = fake_codec()

        execute(b"source", ImageDimensions(10, 5), plan, OutputFormat.WEBP, codec)

        calls = codec.extract_region.call_args_list
        assert [c.args for c in calls] == [
            (b"source", Rectangle(0, 0, 5, 5), OutputFormat.WEBP),
            (b"source", Rectangle(5, 0, 5, 5), OutputFormat.WEBP),
        ]

    def test_prefix_and_format(self):
        plan = make_plan(Rectangle(3, 4, 5, 6), operation="crop", start_index=0)

        records = execute(b"x", ImageDimensions(10, 10), plan, OutputFormat.JPG, fake_codec(), file_name_prefix="crop-")

        assert records[0].file_name == "crop-0.jpg"
        assert records[0].mime_type == "image/jpeg"
        assert records[0].operation == "crop"

    def test_empty_plan(self):
        codec = fake_codec()

        assert execute(b"x", ImageDimensions(10, 10), [], OutputFormat.PNG, codec) == []
        codec.extract_region.assert_not_called()

    def test_codec_failure_aborts_remaining_regions(self):
        plan = make_plan(Rectangle(0, 0, 5, 5), Rectangle(5, 0, 5, 5), Rectangle(10, 0, 5, 5))
        codec = MagicMock()
        codec.extract_region.side_effect = [b"ok", CodecError("encoder exploded"), b"never"]

        with pytest.raises(CodecError, match="encoder exploded") as excinfo:
            execute(b"x", ImageDimensions(15, 5), plan, OutputFormat.PNG, codec, item_index=4)

        assert codec.extract_region.call_count == 2
        assert excinfo.value.item_index == 4

    def test_rectangle_outside_dimensions_is_rejected(self):
        plan = make_plan(Rectangle(0, 0, 10, 10), Rectangle(10, 0, 10, 10))
        codec = fake_codec()

        with pytest.raises(GeometryError, match="exceeds image bounds"):
            execute(b"x", ImageDimensions(15, 10), plan, OutputFormat.PNG, codec)

        assert codec.extract_region.call_count == 1


class TestOutputRecord:
    def test_to_json_omits_bytes(self):
        record = OutputRecord(
            index=2, width=30, height=40, operation="slice",
            data=b"\x00" * 10, file_name="image_2.png", mime_type="image/png",
        )

        assert record.to_json() == {"index": 2, "width": 30, "height": 40, "operation": "slice"}

    def test_make_file_name(self):
        assert make_file_name("tile_", 7, OutputFormat.JPG) == "tile_7.jpg"
        assert make_file_name("", 0, OutputFormat.WEBP) == "0.webp"
