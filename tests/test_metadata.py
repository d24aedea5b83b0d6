"""
Unit Tests for parsing metadata responses
"""

import json

import pytest

from thumbor_url import MetadataError, Rect, parse_metadata
from thumbor_url.schemas.metadata import CropOperation, FlipHorizontally, ResizeOperation

SAMPLE = {
    "thumbor": {
        "source": {"url": "path/to/my/nice/image.jpg", "width": 800, "height": 600},
        "operations": [
            {"type": "crop", "left": 10, "top": 10, "right": 300, "bottom": 200},
            {"type": "resize", "width": 300, "height": 200},
            {"type": "flip_horizontally"},
            {"type": "flip_vertically"},
            {"type": "auto_png_to_jpg_conversion"},
        ],
        "target": {"width": 300, "height": 200},
        "focal_points": [
            {"x": 150, "y": 100, "width": 40, "height": 20, "z": 1.0, "origin": "Face Detection"}
        ],
    }
}


class TestParseMetadata:

    def test_parse_dict_text_and_bytes(self):
        text = json.dumps(SAMPLE)
        for data in [SAMPLE, text, text.encode()]:
            meta = parse_metadata(data)
            assert meta.thumbor.source.url == "path/to/my/nice/image.jpg"
            assert meta.thumbor.target.width == 300

    def test_operations(self):
        operations = parse_metadata(SAMPLE).thumbor.operations

        assert [op.type for op in operations] == [
            "crop", "resize", "flip_horizontally", "flip_vertically", "auto_png_to_jpg_conversion"
        ]
        assert isinstance(operations[0], CropOperation)
        assert isinstance(operations[1], ResizeOperation)
        assert isinstance(operations[2], FlipHorizontally)
        assert operations[0].to_rect() == Rect.from_points((10, 10), (300, 200))

    def test_focal_points(self):
        focal = parse_metadata(SAMPLE).thumbor.focal_points[0]
        assert str(focal.to_rect()) == "130x90:170x110"

    def test_optional_parts(self):
        meta = parse_metadata({
            "thumbor": {"source": {"url": "a.jpg"}, "target": {"width": 1, "height": 1}}
        })

        assert meta.thumbor.operations == []
        assert meta.thumbor.focal_points is None
        assert meta.thumbor.source.width is None

    def test_invalid_bodies(self):
        test_cases = [
            "not json",
            {"thumbor": {}},
            {"thumbor": {"source": {"url": "a.jpg"}, "target": {"width": 1, "height": 1},
                         "operations": [{"type": "explode"}]}},
        ]

        for data in test_cases:
            with pytest.raises(MetadataError) as exc_info:
                parse_metadata(data)
            assert exc_info.value.error_code == "metadata_error"
