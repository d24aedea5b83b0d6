"""
Models for the JSON returned by `/meta` URLs.

The metadata endpoint accepts every option the image endpoint does but only
simulates the operations, answering with something like:

    {
        "thumbor": {
            "source": {"url": "path/to/my/nice/image.jpg", "width": 800, "height": 600},
            "operations": [
                {"type": "crop", "left": 10, "top": 10, "right": 300, "bottom": 200},
                {"type": "resize", "width": 300, "height": 200},
                {"type": "flip_horizontally"},
                {"type": "flip_vertically"}
            ],
            "target": {"width": 300, "height": 200}
        }
    }
"""

import json
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from thumbor_url.core.errors import MetadataError, describe_validation_error
from thumbor_url.schemas.geometry import Rect


class Source(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class Size(BaseModel):
    width: int
    height: int


class ResizeOperation(Size):
    type: Literal["resize"]


class CropOperation(BaseModel):
    type: Literal["crop"]
    left: int
    top: int
    right: int
    bottom: int

    def to_rect(self) -> Rect:
        return Rect.from_points((self.left, self.top), (self.right, self.bottom))


class FlipHorizontally(BaseModel):
    type: Literal["flip_horizontally"]


class FlipVertically(BaseModel):
    type: Literal["flip_vertically"]


class AutoPngToJpgConversion(BaseModel):
    type: Literal["auto_png_to_jpg_conversion"]


Operation = Annotated[
    Union[ResizeOperation, CropOperation, FlipHorizontally, FlipVertically, AutoPngToJpgConversion],
    Field(discriminator="type"),
]


class FocalPoint(BaseModel):
    """A detected region, `x`/`y` being its center."""
    x: int
    y: int
    width: int
    height: int
    z: Optional[float] = None
    origin: Optional[str] = None

    def to_rect(self) -> Rect:
        return Rect.from_center((self.x, self.y), self.width, self.height)


class Data(BaseModel):
    source: Source
    operations: List[Operation] = []
    target: Size
    focal_points: Optional[List[FocalPoint]] = None


class Meta(BaseModel):
    thumbor: Data


def parse_metadata(data: Union[str, bytes, dict]) -> Meta:
    """Parse the body of a metadata response.

    Args:
        data: Raw JSON text/bytes or an already decoded dictionary

    Returns:
        The parsed metadata

    Raises:
        MetadataError: If the body is not valid JSON or does not match the format
    """
    try:
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        return Meta.model_validate(data)
    except json.JSONDecodeError as e:
        raise MetadataError("Body is not valid JSON.", original_exception=e)
    except ValidationError as e:
        raise MetadataError(describe_validation_error(e), original_exception=e)
