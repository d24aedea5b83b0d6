from enum import Enum
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thumbor_url.schemas.filters import Filter
from thumbor_url.schemas.geometry import Rect

# Special resize values
KEEP_RATIO = 0
ORIGINAL = "orig"

Dimension = Union[int, Literal["orig"]]


class ResponseMode(str, Enum):
    # Simulate the operations and return them as JSON
    METADATA = "meta"
    # Draw rectangles around the focal points
    DEBUG = "debug"


class TrimOrientation(str, Enum):
    TOP_LEFT = "top-left"
    BOTTOM_RIGHT = "bottom-right"


class FitIn(str, Enum):
    DEFAULT = "fit-in"
    ADAPTIVE = "adaptive-fit-in"
    FULL = "full-fit-in"


class HAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Trim(BaseModel):
    """Remove the surrounding space of an image.

    The color of the reference pixel (top-left unless told otherwise) is
    compared to its neighbours; pixels within `tolerance` (euclidean distance,
    0-442 for RGB) are trimmed.
    """
    model_config = ConfigDict(frozen=True)

    orientation: TrimOrientation = TrimOrientation.TOP_LEFT
    tolerance: Optional[int] = Field(default=None, ge=0, le=442)


class Resize(BaseModel):
    """Target size.

    Each axis is a positive number of pixels, `KEEP_RATIO` (0) to derive it
    from the other axis, or `ORIGINAL` ("orig") to keep the source size.
    """
    model_config = ConfigDict(frozen=True)

    width: Dimension = KEEP_RATIO
    height: Dimension = KEEP_RATIO
    no_upscale: bool = False

    @field_validator("width", "height", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number of pixels, not a boolean")
        return v

    @field_validator("width", "height")
    @classmethod
    def validate_dimension(cls, v):
        if isinstance(v, int) and v < 0:
            raise ValueError(f"{v} must be a positive number of pixels, {KEEP_RATIO} or {ORIGINAL!r}")
        return v


class TransformOptions(BaseModel):
    """Frozen set of transformations for one image URL.

    Fields left to their default are not rendered.
    """
    model_config = ConfigDict(frozen=True)

    response: Optional[ResponseMode] = None
    trim: Optional[Trim] = None
    # Manual crop, performed before everything else
    crop: Optional[Rect] = None
    fit_in: Optional[FitIn] = None
    resize: Optional[Resize] = None
    flip_horizontal: bool = False
    flip_vertical: bool = False
    h_align: Optional[HAlignment] = None
    v_align: Optional[VAlignment] = None
    # Smart cropping overrides both alignments when focal points are found
    smart: bool = False
    filters: Tuple[Filter, ...] = ()
