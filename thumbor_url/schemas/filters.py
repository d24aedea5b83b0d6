"""
Thumbor filters.

Thumbor handles filters in a pipeline: they run sequentially in the order
they are given in the URL, so a `Filter` sequence is always kept in insertion
order. Given a 60x40 image and

    /fit-in/100x100/filters:watermark(..):blur(..):fill(red,1):upscale()/image.jpg

the image first fits into 100x100, then gets the watermark, is blurred
(watermark included), has its outer parts filled with red and finally tries
to upscale, which does nothing since it is already 100x100.

A `Filter` is an opaque name plus arguments. Only the syntax is checked; the
legal ranges of each argument are left to the service.
"""

import re
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from thumbor_url.core.errors import ConfigurationError, configuration_error
from thumbor_url.schemas.geometry import Rect, RectLike, to_rect

FILTER_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")
FILTER_CALL_PATTERN = re.compile(r"^\s*([a-z][a-z0-9_]*)\((.*)\)\s*$")

Color = Union[str, Tuple[int, int, int]]
Number = Union[int, float]


class ImageFormat(str, Enum):
    WEBP = "webp"
    JPEG = "jpeg"
    GIF = "gif"
    PNG = "png"
    AVIF = "avif"
    HEIC = "heic"


def format_arg(value) -> str:
    """Render a filter argument the way the service parses it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def format_color(color: Color) -> str:
    """Color name (`red`, `auto`, `transparent`) or hex without '#', or an RGB tuple."""
    if isinstance(color, tuple):
        r, g, b = color
        return f"{r:02x}{g:02x}{b:02x}"
    # '#' would start the URL fragment
    return color.lstrip("#")


class Filter(BaseModel):
    """One step of the filter pipeline, rendered as `name(arg1,arg2)`."""
    model_config = ConfigDict(frozen=True)

    name: str
    args: Tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not FILTER_NAME_PATTERN.match(v):
            raise ValueError(f"Unsupported filter name: {v!r}. Must match {FILTER_NAME_PATTERN.pattern}")
        return v

    @field_validator("args")
    @classmethod
    def validate_args(cls, v):
        for arg in v:
            if "(" in arg or ")" in arg:
                raise ValueError(f"Filter argument {arg!r} must not contain parentheses")
        return v

    def __str__(self) -> str:
        return f"{self.name}({','.join(self.args)})"

    @classmethod
    def custom(cls, name: str, *args) -> "Filter":
        """Any filter the service knows, including ones missing from this catalog.

        Raises:
            ConfigurationError: If the name or an argument is malformed
        """
        try:
            return cls(name=name, args=tuple(format_arg(arg) for arg in args))
        except ValidationError as e:
            raise configuration_error("filters", e)

    @classmethod
    def parse(cls, text: str) -> "Filter":
        """Parse the `name(arg1,arg2)` form used in URLs.

        Raises:
            ConfigurationError: If the text is not a filter call
        """
        match = FILTER_CALL_PATTERN.match(text)
        if not match:
            raise ConfigurationError(f"{text!r} is not of the form name(args)", field="filters")
        name, raw_args = match.groups()
        args = tuple(raw_args.split(",")) if raw_args else ()
        try:
            return cls(name=name, args=args)
        except ValueError as e:
            raise ConfigurationError(str(e), field="filters", original_exception=e)

    # Catalog of the filters shipped with Thumbor

    @classmethod
    def autojpg(cls) -> "Filter":
        """Override the AUTO_PNG_TO_JPG config variable."""
        return cls.custom("autojpg")

    @classmethod
    def background_color(cls, color: Color) -> "Filter":
        """Set the background layer, useful when converting transparent PNG to JPEG."""
        return cls.custom("background_color", format_color(color))

    @classmethod
    def blur(cls, radius: int, sigma: Optional[int] = None) -> "Filter":
        """Gaussian blur. Sigma defaults to the radius on the service side."""
        args = [radius] if sigma is None else [radius, sigma]
        return cls.custom("blur", *args)

    @classmethod
    def brightness(cls, amount: int) -> "Filter":
        """Change brightness by `amount` percent (-100 to 100)."""
        return cls.custom("brightness", amount)

    @classmethod
    def contrast(cls, amount: int) -> "Filter":
        """Change contrast by `amount` percent (-100 to 100)."""
        return cls.custom("contrast", amount)

    @classmethod
    def convolution(cls, matrix_items: Sequence[int], number_of_columns: int, should_normalize: bool) -> "Filter":
        """Run a convolution kernel; matrix items are semicolon separated."""
        items = ";".join(format_arg(item) for item in matrix_items)
        return cls.custom("convolution", items, number_of_columns, should_normalize)

    @classmethod
    def cover(cls) -> "Filter":
        return cls.custom("cover")

    @classmethod
    def equalize(cls) -> "Filter":
        return cls.custom("equalize")

    @classmethod
    def extract_focal(cls) -> "Filter":
        return cls.custom("extract_focal")

    @classmethod
    def fill(cls, color: Color, fill_transparent: bool = False) -> "Filter":
        args = [format_color(color)]
        if fill_transparent:
            args.append("1")
        return cls.custom("fill", *args)

    @classmethod
    def focal(cls, region: RectLike) -> "Filter":
        return cls.custom("focal", to_rect(region, field="filters"))

    @classmethod
    def format(cls, image_format: Union[ImageFormat, str]) -> "Filter":
        try:
            image_format = ImageFormat(image_format)
        except ValueError as e:
            raise ConfigurationError(str(e), field="filters", original_exception=e)
        return cls.custom("format", image_format)

    @classmethod
    def grayscale(cls) -> "Filter":
        return cls.custom("grayscale")

    @classmethod
    def max_bytes(cls, number_of_bytes: int) -> "Filter":
        return cls.custom("max_bytes", number_of_bytes)

    @classmethod
    def no_upscale(cls) -> "Filter":
        return cls.custom("no_upscale")

    @classmethod
    def noise(cls, amount: int) -> "Filter":
        return cls.custom("noise", amount)

    @classmethod
    def proportion(cls, percentage: float) -> "Filter":
        return cls.custom("proportion", float(percentage))

    @classmethod
    def quality(cls, amount: int) -> "Filter":
        return cls.custom("quality", amount)

    @classmethod
    def red_eye(cls) -> "Filter":
        return cls.custom("red_eye")

    @classmethod
    def rgb(cls, r_amount: int, g_amount: int, b_amount: int) -> "Filter":
        return cls.custom("rgb", r_amount, g_amount, b_amount)

    @classmethod
    def rotate(cls, angle: int) -> "Filter":
        return cls.custom("rotate", angle)

    @classmethod
    def round_corner(cls, radius: Union[int, Tuple[int, int]], color: Tuple[int, int, int],
                     transparent: bool = False) -> "Filter":
        """Round the corners; `radius` is a circle radius or an (a, b) ellipsis."""
        if isinstance(radius, tuple):
            radius = f"{radius[0]}|{radius[1]}"
        args = [radius, *color]
        if transparent:
            args.append("1")
        return cls.custom("round_corner", *args)

    @classmethod
    def saturation(cls, amount: float) -> "Filter":
        return cls.custom("saturation", amount)

    @classmethod
    def sharpen(cls, amount: float, radius: float, luminance_only: bool) -> "Filter":
        return cls.custom("sharpen", float(amount), float(radius), luminance_only)

    @classmethod
    def stretch(cls) -> "Filter":
        return cls.custom("stretch")

    @classmethod
    def strip_exif(cls) -> "Filter":
        return cls.custom("strip_exif")

    @classmethod
    def strip_icc(cls) -> "Filter":
        return cls.custom("strip_icc")

    @classmethod
    def upscale(cls) -> "Filter":
        return cls.custom("upscale")

    @classmethod
    def watermark(cls, image_url: str, x: Union[int, str], y: Union[int, str], alpha: int,
                  w_ratio: Optional[int] = None, h_ratio: Optional[int] = None) -> "Filter":
        """Overlay `image_url` at (x, y).

        Positions may also be `center`, `repeat` or percentages like `20p`.
        A height ratio without a width ratio sends `none` for the width.
        """
        args = [image_url, x, y, alpha]
        if w_ratio is not None or h_ratio is not None:
            args.append("none" if w_ratio is None else w_ratio)
        if h_ratio is not None:
            args.append(h_ratio)
        return cls.custom("watermark", *args)
