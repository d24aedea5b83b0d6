from typing import List

from thumbor_url.core.errors import ConfigurationError
from thumbor_url.schemas.filters import Filter
from thumbor_url.schemas.options import KEEP_RATIO, TransformOptions, TrimOrientation


def _trim_token(options: TransformOptions) -> str:
    bits = ["trim"]
    trim = options.trim
    if trim.orientation != TrimOrientation.TOP_LEFT or trim.tolerance is not None:
        bits.append(trim.orientation.value)
    if trim.tolerance is not None:
        bits.append(str(trim.tolerance))
    return ":".join(bits)


def _size_token(options: TransformOptions) -> str:
    """`{width}x{height}`, a leading '-' on an axis flips the image on it."""
    resize = options.resize
    width = resize.width if resize else KEEP_RATIO
    height = resize.height if resize else KEEP_RATIO
    if options.flip_horizontal:
        width = f"-{width}"
    if options.flip_vertical:
        height = f"-{height}"
    return f"{width}x{height}"


def encode_options(options: TransformOptions) -> List[str]:
    """Render the options as path segments, in the order the service parses them."""
    path = []

    if options.response:
        path.append(options.response.value)

    if options.trim:
        path.append(_trim_token(options))

    if options.crop:
        path.append(str(options.crop))

    if options.fit_in:
        path.append(options.fit_in.value)

    if options.resize or options.flip_horizontal or options.flip_vertical:
        path.append(_size_token(options))

    if options.h_align:
        path.append(options.h_align.value)

    if options.v_align:
        path.append(options.v_align.value)

    if options.smart:
        path.append("smart")

    filters = list(options.filters)
    if options.resize and options.resize.no_upscale:
        filters.append(Filter.no_upscale())
    if filters:
        path.append("filters:" + ":".join(str(f) for f in filters))

    return path


def normalize_image_path(image_path: str) -> str:
    """Drop the one leading slash, the service treats it as a separator.

    Raises:
        ConfigurationError: If nothing is left of the path
    """
    if not isinstance(image_path, str):
        raise ConfigurationError(f"expected a string, got {type(image_path).__name__}", field="image_path")
    if image_path.startswith("/"):
        image_path = image_path[1:]
    if not image_path:
        raise ConfigurationError("image path is empty", field="image_path")
    return image_path


def encode_path(options: TransformOptions, image_path: str) -> str:
    """Build the part of the URL that gets signed.

    Args:
        options: The transformations to request
        image_path: Image URI as understood by the service's loader, left
            as is apart from a single leading slash

    Returns:
        Slash separated path, without leading or trailing slash

    Raises:
        ConfigurationError: If the image path is empty
    """
    return "/".join(encode_options(options) + [normalize_image_path(image_path)])
