#!/usr/bin/env python3
"""
Print the Thumbor URL of an image.

    thumbor-url --server http://localhost:8888 --key my-security-key \\
        --resize 300x200 --smart path/to/my/image.jpg
"""

import argparse
import sys
from typing import List, Optional, Tuple, Union

from thumbor_url.core.config import get_settings
from thumbor_url.core.errors import ConfigurationError, ThumborUrlError
from thumbor_url.core.logging import get_logger, setup_logging
from thumbor_url.schemas.options import ORIGINAL, FitIn, HAlignment, TrimOrientation, VAlignment
from thumbor_url.services.server import Server

logger = get_logger("cli")


def parse_dimension(value: str) -> Union[int, str]:
    if value == "":
        return 0
    if value == ORIGINAL:
        return ORIGINAL
    if not value.isdigit():
        raise ConfigurationError(f"{value!r} is not a number of pixels or {ORIGINAL!r}", field="resize")
    return int(value)


def parse_size(value: str) -> Tuple[Union[int, str], Union[int, str]]:
    """`300x200`, `300x` or `x200` (missing axis keeps the ratio), `origx100`."""
    width, sep, height = value.partition("x")
    if not sep:
        raise ConfigurationError(f"{value!r} is not of the form WIDTHxHEIGHT", field="resize")
    return parse_dimension(width), parse_dimension(height)


def parse_box(value: str) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """`LEFTxTOP:RIGHTxBOTTOM`"""
    try:
        top_left, bottom_right = value.split(":")
        left, top = (int(v) for v in top_left.split("x"))
        right, bottom = (int(v) for v in bottom_right.split("x"))
    except ValueError:
        raise ConfigurationError(f"{value!r} is not of the form LEFTxTOP:RIGHTxBOTTOM", field="crop")
    return (left, top), (right, bottom)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="thumbor-url", description="Generate Thumbor image URLs")
    parser.add_argument("image", help="Image URI as understood by the server's loader")
    parser.add_argument(
        "--server", default=settings.thumbor_server_url, help="Server endpoint (THUMBOR_SERVER_URL)"
    )
    security = parser.add_mutually_exclusive_group()
    security.add_argument(
        "--key", default=settings.thumbor_security_key, help="Security key (THUMBOR_SECURITY_KEY)"
    )
    security.add_argument("--unsafe", action="store_true", help="Do not sign the URL")
    padding = parser.add_mutually_exclusive_group()
    padding.add_argument(
        "--padding", action="store_true", dest="padding", default=settings.thumbor_signature_padding,
        help="Keep the '=' padding of the signature (THUMBOR_SIGNATURE_PADDING)"
    )
    padding.add_argument(
        "--no-padding", action="store_false", dest="padding", help="Strip '=' padding from the signature"
    )

    response = parser.add_mutually_exclusive_group()
    response.add_argument("--meta", action="store_true", help="Request the JSON metadata")
    response.add_argument("--debug", action="store_true", help="Request the focal points debug image")

    parser.add_argument(
        "--trim", nargs="?", const=TrimOrientation.TOP_LEFT.value,
        choices=[o.value for o in TrimOrientation], help="Trim surrounding space"
    )
    parser.add_argument("--trim-tolerance", type=int, help="Trim color tolerance (0-442)")
    parser.add_argument("--crop", help="Manual crop, LEFTxTOP:RIGHTxBOTTOM")
    parser.add_argument(
        "--fit-in", nargs="?", const=FitIn.DEFAULT.value, choices=[m.value for m in FitIn],
        help="Fit in the box instead of cropping"
    )
    parser.add_argument("--resize", help="Target size, WIDTHxHEIGHT")
    parser.add_argument("--no-upscale", action="store_true", help="Never enlarge the image")
    parser.add_argument("--flip-h", action="store_true", help="Flip horizontally")
    parser.add_argument("--flip-v", action="store_true", help="Flip vertically")
    parser.add_argument("--halign", choices=[a.value for a in HAlignment])
    parser.add_argument("--valign", choices=[a.value for a in VAlignment])
    parser.add_argument("--smart", action="store_true", help="Use smart cropping")
    parser.add_argument(
        "--filter", action="append", default=[], dest="filters",
        help="Filter in name(args) form, repeat in pipeline order"
    )
    parser.add_argument("--path-only", action="store_true", help="Print the path without the server")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable logging")
    return parser


def generate(args: argparse.Namespace) -> str:
    key = None if args.unsafe else (args.key or None)
    server = Server(args.server, key, signature_padding=args.padding)
    builder = server.endpoint_builder()

    if args.meta:
        builder = builder.meta()
    if args.debug:
        builder = builder.debug()
    if args.trim or args.trim_tolerance is not None:
        builder = builder.trim(args.trim or TrimOrientation.TOP_LEFT, args.trim_tolerance)
    if args.crop:
        builder = builder.crop(parse_box(args.crop))
    if args.fit_in:
        builder = builder.fit_in(args.fit_in)
    if args.resize:
        builder = builder.resize(parse_size(args.resize), no_upscale=args.no_upscale)
    if args.flip_h:
        builder = builder.flip_horizontal()
    if args.flip_v:
        builder = builder.flip_vertical()
    if args.halign:
        builder = builder.h_align(args.halign)
    if args.valign:
        builder = builder.v_align(args.valign)
    if args.smart:
        builder = builder.smart()
    builder = builder.filters(args.filters)

    if args.path_only:
        return builder.to_path(args.image)
    return builder.to_url(args.image)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        setup_logging()

    try:
        print(generate(args))
    except ThumborUrlError as e:
        logger.error(f"Failed to generate URL: {e.message}")
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
