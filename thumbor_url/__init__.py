"""
Client for the Thumbor image service: builds signed image URLs.

    from thumbor_url import Server

    server = Server("http://localhost:8888", "my-security-key")
    url = server.endpoint_builder().resize(300, 200).smart().to_url("path/to/my/image.jpg")
"""

from loguru import logger

from thumbor_url.core.errors import ConfigurationError, InvalidEndpoint, MetadataError, ThumborUrlError
from thumbor_url.schemas.filters import Filter, ImageFormat
from thumbor_url.schemas.geometry import Coords, Rect
from thumbor_url.schemas.metadata import Meta, parse_metadata
from thumbor_url.schemas.options import (
    KEEP_RATIO,
    ORIGINAL,
    FitIn,
    HAlignment,
    Resize,
    ResponseMode,
    TransformOptions,
    Trim,
    TrimOrientation,
    VAlignment,
)
from thumbor_url.services.builder import EndpointBuilder
from thumbor_url.services.encoder import encode_path
from thumbor_url.services.server import Server
from thumbor_url.services.signer import Signer

# Silent as a library until setup_logging() is called
logger.disable("thumbor_url")

__version__ = "0.1.0"
