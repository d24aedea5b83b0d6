from typing import Optional
from urllib.parse import urlparse

from thumbor_url.core.config import Settings, get_settings
from thumbor_url.core.errors import InvalidEndpoint
from thumbor_url.core.logging import get_logger
from thumbor_url.schemas.options import TransformOptions
from thumbor_url.services.builder import EndpointBuilder
from thumbor_url.services.encoder import encode_path
from thumbor_url.services.signer import UNSAFE, Signer

logger = get_logger("server")


def normalize_endpoint(endpoint: str) -> str:
    """Check that the endpoint is an absolute URL and drop its trailing slashes.

    Raises:
        InvalidEndpoint: If the endpoint has no scheme or no host
    """
    if not isinstance(endpoint, str):
        raise InvalidEndpoint(repr(endpoint), "endpoint must be a string")
    try:
        parsed = urlparse(endpoint)
    except ValueError as e:
        raise InvalidEndpoint(endpoint, str(e))
    if not parsed.scheme:
        raise InvalidEndpoint(endpoint, "missing URL scheme (e.g. http://)")
    if not parsed.netloc:
        raise InvalidEndpoint(endpoint, "missing host")
    if parsed.query or parsed.fragment:
        raise InvalidEndpoint(endpoint, "query strings and fragments are not allowed")
    return endpoint.rstrip("/")


class Server:
    """A Thumbor server: where images are served from and how URLs are signed.

    Without a secret every URL carries the `unsafe` marker instead of a
    signature, which only works when the server allows unsafe URLs.
    """

    def __init__(self, endpoint: str, secret: Optional[str] = None, signature_padding: bool = True):
        self._endpoint = normalize_endpoint(endpoint)
        self._signer = Signer(secret, padding=signature_padding) if secret else None

        if self._signer is None:
            logger.info(f"No security key for {self._endpoint}, URLs will be unsafe")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Server":
        """Create a server from the given settings, or from the environment and .env file."""
        settings = settings or get_settings()
        return cls(
            settings.thumbor_server_url,
            settings.thumbor_security_key or None,
            signature_padding=settings.thumbor_signature_padding,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def is_unsafe(self) -> bool:
        return self._signer is None

    def endpoint_builder(self) -> EndpointBuilder:
        return EndpointBuilder(self)

    def signature(self, path: str) -> str:
        """Signature segment for an encoded path, `unsafe` without a secret."""
        if self._signer is None:
            return UNSAFE
        return self._signer.sign(path)

    def to_path(self, options: TransformOptions, image_path: str) -> str:
        """`/{signature}/{options}/{image}`, everything but the endpoint."""
        path = encode_path(options, image_path)
        return f"/{self.signature(path)}/{path}"

    def to_url(self, options: TransformOptions, image_path: str) -> str:
        url = f"{self._endpoint}{self.to_path(options, image_path)}"
        logger.debug(f"Generated URL: {url}")
        return url

    def __repr__(self) -> str:
        return f"Server(endpoint={self._endpoint!r}, unsafe={self.is_unsafe})"
