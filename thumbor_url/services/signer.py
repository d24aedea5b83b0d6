import base64
import hashlib
import hmac

UNSAFE = "unsafe"


class Signer:
    """Signs encoded paths the way the Thumbor server verifies them.

    Signatures keep their '=' padding, which is what Thumbor itself checks.
    Pass `padding=False` for services that expect the unpadded form.
    """

    def __init__(self, key: str, padding: bool = True):
        self.key = key.encode("utf-8")
        self.padding = padding

    def sign(self, path: str) -> str:
        """Sign the path using HMAC-SHA1 with the shared key.

        Args:
            path: Encoded path, without the leading slash

        Returns:
            URL-safe base64 signature, '=' padded unless padding is disabled
        """
        h = hmac.new(self.key, path.encode("utf-8"), hashlib.sha1)

        signature = base64.urlsafe_b64encode(h.digest())
        if not self.padding:
            signature = signature.rstrip(b"=")

        return signature.decode()

    def __repr__(self) -> str:
        # Never expose the key
        return f"Signer(padding={self.padding})"
