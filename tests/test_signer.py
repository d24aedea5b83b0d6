"""
Signature tests against reference vectors of the Thumbor server.
"""

import base64
import hashlib
import hmac

from thumbor_url import Filter, FitIn, Server
from thumbor_url.services.signer import UNSAFE, Signer

SECURITY_KEY = "my-security-key"
IMAGE_PATH = "my.server.com/some/path/to/image.jpg"


class TestSigner:
    """Test cases for the HMAC-SHA1 signer."""

    def setup_method(self):
        self.signer = Signer(SECURITY_KEY)

    def test_known_signatures(self):
        """Signatures computed by the Thumbor server itself."""
        test_cases = [
            (f"300x200/{IMAGE_PATH}", "8ammJH8D-7tXy6kU3lTvoXlhu4o="),
            (f"meta/{IMAGE_PATH}", "Ps3ORJDqxlSQ8y00T29GdNAh2CY="),
            (f"smart/{IMAGE_PATH}", "-2NHpejRK2CyPAm61FigfQgJBxw="),
            (f"fit-in/{IMAGE_PATH}", "uvLnA6TJlF-Cc-L8z9pEtfasO3s="),
            (f"filters:brightness(10):contrast(20)/{IMAGE_PATH}", "ZZtPCw-BLYN1g42Kh8xTcRs0Qls="),
        ]

        for path, expected in test_cases:
            result = self.signer.sign(path)
            assert result == expected, f"Failed for {path}: expected {expected}, got {result}"

    def test_signature_matches_hmac_sha1(self):
        path = "300x200/smart/path/to/my/image.jpg"
        digest = hmac.new(SECURITY_KEY.encode(), path.encode(), hashlib.sha1).digest()

        assert self.signer.sign(path) == base64.urlsafe_b64encode(digest).decode()

    def test_signature_is_url_safe(self):
        for path in [f"300x200/{IMAGE_PATH}", f"smart/{IMAGE_PATH}", "a/b/c", ""]:
            signature = self.signer.sign(path)
            assert "+" not in signature
            assert "/" not in signature
            assert len(signature) == 28

    def test_unpadded_signature(self):
        signer = Signer(SECURITY_KEY, padding=False)

        assert signer.sign(f"300x200/{IMAGE_PATH}") == "8ammJH8D-7tXy6kU3lTvoXlhu4o"
        assert signer.sign(f"smart/{IMAGE_PATH}") == "-2NHpejRK2CyPAm61FigfQgJBxw"

    def test_signature_depends_on_exact_bytes(self):
        reference = self.signer.sign(f"300x200/{IMAGE_PATH}")

        for variant in [f"300x200/{IMAGE_PATH} ", f"300X200/{IMAGE_PATH}", f"/300x200/{IMAGE_PATH}"]:
            assert self.signer.sign(variant) != reference

    def test_signature_depends_on_key(self):
        path = f"300x200/{IMAGE_PATH}"
        assert Signer("another-key").sign(path) != self.signer.sign(path)

    def test_non_ascii_path_is_signed_as_utf8(self):
        path = "300x200/images/café.jpg"
        digest = hmac.new(SECURITY_KEY.encode(), path.encode("utf-8"), hashlib.sha1).digest()

        assert self.signer.sign(path) == base64.urlsafe_b64encode(digest).decode()

    def test_repr_hides_key(self):
        assert SECURITY_KEY not in repr(self.signer)


class TestSignedPaths:
    """Signatures produced through the builder."""

    def setup_method(self):
        self.server = Server("http://my.server.com", SECURITY_KEY)

    def test_signing_of_a_known_url(self):
        path = self.server.endpoint_builder().resize(300, 200).to_path(IMAGE_PATH)
        assert path == f"/8ammJH8D-7tXy6kU3lTvoXlhu4o=/300x200/{IMAGE_PATH}"

    def test_signature_with_meta(self):
        path = self.server.endpoint_builder().meta().to_path(IMAGE_PATH)
        assert path == f"/Ps3ORJDqxlSQ8y00T29GdNAh2CY=/meta/{IMAGE_PATH}"

    def test_signature_with_smart(self):
        path = self.server.endpoint_builder().smart(True).to_path(IMAGE_PATH)
        assert path == f"/-2NHpejRK2CyPAm61FigfQgJBxw=/smart/{IMAGE_PATH}"

    def test_signature_with_fit_in(self):
        path = self.server.endpoint_builder().fit_in(FitIn.DEFAULT).to_path(IMAGE_PATH)
        assert path == f"/uvLnA6TJlF-Cc-L8z9pEtfasO3s=/fit-in/{IMAGE_PATH}"

    def test_signature_with_filters(self):
        path = (
            self.server.endpoint_builder()
            .filters([Filter.brightness(10), Filter.contrast(20)])
            .to_path(IMAGE_PATH)
        )
        assert path == f"/ZZtPCw-BLYN1g42Kh8xTcRs0Qls=/filters:brightness(10):contrast(20)/{IMAGE_PATH}"

    def test_unsafe_marker_without_key(self):
        server = Server("http://my.server.com")
        path = server.endpoint_builder().resize(300, 200).to_path(IMAGE_PATH)

        assert path == f"/{UNSAFE}/300x200/{IMAGE_PATH}"
