"""
Signed session token codec.

Token format: base64url(header).base64url(payload).base64url(signature),
where the signature is HMAC-SHA256 over the literal "header.payload" string
keyed directly by the session secret. Integrity only, the payload is readable
by anyone holding the cookie.
"""

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

from itsdangerous import BadData, Signer
from itsdangerous.encoding import base64_decode, base64_encode, want_bytes
from pydantic import ValidationError

from .errors import CryptoUnavailable
from .models import SessionPayload

logger = logging.getLogger(__name__)

TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}
SEPARATOR = "."


@dataclass(frozen=True)
class SigningContext:
    """Key material used to sign and verify session tokens."""
    secret_key: bytes

    def __post_init__(self):
        if not self.secret_key:
            raise ValueError("Signing secret must not be empty")

    @classmethod
    def from_secret(cls, secret: Union[str, bytes]) -> "SigningContext":
        return cls(secret_key=want_bytes(secret))

    @classmethod
    def from_settings(cls, settings) -> "SigningContext":
        return cls.from_secret(settings.session_secret)


def _encode_segment(data: bytes) -> str:
    return base64_encode(data).decode("ascii")


class SessionCodec:
    """Encodes session payloads into signed tokens and back."""

    def __init__(self, signing: SigningContext):
        """
        Initialize codec.

        Args:
            signing: Key material for HMAC-SHA256
        """
        self._signer = Signer(
            signing.secret_key,
            sep=SEPARATOR,
            key_derivation="none",
            digest_method=hashlib.sha256,
        )
        self._header_segment = _encode_segment(
            json.dumps(TOKEN_HEADER, separators=(",", ":")).encode("utf-8")
        )

    def encode(self, payload: SessionPayload) -> str:
        """
        Serialize and sign a session payload.

        Args:
            payload: Session record to encode

        Returns:
            Token string "header.payload.signature"

        Raises:
            CryptoUnavailable: If the signature could not be computed
        """
        payload_segment = _encode_segment(payload.model_dump_json().encode("utf-8"))
        signing_input = f"{self._header_segment}{SEPARATOR}{payload_segment}"

        try:
            token = self._signer.sign(signing_input)
        except (TypeError, ValueError) as e:
            raise CryptoUnavailable(f"Failed to sign session token: {e}") from e

        return token.decode("ascii")

    def signature_matches(self, token: str) -> bool:
        """Check the signature of a three-part token without parsing it."""
        parts = token.split(SEPARATOR)
        if len(parts) != 3:
            return False

        signing_input = SEPARATOR.join(parts[:2])
        try:
            expected = self._signer.get_signature(signing_input)
            provided = parts[2].encode("ascii")
        except (TypeError, ValueError):
            return False

        # Compare the canonical encoding so non-significant base64 bits
        # cannot be flipped without detection.
        return hmac.compare_digest(expected, provided)

    def decode(self, token: str) -> Optional[SessionPayload]:
        """
        Verify and deserialize a token.

        Expiry is not checked here; callers decide whether the payload is
        still current.

        Args:
            token: Token string from the session cookie

        Returns:
            The payload, or None if the token is malformed or forged
        """
        if not token or not self.signature_matches(token):
            logger.debug("Rejected session token: bad format or signature")
            return None

        header_segment, payload_segment, _ = token.split(SEPARATOR)

        try:
            header = json.loads(base64_decode(header_segment))
            payload = SessionPayload.model_validate_json(base64_decode(payload_segment))
        except (BadData, ValueError, ValidationError):
            logger.debug("Rejected session token: undecodable segments")
            return None

        if header != TOKEN_HEADER:
            logger.debug("Rejected session token: unexpected header")
            return None

        return payload
