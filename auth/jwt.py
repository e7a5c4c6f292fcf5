"""
JWT token creation and verification.

Tokens are compact HS256 JWTs (``header.payload.signature``, base64url
without padding) signed with HMAC-SHA256.  The secret comes from
``config.jwt_secret`` (env var: ``JWT_SECRET``).  A token carries the user id
in ``sub`` and, when issued with a lifetime, an ``exp`` claim.  Tokens
without ``exp`` stay valid until the secret is rotated.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional

from core.exceptions import InvalidTokenError

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64url_decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


class TokenService:
    """Issues and verifies signed identity tokens."""

    def __init__(self, secret: str, clock: Callable[[], float] = time.time):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode()
        self._clock = clock

    def _sign(self, signing_input: bytes) -> str:
        digest = hmac.new(self._secret, signing_input, hashlib.sha256).digest()
        return _b64url_encode(digest)

    def issue(self, user_id: str, expires_in: Optional[int] = None) -> str:
        """Create a token bound to ``user_id``; ``expires_in`` is in seconds."""
        now = int(self._clock())
        payload: Dict[str, Any] = {"sub": str(user_id), "iat": now}
        if expires_in is not None:
            payload["exp"] = now + int(expires_in)

        header_seg = _b64url_encode(json.dumps(_HEADER, separators=(",", ":")).encode())
        payload_seg = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode())
        signing_input = f"{header_seg}.{payload_seg}".encode()
        return f"{header_seg}.{payload_seg}.{self._sign(signing_input)}"

    def verify(self, token: str) -> str:
        """
        Verify token and return the user id.

        Raises ``InvalidTokenError`` on a bad signature, malformed payload or
        an expired token.
        """
        # Headers can arrive latin-1 decoded; a valid token is always ASCII.
        if not token.isascii():
            raise InvalidTokenError("Malformed token")
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError("Malformed token")
        header_seg, payload_seg, signature = parts

        expected = self._sign(f"{header_seg}.{payload_seg}".encode())
        if not hmac.compare_digest(signature, expected):
            raise InvalidTokenError("Invalid token signature")

        try:
            header = json.loads(_b64url_decode(header_seg))
            payload = json.loads(_b64url_decode(payload_seg))
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("Malformed token") from exc

        if not isinstance(header, dict) or header.get("alg") != _HEADER["alg"]:
            raise InvalidTokenError("Unsupported token algorithm")
        if not isinstance(payload, dict) or not payload.get("sub"):
            raise InvalidTokenError("Malformed token")

        exp = payload.get("exp")
        if exp is not None:
            if not isinstance(exp, (int, float)):
                raise InvalidTokenError("Malformed token")
            if exp <= self._clock():
                raise InvalidTokenError("Token expired")

        return str(payload["sub"])
