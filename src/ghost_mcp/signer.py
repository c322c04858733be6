"""
Short-lived token signing for the Ghost Admin API.

An Admin API key is "<id>:<secret>" where the secret is hex encoded. Every
request carries a fresh HS256 JWT whose `kid` header is the key id and whose
claims bound it to a short validity window.
"""

import time
from dataclasses import dataclass
from typing import Callable

import jwt

from .errors import ConfigurationError

TOKEN_TTL_SECONDS = 60
TOKEN_AUDIENCE = "/admin/"
TOKEN_ALGORITHM = "HS256"


@dataclass(frozen=True)
class ApiCredential:
    key_id: str
    key_secret: str

    @classmethod
    def parse(cls, admin_api_key: str) -> "ApiCredential":
        """
        Split "id:secret" on the first colon. Raises ConfigurationError when
        the colon is missing or either half is empty.
        """
        key_id, sep, key_secret = (admin_api_key or "").partition(":")
        if not sep:
            raise ConfigurationError("Admin API key must have the form '<id>:<secret>'")
        if not key_id or not key_secret:
            raise ConfigurationError("Admin API key id and secret must both be non-empty")
        return cls(key_id=key_id, key_secret=key_secret)

    def __repr__(self) -> str:
        return f"ApiCredential(key_id={self.key_id!r}, key_secret='***')"


class CredentialSigner:
    """Produces a new signed token for each outbound request."""

    def __init__(
        self,
        credential: ApiCredential,
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ConfigurationError("Token TTL must be positive")
        try:
            self._secret = bytes.fromhex(credential.key_secret)
        except ValueError as e:
            raise ConfigurationError("Admin API key secret must be hex encoded") from e
        self._key_id = credential.key_id
        self._ttl = ttl_seconds
        self._clock = clock

    @classmethod
    def from_key(cls, admin_api_key: str, **kwargs) -> "CredentialSigner":
        return cls(ApiCredential.parse(admin_api_key), **kwargs)

    def sign(self) -> str:
        issued_at = int(self._clock())
        claims = {
            "iat": issued_at,
            "exp": issued_at + self._ttl,
            "aud": TOKEN_AUDIENCE,
        }
        return jwt.encode(
            claims,
            self._secret,
            algorithm=TOKEN_ALGORITHM,
            headers={"kid": self._key_id},
        )
