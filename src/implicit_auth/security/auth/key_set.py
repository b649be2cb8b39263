"""Signing key set (JWKS) resolution.

Fetches the provider's published signing keys on every call. Keys are never
cached, so a rotated key is picked up on the next validation without a
process restart. The extra request per login is acceptable: logins are rare.

Only RSA keys are kept. A key is identified by its x5t thumbprint (what the
provider puts in id_token headers) or by its kid.
"""

from __future__ import annotations

__all__ = [
    "KeySet",
    "KeySetResolver",
    "SigningKey",
]

import base64
from dataclasses import dataclass, field
from typing import Any

import httpx
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey, RSAPublicNumbers
from jwt.utils import base64url_decode

from implicit_auth.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from implicit_auth.exceptions import KeyNotFound, KeySetUnavailable
from implicit_auth.security.auth.http import fetch_json
from implicit_auth.telemetry.system.system_logger import get_system_logger


def _decode_cert_chain(entries: Any, key_id: str | None) -> tuple[bytes, ...]:
    # x5c uses standard (padded) base64, unlike n/e
    if not isinstance(entries, list):
        return ()
    chain: list[bytes] = []
    for cert in entries:
        try:
            chain.append(base64.b64decode(cert, validate=True))
        except (TypeError, ValueError):
            get_system_logger().debug(
                {
                    "event": "jwk_certificate_skipped",
                    "message": f"Ignoring undecodable x5c entry on key {key_id!r}",
                }
            )
    return tuple(chain)


@dataclass(frozen=True)
class SigningKey:
    """One RSA public key from the provider's key set.

    Attributes:
        key_id: The 'kid' member.
        modulus: Big-endian modulus bytes ('n').
        exponent: Big-endian public exponent bytes ('e').
        thumbprint: The 'x5t' certificate thumbprint, if published.
        cert_chain: DER certificates from 'x5c', if published.
    """

    key_id: str | None
    modulus: bytes
    exponent: bytes
    thumbprint: str | None = None
    cert_chain: tuple[bytes, ...] = field(default_factory=tuple)

    @classmethod
    def from_jwk(cls, jwk: dict[str, Any]) -> "SigningKey":
        """Build from one JWK entry.

        Raises:
            ValueError: If n/e are missing or not base64url.
        """
        n = jwk.get("n")
        e = jwk.get("e")
        if not isinstance(n, str) or not isinstance(e, str):
            raise ValueError("RSA key is missing 'n' or 'e'")

        key_id = jwk.get("kid")
        # binascii.Error (a ValueError) on bad base64url
        modulus = base64url_decode(n)
        exponent = base64url_decode(e)

        return cls(
            key_id=key_id,
            modulus=modulus,
            exponent=exponent,
            thumbprint=jwk.get("x5t"),
            cert_chain=_decode_cert_chain(jwk.get("x5c"), key_id),
        )

    def matches(self, identifier: str) -> bool:
        return identifier in (self.thumbprint, self.key_id)

    def public_key(self) -> RSAPublicKey:
        """Rebuild the RSA public key from modulus and exponent.

        Raises:
            KeySetUnavailable: If the numbers don't form a usable RSA key.
        """
        numbers = RSAPublicNumbers(
            e=int.from_bytes(self.exponent, "big"),
            n=int.from_bytes(self.modulus, "big"),
        )
        try:
            return numbers.public_key()
        except ValueError as e:
            raise KeySetUnavailable(f"Signing key {self.key_id!r} is not a valid RSA key: {e}") from e


@dataclass(frozen=True)
class KeySet:
    """Signing keys indexed by identifier (kid, or x5t when kid is absent)."""

    keys: dict[str, SigningKey] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.keys)

    def find(self, identifier: str) -> SigningKey | None:
        """Find the key whose x5t thumbprint or kid equals identifier."""
        key = self.keys.get(identifier)
        if key is not None:
            return key
        return next((k for k in self.keys.values() if k.matches(identifier)), None)

    @classmethod
    def from_jwks(cls, data: Any) -> "KeySet":
        """Parse a JWKS document, keeping RSA signing keys.

        Entries that aren't RSA, are marked for encryption, or can't be
        decoded are skipped.

        Raises:
            ValueError: If data is not a JWKS document.
        """
        if not isinstance(data, dict) or not isinstance(data.get("keys"), list):
            raise ValueError("Key set document has no 'keys' array")

        keys: dict[str, SigningKey] = {}
        for jwk in data["keys"]:
            if not isinstance(jwk, dict) or jwk.get("kty") != "RSA" or jwk.get("use", "sig") != "sig":
                continue
            try:
                key = SigningKey.from_jwk(jwk)
            except ValueError:
                continue
            index = key.key_id or key.thumbprint
            if index:
                keys[index] = key
        return cls(keys=keys)


class KeySetResolver:
    """Fetches the key set and finds the key a token was signed with.

    Usage:
        resolver = KeySetResolver()
        key = await resolver.resolve_key(document.jwks_uri, header["x5t"])
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize key set resolver.

        Args:
            http_client: Optional httpx client (for testing).
            timeout: Request timeout in seconds when no client is injected.
        """
        self._client = http_client
        self._timeout = timeout

    async def fetch_key_set(self, key_set_endpoint: str) -> KeySet:
        """Fetch and parse the current key set (no caching).

        Raises:
            KeySetUnavailable: If the fetch fails or the body isn't a JWKS document.
        """
        try:
            data = await fetch_json(key_set_endpoint, http_client=self._client, timeout=self._timeout)
            return KeySet.from_jwks(data)
        except httpx.HTTPStatusError as e:
            raise KeySetUnavailable(
                f"Key set endpoint returned HTTP {e.response.status_code}\n" f"Endpoint: {key_set_endpoint}"
            ) from e
        except httpx.HTTPError as e:
            raise KeySetUnavailable(
                f"Cannot fetch key set: {type(e).__name__}\n" f"Endpoint: {key_set_endpoint}"
            ) from e
        except httpx.InvalidURL as e:
            raise KeySetUnavailable(f"Key set endpoint is not a valid URL: {e}\nEndpoint: {key_set_endpoint}") from e
        except ValueError as e:
            raise KeySetUnavailable(f"Invalid key set from {key_set_endpoint}: {e}") from e

    async def resolve_key(self, key_set_endpoint: str, key_id: str) -> SigningKey:
        """Fetch the key set and return the key matching key_id.

        Args:
            key_set_endpoint: jwks_uri from the discovery document.
            key_id: x5t thumbprint or kid from the token header.

        Returns:
            The matching SigningKey.

        Raises:
            KeySetUnavailable: If the key set can't be fetched.
            KeyNotFound: If no key matches.
        """
        key_set = await self.fetch_key_set(key_set_endpoint)
        key = key_set.find(key_id)
        if key is None:
            raise KeyNotFound(key_id)
        return key
