"""Identity token signature validation.

Verifies an id_token harvested from the login redirect against the
provider's published signing keys:

1. Split the compact token, decode the header segment
2. Read its x5t thumbprint (falling back to kid)
3. Get jwks_uri from the cached discovery document
4. Fetch the key set and pick the matching RSA key
5. Verify the signature with the header's algorithm (RSA family only)

validate() answers a yes/no question and never raises. verify() exposes the
same steps with the specific failure (TokenMalformed, KeyNotFound, ...) for
callers that want to report why.
"""

from __future__ import annotations

__all__ = [
    "TokenValidator",
    "parse_token_header",
]

from typing import Any

import jwt

from implicit_auth.constants import SUPPORTED_SIGNING_ALGORITHMS
from implicit_auth.exceptions import AuthWorkflowError, SignatureInvalid, TokenMalformed
from implicit_auth.security.auth.discovery import DiscoveryCache
from implicit_auth.security.auth.key_set import KeySetResolver
from implicit_auth.telemetry.system.system_logger import get_system_logger


def parse_token_header(token: str) -> dict[str, Any]:
    """Decode the JOSE header of a compact token without verifying anything.

    Raises:
        TokenMalformed: If the token isn't three segments or the header
            isn't a base64url-encoded JSON object.
    """
    segment_count = token.count(".") + 1
    if segment_count != 3:
        raise TokenMalformed(f"Expected 3 token segments, got {segment_count}")

    try:
        return jwt.get_unverified_header(token)
    except jwt.InvalidTokenError as e:
        raise TokenMalformed(f"Token header is not valid: {e}") from e


class TokenValidator:
    """Validates identity tokens against the provider's signing keys.

    Usage:
        validator = TokenValidator(discovery)
        if await validator.validate(id_token):
            ...
    """

    def __init__(
        self,
        discovery: DiscoveryCache,
        key_resolver: KeySetResolver | None = None,
        leeway: float = 0,
    ) -> None:
        """Initialize token validator.

        Args:
            discovery: Discovery cache providing jwks_uri.
            key_resolver: Key set resolver (default: one without an injected client).
            leeway: Clock skew tolerance in seconds for exp/nbf/iat checks.
        """
        self._discovery = discovery
        self._resolver = key_resolver or KeySetResolver()
        self._leeway = leeway

    async def validate(self, token: str) -> bool:
        """Return True if the token's signature verifies, False otherwise.

        Never raises: malformed tokens, unknown keys, bad signatures and
        network failures all come back as False.
        """
        try:
            await self.verify(token)
        except AuthWorkflowError as e:
            get_system_logger().warning(
                {
                    "event": "token_validation_failed",
                    "message": f"Identity token rejected: {e}",
                    "failure_type": e.failure_type,
                }
            )
            return False
        except Exception as e:
            get_system_logger().error(
                {
                    "event": "token_validation_error",
                    "message": f"Unexpected error while validating identity token: {e}",
                    "error_type": type(e).__name__,
                }
            )
            return False
        return True

    async def verify(self, token: str) -> dict[str, Any]:
        """Verify the token and return its claims.

        Audience is not checked: the token comes straight from our own
        authorization request. Expiry and not-before are.

        Returns:
            Token claims.

        Raises:
            TokenMalformed: Bad structure, unsupported algorithm, no key identifier.
            DiscoveryUnavailable: Discovery document can't be loaded.
            KeySetUnavailable: Key set can't be fetched.
            KeyNotFound: No published key matches.
            SignatureInvalid: Signature mismatch or expired token.
        """
        header = parse_token_header(token)

        algorithm = header.get("alg")
        if algorithm not in SUPPORTED_SIGNING_ALGORITHMS:
            raise TokenMalformed(f"Unsupported signing algorithm: {algorithm!r}")

        key_id = header.get("x5t") or header.get("kid")
        if not isinstance(key_id, str) or not key_id:
            raise TokenMalformed("Token header has no x5t or kid")

        document = await self._discovery.get_config()
        signing_key = await self._resolver.resolve_key(document.jwks_uri, key_id)

        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                signing_key.public_key(),
                algorithms=[algorithm],
                leeway=self._leeway,
                options={"verify_signature": True, "verify_aud": False},
            )
        except jwt.ExpiredSignatureError as e:
            raise SignatureInvalid("Token has expired") from e
        except jwt.InvalidSignatureError as e:
            raise SignatureInvalid("Token signature is invalid") from e
        except jwt.DecodeError as e:
            raise TokenMalformed(f"Token decode error: {e}") from e
        except jwt.PyJWTError as e:
            raise SignatureInvalid(f"Token validation error: {e}") from e

        return claims
