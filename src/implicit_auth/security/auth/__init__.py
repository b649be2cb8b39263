"""Provider metadata, key resolution and token validation.

This module provides:
- DiscoveryCache: compute-once OIDC discovery document
- KeySetResolver: per-call JWKS fetch and key lookup
- TokenValidator: id_token signature verification
"""

from implicit_auth.security.auth.discovery import (
    DiscoveryCache,
    DiscoveryDocument,
)
from implicit_auth.security.auth.jwt_validator import (
    TokenValidator,
    parse_token_header,
)
from implicit_auth.security.auth.key_set import (
    KeySet,
    KeySetResolver,
    SigningKey,
)

__all__ = [
    # Discovery
    "DiscoveryCache",
    "DiscoveryDocument",
    # Key set
    "KeySet",
    "KeySetResolver",
    "SigningKey",
    # Validation
    "TokenValidator",
    "parse_token_header",
]
