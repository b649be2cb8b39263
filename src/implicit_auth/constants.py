"""Application-wide constants for implicit-auth.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Identity provider defaults
    "DEFAULT_DISCOVERY_URL",
    "DEFAULT_CLIENT_ID",
    "DEFAULT_LOGOUT_ENDPOINT",
    "DEFAULT_POST_LOGOUT_REDIRECT_URI",
    "DEFAULT_REDIRECT_URI",
    "DEFAULT_NONCE_NAMESPACE",
    "REDIRECT_HOST_MARKER",
    # Authorization request
    "RESPONSE_TYPE_ID_TOKEN",
    "SILENT_PROMPT",
    "SUPPORTED_SIGNING_ALGORITHMS",
    # Network
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "MIN_HTTP_TIMEOUT_SECONDS",
    "MAX_HTTP_TIMEOUT_SECONDS",
    # Sign-out
    "DEFAULT_SIGN_OUT_TIMEOUT_SECONDS",
    "MIN_SIGN_OUT_TIMEOUT_SECONDS",
    "MAX_SIGN_OUT_TIMEOUT_SECONDS",
    # Surface geometry
    "LOGIN_SURFACE_SIZE",
    "SIGN_OUT_SURFACE_SIZE",
    # Shared state
    "PENDING_TOKEN_PREFIX",
    # Remote commands
    "RETRIEVE_IDENTITY_TOKEN",
    "PERSIST_LOGIN_CHANGED",
    "SIGN_OUT",
]

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for directory names, logger names, etc.
APP_NAME: str = "implicit-auth"

# ============================================================================
# Identity Provider Defaults
# ============================================================================

# Multi-tenant Microsoft identity platform (v1 endpoints)
DEFAULT_DISCOVERY_URL: str = "https://login.microsoftonline.com/common/.well-known/openid-configuration"
DEFAULT_LOGOUT_ENDPOINT: str = "https://login.microsoftonline.com/common/oauth2/logout/"

# Public client registered for implicit id_token grants
DEFAULT_CLIENT_ID: str = "4f28e5eb-6b7f-49e6-ac0e-f992b622da57"

# Local redirect targets. Nothing needs to listen on these ports:
# the surface controller reads the URL from navigation history.
DEFAULT_REDIRECT_URI: str = "http://localhost:3000/implicit-auth"
DEFAULT_POST_LOGOUT_REDIRECT_URI: str = "http://localhost:3000/implicit-auth"

# Any navigation whose host contains this marker is our own redirect
REDIRECT_HOST_MARKER: str = "localhost"

# Namespace the nonce is derived from (uuid3), stable across runs
DEFAULT_NONCE_NAMESPACE: str = "https://github.com/implicit-auth/implicit-auth"

# ============================================================================
# Authorization Request
# ============================================================================

RESPONSE_TYPE_ID_TOKEN: str = "id_token"

# prompt value asking the provider to skip interactive UI (silent renewal)
SILENT_PROMPT: str = "none"

# Only RSA signatures are verified; the key set publishes modulus/exponent pairs
SUPPORTED_SIGNING_ALGORITHMS: tuple[str, ...] = ("RS256", "RS384", "RS512")

# ============================================================================
# Network
# ============================================================================

# Timeout for discovery and key set fetches - fail fast if provider is unreachable
DEFAULT_HTTP_TIMEOUT_SECONDS: float = 10.0
MIN_HTTP_TIMEOUT_SECONDS: float = 1.0
MAX_HTTP_TIMEOUT_SECONDS: float = 120.0

# ============================================================================
# Sign-out
# ============================================================================

# Redirects to localhost are not reliable. If no redirect is observed within
# this window, sign-out is treated as successful so the app does not try to
# authenticate again on next startup.
DEFAULT_SIGN_OUT_TIMEOUT_SECONDS: float = 5.0
MIN_SIGN_OUT_TIMEOUT_SECONDS: float = 1.0
MAX_SIGN_OUT_TIMEOUT_SECONDS: float = 60.0

# ============================================================================
# Surface Geometry (width, height)
# ============================================================================

LOGIN_SURFACE_SIZE: tuple[int, int] = (490, 366)
SIGN_OUT_SURFACE_SIZE: tuple[int, int] = (440, 367)

# ============================================================================
# Shared State
# ============================================================================

# Token values with this prefix mean "an auth attempt is pending or required"
PENDING_TOKEN_PREFIX: str = "invalid__"

# ============================================================================
# Remote Commands
# ============================================================================

RETRIEVE_IDENTITY_TOKEN: str = "auth:retrieve-identity-token"
PERSIST_LOGIN_CHANGED: str = "auth:persist-login-changed"
SIGN_OUT: str = "auth:sign-out"
