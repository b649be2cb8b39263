"""Custom exceptions for implicit-auth.

This module contains all custom exceptions used throughout the package.
Exceptions are organized into two categories:

Workflow Errors (collapse to a failure result at the workflow boundary):
    - AuthWorkflowError: Base for everything that can go wrong during a login
    - DiscoveryUnavailable, KeySetUnavailable, KeyNotFound: provider metadata
    - TokenMalformed, SignatureInvalid: token validation
    - UserCancelled, ProviderError: interactive surface outcomes

Host Errors (surface to the caller):
    - ConfigurationError: Config file missing or invalid
    - CommandNotFoundError: Remote command was never registered

None of these are fatal to the hosting application. The workflow service
catches every AuthWorkflowError and reports a uniform failure.

Usage:
    from implicit_auth.exceptions import AuthWorkflowError, KeyNotFound
"""

from __future__ import annotations

__all__ = [
    "AuthWorkflowError",
    "CommandNotFoundError",
    "ConfigurationError",
    "DiscoveryUnavailable",
    "KeyNotFound",
    "KeySetUnavailable",
    "ProviderError",
    "SignatureInvalid",
    "TokenMalformed",
    "UserCancelled",
]


# =============================================================================
# Workflow Errors
# =============================================================================


class AuthWorkflowError(Exception):
    """Base exception for failures inside an auth workflow invocation.

    Attributes:
        failure_type: Category string for structured logs.
    """

    failure_type: str = "auth_workflow_failure"


class DiscoveryUnavailable(AuthWorkflowError):
    """Discovery document could not be fetched or parsed.

    Raised when:
    - The well-known endpoint is unreachable or returns an HTTP error
    - The response is not JSON
    - authorization_endpoint or jwks_uri is missing
    """

    failure_type = "discovery_unavailable"


class KeySetUnavailable(AuthWorkflowError):
    """Signing key set could not be fetched or is not a JWKS document."""

    failure_type = "key_set_unavailable"


class KeyNotFound(AuthWorkflowError):
    """No key in the fetched key set matches the token's key identifier."""

    failure_type = "key_not_found"

    def __init__(self, key_id: str | None) -> None:
        self.key_id = key_id
        super().__init__(f"No signing key matches identifier {key_id!r}")


class TokenMalformed(AuthWorkflowError):
    """Token is not a three-segment JWS or its header cannot be parsed."""

    failure_type = "token_malformed"


class SignatureInvalid(AuthWorkflowError):
    """Token signature (or its registered claims) failed verification."""

    failure_type = "signature_invalid"


class UserCancelled(AuthWorkflowError):
    """User closed the surface before the workflow completed."""

    failure_type = "user_cancelled"

    def __init__(self, message: str = "Surface closed before a redirect was observed") -> None:
        super().__init__(message)


class ProviderError(AuthWorkflowError):
    """Redirect fragment carried an error marker instead of a token.

    Attributes:
        error: The error code reported by the provider (e.g. "access_denied").
    """

    failure_type = "provider_error"

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Identity provider returned error: {error}")


# =============================================================================
# Host Errors
# =============================================================================


class ConfigurationError(Exception):
    """Configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist (not initialized)
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    """

    failure_type = "configuration_failure"


class CommandNotFoundError(LookupError):
    """A remote command was called that has no registered handler."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No handler registered for command {name!r}")
