"""Auth audit logging (audit/auth.jsonl)."""

from implicit_auth.telemetry.audit.auth_logger import (
    AuthLogger,
    create_auth_logger,
    token_fingerprint,
)

__all__ = [
    "AuthLogger",
    "create_auth_logger",
    "token_fingerprint",
]
