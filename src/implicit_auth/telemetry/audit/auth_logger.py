"""Authentication audit logger.

Logs sign-in and sign-out outcomes to audit/auth.jsonl:
- Login attempts (started, succeeded, failed with failure type)
- Sign-out completion (redirect observed or timed out)

Entries are structured dicts serialized by ISO8601Formatter. Token values
never appear in the log, only their fingerprint.
"""

from __future__ import annotations

__all__ = [
    "AuthLogger",
    "create_auth_logger",
    "token_fingerprint",
]

import hashlib
import logging
from pathlib import Path
from typing import Literal

from implicit_auth.constants import APP_NAME
from implicit_auth.telemetry.models.audit import AuthEvent
from implicit_auth.utils.logging.logger_setup import setup_jsonl_logger


def token_fingerprint(token: str) -> str:
    """Short, non-reversible identifier for a token (SHA-256 prefix)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]


class AuthLogger:
    """Audit logger for authentication events.

    Usage:
        logger = create_auth_logger(get_auth_log_path(config))
        logger.log_login_started(renew=False)
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log_event(self, event: AuthEvent) -> None:
        self._logger.info(event.model_dump(mode="json", exclude={"time"}, exclude_none=True))

    def log_login_started(self, *, renew: bool) -> None:
        self._log_event(
            AuthEvent(
                event_type="login_started",
                status="Pending",
                renew=renew,
                message="Silent renewal started" if renew else "Interactive login started",
            )
        )

    def log_login_succeeded(self, *, token: str, renew: bool) -> None:
        self._log_event(
            AuthEvent(
                event_type="login_succeeded",
                status="Success",
                renew=renew,
                token_fingerprint=token_fingerprint(token),
            )
        )

    def log_login_failed(
        self,
        *,
        renew: bool,
        failure_type: str,
        error_message: str | None = None,
    ) -> None:
        """Log a failed login attempt.

        Args:
            renew: Whether this was a silent renewal.
            failure_type: Category from the exception (e.g. "provider_error").
            error_message: Human-readable description.
        """
        self._log_event(
            AuthEvent(
                event_type="login_failed",
                status="Failure",
                renew=renew,
                failure_type=failure_type,
                error_message=error_message,
            )
        )

    def log_sign_out_completed(
        self,
        *,
        reason: Literal["redirect", "timeout", "surface_error"],
    ) -> None:
        self._log_event(
            AuthEvent(
                event_type="sign_out_completed",
                status="Success",
                sign_out_reason=reason,
            )
        )


def create_auth_logger(log_path: Path, log_level: int = logging.INFO) -> AuthLogger:
    """Create an AuthLogger writing JSONL to log_path.

    Args:
        log_path: Path to auth.jsonl.
        log_level: Logging level.

    Returns:
        AuthLogger instance.
    """
    logger = setup_jsonl_logger(f"{APP_NAME}.audit.auth", log_path, log_level)
    return AuthLogger(logger)
