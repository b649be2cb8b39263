"""Audit log entry models (logs/audit/auth.jsonl)."""

from __future__ import annotations

__all__ = ["AuthEvent"]

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class AuthEvent(BaseModel):
    """One sign-in / sign-out log entry.

    Token values are never logged. token_fingerprint is the first 16 hex
    characters of the token's SHA-256, enough to correlate entries.

    Note: 'time' is None when created, populated by ISO8601Formatter during logging.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )

    event_type: Literal[
        "login_started",
        "login_succeeded",
        "login_failed",
        "sign_out_completed",
    ]
    status: Literal["Success", "Failure", "Pending"]
    message: str | None = None

    renew: bool | None = None
    token_fingerprint: str | None = None

    # "redirect" or "timeout" for sign_out_completed
    sign_out_reason: Literal["redirect", "timeout", "surface_error"] | None = None

    failure_type: str | None = None  # e.g. "user_cancelled"
    error_message: str | None = None
    details: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")
