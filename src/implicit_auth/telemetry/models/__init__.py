"""Pydantic models for log entries."""

from implicit_auth.telemetry.models.audit import AuthEvent

__all__ = ["AuthEvent"]
