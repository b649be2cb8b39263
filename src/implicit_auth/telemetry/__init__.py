"""Telemetry: operational (system) logging and auth audit logging."""
