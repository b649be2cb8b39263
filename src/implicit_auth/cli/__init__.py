"""Command-line interface for implicit-auth."""

from __future__ import annotations

__all__ = ["cli", "main"]

from .main import cli, main
