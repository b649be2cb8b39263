"""Shared utilities for implicit-auth."""
