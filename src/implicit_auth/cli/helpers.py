"""Shared helpers for CLI commands."""

from __future__ import annotations

__all__ = ["load_config_or_exit"]

import click

from implicit_auth.config import AppConfig, get_config_path
from implicit_auth.constants import APP_NAME


def load_config_or_exit() -> AppConfig:
    """Load config.json, exiting with a readable error on failure.

    Raises:
        click.ClickException: If config is missing or invalid.
    """
    config_path = get_config_path()

    if not config_path.exists():
        raise click.ClickException(
            f"Configuration not found at {config_path}\n" f"Run '{APP_NAME} init' to create configuration."
        )

    try:
        return AppConfig.load_from_files(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Failed to load configuration: {e}") from e
