"""Init command for implicit-auth CLI.

Writes config.json with the identity provider registration and log
location, interactively or from flags.
"""

from __future__ import annotations

__all__ = ["init"]

import click
from pydantic import ValidationError

from implicit_auth.config import (
    DEFAULT_LOG_DIR,
    AppConfig,
    LoggingConfig,
    ProviderConfig,
    get_config_path,
)
from implicit_auth.constants import (
    APP_NAME,
    DEFAULT_CLIENT_ID,
    DEFAULT_DISCOVERY_URL,
    DEFAULT_REDIRECT_URI,
)

from ..styling import style_dim, style_header, style_success


@click.command()
@click.option("--non-interactive", is_flag=True, help="Use flags and defaults without prompting")
@click.option("--discovery-url", help="OpenID configuration document URL")
@click.option("--client-id", help="Registered client identifier")
@click.option("--redirect-uri", help="Local redirect URI for id_token responses")
@click.option("--log-dir", help="Base directory for logs")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(
    non_interactive: bool,
    discovery_url: str | None,
    client_id: str | None,
    redirect_uri: str | None,
    log_dir: str | None,
    force: bool,
) -> None:
    """Initialize implicit-auth configuration."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        if non_interactive:
            raise click.ClickException(f"Configuration already exists at {config_path}\nUse --force to overwrite.")
        if not click.confirm(f"Configuration exists at {config_path}. Overwrite?", default=False):
            click.echo(style_dim("Aborted."))
            return

    if not non_interactive:
        click.echo(style_header("Identity Provider"))
        discovery_url = discovery_url or click.prompt("Discovery URL", default=DEFAULT_DISCOVERY_URL)
        client_id = client_id or click.prompt("Client ID", default=DEFAULT_CLIENT_ID)
        redirect_uri = redirect_uri or click.prompt("Redirect URI", default=DEFAULT_REDIRECT_URI)
        click.echo()
        click.echo(style_header("Logging"))
        log_dir = log_dir or click.prompt("Log directory", default=DEFAULT_LOG_DIR)

    provider_fields = {
        name: value
        for name, value in (
            ("discovery_url", discovery_url),
            ("client_id", client_id),
            ("redirect_uri", redirect_uri),
        )
        if value
    }
    try:
        config = AppConfig(
            provider=ProviderConfig(**provider_fields),
            logging=LoggingConfig(log_dir=log_dir) if log_dir else LoggingConfig(),
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e

    try:
        config.save_to_file(config_path)
    except OSError as e:
        raise click.ClickException(f"Failed to write configuration: {e}") from e

    click.echo()
    click.echo(style_success(f"Configuration saved to {config_path}"))
    click.echo(f"Run '{APP_NAME} login' to sign in.")
