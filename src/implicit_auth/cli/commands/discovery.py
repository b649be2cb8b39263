"""Discovery command for implicit-auth CLI."""

from __future__ import annotations

__all__ = ["discovery"]

import asyncio
import json as json_module
from dataclasses import asdict

import click

from implicit_auth.exceptions import DiscoveryUnavailable
from implicit_auth.security.auth.discovery import DiscoveryCache

from ..helpers import load_config_or_exit
from ..styling import style_header, style_label


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def discovery(as_json: bool) -> None:
    """Show the identity provider's endpoints."""
    config = load_config_or_exit()
    cache = DiscoveryCache(config.provider.discovery_url, timeout=config.provider.http_timeout_seconds)

    try:
        document = asyncio.run(cache.get_config())
    except DiscoveryUnavailable as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json_module.dumps(asdict(document), indent=2))
        return

    click.echo(style_header("Discovery"))
    click.echo(f"{style_label('Document')} {cache.discovery_url}")
    click.echo(f"{style_label('Authorization endpoint')} {document.authorization_endpoint}")
    click.echo(f"{style_label('Key set')} {document.jwks_uri}")
    if document.issuer:
        click.echo(f"{style_label('Issuer')} {document.issuer}")
    if document.end_session_endpoint:
        click.echo(f"{style_label('End session endpoint')} {document.end_session_endpoint}")
