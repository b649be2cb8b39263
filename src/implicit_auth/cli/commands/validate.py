"""Validate command for implicit-auth CLI."""

from __future__ import annotations

__all__ = ["validate"]

import asyncio
import json as json_module

import click

from implicit_auth.exceptions import AuthWorkflowError
from implicit_auth.security.auth.discovery import DiscoveryCache
from implicit_auth.security.auth.jwt_validator import TokenValidator
from implicit_auth.security.auth.key_set import KeySetResolver

from ..helpers import load_config_or_exit
from ..styling import style_success


@click.command()
@click.argument("token")
@click.option("--claims", "show_claims", is_flag=True, help="Print the verified claims as JSON")
def validate(token: str, show_claims: bool) -> None:
    """Verify an identity token's signature against the provider's keys."""
    config = load_config_or_exit()
    timeout = config.provider.http_timeout_seconds
    validator = TokenValidator(
        DiscoveryCache(config.provider.discovery_url, timeout=timeout),
        KeySetResolver(timeout=timeout),
    )

    try:
        claims = asyncio.run(validator.verify(token))
    except AuthWorkflowError as e:
        raise click.ClickException(f"Token rejected ({e.failure_type}): {e}") from e

    click.echo(style_success("Token signature is valid."))
    if show_claims:
        click.echo(json_module.dumps(claims, indent=2, default=str))
