"""Main CLI entry point for implicit-auth.

Commands:
    init      - Create configuration
    login     - Sign in and obtain an identity token
    logout    - Sign out at the identity provider
    discovery - Show the provider's endpoints
    validate  - Verify an identity token

Subcommand help:
    implicit-auth COMMAND -h
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from implicit_auth import __version__

from .commands.discovery import discovery
from .commands.init import init
from .commands.login import login
from .commands.logout import logout
from .commands.validate import validate


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """implicit-auth: OpenID Connect implicit-flow sign-in for desktop apps."""
    if version:
        click.echo(f"implicit-auth {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(discovery)
cli.add_command(init)
cli.add_command(login)
cli.add_command(logout)
cli.add_command(validate)


def main() -> None:
    """CLI entry point."""
    cli()
