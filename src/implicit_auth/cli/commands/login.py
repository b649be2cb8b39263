"""Login command for implicit-auth CLI.

Opens the provider's sign-in page in a small window, waits for the id_token
redirect, and validates the token against the provider's signing keys.
"""

from __future__ import annotations

__all__ = ["login"]

import click
import httpx

from implicit_auth.constants import RETRIEVE_IDENTITY_TOKEN
from implicit_auth.runtime import create_runtime
from implicit_auth.surface.base import SurfaceFactory
from implicit_auth.surface.webview import run_with_webview
from implicit_auth.telemetry.audit.auth_logger import token_fingerprint
from implicit_auth.workflow.state import is_pending_token

from ..dialogs import ConsoleDialogService, console_prompts
from ..helpers import load_config_or_exit
from ..styling import style_dim, style_success


@click.command()
@click.option("--renew", is_flag=True, help="Silent renewal (no provider UI, no prompts)")
@click.option("--yes", "-y", is_flag=True, help="Skip the sign-in confirmation")
@click.option("--print-token", is_flag=True, help="Print the identity token on success")
def login(renew: bool, yes: bool, print_token: bool) -> None:
    """Sign in and obtain an identity token."""
    config = load_config_or_exit()

    async def workflow(surface_factory: SurfaceFactory) -> str | None:
        async with httpx.AsyncClient(timeout=config.provider.http_timeout_seconds) as client:
            runtime = create_runtime(config, surface_factory, http_client=client)

            if renew:
                result = await runtime.commands.remote_call(RETRIEVE_IDENTITY_TOKEN, True)
                return result.token if result is not None else None

            coordinator = runtime.coordinator(ConsoleDialogService(assume_yes=yes))
            await coordinator.begin_auth(console_prompts())
            return runtime.store.state.token

    token = run_with_webview(workflow)

    if is_pending_token(token):
        click.echo(style_dim("Sign-in cancelled."))
        return
    if token is None:
        raise click.ClickException("Sign-in failed. Check the system log for details.")

    if renew:
        click.echo(style_success("Token renewed."))
        click.echo(style_dim(f"  Token fingerprint: {token_fingerprint(token)}"))
    if print_token:
        click.echo(token)
