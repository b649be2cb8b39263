"""Logout command for implicit-auth CLI."""

from __future__ import annotations

__all__ = ["logout"]

import click

from implicit_auth.constants import SIGN_OUT
from implicit_auth.runtime import create_runtime
from implicit_auth.surface.base import SurfaceFactory
from implicit_auth.surface.webview import run_with_webview

from ..helpers import load_config_or_exit
from ..styling import style_success


@click.command()
@click.option("--no-prompt", is_flag=True, help="Ask the provider not to show its sign-out page")
def logout(no_prompt: bool) -> None:
    """Sign out at the identity provider.

    Waits briefly for the provider to confirm. If no confirmation arrives,
    sign-out is still treated as complete.
    """
    config = load_config_or_exit()

    async def workflow(surface_factory: SurfaceFactory) -> bool:
        runtime = create_runtime(config, surface_factory)
        return bool(await runtime.commands.remote_call(SIGN_OUT, not no_prompt))

    run_with_webview(workflow)
    click.echo(style_success("Signed out."))
