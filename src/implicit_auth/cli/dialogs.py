"""Terminal implementation of the dialog service.

Dialogs are identified by name. Prompts run in a worker thread so the event
loop keeps delivering surface events while the user is typing.
"""

from __future__ import annotations

__all__ = [
    "CONSENT_DIALOG",
    "ConsoleDialogService",
    "LOGIN_FAILED_DIALOG",
    "LOGIN_SUCCEEDED_DIALOG",
    "console_prompts",
]

import asyncio
from typing import Any

import click

from implicit_auth.telemetry.audit.auth_logger import token_fingerprint
from implicit_auth.workflow.coordinator import AuthPrompts

from .styling import style_dim, style_error, style_success

CONSENT_DIALOG = "consent"
LOGIN_SUCCEEDED_DIALOG = "login_succeeded"
LOGIN_FAILED_DIALOG = "login_failed"


def console_prompts() -> AuthPrompts:
    return AuthPrompts(
        consent=CONSENT_DIALOG,
        login_succeeded=LOGIN_SUCCEEDED_DIALOG,
        login_failed=LOGIN_FAILED_DIALOG,
    )


class ConsoleDialogService:
    """Shows auth dialogs with click prompts.

    Args:
        assume_yes: Answer the consent dialog with yes without asking.
        persist_login: Fixed answer for the persist-login question
            (None asks the user).
    """

    def __init__(self, assume_yes: bool = False, persist_login: bool | None = None) -> None:
        self._assume_yes = assume_yes
        self._persist_login = persist_login

    async def show_dialog(self, dialog: Any, payload: Any = None) -> Any:
        if dialog == CONSENT_DIALOG:
            if self._assume_yes:
                return True
            return await asyncio.to_thread(
                click.confirm,
                "Sign in with your identity provider? A sign-in window will open.",
                default=True,
            )

        if dialog == LOGIN_SUCCEEDED_DIALOG:
            click.echo(style_success("Signed in."))
            token = getattr(payload, "token", None)
            if token:
                click.echo(style_dim(f"  Token fingerprint: {token_fingerprint(token)}"))
            if self._persist_login is not None:
                return self._persist_login
            return await asyncio.to_thread(click.confirm, "Keep me signed in?", default=False)

        if dialog == LOGIN_FAILED_DIALOG:
            click.echo(style_error("Sign-in failed. Check the system log for details."), err=True)
            return None

        raise ValueError(f"Unknown dialog: {dialog!r}")
