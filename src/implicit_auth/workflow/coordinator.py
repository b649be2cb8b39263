"""Auth state coordinator.

Reacts to a "begin auth" trigger from the application:

1. If the shared state already holds a real token, nothing happens.
2. Otherwise the token slot is marked pending and the user is asked for
   consent. Declining stops here.
3. The identity token is retrieved through the command service.
4. On success the user chooses whether to stay signed in; the choice is
   forwarded as a command. On failure (including a retrieve call that
   raises) a failure dialog is shown.
5. The token (or None) is published to shared state exactly once.

A trigger that arrives while an attempt is already running joins that
attempt instead of starting a second one.
"""

from __future__ import annotations

__all__ = [
    "AuthPrompts",
    "AuthStateCoordinator",
    "DialogService",
]

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

from implicit_auth.constants import PERSIST_LOGIN_CHANGED, RETRIEVE_IDENTITY_TOKEN
from implicit_auth.telemetry.system.system_logger import get_system_logger
from implicit_auth.workflow.commands import CommandService
from implicit_auth.workflow.state import AuthStateStore, is_real_token


class DialogService(Protocol):
    async def show_dialog(self, dialog: Any, payload: Any = None) -> Any: ...


@dataclass(frozen=True)
class AuthPrompts:
    """Dialogs shown during one begin-auth run.

    Attributes:
        consent: Asks whether to sign in; truthy result means yes.
        login_succeeded: Receives the AuthWorkflowResult; result is the
            persist-login choice.
        login_failed: Informational.
    """

    consent: Any
    login_succeeded: Any
    login_failed: Any


class AuthStateCoordinator:
    """Single-flight driver for the begin-auth sequence."""

    def __init__(self, store: AuthStateStore, dialogs: DialogService, commands: CommandService) -> None:
        self._store = store
        self._dialogs = dialogs
        self._commands = commands
        self._inflight: asyncio.Task[None] | None = None

    @property
    def in_progress(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def begin_auth(self, prompts: AuthPrompts) -> None:
        """Run (or join) the begin-auth sequence."""
        if self._inflight is not None and not self._inflight.done():
            await asyncio.shield(self._inflight)
            return

        if is_real_token(self._store.state.token):
            return

        self._inflight = asyncio.create_task(self._run(prompts))
        await asyncio.shield(self._inflight)

    async def _run(self, prompts: AuthPrompts) -> None:
        self._store.mark_pending()

        if not await self._dialogs.show_dialog(prompts.consent):
            get_system_logger().info({"event": "auth_declined", "message": "User declined sign-in"})
            return

        try:
            result = await self._commands.remote_call(RETRIEVE_IDENTITY_TOKEN)
        except Exception as e:
            get_system_logger().error(
                {
                    "event": "auth_retrieve_failed",
                    "message": f"Identity token retrieval failed: {e}",
                    "error_type": type(e).__name__,
                }
            )
            result = None

        if result is not None:
            persist_login = await self._dialogs.show_dialog(prompts.login_succeeded, result)
            try:
                await self._commands.remote_call(PERSIST_LOGIN_CHANGED, bool(persist_login))
            except Exception as e:
                get_system_logger().error(
                    {
                        "event": "persist_login_failed",
                        "message": f"Could not forward persist-login choice: {e}",
                        "error_type": type(e).__name__,
                    }
                )
            self._store.publish(result.token)
        else:
            await self._dialogs.show_dialog(prompts.login_failed)
            self._store.publish(None)
