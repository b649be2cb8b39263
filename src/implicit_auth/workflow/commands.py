"""In-process remote command service.

The application talks to the auth workflows through named commands rather
than direct calls, so the same surface works whether the caller is the CLI,
a UI process, or a test:

    service = CommandService()
    register_auth_commands(service, workflow, store, redirect_uri)
    result = await service.remote_call(RETRIEVE_IDENTITY_TOKEN)
"""

from __future__ import annotations

__all__ = [
    "CommandHandler",
    "CommandService",
    "register_auth_commands",
]

import inspect
from typing import Any, Callable

from implicit_auth.constants import PERSIST_LOGIN_CHANGED, RETRIEVE_IDENTITY_TOKEN, SIGN_OUT
from implicit_auth.exceptions import CommandNotFoundError
from implicit_auth.telemetry.system.system_logger import get_system_logger
from implicit_auth.workflow.service import AuthWorkflowResult, AuthWorkflowService
from implicit_auth.workflow.state import AuthStateStore

CommandHandler = Callable[..., Any]


class CommandService:
    """Registry of named handlers, sync or async."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler) -> None:
        """Register (or replace) the handler for a command name."""
        self._handlers[name] = handler

    def has(self, name: str) -> bool:
        return name in self._handlers

    async def remote_call(self, name: str, *args: Any) -> Any:
        """Invoke a command by name and return its result.

        Raises:
            CommandNotFoundError: If nothing is registered under name.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise CommandNotFoundError(name)

        get_system_logger().debug({"event": "remote_call", "message": f"Calling {name}", "command": name})
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


def register_auth_commands(
    service: CommandService,
    workflow: AuthWorkflowService,
    store: AuthStateStore,
    redirect_uri: str | None = None,
) -> None:
    """Bind the auth commands to a workflow service and state store.

    - RETRIEVE_IDENTITY_TOKEN(renew=False) -> AuthWorkflowResult | None
    - PERSIST_LOGIN_CHANGED(persist_login) -> None
    - SIGN_OUT(prompt=True) -> True; clears the token and persist flag
    """

    async def retrieve_identity_token(renew: bool = False) -> AuthWorkflowResult | None:
        return await workflow.enter_auth_workflow(renew=renew, redirect_uri=redirect_uri)

    def persist_login_changed(persist_login: Any) -> None:
        store.set_persist_login(bool(persist_login))

    async def sign_out(prompt: bool = True) -> bool:
        result = await workflow.enter_sign_out_workflow(prompt=prompt)
        store.publish(None)
        store.set_persist_login(False)
        return result

    service.register(RETRIEVE_IDENTITY_TOKEN, retrieve_identity_token)
    service.register(PERSIST_LOGIN_CHANGED, persist_login_changed)
    service.register(SIGN_OUT, sign_out)
