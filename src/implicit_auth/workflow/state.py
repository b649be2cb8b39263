"""Shared authentication state.

The application's state container holds the current identity token and the
user's "keep me signed in" choice. While an auth attempt is outstanding the
token slot holds a pending sentinel ("invalid__" + random digits) rather
than None, so observers can tell "never asked" from "being asked".
"""

from __future__ import annotations

__all__ = [
    "AuthState",
    "AuthStateStore",
    "StateListener",
    "is_pending_token",
    "is_real_token",
    "make_pending_token",
]

import secrets
from dataclasses import dataclass, replace
from typing import Callable

from implicit_auth.constants import PENDING_TOKEN_PREFIX


@dataclass(frozen=True)
class AuthState:
    token: str | None = None
    persist_login: bool = False


StateListener = Callable[[AuthState], None]


def make_pending_token() -> str:
    return f"{PENDING_TOKEN_PREFIX}{secrets.randbelow(10**12):012d}"


def is_pending_token(token: str | None) -> bool:
    return token is not None and token.startswith(PENDING_TOKEN_PREFIX)


def is_real_token(token: str | None) -> bool:
    """A token is real when present and not a pending sentinel."""
    return token is not None and not is_pending_token(token)


class AuthStateStore:
    """Minimal in-memory store for AuthState.

    Every write replaces the state object and notifies subscribers.
    """

    def __init__(self, initial: AuthState | None = None) -> None:
        self._state = initial or AuthState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def mark_pending(self) -> str:
        """Put a fresh pending sentinel in the token slot and return it."""
        sentinel = make_pending_token()
        self._set(replace(self._state, token=sentinel))
        return sentinel

    def publish(self, token: str | None) -> None:
        self._set(replace(self._state, token=token))

    def set_persist_login(self, persist_login: bool) -> None:
        self._set(replace(self._state, persist_login=persist_login))
