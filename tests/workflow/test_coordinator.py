"""Tests for the begin-auth coordinator."""

from __future__ import annotations

import asyncio
from typing import Any

from implicit_auth.constants import PERSIST_LOGIN_CHANGED, RETRIEVE_IDENTITY_TOKEN
from implicit_auth.workflow.commands import CommandService
from implicit_auth.workflow.coordinator import AuthPrompts, AuthStateCoordinator
from implicit_auth.workflow.service import AuthWorkflowResult
from implicit_auth.workflow.state import AuthState, AuthStateStore, is_pending_token

PROMPTS = AuthPrompts(consent="consent", login_succeeded="succeeded", login_failed="failed")


class ScriptedDialogs:
    """Answers dialogs from a dict and records what was shown."""

    def __init__(self, answers: dict[str, Any]) -> None:
        self.answers = answers
        self.shown: list[tuple[Any, Any]] = []

    async def show_dialog(self, dialog: Any, payload: Any = None) -> Any:
        self.shown.append((dialog, payload))
        return self.answers.get(dialog)


class RecordingCommands(CommandService):
    """CommandService with retrieve/persist handlers that record calls."""

    def __init__(self, result: AuthWorkflowResult | None, gate: asyncio.Event | None = None) -> None:
        super().__init__()
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._result = result
        self._gate = gate
        self.register(RETRIEVE_IDENTITY_TOKEN, self._retrieve)
        self.register(PERSIST_LOGIN_CHANGED, lambda choice: self.calls.append((PERSIST_LOGIN_CHANGED, (choice,))))

    async def _retrieve(self) -> AuthWorkflowResult | None:
        self.calls.append((RETRIEVE_IDENTITY_TOKEN, ()))
        if self._gate is not None:
            await self._gate.wait()
        return self._result


class TestBeginAuth:
    """Tests for AuthStateCoordinator.begin_auth."""

    async def test_real_token_does_nothing(self) -> None:
        """Given a real token in state, no dialog or command happens."""
        # Arrange
        store = AuthStateStore(AuthState(token="real.token.value"))
        dialogs = ScriptedDialogs({"consent": True})
        commands = RecordingCommands(AuthWorkflowResult(token="other"))

        # Act
        await AuthStateCoordinator(store, dialogs, commands).begin_auth(PROMPTS)

        # Assert
        assert dialogs.shown == []
        assert commands.calls == []
        assert store.state.token == "real.token.value"

    async def test_success_publishes_token_and_persist_choice(self) -> None:
        """Given consent and a token, the persist choice is forwarded and the token published."""
        # Arrange
        store = AuthStateStore()
        result = AuthWorkflowResult(token="new.token.value")
        dialogs = ScriptedDialogs({"consent": True, "succeeded": True})
        commands = RecordingCommands(result)
        published: list[str | None] = []
        store.subscribe(lambda state: published.append(state.token))

        # Act
        await AuthStateCoordinator(store, dialogs, commands).begin_auth(PROMPTS)

        # Assert
        assert dialogs.shown == [("consent", None), ("succeeded", result)]
        assert commands.calls == [(RETRIEVE_IDENTITY_TOKEN, ()), (PERSIST_LOGIN_CHANGED, (True,))]
        assert store.state.token == "new.token.value"
        assert is_pending_token(published[0])
        assert published[1:] == ["new.token.value"]

    async def test_pending_sentinel_is_not_a_real_token(self) -> None:
        """Given a leftover pending sentinel, the workflow runs."""
        store = AuthStateStore(AuthState(token="invalid__42"))
        commands = RecordingCommands(AuthWorkflowResult(token="t.o.k"))
        await AuthStateCoordinator(store, ScriptedDialogs({"consent": True}), commands).begin_auth(PROMPTS)
        assert store.state.token == "t.o.k"

    async def test_declined_consent_stops(self) -> None:
        """Given the user declines, nothing is retrieved or published."""
        # Arrange
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": False})
        commands = RecordingCommands(AuthWorkflowResult(token="x"))

        # Act
        await AuthStateCoordinator(store, dialogs, commands).begin_auth(PROMPTS)

        # Assert
        assert commands.calls == []
        assert dialogs.shown == [("consent", None)]
        assert is_pending_token(store.state.token)

    async def test_failure_shows_dialog_and_publishes_none(self) -> None:
        """Given the workflow fails, the failure dialog shows and None is published."""
        # Arrange
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": True})
        commands = RecordingCommands(None)

        # Act
        await AuthStateCoordinator(store, dialogs, commands).begin_auth(PROMPTS)

        # Assert
        assert dialogs.shown == [("consent", None), ("failed", None)]
        assert commands.calls == [(RETRIEVE_IDENTITY_TOKEN, ())]
        assert store.state.token is None

    async def test_second_trigger_after_success_is_noop(self) -> None:
        """Given begin_auth twice in a row, the second run does nothing."""
        # Arrange
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": True, "succeeded": False})
        commands = RecordingCommands(AuthWorkflowResult(token="a.b.c"))
        coordinator = AuthStateCoordinator(store, dialogs, commands)

        # Act
        await coordinator.begin_auth(PROMPTS)
        await coordinator.begin_auth(PROMPTS)

        # Assert
        assert commands.calls.count((RETRIEVE_IDENTITY_TOKEN, ())) == 1
        assert len(dialogs.shown) == 2

    async def test_concurrent_triggers_share_one_attempt(self) -> None:
        """Given two triggers while the first is in flight, only one workflow runs."""
        # Arrange
        gate = asyncio.Event()
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": True, "succeeded": False})
        commands = RecordingCommands(AuthWorkflowResult(token="a.b.c"), gate=gate)
        coordinator = AuthStateCoordinator(store, dialogs, commands)

        # Act
        first = asyncio.create_task(coordinator.begin_auth(PROMPTS))
        second = asyncio.create_task(coordinator.begin_auth(PROMPTS))
        while not commands.calls:
            await asyncio.sleep(0)
        assert coordinator.in_progress
        gate.set()
        await asyncio.gather(first, second)

        # Assert
        assert commands.calls.count((RETRIEVE_IDENTITY_TOKEN, ())) == 1
        assert [dialog for dialog, _ in dialogs.shown].count("consent") == 1
        assert store.state.token == "a.b.c"
        assert not coordinator.in_progress

    async def test_retrieve_error_publishes_failure(self) -> None:
        """Given the retrieve command raising, the failure dialog shows and None is published."""
        # Arrange
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": True})
        coordinator = AuthStateCoordinator(store, dialogs, CommandService())

        # Act
        await coordinator.begin_auth(PROMPTS)

        # Assert
        assert [dialog for dialog, _ in dialogs.shown] == ["consent", "failed"]
        assert store.state.token is None
        assert not coordinator.in_progress

    async def test_persist_error_still_publishes_token(self) -> None:
        """Given the persist command raising, the retrieved token is still published."""
        # Arrange
        store = AuthStateStore()
        dialogs = ScriptedDialogs({"consent": True, "succeeded": True})
        commands = RecordingCommands(AuthWorkflowResult(token="a.b.c"))

        def fail_persist(choice: bool) -> None:
            raise RuntimeError("persistence backend unavailable")

        commands.register(PERSIST_LOGIN_CHANGED, fail_persist)

        # Act
        await AuthStateCoordinator(store, dialogs, commands).begin_auth(PROMPTS)

        # Assert
        assert store.state.token == "a.b.c"
