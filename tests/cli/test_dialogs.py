"""Tests for the console dialog service."""

from __future__ import annotations

import pytest

from implicit_auth.cli.dialogs import (
    CONSENT_DIALOG,
    LOGIN_FAILED_DIALOG,
    LOGIN_SUCCEEDED_DIALOG,
    ConsoleDialogService,
    console_prompts,
)
from implicit_auth.workflow.service import AuthWorkflowResult


class TestConsoleDialogService:
    """Tests for ConsoleDialogService with fixed answers."""

    async def test_assume_yes_skips_consent_prompt(self) -> None:
        assert await ConsoleDialogService(assume_yes=True).show_dialog(CONSENT_DIALOG) is True

    async def test_fixed_persist_answer(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given a fixed persist answer, success prints a fingerprint and returns it."""
        # Act
        answer = await ConsoleDialogService(persist_login=True).show_dialog(
            LOGIN_SUCCEEDED_DIALOG, AuthWorkflowResult(token="a.b.c")
        )

        # Assert
        assert answer is True
        output = capsys.readouterr().out
        assert "Signed in" in output
        assert "a.b.c" not in output

    async def test_failure_dialog(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert await ConsoleDialogService().show_dialog(LOGIN_FAILED_DIALOG) is None
        assert "Sign-in failed" in capsys.readouterr().err

    async def test_unknown_dialog_raises(self) -> None:
        with pytest.raises(ValueError):
            await ConsoleDialogService().show_dialog("nope")

    def test_console_prompts(self) -> None:
        prompts = console_prompts()
        assert (prompts.consent, prompts.login_succeeded, prompts.login_failed) == (
            CONSENT_DIALOG,
            LOGIN_SUCCEEDED_DIALOG,
            LOGIN_FAILED_DIALOG,
        )
