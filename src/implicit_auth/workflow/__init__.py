"""Auth workflows: orchestrator, shared state, commands and coordinator."""

from __future__ import annotations

__all__ = [
    "AuthPrompts",
    "AuthState",
    "AuthStateCoordinator",
    "AuthStateStore",
    "AuthWorkflowResult",
    "AuthWorkflowService",
    "CommandService",
    "DialogService",
    "LoginState",
    "SignOutState",
    "register_auth_commands",
]

from implicit_auth.workflow.commands import CommandService, register_auth_commands
from implicit_auth.workflow.coordinator import AuthPrompts, AuthStateCoordinator, DialogService
from implicit_auth.workflow.service import AuthWorkflowResult, AuthWorkflowService, LoginState, SignOutState
from implicit_auth.workflow.state import AuthState, AuthStateStore
