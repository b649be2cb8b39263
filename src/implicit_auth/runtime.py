"""Object graph for one application process.

Wires config, logging, discovery, validation, surfaces, workflows, shared
state and commands together:

    runtime = create_runtime(config, surface_factory)
    result = await runtime.commands.remote_call(RETRIEVE_IDENTITY_TOKEN)
"""

from __future__ import annotations

__all__ = [
    "AuthRuntime",
    "create_runtime",
]

import logging
from dataclasses import dataclass

import httpx

from implicit_auth.config import AppConfig, get_auth_log_path, get_system_log_path
from implicit_auth.security.auth.discovery import DiscoveryCache
from implicit_auth.security.auth.jwt_validator import TokenValidator
from implicit_auth.security.auth.key_set import KeySetResolver
from implicit_auth.surface.base import SurfaceFactory
from implicit_auth.surface.controller import SurfaceController
from implicit_auth.telemetry.audit.auth_logger import AuthLogger, create_auth_logger
from implicit_auth.telemetry.system.system_logger import configure_system_logger_file
from implicit_auth.workflow.commands import CommandService, register_auth_commands
from implicit_auth.workflow.coordinator import AuthStateCoordinator, DialogService
from implicit_auth.workflow.service import AuthWorkflowService
from implicit_auth.workflow.state import AuthStateStore


@dataclass
class AuthRuntime:
    config: AppConfig
    discovery: DiscoveryCache
    validator: TokenValidator
    controller: SurfaceController
    workflow: AuthWorkflowService
    store: AuthStateStore
    commands: CommandService

    def coordinator(self, dialogs: DialogService) -> AuthStateCoordinator:
        return AuthStateCoordinator(self.store, dialogs, self.commands)


def create_runtime(
    config: AppConfig,
    surface_factory: SurfaceFactory,
    *,
    http_client: httpx.AsyncClient | None = None,
    auth_logger: AuthLogger | None = None,
    log_to_files: bool = True,
) -> AuthRuntime:
    """Build every component from config.

    Args:
        config: Loaded application configuration.
        surface_factory: Creates interactive surfaces.
        http_client: Shared httpx client for discovery and key set fetches.
        auth_logger: Audit logger (created from config when omitted).
        log_to_files: Attach file handlers under config.logging.log_dir.

    Returns:
        AuthRuntime holding the wired components.
    """
    if log_to_files:
        configure_system_logger_file(get_system_log_path(config))
        if auth_logger is None:
            auth_logger = create_auth_logger(
                get_auth_log_path(config),
                logging.getLevelName(config.logging.log_level),
            )

    timeout = config.provider.http_timeout_seconds
    discovery = DiscoveryCache(config.provider.discovery_url, http_client=http_client, timeout=timeout)
    validator = TokenValidator(discovery, KeySetResolver(http_client=http_client, timeout=timeout))
    controller = SurfaceController(config, discovery, surface_factory)
    workflow = AuthWorkflowService(
        controller,
        validator,
        sign_out_timeout=config.surface.sign_out_timeout_seconds,
        auth_logger=auth_logger,
    )
    store = AuthStateStore()
    commands = CommandService()
    register_auth_commands(commands, workflow, store, config.provider.redirect_uri)

    return AuthRuntime(
        config=config,
        discovery=discovery,
        validator=validator,
        controller=controller,
        workflow=workflow,
        store=store,
        commands=commands,
    )
