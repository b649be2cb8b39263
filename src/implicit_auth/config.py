"""Application configuration for implicit-auth.

Defines configuration models for the identity provider, the interactive
surfaces, and logging. User creates config via `implicit-auth init`. Config
is stored at the OS-appropriate location (via click.get_app_dir).

Example usage:
    # Load from config file
    config = AppConfig.load_from_files(get_config_path())

    # Save new configuration
    config.save_to_file(get_config_path())
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOG_DIR",
    "AppConfig",
    "LoggingConfig",
    "ProviderConfig",
    "SurfaceConfig",
    "get_auth_log_path",
    "get_config_path",
    "get_system_log_path",
]

import json
import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from implicit_auth.constants import (
    APP_NAME,
    DEFAULT_CLIENT_ID,
    DEFAULT_DISCOVERY_URL,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_LOGOUT_ENDPOINT,
    DEFAULT_NONCE_NAMESPACE,
    DEFAULT_POST_LOGOUT_REDIRECT_URI,
    DEFAULT_REDIRECT_URI,
    DEFAULT_SIGN_OUT_TIMEOUT_SECONDS,
    LOGIN_SURFACE_SIZE,
    MAX_HTTP_TIMEOUT_SECONDS,
    MAX_SIGN_OUT_TIMEOUT_SECONDS,
    MIN_HTTP_TIMEOUT_SECONDS,
    MIN_SIGN_OUT_TIMEOUT_SECONDS,
    REDIRECT_HOST_MARKER,
    SIGN_OUT_SURFACE_SIZE,
)
from implicit_auth.utils.file_helpers import (
    get_app_dir,
    load_validated_json,
    require_file_exists,
    set_secure_permissions,
)


# =============================================================================
# Platform-specific defaults
# =============================================================================


def _get_platform_log_dir() -> str:
    """Get platform-appropriate base log directory following OS conventions.

    Platform conventions:
        - macOS: ~/Library/Logs
        - Linux: $XDG_STATE_HOME (~/.local/state)
        - Windows: ~/AppData/Local
    """
    if sys.platform == "darwin":
        return "~/Library/Logs"
    elif sys.platform == "win32":
        return "~/AppData/Local"
    else:
        return os.environ.get("XDG_STATE_HOME", "~/.local/state")


DEFAULT_LOG_DIR = _get_platform_log_dir()


# =============================================================================
# Identity Provider
# =============================================================================


class ProviderConfig(BaseModel):
    """OIDC identity provider configuration for the implicit flow.

    Attributes:
        discovery_url: Well-known OpenID configuration document URL.
        client_id: Registered public client identifier.
        logout_endpoint: Provider session-management (logout) endpoint.
        post_logout_redirect_uri: Fixed local target the logout page redirects to.
        redirect_uri: Local redirect URI registered for id_token responses.
        redirect_host_marker: Substring identifying our own redirect host.
        nonce_namespace: Namespace string the (stable) nonce is derived from.
        http_timeout_seconds: Timeout for discovery and key set requests.
        extra_query_params: Additional parameters appended to the authorization
            and logout URLs (e.g. library telemetry such as x-client-SKU).
            They never replace a parameter the request already sets.
    """

    discovery_url: str = Field(default=DEFAULT_DISCOVERY_URL, pattern=r"^https?://")
    client_id: str = Field(default=DEFAULT_CLIENT_ID, min_length=1)
    logout_endpoint: str = Field(default=DEFAULT_LOGOUT_ENDPOINT, pattern=r"^https?://")
    post_logout_redirect_uri: str = Field(default=DEFAULT_POST_LOGOUT_REDIRECT_URI, pattern=r"^https?://")
    redirect_uri: str = Field(default=DEFAULT_REDIRECT_URI, pattern=r"^https?://")
    redirect_host_marker: str = Field(default=REDIRECT_HOST_MARKER, min_length=1)
    nonce_namespace: str = Field(default=DEFAULT_NONCE_NAMESPACE, min_length=1)
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        ge=MIN_HTTP_TIMEOUT_SECONDS,
        le=MAX_HTTP_TIMEOUT_SECONDS,
    )
    extra_query_params: dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Interactive Surfaces
# =============================================================================


class SurfaceConfig(BaseModel):
    """Login and sign-out surface behaviour.

    Attributes:
        sign_out_timeout_seconds: How long to wait for the logout redirect
            before treating sign-out as complete (1-60, default 5).
        login_size: Login window (width, height).
        sign_out_size: Sign-out window (width, height).
    """

    sign_out_timeout_seconds: float = Field(
        default=DEFAULT_SIGN_OUT_TIMEOUT_SECONDS,
        ge=MIN_SIGN_OUT_TIMEOUT_SECONDS,
        le=MAX_SIGN_OUT_TIMEOUT_SECONDS,
    )
    login_size: tuple[int, int] = LOGIN_SURFACE_SIZE
    sign_out_size: tuple[int, int] = SIGN_OUT_SURFACE_SIZE


# =============================================================================
# Logging
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Logs are stored in <log_dir>/implicit-auth/:
        <log_dir>/
        └── implicit-auth/
            ├── system/
            │   └── system.jsonl
            └── audit/
                └── auth.jsonl

    Attributes:
        log_dir: Base directory for logs (platform-specific default).
        log_level: Logging level for the system logger.
    """

    log_dir: str = Field(default=DEFAULT_LOG_DIR, min_length=1)
    log_level: Literal["DEBUG", "INFO"] = "INFO"


class AppConfig(BaseModel):
    """Main application configuration for implicit-auth.

    Attributes:
        provider: Identity provider endpoints and client registration.
        surface: Interactive surface settings.
        logging: Log directory and level.
    """

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    surface: SurfaceConfig = Field(default_factory=SurfaceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist. Sets 0o700 on the
        directory and 0o600 on the file.

        Args:
            config_path: Path where the config JSON file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        set_secure_permissions(config_path.parent, is_directory=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
            f.write("\n")

        set_secure_permissions(config_path)

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid or missing required fields.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(
            config_path,
            cls,
            file_type="config",
            recovery_hint=f"Run '{APP_NAME} init' to reconfigure.",
        )


# =============================================================================
# Paths
# =============================================================================


def get_config_path() -> Path:
    """Path to config.json in the OS application directory."""
    return get_app_dir() / "config.json"


def _log_root(config: AppConfig) -> Path:
    return Path(config.logging.log_dir).expanduser() / APP_NAME


def get_system_log_path(config: AppConfig) -> Path:
    """Path to system/system.jsonl under the configured log_dir."""
    return _log_root(config) / "system" / "system.jsonl"


def get_auth_log_path(config: AppConfig) -> Path:
    """Path to audit/auth.jsonl under the configured log_dir."""
    return _log_root(config) / "audit" / "auth.jsonl"
