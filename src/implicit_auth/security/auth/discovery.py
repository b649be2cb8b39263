"""OIDC discovery document cache.

Fetches the provider's /.well-known/openid-configuration once and keeps it
for the lifetime of the cache object. There is no expiry and no manual
invalidation: endpoints are assumed stable while the process runs. Signing
keys are NOT cached here (see key_set.py), so key rotation is still honored.

The cache is an ordinary object handed to the components that need it,
which lets tests substitute a fixed document.
"""

from __future__ import annotations

__all__ = [
    "DiscoveryCache",
    "DiscoveryDocument",
]

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from implicit_auth.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from implicit_auth.exceptions import DiscoveryUnavailable
from implicit_auth.security.auth.http import fetch_json
from implicit_auth.telemetry.system.system_logger import get_system_logger


@dataclass(frozen=True)
class DiscoveryDocument:
    """The parts of the discovery document the workflows use.

    Attributes:
        authorization_endpoint: Where the login surface is pointed.
        jwks_uri: Where the signing key set is published.
        issuer: Provider issuer identifier, if advertised.
        end_session_endpoint: Provider logout endpoint, if advertised.
    """

    authorization_endpoint: str
    jwks_uri: str
    issuer: str | None = None
    end_session_endpoint: str | None = None

    @classmethod
    def from_response(cls, data: Any) -> "DiscoveryDocument":
        """Parse the provider's JSON.

        Raises:
            DiscoveryUnavailable: If a required endpoint is missing.
        """
        if not isinstance(data, dict):
            raise DiscoveryUnavailable("Discovery document is not a JSON object")

        missing = [
            name
            for name in ("authorization_endpoint", "jwks_uri")
            if not isinstance(data.get(name), str) or not data[name]
        ]
        if missing:
            raise DiscoveryUnavailable(f"Discovery document is missing: {', '.join(missing)}")

        return cls(
            authorization_endpoint=data["authorization_endpoint"],
            jwks_uri=data["jwks_uri"],
            issuer=data.get("issuer"),
            end_session_endpoint=data.get("end_session_endpoint"),
        )


class DiscoveryCache:
    """Compute-once holder for the provider's discovery document.

    Usage:
        discovery = DiscoveryCache(config.provider.discovery_url)
        document = await discovery.get_config()
        print(document.authorization_endpoint)
    """

    def __init__(
        self,
        discovery_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize discovery cache.

        Args:
            discovery_url: Full URL of the well-known configuration document.
            http_client: Optional httpx client (for testing).
            timeout: Request timeout in seconds when no client is injected.
        """
        self._discovery_url = discovery_url
        self._client = http_client
        self._timeout = timeout
        self._document: DiscoveryDocument | None = None
        # Concurrent first callers share one fetch
        self._lock = asyncio.Lock()

    @property
    def discovery_url(self) -> str:
        return self._discovery_url

    @property
    def cached(self) -> DiscoveryDocument | None:
        """The cached document, or None if nothing has been fetched yet."""
        return self._document

    async def get_config(self) -> DiscoveryDocument:
        """Return the discovery document, fetching it on first use.

        Returns:
            DiscoveryDocument with the provider's endpoints.

        Raises:
            DiscoveryUnavailable: If the fetch fails or the document is incomplete.
                Failures are not cached; the next call tries again.
        """
        if self._document is not None:
            return self._document

        async with self._lock:
            if self._document is None:
                self._document = await self._fetch()
        return self._document

    async def _fetch(self) -> DiscoveryDocument:
        try:
            data = await fetch_json(self._discovery_url, http_client=self._client, timeout=self._timeout)
        except httpx.TimeoutException as e:
            raise DiscoveryUnavailable(
                f"Discovery request timed out after {self._timeout}s.\n" f"Endpoint: {self._discovery_url}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise DiscoveryUnavailable(
                f"Identity provider returned error: HTTP {e.response.status_code}\n"
                f"Endpoint: {self._discovery_url}"
            ) from e
        except httpx.HTTPError as e:
            raise DiscoveryUnavailable(
                f"Cannot reach identity provider: {type(e).__name__}\n" f"Endpoint: {self._discovery_url}"
            ) from e
        except httpx.InvalidURL as e:
            raise DiscoveryUnavailable(f"Discovery URL is not valid: {e}\nEndpoint: {self._discovery_url}") from e
        except ValueError as e:
            raise DiscoveryUnavailable(f"Discovery document is not valid JSON: {e}") from e

        document = DiscoveryDocument.from_response(data)
        get_system_logger().info(
            {
                "event": "discovery_document_cached",
                "message": f"Loaded OIDC configuration from {self._discovery_url}",
                "authorization_endpoint": document.authorization_endpoint,
                "jwks_uri": document.jwks_uri,
            }
        )
        return document
