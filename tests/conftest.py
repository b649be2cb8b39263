"""Shared fixtures: RSA keys, minted tokens, a fake provider and config."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Callable

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from implicit_auth.config import AppConfig, LoggingConfig, ProviderConfig
from implicit_auth.security.auth.discovery import DiscoveryCache
from implicit_auth.security.auth.jwt_validator import TokenValidator
from implicit_auth.security.auth.key_set import KeySetResolver

from support import DISCOVERY_URL, KEY_ID, FakeProvider, FakeSurfaceFactory, rsa_jwk


# ============================================================================
# Keys and tokens
# ============================================================================


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """RSA key the fake provider publishes."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    """A second key the provider never publishes."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def jwks(rsa_private_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    return {"keys": [rsa_jwk(rsa_private_key.public_key())]}


@pytest.fixture
def mint_token(rsa_private_key: rsa.RSAPrivateKey) -> Callable[..., str]:
    """Mint an id_token; override key, key id, algorithm or lifetime."""

    def mint(
        *,
        key: rsa.RSAPrivateKey | None = None,
        key_id: str = KEY_ID,
        algorithm: str = "RS256",
        expires_in: timedelta = timedelta(hours=1),
        **claims: Any,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "iss": "https://login.example.com/tenant/",
            "aud": "test-client-id",
            "sub": "user-123",
            "iat": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
            **claims,
        }
        return jwt.encode(
            payload,
            key or rsa_private_key,
            algorithm=algorithm,
            headers={"x5t": key_id, "kid": key_id},
        )

    return mint


# ============================================================================
# Provider and HTTP
# ============================================================================


@pytest.fixture
def provider(jwks: dict[str, Any]) -> FakeProvider:
    return FakeProvider(jwks)


@pytest.fixture
async def http_client(provider: FakeProvider) -> AsyncIterator[httpx.AsyncClient]:
    async with provider.client() as client:
        yield client


@pytest.fixture
def discovery(http_client: httpx.AsyncClient) -> DiscoveryCache:
    return DiscoveryCache(DISCOVERY_URL, http_client=http_client)


@pytest.fixture
def validator(discovery: DiscoveryCache, http_client: httpx.AsyncClient) -> TokenValidator:
    return TokenValidator(discovery, KeySetResolver(http_client=http_client))


# ============================================================================
# Config and surfaces
# ============================================================================


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Config pointing at the fake provider, logging under tmp_path."""
    return AppConfig(
        provider=ProviderConfig(
            discovery_url=DISCOVERY_URL,
            client_id="test-client-id",
            redirect_uri="http://localhost:3000/callback",
        ),
        logging=LoggingConfig(log_dir=str(tmp_path / "logs")),
    )


@pytest.fixture
def surface_factory() -> FakeSurfaceFactory:
    return FakeSurfaceFactory()
