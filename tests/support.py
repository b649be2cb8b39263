"""Test doubles and helpers shared across test modules."""

from __future__ import annotations

import base64
import json
from typing import Any, Callable

import httpx
from cryptography.hazmat.primitives.asymmetric import rsa

from implicit_auth.surface.base import SurfaceEvent, SurfaceEventType, SurfaceListener, SurfaceOptions

DISCOVERY_URL = "https://login.example.com/common/.well-known/openid-configuration"
AUTHORIZATION_ENDPOINT = "https://login.example.com/common/oauth2/authorize"
JWKS_URI = "https://login.example.com/common/discovery/keys"
KEY_ID = "test-thumbprint"


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def int_to_b64url(value: int) -> str:
    return b64url(value.to_bytes((value.bit_length() + 7) // 8, "big"))


def encode_segment(obj: Any) -> str:
    return b64url(json.dumps(obj).encode("utf-8"))


def rsa_jwk(public_key: rsa.RSAPublicKey, key_id: str = KEY_ID, **extra: Any) -> dict[str, Any]:
    """JWK entry shaped like the provider publishes (kid and x5t equal)."""
    numbers = public_key.public_numbers()
    return {
        "kty": "RSA",
        "use": "sig",
        "kid": key_id,
        "x5t": key_id,
        "n": int_to_b64url(numbers.n),
        "e": int_to_b64url(numbers.e),
        **extra,
    }


def tamper_signature(token: str) -> str:
    """Flip one bit in the decoded signature and re-encode."""
    header, payload, signature = token.split(".")
    raw = bytearray(base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4)))
    raw[0] ^= 0x01
    return ".".join([header, payload, b64url(bytes(raw))])


# ============================================================================
# Fake identity provider (httpx.MockTransport)
# ============================================================================


class FakeProvider:
    """Serves the discovery document and key set, counting requests."""

    def __init__(self, jwks: Any) -> None:
        self.discovery: Any = {
            "authorization_endpoint": AUTHORIZATION_ENDPOINT,
            "jwks_uri": JWKS_URI,
            "issuer": "https://login.example.com/{tenantid}/",
        }
        self.jwks: Any = jwks
        self.discovery_status = 200
        self.jwks_status = 200
        self.fail_with: Exception | None = None
        self.calls: dict[str, int] = {"discovery": 0, "jwks": 0}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with is not None:
            raise self.fail_with
        url = str(request.url)
        if url == DISCOVERY_URL:
            self.calls["discovery"] += 1
            return httpx.Response(self.discovery_status, json=self.discovery)
        if url == JWKS_URI:
            self.calls["jwks"] += 1
            return httpx.Response(self.jwks_status, json=self.jwks)
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


# ============================================================================
# Fake interactive surface
# ============================================================================


class FakeSurface:
    """Records commands; tests drive it with navigate() and user_close().

    With auto_ready (default) load_url() immediately reports READY and the
    first NAVIGATED, the way a fast page load would. redirect_on_load makes
    that first page the given URL instead (an immediate provider redirect).
    on_show runs when the surface is shown, to script user actions.
    """

    def __init__(
        self,
        options: SurfaceOptions,
        *,
        auto_ready: bool = True,
        redirect_on_load: str | None = None,
        on_show: Callable[["FakeSurface"], None] | None = None,
    ) -> None:
        self.options = options
        self.auto_ready = auto_ready
        self.redirect_on_load = redirect_on_load
        self.on_show = on_show
        self.loaded_urls: list[str] = []
        self.shown = 0
        self.close_calls = 0
        self._listeners: list[SurfaceListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def load_url(self, url: str) -> None:
        self.loaded_urls.append(url)
        if self.auto_ready:
            landed = self.redirect_on_load or url
            self.emit(SurfaceEvent(SurfaceEventType.READY, landed))
            self.emit(SurfaceEvent(SurfaceEventType.NAVIGATED, landed))

    def show(self) -> None:
        self.shown += 1
        if self.on_show is not None:
            self.on_show(self)

    def close(self) -> None:
        self.close_calls += 1

    def subscribe(self, listener: SurfaceListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: SurfaceEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def navigate(self, url: str) -> None:
        self.emit(SurfaceEvent(SurfaceEventType.NAVIGATED, url))

    def user_close(self) -> None:
        self.emit(SurfaceEvent(SurfaceEventType.CLOSED))


class FakeSurfaceFactory:
    """SurfaceFactory that keeps every surface it created."""

    def __init__(self, **surface_kwargs: Any) -> None:
        self.surfaces: list[FakeSurface] = []
        self._kwargs = surface_kwargs

    def __call__(self, options: SurfaceOptions) -> FakeSurface:
        surface = FakeSurface(options, **self._kwargs)
        self.surfaces.append(surface)
        return surface

    @property
    def last(self) -> FakeSurface:
        return self.surfaces[-1]
