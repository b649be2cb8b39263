"""Authorization and logout URL construction."""

from __future__ import annotations

__all__ = [
    "build_authorization_url",
    "build_logout_url",
    "compute_nonce",
]

import uuid
from collections.abc import Mapping
from urllib.parse import urlencode

from implicit_auth.constants import RESPONSE_TYPE_ID_TOKEN, SILENT_PROMPT


def compute_nonce(namespace: str) -> str:
    """Nonce derived from a fixed namespace, identical on every run."""
    return str(uuid.uuid3(uuid.NAMESPACE_URL, namespace))


def _with_query(endpoint: str, params: dict[str, str], extra_params: Mapping[str, str] | None = None) -> str:
    for name, value in (extra_params or {}).items():
        params.setdefault(name, value)
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{urlencode(params)}"


def build_authorization_url(
    authorization_endpoint: str,
    *,
    client_id: str,
    redirect_uri: str,
    nonce_namespace: str,
    renew: bool = False,
    state: str | None = None,
    client_request_id: str | None = None,
    extra_params: Mapping[str, str] | None = None,
) -> str:
    """Build the implicit-flow authorization request.

    Args:
        authorization_endpoint: From the discovery document.
        client_id: Registered client identifier.
        redirect_uri: Where the provider sends the id_token fragment.
        nonce_namespace: Namespace for the stable nonce.
        renew: Silent renewal; adds prompt=none so the provider shows no UI.
        state: Fixed state value (random uuid4 when omitted).
        client_request_id: Fixed correlation id (random uuid4 when omitted).
        extra_params: Additional query parameters; built-in ones take precedence.

    Returns:
        Full URL to load into the login surface.
    """
    params = {
        "response_type": RESPONSE_TYPE_ID_TOKEN,
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "state": state or str(uuid.uuid4()),
        "client-request-id": client_request_id or str(uuid.uuid4()),
        "nonce": compute_nonce(nonce_namespace),
    }
    if renew:
        params["prompt"] = SILENT_PROMPT
    return _with_query(authorization_endpoint, params, extra_params)


def build_logout_url(
    logout_endpoint: str,
    *,
    post_logout_redirect_uri: str,
    prompt: bool = True,
    extra_params: Mapping[str, str] | None = None,
) -> str:
    """Build the provider logout URL. prompt=False adds prompt=none."""
    params = {"post_logout_redirect_uri": post_logout_redirect_uri}
    if not prompt:
        params["prompt"] = SILENT_PROMPT
    return _with_query(logout_endpoint, params, extra_params)
