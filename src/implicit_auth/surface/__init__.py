"""Interactive login and sign-out surfaces.

The webview adapter is not imported here so the controller and its tests do
not require a GUI backend. Import implicit_auth.surface.webview explicitly.
"""

from __future__ import annotations

__all__ = [
    "InteractiveSurface",
    "RedirectOutcome",
    "SignOutReason",
    "SurfaceController",
    "SurfaceEvent",
    "SurfaceEventType",
    "SurfaceFactory",
    "SurfaceOptions",
    "SurfaceSession",
    "build_authorization_url",
    "build_logout_url",
    "compute_nonce",
    "is_local_redirect",
    "parse_redirect_fragment",
]

from implicit_auth.surface.base import (
    InteractiveSurface,
    SurfaceEvent,
    SurfaceEventType,
    SurfaceFactory,
    SurfaceOptions,
)
from implicit_auth.surface.controller import SignOutReason, SurfaceController
from implicit_auth.surface.redirect import RedirectOutcome, is_local_redirect, parse_redirect_fragment
from implicit_auth.surface.session import SurfaceSession
from implicit_auth.surface.urls import build_authorization_url, build_logout_url, compute_nonce
