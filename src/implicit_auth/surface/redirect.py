"""Redirect URL inspection.

The provider answers an implicit-flow request by navigating the surface to
our redirect URI with the result in the fragment:

    http://localhost:3000/cb#state=s1&id_token=abc.def.ghi
    http://localhost:3000/cb#state=s1&error=access_denied
"""

from __future__ import annotations

__all__ = [
    "RedirectOutcome",
    "is_local_redirect",
    "parse_redirect_fragment",
]

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class RedirectOutcome:
    """Result carried by a redirect fragment: a token or an error, never both."""

    token: str | None = None
    error: str | None = None


def is_local_redirect(url: str, host_marker: str) -> bool:
    """True if the URL's host contains host_marker (case-insensitive)."""
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return False
    return host_marker.lower() in host


def parse_redirect_fragment(url: str) -> RedirectOutcome | None:
    """Scan the fragment's key=value pairs in order.

    Stops at the first key containing "id_token" (token, value kept verbatim)
    or "error" (error code). Returns None if neither appears, meaning the
    caller should keep waiting.
    """
    _, sep, fragment = url.partition("#")
    if not sep:
        return None

    for pair in fragment.split("&"):
        key, _, value = pair.partition("=")
        if "id_token" in key:
            return RedirectOutcome(token=value)
        if "error" in key:
            return RedirectOutcome(error=value or key)
    return None
