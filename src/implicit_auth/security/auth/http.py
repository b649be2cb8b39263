"""JSON fetch helper shared by the discovery cache and key set resolver."""

from __future__ import annotations

__all__ = ["fetch_json"]

from typing import Any

import httpx


async def fetch_json(
    url: str,
    *,
    http_client: httpx.AsyncClient | None,
    timeout: float,
) -> Any:
    """GET a URL and decode its JSON body.

    Uses the injected client when given (tests, connection reuse); otherwise
    opens a short-lived client with the same timeout for connect and read.

    Raises:
        httpx.HTTPError: Network failure or non-2xx status.
        ValueError: Body is not valid JSON.
    """
    if http_client is not None:
        response = await http_client.get(url, follow_redirects=True)
    else:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=timeout)) as client:
            response = await client.get(url, follow_redirects=True)
    response.raise_for_status()
    return response.json()
