"""Per-invocation handle on an open surface.

Subscribes before the first URL is loaded and buffers every event, so a
redirect that lands while the surface is still becoming ready is not lost.
Owns closing: close() unsubscribes and closes the surface exactly once.
"""

from __future__ import annotations

__all__ = ["SurfaceSession"]

import asyncio

from implicit_auth.exceptions import UserCancelled
from implicit_auth.surface.base import InteractiveSurface, SurfaceEvent, SurfaceEventType


class SurfaceSession:
    """Buffered event stream plus lifetime control for one surface.

    Must be created inside a running event loop.
    """

    def __init__(self, surface: InteractiveSurface) -> None:
        self.surface = surface
        self._ready: asyncio.Future[str | None] = asyncio.get_running_loop().create_future()
        self._events: asyncio.Queue[SurfaceEvent] = asyncio.Queue()
        self._closed = False
        self._unsubscribe = surface.subscribe(self._on_event)

    @property
    def closed(self) -> bool:
        return self._closed

    def _on_event(self, event: SurfaceEvent) -> None:
        if event.type is SurfaceEventType.READY:
            if not self._ready.done():
                self._ready.set_result(event.url)
            return
        if event.type is SurfaceEventType.CLOSED and not self._ready.done():
            self._ready.set_exception(UserCancelled("Surface closed before it finished loading"))
        self._events.put_nowait(event)

    async def wait_until_ready(self) -> str | None:
        """Wait for the first page load. Returns the URL it reported.

        Raises:
            UserCancelled: If the surface closed first.
        """
        return await self._ready

    async def next_event(self) -> SurfaceEvent:
        """Next NAVIGATED or CLOSED event, in arrival order."""
        return await self._events.get()

    def show(self) -> None:
        self.surface.show()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        self.surface.close()
