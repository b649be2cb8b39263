"""pywebview adapter for the interactive surface.

pywebview owns the main thread once webview.start() is called and fires
window events on its own threads. WebviewSurface forwards those events onto
the asyncio loop that created it with call_soon_threadsafe, so listeners
always run on the loop thread.

run_with_webview() wires this up: it starts the GUI loop on the calling
(main) thread and runs the async workflow on pywebview's worker thread.

pywebview has no modal windows; on_top is the closest available option.
"""

from __future__ import annotations

__all__ = [
    "WebviewSurface",
    "run_with_webview",
]

import asyncio
import threading
from typing import Any, Awaitable, Callable, TypeVar

import webview

from implicit_auth.constants import APP_NAME
from implicit_auth.surface.base import (
    SurfaceEvent,
    SurfaceEventType,
    SurfaceFactory,
    SurfaceListener,
    SurfaceOptions,
    Unsubscribe,
)

T = TypeVar("T")


class WebviewSurface:
    """InteractiveSurface backed by a pywebview window.

    The first page load after load_url() emits READY, and every load
    (including that first one) emits NAVIGATED with the window's current URL.
    """

    def __init__(
        self,
        options: SurfaceOptions,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        create_window: Callable[..., Any] | None = None,
    ) -> None:
        """Create the (hidden) window.

        Args:
            options: Window geometry and chrome.
            loop: Loop to deliver events on (defaults to the running loop).
            create_window: Window factory (defaults to webview.create_window).
        """
        self._loop = loop or asyncio.get_running_loop()
        self._listeners: list[SurfaceListener] = []
        self._lock = threading.Lock()
        self._url_requested = False
        self._ready = False
        self._closed = False
        self._window_gone = False

        create = create_window or webview.create_window
        self._window = create(
            options.title,
            width=options.width,
            height=options.height,
            resizable=options.resizable,
            frameless=options.frameless,
            on_top=options.on_top,
            transparent=options.transparent,
            hidden=options.hidden,
        )
        self._window.events.loaded += self._on_loaded
        self._window.events.closed += self._on_closed

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load_url(self, url: str) -> None:
        with self._lock:
            self._url_requested = True
        self._window.load_url(url)

    def show(self) -> None:
        self._window.show()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._window_gone:
            self._window.destroy()

    def subscribe(self, listener: SurfaceListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # pywebview callbacks (GUI threads)
    # ------------------------------------------------------------------

    def _on_loaded(self) -> None:
        with self._lock:
            if not self._url_requested:
                return
            first = not self._ready
            self._ready = True

        url = self._window.get_current_url()
        if first:
            self._post(SurfaceEvent(SurfaceEventType.READY, url))
        self._post(SurfaceEvent(SurfaceEventType.NAVIGATED, url))

    def _on_closed(self) -> None:
        self._window_gone = True
        self._post(SurfaceEvent(SurfaceEventType.CLOSED))

    def _post(self, event: SurfaceEvent) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._emit, event)

    def _emit(self, event: SurfaceEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


def run_with_webview(workflow: Callable[[SurfaceFactory], Awaitable[T]]) -> T:
    """Run an async workflow that needs surfaces, hosting the GUI loop.

    Must be called from the main thread. Blocks until the workflow finishes;
    its exception, if any, is re-raised here.

    Args:
        workflow: Coroutine function taking a SurfaceFactory.

    Returns:
        Whatever the workflow returned.
    """
    outcome: dict[str, Any] = {}
    # pywebview requires at least one window before start()
    anchor = webview.create_window(APP_NAME, hidden=True)

    async def drive() -> T:
        loop = asyncio.get_running_loop()
        return await workflow(lambda options: WebviewSurface(options, loop=loop))

    def runner() -> None:
        try:
            outcome["value"] = asyncio.run(drive())
        except BaseException as e:
            outcome["error"] = e
        finally:
            anchor.destroy()

    webview.start(runner)

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]
