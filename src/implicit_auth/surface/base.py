"""Interactive surface interface.

A surface is a small browser window the identity provider renders its own
pages in. The workflows drive it through three commands and watch it
through one event subscription:

    surface.load_url(url)        # start navigating
    surface.show()               # make visible (created hidden)
    surface.close()              # tear down
    unsubscribe = surface.subscribe(listener)

Events are SurfaceEvent values: READY once the first page has loaded,
NAVIGATED for every page load (including the first), CLOSED when the window
goes away. Adapters must deliver events on the event loop thread.
"""

from __future__ import annotations

__all__ = [
    "InteractiveSurface",
    "SurfaceEvent",
    "SurfaceEventType",
    "SurfaceFactory",
    "SurfaceListener",
    "SurfaceOptions",
    "Unsubscribe",
]

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol


class SurfaceEventType(str, Enum):
    READY = "ready"
    NAVIGATED = "navigated"
    CLOSED = "closed"


@dataclass(frozen=True)
class SurfaceEvent:
    """Something that happened on a surface.

    Attributes:
        type: What happened.
        url: Current URL for READY/NAVIGATED, None for CLOSED.
    """

    type: SurfaceEventType
    url: str | None = None


@dataclass(frozen=True)
class SurfaceOptions:
    """How a surface window should be created.

    The login and sign-out surfaces are always frameless, fixed-size,
    always-on-top and modal, and start hidden so no blank frame is shown
    before the provider's page has rendered.
    """

    title: str
    width: int
    height: int
    frameless: bool = True
    resizable: bool = False
    on_top: bool = True
    transparent: bool = True
    modal: bool = True
    hidden: bool = True


SurfaceListener = Callable[[SurfaceEvent], None]
Unsubscribe = Callable[[], None]


class InteractiveSurface(Protocol):
    """Commands and event subscription for one surface window."""

    def load_url(self, url: str) -> None: ...

    def show(self) -> None: ...

    def close(self) -> None: ...

    def subscribe(self, listener: SurfaceListener) -> Unsubscribe: ...


SurfaceFactory = Callable[[SurfaceOptions], InteractiveSurface]
