"""Tests for SurfaceSession buffering and lifetime."""

from __future__ import annotations

import asyncio

import pytest

from implicit_auth.exceptions import UserCancelled
from implicit_auth.surface.base import SurfaceEvent, SurfaceEventType, SurfaceOptions
from implicit_auth.surface.session import SurfaceSession

from support import FakeSurface

OPTIONS = SurfaceOptions(title="test", width=100, height=100)


class TestSurfaceSession:
    """Tests for SurfaceSession."""

    async def test_subscribes_on_creation(self) -> None:
        """Given a new session, the surface has one listener."""
        surface = FakeSurface(OPTIONS)
        SurfaceSession(surface)
        assert surface.listener_count == 1

    async def test_ready_resolves_with_url(self) -> None:
        """Given a READY event, wait_until_ready returns its URL."""
        # Arrange
        surface = FakeSurface(OPTIONS, auto_ready=False)
        session = SurfaceSession(surface)

        # Act
        surface.emit(SurfaceEvent(SurfaceEventType.READY, "https://idp/page"))

        # Assert
        assert await session.wait_until_ready() == "https://idp/page"

    async def test_close_before_ready_raises_user_cancelled(self) -> None:
        """Given CLOSED before READY, wait_until_ready raises UserCancelled."""
        # Arrange
        surface = FakeSurface(OPTIONS, auto_ready=False)
        session = SurfaceSession(surface)

        # Act
        surface.user_close()

        # Assert
        with pytest.raises(UserCancelled):
            await session.wait_until_ready()

    async def test_events_buffered_in_order(self) -> None:
        """Given events before anyone waits, next_event returns them in order."""
        # Arrange
        surface = FakeSurface(OPTIONS)
        session = SurfaceSession(surface)
        surface.navigate("https://idp/one")
        surface.navigate("https://idp/two")
        surface.user_close()

        # Act
        events = [await session.next_event() for _ in range(3)]

        # Assert
        assert [e.type for e in events] == [
            SurfaceEventType.NAVIGATED,
            SurfaceEventType.NAVIGATED,
            SurfaceEventType.CLOSED,
        ]
        assert events[1].url == "https://idp/two"

    async def test_ready_is_not_queued(self) -> None:
        """Given READY then NAVIGATED, only NAVIGATED reaches next_event."""
        # Arrange
        surface = FakeSurface(OPTIONS)
        session = SurfaceSession(surface)
        surface.load_url("https://idp/start")

        # Act
        event = await asyncio.wait_for(session.next_event(), timeout=1)

        # Assert
        assert event.type is SurfaceEventType.NAVIGATED

    async def test_close_is_idempotent_and_unsubscribes(self) -> None:
        """Given close() twice, the surface is closed once and unsubscribed."""
        # Arrange
        surface = FakeSurface(OPTIONS)
        session = SurfaceSession(surface)

        # Act
        session.close()
        session.close()

        # Assert
        assert surface.close_calls == 1
        assert surface.listener_count == 0
        assert session.closed is True

    async def test_show_delegates(self) -> None:
        surface = FakeSurface(OPTIONS)
        SurfaceSession(surface).show()
        assert surface.shown == 1
