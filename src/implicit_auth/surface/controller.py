"""Interactive surface controller.

Opens login and sign-out surfaces at provider URLs and watches their
navigation for the local redirect that carries the outcome.

Login:
    session = await controller.open_auth_surface(renew=False)
    session.show()
    token = await controller.wait_for_token(session)   # raises on close/error
    session.close()

Sign-out:
    session = await controller.open_sign_out_surface(prompt=True)
    session.show()
    reason = await controller.wait_for_sign_out(session, timeout=5.0)
    session.close()

The caller owns closing. Opening closes the surface itself only when it
fails before a session is handed back.
"""

from __future__ import annotations

__all__ = [
    "SignOutReason",
    "SurfaceController",
]

import asyncio
from typing import Literal

from implicit_auth.config import AppConfig
from implicit_auth.constants import APP_NAME
from implicit_auth.exceptions import ProviderError, TokenMalformed, UserCancelled
from implicit_auth.security.auth.discovery import DiscoveryCache
from implicit_auth.surface.base import SurfaceEventType, SurfaceFactory, SurfaceOptions
from implicit_auth.surface.redirect import is_local_redirect, parse_redirect_fragment
from implicit_auth.surface.session import SurfaceSession
from implicit_auth.surface.urls import build_authorization_url, build_logout_url
from implicit_auth.telemetry.system.system_logger import get_system_logger

SignOutReason = Literal["redirect", "timeout"]


class SurfaceController:
    """Creates surfaces and interprets their navigation."""

    def __init__(
        self,
        config: AppConfig,
        discovery: DiscoveryCache,
        surface_factory: SurfaceFactory,
    ) -> None:
        """Initialize controller.

        Args:
            config: Application configuration (provider and surface sections).
            discovery: Shared discovery cache.
            surface_factory: Creates a surface for the given options.
        """
        self._provider = config.provider
        self._surface = config.surface
        self._discovery = discovery
        self._factory = surface_factory

    @property
    def redirect_host_marker(self) -> str:
        return self._provider.redirect_host_marker

    def login_options(self) -> SurfaceOptions:
        width, height = self._surface.login_size
        return SurfaceOptions(title=f"{APP_NAME} sign-in", width=width, height=height)

    def sign_out_options(self) -> SurfaceOptions:
        width, height = self._surface.sign_out_size
        return SurfaceOptions(title=f"{APP_NAME} sign-out", width=width, height=height)

    async def open_auth_surface(self, renew: bool = False, redirect_uri: str | None = None) -> SurfaceSession:
        """Open a hidden login surface at the authorization endpoint.

        Returns once the surface reports ready. The caller shows it.

        Raises:
            DiscoveryUnavailable: If the discovery document cannot be fetched.
            UserCancelled: If the surface closes before it is ready.
        """
        document = await self._discovery.get_config()
        url = build_authorization_url(
            document.authorization_endpoint,
            client_id=self._provider.client_id,
            redirect_uri=redirect_uri or self._provider.redirect_uri,
            nonce_namespace=self._provider.nonce_namespace,
            renew=renew,
            extra_params=self._provider.extra_query_params,
        )
        return await self._open(url, self.login_options())

    async def open_sign_out_surface(self, prompt: bool = True) -> SurfaceSession:
        """Open a hidden sign-out surface at the provider logout endpoint."""
        url = build_logout_url(
            self._provider.logout_endpoint,
            post_logout_redirect_uri=self._provider.post_logout_redirect_uri,
            prompt=prompt,
            extra_params=self._provider.extra_query_params,
        )
        return await self._open(url, self.sign_out_options())

    async def _open(self, url: str, options: SurfaceOptions) -> SurfaceSession:
        surface = self._factory(options)
        session = SurfaceSession(surface)
        try:
            surface.load_url(url)
            await session.wait_until_ready()
        except BaseException:
            session.close()
            raise
        return session

    async def wait_for_token(self, session: SurfaceSession) -> str:
        """Wait for the redirect carrying an identity token.

        Navigations to other hosts, and local redirects without a token or
        error marker, are ignored.

        Raises:
            UserCancelled: If the surface is closed first.
            ProviderError: If the redirect carries an error marker.
            TokenMalformed: If the id_token value is empty.
        """
        while True:
            event = await session.next_event()
            if event.type is SurfaceEventType.CLOSED:
                raise UserCancelled()
            if event.url is None or not is_local_redirect(event.url, self.redirect_host_marker):
                continue

            outcome = parse_redirect_fragment(event.url)
            if outcome is None:
                continue
            if outcome.error is not None:
                raise ProviderError(outcome.error)
            if not outcome.token:
                raise TokenMalformed("Redirect carried an empty id_token")
            return outcome.token

    async def _watch_sign_out_redirect(self, session: SurfaceSession) -> None:
        while True:
            event = await session.next_event()
            if (
                event.type is SurfaceEventType.NAVIGATED
                and event.url is not None
                and is_local_redirect(event.url, self.redirect_host_marker)
            ):
                return

    async def wait_for_sign_out(self, session: SurfaceSession, timeout: float) -> SignOutReason:
        """Race the post-logout redirect against a fallback timer.

        Whichever happens first decides the reason; the other is cancelled
        before returning. Closing the surface does not end the wait early.
        """
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[SignOutReason] = loop.create_future()

        def settle(reason: SignOutReason) -> None:
            if not outcome.done():
                outcome.set_result(reason)

        def on_watcher_done(task: asyncio.Task[None]) -> None:
            if not task.cancelled() and task.exception() is None:
                settle("redirect")

        timer = loop.call_later(timeout, settle, "timeout")
        watcher = asyncio.create_task(self._watch_sign_out_redirect(session))
        watcher.add_done_callback(on_watcher_done)
        try:
            reason = await outcome
        finally:
            timer.cancel()
            watcher.cancel()

        get_system_logger().debug(
            {
                "event": "sign_out_resolved",
                "message": f"Sign-out resolved by {reason}",
                "reason": reason,
            }
        )
        return reason
