"""Auth workflow orchestrator.

Two entry points, one invocation per call:

    result = await service.enter_auth_workflow(renew=False)
    if result is not None:
        use(result.token)

    await service.enter_sign_out_workflow(prompt=True)   # always True

Login state machine:
    IDLE -> SURFACE_OPEN -> AWAITING_REDIRECT -> VALIDATING -> SUCCEEDED
                     \\                  \\              \\-> FAILED
                      \\-> FAILED         \\-> FAILED (closed / provider error)

Sign-out state machine:
    IDLE -> SURFACE_OPEN -> AWAITING_CONFIRMATION -> DONE

Every failure, expected (AuthWorkflowError) or not, collapses to a None
result at this boundary.
The surface is closed on every exit path, before validation starts.
"""

from __future__ import annotations

__all__ = [
    "AuthWorkflowResult",
    "AuthWorkflowService",
    "LoginState",
    "SignOutState",
]

from dataclasses import dataclass
from enum import Enum

from implicit_auth.constants import DEFAULT_SIGN_OUT_TIMEOUT_SECONDS
from implicit_auth.exceptions import AuthWorkflowError
from implicit_auth.security.auth.jwt_validator import TokenValidator
from implicit_auth.surface.controller import SurfaceController
from implicit_auth.surface.session import SurfaceSession
from implicit_auth.telemetry.audit.auth_logger import AuthLogger
from implicit_auth.telemetry.system.system_logger import get_system_logger


class LoginState(str, Enum):
    IDLE = "idle"
    SURFACE_OPEN = "surface_open"
    AWAITING_REDIRECT = "awaiting_redirect"
    VALIDATING = "validating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SignOutState(str, Enum):
    IDLE = "idle"
    SURFACE_OPEN = "surface_open"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    DONE = "done"


@dataclass(frozen=True)
class AuthWorkflowResult:
    """Successful login outcome. Failure is represented by None."""

    token: str


class AuthWorkflowService:
    """Runs login and sign-out against a surface controller and validator."""

    def __init__(
        self,
        controller: SurfaceController,
        validator: TokenValidator,
        sign_out_timeout: float = DEFAULT_SIGN_OUT_TIMEOUT_SECONDS,
        auth_logger: AuthLogger | None = None,
    ) -> None:
        self._controller = controller
        self._validator = validator
        self._sign_out_timeout = sign_out_timeout
        self._auth_logger = auth_logger
        self.login_state = LoginState.IDLE
        self.sign_out_state = SignOutState.IDLE

    async def enter_auth_workflow(
        self,
        renew: bool = False,
        redirect_uri: str | None = None,
    ) -> AuthWorkflowResult | None:
        """Run one login attempt.

        Args:
            renew: Silent renewal (prompt=none).
            redirect_uri: Redirect URI override for this attempt.

        Returns:
            AuthWorkflowResult with the validated token, or None on any failure.
        """
        self.login_state = LoginState.IDLE
        if self._auth_logger is not None:
            self._auth_logger.log_login_started(renew=renew)

        session: SurfaceSession | None = None
        try:
            session = await self._controller.open_auth_surface(renew=renew, redirect_uri=redirect_uri)
            self.login_state = LoginState.SURFACE_OPEN
            session.show()

            self.login_state = LoginState.AWAITING_REDIRECT
            token = await self._controller.wait_for_token(session)
        except AuthWorkflowError as e:
            return self._fail(renew, e.failure_type, str(e))
        except Exception as e:
            return self._fail(renew, "unexpected_error", f"{type(e).__name__}: {e}")
        finally:
            if session is not None:
                session.close()

        self.login_state = LoginState.VALIDATING
        if not await self._validator.validate(token):
            return self._fail(renew, "signature_invalid", "Identity token failed validation")

        self.login_state = LoginState.SUCCEEDED
        if self._auth_logger is not None:
            self._auth_logger.log_login_succeeded(token=token, renew=renew)
        get_system_logger().info(
            {
                "event": "login_succeeded",
                "message": "Silent renewal succeeded" if renew else "Login succeeded",
            }
        )
        return AuthWorkflowResult(token=token)

    def _fail(self, renew: bool, failure_type: str, message: str) -> None:
        self.login_state = LoginState.FAILED
        get_system_logger().warning(
            {
                "event": "login_failed",
                "message": message,
                "failure_type": failure_type,
                "renew": renew,
            }
        )
        if self._auth_logger is not None:
            self._auth_logger.log_login_failed(renew=renew, failure_type=failure_type, error_message=message)
        return None

    async def enter_sign_out_workflow(self, prompt: bool = True) -> bool:
        """Sign out at the provider. Always returns True.

        A redirect to the local target or the fallback timeout both count
        as completion. If the surface cannot be opened at all, sign-out is
        still reported complete.
        """
        self.sign_out_state = SignOutState.IDLE
        session: SurfaceSession | None = None
        try:
            session = await self._controller.open_sign_out_surface(prompt=prompt)
            self.sign_out_state = SignOutState.SURFACE_OPEN
            session.show()

            self.sign_out_state = SignOutState.AWAITING_CONFIRMATION
            reason = await self._controller.wait_for_sign_out(session, self._sign_out_timeout)
        except AuthWorkflowError as e:
            get_system_logger().warning(
                {
                    "event": "sign_out_surface_failed",
                    "message": f"Sign-out surface failed: {e}",
                    "failure_type": e.failure_type,
                }
            )
            reason = "surface_error"
        except Exception as e:
            get_system_logger().error(
                {
                    "event": "sign_out_surface_failed",
                    "message": f"Sign-out surface failed: {e}",
                    "error_type": type(e).__name__,
                }
            )
            reason = "surface_error"
        finally:
            if session is not None:
                session.close()

        self.sign_out_state = SignOutState.DONE
        if self._auth_logger is not None:
            self._auth_logger.log_sign_out_completed(reason=reason)
        return True
