"""AuthPipeline — login and logout flows with auth event stages.

Login::

    loginStarted -> validate credentials -> userAuthenticated
                 -> loginFinished -> open session
    (any abort or validation failure) -> loginFailed -> raise error

Logout::

    logoutStarted -> invalidate session -> logoutFinished
    (any abort or invalidation failure) -> logoutFailed -> raise error
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from .attempt import AuthAttempt, AuthFlowState
from .config import AuthPipelineConfig
from .events import AuthEventKind, AuthEventRequest, AuthFlow, Credentials
from .exceptions import (
    AuthError,
    ErrorCode,
    InvalidCredentialsError,
)
from .request_context import get_request_context

if TYPE_CHECKING:
    from .dispatcher import AuthEventDispatcher, DispatchOutcome
    from .ports import ICredentialValidator, ISessionManager
    from .principal import Principal
    from .request_context import RequestContext

logger = logging.getLogger("cqrs_ddd.auth_events.pipeline")


class AuthPipeline:
    """Drives login/logout and fires the auth event stages along the way.

    Every call builds its own requests and :class:`AuthAttempt`, so any
    number of logins and logouts can run concurrently on one pipeline.

    Example:
        ```python
        registry = AuthEventRegistry()
        pipeline = AuthPipeline(
            AuthEventDispatcher(registry),
            credentials=user_store,
            sessions=session_manager,
        )

        registry.on_auth_event(
            "loginFailed", lambda request: AuthError(1001, "Login with Google!")
        )

        try:
            user = await pipeline.login("tupac", "eminem")
        except AuthError as exc:
            print(exc.code, exc.message)  # 1001 Login with Google!
        ```
    """

    def __init__(
        self,
        dispatcher: AuthEventDispatcher,
        *,
        credentials: ICredentialValidator,
        sessions: ISessionManager,
        config: AuthPipelineConfig | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._credentials = credentials
        self._sessions = sessions
        self._config = config or AuthPipelineConfig()

    @property
    def config(self) -> AuthPipelineConfig:
        return self._config

    # ── Login ────────────────────────────────────────────────────

    async def login(
        self,
        username: str,
        password: str,
        *,
        context: RequestContext | None = None,
    ) -> Principal:
        """Log a user in and return them bound to a new session.

        Raises:
            AuthError: the effective error of a failed login.
        """
        attempt = await self.login_attempt(username, password, context=context)
        return cast("Principal", attempt.unwrap())

    async def login_attempt(
        self,
        username: str,
        password: str,
        *,
        context: RequestContext | None = None,
    ) -> AuthAttempt:
        """Run the login flow and return the completed attempt.

        Unlike :meth:`login` this does not raise for a failed login; check
        ``attempt.error`` instead. Collaborator exceptions that are not
        :class:`AuthError` still propagate.
        """
        attempt = AuthAttempt(AuthFlow.LOGIN, context=context or get_request_context())

        input_error = self._check_login_input(username, password)
        if input_error is not None:
            attempt.fail(input_error)
            logger.info("Login rejected before start: %s", input_error)
            return attempt

        credentials = Credentials(username=username, password=password)

        outcome = await self._fire(
            attempt, AuthEventKind.LOGIN_STARTED, credentials=credentials
        )
        if outcome.aborted:
            return await self._login_failed(attempt, credentials, outcome.error)

        attempt.transition(AuthFlowState.AUTHENTICATING)
        try:
            user = await self._credentials.validate(username, password)
        except InvalidCredentialsError:
            return await self._login_failed(
                attempt, credentials, self._invalid_credentials()
            )
        except AuthError as exc:
            return await self._login_failed(attempt, credentials, exc)

        for kind in (AuthEventKind.USER_AUTHENTICATED, AuthEventKind.LOGIN_FINISHED):
            outcome = await self._fire(
                attempt, kind, credentials=credentials, user=user
            )
            if outcome.aborted:
                return await self._login_failed(
                    attempt, credentials, outcome.error, user=user
                )

        if self._config.issue_session:
            try:
                session_id = await self._sessions.create(user)
            except AuthError as exc:
                return await self._login_failed(attempt, credentials, exc, user=user)
            user = user.with_session(session_id)

        attempt.succeed(user)
        logger.info("Login finished for user %s", user.user_id)
        return attempt

    async def _login_failed(
        self,
        attempt: AuthAttempt,
        credentials: Credentials,
        error: AuthError | None,
        *,
        user: Principal | None = None,
    ) -> AuthAttempt:
        original = error or self._invalid_credentials()
        outcome = await self._fire(
            attempt,
            AuthEventKind.LOGIN_FAILED,
            credentials=credentials,
            user=user,
            error=original,
        )
        attempt.fail(outcome.error or original)
        logger.info("Login failed for %r: %s", credentials.username, attempt.error)
        return attempt

    def _check_login_input(self, username: str, password: str) -> AuthError | None:
        if self._config.require_username and not username:
            return AuthError(ErrorCode.USERNAME_MISSING, "username is required.")
        if self._config.require_password and not password:
            return AuthError(ErrorCode.PASSWORD_MISSING, "password is required.")
        return None

    def _invalid_credentials(self) -> InvalidCredentialsError:
        # One generic error so callers cannot tell unknown users from bad passwords.
        return InvalidCredentialsError(
            self._config.invalid_credentials_code,
            self._config.invalid_credentials_message,
        )

    # ── Logout ───────────────────────────────────────────────────

    async def logout(
        self,
        user: Principal,
        *,
        context: RequestContext | None = None,
    ) -> None:
        """Log *user* out of their session.

        Raises:
            AuthError: the effective error of a failed logout; the session
                is left untouched when ``logoutStarted`` aborted, and stays
                closed when ``logoutFinished`` aborted.
        """
        attempt = await self.logout_attempt(user, context=context)
        attempt.unwrap()

    async def logout_attempt(
        self,
        user: Principal,
        *,
        context: RequestContext | None = None,
    ) -> AuthAttempt:
        """Run the logout flow and return the completed attempt."""
        attempt = AuthAttempt(AuthFlow.LOGOUT, context=context or get_request_context())

        outcome = await self._fire(attempt, AuthEventKind.LOGOUT_STARTED, user=user)
        if outcome.aborted:
            return await self._logout_failed(attempt, user, outcome.error)

        attempt.transition(AuthFlowState.LOGGING_OUT)
        try:
            await self._sessions.invalidate(user)
        except AuthError as exc:
            return await self._logout_failed(attempt, user, exc)

        outcome = await self._fire(attempt, AuthEventKind.LOGOUT_FINISHED, user=user)
        if outcome.aborted:
            # The session is already gone; the caller still sees the veto.
            return await self._logout_failed(attempt, user, outcome.error)

        attempt.succeed(user.with_session(None))
        logger.info("Logout finished for user %s", user.user_id)
        return attempt

    async def _logout_failed(
        self,
        attempt: AuthAttempt,
        user: Principal,
        error: AuthError | None,
    ) -> AuthAttempt:
        original = error or AuthError(ErrorCode.OTHER_CAUSE, "Logout failed.")
        outcome = await self._fire(
            attempt, AuthEventKind.LOGOUT_FAILED, user=user, error=original
        )
        attempt.fail(outcome.error or original)
        logger.info("Logout failed for user %s: %s", user.user_id, attempt.error)
        return attempt

    # ── Stages ───────────────────────────────────────────────────

    async def _fire(
        self,
        attempt: AuthAttempt,
        kind: AuthEventKind,
        *,
        credentials: Credentials | None = None,
        user: Principal | None = None,
        error: AuthError | None = None,
    ) -> DispatchOutcome:
        request = AuthEventRequest(
            kind=kind,
            credentials=credentials,
            user=user,
            error=error,
            context=attempt.context,
        )
        attempt.fired.append(kind)
        logger.debug(
            "%s attempt in state %s firing %s",
            attempt.flow.value,
            attempt.state.value,
            kind,
        )
        return await self._dispatcher.dispatch(kind, request)


__all__: list[str] = ["AuthPipeline"]
