"""Auth event kinds and the per-call request handed to hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import HookRegistrationError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .exceptions import AuthError
    from .principal import Principal
    from .request_context import RequestContext


class AuthFlow(Enum):
    """The two authentication flows a kind can belong to."""

    LOGIN = "login"
    LOGOUT = "logout"


class AuthEventKind(str, Enum):
    """Lifecycle points at which hooks can run.

    Values are the canonical identifiers hooks are registered under.
    """

    LOGIN_STARTED = "loginStarted"
    USER_AUTHENTICATED = "userAuthenticated"
    LOGIN_FINISHED = "loginFinished"
    LOGIN_FAILED = "loginFailed"
    LOGOUT_STARTED = "logoutStarted"
    LOGOUT_FAILED = "logoutFailed"
    LOGOUT_FINISHED = "logoutFinished"

    def __str__(self) -> str:
        return self.value

    @property
    def flow(self) -> AuthFlow:
        if self.value.startswith("logout"):
            return AuthFlow.LOGOUT
        return AuthFlow.LOGIN

    @property
    def is_failure(self) -> bool:
        """``True`` for the stages that receive an error to inspect."""
        return self in (AuthEventKind.LOGIN_FAILED, AuthEventKind.LOGOUT_FAILED)

    @classmethod
    def parse(cls, value: AuthEventKind | str) -> AuthEventKind:
        """Resolve *value* to a member, accepting the canonical identifier.

        Raises:
            HookRegistrationError: *value* is not one of the seven kinds.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise HookRegistrationError(
                f"Unknown auth event kind {value!r} (expected one of: {valid})"
            ) from None


@dataclass(frozen=True)
class Credentials:
    """Username/password pair submitted to login."""

    username: str
    password: str = field(repr=False)


@dataclass
class AuthEventRequest:
    """Mutable, call-scoped payload passed to every hook of one stage.

    Which fields are populated depends on the stage:

    - ``loginStarted``: ``credentials``
    - ``userAuthenticated`` / ``loginFinished``: ``credentials``, ``user``
    - ``loginFailed``: ``credentials``, ``error`` and ``user`` if known
    - ``logoutStarted`` / ``logoutFinished``: ``user``
    - ``logoutFailed``: ``user``, ``error``

    Changes made by a hook are visible to the hooks after it and to the
    pipeline. ``metadata`` is a scratch area for hooks of the same stage.
    """

    kind: AuthEventKind
    credentials: Credentials | None = None
    user: Principal | None = None
    error: AuthError | None = None
    context: RequestContext | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ip_address(self) -> str | None:
        return self.context.ip_address if self.context else None


class AuthHook(Protocol):
    """A callable registered against one :class:`AuthEventKind`.

    It may return ``None``, an error-like value, or an awaitable of either,
    and it may raise.
    """

    def __call__(self, request: AuthEventRequest) -> Awaitable[Any] | Any: ...


__all__: list[str] = [
    "AuthEventKind",
    "AuthEventRequest",
    "AuthFlow",
    "AuthHook",
    "Credentials",
]
