"""Authentication event exceptions and well-known error codes.

Every error a caller of login/logout can observe is an :class:`AuthError`:
a mutable ``{code, message}`` pair that is also an ``Exception``, so hooks
may raise it, return it, or edit it in place.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Well-known error codes surfaced by the auth pipeline.

    Hooks are free to use any other integer.
    """

    OTHER_CAUSE = -1
    INTERNAL_SERVER_ERROR = 1
    OBJECT_NOT_FOUND = 101
    INVALID_EMAIL_ADDRESS = 125
    SCRIPT_FAILED = 141
    VALIDATION_ERROR = 142
    USERNAME_MISSING = 200
    PASSWORD_MISSING = 201
    USERNAME_TAKEN = 202
    INVALID_SESSION_TOKEN = 209


# ═══════════════════════════════════════════════════════════════
# BASE ERRORS
# ═══════════════════════════════════════════════════════════════


class AuthEventsError(Exception):
    """Root exception for the auth events package."""


class AuthError(AuthEventsError):
    """Canonical authentication error.

    Unlike most exceptions, ``code`` and ``message`` are writable: a
    ``loginFailed`` hook may rewrite them and the caller sees the result.

    Example:
        ```python
        @registry.on_auth_event("loginFailed")
        def redirect_to_sso(request):
            raise AuthError(1001, "Login with Google!")
        ```
    """

    default_code: int = ErrorCode.OTHER_CAUSE
    default_message: str = "Authentication failed."

    def __init__(self, code: int | None = None, message: str | None = None) -> None:
        self.code = int(self.default_code if code is None else code)
        self.message = self.default_message if message is None else message
        super().__init__(self.code, self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def same_as(self, other: object) -> bool:
        """Return ``True`` if *other* carries the same code and message."""
        return (
            isinstance(other, AuthError)
            and other.code == self.code
            and other.message == self.message
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape ``{"code": ..., "message": ...}``."""
        return {"code": self.code, "message": self.message}


# ═══════════════════════════════════════════════════════════════
# COLLABORATOR ERRORS
# ═══════════════════════════════════════════════════════════════


class InvalidCredentialsError(AuthError):
    """Raised by credential validators when username/password do not match."""

    default_code = ErrorCode.OBJECT_NOT_FOUND
    default_message = "Invalid username/password."


class SessionInvalidError(AuthError):
    """Raised by session managers when a session cannot be found or revoked."""

    default_code = ErrorCode.INVALID_SESSION_TOKEN
    default_message = "Invalid session token."


# ═══════════════════════════════════════════════════════════════
# HOOK ERRORS
# ═══════════════════════════════════════════════════════════════


class HookAbortError(AuthError):
    """A structured ``{code, message}`` value produced by a hook.

    Created when a hook returns or raises something that has the canonical
    shape without being an :class:`AuthError` itself (a mapping, or an
    object with ``code`` and ``message`` attributes).
    """


class HookScriptFailure(AuthError):
    """A hook failed without a structured error.

    Plain text, foreign exceptions and any other unstructured value end up
    here, always with :attr:`ErrorCode.SCRIPT_FAILED`.
    """

    default_code = ErrorCode.SCRIPT_FAILED
    default_message = "Hook failed."


# ═══════════════════════════════════════════════════════════════
# PROGRAMMING ERRORS
# ═══════════════════════════════════════════════════════════════


class HookRegistrationError(AuthEventsError, ValueError):
    """Raised for an unknown event kind or a non-callable hook."""


class EventKindMismatchError(AuthEventsError, ValueError):
    """Raised when a request is dispatched under a kind it was not built for."""


class InvalidStateTransitionError(AuthEventsError):
    """Raised when an auth attempt is moved to a state it cannot reach."""

    def __init__(self, current: object, target: object) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition auth attempt from {current} to {target}")


__all__: list[str] = [
    "AuthError",
    "AuthEventsError",
    "ErrorCode",
    "EventKindMismatchError",
    "HookAbortError",
    "HookRegistrationError",
    "HookScriptFailure",
    "InvalidCredentialsError",
    "InvalidStateTransitionError",
    "SessionInvalidError",
]
