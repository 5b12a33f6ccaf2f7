"""Ports for the collaborators the auth pipeline drives.

Credential checking and session handling live outside this package; the
pipeline only needs the two protocols below. In-memory implementations
for development and tests are in :mod:`cqrs_ddd_auth_events.memory`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .principal import Principal


# ═══════════════════════════════════════════════════════════════
# CREDENTIAL VALIDATOR PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class ICredentialValidator(Protocol):
    """Resolves a username/password pair to a user."""

    async def validate(self, username: str, password: str) -> Principal:
        """Return the user matching the credentials.

        Raises:
            AuthError: The credentials are wrong (typically
                :class:`~cqrs_ddd_auth_events.exceptions.InvalidCredentialsError`).
        """
        ...


# ═══════════════════════════════════════════════════════════════
# SESSION MANAGER PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class ISessionManager(Protocol):
    """Issues and invalidates sessions for authenticated users."""

    async def create(self, user: Principal) -> str:
        """Open a session for *user* and return its token."""
        ...

    async def invalidate(self, user: Principal) -> None:
        """Invalidate the session *user* is bound to.

        Raises:
            AuthError: The session cannot be invalidated (typically
                :class:`~cqrs_ddd_auth_events.exceptions.SessionInvalidError`).
        """
        ...

    async def is_valid(self, session_id: str) -> bool:
        """``True`` if *session_id* refers to a live session."""
        ...


__all__: list[str] = ["ICredentialValidator", "ISessionManager"]
