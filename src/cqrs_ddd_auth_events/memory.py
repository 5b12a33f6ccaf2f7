"""In-memory user store and session manager for development and testing.

WARNING: These implementations keep everything in process memory and are
NOT suitable for production or for multiple workers.
"""

from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .exceptions import (
    AuthError,
    ErrorCode,
    InvalidCredentialsError,
    SessionInvalidError,
)
from .hasher import PasswordHasher
from .ports import ICredentialValidator, ISessionManager
from .principal import Principal


@dataclass(frozen=True)
class StoredUser:
    """A user record as kept by :class:`InMemoryUserStore`."""

    user_id: str
    username: str
    password_hash: str
    email: str | None = None

    def to_principal(self) -> Principal:
        return Principal(user_id=self.user_id, username=self.username, email=self.email)


class InMemoryUserStore(ICredentialValidator):
    """Dictionary-backed user records with bcrypt password hashes.

    Example:
        ```python
        users = InMemoryUserStore()
        await users.sign_up("tupac", "shakur")
        user = await users.validate("tupac", "shakur")
        ```
    """

    def __init__(self, password_hasher: PasswordHasher | None = None) -> None:
        self.password_hasher = password_hasher or PasswordHasher()
        self._users: dict[str, StoredUser] = {}

    async def sign_up(
        self, username: str, password: str, *, email: str | None = None
    ) -> Principal:
        """Create a user record.

        Raises:
            AuthError: ``USERNAME_MISSING``, ``PASSWORD_MISSING`` or
                ``USERNAME_TAKEN``.
        """
        if not username:
            raise AuthError(ErrorCode.USERNAME_MISSING, "username is required.")
        if not password:
            raise AuthError(ErrorCode.PASSWORD_MISSING, "password is required.")
        if username in self._users:
            raise AuthError(
                ErrorCode.USERNAME_TAKEN, "Account already exists for this username."
            )

        record = StoredUser(
            user_id=uuid.uuid4().hex,
            username=username,
            password_hash=self.password_hasher.hash(password),
            email=email,
        )
        self._users[username] = record
        return record.to_principal()

    async def validate(self, username: str, password: str) -> Principal:
        """Return the user for a matching username/password pair.

        Raises:
            InvalidCredentialsError: unknown username or wrong password.
        """
        record = self._users.get(username)
        if record is None or not self.password_hasher.verify(
            record.password_hash, password
        ):
            raise InvalidCredentialsError()

        if self.password_hasher.needs_rehash(record.password_hash):
            record = StoredUser(
                user_id=record.user_id,
                username=record.username,
                password_hash=self.password_hasher.hash(password),
                email=record.email,
            )
            self._users[username] = record
        return record.to_principal()

    async def get_by_username(self, username: str) -> Principal | None:
        record = self._users.get(username)
        return record.to_principal() if record else None

    def clear_all(self) -> None:
        """Remove every user (testing utility)."""
        self._users.clear()


class InMemorySessionManager(ISessionManager):
    """Session tokens kept in a local dictionary.

    Each login gets its own token; invalidating it leaves the user's other
    sessions alone.
    """

    def __init__(self, *, ttl_seconds: int | None = 3600) -> None:
        """Initialize the session manager.

        Args:
            ttl_seconds: Session lifetime; ``None`` or ``0`` never expires.
        """
        self.ttl_seconds = ttl_seconds
        self._sessions: dict[str, tuple[str, datetime | None]] = {}

    async def create(self, user: Principal) -> str:
        token = secrets.token_urlsafe(32)
        expires_at: datetime | None = None
        if self.ttl_seconds:
            expires_at = datetime.now(timezone.utc) + timedelta(
                seconds=self.ttl_seconds
            )
        self._sessions[token] = (user.user_id, expires_at)
        return token

    async def invalidate(self, user: Principal) -> None:
        """Invalidate the session *user* is bound to.

        Raises:
            SessionInvalidError: the user has no live session.
        """
        token = user.session_id
        if not token or not await self.is_valid(token):
            raise SessionInvalidError()
        if self._sessions[token][0] != user.user_id:
            raise SessionInvalidError()
        del self._sessions[token]

    async def is_valid(self, session_id: str) -> bool:
        entry = self._sessions.get(session_id)
        if entry is None:
            return False
        _, expires_at = entry
        if expires_at is not None and datetime.now(timezone.utc) > expires_at:
            del self._sessions[session_id]
            return False
        return True

    async def sessions_for(self, user_id: str) -> list[str]:
        """Tokens of the live sessions belonging to *user_id*."""
        tokens = [t for t, (owner, _) in self._sessions.items() if owner == user_id]
        return [t for t in tokens if await self.is_valid(t)]

    def clear_all(self) -> None:
        """Remove every session (testing utility)."""
        self._sessions.clear()


__all__: list[str] = [
    "InMemorySessionManager",
    "InMemoryUserStore",
    "StoredUser",
]
