"""Principal value object — the user identity carried through auth events."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """Immutable identity of an authenticated user.

    Hooks receive it as ``request.user`` on ``userAuthenticated``,
    ``loginFinished`` and every logout stage. Since it is frozen, hooks that
    want to annotate the user should use ``request.metadata`` instead.

    Attributes:
        user_id: Stable identifier of the user record.
        username: Username supplied at sign-up.
        email: Optional email address.
        session_id: Session token, set once login has issued a session.
        claims: Extra attributes copied from the user record.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    email: str | None = None
    session_id: str | None = None
    claims: dict[str, Any] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        """Alias for :attr:`user_id`."""
        return self.user_id

    @property
    def has_session(self) -> bool:
        return self.session_id is not None

    def with_session(self, session_id: str | None) -> Principal:
        """Return a copy bound to *session_id* (``None`` to unbind)."""
        return self.model_copy(update={"session_id": session_id})

    def __hash__(self) -> int:
        # claims is a dict and therefore excluded
        return hash((self.user_id, self.username, self.email, self.session_id))


__all__: list[str] = ["Principal"]
