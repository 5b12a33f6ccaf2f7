"""Request context attached to every auth event request.

The server's transport layer sets it once per incoming request; the auth
pipeline copies it onto each :class:`~cqrs_ddd_auth_events.events.AuthEventRequest`
so hooks can see who is calling without touching the transport.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class RequestContext:
    """Client metadata for the request that triggered a login or logout.

    Attributes:
        request_id: Correlation identifier of the incoming request.
        ip_address: Client IP address.
        user_agent: Client user agent string.
        installation_id: Identifier of the client installation, if any.
        headers: Request headers (already filtered by the transport).
        created_at: When the context was captured.
    """

    request_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    installation_id: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, str | None]:
        return {
            "request_id": self.request_id,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "installation_id": self.installation_id,
            "created_at": self.created_at.isoformat(),
        }


_request_context: ContextVar[RequestContext | None] = ContextVar(
    "auth_request_context", default=None
)


def get_request_context() -> RequestContext | None:
    """Get the request context of the current task, if one was set."""
    return _request_context.get()


def set_request_context(context: RequestContext) -> Token[RequestContext | None]:
    """Set the request context for the current task.

    Example:
        ```python
        token = set_request_context(RequestContext(ip_address="10.0.0.7"))
        try:
            await pipeline.login(username, password)
        finally:
            reset_request_context(token)
        ```
    """
    return _request_context.set(context)


def reset_request_context(token: Token[RequestContext | None]) -> None:
    """Restore the context that was active before :func:`set_request_context`."""
    _request_context.reset(token)


__all__: list[str] = [
    "RequestContext",
    "get_request_context",
    "reset_request_context",
    "set_request_context",
]
