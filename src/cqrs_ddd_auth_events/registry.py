"""AuthEventRegistry — maps auth event kinds to their ordered hooks."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, overload

from .events import AuthEventKind
from .exceptions import HookRegistrationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .events import AuthHook

logger = logging.getLogger("cqrs_ddd.auth_events.registry")


class AuthEventRegistry:
    """Registry of auth hooks, one append-only list per event kind.

    Hooks for a kind run in the order they were registered. The same hook
    may be registered twice and will then run twice.

    Create one instance per server (or per test) and hand it to the
    dispatcher; ``reset()`` clears it between isolated runs.

    Usage::

        registry = AuthEventRegistry()

        @registry.on_auth_event(AuthEventKind.LOGIN_STARTED)
        def audit(request):
            print(request.credentials.username)

        registry.register("loginFailed", notify_security_team)
    """

    def __init__(self) -> None:
        self._hooks: dict[AuthEventKind, tuple[AuthHook, ...]] = {}
        self._lock = threading.Lock()

    def register(self, kind: AuthEventKind | str, hook: AuthHook) -> AuthHook:
        """Append *hook* to the hooks of *kind* and return it.

        Raises:
            HookRegistrationError: unknown *kind* or non-callable *hook*.
        """
        event_kind = AuthEventKind.parse(kind)
        if not callable(hook):
            raise HookRegistrationError(
                f"Hook for {event_kind} must be callable, got {type(hook).__name__}"
            )
        with self._lock:
            # Tuples are rebuilt on append so snapshots stay untouched.
            self._hooks[event_kind] = (*self._hooks.get(event_kind, ()), hook)
        logger.debug(
            "Registered hook %s for %s",
            getattr(hook, "__qualname__", type(hook).__name__),
            event_kind,
        )
        return hook

    @overload
    def on_auth_event(
        self, kind: AuthEventKind | str, hook: None = None
    ) -> Callable[[AuthHook], AuthHook]: ...

    @overload
    def on_auth_event(self, kind: AuthEventKind | str, hook: AuthHook) -> AuthHook: ...

    def on_auth_event(
        self, kind: AuthEventKind | str, hook: AuthHook | None = None
    ) -> AuthHook | Callable[[AuthHook], AuthHook]:
        """Register *hook* for *kind*, or return a decorator when it is omitted."""
        if hook is not None:
            return self.register(kind, hook)

        event_kind = AuthEventKind.parse(kind)

        def decorator(func: AuthHook) -> AuthHook:
            return self.register(event_kind, func)

        return decorator

    def handlers_for(self, kind: AuthEventKind | str) -> tuple[AuthHook, ...]:
        """Return an immutable snapshot of the hooks registered for *kind*."""
        event_kind = AuthEventKind.parse(kind)
        with self._lock:
            return self._hooks.get(event_kind, ())

    def has_handlers(self, kind: AuthEventKind | str) -> bool:
        return bool(self.handlers_for(kind))

    def count(self, kind: AuthEventKind | str | None = None) -> int:
        """Number of hooks for *kind*, or across all kinds when omitted."""
        if kind is not None:
            return len(self.handlers_for(kind))
        with self._lock:
            return sum(len(hooks) for hooks in self._hooks.values())

    def registered_kinds(self) -> list[AuthEventKind]:
        """Kinds that have at least one hook (debugging utility)."""
        with self._lock:
            return [kind for kind, hooks in self._hooks.items() if hooks]

    def reset(self) -> None:
        """Remove all hook registrations."""
        with self._lock:
            self._hooks.clear()
        logger.debug("Auth event registry reset")


__all__: list[str] = ["AuthEventRegistry"]
