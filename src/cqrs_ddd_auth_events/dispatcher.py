"""AuthEventDispatcher — runs the hooks of one auth stage, in order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from .events import AuthEventKind
from .exceptions import AuthError, EventKindMismatchError
from .instrumentation import InstrumentationRegistry
from .normalizer import ErrorNormalizer, ErrorSnapshot, Produced

if TYPE_CHECKING:
    from .events import AuthEventRequest, AuthHook
    from .registry import AuthEventRegistry

logger = logging.getLogger("cqrs_ddd.auth_events.dispatcher")


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of one dispatch: continue, or abort with an effective error."""

    kind: AuthEventKind
    error: AuthError | None = None
    hooks_run: int = 0

    @classmethod
    def proceed(cls, kind: AuthEventKind, hooks_run: int = 0) -> DispatchOutcome:
        return cls(kind=kind, error=None, hooks_run=hooks_run)

    @classmethod
    def abort(
        cls, kind: AuthEventKind, error: AuthError, hooks_run: int = 0
    ) -> DispatchOutcome:
        return cls(kind=kind, error=error, hooks_run=hooks_run)

    @property
    def aborted(self) -> bool:
        return self.error is not None


def _hook_name(hook: Any) -> str:
    return getattr(hook, "__qualname__", None) or type(hook).__name__


class AuthEventDispatcher:
    """Runs the registered hooks of a stage against one request.

    Hooks run strictly one after another; an async hook is awaited before
    the next one starts. The first hook that raises, or returns anything
    non-empty, ends the dispatch: its value is normalized into an
    :class:`AuthError`, stored on ``request.error`` and returned as an
    abort. Hooks that only edit ``request.error`` do not end the dispatch.

    Any stage can abort, not only the failure stages. A failure stage whose
    hooks stay passive still aborts with the error it was given.

    Hook exceptions never escape :meth:`dispatch`; only ``BaseException``
    subclasses such as ``asyncio.CancelledError`` propagate.
    """

    def __init__(
        self,
        registry: AuthEventRegistry,
        *,
        normalizer: ErrorNormalizer | None = None,
        instrumentation: InstrumentationRegistry | None = None,
    ) -> None:
        self._registry = registry
        self._normalizer = normalizer or ErrorNormalizer()
        self._instrumentation = instrumentation or InstrumentationRegistry()

    @property
    def registry(self) -> AuthEventRegistry:
        return self._registry

    async def dispatch(
        self, kind: AuthEventKind | str, request: AuthEventRequest
    ) -> DispatchOutcome:
        """Run every hook registered for *kind* against *request*.

        Raises:
            EventKindMismatchError: *request* was built for another kind.
        """
        event_kind = AuthEventKind.parse(kind)
        if AuthEventKind.parse(request.kind) is not event_kind:
            raise EventKindMismatchError(
                f"Cannot dispatch {event_kind} with a request built for {request.kind}"
            )

        hooks = self._registry.handlers_for(event_kind)
        if not hooks:
            return self._settle(event_kind, request, hooks_run=0)

        attributes: dict[str, object] = {
            "auth.event": event_kind.value,
            "auth.flow": event_kind.flow.value,
            "auth.hooks": len(hooks),
            "request_id": request.context.request_id if request.context else None,
        }

        async def _run() -> DispatchOutcome:
            return await self._run_hooks(event_kind, hooks, request)

        outcome: DispatchOutcome = await self._instrumentation.execute_all(
            f"auth.dispatch.{event_kind.value}",
            attributes,
            _run,
        )
        return outcome

    async def _run_hooks(
        self,
        kind: AuthEventKind,
        hooks: tuple[AuthHook, ...],
        request: AuthEventRequest,
    ) -> DispatchOutcome:
        logger.debug("Dispatching %s to %d hook(s)", kind, len(hooks))
        for index, hook in enumerate(hooks, start=1):
            before = ErrorSnapshot.capture(request)
            produced: Any
            try:
                produced = await self._invoke(kind, hook, request)
            except AuthError as exc:
                produced = exc
            except Exception as exc:
                logger.warning(
                    "Hook %s for %s raised %s",
                    _hook_name(hook),
                    kind,
                    type(exc).__name__,
                    exc_info=True,
                )
                produced = exc

            outcome = self._normalizer.classify(produced, request, before)
            if isinstance(outcome, Produced):
                request.error = outcome.error
                logger.info(
                    "%s aborted by hook %s after %d of %d hook(s): %s",
                    kind,
                    _hook_name(hook),
                    index,
                    len(hooks),
                    outcome.error,
                )
                return DispatchOutcome.abort(kind, outcome.error, hooks_run=index)

        return self._settle(kind, request, hooks_run=len(hooks))

    async def _invoke(
        self, kind: AuthEventKind, hook: AuthHook, request: AuthEventRequest
    ) -> Any:
        name = _hook_name(hook)

        async def _call() -> Any:
            result = hook(request)
            if isawaitable(result):
                result = await result
            return result

        return await self._instrumentation.execute_all(
            f"auth.hook.{kind.value}.{name}",
            {"auth.event": kind.value, "hook.name": name},
            _call,
        )

    def _settle(
        self, kind: AuthEventKind, request: AuthEventRequest, *, hooks_run: int
    ) -> DispatchOutcome:
        """Outcome once every hook ran without producing a value."""
        if request.error is None:
            return DispatchOutcome.proceed(kind, hooks_run=hooks_run)
        return DispatchOutcome.abort(kind, request.error, hooks_run=hooks_run)


__all__: list[str] = ["AuthEventDispatcher", "DispatchOutcome"]
