"""Instrumentation around dispatches — tracing and metrics wrappers.

Instrumentation hooks are middleware-style wrappers (tracing spans, timing,
metrics). They are unrelated to auth hooks: they cannot veto a stage and
see only an operation name and attributes.

Operation names:
    - ``auth.dispatch.<kind>`` wraps one whole stage dispatch.
    - ``auth.hook.<kind>.<hook name>`` wraps one auth hook invocation.
"""

from __future__ import annotations

import fnmatch
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cqrs_ddd.auth_events.instrumentation")


@runtime_checkable
class InstrumentationHook(Protocol):
    """Protocol for instrumentation wrappers."""

    async def __call__(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Wrap an operation; must await and return ``next_handler()``."""
        ...


class InstrumentationRegistration:
    """A registered wrapper and the operation patterns it applies to."""

    def __init__(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> None:
        self.hook = hook
        self.priority = priority
        self.operations = operations or []
        self.enabled = enabled

    def matches(self, operation: str) -> bool:
        if not self.enabled:
            return False
        if not self.operations:
            return True
        return any(fnmatch.fnmatch(operation, pattern) for pattern in self.operations)


class InstrumentationRegistry:
    """Ordered set of instrumentation wrappers, lowest priority outermost.

    Usage::

        async def timing(operation, attributes, next_handler):
            start = time.perf_counter()
            try:
                return await next_handler()
            finally:
                metrics.observe(operation, time.perf_counter() - start)

        instrumentation = InstrumentationRegistry()
        instrumentation.register(timing, operations=["auth.dispatch.*"])
        dispatcher = AuthEventDispatcher(registry, instrumentation=instrumentation)
    """

    def __init__(self) -> None:
        self._registrations: list[InstrumentationRegistration] = []

    def register(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> InstrumentationRegistration:
        """Register a wrapper, optionally restricted to glob *operations*."""
        registration = InstrumentationRegistration(
            hook,
            priority=priority,
            operations=operations,
            enabled=enabled,
        )
        self._registrations.append(registration)
        self._registrations.sort(key=lambda r: r.priority)
        return registration

    async def execute_all(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run *next_handler* inside every matching wrapper."""
        matching = [r for r in self._registrations if r.matches(operation)]
        if not matching:
            return await next_handler()

        async def pipeline(index: int = 0) -> Any:
            if index >= len(matching):
                return await next_handler()
            return await matching[index].hook(
                operation,
                attributes,
                lambda: pipeline(index + 1),
            )

        return await pipeline()

    def __len__(self) -> int:
        return len(self._registrations)

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._registrations.clear()


def logging_instrumentation(
    level: int = logging.DEBUG,
) -> InstrumentationHook:
    """Build a wrapper that logs each operation and its outcome."""

    async def _log(
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        logger.log(level, "Starting %s %s", operation, attributes)
        try:
            result = await next_handler()
        except Exception:
            logger.log(level, "%s raised", operation, exc_info=True)
            raise
        logger.log(level, "Finished %s", operation)
        return result

    return _log


__all__: list[str] = [
    "InstrumentationHook",
    "InstrumentationRegistration",
    "InstrumentationRegistry",
    "logging_instrumentation",
]
