"""ErrorNormalizer — turns whatever a hook produced into an ``AuthError``.

A hook can signal failure three ways: raise something, return something,
or edit ``request.error`` in place. :meth:`ErrorNormalizer.classify` folds
all three into one tagged outcome so the dispatcher never inspects raw
hook values itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from .exceptions import AuthError, HookAbortError, HookScriptFailure

if TYPE_CHECKING:
    from .events import AuthEventRequest


@dataclass(frozen=True)
class Produced:
    """The hook raised or returned a value; it becomes the effective error."""

    error: AuthError


@dataclass(frozen=True)
class Mutated:
    """The hook produced nothing but changed ``request.error``."""

    error: AuthError | None


@dataclass(frozen=True)
class Passthrough:
    """The hook produced nothing and left ``request.error`` alone."""


HookOutcome: TypeAlias = Produced | Mutated | Passthrough


@dataclass(frozen=True)
class ErrorSnapshot:
    """State of ``request.error`` captured before a hook runs."""

    error: object
    code: object = None
    message: object = None

    @classmethod
    def capture(cls, request: AuthEventRequest) -> ErrorSnapshot:
        error = request.error
        return cls(
            error=error,
            code=getattr(error, "code", None),
            message=getattr(error, "message", None),
        )

    def differs_from(self, request: AuthEventRequest) -> bool:
        """``True`` if ``request.error`` was replaced or edited since capture."""
        current = request.error
        if current is not self.error:
            return True
        if current is None:
            return False
        return (
            getattr(current, "code", None) != self.code
            or getattr(current, "message", None) != self.message
        )


def _is_structured(code: Any, message: Any) -> bool:
    return (
        isinstance(code, int)
        and not isinstance(code, bool)
        and isinstance(message, str)
    )


class ErrorNormalizer:
    """Converts hook results into canonical :class:`AuthError` values."""

    @staticmethod
    def is_empty(value: Any) -> bool:
        """Falsy values count as "nothing produced"; exceptions never do."""
        return value is None or (not value and not isinstance(value, BaseException))

    def coerce(self, value: Any) -> AuthError:
        """Convert a non-empty hook value to an :class:`AuthError`.

        - ``AuthError`` instances are returned unchanged.
        - Mappings with ``code``/``message`` keys and objects with ``code``
          and ``message`` attributes become :class:`HookAbortError`.
        - Text, foreign exceptions and anything else become
          :class:`HookScriptFailure` with ``SCRIPT_FAILED``.
        """
        if isinstance(value, AuthError):
            return value

        if isinstance(value, Mapping):
            code, message = value.get("code"), value.get("message")
            if _is_structured(code, message):
                return HookAbortError(code, message)
        elif not isinstance(value, str):
            code = getattr(value, "code", None)
            message = getattr(value, "message", None)
            if _is_structured(code, message):
                return HookAbortError(code, message)

        if isinstance(value, str):
            return HookScriptFailure(message=value)
        if isinstance(value, BaseException):
            return HookScriptFailure(message=str(value) or type(value).__name__)
        return HookScriptFailure(message=str(value))

    def normalize(
        self, produced: Any, existing_error: AuthError | None
    ) -> AuthError | None:
        """Return the effective error given a hook's *produced* value.

        An empty value leaves *existing_error* (possibly ``None``) in place.
        """
        if self.is_empty(produced):
            return existing_error
        return self.coerce(produced)

    def classify(
        self,
        produced: Any,
        request: AuthEventRequest,
        before: ErrorSnapshot,
    ) -> HookOutcome:
        """Classify one hook run as :class:`Produced`, :class:`Mutated` or
        :class:`Passthrough`.

        A hook that assigned something other than an ``AuthError`` to
        ``request.error`` has it coerced and written back.
        """
        if not self.is_empty(produced):
            return Produced(self.coerce(produced))

        if not before.differs_from(request):
            return Passthrough()

        current = request.error
        if current is None or self.is_empty(current):
            request.error = None
            return Mutated(None)
        error = self.coerce(current)
        request.error = error
        return Mutated(error)


__all__: list[str] = [
    "ErrorNormalizer",
    "ErrorSnapshot",
    "HookOutcome",
    "Mutated",
    "Passthrough",
    "Produced",
]
