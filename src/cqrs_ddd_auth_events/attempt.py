"""AuthAttempt — the state of one login or logout call."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .events import AuthFlow
from .exceptions import InvalidStateTransitionError

if TYPE_CHECKING:
    from .events import AuthEventKind
    from .exceptions import AuthError
    from .principal import Principal
    from .request_context import RequestContext


class AuthFlowState(Enum):
    STARTED = "started"
    AUTHENTICATING = "authenticating"
    LOGGING_OUT = "logging_out"
    FINISHED = "finished"
    FAILED = "failed"


_TERMINAL = frozenset({AuthFlowState.FINISHED, AuthFlowState.FAILED})

_TRANSITIONS: dict[tuple[AuthFlow, AuthFlowState], frozenset[AuthFlowState]] = {
    (AuthFlow.LOGIN, AuthFlowState.STARTED): frozenset(
        {AuthFlowState.AUTHENTICATING, AuthFlowState.FAILED}
    ),
    (AuthFlow.LOGIN, AuthFlowState.AUTHENTICATING): _TERMINAL,
    (AuthFlow.LOGOUT, AuthFlowState.STARTED): frozenset(
        {AuthFlowState.LOGGING_OUT, AuthFlowState.FAILED}
    ),
    (AuthFlow.LOGOUT, AuthFlowState.LOGGING_OUT): _TERMINAL,
}


@dataclass
class AuthAttempt:
    """Call-scoped record of a login or logout in progress.

    Attributes:
        flow: Login or logout.
        state: Current state; ``FINISHED`` and ``FAILED`` are terminal.
        fired: Stages dispatched so far, in order.
        result: The user, once the attempt finished.
        error: The effective error, once the attempt failed.
        context: Request context the attempt runs under.
    """

    flow: AuthFlow
    state: AuthFlowState = AuthFlowState.STARTED
    fired: list[AuthEventKind] = field(default_factory=list)
    result: Principal | None = None
    error: AuthError | None = None
    context: RequestContext | None = None

    @property
    def done(self) -> bool:
        return self.state in _TERMINAL

    @property
    def succeeded(self) -> bool:
        return self.state is AuthFlowState.FINISHED

    def transition(self, target: AuthFlowState) -> None:
        """Move to *target*.

        Raises:
            InvalidStateTransitionError: *target* is not reachable from the
                current state of this flow.
        """
        allowed = _TRANSITIONS.get((self.flow, self.state), frozenset())
        if target not in allowed:
            raise InvalidStateTransitionError(self.state, target)
        self.state = target

    def succeed(self, result: Principal) -> None:
        self.transition(AuthFlowState.FINISHED)
        self.result = result

    def fail(self, error: AuthError) -> None:
        self.transition(AuthFlowState.FAILED)
        self.error = error

    def unwrap(self) -> Principal | None:
        """Return the result, or raise the effective error of a failed attempt."""
        if self.error is not None:
            raise self.error
        if not self.done:
            raise InvalidStateTransitionError(self.state, "unwrap")
        return self.result


__all__: list[str] = ["AuthAttempt", "AuthFlowState"]
