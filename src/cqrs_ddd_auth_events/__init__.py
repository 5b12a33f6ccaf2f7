"""CQRS-DDD Auth Events Package

Hooks for the authentication lifecycle — "What happens while you log in?"

Operators register hooks against seven lifecycle stages of login and
logout. Hooks run in registration order and may observe the request,
mutate it, or abort the operation by raising or returning an error.

Usage:
    ```python
    from cqrs_ddd_auth_events import (
        AuthError,
        AuthEventDispatcher,
        AuthEventKind,
        AuthEventRegistry,
        AuthPipeline,
    )

    registry = AuthEventRegistry()

    @registry.on_auth_event(AuthEventKind.LOGOUT_STARTED)
    async def block_service_accounts(request):
        if request.user.username.startswith("svc-"):
            raise AuthError(101, "Service accounts cannot log out")

    pipeline = AuthPipeline(
        AuthEventDispatcher(registry),
        credentials=user_store,
        sessions=session_manager,
    )
    ```

Submodules:
    - `registry`: hook registration per event kind
    - `normalizer`: conversion of hook results into ``AuthError``
    - `dispatcher`: ordered, short-circuiting hook execution
    - `pipeline`: login/logout flows wired to the event stages
    - `memory`: in-memory user store and session manager
"""

from __future__ import annotations

from .attempt import AuthAttempt, AuthFlowState
from .config import AuthPipelineConfig
from .dispatcher import AuthEventDispatcher, DispatchOutcome
from .events import (
    AuthEventKind,
    AuthEventRequest,
    AuthFlow,
    AuthHook,
    Credentials,
)
from .exceptions import (
    AuthError,
    AuthEventsError,
    ErrorCode,
    EventKindMismatchError,
    HookAbortError,
    HookRegistrationError,
    HookScriptFailure,
    InvalidCredentialsError,
    InvalidStateTransitionError,
    SessionInvalidError,
)
from .hasher import PasswordHasher
from .instrumentation import (
    InstrumentationHook,
    InstrumentationRegistry,
    logging_instrumentation,
)
from .memory import InMemorySessionManager, InMemoryUserStore
from .normalizer import (
    ErrorNormalizer,
    ErrorSnapshot,
    HookOutcome,
    Mutated,
    Passthrough,
    Produced,
)
from .pipeline import AuthPipeline
from .ports import ICredentialValidator, ISessionManager
from .principal import Principal
from .registry import AuthEventRegistry
from .request_context import (
    RequestContext,
    get_request_context,
    reset_request_context,
    set_request_context,
)

__all__: list[str] = [
    # Events
    "AuthEventKind",
    "AuthEventRequest",
    "AuthFlow",
    "AuthHook",
    "Credentials",
    # Exceptions
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
    # Registry / dispatch
    "AuthEventRegistry",
    "AuthEventDispatcher",
    "DispatchOutcome",
    "ErrorNormalizer",
    "ErrorSnapshot",
    "HookOutcome",
    "Mutated",
    "Passthrough",
    "Produced",
    # Instrumentation
    "InstrumentationHook",
    "InstrumentationRegistry",
    "logging_instrumentation",
    # Pipeline
    "AuthAttempt",
    "AuthFlowState",
    "AuthPipeline",
    "AuthPipelineConfig",
    # Ports & adapters
    "ICredentialValidator",
    "ISessionManager",
    "InMemorySessionManager",
    "InMemoryUserStore",
    "PasswordHasher",
    "Principal",
    # Request context
    "RequestContext",
    "get_request_context",
    "reset_request_context",
    "set_request_context",
]

__version__ = "0.1.0"
