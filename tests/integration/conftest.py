"""Fixtures for end-to-end login/logout scenarios."""

from __future__ import annotations

import pytest

from cqrs_ddd_auth_events import AuthEventKind, AuthEventRegistry, AuthEventRequest


@pytest.fixture
def recorded(registry: AuthEventRegistry) -> list[AuthEventRequest]:
    """Every request that reached a hook, in order.

    The recording hook is registered on every stage before any hook a test
    adds, so it always runs first and never aborts.
    """
    requests: list[AuthEventRequest] = []
    for kind in AuthEventKind:
        registry.register(kind, requests.append)
    return requests
