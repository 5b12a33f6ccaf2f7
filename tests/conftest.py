"""Test configuration and fixtures."""

from __future__ import annotations

import pytest
import pytest_asyncio

from cqrs_ddd_auth_events import (
    AuthEventDispatcher,
    AuthEventRegistry,
    AuthPipeline,
    InMemorySessionManager,
    InMemoryUserStore,
    PasswordHasher,
    Principal,
)


@pytest.fixture
def registry() -> AuthEventRegistry:
    return AuthEventRegistry()


@pytest.fixture
def dispatcher(registry: AuthEventRegistry) -> AuthEventDispatcher:
    return AuthEventDispatcher(registry)


@pytest.fixture
def users() -> InMemoryUserStore:
    # Minimum bcrypt cost keeps the suite fast.
    return InMemoryUserStore(PasswordHasher(rounds=4))


@pytest.fixture
def sessions() -> InMemorySessionManager:
    return InMemorySessionManager()


@pytest.fixture
def pipeline(
    dispatcher: AuthEventDispatcher,
    users: InMemoryUserStore,
    sessions: InMemorySessionManager,
) -> AuthPipeline:
    return AuthPipeline(dispatcher, credentials=users, sessions=sessions)


@pytest_asyncio.fixture
async def tupac(users: InMemoryUserStore) -> Principal:
    """A signed-up user with password ``shakur``."""
    return await users.sign_up("tupac", "shakur")


@pytest.fixture
def principal() -> Principal:
    return Principal(user_id="user-123", username="testuser", session_id="sess-1")
