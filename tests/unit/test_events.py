"""Tests for auth event kinds and requests."""

from __future__ import annotations

import pytest

from cqrs_ddd_auth_events.events import (
    AuthEventKind,
    AuthEventRequest,
    AuthFlow,
    Credentials,
)
from cqrs_ddd_auth_events.exceptions import HookRegistrationError
from cqrs_ddd_auth_events.request_context import RequestContext


class TestAuthEventKind:
    def test_seven_canonical_identifiers(self) -> None:
        assert [kind.value for kind in AuthEventKind] == [
            "loginStarted",
            "userAuthenticated",
            "loginFinished",
            "loginFailed",
            "logoutStarted",
            "logoutFailed",
            "logoutFinished",
        ]

    @pytest.mark.parametrize(
        ("kind", "flow"),
        [
            (AuthEventKind.LOGIN_STARTED, AuthFlow.LOGIN),
            (AuthEventKind.USER_AUTHENTICATED, AuthFlow.LOGIN),
            (AuthEventKind.LOGIN_FINISHED, AuthFlow.LOGIN),
            (AuthEventKind.LOGIN_FAILED, AuthFlow.LOGIN),
            (AuthEventKind.LOGOUT_STARTED, AuthFlow.LOGOUT),
            (AuthEventKind.LOGOUT_FAILED, AuthFlow.LOGOUT),
            (AuthEventKind.LOGOUT_FINISHED, AuthFlow.LOGOUT),
        ],
    )
    def test_flow(self, kind: AuthEventKind, flow: AuthFlow) -> None:
        assert kind.flow is flow

    def test_only_failed_kinds_are_failure_stages(self) -> None:
        failures = {kind for kind in AuthEventKind if kind.is_failure}
        assert failures == {AuthEventKind.LOGIN_FAILED, AuthEventKind.LOGOUT_FAILED}

    def test_parse_accepts_member_and_identifier(self) -> None:
        assert AuthEventKind.parse("loginFailed") is AuthEventKind.LOGIN_FAILED
        assert (
            AuthEventKind.parse(AuthEventKind.LOGOUT_STARTED)
            is AuthEventKind.LOGOUT_STARTED
        )

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(HookRegistrationError, match="beforeLogin"):
            AuthEventKind.parse("beforeLogin")

    def test_str_is_identifier(self) -> None:
        assert str(AuthEventKind.USER_AUTHENTICATED) == "userAuthenticated"


class TestCredentials:
    def test_password_hidden_from_repr(self) -> None:
        creds = Credentials(username="tupac", password="shakur")
        assert "shakur" not in repr(creds)
        assert "tupac" in repr(creds)


class TestAuthEventRequest:
    def test_defaults(self) -> None:
        request = AuthEventRequest(kind=AuthEventKind.LOGIN_STARTED)
        assert request.credentials is None
        assert request.user is None
        assert request.error is None
        assert request.metadata == {}
        assert request.ip_address is None

    def test_metadata_is_per_request(self) -> None:
        first = AuthEventRequest(kind=AuthEventKind.LOGIN_STARTED)
        second = AuthEventRequest(kind=AuthEventKind.LOGIN_STARTED)
        first.metadata["seen"] = True
        assert second.metadata == {}

    def test_ip_address_from_context(self) -> None:
        request = AuthEventRequest(
            kind=AuthEventKind.LOGIN_STARTED,
            context=RequestContext(ip_address="10.0.0.7"),
        )
        assert request.ip_address == "10.0.0.7"
