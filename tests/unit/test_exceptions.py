"""Tests for auth event exceptions."""

from __future__ import annotations

from cqrs_ddd_auth_events.exceptions import (
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


class TestExceptionHierarchy:
    def test_auth_error_subclasses_root(self) -> None:
        assert issubclass(AuthError, AuthEventsError)

    def test_collaborator_errors_are_auth_errors(self) -> None:
        assert issubclass(InvalidCredentialsError, AuthError)
        assert issubclass(SessionInvalidError, AuthError)

    def test_hook_errors_are_auth_errors(self) -> None:
        assert issubclass(HookAbortError, AuthError)
        assert issubclass(HookScriptFailure, AuthError)

    def test_registration_error_is_value_error(self) -> None:
        assert issubclass(HookRegistrationError, ValueError)
        assert issubclass(HookRegistrationError, AuthEventsError)

    def test_kind_mismatch_error_is_value_error(self) -> None:
        assert issubclass(EventKindMismatchError, ValueError)
        assert issubclass(EventKindMismatchError, AuthEventsError)
        assert not issubclass(EventKindMismatchError, AuthError)

    def test_state_transition_error_is_not_auth_error(self) -> None:
        assert not issubclass(InvalidStateTransitionError, AuthError)


class TestAuthError:
    def test_code_and_message(self) -> None:
        err = AuthError(1001, "Login with Google!")
        assert err.code == 1001
        assert err.message == "Login with Google!"
        assert str(err) == "[1001] Login with Google!"

    def test_fields_are_writable(self) -> None:
        err = AuthError(ErrorCode.OBJECT_NOT_FOUND, "Invalid username/password.")
        err.code = ErrorCode.INVALID_EMAIL_ADDRESS
        err.message = "Login with Google!"
        assert err.to_dict() == {"code": 125, "message": "Login with Google!"}

    def test_code_is_plain_int(self) -> None:
        err = AuthError(ErrorCode.SCRIPT_FAILED, "x")
        assert type(err.code) is int
        assert err.code == 141

    def test_same_as_compares_code_and_message(self) -> None:
        err = HookAbortError(999, "nope")
        assert err.same_as(AuthError(999, "nope"))
        assert not err.same_as(AuthError(999, "other"))
        assert not err.same_as({"code": 999, "message": "nope"})

    def test_repr(self) -> None:
        assert repr(AuthError(1, "boom")) == "AuthError(code=1, message='boom')"


class TestDefaults:
    def test_invalid_credentials_defaults(self) -> None:
        err = InvalidCredentialsError()
        assert err.code == ErrorCode.OBJECT_NOT_FOUND
        assert err.message == "Invalid username/password."

    def test_session_invalid_defaults(self) -> None:
        assert SessionInvalidError().code == ErrorCode.INVALID_SESSION_TOKEN

    def test_script_failure_defaults_to_script_failed(self) -> None:
        err = HookScriptFailure(message="Login with Google!")
        assert err.code == ErrorCode.SCRIPT_FAILED
        assert err.message == "Login with Google!"

    def test_transition_error_message(self) -> None:
        err = InvalidStateTransitionError("finished", "failed")
        assert err.current == "finished"
        assert "finished" in str(err)
        assert "failed" in str(err)
