"""Configuration for the auth pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ErrorCode


@dataclass(frozen=True)
class AuthPipelineConfig:
    """Settings for :class:`~cqrs_ddd_auth_events.pipeline.AuthPipeline`.

    Attributes:
        invalid_credentials_code: Code used when the credential validator
            rejects a login without a more specific error.
        invalid_credentials_message: Message paired with that code.
        require_username: Reject logins with an empty username before any
            stage fires (``USERNAME_MISSING``).
        require_password: Reject logins with an empty password before any
            stage fires (``PASSWORD_MISSING``).
        issue_session: Open a session once every login stage has passed.
    """

    invalid_credentials_code: int = ErrorCode.OBJECT_NOT_FOUND
    invalid_credentials_message: str = "Invalid username/password."
    require_username: bool = True
    require_password: bool = True
    issue_session: bool = True

    def __post_init__(self) -> None:
        if not self.invalid_credentials_message:
            raise ValueError("invalid_credentials_message must not be empty")


__all__: list[str] = ["AuthPipelineConfig"]
