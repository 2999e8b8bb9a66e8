"""Data models for authentication results.

These dataclasses represent the outcomes of identity provider calls and
coordinator operations, providing a consistent interface between the real
Stytch client, the mock client and the page code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class AuthChangeEvent(StrEnum):
    """Auth-state-change events pushed by the identity provider."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class OAuthProvider(StrEnum):
    """OAuth providers offered on the login page."""

    GOOGLE = "google"
    GITHUB = "github"
    LINKEDIN = "linkedin"


class ErrorKind(StrEnum):
    """Failure categories used to decide whether an error reaches the UI."""

    CREDENTIAL = "credential"
    TRANSPORT = "transport"
    SESSION_QUERY = "session_query"


class SessionStatus(StrEnum):
    """Outcome of a session query."""

    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorInfo:
    """Error reported by the identity provider.

    Attributes:
        message: Provider message, passed through verbatim.
        kind: Which failure category the error belongs to.
        error_type: Provider error code, when it gives one.
    """

    message: str
    kind: ErrorKind = ErrorKind.CREDENTIAL
    error_type: str | None = None


@dataclass(frozen=True)
class SessionUser:
    """The identity embedded in a session."""

    user_id: str
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """Provider-issued session.

    Opaque apart from the embedded user, which pages use for display.

    Attributes:
        session_token: Token presented back to the provider on each query.
        user: The authenticated user.
        session_jwt: Short-lived JWT, when the provider issues one.
        expires_at: Expiry reported by the provider (timezone-aware).
    """

    session_token: str
    user: SessionUser
    session_jwt: str | None = None
    expires_at: datetime | None = None

    @property
    def email(self) -> str | None:
        return self.user.email

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(UTC))

    def to_storage(self) -> dict[str, Any]:
        """Serialise for JSON-backed session storage."""
        return {
            "session_token": self.session_token,
            "session_jwt": self.session_jwt,
            "user_id": self.user.user_id,
            "email": self.user.email,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_storage(cls, raw: dict[str, Any]) -> Session | None:
        """Rebuild a session from storage; None if the entry is unusable."""
        token = raw.get("session_token")
        user_id = raw.get("user_id")
        if not token or not user_id:
            return None
        expires_raw = raw.get("expires_at")
        try:
            expires_at = datetime.fromisoformat(expires_raw) if expires_raw else None
        except (TypeError, ValueError):
            return None
        return cls(
            session_token=token,
            session_jwt=raw.get("session_jwt"),
            user=SessionUser(user_id=user_id, email=raw.get("email")),
            expires_at=expires_at,
        )


@dataclass(frozen=True)
class SignUpData:
    """Data returned by a successful registration.

    Attributes:
        user: The newly created user.
        session: Session issued at signup, or None while e-mail
            confirmation is pending.
    """

    user: SessionUser
    session: Session | None = None


@dataclass(frozen=True)
class ProviderResponse:
    """Envelope returned by every backend and identity provider call.

    Attributes:
        data: Operation payload (Session, SignUpData, a URL...) or None.
        error: Error if the call failed.
    """

    data: Any = None
    error: ErrorInfo | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AuthResult:
    """Uniform result of a coordinator operation that can fail.

    Attributes:
        success: True iff ``error`` is None.
        data: Registration data; None for every other operation.
        error: Provider error on failure.
    """

    success: bool
    data: SignUpData | None = None
    error: ErrorInfo | None = None

    def __post_init__(self) -> None:
        if self.success != (self.error is None):
            msg = "AuthResult.success must be True exactly when error is None"
            raise ValueError(msg)

    @classmethod
    def ok(cls, data: SignUpData | None = None) -> AuthResult:
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: ErrorInfo) -> AuthResult:
        return cls(success=False, error=error)


@dataclass(frozen=True)
class SessionLookup:
    """Tagged session query result.

    Keeps "no session" apart from "query failed" even though the page
    guard treats both as anonymous.
    """

    status: SessionStatus
    session: Session | None = None
    error: ErrorInfo | None = None

    @property
    def authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED
