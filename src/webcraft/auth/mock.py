"""Mock auth client for testing.

This module provides a mock implementation of the AuthBackendProtocol
that can be used in tests and local development without making real
Stytch API calls.

Users live in memory: any email can sign up, and the predefined test
users below can log in straight away.
"""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

from webcraft.auth.models import (
    ErrorInfo,
    ErrorKind,
    ProviderResponse,
    Session,
    SessionUser,
    SignUpData,
)

# Predefined test users: email -> password
MOCK_USERS = {
    "test@example.com": "password123",
    "client@webcraft.fr": "motdepasse",
}
MOCK_VALID_OAUTH_TOKEN = "mock-valid-oauth-token"
MOCK_OAUTH_EMAIL = "oauth-user@example.com"
MOCK_MIN_PASSWORD_LENGTH = 8

_SESSION_LIFETIME = timedelta(days=7)


def _email_to_user_id(email: str) -> str:
    """Generate a deterministic user ID from an email."""
    return f"mock-user-{hashlib.md5(email.encode()).hexdigest()[:8]}"


def _email_to_session_token(email: str) -> str:
    """Generate a deterministic session token from an email."""
    return f"mock-session-{hashlib.md5(email.encode()).hexdigest()[:12]}"


class MockAuthClient:
    """Mock implementation of AuthBackendProtocol for testing.

    Error messages mimic the provider's wording so pages render the same
    text they would in production.

    Set ``offline = True`` to make every call fail with a transport error.
    """

    def __init__(self) -> None:
        self._users: dict[str, str] = dict(MOCK_USERS)
        # Active sessions: session_token -> email
        self._active_sessions: dict[str, str] = {}
        self.offline = False
        # Every call, in order, for test assertions
        self.calls: list[tuple[str, str]] = []

    def _new_session(self, email: str) -> Session:
        token = _email_to_session_token(email)
        self._active_sessions[token] = email
        return Session(
            session_token=token,
            session_jwt=f"mock-jwt-{email}",
            user=SessionUser(user_id=_email_to_user_id(email), email=email),
            expires_at=datetime.now(UTC) + _SESSION_LIFETIME,
        )

    def _offline_error(self) -> ProviderResponse:
        return ProviderResponse(
            error=ErrorInfo(
                message="Cannot connect to host mock.stytch.com",
                kind=ErrorKind.TRANSPORT,
            )
        )

    async def sign_in_with_password(
        self, email: str, password: str
    ) -> ProviderResponse:
        self.calls.append(("sign_in_with_password", email))
        if self.offline:
            return self._offline_error()
        if self._users.get(email) != password:
            return ProviderResponse(
                error=ErrorInfo(
                    message="Email or password is incorrect.",
                    error_type="unauthorized_credentials",
                )
            )
        return ProviderResponse(data=self._new_session(email))

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        self.calls.append(("sign_up", email))
        if self.offline:
            return self._offline_error()
        if email in self._users:
            return ProviderResponse(
                error=ErrorInfo(
                    message="A user with this email already exists.",
                    error_type="duplicate_email",
                )
            )
        if len(password) < MOCK_MIN_PASSWORD_LENGTH:
            return ProviderResponse(
                error=ErrorInfo(
                    message="Password does not meet the strength requirements.",
                    error_type="weak_password",
                )
            )
        self._users[email] = password
        session = self._new_session(email)
        return ProviderResponse(data=SignUpData(user=session.user, session=session))

    async def authenticate_session(self, session_token: str) -> ProviderResponse:
        self.calls.append(("authenticate_session", session_token))
        if self.offline:
            return self._offline_error()
        email = self._active_sessions.get(session_token)
        if email is None:
            return ProviderResponse(
                error=ErrorInfo(
                    message="Session could not be found.",
                    kind=ErrorKind.SESSION_QUERY,
                    error_type="session_not_found",
                )
            )
        return ProviderResponse(data=self._new_session(email))

    async def revoke_session(self, session_token: str) -> ProviderResponse:
        self.calls.append(("revoke_session", session_token))
        if self.offline:
            return self._offline_error()
        self._active_sessions.pop(session_token, None)
        return ProviderResponse()

    def get_oauth_start_url(
        self,
        provider: str,
        public_token: str,
        login_redirect_url: str,
    ) -> ProviderResponse:
        """Return a mock start URL that can be detected in tests."""
        self.calls.append(("get_oauth_start_url", provider))
        params = {
            "public_token": public_token,
            "login_redirect_url": login_redirect_url,
            "signup_redirect_url": login_redirect_url,
        }
        return ProviderResponse(
            data=(
                f"https://mock.stytch.com/v1/public/oauth/{provider}/start"
                f"?{urlencode(params)}"
            )
        )

    async def authenticate_oauth(self, token: str) -> ProviderResponse:
        self.calls.append(("authenticate_oauth", token))
        if self.offline:
            return self._offline_error()
        if token != MOCK_VALID_OAUTH_TOKEN:
            return ProviderResponse(
                error=ErrorInfo(
                    message="The OAuth token is invalid or has expired.",
                    error_type="oauth_token_not_found",
                )
            )
        return ProviderResponse(data=self._new_session(MOCK_OAUTH_EMAIL))

    # Test helper methods

    def active_session_count(self) -> int:
        return len(self._active_sessions)
