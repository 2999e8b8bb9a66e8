"""Unit tests for StytchConsumerClient wrapper.

These tests mock the underlying Stytch SDK to test our wrapper logic in isolation.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlsplit

import aiohttp
import pytest
from stytch.core.response_base import StytchError

from webcraft.auth.client import (
    SESSION_DURATION_MINUTES,
    StytchConsumerClient,
    _primary_email,
    _session_expiry,
)
from webcraft.auth.models import ErrorKind

EXPIRES_AT = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def _stytch_error(error_type: str, message: str) -> StytchError:
    details = MagicMock()
    details.error_type = error_type
    details.error_message = message
    return StytchError(details)


def _session_response(
    email: str = "test@example.com", token: str = "session-abc"
) -> MagicMock:
    response = MagicMock()
    response.session_token = token
    response.session_jwt = "jwt-abc"
    response.user.user_id = "user-test-123"
    email_entry = MagicMock()
    email_entry.email = email
    response.user.emails = [email_entry]
    response.session.expires_at = EXPIRES_AT
    return response


class TestHelpers:
    """Tests for the response parsing helpers."""

    def test_primary_email_none_without_emails(self):
        user = MagicMock()
        user.emails = []

        assert _primary_email(user) is None

    def test_primary_email_uses_first_entry(self):
        first, second = MagicMock(), MagicMock()
        first.email = "first@example.com"
        second.email = "second@example.com"
        user = MagicMock()
        user.emails = [first, second]

        assert _primary_email(user) == "first@example.com"

    def test_session_expiry_reads_user_session(self):
        """OAuth responses carry the session under user_session."""
        response = MagicMock()
        response.session = None
        response.user_session.expires_at = EXPIRES_AT

        assert _session_expiry(response) == EXPIRES_AT

    def test_session_expiry_ignores_non_datetimes(self):
        response = MagicMock()
        response.session.expires_at = "2024-01-15"

        assert _session_expiry(response) is None


class TestConstruction:
    """Tests for client construction."""

    async def test_passes_credentials_to_sdk(self, mock_stytch_client):
        from webcraft.auth import client as client_module

        StytchConsumerClient("proj-123", "secret-123", environment="live")

        client_module.Client.assert_called_once_with(
            project_id="proj-123", secret="secret-123", environment="live"
        )


class TestSignInWithPassword:
    """Tests for the sign_in_with_password method."""

    async def test_success_returns_session(self, mock_stytch_client):
        mock_stytch_client.passwords.authenticate_async = AsyncMock(
            return_value=_session_response()
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_in_with_password("test@example.com", "pw")

        assert result.ok
        assert result.data.session_token == "session-abc"
        assert result.data.session_jwt == "jwt-abc"
        assert result.data.email == "test@example.com"
        assert result.data.user.user_id == "user-test-123"
        assert result.data.expires_at == EXPIRES_AT
        mock_stytch_client.passwords.authenticate_async.assert_called_once_with(
            email="test@example.com",
            password="pw",
            session_duration_minutes=SESSION_DURATION_MINUTES,
        )

    async def test_stytch_error_is_a_credential_error(self, mock_stytch_client):
        mock_stytch_client.passwords.authenticate_async = AsyncMock(
            side_effect=_stytch_error(
                "unauthorized_credentials", "Unauthorized credentials."
            )
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_in_with_password("test@example.com", "bad")

        assert result.data is None
        assert result.error.message == "Unauthorized credentials."
        assert result.error.error_type == "unauthorized_credentials"
        assert result.error.kind is ErrorKind.CREDENTIAL

    @pytest.mark.parametrize(
        ("exc", "message"),
        [
            (aiohttp.ClientConnectionError("Cannot connect"), "Cannot connect"),
            (asyncio.TimeoutError(), "TimeoutError"),
        ],
    )
    async def test_network_failure_is_a_transport_error(
        self, mock_stytch_client, exc, message
    ):
        mock_stytch_client.passwords.authenticate_async = AsyncMock(side_effect=exc)
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_in_with_password("test@example.com", "pw")

        assert result.error.kind is ErrorKind.TRANSPORT
        assert result.error.message == message

    async def test_unexpected_errors_propagate(self, mock_stytch_client):
        mock_stytch_client.passwords.authenticate_async = AsyncMock(
            side_effect=KeyError("boom")
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        with pytest.raises(KeyError):
            await client.sign_in_with_password("test@example.com", "pw")


class TestSignUp:
    """Tests for the sign_up method."""

    async def test_success_returns_user_and_session(self, mock_stytch_client):
        response = _session_response(email="new@example.com")
        response.user_id = "user-new"
        mock_stytch_client.passwords.create_async = AsyncMock(return_value=response)
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_up("new@example.com", "longenough")

        assert result.ok
        assert result.data.user.user_id == "user-new"
        assert result.data.user.email == "new@example.com"
        assert result.data.session.session_token == "session-abc"

    async def test_no_session_token_means_pending_confirmation(
        self, mock_stytch_client
    ):
        response = _session_response()
        response.user_id = "user-new"
        response.session_token = ""
        response.user.emails = []
        mock_stytch_client.passwords.create_async = AsyncMock(return_value=response)
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_up("new@example.com", "longenough")

        assert result.ok
        assert result.data.session is None
        assert result.data.user.email == "new@example.com"

    async def test_duplicate_email(self, mock_stytch_client):
        mock_stytch_client.passwords.create_async = AsyncMock(
            side_effect=_stytch_error("duplicate_email", "Duplicate email.")
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.sign_up("test@example.com", "longenough")

        assert result.error.error_type == "duplicate_email"
        assert result.error.kind is ErrorKind.CREDENTIAL


class TestSessions:
    """Tests for authenticate_session and revoke_session."""

    async def test_authenticate_session_success(self, mock_stytch_client):
        mock_stytch_client.sessions.authenticate_async = AsyncMock(
            return_value=_session_response(token="session-refreshed")
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.authenticate_session("session-abc")

        assert result.data.session_token == "session-refreshed"
        mock_stytch_client.sessions.authenticate_async.assert_called_once_with(
            session_token="session-abc"
        )

    async def test_authenticate_session_not_found(self, mock_stytch_client):
        mock_stytch_client.sessions.authenticate_async = AsyncMock(
            side_effect=_stytch_error("session_not_found", "Session not found.")
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.authenticate_session("stale")

        assert result.error.kind is ErrorKind.SESSION_QUERY
        assert result.error.error_type == "session_not_found"

    async def test_revoke_success(self, mock_stytch_client):
        mock_stytch_client.sessions.revoke_async = AsyncMock(return_value=MagicMock())
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.revoke_session("session-abc")

        assert result.ok
        assert result.data is None

    async def test_revoke_transport_failure(self, mock_stytch_client):
        mock_stytch_client.sessions.revoke_async = AsyncMock(
            side_effect=aiohttp.ServerDisconnectedError()
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.revoke_session("session-abc")

        assert result.error.kind is ErrorKind.TRANSPORT


class TestOAuth:
    """Tests for OAuth start URL generation and token exchange."""

    def test_start_url_test_environment(self, mock_stytch_client):
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = client.get_oauth_start_url(
            provider="google",
            public_token="public-token-test",
            login_redirect_url="http://localhost:8080/login.html?redirect=%2Ffoo",
        )

        parts = urlsplit(result.data)
        assert f"{parts.scheme}://{parts.netloc}" == "https://test.stytch.com"
        assert parts.path == "/v1/public/oauth/google/start"
        query = parse_qs(parts.query)
        assert query["public_token"] == ["public-token-test"]
        assert query["login_redirect_url"] == [
            "http://localhost:8080/login.html?redirect=%2Ffoo"
        ]
        assert query["signup_redirect_url"] == query["login_redirect_url"]

    def test_start_url_live_environment(self, mock_stytch_client):
        client = StytchConsumerClient(
            project_id="proj-123", secret="secret-123", environment="live"
        )

        result = client.get_oauth_start_url("github", "pub", "https://x.fr/login.html")

        assert result.data.startswith("https://api.stytch.com/v1/public/oauth/github/")

    def test_start_url_requires_public_token(self, mock_stytch_client):
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = client.get_oauth_start_url("google", "", "http://x/login.html")

        assert result.data is None
        assert result.error.error_type == "oauth_not_configured"

    async def test_authenticate_oauth_success(self, mock_stytch_client):
        response = _session_response(email="oauth@example.com")
        response.session = None
        response.user_session.expires_at = EXPIRES_AT
        mock_stytch_client.oauth.authenticate_async = AsyncMock(return_value=response)
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.authenticate_oauth("oauth-token")

        assert result.data.email == "oauth@example.com"
        assert result.data.expires_at == EXPIRES_AT
        mock_stytch_client.oauth.authenticate_async.assert_called_once_with(
            token="oauth-token",
            session_duration_minutes=SESSION_DURATION_MINUTES,
        )

    async def test_authenticate_oauth_invalid_token(self, mock_stytch_client):
        mock_stytch_client.oauth.authenticate_async = AsyncMock(
            side_effect=_stytch_error("oauth_token_not_found", "Token not found.")
        )
        client = StytchConsumerClient(project_id="proj-123", secret="secret-123")

        result = await client.authenticate_oauth("bad")

        assert result.error.kind is ErrorKind.CREDENTIAL
        assert result.error.message == "Token not found."
