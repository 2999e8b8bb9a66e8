"""Stytch consumer client wrapper for authentication.

This module provides a wrapper around the Stytch consumer SDK that implements
the AuthBackendProtocol, providing a consistent interface for password,
session and OAuth calls.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any
from urllib.parse import urlencode

import aiohttp
from stytch import Client
from stytch.core.response_base import StytchError

from webcraft.auth.models import (
    ErrorInfo,
    ErrorKind,
    ProviderResponse,
    Session,
    SessionUser,
    SignUpData,
)

logger = logging.getLogger(__name__)

# Stytch API base URLs
STYTCH_TEST_API = "https://test.stytch.com"
STYTCH_LIVE_API = "https://api.stytch.com"

SESSION_DURATION_MINUTES = 60 * 24 * 7  # 1 week

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def _primary_email(user: Any) -> str | None:
    """Return the first e-mail address on a Stytch user, if any."""
    emails = getattr(user, "emails", None) or []
    if not emails:
        return None
    return getattr(emails[0], "email", None)


def _session_expiry(response: Any) -> datetime | None:
    """Read the session expiry from a Stytch response.

    Password and session responses expose ``session``; OAuth responses
    expose ``user_session``.
    """
    session = getattr(response, "session", None) or getattr(
        response, "user_session", None
    )
    expires_at = getattr(session, "expires_at", None)
    return expires_at if isinstance(expires_at, datetime) else None


def _session_from_response(response: Any) -> Session:
    user = response.user
    return Session(
        session_token=response.session_token,
        session_jwt=response.session_jwt,
        user=SessionUser(user_id=user.user_id, email=_primary_email(user)),
        expires_at=_session_expiry(response),
    )


def _stytch_error(e: StytchError, kind: ErrorKind) -> ErrorInfo:
    return ErrorInfo(
        message=e.details.error_message,
        kind=kind,
        error_type=e.details.error_type,
    )


def _transport_error(e: BaseException) -> ErrorInfo:
    return ErrorInfo(message=str(e) or type(e).__name__, kind=ErrorKind.TRANSPORT)


class StytchConsumerClient:
    """Wrapper around the Stytch consumer Client.

    This class implements the AuthBackendProtocol and turns SDK responses
    and exceptions into ProviderResponse values.
    """

    def __init__(
        self,
        project_id: str,
        secret: str,
        *,
        environment: str = "test",
    ) -> None:
        """Initialize the Stytch client.

        Args:
            project_id: Stytch project ID.
            secret: Stytch secret key.
            environment: Either "test" or "live".
        """
        self._client = Client(
            project_id=project_id,
            secret=secret,
            environment=environment,
        )
        self._environment = environment

    async def sign_in_with_password(
        self, email: str, password: str
    ) -> ProviderResponse:
        try:
            response = await self._client.passwords.authenticate_async(
                email=email,
                password=password,
                session_duration_minutes=SESSION_DURATION_MINUTES,
            )
        except StytchError as e:
            logger.warning(
                "Password login failed",
                extra={"email": email, "error_type": e.details.error_type},
            )
            return ProviderResponse(error=_stytch_error(e, ErrorKind.CREDENTIAL))
        except _TRANSPORT_ERRORS as e:
            logger.warning("Password login could not reach Stytch: %s", e)
            return ProviderResponse(error=_transport_error(e))

        return ProviderResponse(data=_session_from_response(response))

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        try:
            response = await self._client.passwords.create_async(
                email=email,
                password=password,
                session_duration_minutes=SESSION_DURATION_MINUTES,
            )
        except StytchError as e:
            logger.warning(
                "Signup failed",
                extra={"email": email, "error_type": e.details.error_type},
            )
            return ProviderResponse(error=_stytch_error(e, ErrorKind.CREDENTIAL))
        except _TRANSPORT_ERRORS as e:
            logger.warning("Signup could not reach Stytch: %s", e)
            return ProviderResponse(error=_transport_error(e))

        user = SessionUser(
            user_id=response.user_id,
            email=_primary_email(response.user) or email,
        )
        session = (
            _session_from_response(response) if response.session_token else None
        )
        return ProviderResponse(data=SignUpData(user=user, session=session))

    async def authenticate_session(self, session_token: str) -> ProviderResponse:
        try:
            response = await self._client.sessions.authenticate_async(
                session_token=session_token,
            )
        except StytchError as e:
            logger.debug(
                "Session validation failed",
                extra={"error_type": e.details.error_type},
            )
            return ProviderResponse(error=_stytch_error(e, ErrorKind.SESSION_QUERY))
        except _TRANSPORT_ERRORS as e:
            logger.warning("Session validation could not reach Stytch: %s", e)
            return ProviderResponse(error=_transport_error(e))

        return ProviderResponse(data=_session_from_response(response))

    async def revoke_session(self, session_token: str) -> ProviderResponse:
        try:
            await self._client.sessions.revoke_async(session_token=session_token)
        except StytchError as e:
            logger.warning(
                "Session revoke failed",
                extra={"error_type": e.details.error_type},
            )
            return ProviderResponse(error=_stytch_error(e, ErrorKind.SESSION_QUERY))
        except _TRANSPORT_ERRORS as e:
            logger.warning("Session revoke could not reach Stytch: %s", e)
            return ProviderResponse(error=_transport_error(e))
        return ProviderResponse()

    def get_oauth_start_url(
        self,
        provider: str,
        public_token: str,
        login_redirect_url: str,
    ) -> ProviderResponse:
        """Generate the public OAuth start URL.

        The same redirect URL is used for login and signup, so new users
        land on the same page as returning ones.
        """
        if not public_token:
            return ProviderResponse(
                error=ErrorInfo(
                    message="STYTCH__PUBLIC_TOKEN is not configured",
                    error_type="oauth_not_configured",
                )
            )
        base_url = STYTCH_TEST_API if self._environment == "test" else STYTCH_LIVE_API
        params = {
            "public_token": public_token,
            "login_redirect_url": login_redirect_url,
            "signup_redirect_url": login_redirect_url,
        }
        return ProviderResponse(
            data=f"{base_url}/v1/public/oauth/{provider}/start?{urlencode(params)}"
        )

    async def authenticate_oauth(self, token: str) -> ProviderResponse:
        try:
            response = await self._client.oauth.authenticate_async(
                token=token,
                session_duration_minutes=SESSION_DURATION_MINUTES,
            )
        except StytchError as e:
            logger.warning(
                "OAuth auth failed",
                extra={"error_type": e.details.error_type},
            )
            return ProviderResponse(error=_stytch_error(e, ErrorKind.CREDENTIAL))
        except _TRANSPORT_ERRORS as e:
            logger.warning("OAuth auth could not reach Stytch: %s", e)
            return ProviderResponse(error=_transport_error(e))

        return ProviderResponse(data=_session_from_response(response))
